"""Protocol reference data model."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class LiquidityTier(Enum):
    """Qualitative withdrawal-ease bucket."""

    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "LiquidityTier":
        """Map a raw tier string onto the enum, falling back to UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Protocol:
    """Yield-bearing protocol listed in the catalog."""

    name: str
    apy: float  # Annual percentage yield, in percent (12.8 = 12.8%)
    risk_score: int  # 1 (safest) to 10
    tvl: float  # Total value locked, descriptive only
    liquidity: LiquidityTier = LiquidityTier.UNKNOWN

    def __post_init__(self):
        if not self.name:
            raise ValueError("Protocol name must not be empty")
        if not math.isfinite(self.apy) or self.apy <= 0:
            raise ValueError(f"{self.name}: apy must be positive, got {self.apy}")
        if (
            isinstance(self.risk_score, bool)
            or not isinstance(self.risk_score, (int, float))
            or not float(self.risk_score).is_integer()
        ):
            raise ValueError(f"{self.name}: risk_score must be an integer, got {self.risk_score!r}")
        object.__setattr__(self, "risk_score", int(self.risk_score))
        if not 1 <= self.risk_score <= 10:
            raise ValueError(f"{self.name}: risk_score must be 1-10, got {self.risk_score}")
        if not math.isfinite(self.tvl) or self.tvl < 0:
            raise ValueError(f"{self.name}: tvl must be non-negative, got {self.tvl}")
        if not isinstance(self.liquidity, LiquidityTier):
            object.__setattr__(self, "liquidity", LiquidityTier.parse(self.liquidity))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "apy": self.apy,
            "risk_score": self.risk_score,
            "tvl": self.tvl,
            "liquidity": self.liquidity.value,
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Protocol":
        return cls(
            name=name,
            apy=float(data["apy"]),
            risk_score=data["risk_score"],
            tvl=float(data.get("tvl", 0)),
            liquidity=LiquidityTier.parse(data.get("liquidity", "unknown")),
        )
