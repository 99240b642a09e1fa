"""Portfolio allocation models."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from src.core.constants import RISK_PROFILES
from src.core.models import LiquidityTier


@dataclass(frozen=True)
class RiskProfile:
    """Risk ceiling and diversification pressure for a tolerance band."""
    name: str
    max_risk: int                   # Highest protocol risk_score allowed
    diversification_factor: float   # (0, 1], higher = flatter weights


CONSERVATIVE = RiskProfile("conservative", *RISK_PROFILES["conservative"])
MODERATE = RiskProfile("moderate", *RISK_PROFILES["moderate"])
AGGRESSIVE = RiskProfile("aggressive", *RISK_PROFILES["aggressive"])


@dataclass
class AllocationEntry:
    """Position in a single protocol, snapshotted at allocation time."""
    protocol: str
    percentage: float         # 0-100, sum over an allocation = 100
    amount: float             # Currency allocated
    apy: float
    risk: int
    tvl: float
    liquidity: LiquidityTier

    def to_dict(self) -> dict:
        return {
            "percentage": self.percentage,
            "amount": self.amount,
            "apy": self.apy,
            "risk": self.risk,
            "tvl": self.tvl,
            "liquidity": self.liquidity.value,
        }


# protocol name -> entry, in ranking order
Allocation = Dict[str, AllocationEntry]


@dataclass
class ProjectedYield:
    """Expected yield over standard periods, in currency."""
    daily: float
    weekly: float
    monthly: float
    yearly: float

    def to_dict(self) -> dict:
        return {
            "daily": self.daily,
            "weekly": self.weekly,
            "monthly": self.monthly,
            "yearly": self.yearly,
        }


@dataclass
class OptimizationResult:
    """Allocation plus the summary metrics derived from it."""

    allocation: Allocation
    expected_apy: float
    risk_score: float
    diversification_score: float
    projected_yield: ProjectedYield
    confidence: int
    profile: str = ""
    rebalance_interval_days: int = 30
    created_at: Optional[datetime] = None
    rebalance_date: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.rebalance_date is None:
            self.rebalance_date = self.created_at + timedelta(days=self.rebalance_interval_days)

    @property
    def is_empty(self) -> bool:
        return not self.allocation

    @property
    def total_allocated(self) -> float:
        return sum(entry.amount for entry in self.allocation.values())

    def to_dict(self) -> dict:
        return {
            "allocation": {name: entry.to_dict() for name, entry in self.allocation.items()},
            "expected_apy": self.expected_apy,
            "risk_score": self.risk_score,
            "diversification_score": self.diversification_score,
            "projected_yield": self.projected_yield.to_dict(),
            "confidence": self.confidence,
            "profile": self.profile,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "rebalance_date": self.rebalance_date.isoformat() if self.rebalance_date else None,
        }


@dataclass
class StoredPortfolio:
    """Optimization result kept for a session, with the request that produced it."""

    result: OptimizationResult
    amount: float
    risk_tolerance: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["amount"] = self.amount
        data["risk_tolerance"] = self.risk_tolerance
        data["stored_at"] = self.created_at.isoformat()
        return data
