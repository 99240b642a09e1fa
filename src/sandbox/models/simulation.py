"""Portfolio value simulation models."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, List


@dataclass(frozen=True)
class SimulationPosition:
    """Minimal per-protocol input of a simulation."""
    amount: float
    apy: float      # Percent
    risk: float     # Scales daily volatility


@dataclass
class ProtocolReturn:
    """One protocol's simulated value on a given day."""
    value: float        # Rounded to cents
    return_pct: float   # Daily return drawn for the day, percent, 4 dp

    def to_dict(self) -> dict:
        return {"value": self.value, "return": self.return_pct}


@dataclass
class SimulationDay:
    """Portfolio value on one simulated day."""
    date: date
    total_value: float
    returns: Dict[str, ProtocolReturn] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "total_value": self.total_value,
            "daily_returns": {name: r.to_dict() for name, r in self.returns.items()},
        }


@dataclass
class SimulationReport:
    """Simulated value path with request metadata."""

    days: List[SimulationDay]
    protocols: int
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def value_series(self) -> List[float]:
        """Extract total value series for charting."""
        return [day.total_value for day in self.days]

    @property
    def final_value(self) -> float:
        return self.days[-1].total_value if self.days else 0.0

    def to_dict(self) -> dict:
        return {
            "simulation": [day.to_dict() for day in self.days],
            "metadata": {
                "days": len(self.days),
                "protocols": self.protocols,
                "generated_at": self.generated_at.isoformat(),
            },
        }
