"""Forward simulation of portfolio value under random daily returns."""

import logging
from datetime import date, timedelta
from typing import List, Mapping, Optional, Protocol

from src.core.constants import BASIS_POINTS, CENTS, DAYS_PER_YEAR, VOLATILITY_PER_RISK_POINT
from src.core.utils import round_half_up
from src.sandbox.models import ProtocolReturn, SimulationDay
from src.sandbox.random_source import RandomSource

logger = logging.getLogger(__name__)


class PositionLike(Protocol):
    """Anything with amount, apy and risk (SimulationPosition, AllocationEntry)."""
    amount: float
    apy: float
    risk: float


class SimulationEngine:
    """
    Projects daily portfolio value from an allocation.

    For each day i (0-based) and each position:
        daily_return = apy / 365 + U(-risk * 0.01, +risk * 0.01)
        value        = amount * (1 + daily_return / 100) ** (i + 1)

    Every day restarts from the original principal with a freshly drawn
    return, so the path is not chained from the previous day's value.
    """

    def __init__(self, random_source: RandomSource):
        self.random_source = random_source

    def daily_return(self, position: PositionLike) -> float:
        """Draw one day's return in percent for a position."""
        daily_apy = position.apy / DAYS_PER_YEAR
        volatility = position.risk * VOLATILITY_PER_RISK_POINT
        random_return = (self.random_source.random() - 0.5) * volatility * 2
        return daily_apy + random_return

    def simulate(
        self,
        allocation: Mapping[str, PositionLike],
        days: int = 30,
        start_date: Optional[date] = None,
    ) -> List[SimulationDay]:
        """
        Run the simulation.

        Args:
            allocation: Protocol name -> position
            days: Number of days to simulate
            start_date: Date of the first day (default: today)

        Returns:
            One SimulationDay per day, dated consecutively from start_date
        """
        start_date = start_date or date.today()
        simulation: List[SimulationDay] = []

        for i in range(days):
            total_value = 0.0
            returns = {}

            for name, position in allocation.items():
                daily_return = self.daily_return(position)
                protocol_value = position.amount * (1 + daily_return / 100) ** (i + 1)
                total_value += protocol_value

                returns[name] = ProtocolReturn(
                    value=round_half_up(protocol_value, CENTS),
                    return_pct=round_half_up(daily_return, BASIS_POINTS),
                )

            simulation.append(SimulationDay(
                date=start_date + timedelta(days=i),
                total_value=round_half_up(total_value, CENTS),
                returns=returns,
            ))

        if simulation:
            logger.info(
                f"Simulation complete: {days} days, {len(allocation)} protocols, "
                f"final value={simulation[-1].total_value:.2f}"
            )

        return simulation
