"""Risk-adjusted allocation of an amount across yield protocols."""

import logging
from dataclasses import dataclass
from typing import List, Mapping

from src.core.constants import (
    CENTS,
    DEFAULT_RISK_FREE_RATE,
    MAX_ALLOCATION_PCT,
    MIN_ALLOCATION_PCT,
    MIN_BASE_WEIGHT,
    MIN_LOT_SIZE,
    RANDOM_FACTOR_LOW,
    RANDOM_FACTOR_SPAN,
)
from src.core.models import Protocol
from src.core.utils import clamp, round_half_up
from src.sandbox.models import Allocation, AllocationEntry, RiskProfile
from src.sandbox.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class RankedProtocol:
    """Protocol with its risk-adjusted score."""
    protocol: Protocol
    score: float


class AllocationEngine:
    """
    Splits an amount across protocols by risk-adjusted return.

    Steps:
    1. Score each protocol: (apy - risk_free_rate) / max(1, risk_score)
    2. Rank by score, descending; ties keep catalog order
    3. Weight by rank, penalized by the profile's diversification factor
    4. Jitter each weight by a random factor and clamp to 5-60%
    5. Open a position only if it reaches the minimum lot size and the
       remaining budget still covers it
    6. Rescale the opened positions so they add up to the full amount

    The budget check in step 5 only applies at assignment time; step 6
    rescales independently of it.
    """

    def __init__(
        self,
        random_source: RandomSource,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    ):
        self.random_source = random_source
        self.risk_free_rate = risk_free_rate

    def score(self, protocol: Protocol) -> float:
        """Sharpe-like ratio with the risk score standing in for volatility."""
        return (protocol.apy - self.risk_free_rate) / max(1, protocol.risk_score)

    def rank(self, protocols: Mapping[str, Protocol]) -> List[RankedProtocol]:
        """Sort protocols by score, best first. sorted() is stable, so ties keep input order."""
        scored = [RankedProtocol(protocol=p, score=self.score(p)) for p in protocols.values()]
        return sorted(scored, key=lambda r: r.score, reverse=True)

    @staticmethod
    def rank_weight(index: int, count: int, diversification_factor: float) -> float:
        """Positional weight for the protocol ranked at `index` out of `count`."""
        base_weight = max(MIN_BASE_WEIGHT, (count - index) / count)
        diversification_penalty = diversification_factor * (index + 1) / count
        return base_weight * (1 - diversification_penalty)

    def allocate(
        self,
        amount: float,
        protocols: Mapping[str, Protocol],
        profile: RiskProfile,
    ) -> Allocation:
        """
        Build an allocation.

        Args:
            amount: Amount to invest (> 0)
            protocols: Eligible protocols, already filtered by risk
            profile: Risk profile supplying the diversification factor

        Returns:
            Allocation (protocol name -> entry); empty when nothing qualifies
        """
        ranked = self.rank(protocols)
        count = len(ranked)

        allocation: Allocation = {}
        remaining_amount = amount

        for index, item in enumerate(ranked):
            final_weight = self.rank_weight(index, count, profile.diversification_factor)

            random_factor = RANDOM_FACTOR_LOW + self.random_source.random() * RANDOM_FACTOR_SPAN
            percentage = clamp(final_weight * 100 * random_factor, MIN_ALLOCATION_PCT, MAX_ALLOCATION_PCT)

            allocated_amount = amount * percentage / 100

            if allocated_amount >= MIN_LOT_SIZE and remaining_amount >= allocated_amount:
                protocol = item.protocol
                allocation[protocol.name] = AllocationEntry(
                    protocol=protocol.name,
                    percentage=round_half_up(percentage, CENTS),
                    amount=round_half_up(allocated_amount, CENTS),
                    apy=protocol.apy,
                    risk=protocol.risk_score,
                    tvl=protocol.tvl,
                    liquidity=protocol.liquidity,
                )
                remaining_amount -= allocated_amount
            else:
                logger.debug(
                    f"Skipped {item.protocol.name}: {allocated_amount:.2f} "
                    f"(remaining {remaining_amount:.2f})"
                )

        self._normalize(allocation, amount)
        return allocation

    @staticmethod
    def _normalize(allocation: Allocation, amount: float) -> None:
        """Rescale entries in place so amounts add up to `amount`."""
        total_allocated = sum(entry.amount for entry in allocation.values())
        if total_allocated <= 0:
            return

        for entry in allocation.values():
            normalized_amount = entry.amount / total_allocated * amount
            entry.amount = round_half_up(normalized_amount, CENTS)
            entry.percentage = round_half_up(normalized_amount / amount * 100, CENTS)
