"""Summary metrics derived from an allocation."""

from src.core.constants import (
    CENTS,
    CONFIDENCE_DIVERSIFICATION_WEIGHT,
    CONFIDENCE_LIQUIDITY_WEIGHT,
    CONFIDENCE_TARGET_POSITIONS,
    DAYS_PER_YEAR,
    LIQUIDITY_SCORES,
    MAX_DIVERSIFICATION_SCORE,
    MAX_LIQUIDITY_SCORE,
    MONTHS_PER_YEAR,
    UNKNOWN_LIQUIDITY_SCORE,
    WEEKS_PER_YEAR,
    WHOLE,
)
from src.core.models import LiquidityTier
from src.core.utils import round_half_up
from src.sandbox.models import Allocation, ProjectedYield


class YieldProjector:
    """Expected APY and currency yield of an allocation."""

    @staticmethod
    def weighted_apy(allocation: Allocation) -> float:
        """
        Percentage-weighted APY.

        APY = sum(apy_i * pct_i / 100)

        Returns:
            Weighted APY in percent (0 for an empty allocation)
        """
        return sum(entry.apy * entry.percentage / 100 for entry in allocation.values())

    @staticmethod
    def project(amount: float, allocation: Allocation) -> ProjectedYield:
        """
        Project yield over a day, week, month and year.

        Args:
            amount: Invested amount
            allocation: Allocation to project

        Returns:
            ProjectedYield rounded to cents
        """
        yearly = amount * YieldProjector.weighted_apy(allocation) / 100
        return ProjectedYield(
            daily=round_half_up(yearly / DAYS_PER_YEAR, CENTS),
            weekly=round_half_up(yearly / WEEKS_PER_YEAR, CENTS),
            monthly=round_half_up(yearly / MONTHS_PER_YEAR, CENTS),
            yearly=round_half_up(yearly, CENTS),
        )


class RiskScorer:

    @staticmethod
    def portfolio_risk(allocation: Allocation) -> float:
        """Percentage-weighted risk score, 0 for an empty allocation."""
        return sum(entry.risk * entry.percentage / 100 for entry in allocation.values())


class DiversificationScorer:

    @staticmethod
    def score(allocation: Allocation) -> float:
        """
        Diversification on a 0-10 scale.

        score = min(10, positions * 2 + (10 - max_pct / 10))

        More positions and a smaller largest position both raise the score.
        """
        positions = len(allocation)
        max_concentration = max((entry.percentage for entry in allocation.values()), default=0.0)
        return min(MAX_DIVERSIFICATION_SCORE, positions * 2 + (10 - max_concentration / 10))


class ConfidenceScorer:
    """Blend of position count and liquidity into a 0-100 figure."""

    @staticmethod
    def liquidity_score(tier: LiquidityTier) -> int:
        return LIQUIDITY_SCORES.get(tier.value, UNKNOWN_LIQUIDITY_SCORE)

    @staticmethod
    def average_liquidity(allocation: Allocation) -> float:
        """Percentage-weighted liquidity score (1-5, 0 when empty)."""
        return sum(
            ConfidenceScorer.liquidity_score(entry.liquidity) * entry.percentage / 100
            for entry in allocation.values()
        )

    @staticmethod
    def score(allocation: Allocation) -> int:
        """
        Confidence = round((div * 0.4 + liq * 0.6) * 100)

        div = min(positions / 5, 1), liq = average liquidity / 5.
        """
        diversification_term = min(len(allocation) / CONFIDENCE_TARGET_POSITIONS, 1)
        liquidity_term = ConfidenceScorer.average_liquidity(allocation) / MAX_LIQUIDITY_SCORE

        blended = (
            diversification_term * CONFIDENCE_DIVERSIFICATION_WEIGHT
            + liquidity_term * CONFIDENCE_LIQUIDITY_WEIGHT
        )
        return int(round_half_up(blended * 100, WHOLE))
