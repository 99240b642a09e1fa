"""Portfolio optimization: profile, filter, allocate, score."""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from src.core.constants import DEFAULT_RISK_FREE_RATE
from src.protocols.catalog import ProtocolCatalog
from src.sandbox.models import OptimizationResult
from src.sandbox.random_source import RandomSource

from .allocator import AllocationEngine
from .profiles import filter_protocols_by_risk, resolve_risk_profile
from .scoring import ConfidenceScorer, DiversificationScorer, RiskScorer, YieldProjector

logger = logging.getLogger(__name__)


class PortfolioOptimizer:
    """
    Builds an OptimizationResult for an amount and a risk tolerance.

    Holds no state between calls beyond its collaborators: a read-only
    catalog and the random source handed to the allocation engine.
    Inputs are expected to be validated by the caller.
    """

    def __init__(
        self,
        catalog: ProtocolCatalog,
        random_source: RandomSource,
        risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
        rebalance_interval_days: int = 30,
    ):
        self.catalog = catalog
        self.engine = AllocationEngine(random_source, risk_free_rate=risk_free_rate)
        self.rebalance_interval_days = rebalance_interval_days

    def optimize(
        self,
        amount: float,
        risk_tolerance: int,
        preferences: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> OptimizationResult:
        """
        Allocate `amount` for the given risk tolerance.

        Args:
            amount: Amount to invest
            risk_tolerance: 1 (cautious) to 10 (aggressive)
            preferences: Accepted for forward compatibility, currently unused
            now: Creation timestamp (default: current UTC time)

        Returns:
            OptimizationResult with allocation and summary metrics
        """
        profile = resolve_risk_profile(risk_tolerance)
        available = filter_protocols_by_risk(self.catalog.protocols, profile.max_risk)

        logger.info(
            f"Optimizing {amount:.2f} at tolerance {risk_tolerance} "
            f"({profile.name}, {len(available)} eligible protocols)"
        )

        allocation = self.engine.allocate(amount, available, profile)

        result = OptimizationResult(
            allocation=allocation,
            expected_apy=YieldProjector.weighted_apy(allocation),
            risk_score=RiskScorer.portfolio_risk(allocation),
            diversification_score=DiversificationScorer.score(allocation),
            projected_yield=YieldProjector.project(amount, allocation),
            confidence=ConfidenceScorer.score(allocation),
            profile=profile.name,
            rebalance_interval_days=self.rebalance_interval_days,
            created_at=now or datetime.now(timezone.utc),
        )

        logger.info(
            f"Optimization complete: {len(allocation)} positions, "
            f"apy={result.expected_apy:.2f}%, confidence={result.confidence}"
        )

        return result
