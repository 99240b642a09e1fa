"""Allocation and simulation engine components."""

from .profiles import resolve_risk_profile, filter_protocols_by_risk
from .allocator import AllocationEngine
from .scoring import YieldProjector, RiskScorer, DiversificationScorer, ConfidenceScorer
from .optimizer import PortfolioOptimizer
from .simulator import SimulationEngine

__all__ = [
    "resolve_risk_profile",
    "filter_protocols_by_risk",
    "AllocationEngine",
    "YieldProjector",
    "RiskScorer",
    "DiversificationScorer",
    "ConfidenceScorer",
    "PortfolioOptimizer",
    "SimulationEngine",
]
