"""Sandbox data models."""

from .allocation import (
    RiskProfile,
    CONSERVATIVE,
    MODERATE,
    AGGRESSIVE,
    AllocationEntry,
    Allocation,
    ProjectedYield,
    OptimizationResult,
    StoredPortfolio,
)
from .simulation import (
    SimulationPosition,
    ProtocolReturn,
    SimulationDay,
    SimulationReport,
)
from .requests import OptimizeRequest, PositionInput, SimulateRequest

__all__ = [
    "RiskProfile",
    "CONSERVATIVE",
    "MODERATE",
    "AGGRESSIVE",
    "AllocationEntry",
    "Allocation",
    "ProjectedYield",
    "OptimizationResult",
    "StoredPortfolio",
    "SimulationPosition",
    "ProtocolReturn",
    "SimulationDay",
    "SimulationReport",
    "OptimizeRequest",
    "PositionInput",
    "SimulateRequest",
]
