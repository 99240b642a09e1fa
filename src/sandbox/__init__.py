"""Sandbox module for yield allocation and portfolio simulation."""

from .models import (
    RiskProfile,
    AllocationEntry,
    OptimizationResult,
    SimulationDay,
    SimulationReport,
)
from .random_source import RandomSource, NumpyRandomSource, create_random_source

__all__ = [
    "RiskProfile",
    "AllocationEntry",
    "OptimizationResult",
    "SimulationDay",
    "SimulationReport",
    "RandomSource",
    "NumpyRandomSource",
    "create_random_source",
]
