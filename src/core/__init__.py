"""Core module - models, constants and errors."""

from .models import LiquidityTier, Protocol
from .exceptions import (
    SandboxError,
    ValidationError,
    PortfolioNotFoundError,
    InternalError,
)

__all__ = [
    "LiquidityTier",
    "Protocol",
    "SandboxError",
    "ValidationError",
    "PortfolioNotFoundError",
    "InternalError",
]
