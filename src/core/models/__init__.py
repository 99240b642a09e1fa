"""Core data models for the yield allocation sandbox."""

from .protocol import LiquidityTier, Protocol

__all__ = [
    "LiquidityTier",
    "Protocol",
]
