"""Configuration module for the yield allocation sandbox."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
