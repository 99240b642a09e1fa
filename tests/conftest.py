"""Pytest configuration and fixtures."""

from typing import List

import pytest

from config.settings import Settings
from src.protocols.catalog import ProtocolCatalog
from src.sandbox.random_source import NumpyRandomSource


class ScriptedRandomSource:
    """Random source replaying a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, values: List[float]):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def catalog() -> ProtocolCatalog:
    """Built-in five-protocol catalog."""
    return ProtocolCatalog.default()


@pytest.fixture
def midpoint_random() -> ScriptedRandomSource:
    """Always draws 0.5: random factor 1.0, zero simulated noise."""
    return ScriptedRandomSource([0.5])


@pytest.fixture
def seeded_random() -> NumpyRandomSource:
    """Reproducible numpy-backed random source."""
    return NumpyRandomSource(seed=42)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None, random_seed=42, catalog_path=None)


@pytest.fixture
def scripted_random():
    """Factory for random sources replaying the given draws."""
    return ScriptedRandomSource
