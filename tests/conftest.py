"""Shared fixtures for the sparkplay test suite."""

from __future__ import annotations

import pytest

from sparkplay.config import Level, SimulationConfig


def make_config(**overrides) -> SimulationConfig:
    """Create a SimulationConfig for testing.

    Defaults match the playground's initial state (Small cluster, Small
    dataset, no partitioning, Parquet, Orders JOIN Customers, shuffle join).
    Overrides may use field names or camelCase aliases.
    """
    return SimulationConfig().evolve(**overrides)


def make_level(**overrides) -> Level:
    """Create a Level with a 1000-point, difficulty-5 goal."""
    base: dict = {
        "id": "test-level",
        "title": "Test Level",
        "maxPoints": 1000,
        "difficulty": 5,
    }
    base.update(overrides)
    return Level.model_validate(base)


@pytest.fixture
def default_config() -> SimulationConfig:
    """The initial playground configuration."""
    return make_config()


@pytest.fixture
def level() -> Level:
    return make_level()
