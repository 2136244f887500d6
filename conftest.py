"""
Pytest configuration and shared fixtures for the pendulum_lab project.

This module provides fixtures for:
- Seeded random sources
- Small, fast evolution configurations
"""
import random

import pytest

from pendulum_lab.config import EvolutionConfig


@pytest.fixture
def rng():
    """Return a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def fast_config():
    """Return an evolution config with short serial rollouts."""
    return EvolutionConfig(
        population_size=10,
        elite_count=3,
        ticks=30,
        max_workers=1,
        seed=7,
    )
