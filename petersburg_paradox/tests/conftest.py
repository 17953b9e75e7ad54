"""Pytest configuration and shared fixtures."""

import logging

import numpy as np
import pytest

from petersburg_paradox.config import SimulationConfig
from petersburg_paradox.game import PetersburgGame


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers that a test attached to the package logger."""
    yield
    logger = logging.getLogger("petersburg_paradox")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def seeded_game():
    """Vectorized game with a fixed seed."""
    return PetersburgGame(seed=42)


@pytest.fixture
def small_config():
    """Small reproducible simulation configuration."""
    return SimulationConfig(num_samples=20, num_trials=1_000, seed=12345)


@pytest.fixture
def one_to_five():
    """Symmetric sample set with closed-form moments."""
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0])
