"""Pytest configuration for tinytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture
def rng():
    """A seeded random generator so sampled tests are reproducible."""
    return np.random.default_rng(42)


class SequenceRng:
    """Random source replaying a fixed sequence of values in [0, 1)."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


@pytest.fixture
def sequence_rng():
    """Factory for random sources that replay a fixed sequence."""
    return SequenceRng
