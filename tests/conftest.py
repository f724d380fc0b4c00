"""Pytest configuration for spheretracer tests.

Taichi must be initialized once per session before any kernel runs or
field is allocated (the camera kernel and the interactive preview's
display field).
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


@pytest.fixture
def rng():
    """A fresh, fixed-seed numpy generator."""
    return np.random.default_rng(12345)
