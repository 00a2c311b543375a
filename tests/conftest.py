"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Make the src/ layout importable without an install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from pathtracer.camera.camera import Camera  # noqa: E402
from pathtracer.scenes import two_sphere_scene  # noqa: E402


class FixedRandom:
    """Stand-in generator whose draws are all the same value in [0, 1)."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value


@pytest.fixture
def rng():
    """Provide a seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def fixed_random():
    """Factory for generators that always draw the same value."""
    return FixedRandom


@pytest.fixture
def two_spheres():
    """Provide the two-sphere regression scene at a 2:1 aspect ratio."""
    world, configuration = two_sphere_scene(2.0)
    return world, Camera(configuration)
