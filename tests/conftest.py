"""Pytest configuration and shared fixtures for the path tracer tests."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


def pytest_configure(config: pytest.Config) -> None:
    """Configure logging for tests."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s [%(levelname)s] %(message)s",
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so sampling tests are repeatable."""
    return np.random.default_rng(12345)


@pytest.fixture
def gray() -> Lambertian:
    return Lambertian(Vector3(0.5, 0.5, 0.5))


def random_scene(rng: np.random.Generator, count: int, material, moving_fraction: float = 0.0) -> HittableList:
    """Random spheres in a 20-unit cube, some optionally moving."""
    world = HittableList()
    for _ in range(count):
        center = Vector3(*rng.uniform(-10.0, 10.0, 3))
        radius = float(rng.uniform(0.1, 1.5))
        if rng.random() < moving_fraction:
            center1 = center + Vector3(*rng.uniform(-1.0, 1.0, 3))
            world.add(MovingSphere(center, center1, radius, material, (0.0, 1.0)))
        else:
            world.add(Sphere(center, radius, material))
    return world
