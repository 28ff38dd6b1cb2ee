"""Path integrator tests: sky, absorption, bounce cap and debug shading."""

import numpy as np
import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.renderer.integrator import (
    BLACK,
    SKY_BLUE,
    WHITE,
    normal_color,
    ray_color,
    scatter_events,
    sky_color,
)


class Absorber(Material):
    def scatter(self, ray_in, rec, rng):
        return None


class Passthrough(Material):
    """Continues the ray unchanged from the hit point, dimming it slightly."""

    def scatter(self, ray_in, rec, rng):
        return ray_in.scattered(rec.p, ray_in.direction), Vector3(0.9, 0.9, 0.9)


def mirror_box():
    """Two facing mirrors that trap any ray fired along the x axis."""
    mirror = Metal(Vector3(1.0, 1.0, 1.0), fuzz=0.0)
    return HittableList([
        Sphere(Vector3(-1001.0, 0, 0), 1000.0, mirror),
        Sphere(Vector3(1001.0, 0, 0), 1000.0, mirror),
    ])


class TestSky:
    def test_gradient_endpoints(self):
        assert sky_color(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))) == SKY_BLUE
        assert sky_color(Ray(Vector3(0, 0, 0), Vector3(0, -1, 0))) == WHITE

    def test_horizon_blend(self):
        color = sky_color(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)))
        assert color.x == pytest.approx(0.75)
        assert color.y == pytest.approx(0.85)
        assert color.z == pytest.approx(1.0)

    def test_escaping_ray_sees_sky(self, rng):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))
        assert ray_color(ray, HittableList(), rng) == SKY_BLUE

    def test_ray_tint_multiplies_result(self, rng):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0), color=Vector3(1.0, 0.5, 0.0))
        color = ray_color(ray, HittableList(), rng)
        assert color == Vector3(0.5, 0.35, 0.0)


class TestPaths:
    def test_absorbing_surface_is_black(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -1), 0.5, Absorber())])
        assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world, rng) == BLACK

    def test_attenuation_multiplies_per_bounce(self, rng):
        # Entering and leaving the sphere are two bounces.
        world = HittableList([Sphere(Vector3(0, 0, -3), 0.5, Passthrough())])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        color = ray_color(ray, world, rng)
        sky = sky_color(ray)
        assert color.x == pytest.approx(sky.x * 0.81)
        assert color.z == pytest.approx(sky.z * 0.81)

    def test_events_are_lazy_and_stop_on_escape(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -3), 0.5, Passthrough())])
        events = list(scatter_events(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world, rng))
        assert len(events) == 2
        assert events[-1].ray.origin.z == pytest.approx(-3.5)

    def test_absorbing_event_ends_sequence(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -1), 0.5, Absorber())])
        events = list(scatter_events(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world, rng))
        assert len(events) == 1
        assert events[0].ray is None
        assert events[0].attenuation == BLACK

    def test_trapped_path_hits_bounce_cap(self, rng):
        ray = Ray(Vector3(0, 0, 0), Vector3(1, 0, 0))
        assert ray_color(ray, mirror_box(), rng, max_depth=50) == BLACK

    def test_bounce_count_exactly_at_cap_survives(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -3), 0.5, Passthrough())])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert ray_color(ray, world, rng, max_depth=2) != BLACK
        assert ray_color(ray, world, rng, max_depth=1) == BLACK

    def test_uncapped_matches_capped_for_short_paths(self):
        world = HittableList([
            Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.5, 0.5, 0.5))),
        ])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        # A single convex sphere: a diffuse bounce can never hit it again.
        capped = ray_color(ray, world, np.random.default_rng(7), max_depth=5)
        uncapped = ray_color(ray, world, np.random.default_rng(7), max_depth=None)
        assert capped == uncapped


class TestNormalShading:
    def test_front_hit_maps_normal(self):
        world = HittableList([Sphere(Vector3(0, 0, -1), 0.5, Absorber())])
        color = normal_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world)
        assert color == Vector3(0.5, 0.5, 1.0)

    def test_miss_shows_sky(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))
        assert normal_color(ray, HittableList()) == SKY_BLUE

    def test_channels_in_unit_range(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -2), 1.0, Absorber())])
        for _ in range(100):
            d = Vector3(*rng.uniform(-0.4, 0.4, 2), -1.0)
            color = normal_color(Ray(Vector3(0, 0, 0), d), world)
            assert all(0.0 <= c <= 1.0 for c in color)
