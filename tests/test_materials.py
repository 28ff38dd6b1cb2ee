"""Scattering tests for the three material models."""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials import presets

UP = Vector3(0.0, 1.0, 0.0)


def hit_on_plane(ray):
    """Hit record at the origin of the y=0 plane whose outward side is +y."""
    rec = HitRecord(p=Vector3(0.0, 0.0, 0.0), t=1.0)
    rec.set_face_normal(ray, UP)
    return rec


def in_unit_range(color):
    return all(0.0 <= c <= 1.0 for c in color)


class Draws:
    """Feeds uniform() from a fixed list of fractions."""

    def __init__(self, *fractions):
        self.fractions = iter(fractions)

    def uniform(self, low, high):
        return low + (high - low) * next(self.fractions)


# Unit-sphere sample (0, -0.5, 0), which normalizes to straight down.
STRAIGHT_DOWN = (0.5, 0.25, 0.5)


class FixedRng:
    """Returns canned values so a test can force one branch."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, low, high):
        return low + (high - low) * self.value


class TestLambertian:
    def test_scatters_into_upper_hemisphere(self, rng):
        material = Lambertian(Vector3(0.8, 0.3, 0.1))
        ray = Ray(Vector3(0, 1, 0), Vector3(0.3, -1, 0), time=0.4)
        rec = hit_on_plane(ray)
        for _ in range(200):
            scattered, attenuation = material.scatter(ray, rec, rng)
            assert scattered.direction.dot(rec.normal) >= 0
            assert scattered.origin == rec.p
            assert scattered.time == 0.4
            assert attenuation == Vector3(0.8, 0.3, 0.1)

    def test_degenerate_direction_falls_back_to_normal(self):
        material = Lambertian(Vector3(0.5, 0.5, 0.5))
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        rec = hit_on_plane(ray)
        # The sampled unit vector cancels the normal exactly.
        scattered, _ = material.scatter(ray, rec, Draws(*STRAIGHT_DOWN))
        assert scattered.direction == rec.normal


class TestMetal:
    def test_mirror_reflection(self, rng):
        material = Metal(Vector3(0.9, 0.9, 0.9), fuzz=0.0)
        ray = Ray(Vector3(-1, 1, 0), Vector3(1, -1, 0))
        scattered, attenuation = material.scatter(ray, hit_on_plane(ray), rng)
        unit = scattered.direction.normalize()
        assert unit.x == pytest.approx(math.sqrt(0.5))
        assert unit.y == pytest.approx(math.sqrt(0.5))
        assert in_unit_range(attenuation)

    def test_normal_incidence_attenuation_is_albedo(self, rng):
        albedo = Vector3(0.9, 0.6, 0.3)
        material = Metal(albedo)
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        _, attenuation = material.scatter(ray, hit_on_plane(ray), rng)
        for got, want in zip(attenuation, albedo):
            assert got == pytest.approx(want)

    def test_grazing_attenuation_brightens(self, rng):
        albedo = Vector3(0.5, 0.5, 0.5)
        material = Metal(albedo)
        ray = Ray(Vector3(-1, 0.01, 0), Vector3(1, -0.01, 0))
        _, attenuation = material.scatter(ray, hit_on_plane(ray), rng)
        assert attenuation.x > 0.9
        assert in_unit_range(attenuation)

    def test_absorbs_when_scattered_below_surface(self):
        # Full fuzz pointing straight down pushes a grazing reflection under the surface.
        material = Metal(Vector3(0.9, 0.9, 0.9), fuzz=1.0)
        ray = Ray(Vector3(-1, 0.1, 0), Vector3(1, -0.1, 0))
        assert material.scatter(ray, hit_on_plane(ray), Draws(*STRAIGHT_DOWN)) is None

    def test_fuzz_is_clamped(self):
        assert Metal(Vector3(1, 1, 1), fuzz=3.0).fuzz == 1
        assert Metal(Vector3(1, 1, 1), fuzz=0.3).roughness == 0.3

    def test_negative_fuzz_rejected(self):
        with pytest.raises(ValueError):
            Metal(Vector3(1, 1, 1), fuzz=-0.1)


class TestDielectric:
    def test_refracts_when_draw_above_reflectance(self):
        material = Dielectric(1.5)
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        scattered, attenuation = material.scatter(ray, hit_on_plane(ray), FixedRng(0.99))
        assert scattered.direction.y == pytest.approx(-1.0)
        assert attenuation == Vector3(1.0, 1.0, 1.0)

    def test_reflects_when_draw_below_reflectance(self):
        material = Dielectric(1.5)
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        # Reflectance at normal incidence is 0.04.
        scattered, _ = material.scatter(ray, hit_on_plane(ray), FixedRng(0.01))
        assert scattered.direction.y == pytest.approx(1.0)

    def test_total_internal_reflection_always_reflects(self):
        material = Dielectric(1.5)
        # Inside the glass, travelling almost parallel to the surface.
        ray = Ray(Vector3(-1, -0.1, 0), Vector3(1, 0.1, 0))
        rec = hit_on_plane(ray)
        assert not rec.front_face
        scattered, attenuation = material.scatter(ray, rec, FixedRng(0.99))
        assert scattered.direction.y < 0
        assert attenuation == Vector3(1.0, 1.0, 1.0)

    def test_tinted_refraction(self):
        tint = Vector3(0.6, 0.7, 1.0)
        material = Dielectric(1.77, albedo=tint)
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        _, attenuation = material.scatter(ray, hit_on_plane(ray), FixedRng(0.99))
        assert attenuation == tint

    def test_invalid_index(self):
        with pytest.raises(ValueError):
            Dielectric(0.0)


class TestAttenuationRange:
    @pytest.mark.parametrize("material", [
        presets.matte("red"),
        presets.metal("gold"),
        presets.metal("brushed"),
        presets.dielectric("glass"),
        presets.dielectric("frosted-glass"),
        presets.dielectric("sapphire"),
    ], ids=repr)
    def test_attenuation_within_unit_range(self, rng, material):
        for _ in range(100):
            direction = Vector3(*rng.normal(size=3))
            if direction.y == 0:
                continue
            ray = Ray(Vector3(0, 1, 0), direction)
            result = material.scatter(ray, hit_on_plane(ray), rng)
            if result is not None:
                assert in_unit_range(result[1])


class TestPresets:
    @pytest.mark.parametrize("name", sorted(presets.METALS))
    def test_metals(self, name):
        material = presets.metal(name)
        assert isinstance(material, Metal)
        assert 0.0 <= material.fuzz <= 1.0

    @pytest.mark.parametrize("name", sorted(presets.DIELECTRICS))
    def test_dielectrics(self, name):
        assert presets.dielectric(name).ref_idx > 1.0

    def test_matte_accepts_name_or_color(self):
        assert presets.matte("gray").albedo == presets.COLORS["gray"]
        albedo = Vector3(0.1, 0.2, 0.3)
        assert presets.matte(albedo).albedo is albedo

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown metal preset"):
            presets.metal("unobtainium")
