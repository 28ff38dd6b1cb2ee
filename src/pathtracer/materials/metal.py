# materials/metal.py
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, random_unit_vector, schlick
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material

class Metal(Material):
    """
    Metal material with reflective properties.

    The albedo is the reflectance at normal incidence; Schlick's
    approximation brightens it toward white at grazing angles. Roughness
    (fuzz) perturbs the mirror direction and is clamped to at most 1.
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(fuzz, 1)
        if self.fuzz < 0:
            raise ValueError(f"Metal fuzz must be non-negative, got {fuzz}")

    @property
    def roughness(self) -> float:
        return self.fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        unit_direction = ray_in.direction.normalize()
        reflected = reflect(unit_direction, rec.normal)
        scattered = ray_in.scattered(rec.p, reflected + random_unit_vector(rng) * self.fuzz)

        if scattered.direction.dot(rec.normal) <= 0:
            return None  # Absorb the ray if it does not scatter forward

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        return scattered, schlick(cos_theta, self.albedo)

    def __repr__(self) -> str:
        return f"Metal({self.albedo}, fuzz={self.fuzz})"
