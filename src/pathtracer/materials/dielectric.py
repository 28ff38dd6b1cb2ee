# materials/dielectric.py
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, refract, random_unit_vector
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material

WHITE = Vector3(1.0, 1.0, 1.0)

class Dielectric(Material):
    """
    Transparent material that reflects or refracts each incoming ray.

    The choice is stochastic, weighted by Schlick reflectance, and forced to
    reflection on total internal reflection. Reflected rays pass unchanged;
    refracted rays are tinted by the albedo. Roughness frosts both outcomes.
    """
    def __init__(self, ref_idx: float, albedo: Vector3 = WHITE, roughness: float = 0.0):
        if ref_idx <= 0:
            raise ValueError(f"Index of refraction must be positive, got {ref_idx}")
        self.ref_idx = ref_idx
        self.albedo = albedo
        self.roughness = roughness

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        refracted, reflectance, valid = refract(unit_direction, rec.normal, ni_over_nt)

        if not valid or rng.random() < reflectance:
            direction = reflect(unit_direction, rec.normal)
            attenuation = WHITE
        else:
            direction = refracted
            attenuation = self.albedo

        if self.roughness > 0:
            direction = direction + random_unit_vector(rng) * self.roughness
        return ray_in.scattered(rec.p, direction), attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx}, albedo={self.albedo}, roughness={self.roughness})"
