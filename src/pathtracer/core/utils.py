# core/utils.py
import math
from typing import Tuple
from pathtracer.core.vector import Vector3

# Every sampling helper takes the caller's generator (numpy.random.Generator
# or anything with uniform()/random()); generators are never shared between
# render workers.

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        if p.dot(p) > 1e-16:
            return p.normalize()

def random_in_unit_disk(rng) -> Vector3:
    """
    Returns a random point inside the unit disk in the xy-plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1.0:
            return p

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def schlick(cos_theta: float, f0):
    """
    Schlick's approximation of Fresnel reflectance.

    f0 is the reflectance at normal incidence, either a float or a Vector3
    of per-channel values (metal tint).
    """
    weight = (1.0 - cos_theta) ** 5
    if isinstance(f0, Vector3):
        return f0 + (Vector3.splat(1.0) - f0) * weight
    return f0 + (1.0 - f0) * weight

def refract(unit_v: Vector3, n: Vector3, ni_over_nt: float) -> Tuple[Vector3, float, bool]:
    """
    Refracts a unit direction through a surface with normal n.

    Returns (refracted, reflectance, valid) where reflectance is the Schlick
    estimate for this interface and valid is False on total internal
    reflection.
    """
    cos_theta = min(-unit_v.dot(n), 1.0)
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    r0 = (1.0 - ni_over_nt) / (1.0 + ni_over_nt)
    reflectance = schlick(cos_theta, r0 * r0)

    if ni_over_nt * sin_theta > 1.0:
        return Vector3(0.0, 0.0, 0.0), reflectance, False

    r_out_perp = (unit_v + n * cos_theta) * ni_over_nt
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.dot(r_out_perp))))
    return r_out_perp + r_out_parallel, reflectance, True
