"""Intersectable geometry: hit records, spheres, flat lists and the BVH."""

from pathtracer.geometry.hittable import AabbCache, HitRecord, Hittable, TimeInterval
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.bvh import Bvh, BVHNode, bvh_stats, flatten_bvh
from pathtracer.geometry.world import HittableList

__all__ = [
    "AabbCache",
    "Bvh",
    "BVHNode",
    "HitRecord",
    "Hittable",
    "HittableList",
    "MovingSphere",
    "Sphere",
    "TimeInterval",
    "bvh_stats",
    "flatten_bvh",
]
