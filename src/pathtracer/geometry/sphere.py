# geometry/sphere.py
import math
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord, TimeInterval

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0 or a == 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        # The bounding box of a sphere is center ± radius
        offset = Vector3.splat(self.radius)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center}, {self.radius})"

class MovingSphere(Hittable):
    """
    A sphere whose center travels linearly from `center0` at time0 to
    `center1` at time1. Ray times outside the interval extrapolate along the
    same line.
    """
    def __init__(self, center0: Vector3, center1: Vector3, radius: float, material,
                 time_interval: TimeInterval = (0.0, 1.0)):
        self.sphere = Sphere(center0, radius, material)
        self.center1 = center1
        self.time_interval = time_interval

    @property
    def material(self):
        return self.sphere.material

    @property
    def radius(self) -> float:
        return self.sphere.radius

    def motion(self, time: float) -> Vector3:
        """Offset of the center at `time` relative to its rest position."""
        time0, time1 = self.time_interval
        return (self.center1 - self.sphere.center) * ((time - time0) / (time1 - time0))

    def center(self, time: float) -> Vector3:
        return self.sphere.center + self.motion(time)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        # Intersect in the frame where the sphere is at rest.
        motion = self.motion(ray.time)
        rest_ray = Ray(ray.origin - motion, ray.direction, ray.time, ray.color)
        rec = self.sphere.hit(rest_ray, t_min, t_max)
        if rec is None:
            return None
        # Translating back moves the point; directions such as the normal
        # are unchanged by a translation.
        rec.p = rec.p + motion
        return rec

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        offset = Vector3.splat(self.sphere.radius)
        start = self.center(time_interval[0])
        end = self.center(time_interval[1])
        return AABB.surrounding_box(AABB(start - offset, start + offset),
                                    AABB(end - offset, end + offset))

    def __repr__(self) -> str:
        return f"MovingSphere({self.sphere.center} -> {self.center1}, {self.sphere.radius})"
