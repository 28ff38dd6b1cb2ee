# geometry/hittable.py
from typing import Optional, Tuple
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB

# Time interval (start, end) over which a bounding box must hold.
TimeInterval = Tuple[float, float]

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material = None):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal, always facing against the ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the front side
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.

        A direction perpendicular to the normal (dot product exactly zero)
        counts as a back-face hit.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        face = "front" if self.front_face else "back"
        return f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, {face})"

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

class AabbCache(Hittable):
    """
    Wraps a hittable and remembers its bounding box for one time interval.
    """
    def __init__(self, obj: Hittable, time_interval: TimeInterval = (0.0, 1.0)):
        self.object = obj
        self.box = obj.bounding_box(time_interval)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.object.hit(ray, t_min, t_max)

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        return self.box
