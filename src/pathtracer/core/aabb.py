# core/aabb.py
import math
from pathtracer.core.vector import Vector3

class AABB:
    """
    Axis-aligned bounding box given by its minimum and maximum corners.

    An `infinite` box stands for geometry without finite bounds: it is hit by
    every ray and absorbs any box it is merged with. Boxes are never mutated
    after construction.
    """
    def __init__(self, minimum: Vector3, maximum: Vector3, infinite: bool = False):
        self.minimum = minimum
        self.maximum = maximum
        self.infinite = infinite

    @staticmethod
    def infinite_box() -> "AABB":
        return AABB(Vector3.splat(-math.inf), Vector3.splat(math.inf), infinite=True)

    @staticmethod
    def from_points(*points: Vector3) -> "AABB":
        small, big = points[0], points[0]
        for p in points[1:]:
            small = small.min(p)
            big = big.max(p)
        return AABB(small, big)

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        if self.infinite:
            return True
        # Slab method: for each axis, find intersection intervals.
        # Zero direction components give infinite inverses; a resulting NaN
        # (origin on the slab plane) fails both comparisons and is ignored.
        inv = ray.inv_direction
        origin = ray.origin
        for a in range(3):
            inv_d = inv[a]
            t0 = (self.minimum[a] - origin[a]) * inv_d
            t1 = (self.maximum[a] - origin[a]) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    def surface_area(self) -> float:
        if self.infinite:
            return math.inf
        d = self.maximum - self.minimum
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self) -> Vector3:
        return (self.minimum + self.maximum) * 0.5

    def axis_extent(self, axis: int) -> float:
        return self.maximum[axis] - self.minimum[axis]

    def merge(self, other: "AABB") -> "AABB":
        return AABB.surrounding_box(self, other)

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        if box0.infinite or box1.infinite:
            return AABB.infinite_box()
        return AABB(box0.minimum.min(box1.minimum), box0.maximum.max(box1.maximum))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        if self.infinite or other.infinite:
            return self.infinite == other.infinite
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __hash__(self) -> int:
        if self.infinite:
            return hash("infinite")
        return hash((self.minimum, self.maximum))

    def __repr__(self) -> str:
        if self.infinite:
            return "AABB(infinite)"
        return f"AABB({self.minimum}, {self.maximum})"
