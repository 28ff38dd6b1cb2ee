# geometry/world.py
from typing import Iterable, List, Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.bvh import Bvh
from pathtracer.geometry.hittable import Hittable, HitRecord, TimeInterval

class HittableList(Hittable):
    """
    A list of Hittable objects searched linearly for the closest hit.

    Used directly for small scenes and as the reference answer for the BVH,
    which `build_bvh` constructs over the same objects.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def build_bvh(self, time_interval: TimeInterval = (0.0, 1.0)) -> Bvh:
        return Bvh(self.objects, time_interval)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time_interval: TimeInterval = (0.0, 1.0)) -> AABB:
        if not self.objects:
            return AABB.infinite_box()
        box = self.objects[0].bounding_box(time_interval)
        for obj in self.objects[1:]:
            box = AABB.surrounding_box(box, obj.bounding_box(time_interval))
        return box
