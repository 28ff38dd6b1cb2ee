# camera/camera.py
import math
from typing import Optional, Tuple
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera aimed from `lookfrom` at `lookat`.

    `vfov` is the vertical field of view in degrees. Objects at
    `focus_dist` (default: the distance to `lookat`) are in sharp focus;
    `aperture` is the lens diameter, zero for a pinhole. When a shutter
    interval is given, each ray is stamped with a uniformly sampled time.
    The camera is immutable after construction and safe to share between
    render workers.
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: Optional[float] = None,
                 shutter: Tuple[float, float] = (0.0, 0.0)):
        if aspect_ratio <= 0:
            raise ValueError(f"Aspect ratio must be positive, got {aspect_ratio}")
        if not 0 < vfov < 180:
            raise ValueError(f"Vertical field of view must be in (0, 180) degrees, got {vfov}")
        if aperture < 0:
            raise ValueError(f"Aperture must be non-negative, got {aperture}")
        if focus_dist is None:
            focus_dist = (lookfrom - lookat).length()
        if focus_dist <= 0:
            raise ValueError(f"Focus distance must be positive, got {focus_dist}")
        if shutter[1] < shutter[0]:
            raise ValueError(f"Shutter closes before it opens: {shutter}")

        self.position = lookfrom
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.shutter = shutter

        # Orthonormal basis: forward looks at the target, right and up span the image plane.
        self.forward = (lookat - lookfrom).normalize()
        self.right = self.forward.cross(vup).normalize()
        if self.right.near_zero():
            raise ValueError("View up vector must not be parallel to the viewing direction")
        self.up = self.right.cross(self.forward)

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.right * viewport_width * focus_dist
        self.vertical = self.up * viewport_height * focus_dist

        self.lower_left_corner = (self.position +
                                  self.forward * focus_dist -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5)

    def get_ray(self, s: float, t: float, rng=None, time: Optional[float] = None) -> Ray:
        """
        Generates the ray through normalized image coordinates (s, t), where
        (0, 0) is the lower-left and (1, 1) the upper-right corner.

        `rng` feeds the lens and shutter samples; without one the ray starts
        at the lens center at shutter open. An explicit `time` overrides the
        shutter sample.
        """
        origin = self.position
        if self.lens_radius > 0 and rng is not None:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.right * rd.x + self.up * rd.y

        if time is None:
            open_time, close_time = self.shutter
            if rng is not None and close_time > open_time:
                time = rng.uniform(open_time, close_time)
            else:
                time = open_time

        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        return Ray(origin, direction, time)
