# renderer/integrator.py
import math
from typing import Iterator, NamedTuple, Optional
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable

# Lower bound of every hit search; keeps a bounce from re-hitting its own origin.
T_MIN = 0.001
MAX_BOUNCES = 50

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)

class ScatterEvent(NamedTuple):
    """
    One surface interaction along a path. `ray` is None when the surface
    absorbed the path.
    """
    ray: Optional[Ray]
    attenuation: Vector3

def sky_color(ray: Ray) -> Vector3:
    """
    Background gradient: white at the horizon blending to sky blue overhead.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE.lerp(SKY_BLUE, t)

def scatter_events(ray: Ray, world: Hittable, rng, t_min: float = T_MIN) -> Iterator[ScatterEvent]:
    """
    Lazily follows a path through the scene, yielding one event per bounce.

    The sequence ends when the current ray escapes the scene, or right after
    an absorbing event.
    """
    while True:
        rec = world.hit(ray, t_min, math.inf)
        if rec is None:
            return
        scatter_result = rec.material.scatter(ray, rec, rng)
        if scatter_result is None:
            yield ScatterEvent(None, BLACK)
            return
        ray, attenuation = scatter_result
        yield ScatterEvent(ray, attenuation)

def ray_color(ray: Ray, world: Hittable, rng, max_depth: Optional[int] = MAX_BOUNCES,
              t_min: float = T_MIN) -> Vector3:
    """
    Returns the radiance arriving along `ray`.

    Attenuation is multiplied over the bounces; absorption, or going past
    `max_depth` bounces, makes the path black. An escaping ray picks up the
    sky color and the tint it carries. `max_depth=None` removes the cap.
    """
    attenuation = WHITE
    bounces = 0
    for event in scatter_events(ray, world, rng, t_min):
        bounces += 1
        if event.ray is None or (max_depth is not None and bounces > max_depth):
            return BLACK
        attenuation = attenuation * event.attenuation
        ray = event.ray
    return sky_color(ray) * attenuation * ray.color

def normal_color(ray: Ray, world: Hittable, t_min: float = T_MIN) -> Vector3:
    """
    Debug shading: maps the surface normal of the first hit into [0, 1]
    and shows the sky gradient elsewhere.
    """
    rec = world.hit(ray, t_min, math.inf)
    if rec is None:
        return sky_color(ray)
    return (rec.normal.normalize() + WHITE) * 0.5
