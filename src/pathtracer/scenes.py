# scenes.py
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple
import numpy as np
from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials import presets

@dataclass
class Scene:
    """
    The primitives of a ready-made scene plus the camera placement that
    frames them. The camera itself is built per render, since its aspect
    ratio comes from the render settings.
    """
    world: HittableList
    lookfrom: Vector3
    lookat: Vector3
    vup: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    vfov: float = 90.0
    aperture: float = 0.0
    focus_dist: Optional[float] = None
    shutter: Tuple[float, float] = (0.0, 0.0)

    def camera(self, aspect_ratio: float) -> Camera:
        return Camera(
            self.lookfrom,
            self.lookat,
            self.vup,
            self.vfov,
            aspect_ratio,
            aperture=self.aperture,
            focus_dist=self.focus_dist,
            shutter=self.shutter,
        )

def two_spheres() -> Scene:
    """A small sphere resting on a huge ground sphere, seen from the origin."""
    world = HittableList()
    world.add(Sphere(Vector3(0.0, 0.0, -1.0), 0.5, Lambertian(Vector3(0.7, 0.3, 0.3))))
    world.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0, Lambertian(Vector3(0.8, 0.8, 0.0))))
    return Scene(world, lookfrom=Vector3(0.0, 0.0, 0.0), lookat=Vector3(0.0, 0.0, -1.0))

def material_showcase() -> Scene:
    """Diffuse, glass and metal spheres side by side."""
    world = HittableList()
    world.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0, presets.matte("ground")))
    world.add(Sphere(Vector3(0.0, 0.0, -1.0), 0.5, presets.matte("navy")))
    world.add(Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, presets.dielectric("glass")))
    world.add(Sphere(Vector3(1.0, 0.0, -1.0), 0.5, presets.metal("gold")))
    return Scene(
        world,
        lookfrom=Vector3(-2.0, 2.0, 1.0),
        lookat=Vector3(0.0, 0.0, -1.0),
        vfov=30.0,
        aperture=0.1,
    )

def random_spheres(seed: Optional[int] = None, moving: bool = True, grid: int = 11) -> Scene:
    """Ground plus a grid of small random spheres and three large ones.

    With `moving`, the diffuse spheres bounce upward during the shutter
    interval (0, 1) and the camera samples that interval for motion blur.
    """
    rng = np.random.default_rng(seed)
    world = HittableList()
    world.add(Sphere(Vector3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Vector3(0.5, 0.5, 0.5))))

    keep_clear = Vector3(4.0, 0.2, 0.0)
    for a in range(-grid, grid):
        for b in range(-grid, grid):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - keep_clear).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vector3(*rng.random(3)) * Vector3(*rng.random(3))
                material = Lambertian(albedo)
                if moving:
                    center1 = center + Vector3(0.0, rng.uniform(0.0, 0.5), 0.0)
                    world.add(MovingSphere(center, center1, 0.2, material, (0.0, 1.0)))
                else:
                    world.add(Sphere(center, 0.2, material))
            elif choose_mat < 0.95:
                albedo = Vector3(*rng.uniform(0.5, 1.0, 3))
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0.0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4.0, 1.0, 0.0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4.0, 1.0, 0.0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    return Scene(
        world,
        lookfrom=Vector3(13.0, 2.0, 3.0),
        lookat=Vector3(0.0, 0.0, 0.0),
        vfov=20.0,
        aperture=0.1,
        focus_dist=10.0,
        shutter=(0.0, 1.0) if moving else (0.0, 0.0),
    )

SCENES: Dict[str, Callable[[], Scene]] = {
    "two-spheres": two_spheres,
    "showcase": material_showcase,
    "random": random_spheres,
}
