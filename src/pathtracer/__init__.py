"""Offline path tracer for sphere scenes.

Subpackages:
    core: vectors, rays, bounding boxes and sampling helpers
    geometry: spheres, moving spheres, flat lists and the SAH BVH
    materials: Lambertian, metal and dielectric scattering
    camera: thin-lens camera with motion-blur shutter
    renderer: path integrator, parallel renderer and image output
"""

__version__ = "0.1.0"
