# materials/presets.py
"""
Named materials for building scenes by hand.

Each table maps a preset name to the constructor arguments of one material
class; `metal`, `dielectric` and `matte` build a fresh instance per call.
"""
from typing import Dict, Tuple
from pathtracer.core.vector import Vector3
from pathtracer.materials.dielectric import Dielectric, WHITE
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal

# name -> (albedo at normal incidence, fuzz)
METALS: Dict[str, Tuple[Vector3, float]] = {
    "gold": (Vector3(1.0, 0.78, 0.34), 0.1),
    "silver": (Vector3(0.95, 0.93, 0.88), 0.05),
    "copper": (Vector3(0.95, 0.64, 0.54), 0.1),
    "aluminum": (Vector3(0.91, 0.92, 0.92), 0.08),
    "chrome": (Vector3(0.9, 0.9, 0.9), 0.0),
    "brushed": (Vector3(0.8, 0.8, 0.8), 0.3),
}

# name -> (index of refraction, transmission tint, roughness)
DIELECTRICS: Dict[str, Tuple[float, Vector3, float]] = {
    "glass": (1.52, WHITE, 0.0),
    "frosted-glass": (1.52, WHITE, 0.15),
    "water": (1.33, WHITE, 0.0),
    "diamond": (2.42, WHITE, 0.0),
    "ice": (1.31, Vector3(0.92, 0.97, 1.0), 0.0),
    "sapphire": (1.77, Vector3(0.6, 0.7, 1.0), 0.0),
}

COLORS: Dict[str, Vector3] = {
    "red": Vector3(0.9, 0.2, 0.2),
    "orange": Vector3(0.9, 0.6, 0.1),
    "yellow": Vector3(0.9, 0.9, 0.1),
    "blue": Vector3(0.2, 0.3, 0.9),
    "navy": Vector3(0.1, 0.2, 0.5),
    "green": Vector3(0.2, 0.8, 0.2),
    "purple": Vector3(0.6, 0.2, 0.8),
    "white": Vector3(0.9, 0.9, 0.9),
    "gray": Vector3(0.5, 0.5, 0.5),
    "ground": Vector3(0.8, 0.8, 0.0),
}

def _lookup(table: dict, kind: str, name: str):
    try:
        return table[name]
    except KeyError:
        raise ValueError(f"Unknown {kind} preset {name!r}; choose from {sorted(table)}") from None

def metal(name: str) -> Metal:
    albedo, fuzz = _lookup(METALS, "metal", name)
    return Metal(albedo, fuzz)

def dielectric(name: str) -> Dielectric:
    ior, tint, roughness = _lookup(DIELECTRICS, "dielectric", name)
    return Dielectric(ior, albedo=tint, roughness=roughness)

def matte(color) -> Lambertian:
    """A Lambertian surface from a color name or an explicit Vector3 albedo."""
    if isinstance(color, str):
        color = _lookup(COLORS, "color", color)
    return Lambertian(color)
