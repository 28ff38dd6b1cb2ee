# core/ray.py
import math
from pathtracer.core.vector import Vector3

WHITE = Vector3(1.0, 1.0, 1.0)

def _inverse(d: float) -> float:
    # A zero component yields a signed infinity, as IEEE-754 division would.
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d

class Ray:
    """
    Represents a ray in 3D space with an origin and direction.

    `time` selects where moving geometry sits along its path, and `color`
    is a multiplicative tint carried unchanged across every hop of a path
    (all ones unless the caller sets it). Rays are not mutated after
    construction; each bounce creates a new one.
    """
    def __init__(self, origin: Vector3, direction: Vector3,
                 time: float = 0.0, color: Vector3 = WHITE):
        self.origin = origin
        self.direction = direction
        self.time = time
        self.color = color
        self._inv_direction = None

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    @property
    def inv_direction(self) -> Vector3:
        if self._inv_direction is None:
            d = self.direction
            self._inv_direction = Vector3(_inverse(d.x), _inverse(d.y), _inverse(d.z))
        return self._inv_direction

    def scattered(self, origin: Vector3, direction: Vector3) -> "Ray":
        """
        Starts the next hop of the same path, keeping time and color.
        """
        return Ray(origin, direction, self.time, self.color)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction}, time={self.time})"
