# core/vector.py
import math

def _nan_min(a: float, b: float) -> float:
    if math.isnan(a) or b < a:
        return b
    return a

def _nan_max(a: float, b: float) -> float:
    if math.isnan(a) or b > a:
        return b
    return a

class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    normalization and the componentwise helpers used by bounding boxes.
    Vectors are treated as values: every operation returns a new instance.
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    @staticmethod
    def splat(value: float) -> "Vector3":
        return Vector3(value, value, value)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Vector3 axis out of range: {axis}")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vector3":
        """
        Returns the unit vector, or the zero vector when the length is zero.
        """
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def near_zero(self, eps: float = 1e-8) -> bool:
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    def lerp(self, other: "Vector3", t: float) -> "Vector3":
        return self * (1.0 - t) + other * t

    # Componentwise helpers. A NaN component yields the other operand's value
    # in either argument position, so a NaN box never spreads through a merge.
    def min(self, other: "Vector3") -> "Vector3":
        return Vector3(_nan_min(self.x, other.x), _nan_min(self.y, other.y), _nan_min(self.z, other.z))

    def max(self, other: "Vector3") -> "Vector3":
        return Vector3(_nan_max(self.x, other.x), _nan_max(self.y, other.y), _nan_max(self.z, other.z))

    def min_element(self) -> float:
        return min(self.x, self.y, self.z)

    def max_element(self) -> float:
        return max(self.x, self.y, self.z)

    @staticmethod
    def select(mask, if_true: "Vector3", if_false: "Vector3") -> "Vector3":
        """
        Picks each component from if_true where the mask entry is truthy.
        """
        mx, my, mz = mask
        return Vector3(
            if_true.x if mx else if_false.x,
            if_true.y if my else if_false.y,
            if_true.z if mz else if_false.z
        )

    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
