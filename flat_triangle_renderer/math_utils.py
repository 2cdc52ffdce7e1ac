#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math


class Vec3:
    """Immutable 3-component vector.

    Every operation returns a new instance. Equality is exact float
    comparison; geometric tests elsewhere never use an epsilon on it.
    """
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def of(cls, value) -> 'Vec3':
        """Coerce a Vec3 or any 3-item sequence into a Vec3."""
        if isinstance(value, Vec3):
            return value
        x, y, z = value
        return cls(x, y, z)

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def add(self, other: 'Vec3') -> 'Vec3':
        return self + other

    def subtract(self, other: 'Vec3') -> 'Vec3':
        return self - other

    def scale(self, scalar: float) -> 'Vec3':
        return self * scalar

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    magnitude = length

    def normalize(self) -> 'Vec3':
        """Unit vector in the same direction; the zero vector stays zero."""
        m = self.length()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def lerp(self, other: 'Vec3', t: float) -> 'Vec3':
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t
        )

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0
