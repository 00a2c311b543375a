# core/vector.py
import math


class DegenerateVectorError(ArithmeticError):
    """
    Raised when a zero-length vector is normalized.
    """


class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    and normalization. Also used for RGB colors.
    """
    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Element-wise multiplication (color attenuation).
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def squared_length(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def near_zero(self, eps: float = 1e-8) -> bool:
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    def normalize(self) -> "Vector3":
        """
        Returns the unit vector in the same direction.

        Raises DegenerateVectorError for the zero vector; callers are expected
        never to normalize one.
        """
        l = self.length()
        if l == 0:
            raise DegenerateVectorError(f"cannot normalize zero-length vector {self!r}")
        return self / l

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
