"""Vector and point types for 3D ray tracing.

This module provides two small immutable value types:

- Vector3: a displacement or direction.
- Point3: a location in world space.

The arithmetic between them follows the affine rules:
    Point3 - Point3 -> Vector3
    Point3 + Vector3 -> Point3
    Point3 - Vector3 -> Point3

Example:
    >>> from fever_ray.core.vector import Point3, Vector3
    >>> origin = Point3.zero()
    >>> target = Point3(0.0, 0.0, -5.0)
    >>> direction = (target - origin).normalize()
    >>> direction
    Vector3(x=0.0, y=0.0, z=-1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fever_ray.errors import DegenerateVector


@dataclass(frozen=True)
class Vector3:
    """A 3D displacement or direction.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Vector3:
        """Return the zero vector."""
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def from_one(v: float) -> Vector3:
        """Return a vector with all three components set to v."""
        return Vector3(v, v, v)

    def dot(self, other: Vector3) -> float:
        """Compute the dot product with another vector.

        Args:
            other: The second vector.

        Returns:
            The dot product self . other.
        """
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        """Compute the squared length of the vector.

        This avoids the square root and is preferred when only comparing
        magnitudes.
        """
        return self.dot(self)

    def length(self) -> float:
        """Compute the Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector3:
        """Return a unit vector in the same direction.

        Precondition: the vector must not have zero length.

        Returns:
            A vector of length 1 pointing the same way as self.

        Raises:
            DegenerateVector: If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise DegenerateVector(f"Cannot normalize zero-length vector {self}")
        inv_length = 1.0 / length
        return Vector3(self.x * inv_length, self.y * inv_length, self.z * inv_length)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        if isinstance(scalar, (Vector3, Point3)):
            return NotImplemented
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Point3:
    """A location in 3D world space.

    Attributes:
        x: The x coordinate.
        y: The y coordinate.
        z: The z coordinate.
    """

    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Point3:
        """Return the world origin."""
        return Point3(0.0, 0.0, 0.0)

    @staticmethod
    def from_one(v: float) -> Point3:
        """Return a point with all three coordinates set to v."""
        return Point3(v, v, v)

    def __add__(self, other: Vector3) -> Point3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __radd__(self, other: Vector3) -> Point3:
        return self.__add__(other)

    def __sub__(self, other):
        # Point - Point is a displacement; Point - Vector is another point
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the coordinates as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)
