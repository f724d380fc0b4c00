"""Ray data structure and vector utilities for CPU path tracing.

This module provides the immutable value types the path engine works with:
3-component vectors (also used for points), a 3x3 matrix stored as columns,
and the Ray dataclass. The free functions mirror the vector methods so that
shading code can be written in either style.

Example:
    >>> from src.spheretracer.core.ray import Ray, Vector, ray_at
    >>> ray = Ray(origin=Vector(0.0, 0.0, 0.0), direction=Vector(0.0, 0.0, -1.0))
    >>> ray_at(ray, 5.0)
    Vector(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True, slots=True)
class Vector:
    """A 3-component float vector.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Compute the cross product self x other."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length (avoids the square root)."""
        return self.dot(self)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vector:
        """Return a unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector(self.x / length, self.y / length, self.z / length)

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to a plain (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    @classmethod
    def from_sequence(cls, values: tuple[float, float, float] | list[float]) -> Vector:
        """Build a vector from any 3-element sequence.

        Raises:
            ValueError: If the sequence does not have exactly 3 elements.
        """
        if len(values) != 3:
            raise ValueError(f"Expected 3 components, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))


# Points and vectors share a representation
Point = Vector


@dataclass(frozen=True, slots=True)
class Matrix:
    """A 3x3 matrix stored as three column vectors.

    Attributes:
        x: First column.
        y: Second column.
        z: Third column.
    """

    x: Vector
    y: Vector
    z: Vector

    @classmethod
    def from_columns(cls, x: Vector, y: Vector, z: Vector) -> Matrix:
        """Create a matrix whose columns are x, y and z."""
        return cls(x, y, z)

    def __matmul__(self, v: Vector) -> Vector:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Row-major float32 array of shape (3, 3), columns as laid out above."""
        return np.array(
            [
                [self.x.x, self.y.x, self.z.x],
                [self.x.y, self.y.y, self.z.y],
                [self.x.z, self.y.z, self.z.z],
            ],
            dtype=np.float32,
        )


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be unit
            length; callers normalize where correctness depends on it.
    """

    origin: Point
    direction: Vector


def ray_at(ray: Ray, t: float) -> Point:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + ray.direction * t


def dot(a: Vector, b: Vector) -> float:
    """Compute the dot product a . b."""
    return a.dot(b)


def cross(a: Vector, b: Vector) -> Vector:
    """Compute the cross product a x b."""
    return a.cross(b)


def normalize(v: Vector) -> Vector:
    """Normalize a vector to unit length.

    Raises:
        ValueError: If v is zero-length.
    """
    return v.normalized()


def reflect(incident: Vector, normal: Vector) -> Vector:
    """Reflect an incident vector about a unit normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        incident - 2 * (incident . normal) * normal
    """
    return incident - normal * (2.0 * incident.dot(normal))
