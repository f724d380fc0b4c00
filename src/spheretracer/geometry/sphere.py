"""Sphere primitive with robust ray-sphere intersection.

Solves |O + t*D - C|^2 = r^2 for the ray parameter t. The roots are
computed with the reformulated quadratic from Ray Tracing Gems, which
avoids catastrophic cancellation when b^2 is close to 4ac, and the
nearest root with t >= t_min is returned.

Example:
    >>> from src.spheretracer.core.ray import Ray, Vector
    >>> from src.spheretracer.geometry.sphere import hit_sphere
    >>> ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
    >>> hit_sphere(Vector(0.0, 0.0, 0.0), 1.0, ray).toi
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.spheretracer.core.ray import Point, Ray, Vector


@dataclass(frozen=True, slots=True)
class SphereHit:
    """Record of a ray-sphere intersection.

    Attributes:
        toi: Time of intersection, the ray parameter of the hit (>= t_min).
        location: The hit point, origin + toi * direction.
        normal: Unit surface normal, facing the side the ray came from.
            For rays arriving from outside this is the outward normal.
        front_face: True if the ray hit the outside of the sphere.
    """

    toi: float
    location: Point
    normal: Vector
    front_face: bool


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 given sqrt(h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    q = -(h + math.copysign(sqrt_d, h))

    # Tangent ray through the origin; fall back to the textbook formula
    if abs(q) < 1e-10:
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def hit_sphere(
    center: Point,
    radius: float,
    ray: Ray,
    t_min: float = 0.0,
    t_max: float = math.inf,
) -> SphereHit | None:
    """Intersect a ray with a sphere.

    The quadratic a*t^2 + 2*h*t + c = 0 uses the half-b coefficients

        a = D . D
        h = D . (O - C)
        c = (O - C) . (O - C) - r^2

    A negative discriminant is an ordinary miss. Of the two roots, those
    below t_min are discarded and the smaller remaining one is taken.

    Args:
        center: Center of the sphere.
        radius: Radius of the sphere.
        ray: The ray to test. Its direction need not be unit length.
        t_min: Smallest accepted ray parameter.
        t_max: Largest accepted ray parameter.

    Returns:
        The nearest hit, or None if the ray misses.

    Raises:
        ValueError: If the ray direction has zero length.
    """
    direction = ray.direction
    oc = ray.origin - center

    a = direction.dot(direction)
    if a == 0.0:
        raise ValueError("Ray direction must have non-zero length")
    h = direction.dot(oc)
    c = oc.dot(oc) - radius * radius

    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None

    t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

    t = t0
    if t < t_min:
        t = t1
    if t < t_min or t > t_max:
        return None

    location = ray.origin + direction * t
    outward_normal = (location - center).normalized()

    # Ray travelling along the outward normal started inside the sphere
    if direction.dot(outward_normal) > 0.0:
        return SphereHit(toi=t, location=location, normal=-outward_normal, front_face=False)
    return SphereHit(toi=t, location=location, normal=outward_normal, front_face=True)
