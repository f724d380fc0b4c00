"""Geometry module: shape primitives and intersection.

Components:
    sphere: Ray-sphere intersection using the robust quadratic formula
"""

from .sphere import SphereHit, hit_sphere

__all__ = [
    "SphereHit",
    "hit_sphere",
]
