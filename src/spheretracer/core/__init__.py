"""Core rendering module.

Components:
    ray: Vector, Point, Matrix and Ray value types with vector helpers
    color: Linear RGB radiance/attenuation
    work: Work items and the per-frame Output buffer
    sampler: Importance sampling of glossy bounce directions
    integrator: The breadth-first path engine
    progressive: Frame accumulation across repeated renders

The path engine runs on the CPU, one Work item at a time, drawing all of
its randomness from a caller-supplied numpy Generator.
"""

from .color import BLACK, RGB, WHITE
from .ray import Matrix, Point, Ray, Vector, cross, dot, normalize, ray_at, reflect
from .sampler import MAX_PERTURB_ATTEMPTS, perturb, perturbation_basis, sample_altitude
from .work import Output, Work

# Note: integrator and progressive are NOT imported here to avoid circular imports.
# Import directly from src.spheretracer.core.integrator or src.spheretracer.core.progressive.

__all__ = [
    "Vector",
    "Point",
    "Matrix",
    "Ray",
    "ray_at",
    "dot",
    "cross",
    "normalize",
    "reflect",
    "RGB",
    "BLACK",
    "WHITE",
    "Work",
    "Output",
    "perturb",
    "perturbation_basis",
    "sample_altitude",
    "MAX_PERTURB_ATTEMPTS",
]
