"""Importance sampling of glossy bounce directions.

perturb() takes the ideal (mirror or straight-through) bounce direction
and scatters it around a lobe whose width is set by the material's
diffuseness. Directions are drawn in a local frame whose y axis is the
ideal direction:

    altitude = asin(u)                              u ~ U[0, 1)
    altitude = pi/2 * (altitude / (pi/2)) ** (1 / diffuseness)
    altitude = pi/2 - altitude                      (elevation above the lobe's equator)
    azimuth  = 2 * pi * v                           v ~ U[0, 1)

so the angle between the sample and the ideal direction is the warped
asin(u). As diffuseness shrinks the exponent grows and samples collapse
onto the ideal direction; diffuseness <= 0 is the limit itself (a Dirac
lobe) and returns the ideal direction without drawing any random numbers.

A sample is accepted only if it stays on the side of the surface given by
the hemisphere normal. After MAX_PERTURB_ATTEMPTS rejections the ideal
direction is returned unchanged.
"""

from __future__ import annotations

import math

import numpy as np

from src.spheretracer.core.ray import Matrix, Vector

MAX_PERTURB_ATTEMPTS = 4

HALF_PI = math.pi / 2.0
TWO_PI = 2.0 * math.pi


def perturbation_basis(unperturbed: Vector) -> Matrix | None:
    """Orthonormal frame with columns (x, unperturbed, z).

    x is unperturbed crossed with whichever of the x or y world axes is
    further from it, so the cross product never degenerates for a unit
    input.

    Returns:
        The frame, or None if unperturbed has zero length.
    """
    y = unperturbed
    if abs(y.x) <= 0.5:
        # y cross (1, 0, 0)
        x = Vector(0.0, y.z, -y.y)
    else:
        # y cross (0, 1, 0)
        x = Vector(-y.z, 0.0, y.x)

    if x.length_squared() == 0.0:
        return None
    x = x.normalized()
    z = y.cross(x)
    return Matrix.from_columns(x, y, z)


def sample_altitude(u: float, diffuseness: float) -> float:
    """Map a uniform draw to an elevation in [0, pi/2] above the lobe equator.

    pi/2 means exactly the ideal direction.
    """
    altitude = math.asin(u)
    altitude = HALF_PI * (altitude / HALF_PI) ** (1.0 / diffuseness)
    return HALF_PI - altitude


def perturb(
    unperturbed: Vector,
    normal: Vector,
    diffuseness: float,
    rng: np.random.Generator,
    max_attempts: int = MAX_PERTURB_ATTEMPTS,
) -> Vector:
    """Sample a bounce direction near an ideal one.

    Args:
        unperturbed: Ideal bounce direction (unit length).
        normal: Normal of the hemisphere the result must lie in.
        diffuseness: Lobe width. <= 0 returns unperturbed.
        rng: Random source; two draws per attempt.
        max_attempts: Samples to try before falling back to unperturbed.

    Returns:
        A unit direction with non-negative dot product with normal, or
        unperturbed itself.
    """
    if diffuseness <= 0.0:
        return unperturbed

    rotation = perturbation_basis(unperturbed)
    if rotation is None:
        return unperturbed

    for _ in range(max_attempts):
        altitude = sample_altitude(float(rng.random()), diffuseness)
        azimuth = float(rng.random()) * TWO_PI
        xz = math.cos(altitude)
        direction = rotation @ Vector(math.cos(azimuth) * xz, math.sin(altitude), math.sin(azimuth) * xz)
        if direction.dot(normal) >= 0.0:
            return direction

    return unperturbed
