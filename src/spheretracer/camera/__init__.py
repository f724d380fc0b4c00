"""Camera module for primary ray generation.

Components:
    pinhole: Perspective camera derived from the scene's eye, look and up

Primary ray directions for all pixels are computed in one Taichi kernel.
"""

from .pinhole import (
    ViewParameters,
    generate_primary_directions,
    generate_primary_work,
    primary_ray,
    view_direction,
    view_parameters,
)

__all__ = [
    "ViewParameters",
    "view_parameters",
    "view_direction",
    "primary_ray",
    "generate_primary_directions",
    "generate_primary_work",
]
