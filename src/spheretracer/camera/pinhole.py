"""Pinhole camera ray generation.

Primary rays start at the scene's eye. For an image of width x height
pixels and vertical field of view fovy:

    aspect = width / height
    max_y  = tan(fovy / 2)
    scale  = 2 * max_y / height
    shift  = -max_y

and pixel (x, y) looks along the view-space direction

    (scale * x + shift * aspect, scale * y + shift, 1)

which the camera basis (right, up, forward) takes to world space before
normalizing. y = 0 is the bottom row.

Directions for the whole image are produced by one Taichi kernel, one
thread per pixel. view_direction() computes the same thing for a single
pixel in plain Python.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretracer.camera.pinhole import generate_primary_work
    >>> from src.spheretracer.scene.presets import create_default_scene
    >>> work = generate_primary_work(create_default_scene(), 80, 60)
    >>> len(work)
    4800
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.spheretracer.core.color import WHITE
from src.spheretracer.core.ray import Ray, Vector
from src.spheretracer.core.work import Work
from src.spheretracer.scene.model import Scene


@dataclass(frozen=True)
class ViewParameters:
    """Image-plane mapping for one resolution and field of view.

    Attributes:
        aspect: Width divided by height.
        scale: View-space size of one pixel.
        shift: View-space y of the bottom row.
    """

    aspect: float
    scale: float
    shift: float


def view_parameters(fovy: float, width: int, height: int) -> ViewParameters:
    """Compute the image-plane mapping.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    max_y = math.tan(fovy / 2.0)
    return ViewParameters(
        aspect=width / height,
        scale=2.0 * max_y / height,
        shift=-max_y,
    )


def view_direction(x: int, y: int, params: ViewParameters) -> Vector:
    """Unnormalized view-space direction through pixel (x, y)."""
    return Vector(
        params.scale * x + params.shift * params.aspect,
        params.scale * y + params.shift,
        1.0,
    )


def _checked_basis(scene: Scene) -> npt.NDArray[np.float32]:
    if scene.right_axis().length_squared() == 0.0:
        raise ValueError("Camera look and up directions must not be parallel")
    return scene.camera_basis().to_numpy()


@ti.kernel
def _primary_directions_kernel(
    out: ti.types.ndarray(dtype=ti.f32, ndim=3),
    basis: ti.types.ndarray(dtype=ti.f32, ndim=2),
    width: ti.i32,
    height: ti.i32,
    scale: ti.f32,
    shift: ti.f32,
    aspect: ti.f32,
):
    for y, x in ti.ndrange(height, width):
        vx = scale * ti.cast(x, ti.f32) + shift * aspect
        vy = scale * ti.cast(y, ti.f32) + shift
        vz = 1.0
        world = ti.math.vec3(
            basis[0, 0] * vx + basis[0, 1] * vy + basis[0, 2] * vz,
            basis[1, 0] * vx + basis[1, 1] * vy + basis[1, 2] * vz,
            basis[2, 0] * vx + basis[2, 1] * vy + basis[2, 2] * vz,
        )
        world = ti.math.normalize(world)
        out[y, x, 0] = world.x
        out[y, x, 1] = world.y
        out[y, x, 2] = world.z


def generate_primary_directions(scene: Scene, width: int, height: int) -> npt.NDArray[np.float32]:
    """World-space unit directions for every pixel.

    Args:
        scene: Scene providing fovy and the camera basis.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        float32 array of shape (height, width, 3); row 0 is the bottom row.

    Raises:
        ValueError: If the resolution is not positive or the camera basis
            is degenerate.
    """
    params = view_parameters(scene.fovy, width, height)
    basis = _checked_basis(scene)

    directions = np.zeros((height, width, 3), dtype=np.float32)
    _primary_directions_kernel(
        directions,
        basis,
        width,
        height,
        params.scale,
        params.shift,
        params.aspect,
    )
    return directions


def primary_ray(scene: Scene, x: int, y: int, width: int, height: int) -> Ray:
    """The primary ray through one pixel, computed without Taichi."""
    params = view_parameters(scene.fovy, width, height)
    _checked_basis(scene)
    direction = scene.camera_basis() @ view_direction(x, y, params)
    return Ray(origin=scene.eye, direction=direction.normalized())


def generate_primary_work(scene: Scene, width: int, height: int) -> list[Work]:
    """One full-weight Work item per pixel, in row-major order."""
    directions = generate_primary_directions(scene, width, height).tolist()
    eye = scene.eye

    work: list[Work] = []
    for y, row in enumerate(directions):
        for x, (dx, dy, dz) in enumerate(row):
            work.append(
                Work(
                    ray=Ray(origin=eye, direction=Vector(dx, dy, dz)),
                    pixel_x=x,
                    pixel_y=y,
                    attenuation=WHITE,
                )
            )
    return work
