"""Scene-level ray intersection.

Tests a ray against every object in a scene and keeps the nearest hit.
The object list is scanned linearly; there is no spatial index.

Example:
    >>> from src.spheretracer.scene.intersection import intersect_scene
    >>> collision = intersect_scene(scene.objects, ray)
    >>> if collision is not None:
    ...     print(collision.object, collision.toi)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.spheretracer.core.ray import Point, Ray, Vector

if TYPE_CHECKING:
    from src.spheretracer.scene.model import SceneObject


@dataclass(frozen=True, slots=True)
class Collision:
    """Record of a ray-scene intersection.

    Attributes:
        object: The object that was hit.
        toi: Time of intersection (ray parameter, >= 0).
        location: The hit point.
        normal: Unit surface normal facing the side the ray came from.
        front_face: True if the ray hit the object from outside.
    """

    object: SceneObject
    toi: float
    location: Point
    normal: Vector
    front_face: bool


def intersect_scene(objects: Iterable[SceneObject], ray: Ray) -> Collision | None:
    """Find the nearest collision of a ray with any object.

    On an exactly equal time of intersection the later object in the
    list wins.

    Args:
        objects: The objects to test, in scene order.
        ray: The ray to cast.

    Returns:
        The collision with the smallest toi, or None if nothing is hit.

    Raises:
        ValueError: If the ray direction has zero length.
    """
    if ray.direction.length_squared() == 0.0:
        raise ValueError("Ray direction must have non-zero length")

    nearest: Collision | None = None

    for obj in objects:
        hit = obj.intersect(ray)
        if hit is None:
            continue
        if nearest is not None and nearest.toi < hit.toi:
            continue
        nearest = Collision(
            object=obj,
            toi=hit.toi,
            location=hit.location,
            normal=hit.normal,
            front_face=hit.front_face,
        )

    return nearest
