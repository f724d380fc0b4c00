"""Scene description: spheres with material coefficients plus a camera pose.

A Scene is long-lived and owned by the caller. The renderer only reads it;
the camera pose is changed between frames through move_camera() by
whatever handles user input.

The camera basis is derived from the pose rather than stored:

    right   = look x up
    up      = up
    forward = look

look and up are assumed to be orthogonal unit vectors already. No
re-orthonormalization is performed.

Example:
    >>> from src.spheretracer.scene.model import Scene
    >>> scene = Scene()
    >>> scene.add_sphere(center=(0.0, 0.0, -3.0), radius=1.0, emittance=1.0,
    ...                  color=(1.0, 1.0, 1.0))
    >>> scene.cast(ray)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from src.spheretracer.core.color import RGB
from src.spheretracer.core.ray import Matrix, Point, Ray, Vector
from src.spheretracer.geometry.sphere import SphereHit, hit_sphere
from src.spheretracer.materials.texture import Texture, solid_color, texture_from_dict
from src.spheretracer.scene.intersection import Collision, intersect_scene

logger = logging.getLogger(__name__)

DEFAULT_FOVY = math.pi / 2.0


@dataclass
class SceneObject:
    """A sphere with its material coefficients.

    Attributes:
        center: Center of the sphere.
        radius: Radius of the sphere (positive).
        emittance: Self-luminance. Unbounded; light sources use >= 1.
        reflectance: Fraction of the surface color carried by reflected rays.
        transmittance: Fraction of the surface color carried by transmitted rays.
        diffuseness: Spread of bounce directions around the ideal one.
            0 or less is a perfect mirror/refractor, 1 is close to diffuse.
        texture: Surface color source.
    """

    center: Point
    radius: float
    emittance: float = 0.0
    reflectance: float = 0.0
    transmittance: float = 0.0
    diffuseness: float = 0.0
    texture: Texture = field(default_factory=lambda: solid_color(1.0, 1.0, 1.0))

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if self.reflectance + self.transmittance > 1.0:
            logger.warning(
                "Object at %s has reflectance + transmittance = %.3f > 1; "
                "bounces will gain energy",
                self.center.to_tuple(),
                self.reflectance + self.transmittance,
            )

    def intersect(self, ray: Ray) -> SphereHit | None:
        """Nearest intersection of the ray with this sphere (toi >= 0)."""
        return hit_sphere(self.center, self.radius, ray)

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": list(self.center.to_tuple()),
            "radius": self.radius,
            "emittance": self.emittance,
            "reflectance": self.reflectance,
            "transmittance": self.transmittance,
            "diffuseness": self.diffuseness,
            "texture": self.texture.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneObject:
        """Build an object from its to_dict() form.

        "center" and "radius" are required; material coefficients default
        to zero and the texture to white.

        Raises:
            ValueError: If a required entry is missing or malformed.
        """
        if "center" not in data or "radius" not in data:
            raise ValueError("Scene object requires 'center' and 'radius'")
        texture_data = data.get("texture", {"type": "solid_color", "color": [1.0, 1.0, 1.0]})
        return cls(
            center=Vector.from_sequence(data["center"]),
            radius=float(data["radius"]),
            emittance=float(data.get("emittance", 0.0)),
            reflectance=float(data.get("reflectance", 0.0)),
            transmittance=float(data.get("transmittance", 0.0)),
            diffuseness=float(data.get("diffuseness", 0.0)),
            texture=texture_from_dict(texture_data),
        )


@dataclass
class Scene:
    """An ordered list of objects plus a camera pose.

    Attributes:
        objects: The objects in the scene. Order only matters for breaking
            exact ties in time of intersection.
        fovy: Vertical field of view in radians.
        eye: Camera position.
        look: Unit view direction.
        up: Unit up direction, orthogonal to look.
    """

    objects: list[SceneObject] = field(default_factory=list)
    fovy: float = DEFAULT_FOVY
    eye: Point = field(default_factory=lambda: Vector(0.0, 0.0, 0.0))
    look: Vector = field(default_factory=lambda: Vector(0.0, 0.0, -1.0))
    up: Vector = field(default_factory=lambda: Vector(0.0, 1.0, 0.0))

    # =========================================================================
    # Camera
    # =========================================================================

    def right_axis(self) -> Vector:
        """Camera x axis, look x up."""
        return self.look.cross(self.up)

    def up_axis(self) -> Vector:
        """Camera y axis."""
        return self.up

    def forward_axis(self) -> Vector:
        """Camera z axis (the view direction)."""
        return self.look

    def camera_basis(self) -> Matrix:
        """View-to-world matrix with columns (right, up, forward)."""
        return Matrix.from_columns(self.right_axis(), self.up_axis(), self.forward_axis())

    def move_camera(self, offset: Vector) -> None:
        """Translate the eye by offset, in world space."""
        self.eye = self.eye + offset

    # =========================================================================
    # Objects
    # =========================================================================

    def add_object(self, obj: SceneObject) -> int:
        """Append an object and return its index."""
        self.objects.append(obj)
        return len(self.objects) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        *,
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        emittance: float = 0.0,
        reflectance: float = 0.0,
        transmittance: float = 0.0,
        diffuseness: float = 0.0,
    ) -> int:
        """Add a solid-colored sphere.

        Returns:
            The index of the new object.

        Raises:
            ValueError: If radius is not positive.
        """
        return self.add_object(
            SceneObject(
                center=Vector.from_sequence(center),
                radius=radius,
                emittance=emittance,
                reflectance=reflectance,
                transmittance=transmittance,
                diffuseness=diffuseness,
                texture=solid_color(*RGB.from_sequence(color)),
            )
        )

    def cast(self, ray: Ray) -> Collision | None:
        """Nearest collision of the ray with any object, or None."""
        return intersect_scene(self.objects, ray)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {
            "camera": {
                "fovy": self.fovy,
                "eye": list(self.eye.to_tuple()),
                "look": list(self.look.to_tuple()),
                "up": list(self.up.to_tuple()),
            },
            "objects": [obj.to_dict() for obj in self.objects],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Load a scene from a dictionary.

        Missing camera entries fall back to the defaults.

        Raises:
            ValueError: If an entry is malformed.
        """
        camera = data.get("camera", {})
        defaults = cls()
        return cls(
            objects=[SceneObject.from_dict(entry) for entry in data.get("objects", [])],
            fovy=float(camera.get("fovy", defaults.fovy)),
            eye=Vector.from_sequence(camera["eye"]) if "eye" in camera else defaults.eye,
            look=Vector.from_sequence(camera["look"]) if "look" in camera else defaults.look,
            up=Vector.from_sequence(camera["up"]) if "up" in camera else defaults.up,
        )
