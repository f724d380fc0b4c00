"""Ready-made scenes.

The default scene is a small still life of spheres inside one huge, dimly
glowing sphere that acts as the walls of the room:

- Red ball: fully reflective, rough
- Blue ball: mostly transmissive, slightly glossy
- Frosted glass ball: transmissive, slightly rough
- Glass ball: transmissive, perfectly smooth
- Brass ball: large, reflective, a little rough
- Small mirror ball
- Light: a bright sphere up and to the left
- Walls: radius-20 sphere around everything, emittance 0.2

The camera sits at the origin looking down -Z with a 90 degree vertical
field of view.

Example:
    >>> from src.spheretracer.scene.presets import create_default_scene
    >>> scene = create_default_scene()
    >>> len(scene.objects)
    8
"""

from __future__ import annotations

import math

from src.spheretracer.core.ray import Vector
from src.spheretracer.scene.model import Scene

WALL_RADIUS = 20.0
WALL_EMITTANCE = 0.2

# (name, center, radius, color, emittance, reflectance, transmittance, diffuseness)
_DEFAULT_OBJECTS: list[
    tuple[str, tuple[float, float, float], float, tuple[float, float, float], float, float, float, float]
] = [
    ("red", (-4.0, -1.0, -5.0), 1.0, (1.0, 0.0, 0.0), 0.0, 1.0, 0.0, 1.0),
    ("blue", (-0.5, -1.0, -5.0), 1.0, (0.0, 0.6, 1.0), 0.0, 0.1, 0.9, 0.01),
    ("frosted_glass", (-0.7, -0.5, -1.5), 0.5, (0.9, 0.9, 1.0), 0.0, 0.1, 0.8, 0.02),
    ("glass", (0.2, -0.5, -1.0), 0.5, (0.9, 0.9, 1.0), 0.0, 0.1, 0.9, 0.0),
    ("brass", (3.0, 1.5, -10.0), 4.0, (1.0, 0.4, 0.1), 0.0, 1.0, 0.0, 0.1),
    ("mirror", (3.0, -1.0, -3.5), 1.0, (1.0, 1.0, 1.0), 0.0, 0.9, 0.0, 0.0),
    ("light", (-9.0, 10.0, 0.0), 1.0, (0.9, 0.9, 1.0), 1.0, 0.0, 1.0, 0.0),
    ("walls", (0.0, 0.0, 0.0), WALL_RADIUS, (1.0, 1.0, 1.0), WALL_EMITTANCE, 0.0, 0.0, 1.0),
]

DEFAULT_OBJECT_NAMES = tuple(entry[0] for entry in _DEFAULT_OBJECTS)


def create_default_scene() -> Scene:
    """Create the eight-sphere demo scene with the camera at the origin."""
    scene = Scene(
        fovy=math.pi / 2.0,
        eye=Vector(0.0, 0.0, 0.0),
        look=Vector(0.0, 0.0, -1.0),
        up=Vector(0.0, 1.0, 0.0),
    )
    for _, center, radius, color, emittance, reflectance, transmittance, diffuseness in _DEFAULT_OBJECTS:
        scene.add_sphere(
            center,
            radius,
            color=color,
            emittance=emittance,
            reflectance=reflectance,
            transmittance=transmittance,
            diffuseness=diffuseness,
        )
    return scene


def create_single_light_scene(
    distance: float = 3.0,
    radius: float = 1.0,
    color: tuple[float, float, float] = (1.0, 1.0, 1.0),
) -> Scene:
    """A lone emissive sphere straight ahead of the camera.

    Every camera ray that hits it sees exactly its color.
    """
    scene = Scene()
    scene.add_sphere((0.0, 0.0, -distance), radius, color=color, emittance=1.0)
    return scene
