"""Scene module: scene model, nearest-hit search and preset scenes.

Components:
    model: SceneObject (sphere + material) and Scene (objects + camera pose)
    intersection: Collision record and linear nearest-hit scan
    presets: Ready-made scenes
"""

from .intersection import Collision, intersect_scene
from .model import DEFAULT_FOVY, Scene, SceneObject
from .presets import DEFAULT_OBJECT_NAMES, create_default_scene, create_single_light_scene

__all__ = [
    "Collision",
    "intersect_scene",
    "Scene",
    "SceneObject",
    "DEFAULT_FOVY",
    "create_default_scene",
    "create_single_light_scene",
    "DEFAULT_OBJECT_NAMES",
]
