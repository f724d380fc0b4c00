"""Tests for the scene model.

Tests cover:
- SceneObject validation and defaults
- Camera basis and camera movement
- Object insertion
- Dictionary serialization
"""

import json
import logging

import pytest


class TestSceneObject:
    """Tests for SceneObject construction."""

    def test_defaults(self):
        from src.spheretracer.core.color import RGB
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import SceneObject

        obj = SceneObject(center=Vector(0.0, 0.0, -3.0), radius=1.0)

        assert obj.emittance == 0.0
        assert obj.reflectance == 0.0
        assert obj.transmittance == 0.0
        assert obj.diffuseness == 0.0
        assert obj.texture.resolve(obj.center) == RGB(1.0, 1.0, 1.0)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_rejects_non_positive_radius(self, radius):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import SceneObject

        with pytest.raises(ValueError, match="radius must be positive"):
            SceneObject(center=Vector(0.0, 0.0, 0.0), radius=radius)

    def test_warns_when_bounces_gain_energy(self, caplog):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import SceneObject

        with caplog.at_level(logging.WARNING, logger="src.spheretracer.scene.model"):
            SceneObject(center=Vector(0.0, 0.0, 0.0), radius=1.0, reflectance=0.7, transmittance=0.6)

        assert "reflectance + transmittance" in caplog.text

    def test_no_warning_for_energy_conserving_object(self, caplog):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import SceneObject

        with caplog.at_level(logging.WARNING, logger="src.spheretracer.scene.model"):
            SceneObject(center=Vector(0.0, 0.0, 0.0), radius=1.0, reflectance=0.1, transmittance=0.9)

        assert caplog.records == []


class TestSceneCamera:
    """Tests for the camera pose and derived basis."""

    def test_default_pose(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import Scene

        scene = Scene()

        assert scene.eye == Vector(0.0, 0.0, 0.0)
        assert scene.right_axis() == Vector(1.0, 0.0, 0.0)
        assert scene.up_axis() == Vector(0.0, 1.0, 0.0)
        assert scene.forward_axis() == Vector(0.0, 0.0, -1.0)

    def test_right_axis_is_look_cross_up(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import Scene

        scene = Scene(look=Vector(1.0, 0.0, 0.0), up=Vector(0.0, 1.0, 0.0))
        assert scene.right_axis() == Vector(0.0, 0.0, 1.0)

    def test_camera_basis_columns(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import Scene

        basis = Scene().camera_basis()

        assert basis @ Vector(1.0, 0.0, 0.0) == Vector(1.0, 0.0, 0.0)
        assert basis @ Vector(0.0, 0.0, 1.0) == Vector(0.0, 0.0, -1.0)

    def test_move_camera_translates_eye(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import Scene

        scene = Scene()
        scene.move_camera(Vector(0.0, 0.0, -1.0))
        scene.move_camera(Vector(1.0, 0.0, 0.0))

        assert scene.eye == Vector(1.0, 0.0, -1.0)
        assert scene.look == Vector(0.0, 0.0, -1.0)


class TestSceneObjects:
    def test_add_sphere_returns_index(self):
        from src.spheretracer.core.color import RGB
        from src.spheretracer.scene.model import Scene

        scene = Scene()
        first = scene.add_sphere((0.0, 0.0, -3.0), 1.0, emittance=1.0)
        second = scene.add_sphere((1.0, 0.0, -3.0), 0.5, color=(1.0, 0.0, 0.0), reflectance=0.5)

        assert (first, second) == (0, 1)
        assert scene.objects[1].texture.resolve(scene.objects[1].center) == RGB(1.0, 0.0, 0.0)
        assert scene.objects[1].reflectance == 0.5

    def test_add_sphere_uses_solid_color_texture(self):
        from src.spheretracer.materials.texture import SolidColor, solid_color
        from src.spheretracer.scene.model import Scene

        scene = Scene()
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, color=(1, 0, 0))

        texture = scene.objects[0].texture
        assert isinstance(texture, SolidColor)
        assert texture == solid_color(1.0, 0.0, 0.0)
        assert texture.to_dict() == {"type": "solid_color", "color": [1.0, 0.0, 0.0]}

    def test_default_texture_is_white(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.materials.texture import solid_color
        from src.spheretracer.scene.model import SceneObject

        obj = SceneObject(center=Vector(0.0, 0.0, 0.0), radius=1.0)
        assert obj.texture == solid_color(1.0, 1.0, 1.0)

    def test_cast_finds_object(self):
        from src.spheretracer.core.ray import Ray, Vector
        from src.spheretracer.scene.model import Scene

        scene = Scene()
        scene.add_sphere((0.0, 0.0, -3.0), 1.0)

        collision = scene.cast(Ray(scene.eye, scene.forward_axis()))

        assert collision is not None
        assert collision.object is scene.objects[0]
        assert collision.toi == pytest.approx(2.0)


class TestSceneSerialization:
    def test_round_trip_through_json(self):
        from src.spheretracer.core.ray import Vector
        from src.spheretracer.scene.model import Scene

        scene = Scene(eye=Vector(0.0, 1.0, 2.0))
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, color=(0.9, 0.9, 1.0), transmittance=0.8, diffuseness=0.02)

        restored = Scene.from_dict(json.loads(json.dumps(scene.to_dict())))

        assert restored == scene

    def test_from_dict_uses_camera_defaults(self):
        from src.spheretracer.scene.model import DEFAULT_FOVY, Scene

        scene = Scene.from_dict({"objects": [{"center": [0, 0, -3], "radius": 1}]})

        assert scene.fovy == DEFAULT_FOVY
        assert len(scene.objects) == 1
        assert scene.objects[0].emittance == 0.0

    def test_from_dict_requires_center_and_radius(self):
        from src.spheretracer.scene.model import Scene

        with pytest.raises(ValueError, match="center"):
            Scene.from_dict({"objects": [{"radius": 1.0}]})

    def test_unknown_texture_type_raises(self):
        from src.spheretracer.scene.model import SceneObject

        with pytest.raises(ValueError, match="Unknown texture type"):
            SceneObject.from_dict({"center": [0, 0, 0], "radius": 1, "texture": {"type": "checker"}})
