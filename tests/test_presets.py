"""Tests for the ready-made scenes."""

import logging

import pytest


class TestDefaultScene:
    def test_has_eight_named_objects(self):
        from src.spheretracer.scene.presets import DEFAULT_OBJECT_NAMES, create_default_scene

        scene = create_default_scene()

        assert len(scene.objects) == 8
        assert len(DEFAULT_OBJECT_NAMES) == 8
        assert DEFAULT_OBJECT_NAMES[-1] == "walls"

    def test_walls_enclose_the_camera(self):
        from src.spheretracer.scene.presets import WALL_EMITTANCE, WALL_RADIUS, create_default_scene

        scene = create_default_scene()
        walls = scene.objects[-1]

        assert walls.radius == WALL_RADIUS
        assert walls.emittance == WALL_EMITTANCE
        assert (scene.eye - walls.center).length() < walls.radius

    def test_has_one_light(self):
        from src.spheretracer.scene.presets import DEFAULT_OBJECT_NAMES, create_default_scene

        scene = create_default_scene()
        lights = [name for name, obj in zip(DEFAULT_OBJECT_NAMES, scene.objects) if obj.emittance >= 1.0]

        assert lights == ["light"]

    def test_materials_do_not_gain_energy(self, caplog):
        from src.spheretracer.scene.presets import create_default_scene

        with caplog.at_level(logging.WARNING, logger="src.spheretracer.scene.model"):
            create_default_scene()

        assert caplog.records == []


class TestSingleLightScene:
    def test_single_emitter_ahead_of_camera(self):
        from src.spheretracer.scene.presets import create_single_light_scene

        scene = create_single_light_scene(distance=5.0, radius=2.0)

        assert len(scene.objects) == 1
        light = scene.objects[0]
        assert light.center.to_tuple() == pytest.approx((0.0, 0.0, -5.0))
        assert light.radius == 2.0
        assert light.emittance == 1.0
        assert light.reflectance == 0.0
        assert light.transmittance == 0.0
