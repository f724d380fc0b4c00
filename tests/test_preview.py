"""Tests for display processing, image export and the interactive window.

Tests cover:
- Tone mapping operators and gamma encoding
- PNG export through Pillow
- RMSE image comparison
- Keyboard handling of the interactive preview (no window is opened)
"""

import math

import numpy as np
import pytest


class TestToneMapping:
    def test_reinhard(self):
        from src.spheretracer.preview.display import tone_map_reinhard

        image = np.array([[[0.0, 1.0, 3.0]]], dtype=np.float32)
        np.testing.assert_allclose(tone_map_reinhard(image), [[[0.0, 0.5, 0.75]]])

    def test_reinhard_exposure_scales_input(self):
        from src.spheretracer.preview.display import tone_map_reinhard

        image = np.array([[[0.5, 0.5, 0.5]]], dtype=np.float32)
        np.testing.assert_allclose(tone_map_reinhard(image, exposure=2.0), 0.5)

    def test_exposure_operator(self):
        from src.spheretracer.preview.display import tone_map_exposure

        image = np.array([[[1.0, 1.0, 1.0]]], dtype=np.float32)
        np.testing.assert_allclose(tone_map_exposure(image), 1.0 - math.exp(-1.0), rtol=1e-6)

    def test_apply_gamma_clamps(self):
        from src.spheretracer.preview.display import apply_gamma

        image = np.array([[[-1.0, 0.25, 4.0]]], dtype=np.float32)
        np.testing.assert_allclose(apply_gamma(image, gamma=2.0), [[[0.0, 0.5, 1.0]]])

    def test_unknown_tone_map_raises(self):
        from src.spheretracer.preview.display import process_image_for_display

        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image_for_display(np.zeros((2, 2, 3)), tone_map="filmic")


class TestExport:
    def test_save_png_writes_image(self, tmp_path):
        from PIL import Image

        from src.spheretracer.preview.export import save_png

        image = np.zeros((3, 5, 3), dtype=np.float32)
        image[0, 0] = 1.0

        path = save_png(image, tmp_path / "frame.png", tone_map="none")

        assert path.exists()
        with Image.open(path) as loaded:
            assert loaded.size == (5, 3)
            assert loaded.mode == "RGB"
            pixels = np.asarray(loaded)
        assert tuple(pixels[0, 0]) == (255, 255, 255)
        assert tuple(pixels[2, 4]) == (0, 0, 0)

    def test_save_png_rejects_bad_shape(self, tmp_path):
        from src.spheretracer.preview.export import save_png

        with pytest.raises(ValueError, match="shape"):
            save_png(np.zeros((4, 4)), tmp_path / "bad.png")

    def test_image_to_uint8_range(self):
        from src.spheretracer.preview.export import image_to_uint8

        image = np.array([[[0.0, 0.5, 10.0]]], dtype=np.float32)
        pixels = image_to_uint8(image, tone_map="none", gamma=1.0)

        assert pixels.dtype == np.uint8
        assert pixels.tolist() == [[[0, 128, 255]]]

    def test_compute_rmse(self):
        from src.spheretracer.preview.export import compute_rmse

        a = np.zeros((2, 2, 3))
        b = np.full((2, 2, 3), 0.5)

        assert compute_rmse(a, a) == 0.0
        assert compute_rmse(a, b) == pytest.approx(0.5)
        with pytest.raises(ValueError):
            compute_rmse(a, np.zeros((2, 3, 3)))


class TestInteractivePreview:
    """Keyboard and buffer handling; the GGUI window is never created."""

    @pytest.fixture
    def preview(self):
        from src.spheretracer.preview.interactive import InteractivePreview
        from src.spheretracer.scene.presets import create_single_light_scene

        return InteractivePreview(create_single_light_scene(), 8, 6, step=0.5)

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("w", (0.0, 0.0, -0.5)),
            ("s", (0.0, 0.0, 0.5)),
            ("d", (0.5, 0.0, 0.0)),
            ("a", (-0.5, 0.0, 0.0)),
            ("W", (0.0, 0.0, -0.5)),
        ],
    )
    def test_key_offsets(self, preview, key, expected):
        offset = preview.key_offset(key)

        assert offset is not None
        assert offset.to_tuple() == pytest.approx(expected)

    def test_other_keys_do_nothing(self, preview):
        assert preview.key_offset("q") is None
        assert preview.handle_key("q") is False

    def test_movement_key_resets_accumulation(self, preview):
        from src.spheretracer.core.ray import Vector

        preview.renderer.render(2)

        assert preview.handle_key("w") is True
        assert preview.renderer.frame_count == 0
        assert preview.renderer.scene.eye == Vector(0.0, 0.0, -0.5)

    def test_p_key_saves_png_without_moving(self, tmp_path):
        from PIL import Image

        from src.spheretracer.core.ray import Vector
        from src.spheretracer.preview.interactive import InteractivePreview
        from src.spheretracer.scene.presets import create_single_light_scene

        preview = InteractivePreview(create_single_light_scene(), 8, 6, export_dir=tmp_path)
        preview.renderer.render(1)

        assert preview.handle_key("p") is False

        saved = list(tmp_path.glob("spheres_*.png"))
        assert len(saved) == 1
        with Image.open(saved[0]) as loaded:
            assert loaded.size == (8, 6)
        assert preview.renderer.frame_count == 1
        assert preview.renderer.scene.eye == Vector(0.0, 0.0, 0.0)

    def test_step_frame_fills_display_field(self, preview):
        preview.step_frame()

        field = preview.display_image.to_numpy()
        assert field.shape == (8, 6, 3)
        # Field is indexed (x, y) with y = 0 at the bottom
        assert field[4, 3].min() > 0.0
        np.testing.assert_array_equal(field[0, 0], 0.0)

    def test_update_image_rejects_wrong_shape(self, preview):
        with pytest.raises(ValueError, match="doesn't match"):
            preview.update_image(np.zeros((8, 6, 3), dtype=np.float32))
