"""Interactive preview window using Taichi GGUI.

The window shows a ProgressiveRenderer's image and keeps refining it: each
iteration of the loop renders one more frame, blends it in, and redraws.
The keyboard moves the camera, which restarts accumulation:

    W / S   move along +/- forward
    D / A   move along +/- right
    P       save the current image as a timestamped PNG
    Escape  close the window

The render resolution can be smaller than the window; the canvas scales
the image to fill it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretracer.preview.interactive import InteractivePreview
    >>> from src.spheretracer.scene.presets import create_default_scene
    >>>
    >>> preview = InteractivePreview(create_default_scene(), 160, 120, window_res=(640, 480))
    >>> preview.run()
"""

from __future__ import annotations

import os
import platform
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.spheretracer.core.integrator import DEFAULT_SETTINGS, RenderSettings

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.spheretracer.core.progressive import ProgressiveRenderer
    from src.spheretracer.core.ray import Vector
    from src.spheretracer.scene.model import Scene


# World-space distance covered by one key press
DEFAULT_STEP = 1.0


class InteractivePreview:
    """GGUI window around a ProgressiveRenderer.

    Attributes:
        width: Render width in pixels.
        height: Render height in pixels.
        step: Distance the camera moves per key press.
        export_dir: Directory the P key saves PNG files into.
        display_image: Taichi field holding the displayed image (RGB float).
    """

    def __init__(
        self,
        scene: Scene,
        width: int,
        height: int,
        *,
        window_res: tuple[int, int] | None = None,
        seed: int = 0,
        step: float = DEFAULT_STEP,
        settings: RenderSettings = DEFAULT_SETTINGS,
        title: str = "Sphere Path Tracer",
        export_dir: str | Path = ".",
    ) -> None:
        """Set up the renderer and display buffer.

        The window itself is created on first use so that construction
        works without a display.

        Args:
            scene: Scene to render; its camera is moved by key presses.
            width: Render width in pixels.
            height: Render height in pixels.
            window_res: Window size; defaults to the render size.
            seed: Seed for the progressive renderer.
            step: Distance moved per key press.
            settings: Path engine parameters.
            title: Window title.
            export_dir: Directory the P key saves PNG files into.
        """
        # Import here to avoid circular imports
        from src.spheretracer.core.progressive import ProgressiveRenderer

        self.width = width
        self.height = height
        self.step = step
        self._title = title
        self.export_dir = Path(export_dir)
        self._window_res = window_res if window_res is not None else (width, height)
        self._renderer = ProgressiveRenderer(scene, width, height, seed=seed, settings=settings)

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Taichi fields index (x, y); images are (row, column)
        self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    @property
    def renderer(self) -> ProgressiveRenderer:
        return self._renderer

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(name=self._title, res=self._window_res, vsync=True)
        self._canvas = self._window.get_canvas()

    def update_image(self, image: npt.NDArray[np.float32]) -> None:
        """Copy a display-ready image into the Taichi display field.

        Args:
            image: Array of shape (height, width, 3), values in [0, 1],
                top row first.

        Raises:
            ValueError: If the shape does not match the render size.
        """
        expected_shape = (self.height, self.width, 3)
        if image.shape != expected_shape:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected_shape}")

        # Taichi's canvas origin is bottom-left
        self.display_image.from_numpy(
            np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)), dtype=np.float32)
        )

    def key_offset(self, key: str) -> Vector | None:
        """Camera offset for a movement key, or None if the key does not move."""
        scene = self._renderer.scene
        offsets = {
            "w": lambda: scene.forward_axis() * self.step,
            "s": lambda: -scene.forward_axis() * self.step,
            "d": lambda: scene.right_axis() * self.step,
            "a": lambda: -scene.right_axis() * self.step,
        }
        offset = offsets.get(str(key).lower())
        return offset() if offset is not None else None

    def handle_key(self, key: str) -> bool:
        """Apply a key press. Returns True if the camera moved."""
        if str(key).lower() == "p":
            path = self.export_png(self.export_dir)
            print(f"Exported: {path} ({self._renderer.frame_count} frames)")
            return False

        offset = self.key_offset(key)
        if offset is None:
            return False
        self._renderer.move_camera(offset)
        return True

    def _poll_events(self) -> None:
        assert self._window is not None
        while self._window.get_event(ti.ui.PRESS):
            key = self._window.event.key
            if key == ti.ui.ESCAPE:
                self._window.running = False
            else:
                self.handle_key(key)

    def step_frame(self) -> None:
        """Render one frame and refresh the display buffer."""
        self._renderer.render_frame()
        self.update_image(self._renderer.get_display_image())

    def run(self, max_frames: int | None = None) -> None:
        """Render and display until the window closes.

        Args:
            max_frames: Stop after this many loop iterations (None = no limit).
        """
        self._initialize_window()
        assert self._window is not None and self._canvas is not None

        iterations = 0
        while self._window.running:
            if max_frames is not None and iterations >= max_frames:
                break
            self._poll_events()
            self.step_frame()
            self._canvas.set_image(self.display_image)
            self._window.show()
            iterations += 1

    def export_png(self, directory: str | Path = ".") -> Path:
        """Save the current image to a timestamped PNG file."""
        from src.spheretracer.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = Path(directory) / f"spheres_{timestamp}.png"
        return save_png(self._renderer.get_image_numpy(), path)

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Best-effort check for a graphical display."""
        system = platform.system()
        if system == "Windows":
            return True
        display = os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
        if system == "Darwin":
            return not (os.environ.get("SSH_CONNECTION") and not display)
        return bool(display)
