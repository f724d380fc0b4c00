"""Progressive renderer for frame-by-frame refinement.

Every render_scene() call yields one noisy estimate of the image.
ProgressiveRenderer keeps rendering the same scene and blends each new
frame into a running average,

    image_n = image_{n-1} + (frame_n - image_{n-1}) / n

which is the same as blending frame n with alpha 1 / n. Each frame draws
from its own generator, seeded from a master generator, so a renderer
created with the same seed produces the same sequence of images.

Moving the camera through the renderer resets the average, since frames
from the old pose no longer estimate the new image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretracer.core.progressive import ProgressiveRenderer
    >>> from src.spheretracer.scene.presets import create_default_scene
    >>>
    >>> renderer = ProgressiveRenderer(create_default_scene(), 80, 60, seed=7)
    >>> renderer.render(10)
    >>> image = renderer.get_image_numpy()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from src.spheretracer.core.integrator import DEFAULT_SETTINGS, RenderSettings, render_scene
from src.spheretracer.core.ray import Vector
from src.spheretracer.preview.display import ToneMapMethod, process_image_for_display
from src.spheretracer.scene.model import Scene

logger = logging.getLogger(__name__)

# Callback receives (frames_so_far, target_frames)
ProgressCallback = Callable[[int, int], None]

_SEED_BOUND = 2**63 - 1


class ProgressiveRenderer:
    """Accumulates frames of one scene into a converging image.

    Attributes:
        scene: The scene being rendered. Shared with the caller.
        settings: Path engine parameters used for every frame.
    """

    def __init__(
        self,
        scene: Scene,
        width: int,
        height: int,
        *,
        seed: int = 0,
        settings: RenderSettings = DEFAULT_SETTINGS,
    ) -> None:
        """Initialize the renderer with an empty accumulator.

        Args:
            scene: The scene to render.
            width: Image width in pixels.
            height: Image height in pixels.
            seed: Seed of the master generator that seeds each frame.
            settings: Path engine parameters.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.scene = scene
        self.settings = settings
        self._width = width
        self._height = height
        self._seed_source = np.random.default_rng(seed)
        self._accumulator = np.zeros((height, width, 3), dtype=np.float64)
        self._frame_count = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def frame_count(self) -> int:
        """Number of frames blended into the current image."""
        return self._frame_count

    def reset(self) -> None:
        """Discard accumulated frames, keeping size and seed sequence."""
        self._accumulator.fill(0.0)
        self._frame_count = 0
        logger.debug("Accumulator reset")

    def resize(self, width: int, height: int) -> None:
        """Change the image size and discard accumulated frames.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._accumulator = np.zeros((height, width, 3), dtype=np.float64)
        self._frame_count = 0

    def move_camera(self, offset: Vector) -> None:
        """Move the scene's eye and restart accumulation."""
        self.scene.move_camera(offset)
        logger.debug("Camera moved to %s", self.scene.eye.to_tuple())
        self.reset()

    def render_frame(self) -> None:
        """Render one frame and blend it into the image."""
        frame_rng = np.random.default_rng(int(self._seed_source.integers(0, _SEED_BOUND)))
        frame = render_scene(self.scene, self._width, self._height, frame_rng, self.settings)

        self._frame_count += 1
        self._accumulator += (frame.to_image() - self._accumulator) / self._frame_count

    def render(
        self,
        num_frames: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render frames with an optional progress callback.

        Args:
            num_frames: Number of frames to add.
            batch_size: Frames rendered between callback invocations.
            callback: Called after each batch with
                (frames_so_far, target_frames).
        """
        for current, target in self.render_progressive(num_frames, batch_size):
            if callback is not None:
                callback(current, target)

    def render_progressive(
        self,
        num_frames: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render frames, yielding (frames_so_far, target_frames) after each batch."""
        if num_frames <= 0:
            return

        target = self._frame_count + num_frames
        remaining = num_frames
        while remaining > 0:
            batch = min(max(batch_size, 1), remaining)
            for _ in range(batch):
                self.render_frame()
            remaining -= batch
            yield (self._frame_count, target)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Averaged linear radiance, shape (height, width, 3), top row first."""
        return self._accumulator.astype(np.float32)

    def get_display_image(
        self,
        *,
        tone_map: ToneMapMethod = "reinhard",
        gamma: float = 2.2,
        exposure: float = 1.0,
    ) -> npt.NDArray[np.float32]:
        """The image tone mapped and gamma encoded into [0, 1]."""
        return process_image_for_display(
            self.get_image_numpy(),
            tone_map=tone_map,
            gamma=gamma,
            exposure=exposure,
        )

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"frames={self.frame_count})"
        )
