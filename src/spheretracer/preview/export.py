"""Image export for rendered frames.

Frames are converted to 8-bit sRGB and written with Pillow. The file
format follows the path's extension (PNG is the intended target).

Example:
    >>> from src.spheretracer.preview.export import save_png
    >>> save_png(output.to_image(), "spheres.png", tone_map="reinhard")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.spheretracer.preview.display import ToneMapMethod, process_image_for_display


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert linear radiance of shape (H, W, 3) to display-ready uint8."""
    processed = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return np.round(processed * 255.0).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Path:
    """Save linear radiance as an 8-bit image file.

    Args:
        image: Linear radiance, shape (H, W, 3), top row first.
        filepath: Output path.
        tone_map: Tone mapping method.
        gamma: Display gamma.
        exposure: Multiplier applied before tone mapping.

    Returns:
        The path written.

    Raises:
        ValueError: If image is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    path = Path(filepath)
    pixels = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(pixels).save(path)
    return path


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared error between two images of equal shape.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
