"""Display processing and Matplotlib preview for rendered images.

Rendered frames are unclamped linear radiance. Before they can be shown or
saved they go through the display pipeline:

    1. Tone mapping (optional) to compress values above 1
    2. Gamma encoding for sRGB displays
    3. Clamping to [0, 1]

Example:
    >>> from src.spheretracer.preview.display import process_image_for_display
    >>> display = process_image_for_display(output.to_image(), tone_map="reinhard")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.spheretracer.core.progressive import ProgressiveRenderer


ToneMapMethod = Literal["none", "reinhard", "exposure"]


def tone_map_reinhard(image: npt.NDArray[np.floating], exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Reinhard operator c / (1 + c) on exposure-scaled, non-negative values."""
    scaled = np.maximum(image, 0.0) * exposure
    return (scaled / (1.0 + scaled)).astype(np.float32)


def tone_map_exposure(image: npt.NDArray[np.floating], exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Exponential operator 1 - exp(-c * exposure)."""
    return (1.0 - np.exp(-np.maximum(image, 0.0) * exposure)).astype(np.float32)


def _tone_map_none(image: npt.NDArray[np.floating], exposure: float = 1.0) -> npt.NDArray[np.float32]:
    return (image * exposure).astype(np.float32)


_TONE_MAPS: dict[str, Callable[..., npt.NDArray[np.float32]]] = {
    "none": _tone_map_none,
    "reinhard": tone_map_reinhard,
    "exposure": tone_map_exposure,
}


def apply_gamma(image: npt.NDArray[np.floating], gamma: float = 2.2) -> npt.NDArray[np.float32]:
    """Clamp to [0, 1] and encode with exponent 1 / gamma."""
    clamped = np.clip(image, 0.0, 1.0)
    if gamma == 1.0:
        return clamped.astype(np.float32)
    return np.power(clamped, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the full display pipeline.

    Args:
        image: Linear radiance, shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Display gamma (1.0 leaves values linear).
        exposure: Multiplier applied before tone mapping.

    Returns:
        float32 image in [0, 1].

    Raises:
        ValueError: If tone_map is not a known method.
    """
    try:
        operator = _TONE_MAPS[tone_map]
    except KeyError:
        raise ValueError(f"Unknown tone mapping method: {tone_map}") from None

    return apply_gamma(operator(image, exposure), gamma)


def show_preview(
    renderer: ProgressiveRenderer,
    *,
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Show the renderer's current image in a Matplotlib figure.

    The default title reports how many frames have been blended.
    """
    import matplotlib.pyplot as plt

    display_image = renderer.get_display_image(tone_map=tone_map, gamma=gamma, exposure=exposure)

    _, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {renderer.frame_count} frames")

    plt.tight_layout()
    plt.show(block=block)
