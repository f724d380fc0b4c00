"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma encoding and Matplotlib preview
    export: 8-bit conversion and PNG export
    interactive: Taichi GGUI window with keyboard camera movement

Example:
    >>> from src.spheretracer.preview import save_png
    >>> save_png(output.to_image(), "spheres.png", tone_map="reinhard")
"""

from src.spheretracer.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from src.spheretracer.preview.export import compute_rmse, image_to_uint8, save_png
from src.spheretracer.preview.interactive import InteractivePreview

__all__ = [
    "InteractivePreview",
    "show_preview",
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
