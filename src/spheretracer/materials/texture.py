"""Surface textures.

A texture maps a hit location to the RGB color that scales whatever light
the path engine finds there. The path engine only ever calls resolve(), so
new texture kinds (procedural, image-sampled) subclass Texture without
touching the integrator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from src.spheretracer.core.color import RGB
from src.spheretracer.core.ray import Point


class Texture(ABC):
    """Base class for all textures."""

    @abstractmethod
    def resolve(self, location: Point) -> RGB:
        """Return the surface color at a world-space hit location."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible description, including a "type" key."""


@dataclass(frozen=True)
class SolidColor(Texture):
    """A single color, independent of hit location.

    Attributes:
        color: The surface color.
    """

    color: RGB

    def resolve(self, location: Point) -> RGB:
        return self.color

    def to_dict(self) -> dict[str, Any]:
        return {"type": "solid_color", "color": list(self.color.to_tuple())}


def solid_color(r: float, g: float, b: float) -> SolidColor:
    """Shorthand for SolidColor(RGB(r, g, b))."""
    return SolidColor(RGB(r, g, b))


def texture_from_dict(data: dict[str, Any]) -> Texture:
    """Build a texture from its to_dict() form.

    Raises:
        ValueError: If the texture type is unknown or the entry is malformed.
    """
    texture_type = str(data.get("type", "")).lower()
    if texture_type == "solid_color":
        if "color" not in data:
            raise ValueError("solid_color texture requires a 'color' entry")
        return SolidColor(RGB.from_sequence(data["color"]))
    raise ValueError(f"Unknown texture type: {texture_type}")
