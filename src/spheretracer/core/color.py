"""Linear RGB radiance and attenuation values.

RGB here is a physical quantity, not a display color: channels are
unbounded and combine component-wise. Gamma and tone mapping live in
the preview package.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RGB:
    """Three float channels of radiance or per-channel attenuation.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    def __add__(self, other: RGB) -> RGB:
        return RGB(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: RGB | float) -> RGB:
        if isinstance(other, RGB):
            return RGB(self.r * other.r, self.g * other.g, self.b * other.b)
        return RGB(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, scalar: float) -> RGB:
        return RGB(self.r * scalar, self.g * scalar, self.b * scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def all_below(self, threshold: float) -> bool:
        """True if every channel is strictly less than threshold."""
        return self.r < threshold and self.g < threshold and self.b < threshold

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @classmethod
    def from_sequence(cls, values: tuple[float, float, float] | list[float]) -> RGB:
        """Build a color from any 3-element sequence.

        Raises:
            ValueError: If the sequence does not have exactly 3 elements.
        """
        if len(values) != 3:
            raise ValueError(f"Expected 3 channels, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))


BLACK = RGB(0.0, 0.0, 0.0)
WHITE = RGB(1.0, 1.0, 1.0)
