"""Units of path-tracing work and the pixel buffer they accumulate into.

A Work item is one ray still carrying some weight toward a pixel. The
Output buffer is owned by a single render call: it starts at zero
radiance and every work item that hits an emitter adds into its pixel.

Buffer layout is row-major with index y * width + x. Row 0 is the bottom
of the view (the camera's y axis points up), so use to_image() when a
top-row-first array is needed for display or export.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.spheretracer.core.color import RGB
from src.spheretracer.core.ray import Ray


@dataclass(slots=True)
class Work:
    """A ray to trace, the pixel it contributes to, and its remaining weight.

    Attributes:
        ray: The ray to cast into the scene.
        pixel_x: Target pixel column.
        pixel_y: Target pixel row (0 = bottom).
        attenuation: Per-channel weight of anything this ray finds.
        depth: Number of bounces between the camera and this ray.
    """

    ray: Ray
    pixel_x: int
    pixel_y: int
    attenuation: RGB
    depth: int = 0


class Output:
    """Flat row-major RGB accumulation buffer for one frame.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a zero-radiance buffer.

        Args:
            width: Image width in pixels (positive).
            height: Image height in pixels (positive).

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Output dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._data: npt.NDArray[np.float64] = np.zeros((width * height, 3), dtype=np.float64)

    def __len__(self) -> int:
        return self.width * self.height

    def index(self, x: int, y: int) -> int:
        """Flat buffer index of pixel (x, y).

        Raises:
            IndexError: If (x, y) lies outside the image.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} output"
            )
        return y * self.width + x

    def pixel(self, x: int, y: int) -> RGB:
        """Current accumulated radiance at (x, y)."""
        r, g, b = self._data[self.index(x, y)]
        return RGB(float(r), float(g), float(b))

    def add(self, x: int, y: int, radiance: RGB) -> None:
        """Accumulate radiance into pixel (x, y). Never overwrites."""
        cell = self._data[self.index(x, y)]
        cell[0] += radiance.r
        cell[1] += radiance.g
        cell[2] += radiance.b

    def to_list(self) -> list[RGB]:
        """The buffer as a list of RGB values in row-major order."""
        return [RGB(r, g, b) for r, g, b in self._data.tolist()]

    def to_array(self) -> npt.NDArray[np.float64]:
        """Copy of the raw buffer, shape (width * height, 3)."""
        return self._data.copy()

    def to_image(self) -> npt.NDArray[np.float32]:
        """Linear radiance as an image array of shape (height, width, 3).

        The top row of the returned array is the top of the view. Values
        are not clamped.
        """
        image = self._data.reshape(self.height, self.width, 3)
        return np.ascontiguousarray(np.flipud(image), dtype=np.float32)

    def __repr__(self) -> str:
        return f"Output(width={self.width}, height={self.height})"
