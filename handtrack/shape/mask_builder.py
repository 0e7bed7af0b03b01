"""
Mask Builder

Converts the flat binary foreground array delivered by the depth sensor
into a 2-D occupancy matrix restricted to the hand bounding box.

The sensor reports the bounding box at half the mask's linear resolution,
so box coordinates are scaled by ``sensor_scale`` before use.

Usage:
    from handtrack.shape.mask_builder import MaskBuilder, BoundingBox

    builder = MaskBuilder()
    occupancy = builder.build(binary_array, BoundingBox(40, 30, 200, 180))
"""

import numpy as np
from typing import Tuple, Union, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Region of interest in sensor coordinate units."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def scaled(self, scale: int = 2) -> Tuple[int, int, int, int]:
        """
        Half-open pixel range (x0, y0, x1, y1) in mask coordinates.

        Each scalar is truncated to an integer before scaling.
        """
        return (
            int(self.min_x) * scale,
            int(self.min_y) * scale,
            int(self.max_x) * scale,
            int(self.max_y) * scale
        )


class MaskBuilder:
    """Builds a (height, width) occupancy matrix from a flat binary array."""

    def __init__(self, width: int = 640, height: int = 480, sensor_scale: int = 2):
        """
        Args:
            width: Mask width in pixels
            height: Mask height in pixels
            sensor_scale: Factor mapping sensor units to mask pixels
        """
        self.width = width
        self.height = height
        self.sensor_scale = sensor_scale

    @staticmethod
    def point_to_index(x: int, y: int, width: int = 640) -> int:
        """Row-major index of pixel (x, y) in the flat array."""
        return y * width + x

    def pixel_range(self, bbox: BoundingBox) -> Tuple[int, int, int, int]:
        """
        Scaled pixel range for a bounding box.

        Raises:
            ValueError: If the scaled box falls outside the frame
        """
        x0, y0, x1, y1 = bbox.scaled(self.sensor_scale)

        if x0 < 0 or y0 < 0 or x1 > self.width or y1 > self.height:
            raise ValueError(
                f"Bounding box {bbox} scales to ({x0}, {y0}, {x1}, {y1}), "
                f"outside the {self.width}x{self.height} frame"
            )

        return x0, y0, x1, y1

    def build(
        self,
        binary_array: Union[np.ndarray, Sequence[bool]],
        bbox: BoundingBox
    ) -> np.ndarray:
        """
        Populate the occupancy matrix inside the scaled bounding box.

        Args:
            binary_array: Flat array of width*height booleans (a 2-D
                (height, width) array is flattened row-major)
            bbox: Bounding box in sensor units

        Returns:
            Boolean array of shape (height, width), indexed [y, x]
        """
        flat = np.asarray(binary_array).reshape(-1)

        if flat.size != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} mask values, got {flat.size}"
            )

        x0, y0, x1, y1 = self.pixel_range(bbox)

        occupancy = np.zeros((self.height, self.width), dtype=bool)
        frame = flat.reshape(self.height, self.width).astype(bool)
        occupancy[y0:y1, x0:x1] = frame[y0:y1, x0:x1]

        return occupancy
