"""
Boundary Classification

Splits the occupied pixels of a hand mask into interior points and
boundary candidates using 4-neighbor occupancy.

A pixel is interior when every neighbor that exists inside the frame is
occupied. Pixels on the frame edge simply have fewer neighbors; a missing
neighbor does not make a pixel a boundary pixel.
"""

import numpy as np
from scipy.ndimage import correlate
from typing import List
from dataclasses import dataclass, field

from .hand_model import Point
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


# 4-connected neighborhood
NEIGHBOR_KERNEL = np.array([
    [0, 1, 0],
    [1, 0, 1],
    [0, 1, 0]
], dtype=np.int32)


@dataclass
class BoundaryClassification:
    """Result of classifying an occupancy matrix."""
    contour_matrix: np.ndarray  # (H, W) bool, True for boundary pixels
    inside_points: List[Point] = field(default_factory=list)
    candidates: List[Point] = field(default_factory=list)


def _points_in_scan_order(mask: np.ndarray) -> List[Point]:
    """True pixels of a [y, x] mask, ordered x-major then y."""
    return [Point(int(x), int(y)) for x, y in np.argwhere(mask.T)]


class BoundaryClassifier:
    """Classifies occupied pixels as interior or boundary."""

    def classify(self, occupancy: np.ndarray) -> BoundaryClassification:
        """
        Args:
            occupancy: Boolean (H, W) occupancy matrix

        Returns:
            BoundaryClassification with the contour matrix, interior points
            and boundary candidates (both in scan order)
        """
        occupied = occupancy.astype(np.int32)

        occupied_neighbors = correlate(occupied, NEIGHBOR_KERNEL, mode='constant', cval=0)
        existing_neighbors = correlate(
            np.ones_like(occupied), NEIGHBOR_KERNEL, mode='constant', cval=0
        )

        contour_matrix = occupancy & (occupied_neighbors < existing_neighbors)
        interior = occupancy & ~contour_matrix

        result = BoundaryClassification(
            contour_matrix=contour_matrix,
            inside_points=_points_in_scan_order(interior),
            candidates=_points_in_scan_order(contour_matrix)
        )

        logger.debug(
            f"Classified {len(result.inside_points)} interior and "
            f"{len(result.candidates)} boundary pixels"
        )

        return result
