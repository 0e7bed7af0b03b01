"""
Palm Localization

Approximates the palm as the center of the largest circle inscribed in
the hand silhouette.

For a sample of interior points, the distance to a sample of contour
points is measured. A candidate is rejected outright when any contour
sample lies closer than ``min_contour_distance`` (centers near a concavity
between fingers). Otherwise its radius is the smallest contour distance
for which an axis-aligned inscribed-circle check holds, and the candidate
with the largest radius wins.

Usage:
    from handtrack.shape.palm_locator import PalmLocator

    locator = PalmLocator()
    estimate = locator.locate(occupancy, inside_points, contour_points)
    if estimate is not None:
        print(estimate.center, estimate.radius)
"""

import numpy as np
from typing import Optional, Sequence
from dataclasses import dataclass

from .hand_model import Point
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class PalmEstimate:
    """Palm center and inscribed circle radius."""
    center: Point
    radius: float


class PalmLocator:
    """Largest inscribed circle search over interior points."""

    def __init__(
        self,
        inside_stride: int = 5,
        contour_stride_fraction: float = 0.05,
        min_contour_distance: float = 25.0
    ):
        """
        Args:
            inside_stride: Step between sampled interior points
            contour_stride_fraction: Contour sampling step as a fraction of
                the contour length
            min_contour_distance: Candidates with any contour sample closer
                than this are rejected
        """
        self.inside_stride = inside_stride
        self.contour_stride_fraction = contour_stride_fraction
        self.min_contour_distance = min_contour_distance

    def contour_stride(self, num_contour_points: int) -> int:
        return int(self.contour_stride_fraction * num_contour_points) + 1

    def locate(
        self,
        occupancy: np.ndarray,
        inside_points: Sequence[Point],
        contour_points: Sequence[Point]
    ) -> Optional[PalmEstimate]:
        """
        Find the palm.

        Args:
            occupancy: Boolean (H, W) occupancy matrix
            inside_points: Interior pixels
            contour_points: Ordered contour loop

        Returns:
            PalmEstimate, or None if no interior point qualifies
        """
        if not inside_points or not contour_points:
            return None

        stride = self.contour_stride(len(contour_points))
        samples = np.array(contour_points[::stride], dtype=np.float64)

        best: Optional[PalmEstimate] = None

        for j in range(0, len(inside_points), self.inside_stride):
            candidate = inside_points[j]
            radius = self.inscribed_radius(occupancy, candidate, samples)

            if radius is None:
                continue

            if best is None or radius > best.radius:
                best = PalmEstimate(center=candidate, radius=radius)

        if best is None:
            logger.debug("No palm candidate passed the inscribed circle test")
        else:
            logger.debug(f"Palm at {tuple(best.center)} with radius {best.radius:.1f}")

        return best

    def inscribed_radius(
        self,
        occupancy: np.ndarray,
        center: Point,
        samples: np.ndarray
    ) -> Optional[float]:
        """
        Smallest contour distance from ``center`` that passes the circle check.

        Args:
            occupancy: Boolean (H, W) occupancy matrix
            center: Candidate palm center
            samples: (N, 2) array of sampled contour (x, y) coordinates

        Returns:
            Radius, or None when the candidate is rejected or no distance passes
        """
        distances = np.hypot(samples[:, 0] - center.x, samples[:, 1] - center.y)

        if np.any(distances < self.min_contour_distance):
            return None

        distances = distances[distances > 0]
        if distances.size == 0:
            return None

        inside = self.circles_inside(occupancy, center, distances)
        if not np.any(inside):
            return None

        return float(distances[inside].min())

    @staticmethod
    def circles_inside(
        occupancy: np.ndarray,
        center: Point,
        radii: np.ndarray
    ) -> np.ndarray:
        """
        Axis-aligned inscribed-circle check for several radii at once.

        A circle passes when its left, right, top and bottom points are
        inside the frame and occupied. Coordinates are truncated to pixels.

        Returns:
            Boolean array, one entry per radius
        """
        height, width = occupancy.shape
        x, y = center

        left = x - radii
        right = x + radii
        top = y - radii
        bottom = y + radii

        in_bounds = (left >= 0) & (right < width) & (top >= 0) & (bottom < height)

        # Out-of-bounds entries are masked by in_bounds; clip only to index safely
        lx = np.clip(left, 0, width - 1).astype(np.int64)
        rx = np.clip(right, 0, width - 1).astype(np.int64)
        ty = np.clip(top, 0, height - 1).astype(np.int64)
        by = np.clip(bottom, 0, height - 1).astype(np.int64)

        return (
            in_bounds
            & occupancy[y, lx]
            & occupancy[y, rx]
            & occupancy[ty, x]
            & occupancy[by, x]
        )
