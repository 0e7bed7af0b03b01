"""
Fingertip Detection

K-curvature fingertip search along the ordered hand contour.

For each contour point p2, the points p1 and p3 lying ``k`` steps before
and after it are taken (cyclically). p2 is a fingertip when the angle
p1-p2-p3 is sharp, p2 is above the palm, and p2 is not closer to the palm
than both p1 and p3 (which would make it a valley between fingers).

Usage:
    from handtrack.shape.fingertip_detector import FingertipDetector

    detector = FingertipDetector(k=30, max_angle_deg=40.0)
    fingers = detector.detect(contour_points, palm)
"""

import numpy as np
from typing import List, Optional, Sequence

from .hand_model import Point, distance_squared
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def k_curvature_angle(p1: Point, p2: Point, p3: Point) -> Optional[float]:
    """
    Angle in radians at p2 between (p1 - p2) and (p3 - p2).

    Returns None if either vector has zero length.
    """
    v1 = p1 - p2
    v2 = p3 - p2

    norm = np.linalg.norm(v1) * np.linalg.norm(v2)
    if norm == 0:
        return None

    cos_angle = np.clip(np.dot(v1, v2) / norm, -1.0, 1.0)
    return float(np.arccos(cos_angle))


class FingertipDetector:
    """Detects fingertips as sharp convex peaks of the contour."""

    def __init__(
        self,
        k: int = 30,
        max_angle_deg: float = 40.0,
        jump_fraction: float = 0.10
    ):
        """
        Args:
            k: Number of contour steps between the three sample points
            max_angle_deg: Peaks sharper than this angle are candidates
            jump_fraction: After a fingertip, skip this fraction of the
                contour so the same finger is not reported twice
        """
        self.k = k
        self.max_angle = np.deg2rad(max_angle_deg)
        self.jump_fraction = jump_fraction

    def detect(
        self,
        contour_points: Sequence[Point],
        palm: Optional[Point]
    ) -> List[Point]:
        """
        Scan the contour for fingertips.

        Args:
            contour_points: Ordered, cyclic contour loop
            palm: Palm center; without a palm nothing is reported

        Returns:
            Fingertips in contour order
        """
        num_points = len(contour_points)

        if palm is None or num_points < self.k:
            return []

        jump = int(self.jump_fraction * num_points)
        fingers: List[Point] = []

        i = 0
        while i < num_points:
            p1 = contour_points[(i - self.k) % num_points]
            p2 = contour_points[i]
            p3 = contour_points[(i + self.k) % num_points]

            if self.is_fingertip(p1, p2, p3, palm):
                fingers.append(p2)
                i += jump

            i += 1

        logger.debug(f"Detected {len(fingers)} fingertips on {num_points} contour points")

        return fingers

    def is_fingertip(self, p1: Point, p2: Point, p3: Point, palm: Point) -> bool:
        angle = k_curvature_angle(p1, p2, p3)
        if angle is None or not (0 < angle < self.max_angle):
            return False

        # Image y grows downwards: fingertips lie above the palm
        if p2.y >= palm.y:
            return False

        # Curvature peak nested inwards (valley between fingers)
        d2 = distance_squared(p2, palm)
        if d2 < distance_squared(p1, palm) and d2 < distance_squared(p3, palm):
            return False

        return True
