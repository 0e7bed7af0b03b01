"""
Hand Model

Per-frame landmark container produced by the finger tracker.

Usage:
    from handtrack.shape.hand_model import HandModel, Point

    hand = tracker.parse_bin_array(mask, 0, 0, 320, 240)
    if hand.has_palm:
        print(hand.palm, len(hand.fingers))
"""

import numpy as np
from typing import List, NamedTuple, Optional, Dict, Any
from dataclasses import dataclass, field


class Point(NamedTuple):
    """Integer pixel coordinate in the 640x480 mask space."""
    x: int
    y: int

    def __sub__(self, other: 'Point') -> np.ndarray:
        return np.array([self.x - other.x, self.y - other.y], dtype=np.float64)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p1.x - p2.x, p1.y - p2.y))


def distance_squared(p1: Point, p2: Point) -> float:
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return float(dx * dx + dy * dy)


@dataclass
class HandModel:
    """
    Landmarks extracted from a single hand mask.

    Attributes:
        inside_points: Interior pixels in scan order
        contour_points: Closed boundary loop, cyclic and ordered
        palm: Palm center, None when no palm was found
        palm_radius: Radius of the inscribed palm circle (0.0 without palm)
        fingers: Fingertips in contour traversal order
        contour_matrix: Boolean (height, width) array of boundary pixels
    """
    inside_points: List[Point] = field(default_factory=list)
    contour_points: List[Point] = field(default_factory=list)
    palm: Optional[Point] = None
    palm_radius: float = 0.0
    fingers: List[Point] = field(default_factory=list)
    contour_matrix: Optional[np.ndarray] = None

    @property
    def has_palm(self) -> bool:
        return self.palm is not None

    @property
    def num_inside_points(self) -> int:
        return len(self.inside_points)

    @property
    def num_contour_points(self) -> int:
        return len(self.contour_points)

    def is_contour(self, x: int, y: int) -> bool:
        """Whether pixel (x, y) was classified as a boundary pixel."""
        if self.contour_matrix is None:
            return False
        height, width = self.contour_matrix.shape
        if not (0 <= x < width and 0 <= y < height):
            return False
        return bool(self.contour_matrix[y, x])

    def reset(self):
        """Clear all landmarks."""
        self.inside_points = []
        self.contour_points = []
        self.palm = None
        self.palm_radius = 0.0
        self.fingers = []
        self.contour_matrix = None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary (interior points are reported as a count)."""
        return {
            'num_inside_points': self.num_inside_points,
            'contour_points': [[p.x, p.y] for p in self.contour_points],
            'palm': [self.palm.x, self.palm.y] if self.palm is not None else None,
            'palm_radius': self.palm_radius,
            'fingers': [[p.x, p.y] for p in self.fingers],
        }
