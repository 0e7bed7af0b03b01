"""
Contour Tracing

Extracts the hand outline from the boundary candidates with a
wall-follower (square tracing) walk and keeps the longest closed loop.

Shorter loops come from noise, stray blobs or holes in the silhouette
and are discarded.

Usage:
    from handtrack.shape.contour_tracer import ContourTracer

    tracer = ContourTracer()
    contour = tracer.trace(
        occupancy, classification.contour_matrix, classification.candidates
    )
"""

import numpy as np
from typing import List, Sequence

from .hand_model import Point
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class ContourTracer:
    """
    Wall-follower contour extraction.

    Directions 0..3 step +X, +Y, -X, -Y. On an occupied cell the walker
    turns one quarter clockwise; on an empty cell it turns one quarter
    counter-clockwise. Only cells flagged in the contour matrix are
    recorded, so the cut across a concave corner or a walk along the frame
    edge never puts interior pixels into the loop. The loop closes when the walker
    is back on its start cell.
    """

    STEPS = ((1, 0), (0, 1), (-1, 0), (0, -1))

    def trace(
        self,
        occupancy: np.ndarray,
        contour_matrix: np.ndarray,
        candidates: Sequence[Point]
    ) -> List[Point]:
        """
        Trace every loop reachable from the candidates and return the longest.

        Loops start from the first candidate (in the given order) not yet
        visited. The choice of start pixel is arbitrary and carries no meaning
        beyond fixing where the cyclic contour sequence begins.

        Args:
            occupancy: Boolean (H, W) occupancy matrix
            contour_matrix: Boolean (H, W) matrix of boundary pixels
            candidates: Boundary candidate pixels

        Returns:
            Longest loop found; empty if there are no candidates
        """
        visited = np.zeros(occupancy.shape, dtype=bool)
        longest: List[Point] = []
        num_loops = 0

        for start in candidates:
            if visited[start.y, start.x]:
                continue

            loop = self.trace_loop(occupancy, contour_matrix, start, visited)
            num_loops += 1

            if len(loop) > len(longest):
                longest = loop

        logger.debug(f"Traced {num_loops} loops, longest has {len(longest)} points")

        return longest

    def trace_loop(
        self,
        occupancy: np.ndarray,
        contour_matrix: np.ndarray,
        start: Point,
        visited: np.ndarray
    ) -> List[Point]:
        """
        Walk a single closed loop from a boundary start pixel.

        Occupancy drives the turns. Every recorded pixel is a boundary pixel
        and is marked in ``visited``.
        """
        height, width = occupancy.shape
        loop: List[Point] = []
        last = None
        x, y = start
        direction = 0

        while True:
            if 0 <= x < width and 0 <= y < height and occupancy[y, x]:
                direction = (direction + 1) % 4
                current = Point(x, y)
                if current != last and contour_matrix[y, x]:
                    loop.append(current)
                    visited[y, x] = True
                    last = current
            else:
                direction = (direction + 3) % 4

            dx, dy = self.STEPS[direction]
            x += dx
            y += dy

            if x == start.x and y == start.y:
                break

        return loop
