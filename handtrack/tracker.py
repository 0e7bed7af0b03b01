"""
Finger Tracker

Runs the hand shape pipeline on one binary mask per call:

1. Mask building - occupancy matrix inside the bounding box
2. Boundary classification - interior vs. boundary pixels
3. Contour tracing - longest closed boundary loop
4. Palm localization - largest inscribed circle
5. Fingertip detection - k-curvature peaks above the palm

Every call builds its own matrices and returns a fresh HandModel.

Usage:
    from handtrack.tracker import FingerTracker

    tracker = FingerTracker()
    hand = tracker.parse_bin_array(binary_array, min_x, min_y, max_x, max_y)
    if hand.has_palm:
        print(hand.palm, hand.fingers)
"""

import numpy as np
from typing import Optional, Sequence, Union

from .shape.hand_model import HandModel
from .shape.mask_builder import MaskBuilder, BoundingBox
from .shape.boundary import BoundaryClassifier
from .shape.contour_tracer import ContourTracer
from .shape.palm_locator import PalmLocator
from .shape.fingertip_detector import FingertipDetector
from .utils.config import TrackingConfig
from .utils.logging_utils import get_logger

logger = get_logger(__name__)


class FingerTracker:
    """Extracts palm and fingertips from binary hand masks."""

    def __init__(self, config: Optional[TrackingConfig] = None):
        """
        Args:
            config: Tracking configuration (defaults if omitted)
        """
        self.config = config or TrackingConfig()

        frame = self.config.frame
        self.mask_builder = MaskBuilder(
            width=frame.width,
            height=frame.height,
            sensor_scale=frame.sensor_scale
        )
        self.classifier = BoundaryClassifier()
        self.contour_tracer = ContourTracer()
        self.palm_locator = PalmLocator(
            inside_stride=self.config.palm.inside_stride,
            contour_stride_fraction=self.config.palm.contour_stride_fraction,
            min_contour_distance=self.config.palm.min_contour_distance
        )
        self.fingertip_detector = FingertipDetector(
            k=self.config.fingertip.k,
            max_angle_deg=self.config.fingertip.max_angle_deg,
            jump_fraction=self.config.fingertip.jump_fraction
        )

        self._last_hand = HandModel()

    def process(
        self,
        binary_array: Union[np.ndarray, Sequence[bool]],
        bbox: BoundingBox
    ) -> HandModel:
        """
        Run the full pipeline on one mask.

        Args:
            binary_array: Flat (or (height, width)) binary foreground mask
            bbox: Hand bounding box in sensor units

        Returns:
            Populated HandModel

        Raises:
            ValueError: If the mask size or bounding box do not fit the frame
        """
        occupancy = self.mask_builder.build(binary_array, bbox)
        classification = self.classifier.classify(occupancy)
        contour = self.contour_tracer.trace(
            occupancy, classification.contour_matrix, classification.candidates
        )

        hand = HandModel(
            inside_points=classification.inside_points,
            contour_points=contour,
            contour_matrix=classification.contour_matrix
        )

        estimate = self.palm_locator.locate(occupancy, hand.inside_points, contour)
        if estimate is not None:
            hand.palm = estimate.center
            hand.palm_radius = estimate.radius

        hand.fingers = self.fingertip_detector.detect(contour, hand.palm)

        logger.debug(
            f"Frame: {hand.num_contour_points} contour points, "
            f"palm={'yes' if hand.has_palm else 'no'}, {len(hand.fingers)} fingers"
        )

        self._last_hand = hand
        return hand

    def parse_bin_array(
        self,
        binary_array: Union[np.ndarray, Sequence[bool]],
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float
    ) -> HandModel:
        """Process a mask given the bounding box as four sensor-unit scalars."""
        return self.process(binary_array, BoundingBox(min_x, min_y, max_x, max_y))

    def get_hand(self) -> HandModel:
        """Hand extracted by the most recent call."""
        return self._last_hand

    def has_palm(self) -> bool:
        return self._last_hand.has_palm

    def is_contour(self, x: int, y: int) -> bool:
        return self._last_hand.is_contour(x, y)
