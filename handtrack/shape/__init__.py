"""Hand shape analysis: mask, boundary, contour, palm and fingertips."""

from .hand_model import HandModel, Point
from .mask_builder import MaskBuilder, BoundingBox
from .boundary import BoundaryClassifier, BoundaryClassification
from .contour_tracer import ContourTracer
from .palm_locator import PalmLocator, PalmEstimate
from .fingertip_detector import FingertipDetector

__all__ = [
    "HandModel",
    "Point",
    "MaskBuilder",
    "BoundingBox",
    "BoundaryClassifier",
    "BoundaryClassification",
    "ContourTracer",
    "PalmLocator",
    "PalmEstimate",
    "FingertipDetector",
]
