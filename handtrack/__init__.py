"""
Hand Shape Tracking Package

Extracts the palm center and fingertip positions from binary depth-sensor
hand masks.
"""

__version__ = "1.0.0"

from . import shape
from . import data
from . import utils
from .tracker import FingerTracker

__all__ = ["FingerTracker", "shape", "data", "utils"]
