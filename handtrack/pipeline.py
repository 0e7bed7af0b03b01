"""
Hand Tracking Pipeline

Batch entry point: runs the finger tracker over a recorded sequence of
hand masks and writes the landmarks of every frame as JSON.

Usage:
    python -m handtrack.pipeline --input masks/ --output landmarks.json
    python -m handtrack.pipeline --input masks.npy --bbox 60 40 220 200
    python -m handtrack.pipeline --input masks/ --set fingertip.max_angle_deg=35
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np
from tqdm import tqdm

from .data.mask_io import load_mask_sequence, mask_to_flat, bounding_box_from_mask
from .shape.hand_model import HandModel
from .shape.mask_builder import BoundingBox
from .tracker import FingerTracker
from .utils.config import load_config, apply_overrides, TrackingConfig
from .utils.logging_utils import setup_logging, get_logger

logger = get_logger(__name__)


class HandTrackingPipeline:
    """Runs the finger tracker frame by frame over a mask sequence."""

    def __init__(self, config: Optional[TrackingConfig] = None):
        self.config = config or TrackingConfig()
        self.tracker = FingerTracker(self.config)

        logger.info("Pipeline initialized")

    def process_frame(
        self,
        mask: np.ndarray,
        bbox: Optional[BoundingBox] = None
    ) -> Dict:
        """
        Track a single (height, width) mask.

        Without an explicit bounding box, the tight box around the
        foreground is used. Empty masks yield an empty result.
        """
        if bbox is None:
            bbox = bounding_box_from_mask(mask, self.config.frame.sensor_scale)
            if bbox is None:
                return HandModel().to_dict()

        hand = self.tracker.process(mask_to_flat(mask), bbox)
        return hand.to_dict()

    def process_sequence(
        self,
        masks: Iterable[np.ndarray],
        bbox: Optional[BoundingBox] = None,
        show_progress: bool = True
    ) -> List[Dict]:
        """
        Track every mask in a sequence.

        Args:
            masks: Iterable of (height, width) boolean masks
            bbox: Fixed bounding box for all frames (per-frame tight box if None)
            show_progress: Display a tqdm progress bar

        Returns:
            One landmark dict per frame, with its frame index
        """
        results = []

        for frame_idx, mask in enumerate(tqdm(masks, desc="Tracking", disable=not show_progress)):
            result = self.process_frame(mask, bbox)
            result['frame_idx'] = frame_idx
            results.append(result)

        with_palm = sum(1 for r in results if r['palm'] is not None)
        logger.info(f"Processed {len(results)} frames, palm found in {with_palm}")

        return results

def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Hand palm and fingertip tracking from binary masks"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Configuration file (built-in defaults if omitted)"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Mask directory, .npy stack or single mask file"
    )
    parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("MIN_X", "MIN_Y", "MAX_X", "MAX_Y"),
        help="Fixed bounding box in sensor units"
    )
    parser.add_argument(
        "--output",
        type=str,
        default="./outputs/landmarks.json",
        help="Output JSON file"
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="SECTION.KEY=VALUE",
        help="Override a config value, e.g. palm.min_contour_distance=12 (repeatable)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, use_tqdm=True)

    config = load_config(args.config) if args.config else TrackingConfig()
    if args.overrides:
        config = apply_overrides(config, args.overrides)
    logger.info(f"Config: {args.config or 'defaults'}")

    bbox = BoundingBox(*args.bbox) if args.bbox else None

    pipeline = HandTrackingPipeline(config)
    masks = load_mask_sequence(args.input, config.frame.width, config.frame.height)
    results = pipeline.process_sequence(masks, bbox=bbox)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f)

    logger.info(f"Wrote {len(results)} frames to {output_path}")


if __name__ == "__main__":
    main()
