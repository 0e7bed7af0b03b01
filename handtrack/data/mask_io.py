"""
Mask Loading Utilities

Loads binary hand masks from numpy files and images, and converts them to
the flat layout expected by the tracker.

Usage:
    from handtrack.data.mask_io import load_mask_sequence, mask_to_flat

    for mask in load_mask_sequence("recordings/session1"):
        hand = tracker.parse_bin_array(mask_to_flat(mask), 0, 0, 320, 240)
"""

import cv2
import numpy as np
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..shape.mask_builder import BoundingBox


IMAGE_EXTENSIONS = {'.png', '.bmp', '.jpg', '.jpeg', '.tif', '.tiff', '.pgm'}


def load_mask(
    path: Union[str, Path],
    width: int = 640,
    height: int = 480
) -> np.ndarray:
    """
    Load a single binary mask.

    ``.npy`` files may hold a (height, width) array or a flat array of
    width*height values. Images are read as grayscale; any non-zero pixel
    is foreground.

    Returns:
        Boolean array of shape (height, width)
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Mask file not found: {path}")

    if path.suffix == '.npy':
        data = np.load(path)
        if data.ndim == 1:
            if data.size != width * height:
                raise ValueError(f"Flat mask {path} has {data.size} values, expected {width * height}")
            data = data.reshape(height, width)
    else:
        data = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        if data is None:
            raise ValueError(f"Could not read mask image: {path}")

    if data.shape != (height, width):
        raise ValueError(f"Mask {path} has shape {data.shape}, expected {(height, width)}")

    return data > 0


def load_mask_sequence(
    path: Union[str, Path],
    width: int = 640,
    height: int = 480
) -> Iterator[np.ndarray]:
    """
    Iterate over the masks of a recording.

    Args:
        path: Directory of mask files (sorted by name) or a ``.npy`` stack
            of shape (T, height, width)

    Yields:
        Boolean arrays of shape (height, width)
    """
    path = Path(path)

    if path.is_dir():
        for file_path in list_mask_files(path):
            yield load_mask(file_path, width, height)
        return

    if path.suffix == '.npy' and path.exists():
        data = np.load(path)
        if data.ndim == 3:
            if data.shape[1:] != (height, width):
                raise ValueError(f"Mask stack {path} has frame shape {data.shape[1:]}")
            for frame in data:
                yield frame > 0
            return

    yield load_mask(path, width, height)


def list_mask_files(directory: Union[str, Path]) -> List[Path]:
    directory = Path(directory)
    return sorted(
        p for p in directory.iterdir()
        if p.suffix.lower() in IMAGE_EXTENSIONS or p.suffix == '.npy'
    )


def mask_to_flat(mask: np.ndarray) -> np.ndarray:
    """Row-major flat view of a (height, width) mask."""
    return np.ascontiguousarray(mask, dtype=bool).reshape(-1)


def bounding_box_from_mask(mask: np.ndarray, sensor_scale: int = 2) -> Optional[BoundingBox]:
    """
    Tight bounding box around the foreground, in sensor units.

    The box is widened to whole sensor units so that, once scaled back,
    it covers every foreground pixel.

    Returns:
        BoundingBox, or None if the mask is empty
    """
    ys, xs = np.nonzero(mask)
    if xs.size == 0:
        return None

    height, width = mask.shape
    max_x = min(int(np.ceil((xs.max() + 1) / sensor_scale)), width // sensor_scale)
    max_y = min(int(np.ceil((ys.max() + 1) / sensor_scale)), height // sensor_scale)

    return BoundingBox(
        min_x=int(xs.min()) // sensor_scale,
        min_y=int(ys.min()) // sensor_scale,
        max_x=max_x,
        max_y=max_y
    )
