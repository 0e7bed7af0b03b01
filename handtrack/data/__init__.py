"""Mask loading and conversion."""

from .mask_io import (
    load_mask,
    load_mask_sequence,
    list_mask_files,
    mask_to_flat,
    bounding_box_from_mask,
)

__all__ = [
    "load_mask",
    "load_mask_sequence",
    "list_mask_files",
    "mask_to_flat",
    "bounding_box_from_mask",
]
