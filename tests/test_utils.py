"""Tests for configuration and mask loading utilities."""

import pytest
import numpy as np
import cv2
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from handtrack.utils.config import (
    TrackingConfig, load_config, save_config, merge_configs, parse_overrides, apply_overrides
)
from handtrack.data.mask_io import (
    load_mask, load_mask_sequence, list_mask_files, mask_to_flat, bounding_box_from_mask
)
from handtrack.shape.mask_builder import MaskBuilder, BoundingBox


WIDTH, HEIGHT = 640, 480


def sample_mask():
    mask = np.zeros((HEIGHT, WIDTH), dtype=bool)
    mask[100:150, 200:260] = True
    return mask


class TestConfig:
    """Tests for tracking configuration."""

    def test_defaults(self):
        config = TrackingConfig()
        assert config.frame.width == 640
        assert config.frame.height == 480
        assert config.frame.sensor_scale == 2
        assert config.palm.inside_stride == 5
        assert config.palm.min_contour_distance == 25.0
        assert config.fingertip.k == 30
        assert config.fingertip.max_angle_deg == 40.0
        assert config.fingertip.jump_fraction == 0.10

    def test_from_dict_partial(self):
        """Test that missing keys fall back to defaults."""
        config = TrackingConfig.from_dict({
            'palm': {'min_contour_distance': 10.0},
            'fingertip': {'k': 20}
        })

        assert config.palm.min_contour_distance == 10.0
        assert config.palm.inside_stride == 5
        assert config.fingertip.k == 20
        assert config.fingertip.max_angle_deg == 40.0

    def test_from_empty_dict(self):
        assert TrackingConfig.from_dict(None).fingertip.k == 30

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_save_and_load(self, tmp_path):
        config = TrackingConfig()
        config.fingertip.max_angle_deg = 35.0
        path = tmp_path / "config.yaml"

        save_config(config, str(path))
        loaded = load_config(str(path))

        assert loaded.fingertip.max_angle_deg == 35.0
        assert loaded.to_dict() == config.to_dict()

    def test_default_yaml(self):
        path = Path(__file__).parent.parent / "configs" / "default.yaml"
        config = load_config(str(path))
        assert config.to_dict() == TrackingConfig().to_dict()

    def test_merge_configs(self):
        base = {'palm': {'inside_stride': 5, 'min_contour_distance': 25.0}, 'frame': {'width': 640}}
        override = {'palm': {'min_contour_distance': 12.0}}

        merged = merge_configs(base, override)

        assert merged['palm'] == {'inside_stride': 5, 'min_contour_distance': 12.0}
        assert merged['frame'] == {'width': 640}

    def test_parse_overrides(self):
        overrides = parse_overrides([
            "palm.min_contour_distance=12.5",
            "fingertip.k=20",
            "project.name=demo"
        ])

        assert overrides == {
            'palm': {'min_contour_distance': 12.5},
            'fingertip': {'k': 20},
            'project': {'name': 'demo'}
        }

    def test_parse_overrides_invalid(self):
        with pytest.raises(ValueError):
            parse_overrides(["palm.min_contour_distance"])

    def test_apply_overrides(self):
        """Test that overrides change only the named values."""
        config = apply_overrides(TrackingConfig(), ["palm.min_contour_distance=5"])

        assert config.palm.min_contour_distance == 5
        assert config.palm.inside_stride == 5
        assert config.fingertip.k == 30
        assert config.frame.width == 640


class TestMaskIO:
    """Tests for mask loading helpers."""

    def test_mask_to_flat(self):
        """Test that flattening matches the tracker's index mapping."""
        mask = np.zeros((HEIGHT, WIDTH), dtype=bool)
        mask[17, 33] = True

        flat = mask_to_flat(mask)

        assert flat.shape == (WIDTH * HEIGHT,)
        assert flat[MaskBuilder.point_to_index(33, 17)]
        assert flat.sum() == 1

    def test_load_npy(self, tmp_path):
        path = tmp_path / "mask.npy"
        np.save(path, sample_mask().astype(np.uint8))

        mask = load_mask(path)

        assert mask.dtype == bool
        assert np.array_equal(mask, sample_mask())

    def test_load_flat_npy(self, tmp_path):
        path = tmp_path / "flat.npy"
        np.save(path, sample_mask().reshape(-1))

        assert np.array_equal(load_mask(path), sample_mask())

    def test_load_image(self, tmp_path):
        path = tmp_path / "mask.png"
        cv2.imwrite(str(path), sample_mask().astype(np.uint8) * 255)

        assert np.array_equal(load_mask(path), sample_mask())

    def test_load_wrong_shape(self, tmp_path):
        path = tmp_path / "small.npy"
        np.save(path, np.zeros((10, 10), dtype=bool))

        with pytest.raises(ValueError):
            load_mask(path)

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_mask(tmp_path / "missing.png")

    def test_sequence_from_stack(self, tmp_path):
        path = tmp_path / "stack.npy"
        stack = np.stack([sample_mask(), np.zeros((HEIGHT, WIDTH), dtype=bool)])
        np.save(path, stack)

        masks = list(load_mask_sequence(path))

        assert len(masks) == 2
        assert np.array_equal(masks[0], sample_mask())
        assert not masks[1].any()

    def test_sequence_from_directory(self, tmp_path):
        """Test that directory frames are read in name order."""
        np.save(tmp_path / "frame_001.npy", np.zeros((HEIGHT, WIDTH), dtype=bool))
        cv2.imwrite(str(tmp_path / "frame_000.png"), sample_mask().astype(np.uint8) * 255)
        (tmp_path / "notes.txt").write_text("ignored")

        files = list_mask_files(tmp_path)
        masks = list(load_mask_sequence(tmp_path))

        assert [f.name for f in files] == ["frame_000.png", "frame_001.npy"]
        assert np.array_equal(masks[0], sample_mask())
        assert not masks[1].any()

    def test_bounding_box_from_mask(self):
        box = bounding_box_from_mask(sample_mask())

        assert box == BoundingBox(100, 50, 130, 75)
        x0, y0, x1, y1 = box.scaled(2)
        assert x0 <= 200 and x1 >= 260
        assert y0 <= 100 and y1 >= 150

    def test_bounding_box_odd_extent(self):
        mask = np.zeros((HEIGHT, WIDTH), dtype=bool)
        mask[101:104, 201:204] = True

        x0, y0, x1, y1 = bounding_box_from_mask(mask).scaled(2)

        assert (x0, y0) == (200, 100)
        assert (x1, y1) == (204, 104)

    def test_bounding_box_empty(self):
        assert bounding_box_from_mask(np.zeros((HEIGHT, WIDTH), dtype=bool)) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
