"""
Configuration Management

Handles loading, merging and saving tracking configuration files, and
command-line overrides of single values.

Usage:
    from handtrack.utils.config import load_config

    config = load_config('configs/default.yaml')
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List
from dataclasses import dataclass, field


@dataclass
class FrameConfig:
    """Mask geometry."""
    width: int = 640
    height: int = 480
    sensor_scale: int = 2  # sensor runs at half the mask's linear resolution


@dataclass
class PalmConfig:
    """Palm localization parameters."""
    inside_stride: int = 5
    contour_stride_fraction: float = 0.05
    min_contour_distance: float = 25.0


@dataclass
class FingertipConfig:
    """K-curvature fingertip parameters."""
    k: int = 30
    max_angle_deg: float = 40.0
    jump_fraction: float = 0.10


@dataclass
class TrackingConfig:
    """Main configuration container."""
    project_name: str = "handtrack"
    version: str = "1.0.0"

    frame: FrameConfig = field(default_factory=FrameConfig)
    palm: PalmConfig = field(default_factory=PalmConfig)
    fingertip: FingertipConfig = field(default_factory=FingertipConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'TrackingConfig':
        """Create TrackingConfig from dictionary."""
        config = cls()
        config_dict = config_dict or {}

        # Project info
        project = config_dict.get('project', {})
        config.project_name = project.get('name', config.project_name)
        config.version = project.get('version', config.version)

        # Frame geometry
        frame = config_dict.get('frame', {})
        config.frame = FrameConfig(
            width=frame.get('width', 640),
            height=frame.get('height', 480),
            sensor_scale=frame.get('sensor_scale', 2)
        )

        # Palm localization
        palm = config_dict.get('palm', {})
        config.palm = PalmConfig(
            inside_stride=palm.get('inside_stride', 5),
            contour_stride_fraction=palm.get('contour_stride_fraction', 0.05),
            min_contour_distance=palm.get('min_contour_distance', 25.0)
        )

        # Fingertip detection
        fingertip = config_dict.get('fingertip', {})
        config.fingertip = FingertipConfig(
            k=fingertip.get('k', 30),
            max_angle_deg=fingertip.get('max_angle_deg', 40.0),
            jump_fraction=fingertip.get('jump_fraction', 0.10)
        )

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            'project': {
                'name': self.project_name,
                'version': self.version
            },
            'frame': {
                'width': self.frame.width,
                'height': self.frame.height,
                'sensor_scale': self.frame.sensor_scale
            },
            'palm': {
                'inside_stride': self.palm.inside_stride,
                'contour_stride_fraction': self.palm.contour_stride_fraction,
                'min_contour_distance': self.palm.min_contour_distance
            },
            'fingertip': {
                'k': self.fingertip.k,
                'max_angle_deg': self.fingertip.max_angle_deg,
                'jump_fraction': self.fingertip.jump_fraction
            }
        }


def load_config(config_path: str) -> TrackingConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        TrackingConfig object
    """
    path = Path(config_path)

    # Check file exists
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Load YAML
    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    return TrackingConfig.from_dict(config_dict)


def merge_configs(base: Dict, override: Dict) -> Dict:
    """
    Merge two config dictionaries.

    Args:
        base: Base configuration
        override: Override values

    Returns:
        Merged configuration
    """
    result = base.copy()

    for key, value in override.items():
        # Recurse into sections present on both sides
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def save_config(config: TrackingConfig, path: str):
    """Save configuration to YAML file."""
    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)


def parse_overrides(items: List[str]) -> Dict:
    """
    Turn ``section.key=value`` strings into a nested config dictionary.

    Values are parsed as YAML scalars, so ``palm.min_contour_distance=12``
    yields an int and ``project.name=demo`` a string.

    Args:
        items: Override strings, e.g. from ``--set`` on the command line

    Returns:
        Nested dictionary suitable for merge_configs

    Raises:
        ValueError: If an item is not of the form key=value
    """
    overrides: Dict = {}

    for item in items:
        key, sep, raw = item.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid override (expected key=value): {item}")

        # Walk down to the parent section
        *sections, leaf = key.split('.')
        node = overrides
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = yaml.safe_load(raw)

    return overrides


def apply_overrides(config: TrackingConfig, items: List[str]) -> TrackingConfig:
    """Return a new TrackingConfig with ``section.key=value`` overrides applied."""
    merged = merge_configs(config.to_dict(), parse_overrides(items))
    return TrackingConfig.from_dict(merged)
