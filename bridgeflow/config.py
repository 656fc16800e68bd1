"""
Configuration for the bridgeflow puzzle core.
"""

import logging
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml


# Geometry tolerances
LENGTH_TOLERANCE = 0.01
SPAN_TOLERANCE = 0.01

# Puzzle defaults
DEFAULT_MAX_NUM_BRIDGES = 2
DEFAULT_BRIDGE_COUNT = 1

# Overworld map defaults
FLOW_LAYER_NAME = "flowingWater"

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Config:
    """Runtime settings shared by all components"""
    length_tolerance: float = LENGTH_TOLERANCE
    span_tolerance: float = SPAN_TOLERANCE
    default_max_num_bridges: int = DEFAULT_MAX_NUM_BRIDGES
    default_bridge_count: int = DEFAULT_BRIDGE_COUNT
    flow_layer_name: str = FLOW_LAYER_NAME
    strict_constraints: bool = True
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    log_date_format: str = LOG_DATE_FORMAT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Config':
        """Create config from a mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logging.getLogger(cls.__name__).warning(
                f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> 'Config':
        """
        Load configuration from a YAML file.

        An empty file yields the defaults.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, 'r') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {filepath} must be a mapping")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_active_config = Config()


def get_config() -> Config:
    """Return the active configuration"""
    return _active_config


def set_config(config: Optional[Config]) -> Config:
    """Replace the active configuration; None restores the defaults"""
    global _active_config
    _active_config = config if config is not None else Config()
    return _active_config
