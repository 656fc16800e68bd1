"""
Rule and simulation core for grid bridge-building puzzles.
"""

from .config import Config, get_config, set_config
from .core import (
    BridgePuzzle, Island, Bridge, BridgeType, BridgeTypeSpec, BridgeInventory,
    PuzzleValidator, ValidationResult
)
from .constraints import create_constraints_from_spec
from .flow import FlowPuzzle, ConnectivityManager
from .overworld import RiverChannelExtractor, WaterPropagationEngine

__version__ = "0.1.0"

__all__ = [
    'Config', 'get_config', 'set_config',
    'BridgePuzzle', 'Island', 'Bridge', 'BridgeType', 'BridgeTypeSpec', 'BridgeInventory',
    'PuzzleValidator', 'ValidationResult',
    'create_constraints_from_spec',
    'FlowPuzzle', 'ConnectivityManager',
    'RiverChannelExtractor', 'WaterPropagationEngine',
]
