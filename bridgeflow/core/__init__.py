# bridgeflow/core/__init__.py
"""
Core data structures and utilities for bridge puzzles.
"""

from .geometry import GridPoint, Direction, to_point, to_direction
from .island import Island
from .bridge import Bridge, BridgeType, BridgeTypeSpec
from .inventory import BridgeInventory
from .utils import setup_logger, timer, calculate_bridge_stats
from .puzzle import BridgePuzzle
from .validator import PuzzleValidator, ValidationResult, ConstraintOutcome

__all__ = [
    # Geometry
    'GridPoint', 'Direction', 'to_point', 'to_direction',

    # Data structures
    'Island', 'Bridge', 'BridgeType', 'BridgeTypeSpec', 'BridgeInventory',
    'BridgePuzzle',

    # Validation
    'PuzzleValidator', 'ValidationResult', 'ConstraintOutcome',

    # Utilities
    'setup_logger', 'timer', 'calculate_bridge_stats',
]
