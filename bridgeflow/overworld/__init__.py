"""
World map water: river channels between puzzles and propagation along them.
"""

from .river_channel import RegionBounds, EdgeTile, PuzzleRegion, RiverChannel
from .extractor import RiverChannelExtractor
from .propagation import WaterPropagationEngine, PropagationResult

__all__ = [
    'RegionBounds',
    'EdgeTile',
    'PuzzleRegion',
    'RiverChannel',
    'RiverChannelExtractor',
    'WaterPropagationEngine',
    'PropagationResult',
]
