"""
Per-tile traversability derived from water, bridges and terrain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from ..core.bridge import Bridge
from .flow_types import FlowTile


class ConnectivityState(Enum):
    """Traversability classes (transition is reserved for callers)"""
    BLOCKED = "blocked"
    PASSABLE_HIGH = "passableHigh"
    PASSABLE_LOW = "passableLow"
    TRANSITION = "transition"

    @property
    def code(self) -> int:
        return _STATE_CODES[self]


_STATE_CODES = {
    ConnectivityState.BLOCKED: 0,
    ConnectivityState.PASSABLE_LOW: 1,
    ConnectivityState.PASSABLE_HIGH: 2,
    ConnectivityState.TRANSITION: 3,
}


@dataclass(frozen=True)
class ConnectivityTile:
    x: int
    y: int
    state: ConnectivityState
    meta: Dict[str, Any] = field(default_factory=dict)


WaterQuery = Callable[[int, int], bool]
TerrainQuery = Callable[[int, int], Optional[FlowTile]]


class ConnectivityManager:
    """Stateless classifier; every call recomputes from the inputs"""

    @staticmethod
    def bridge_covered_tiles(bridges: Iterable[Bridge]) -> Set[Tuple[int, int]]:
        covered: Set[Tuple[int, int]] = set()
        for bridge in bridges:
            if bridge.is_placed:
                covered.update(tuple(p) for p in bridge.covered_tiles())
        return covered

    @staticmethod
    def classify(has_water: bool, covered: bool, terrain: Optional[FlowTile]) -> ConnectivityState:
        """Priority: obstacle, bridge deck, pontoon, open water, rocky ground, plain ground"""
        if terrain is not None and terrain.obstacle:
            return ConnectivityState.BLOCKED
        if covered:
            return ConnectivityState.PASSABLE_HIGH
        if terrain is not None and terrain.pontoon:
            return ConnectivityState.PASSABLE_HIGH if has_water else ConnectivityState.PASSABLE_LOW
        if has_water:
            return ConnectivityState.BLOCKED
        if terrain is not None and terrain.rocky:
            return ConnectivityState.BLOCKED
        return ConnectivityState.PASSABLE_LOW

    @classmethod
    def compute_baked_connectivity(cls, width: int, height: int, has_water: WaterQuery,
                                   bridges: Iterable[Bridge],
                                   terrain: Optional[TerrainQuery] = None) -> List[ConnectivityTile]:
        """
        Classify every tile of a width x height grid.

        Args:
            width: Grid width
            height: Grid height
            has_water: Water presence query
            bridges: Bridges to consider; unplaced ones are ignored
            terrain: Optional per-tile flow metadata query

        Returns:
            Tiles in row-major order
        """
        covered = cls.bridge_covered_tiles(bridges)
        tiles: List[ConnectivityTile] = []
        for y in range(height):
            for x in range(width):
                flow_tile = terrain(x, y) if terrain is not None else None
                water = bool(has_water(x, y))
                is_covered = (x, y) in covered
                meta = {
                    'hasWater': water,
                    'bridgeCovered': is_covered,
                    'pontoon': bool(flow_tile and flow_tile.pontoon),
                    'rocky': bool(flow_tile and flow_tile.rocky),
                    'obstacle': bool(flow_tile and flow_tile.obstacle),
                }
                tiles.append(ConnectivityTile(x, y, cls.classify(water, is_covered, flow_tile), meta))
        return tiles

    @staticmethod
    def to_grid(tiles: Iterable[ConnectivityTile], width: int, height: int) -> np.ndarray:
        """State codes as a (height, width) integer array"""
        grid = np.zeros((height, width), dtype=int)
        for tile in tiles:
            if 0 <= tile.x < width and 0 <= tile.y < height:
                grid[tile.y, tile.x] = tile.state.code
        return grid
