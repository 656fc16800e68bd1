"""
Value types describing puzzle regions on the world map and the river
channels linking them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..core.geometry import Direction, GridPoint, to_direction


@dataclass(frozen=True)
class RegionBounds:
    """World tile rectangle occupied by a puzzle"""
    tile_x: int
    tile_y: int
    width: int
    height: int

    def to_world(self, local: GridPoint) -> GridPoint:
        return GridPoint(self.tile_x + local[0], self.tile_y + local[1])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegionBounds':
        return cls(int(data['tileX']), int(data['tileY']), int(data['width']), int(data['height']))


@dataclass(frozen=True)
class EdgeTile:
    """Puzzle-local perimeter tile tagged with the edge it faces"""
    x: int
    y: int
    edge: Direction

    @property
    def position(self) -> GridPoint:
        return GridPoint(self.x, self.y)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EdgeTile':
        return cls(int(data['x']), int(data['y']), to_direction(data['edge']))


@dataclass(frozen=True)
class PuzzleRegion:
    bounds: RegionBounds
    edge_tiles: Tuple[EdgeTile, ...] = field(default_factory=tuple)

    def world_edge_tiles(self) -> List[Tuple[EdgeTile, GridPoint]]:
        return [(edge, self.bounds.to_world(edge.position)) for edge in self.edge_tiles]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PuzzleRegion':
        return cls(
            bounds=RegionBounds.from_dict(data['bounds']),
            edge_tiles=tuple(EdgeTile.from_dict(e) for e in data.get('edgeTiles') or []),
        )


@dataclass(frozen=True)
class RiverChannel:
    """
    Connected water path from one puzzle edge to another.

    Tiles are world coordinates in discovery order. A channel has exactly one
    source and one target; water running both ways is two channels.
    """
    id: str
    tiles: Tuple[GridPoint, ...]
    source_puzzle_id: str
    source_edge_tile: GridPoint
    source_world_tile: GridPoint
    target_puzzle_id: str
    target_edge_tile: GridPoint
    target_world_tile: GridPoint
