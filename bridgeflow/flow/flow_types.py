"""
Flow tile metadata for water puzzles.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

from ..core.geometry import Direction, GridPoint, to_direction


@dataclass(frozen=True)
class FlowTile:
    """A grid cell with water propagation metadata"""
    x: int
    y: int
    outgoing: FrozenSet[Direction] = field(default_factory=frozenset)
    is_source: bool = False
    obstacle: bool = False
    rocky: bool = False
    pontoon: bool = False

    @property
    def position(self) -> GridPoint:
        return GridPoint(self.x, self.y)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlowTile':
        """
        Parse a flow square mapping.

        Keys: x, y, outgoing (list or string of N/S/E/W), isSource,
        obstacle, rocky, pontoon.
        """
        if 'x' not in data or 'y' not in data:
            raise ValueError(f"Flow square needs x and y: {data!r}")
        return cls(
            x=int(data['x']),
            y=int(data['y']),
            outgoing=frozenset(to_direction(d) for d in data.get('outgoing') or []),
            is_source=bool(data.get('isSource', False)),
            obstacle=bool(data.get('obstacle', False)),
            rocky=bool(data.get('rocky', False)),
            pontoon=bool(data.get('pontoon', False)),
        )
