"""
Bridge types and bridge tokens.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..config import get_config
from .geometry import GridPoint, distance, tiles_between


SpanPredicate = Callable[[GridPoint, GridPoint], bool]


@dataclass
class BridgeType:
    """
    A kind of bridge available in a puzzle inventory.

    A length of -1 means the bridge can span any distance. A span_predicate,
    when given, replaces the length rule entirely (used for non-default
    bridge kinds such as diagonal planks).
    """
    id: str = "default"
    length: float = -1
    colour: str = "black"
    width: float = 1.0
    style: str = "normal"
    can_cover_island: bool = False
    must_cover_island: bool = False
    span_predicate: Optional[SpanPredicate] = None

    def has_length(self) -> bool:
        return self.length != -1

    def allows_span(self, start: GridPoint, end: GridPoint) -> bool:
        """Whether this type allows a bridge between the two coordinates"""
        if self.span_predicate is not None:
            return bool(self.span_predicate(start, end))
        if not self.has_length():
            return True
        return abs(distance(start, end) - self.length) <= get_config().length_tolerance


@dataclass
class BridgeTypeSpec:
    """Declared bridge type plus how many tokens of it a puzzle holds"""
    bridge_type: BridgeType
    count: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BridgeTypeSpec':
        if 'id' not in data:
            raise ValueError(f"Bridge type spec missing id: {data!r}")
        length = data.get('length')
        try:
            length = -1 if length is None else float(length)
        except (TypeError, ValueError):
            raise ValueError(f"Bridge type {data['id']!r} has a non-numeric length: {length!r}")
        bridge_type = BridgeType(
            id=str(data['id']),
            length=length,
            colour=data.get('colour') or data.get('color') or "black",
            width=data.get('width', 1.0),
            style=data.get('style', "normal"),
            can_cover_island=bool(data.get('canCoverIsland', False)),
            must_cover_island=bool(data.get('mustCoverIsland', False)),
        )
        count = data.get('count')
        return cls(bridge_type, get_config().default_bridge_count if count is None else int(count))


@dataclass(eq=False)
class Bridge:
    """
    One allocatable bridge token.

    A token is placed when both endpoints are set and unplaced when both
    are cleared.
    """
    id: str
    type: BridgeType
    start: Optional[GridPoint] = None
    end: Optional[GridPoint] = None

    @property
    def is_placed(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def length(self) -> float:
        if not self.is_placed:
            return 0.0
        return distance(self.start, self.end)

    def covered_tiles(self) -> List[GridPoint]:
        """Tiles physically covered by the deck, excluding the endpoints"""
        if not self.is_placed:
            return []
        return tiles_between(self.start, self.end)

    def touches(self, point: GridPoint) -> bool:
        return self.is_placed and (self.start == point or self.end == point)

    def clear(self):
        self.start = None
        self.end = None

    def __repr__(self):
        if self.is_placed:
            return f"Bridge({self.id}, {self.type.id}, {tuple(self.start)}->{tuple(self.end)})"
        return f"Bridge({self.id}, {self.type.id}, unplaced)"
