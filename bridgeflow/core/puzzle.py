"""
Core data structure for bridge puzzles.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from ..config import get_config
from ..constraints import BridgeLengthConstraint, Constraint, create_constraints_from_spec
from .bridge import Bridge, BridgeType, BridgeTypeSpec
from .geometry import GridPoint, segment_parameter, tiles_between, to_point
from .inventory import BridgeInventory
from .island import Island
from .utils import setup_logger


IslandRef = Union[str, Island]


class BridgePuzzle:
    """Main puzzle class: islands, a bridge inventory and a constraint list"""

    def __init__(self, width: int, height: int,
                 islands: Optional[List[Island]] = None,
                 bridge_types: Optional[List[BridgeTypeSpec]] = None,
                 constraints: Optional[Iterable[Union[Dict[str, Any], Constraint]]] = None,
                 max_num_bridges: Optional[int] = None,
                 puzzle_id: str = "puzzle",
                 puzzle_type: str = "standard"):
        """
        Initialize a bridge puzzle.

        Args:
            width: Width of the puzzle grid
            height: Height of the puzzle grid
            islands: Islands in the puzzle
            bridge_types: Bridge types with their token counts
            constraints: Constraint instances or {type, params} specs; when
                none are given, length constraints are derived from the
                fixed-length bridge types
            max_num_bridges: Maximum bridges between any pair of islands
            puzzle_id: Identifier of the puzzle
            puzzle_type: Free-form variant tag
        """
        self.logger = setup_logger(self.__class__.__name__)
        self.id = puzzle_id
        self.type = puzzle_type
        self.width = width
        self.height = height
        self.islands: List[Island] = list(islands or [])
        self.inventory = BridgeInventory(list(bridge_types or []))
        self.max_num_bridges = (get_config().default_max_num_bridges
                                if max_num_bridges is None else max_num_bridges)

        declared = list(constraints or [])
        self.constraints: List[Constraint] = create_constraints_from_spec(declared)
        if not declared:
            self.constraints = self._derive_length_constraints()
        for i, constraint in enumerate(self.constraints):
            if constraint.id is None:
                constraint.id = f"constraint-{i + 1}"

    def _derive_length_constraints(self) -> List[Constraint]:
        """One length constraint per fixed-length bridge type"""
        derived: List[Constraint] = []
        for bridge_type in self.inventory.bridge_types:
            if bridge_type.has_length():
                constraint = BridgeLengthConstraint(bridge_type.id, bridge_type.length)
                constraint.id = f"auto-length-{bridge_type.id}"
                derived.append(constraint)
        return derived

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BridgePuzzle':
        """Create a puzzle from a specification mapping"""
        return cls(**cls._kwargs_from_dict(data))

    @staticmethod
    def _kwargs_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
        size = data.get('size') or {}
        if 'width' not in size or 'height' not in size:
            raise ValueError(f"Puzzle spec needs size.width and size.height: {data.get('id')!r}")
        return {
            'width': int(size['width']),
            'height': int(size['height']),
            'islands': [Island.from_dict(i) for i in data.get('islands') or []],
            'bridge_types': [BridgeTypeSpec.from_dict(t) for t in data.get('bridgeTypes') or []],
            'constraints': data.get('constraints') or [],
            'max_num_bridges': data.get('maxNumBridges'),
            'puzzle_id': str(data.get('id', 'puzzle')),
            'puzzle_type': str(data.get('type', 'standard')),
        }

    # Lookups

    @property
    def bridges(self) -> List[Bridge]:
        return self.inventory.bridges

    @property
    def placed_bridges(self) -> List[Bridge]:
        return [b for b in self.inventory.bridges if b.is_placed]

    def all_bridges_placed(self) -> bool:
        return all(b.is_placed for b in self.inventory.bridges)

    def get_island(self, island_id: str) -> Optional[Island]:
        for island in self.islands:
            if island.id == island_id:
                return island
        return None

    def island_at(self, x: int, y: int) -> Optional[Island]:
        for island in self.islands:
            if island.x == x and island.y == y:
                return island
        return None

    def get_bridge(self, bridge_id: str) -> Optional[Bridge]:
        return self.inventory.get_bridge(bridge_id)

    def get_available_bridge_types(self) -> List[BridgeType]:
        return self.inventory.bridge_types

    def available_counts(self) -> Dict[str, int]:
        """Unplaced token count per bridge type"""
        return self.inventory.counts_by_type()

    def take_bridge_of_type(self, type_id: str) -> Optional[Bridge]:
        return self.inventory.take_bridge(type_id)

    def _resolve(self, island: IslandRef) -> Optional[Island]:
        if isinstance(island, Island):
            return island
        return self.get_island(island)

    def bridges_from_island(self, island: IslandRef) -> List[Bridge]:
        """Placed bridges with an endpoint on the island"""
        island = self._resolve(island)
        if island is None:
            return []
        return [b for b in self.placed_bridges if b.touches(island.position)]

    def get_bridge_count_between(self, a: IslandRef, b: IslandRef) -> int:
        """Number of placed bridges joining the unordered island pair"""
        a, b = self._resolve(a), self._resolve(b)
        if a is None or b is None:
            return 0
        ends = {a.position, b.position}
        return sum(1 for bridge in self.placed_bridges if {bridge.start, bridge.end} == ends)

    def bridges_at(self, x: int, y: int) -> List[Bridge]:
        """Placed bridges whose segment passes through or ends on the tile"""
        tolerance = get_config().span_tolerance
        point = GridPoint(x, y)
        return [
            b for b in self.placed_bridges
            if segment_parameter(b.start, b.end, point, tolerance) is not None
        ]

    # Placement legality

    def bridge_would_cross_islands(self, start: IslandRef, end: IslandRef) -> bool:
        """Whether another island lies strictly between two axis-aligned islands"""
        start, end = self._resolve(start), self._resolve(end)
        if start is None or end is None:
            return False
        between = set(tiles_between(start.position, end.position))
        if not between:
            return False
        return any(island.position in between for island in self.islands
                   if island is not start and island is not end)

    def could_place_bridge_at(self, start_id: str, end_id: str) -> bool:
        return self.could_place_bridge_of_type(start_id, end_id, None)

    def could_place_bridge_of_type(self, start_id: str, end_id: str,
                                   type_id: Optional[str] = None) -> bool:
        """
        Whether a bridge could join the two islands. Never mutates the puzzle.

        An unknown bridge type id does not restrict placement.
        """
        if start_id == end_id:
            return False
        start = self.get_island(start_id)
        end = self.get_island(end_id)
        if start is None or end is None:
            return False
        if self.get_bridge_count_between(start, end) >= self.max_num_bridges:
            return False
        if type_id is None:
            return True

        bridge_type = self.inventory.get_bridge_type(type_id)
        if bridge_type is None:
            return True
        if not (bridge_type.can_cover_island or bridge_type.must_cover_island):
            if self.bridge_would_cross_islands(start, end):
                return False
        return bridge_type.allows_span(start.position, end.position)

    # Mutation

    def place_bridge(self, bridge_id: str, start: Any, end: Any) -> bool:
        """
        Set the endpoints of a bridge token.

        Raises:
            ValueError: If no bridge with that id exists
        """
        bridge = self.inventory.get_bridge(bridge_id)
        if bridge is None:
            raise ValueError(f"No such bridge {bridge_id}")
        bridge.start = to_point(start)
        bridge.end = to_point(end)
        self.logger.debug(f"Placed {bridge}")
        return True

    def remove_bridge(self, bridge_id: str) -> bool:
        """
        Clear a bridge token and return it to the inventory.

        Raises:
            ValueError: If no bridge with that id exists
        """
        self.inventory.return_bridge(bridge_id)
        self.logger.debug(f"Removed bridge {bridge_id}")
        return True

    def __str__(self):
        """String representation of puzzle (useful for debugging)"""
        grid = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for bridge in self.placed_bridges:
            start, end = bridge.start, bridge.end
            if start.y == end.y:
                symbol = '─'
            elif start.x == end.x:
                symbol = '│'
            else:
                continue
            for x, y in tiles_between(start, end):
                if 0 <= y < self.height and 0 <= x < self.width:
                    grid[y][x] = '┼' if grid[y][x] in ('─', '│') else symbol

        # Islands are drawn over any bridge deck
        for island in self.islands:
            if 0 <= island.y < self.height and 0 <= island.x < self.width:
                grid[island.y][island.x] = 'O'

        return '\n'.join(''.join(row) for row in grid)

    def __repr__(self):
        return (f"{self.__class__.__name__}({self.id}, {self.width}x{self.height}, "
                f"{len(self.islands)} islands, {len(self.placed_bridges)}/{len(self.bridges)} bridges)")
