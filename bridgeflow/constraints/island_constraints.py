"""
Constraints attached to islands and to the island graph.
"""

from typing import Any, Dict, List, Optional, Set

import networkx as nx

from ..core.island import Island
from .base import Constraint, ConstraintResult


def island_graph(puzzle) -> nx.MultiGraph:
    """Islands as nodes, one edge per placed bridge joining two islands"""
    graph = nx.MultiGraph()
    graph.add_nodes_from(island.id for island in puzzle.islands)
    for bridge in puzzle.placed_bridges:
        start = puzzle.island_at(*bridge.start)
        end = puzzle.island_at(*bridge.end)
        if start is not None and end is not None:
            graph.add_edge(start.id, end.id, key=bridge.id)
    return graph


class _IslandConstraint(Constraint):
    """Constraint bound to a single island by id"""

    required_params = ('islandId',)

    def __init__(self, island_id: str):
        super().__init__()
        self.island_id = island_id

    def _missing_island(self) -> ConstraintResult:
        return self._result(False, [], f"Island {self.island_id} not found")


class IslandBridgeCountConstraint(Constraint):
    """Each island declaring num_bridges=N must have exactly N bridges"""

    def check(self, puzzle) -> ConstraintResult:
        violations: List[str] = []
        glyphs: List[str] = []
        for island in puzzle.islands:
            expected = island.num_bridges()
            if expected is None:
                continue
            actual = len(puzzle.bridges_from_island(island))
            if actual != expected:
                violations.append(island.id)
                glyphs.append("not-enough bridge" if actual < expected else "too-many bridge")

        return self._result(
            not violations, violations,
            f"Incorrect bridge count: {', '.join(violations)}",
            glyphs[0] if glyphs else None,
        )


class IslandsConnectedConstraint(Constraint):
    """All islands must form a single connected group"""

    def check(self, puzzle) -> ConstraintResult:
        graph = island_graph(puzzle)
        if graph.number_of_nodes() == 0:
            return self._result(True, [])

        components = sorted(nx.connected_components(graph), key=len, reverse=True)
        stranded = [island.id for island in puzzle.islands if island.id not in components[0]]
        return self._result(
            len(components) == 1, stranded,
            f"Not all islands are connected: {', '.join(stranded)}",
            "island not connected",
        )


class IslandMustBeCoveredConstraint(_IslandConstraint):
    """At least one placed bridge must pass directly over the island"""

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandMustBeCoveredConstraint':
        params = params or {}
        cls._require(params)
        return cls(str(params['islandId']))

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._missing_island()

        covering = [b.id for b in puzzle.placed_bridges if island.position in b.covered_tiles()]
        if covering:
            return self._result(True, covering)
        return self._result(
            False, [self.island_id],
            f"Island {self.island_id} at ({island.x}, {island.y}) must be covered by a bridge",
            "no bridge over island",
        )


class IslandColourSeparationConstraint(Constraint):
    """Islands of two colours must never end up in the same connected group"""

    required_params = ('colour1', 'colour2')

    def __init__(self, colour1: str, colour2: str):
        super().__init__()
        self.colour1 = colour1
        self.colour2 = colour2

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandColourSeparationConstraint':
        params = dict(params or {})
        # American spelling is accepted as well
        if 'color1' in params:
            params.setdefault('colour1', params['color1'])
        if 'color2' in params:
            params.setdefault('colour2', params['color2'])
        cls._require(params)
        return cls(str(params['colour1']), str(params['colour2']))

    @staticmethod
    def island_colour(island: Island) -> Optional[str]:
        return island.attribute("colour") or island.attribute("color")

    def check(self, puzzle) -> ConstraintResult:
        colours = {island.id: self.island_colour(island) for island in puzzle.islands}
        violations: List[str] = []
        for component in nx.connected_components(island_graph(puzzle)):
            component_colours = {colours[island_id] for island_id in component}
            if self.colour1 in component_colours and self.colour2 in component_colours:
                violations.extend(i.id for i in puzzle.islands if i.id in component)

        return self._result(
            not violations, violations,
            f"Islands of colour {self.colour1} must not connect to islands of colour {self.colour2}",
            f"{self.colour1} island must-not connected {self.colour2} island",
        )


class IslandDirectionalBridgeConstraint(_IslandConstraint):
    """
    Requires or forbids two bridges leaving an island in the same direction.

    Variants:
    - double_horizontal: two bridges left, two right, or one each way
    - double_vertical: two bridges up, two down, or one each way
    - double_any_direction: two bridges in any single direction
    - no_double_any_direction: never two bridges in a single direction
    """

    required_params = ('islandId', 'constraintType')
    VARIANTS = ('double_horizontal', 'double_vertical', 'double_any_direction',
                'no_double_any_direction')

    def __init__(self, island_id: str, constraint_type: str):
        super().__init__(island_id)
        if constraint_type not in self.VARIANTS:
            raise ValueError(f"Unknown directional constraint type: {constraint_type}")
        self.constraint_type = constraint_type

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandDirectionalBridgeConstraint':
        params = params or {}
        cls._require(params)
        return cls(str(params['islandId']), str(params['constraintType']))

    @staticmethod
    def count_by_direction(island: Island, bridges) -> Dict[str, int]:
        counts = {'left': 0, 'right': 0, 'up': 0, 'down': 0}
        for bridge in bridges:
            other = bridge.end if bridge.start == island.position else bridge.start
            if other.x < island.x:
                counts['left'] += 1
            elif other.x > island.x:
                counts['right'] += 1
            elif other.y < island.y:
                counts['up'] += 1
            elif other.y > island.y:
                counts['down'] += 1
        return counts

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._missing_island()

        bridges = puzzle.bridges_from_island(island)
        c = self.count_by_direction(island, bridges)
        summary = f"left: {c['left']}, right: {c['right']}, up: {c['up']}, down: {c['down']}"

        if self.constraint_type == 'double_horizontal':
            ok = c['left'] == 2 or c['right'] == 2 or (c['left'] == 1 and c['right'] == 1)
            message = f"Island {self.island_id} requires 2 horizontal bridges ({summary})"
        elif self.constraint_type == 'double_vertical':
            ok = c['up'] == 2 or c['down'] == 2 or (c['up'] == 1 and c['down'] == 1)
            message = f"Island {self.island_id} requires 2 vertical bridges ({summary})"
        elif self.constraint_type == 'double_any_direction':
            ok = 2 in c.values()
            message = f"Island {self.island_id} requires 2 bridges in one direction ({summary})"
        else:
            ok = 2 not in c.values()
            message = f"Island {self.island_id} must not have 2 bridges in one direction ({summary})"

        return self._result(ok, [] if ok else [self.island_id] + [b.id for b in bridges], message)


class IslandPassingBridgeCountConstraint(_IslandConstraint):
    """
    Counts bridges that pass the island without touching it.

    Directions: above/below count horizontal bridges over the island's
    column, left/right count vertical bridges over its row, adjacent
    counts bridges one cell away on any side.
    """

    required_params = ('islandId', 'direction', 'count')
    DIRECTIONS = ('above', 'below', 'left', 'right', 'adjacent')

    def __init__(self, island_id: str, direction: str, expected_count: int):
        super().__init__(island_id)
        if direction not in self.DIRECTIONS:
            raise ValueError(f"Unknown passing direction: {direction}")
        self.direction = direction
        self.expected_count = expected_count

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandPassingBridgeCountConstraint':
        params = params or {}
        cls._require(params)
        return cls(str(params['islandId']), str(params['direction']), int(params['count']))

    def _passes(self, bridge, island: Island) -> bool:
        start, end = bridge.start, bridge.end
        if start.y == end.y:
            if not min(start.x, end.x) <= island.x <= max(start.x, end.x):
                return False
            if self.direction == 'above':
                return start.y < island.y
            if self.direction == 'below':
                return start.y > island.y
            if self.direction == 'adjacent':
                return abs(start.y - island.y) == 1
            return False
        if start.x == end.x:
            if not min(start.y, end.y) <= island.y <= max(start.y, end.y):
                return False
            if self.direction == 'left':
                return start.x < island.x
            if self.direction == 'right':
                return start.x > island.x
            if self.direction == 'adjacent':
                return abs(start.x - island.x) == 1
        return False

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._missing_island()

        passing = [
            b.id for b in puzzle.placed_bridges
            if not b.touches(island.position) and self._passes(b, island)
        ]
        ok = len(passing) == self.expected_count
        return self._result(
            ok, passing if ok else [self.island_id] + passing,
            f"Island {self.island_id} requires {self.expected_count} bridges passing "
            f"{self.direction}, but has {len(passing)}",
        )


class IslandVisibilityConstraint(_IslandConstraint):
    """
    Number of islands visible from an island along straight chains of bridges.

    Looking in each of the four directions, the next island is visible when a
    bridge joins it to the previous island in the chain; the walk stops at
    the first unbridged gap.
    """

    required_params = ('islandId', 'count')

    def __init__(self, island_id: str, expected_count: int):
        super().__init__(island_id)
        self.expected_count = expected_count

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'IslandVisibilityConstraint':
        params = params or {}
        cls._require(params)
        return cls(str(params['islandId']), int(params['count']))

    def visible_islands(self, puzzle, source: Island) -> Set[str]:
        visible: Set[str] = set()
        for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            previous = source
            x, y = source.x, source.y
            while True:
                x, y = x + dx, y + dy
                if not (0 <= x < puzzle.width and 0 <= y < puzzle.height):
                    break
                island = puzzle.island_at(x, y)
                if island is None:
                    continue
                if puzzle.get_bridge_count_between(previous.id, island.id) == 0:
                    break
                visible.add(island.id)
                previous = island
        return visible

    def check(self, puzzle) -> ConstraintResult:
        island = puzzle.get_island(self.island_id)
        if island is None:
            return self._missing_island()

        visible = sorted(self.visible_islands(puzzle, island))
        ok = len(visible) == self.expected_count
        return self._result(
            ok, visible if ok else [self.island_id] + visible,
            f"Island {self.island_id} requires {self.expected_count} visible islands, "
            f"but has {len(visible)}",
        )
