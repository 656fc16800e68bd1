"""
Constraints attached to individual grid cells.
"""

from collections import deque
from typing import Any, Dict, List, Optional, Set, Tuple

from ..core.geometry import GridPoint
from .base import Constraint, ConstraintResult


class GridCellConstraint(Constraint):
    """Base class for constraints that apply to a specific grid cell"""

    required_params = ('x', 'y')

    def __init__(self, x: int, y: int):
        super().__init__()
        self.x = x
        self.y = y

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None):
        params = params or {}
        cls._require(params)
        return cls(int(params['x']), int(params['y']))

    @property
    def cell_key(self) -> str:
        return f"{self.x},{self.y}"

    def touching_bridges(self, puzzle, orientation: str) -> list:
        """Placed bridges of the orientation running alongside this cell"""
        touching = []
        for bridge in puzzle.placed_bridges:
            start, end = bridge.start, bridge.end
            if orientation == 'horizontal' and start.y == end.y:
                if abs(self.y - start.y) == 1 and min(start.x, end.x) <= self.x <= max(start.x, end.x):
                    touching.append(bridge)
            elif orientation == 'vertical' and start.x == end.x:
                if abs(self.x - start.x) == 1 and min(start.y, end.y) <= self.y <= max(start.y, end.y):
                    touching.append(bridge)
        return touching


class MustHaveWaterConstraint(GridCellConstraint):
    """The tile must currently carry water (flow puzzles only)"""

    def check(self, puzzle) -> ConstraintResult:
        tile_has_water = getattr(puzzle, 'tile_has_water', None)
        has_water = bool(tile_has_water(self.x, self.y)) if callable(tile_has_water) else False
        return self._result(
            has_water, [] if has_water else [self.cell_key],
            f"Tile ({self.x},{self.y}) must have water.",
        )


class MustTouchAHorizontalBridge(GridCellConstraint):
    """At least one horizontal bridge runs directly above or below the cell"""

    def check(self, puzzle) -> ConstraintResult:
        touching = self.touching_bridges(puzzle, 'horizontal')
        return self._result(
            bool(touching), [b.id for b in touching],
            f"No horizontal bridge adjacent to space ({self.x}, {self.y})",
            "no adjacent bridge",
        )


class MustTouchAVerticalBridge(GridCellConstraint):
    """At least one vertical bridge runs directly left or right of the cell"""

    def check(self, puzzle) -> ConstraintResult:
        touching = self.touching_bridges(puzzle, 'vertical')
        return self._result(
            bool(touching), [b.id for b in touching],
            f"No vertical bridge adjacent to space ({self.x}, {self.y})",
            "no adjacent bridge",
        )


class EnclosedAreaSizeConstraint(GridCellConstraint):
    """
    The cell must lie in an area of exactly N cells enclosed by bridges.

    Areas are flood-filled through cells that are neither islands nor under a
    bridge; an area reaching the grid perimeter is open. Size 0 means the
    cell is covered by a bridge or lies in an open area.
    """

    required_params = ('x', 'y', 'size')

    def __init__(self, x: int, y: int, expected_size: int):
        super().__init__(x, y)
        self.expected_size = expected_size

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'EnclosedAreaSizeConstraint':
        params = params or {}
        cls._require(params)
        return cls(int(params['x']), int(params['y']), int(params['size']))

    @staticmethod
    def _bridge_cells(puzzle) -> Set[Tuple[int, int]]:
        # Whole deck including the endpoints
        cells: Set[Tuple[int, int]] = set()
        for bridge in puzzle.placed_bridges:
            cells.add(tuple(bridge.start))
            cells.add(tuple(bridge.end))
            cells.update(tuple(p) for p in bridge.covered_tiles())
        return cells

    def enclosed_area(self, puzzle) -> Tuple[bool, List[str]]:
        """Flood fill from the cell; returns (is_enclosed, cell keys)"""
        walls = self._bridge_cells(puzzle) | {tuple(i.position) for i in puzzle.islands}
        start = (self.x, self.y)
        visited = {start}
        queue = deque([start])
        cells: List[str] = []
        enclosed = True

        while queue:
            x, y = queue.popleft()
            cells.append(f"{x},{y}")
            if x == 0 or y == 0 or x == puzzle.width - 1 or y == puzzle.height - 1:
                enclosed = False

            for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
                nxt = (x + dx, y + dy)
                if nxt in visited or nxt in walls:
                    continue
                if not (0 <= nxt[0] < puzzle.width and 0 <= nxt[1] < puzzle.height):
                    continue
                visited.add(nxt)
                queue.append(nxt)

        return enclosed, cells

    def check(self, puzzle) -> ConstraintResult:
        covered = GridPoint(self.x, self.y) in self._bridge_cells(puzzle)

        if self.expected_size == 0:
            if covered:
                return self._result(True, [])
            enclosed, _ = self.enclosed_area(puzzle)
            return self._result(
                not enclosed, [self.cell_key] if enclosed else [],
                f"Cell ({self.x}, {self.y}) with size=0 must be covered by a bridge "
                f"or open to outside, but is in an enclosed area",
            )

        if covered:
            return self._result(
                False, [self.cell_key],
                f"Cell ({self.x}, {self.y}) is covered by a bridge but should be in an "
                f"enclosed area of size {self.expected_size}",
            )

        enclosed, cells = self.enclosed_area(puzzle)
        ok = enclosed and len(cells) == self.expected_size
        if ok:
            return self._result(True, cells)
        if enclosed:
            message = (f"Cell ({self.x}, {self.y}) is in an enclosed area of size {len(cells)}, "
                       f"but requires size {self.expected_size}")
        else:
            message = (f"Cell ({self.x}, {self.y}) is not in a fully enclosed area "
                       f"(requires size {self.expected_size})")
        return self._result(False, [self.cell_key] + cells, message)
