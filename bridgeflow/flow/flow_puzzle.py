"""
Bridge puzzle with water flowing across its tiles.
"""

from collections import deque
from typing import Any, Dict, Iterable, List, Optional, Set

import numpy as np

from ..core.geometry import Direction, GridPoint, is_axis_aligned, points_on_perimeter, tiles_between, to_point
from ..core.puzzle import BridgePuzzle
from .connectivity import ConnectivityManager, ConnectivityTile
from .flow_types import FlowTile


class FlowPuzzle(BridgePuzzle):
    """
    BridgePuzzle extended with per-tile flow metadata.

    Water is recomputed from scratch on construction, on every bridge
    placement or removal and whenever the edge inputs are reassigned.
    Placed bridges block water on the tiles strictly between their
    endpoints.
    """

    def __init__(self, width: int, height: int,
                 flow_squares: Optional[Iterable[FlowTile]] = None,
                 edge_inputs: Optional[Iterable[Any]] = None,
                 **kwargs):
        super().__init__(width, height, **kwargs)
        self._flow_tiles: Dict[GridPoint, FlowTile] = {}
        for tile in flow_squares or []:
            self._flow_tiles[tile.position] = tile

        self._edge_inputs: Dict[GridPoint, None] = {}
        self._has_water: Dict[GridPoint, None] = {}
        self._edge_outputs: List[GridPoint] = []

        for point in edge_inputs or []:
            self._edge_inputs[to_point(point)] = None
        self.recompute_water()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FlowPuzzle':
        """Create a flow puzzle from a specification with flowSquares and edgeInputs"""
        kwargs = cls._kwargs_from_dict(data)
        kwargs['flow_squares'] = [FlowTile.from_dict(fs) for fs in data.get('flowSquares') or []]
        kwargs['edge_inputs'] = data.get('edgeInputs') or []
        return cls(**kwargs)

    # Queries

    def get_flow_tile(self, x: int, y: int) -> Optional[FlowTile]:
        return self._flow_tiles.get(GridPoint(x, y))

    def tile_has_water(self, x: int, y: int) -> bool:
        return GridPoint(x, y) in self._has_water

    def get_has_water_grid(self) -> Dict[GridPoint, bool]:
        """Water state of every declared flow tile"""
        return {point: point in self._has_water for point in self._flow_tiles}

    def water_mask(self) -> np.ndarray:
        """Boolean (height, width) array of watered tiles"""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in self._has_water:
            if 0 <= x < self.width and 0 <= y < self.height:
                mask[y, x] = True
        return mask

    def get_edge_output(self) -> List[GridPoint]:
        """Watered tiles on the grid perimeter"""
        return list(self._edge_outputs)

    @property
    def edge_inputs(self) -> List[GridPoint]:
        return list(self._edge_inputs)

    def set_edge_inputs(self, inputs: Iterable[Any]):
        """Replace the edge inputs and recompute water"""
        self._edge_inputs = {to_point(p): None for p in inputs}
        self.recompute_water()

    # Mutation

    def place_bridge(self, bridge_id: str, start: Any, end: Any) -> bool:
        placed = super().place_bridge(bridge_id, start, end)
        if placed:
            self.recompute_water()
        return placed

    def remove_bridge(self, bridge_id: str) -> bool:
        removed = super().remove_bridge(bridge_id)
        self.recompute_water()
        return removed

    def could_place_bridge_of_type(self, start_id: str, end_id: str,
                                   type_id: Optional[str] = None) -> bool:
        """Base legality, restricted to axis-aligned bridges that span no obstacle"""
        if not super().could_place_bridge_of_type(start_id, end_id, type_id):
            return False
        start = self.get_island(start_id)
        end = self.get_island(end_id)
        if not is_axis_aligned(start.position, end.position):
            return False
        for point in tiles_between(start.position, end.position):
            tile = self._flow_tiles.get(point)
            if tile is not None and tile.obstacle:
                return False
        return True

    # Water

    def _blocked_cells(self) -> Set[GridPoint]:
        blocked = {p for p, tile in self._flow_tiles.items() if tile.obstacle}
        for bridge in self.placed_bridges:
            blocked.update(bridge.covered_tiles())
        return blocked

    def recompute_water(self):
        """Multi-source BFS from edge inputs and sources along outgoing directions"""
        blocked = self._blocked_cells()
        has_water: Dict[GridPoint, None] = {}
        queue = deque()

        for point in self._edge_inputs:
            if point in self._flow_tiles and point not in blocked:
                has_water[point] = None
                queue.append(point)
        for point, tile in self._flow_tiles.items():
            if tile.is_source and point not in blocked and point not in has_water:
                has_water[point] = None
                queue.append(point)

        while queue:
            current = self._flow_tiles[queue.popleft()]
            for direction in Direction:
                if direction not in current.outgoing:
                    continue
                neighbour = direction.step(current.position)
                tile = self._flow_tiles.get(neighbour)
                if tile is None or tile.obstacle or neighbour in blocked:
                    continue
                already = neighbour in has_water
                has_water[neighbour] = None
                # Rocky tiles hold water without forwarding it
                if not tile.rocky and not already:
                    queue.append(neighbour)

        edge_outputs = points_on_perimeter(has_water, self.width, self.height)

        self._has_water = has_water
        self._edge_outputs = edge_outputs
        self.logger.debug(f"Recomputed water for {self.id}: {len(has_water)} wet tiles, "
                          f"{len(edge_outputs)} edge outputs")

    def get_baked_connectivity(self) -> List[ConnectivityTile]:
        return ConnectivityManager.compute_baked_connectivity(
            self.width, self.height, self.tile_has_water, self.placed_bridges,
            terrain=self.get_flow_tile,
        )
