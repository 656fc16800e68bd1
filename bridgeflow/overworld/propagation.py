"""
Cross-region water propagation through river channels.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

from ..core.geometry import GridPoint, to_point
from ..core.utils import setup_logger
from .river_channel import RegionBounds, RiverChannel


@dataclass
class PropagationResult:
    """
    One propagation step from a single puzzle's edge outputs.

    flooded/drained cover the recomputed puzzle's channels; newly_flooded and
    newly_drained are changes to the map-wide flooded set.
    """
    flooded: FrozenSet[GridPoint] = frozenset()
    drained: FrozenSet[GridPoint] = frozenset()
    newly_flooded: FrozenSet[GridPoint] = frozenset()
    newly_drained: FrozenSet[GridPoint] = frozenset()
    downstream_inputs: Dict[str, List[GridPoint]] = field(default_factory=dict)
    affected_puzzles: List[str] = field(default_factory=list)


def _local_point(value: Any) -> GridPoint:
    # Edge outputs may use localX/localY keys
    if isinstance(value, dict) and 'localX' in value:
        return GridPoint(int(value['localX']), int(value['localY']))
    return to_point(value)


class WaterPropagationEngine:
    """
    Tracks which river channels carry water and which edge inputs each
    downstream puzzle receives.

    Every call recomputes one source puzzle's channels; contributions from
    other source puzzles are kept so a target fed by several upstream
    puzzles keeps all of its inputs.
    """

    def __init__(self, channels: Optional[Iterable[RiverChannel]] = None):
        self.logger = setup_logger(self.__class__.__name__)
        self._channels: List[RiverChannel] = []
        self._active: Set[str] = set()
        # target puzzle -> source puzzle -> local input tiles
        self._contributions: Dict[str, Dict[str, List[GridPoint]]] = {}
        if channels is not None:
            self.set_river_channels(channels)

    def set_river_channels(self, channels: Iterable[RiverChannel]):
        """Replace the channel list and forget all water state"""
        self._channels = list(channels)
        self.reset()

    def get_river_channels(self) -> List[RiverChannel]:
        return list(self._channels)

    def reset(self):
        self._active = set()
        self._contributions = {}

    @property
    def flooded_tiles(self) -> FrozenSet[GridPoint]:
        """World tiles of every channel currently carrying water"""
        return frozenset(t for c in self._channels if c.id in self._active for t in c.tiles)

    def _inputs_for(self, target_id: str) -> List[GridPoint]:
        inputs: Dict[GridPoint, None] = {}
        for points in self._contributions.get(target_id, {}).values():
            for point in points:
                inputs[point] = None
        return list(inputs)

    def compute_propagation(self, puzzle_id: str, edge_outputs: Iterable[Any],
                            puzzle_bounds: RegionBounds) -> PropagationResult:
        """
        Recompute the channels leaving one puzzle.

        Args:
            puzzle_id: Puzzle whose water changed
            edge_outputs: Its edge output tiles in puzzle-local coordinates
            puzzle_bounds: Its world tile bounds

        Returns:
            PropagationResult with downstream inputs for every target of the
            puzzle's channels (empty lists for targets no longer fed)
        """
        if isinstance(puzzle_bounds, dict):
            puzzle_bounds = RegionBounds.from_dict(puzzle_bounds)
        world_outputs = {puzzle_bounds.to_world(_local_point(p)) for p in edge_outputs}
        outgoing = [c for c in self._channels if c.source_puzzle_id == puzzle_id]

        before_flooded = self.flooded_tiles
        targets = list(dict.fromkeys(c.target_puzzle_id for c in outgoing))
        before_inputs = {t: self._inputs_for(t) for t in targets}

        new_contributions: Dict[str, List[GridPoint]] = {t: [] for t in targets}
        for channel in outgoing:
            if channel.source_world_tile in world_outputs:
                self._active.add(channel.id)
                points = new_contributions[channel.target_puzzle_id]
                if channel.target_edge_tile not in points:
                    points.append(channel.target_edge_tile)
            else:
                self._active.discard(channel.id)

        for target, points in new_contributions.items():
            self._contributions.setdefault(target, {})[puzzle_id] = points

        after_flooded = self.flooded_tiles
        flooded = frozenset(t for c in outgoing if c.id in self._active for t in c.tiles)
        drained = frozenset(
            t for c in outgoing if c.id not in self._active for t in c.tiles
            if t not in after_flooded
        )
        downstream = {t: self._inputs_for(t) for t in targets}
        affected = [t for t in targets if downstream[t] != before_inputs[t]]

        result = PropagationResult(
            flooded=flooded,
            drained=drained,
            newly_flooded=after_flooded - before_flooded,
            newly_drained=before_flooded - after_flooded,
            downstream_inputs=downstream,
            affected_puzzles=affected,
        )
        self.logger.debug(f"Propagation from {puzzle_id}: +{len(result.newly_flooded)} "
                          f"-{len(result.newly_drained)} tiles, affected {affected}")
        return result
