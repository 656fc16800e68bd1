"""
Static extraction of river channels from a tile map water layer.
"""

from collections import deque
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

import numpy as np

from ..config import get_config
from ..core.geometry import Direction, GridPoint, manhattan_adjacent
from ..core.utils import setup_logger, timer
from .river_channel import EdgeTile, PuzzleRegion, RiverChannel


RegionMap = Mapping[str, Union[PuzzleRegion, Dict[str, Any]]]


class RiverChannelExtractor:
    """
    Traces connected water tiles between puzzle edge tiles.

    For each edge tile of each puzzle, the tile just outside that edge seeds
    a breadth-first fill through water tiles. The first water tile adjacent
    to an edge tile of another puzzle closes the channel.
    """

    def __init__(self):
        self.logger = setup_logger(self.__class__.__name__)

    @timer
    def extract_channels(self, map_data: Mapping[str, Any], flow_layer_name: Optional[str] = None,
                         puzzle_regions: Optional[RegionMap] = None) -> List[RiverChannel]:
        """
        Extract channels from a Tiled-style map mapping.

        Args:
            map_data: Mapping with width, height and layers[{name, data}]
            flow_layer_name: Water layer name, defaults to the configured one
            puzzle_regions: Puzzle id to region (bounds and local edge tiles)

        Returns:
            Channels in discovery order; empty when the layer is missing
        """
        flow_layer_name = flow_layer_name or get_config().flow_layer_name
        layer = next((candidate for candidate in map_data.get('layers') or []
                      if candidate.get('name') == flow_layer_name), None)
        if layer is None:
            self.logger.warning(f"Flow layer '{flow_layer_name}' not found in map")
            return []
        if not layer.get('data'):
            self.logger.warning(f"Flow layer '{flow_layer_name}' has no tile data")
            return []

        return self.extract_from_layer(layer['data'], int(map_data.get('width', 0)),
                                       int(map_data.get('height', 0)), puzzle_regions)

    def extract_from_layer(self, data: Sequence[int], width: int, height: int,
                           puzzle_regions: Optional[RegionMap] = None) -> List[RiverChannel]:
        """Extract channels from a flat row-major layer of tile ids (0 = no water)"""
        regions = self._normalise_regions(puzzle_regions)
        if not regions or width <= 0 or height <= 0:
            self.logger.warning("No puzzle regions or empty map; no channels extracted")
            return []

        water = self.build_water_tiles(data, width, height)
        channels: List[RiverChannel] = []
        id_counts: Dict[str, int] = {}

        for puzzle_id, region in regions.items():
            for edge, world in region.world_edge_tiles():
                channel = self._trace(puzzle_id, edge, world, water, regions)
                if channel is None:
                    continue
                base_id = channel.id
                id_counts[base_id] = id_counts.get(base_id, 0) + 1
                if id_counts[base_id] > 1:
                    channel = replace(channel, id=f"{base_id}-{id_counts[base_id]}")
                channels.append(channel)

        self.logger.info(f"Extracted {len(channels)} river channels from {len(water)} water tiles")
        return channels

    @staticmethod
    def build_water_tiles(data: Sequence[int], width: int, height: int) -> Set[GridPoint]:
        """World tiles whose layer value is positive"""
        flat = np.zeros(width * height, dtype=np.int64)
        values = np.asarray(list(data)[:width * height], dtype=np.int64)
        flat[:len(values)] = values
        mask = flat.reshape(height, width) > 0
        return {GridPoint(int(x), int(y)) for y, x in np.argwhere(mask)}

    @staticmethod
    def _normalise_regions(puzzle_regions: Optional[RegionMap]) -> Dict[str, PuzzleRegion]:
        regions: Dict[str, PuzzleRegion] = {}
        for puzzle_id, region in (puzzle_regions or {}).items():
            regions[puzzle_id] = region if isinstance(region, PuzzleRegion) else PuzzleRegion.from_dict(region)
        return regions

    @staticmethod
    def _find_target(tile: GridPoint, regions: Dict[str, PuzzleRegion],
                     source_id: str) -> Optional[Tuple[str, EdgeTile, GridPoint]]:
        for puzzle_id, region in regions.items():
            if puzzle_id == source_id:
                continue
            for edge, world in region.world_edge_tiles():
                if manhattan_adjacent(tile, world):
                    return puzzle_id, edge, world
        return None

    def _trace(self, source_id: str, source_edge: EdgeTile, source_world: GridPoint,
               water: Set[GridPoint], regions: Dict[str, PuzzleRegion]) -> Optional[RiverChannel]:
        start = source_edge.edge.step(source_world)
        if start not in water:
            return None

        visited = {start}
        queue = deque([start])
        tiles: List[GridPoint] = []

        while queue:
            current = queue.popleft()
            tiles.append(current)

            target = self._find_target(current, regions, source_id)
            if target is not None:
                target_id, target_edge, target_world = target
                return RiverChannel(
                    id=f"{source_id}-to-{target_id}",
                    tiles=tuple(tiles),
                    source_puzzle_id=source_id,
                    source_edge_tile=source_edge.position,
                    source_world_tile=source_world,
                    target_puzzle_id=target_id,
                    target_edge_tile=target_edge.position,
                    target_world_tile=target_world,
                )

            for direction in Direction:
                neighbour = direction.step(current)
                if neighbour in water and neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)

        self.logger.debug(f"Channel from {source_id} at {tuple(source_world)} reaches no other puzzle")
        return None

