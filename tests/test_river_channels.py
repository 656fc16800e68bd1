"""Tests for river channel extraction."""

import pytest

from bridgeflow.core import Direction, GridPoint
from bridgeflow.overworld import EdgeTile, PuzzleRegion, RegionBounds, RiverChannelExtractor


@pytest.fixture
def extractor():
    return RiverChannelExtractor()


@pytest.fixture
def regions():
    """Puzzle A spans world x 0-3, puzzle B spans x 7-9, on a one-row map."""
    return {
        "A": PuzzleRegion(RegionBounds(0, 0, 4, 1), (EdgeTile(3, 0, Direction.E),)),
        "B": PuzzleRegion(RegionBounds(7, 0, 3, 1), (EdgeTile(0, 0, Direction.W),)),
    }


def one_row_map(layer_name="flowingWater"):
    data = [0] * 10
    for x in (4, 5, 6):
        data[x] = 12
    return {"width": 10, "height": 1, "layers": [{"name": layer_name, "data": data}]}


class TestRiverChannelExtractor:
    """Test tracing water between puzzle edges."""

    def test_channel_between_two_puzzles(self, extractor, regions):
        channels = extractor.extract_channels(one_row_map(), "flowingWater", regions)
        a_to_b = [c for c in channels if c.source_puzzle_id == "A"]
        assert len(a_to_b) == 1
        channel = a_to_b[0]
        assert channel.id == "A-to-B"
        assert channel.target_puzzle_id == "B"
        assert channel.tiles
        assert set(channel.tiles) <= {GridPoint(4, 0), GridPoint(5, 0), GridPoint(6, 0)}
        assert channel.source_world_tile == GridPoint(3, 0)
        assert channel.target_world_tile == GridPoint(7, 0)
        assert channel.source_edge_tile == GridPoint(3, 0)
        assert channel.target_edge_tile == GridPoint(0, 0)

    def test_water_both_ways_is_two_channels(self, extractor, regions):
        channels = extractor.extract_channels(one_row_map(), "flowingWater", regions)
        assert sorted(c.id for c in channels) == ["A-to-B", "B-to-A"]

    def test_missing_layer_yields_no_channels(self, extractor, regions):
        assert extractor.extract_channels(one_row_map("groundLayer"), "flowingWater", regions) == []

    def test_layer_name_defaults_to_config(self, extractor, regions):
        assert len(extractor.extract_channels(one_row_map(), puzzle_regions=regions)) == 2

    def test_layer_without_data(self, extractor, regions):
        map_data = {"width": 10, "height": 1, "layers": [{"name": "flowingWater"}]}
        assert extractor.extract_channels(map_data, "flowingWater", regions) == []

    def test_gap_in_water_breaks_channel(self, extractor, regions):
        data = [0, 0, 0, 0, 1, 0, 1, 0, 0, 0]
        assert extractor.extract_from_layer(data, 10, 1, regions) == []

    def test_dry_edge_yields_nothing(self, extractor, regions):
        data = [0, 0, 0, 0, 0, 1, 1, 0, 0, 0]
        channels = extractor.extract_from_layer(data, 10, 1, regions)
        assert [c.id for c in channels] == []

    def test_repeated_ids_are_suffixed(self, extractor):
        # Two edges of A each lead to B through separate rows
        data = [
            0, 0, 0, 1, 1, 0, 0,
            0, 0, 0, 0, 0, 0, 0,
            0, 0, 0, 1, 1, 0, 0,
        ]
        regions = {
            "A": {"bounds": {"tileX": 0, "tileY": 0, "width": 3, "height": 3},
                  "edgeTiles": [{"x": 2, "y": 0, "edge": "E"}, {"x": 2, "y": 2, "edge": "E"}]},
            "B": {"bounds": {"tileX": 5, "tileY": 0, "width": 2, "height": 3},
                  "edgeTiles": [{"x": 0, "y": 0, "edge": "W"}, {"x": 0, "y": 2, "edge": "W"}]},
        }
        channels = extractor.extract_from_layer(data, 7, 3, regions)
        a_ids = [c.id for c in channels if c.source_puzzle_id == "A"]
        assert a_ids == ["A-to-B", "A-to-B-2"]
        assert channels[1].target_edge_tile == GridPoint(0, 2)

    def test_water_tiles_from_flat_layer(self):
        water = RiverChannelExtractor.build_water_tiles([0, 3, 0, 0, 0, 7], 3, 2)
        assert water == {GridPoint(1, 0), GridPoint(2, 1)}
