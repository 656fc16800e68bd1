"""Tests for the individual constraint variants."""

import pytest

from bridgeflow.constraints import (
    AllBridgesPlacedConstraint, BridgeLengthConstraint, BridgeMustCoverIslandConstraint,
    EnclosedAreaSizeConstraint, IslandBridgeCountConstraint, IslandColourSeparationConstraint,
    IslandDirectionalBridgeConstraint, IslandMustBeCoveredConstraint,
    IslandPassingBridgeCountConstraint, IslandsConnectedConstraint, IslandVisibilityConstraint,
    MustHaveWaterConstraint, MustTouchAHorizontalBridge, MustTouchAVerticalBridge,
    NoCrossingConstraint,
)
from bridgeflow.core import BridgePuzzle, BridgeType, BridgeTypeSpec, Island


def make_puzzle(width, height, islands, types, **kwargs):
    return BridgePuzzle(
        width=width, height=height,
        islands=[Island(i, x, y, list(c)) for i, x, y, *c in islands],
        bridge_types=[BridgeTypeSpec(t, n) for t, n in types],
        **kwargs,
    )


class TestNoCrossing:
    """Test the crossing detection."""

    def test_strict_crossing_reports_both(self, cross_puzzle):
        cross_puzzle.place_bridge("b1", (0, 2), (4, 2))
        cross_puzzle.place_bridge("b2", (2, 0), (2, 4))
        result = NoCrossingConstraint().check(cross_puzzle)
        assert not result.satisfied
        assert "b1" in result.affected_elements
        assert "b2" in result.affected_elements
        assert result.message

    def test_shared_endpoint_exempt(self, cross_puzzle):
        # Overlapping along the same row beyond the shared endpoint
        cross_puzzle.place_bridge("b1", (0, 2), (4, 2))
        cross_puzzle.place_bridge("b2", (0, 2), (2, 2))
        cross_puzzle.place_bridge("b3", (4, 2), (4, 4))
        result = NoCrossingConstraint().check(cross_puzzle)
        assert result.satisfied
        assert result.message is None

    def test_all_pairs_reported(self):
        puzzle = make_puzzle(
            5, 5,
            [("a", 0, 1), ("b", 4, 1), ("c", 0, 3), ("d", 4, 3), ("e", 2, 0), ("f", 2, 4)],
            [(BridgeType(id="p"), 3)],
        )
        puzzle.place_bridge("b1", (0, 1), (4, 1))
        puzzle.place_bridge("b2", (0, 3), (4, 3))
        puzzle.place_bridge("b3", (2, 0), (2, 4))
        constraint = NoCrossingConstraint()
        result = constraint.check(puzzle)
        assert not result.satisfied
        assert constraint.violations == [("b1", "b3"), ("b2", "b3")]
        assert result.affected_elements == ["b1", "b3", "b2"]


class TestBridgeConstraints:
    """Test completeness, length and island-cover rules."""

    def test_all_bridges_placed(self, wood_puzzle):
        constraint = AllBridgesPlacedConstraint()
        result = constraint.check(wood_puzzle)
        assert not result.satisfied
        assert result.affected_elements == ["b1"]
        wood_puzzle.place_bridge("b1", (1, 1), (3, 1))
        assert constraint.check(wood_puzzle).satisfied

    def test_bridge_length_ignores_unplaced(self):
        puzzle = make_puzzle(6, 1, [("a", 0, 0), ("b", 2, 0), ("c", 5, 0)],
                             [(BridgeType(id="wood"), 2)])
        constraint = BridgeLengthConstraint("wood", 2)
        assert constraint.check(puzzle).satisfied
        puzzle.place_bridge("b1", (0, 0), (2, 0))
        assert constraint.check(puzzle).satisfied
        puzzle.place_bridge("b2", (2, 0), (5, 0))
        result = constraint.check(puzzle)
        assert not result.satisfied
        assert result.affected_elements == ["b2"]

    def test_bridge_must_cover_island(self):
        high = BridgeType(id="high", must_cover_island=True)
        puzzle = make_puzzle(5, 1, [("a", 0, 0), ("m", 2, 0), ("b", 4, 0)], [(high, 1)])
        constraint = BridgeMustCoverIslandConstraint()
        puzzle.place_bridge("b1", (0, 0), (2, 0))
        result = constraint.check(puzzle)
        assert not result.satisfied
        assert result.glyph_message == "not island under bridge"
        puzzle.place_bridge("b1", (0, 0), (4, 0))
        assert constraint.check(puzzle).satisfied


class TestIslandConstraints:
    """Test island-bound and graph constraints."""

    @pytest.fixture
    def chain(self):
        return make_puzzle(
            5, 3,
            [("a", 0, 0, "num_bridges=1", "colour=red"),
             ("b", 2, 0, "num_bridges=2", "colour=blue"),
             ("c", 4, 0, "num_bridges=1", "colour=red"),
             ("d", 2, 2, "colour=green")],
            [(BridgeType(id="p"), 4)],
        )

    def test_bridge_count(self, chain):
        constraint = IslandBridgeCountConstraint()
        chain.place_bridge("b1", (0, 0), (2, 0))
        result = constraint.check(chain)
        assert not result.satisfied
        assert set(result.affected_elements) == {"b", "c"}
        assert result.glyph_message == "not-enough bridge"
        chain.place_bridge("b2", (2, 0), (4, 0))
        assert constraint.check(chain).satisfied

    def test_islands_connected(self, chain):
        constraint = IslandsConnectedConstraint()
        chain.place_bridge("b1", (0, 0), (2, 0))
        chain.place_bridge("b2", (2, 0), (4, 0))
        result = constraint.check(chain)
        assert not result.satisfied
        assert result.affected_elements == ["d"]
        chain.place_bridge("b3", (2, 0), (2, 2))
        assert constraint.check(chain).satisfied

    def test_colour_separation(self, chain):
        constraint = IslandColourSeparationConstraint.from_spec({"color1": "red", "color2": "green"})
        chain.place_bridge("b1", (0, 0), (2, 0))
        chain.place_bridge("b2", (2, 0), (2, 2))
        assert not constraint.check(chain).satisfied
        chain.remove_bridge("b2")
        assert constraint.check(chain).satisfied

    def test_island_must_be_covered(self):
        high = BridgeType(id="high", can_cover_island=True)
        puzzle = make_puzzle(5, 1, [("a", 0, 0), ("m", 2, 0), ("b", 4, 0)], [(high, 1)])
        constraint = IslandMustBeCoveredConstraint("m")
        assert not constraint.check(puzzle).satisfied
        puzzle.place_bridge("b1", (0, 0), (4, 0))
        result = constraint.check(puzzle)
        assert result.satisfied
        assert result.affected_elements == ["b1"]

    def test_missing_island_unsatisfied(self, chain):
        result = IslandMustBeCoveredConstraint("zz").check(chain)
        assert not result.satisfied
        assert "zz" in result.message

    def test_directional_double_horizontal(self, chain):
        constraint = IslandDirectionalBridgeConstraint("b", "double_horizontal")
        chain.place_bridge("b1", (0, 0), (2, 0))
        assert not constraint.check(chain).satisfied
        chain.place_bridge("b2", (2, 0), (4, 0))
        assert constraint.check(chain).satisfied

    def test_directional_no_double(self, chain):
        constraint = IslandDirectionalBridgeConstraint("b", "no_double_any_direction")
        chain.place_bridge("b1", (0, 0), (2, 0))
        chain.place_bridge("b2", (0, 0), (2, 0))
        assert not constraint.check(chain).satisfied

    def test_directional_unknown_variant(self):
        with pytest.raises(ValueError):
            IslandDirectionalBridgeConstraint("b", "triple")

    def test_passing_bridge_count(self):
        puzzle = make_puzzle(5, 5, [("x", 2, 2), ("a", 0, 1), ("b", 4, 1)],
                             [(BridgeType(id="p"), 1)])
        puzzle.place_bridge("b1", (0, 1), (4, 1))
        assert IslandPassingBridgeCountConstraint("x", "above", 1).check(puzzle).satisfied
        assert IslandPassingBridgeCountConstraint("x", "adjacent", 1).check(puzzle).satisfied
        assert not IslandPassingBridgeCountConstraint("x", "below", 1).check(puzzle).satisfied

    def test_visibility(self, chain):
        constraint = IslandVisibilityConstraint("a", 2)
        chain.place_bridge("b1", (0, 0), (2, 0))
        assert not constraint.check(chain).satisfied
        chain.place_bridge("b2", (2, 0), (4, 0))
        result = constraint.check(chain)
        assert result.satisfied
        assert result.affected_elements == ["b", "c"]


class TestGridCellConstraints:
    """Test constraints bound to a grid cell."""

    @pytest.fixture
    def square(self):
        # Four corners of a ring around (2,2) on a 5x5 grid
        return make_puzzle(
            5, 5,
            [("nw", 1, 1), ("ne", 3, 1), ("sw", 1, 3), ("se", 3, 3)],
            [(BridgeType(id="p"), 4)],
        )

    def close_ring(self, puzzle):
        puzzle.place_bridge("b1", (1, 1), (3, 1))
        puzzle.place_bridge("b2", (3, 1), (3, 3))
        puzzle.place_bridge("b3", (3, 3), (1, 3))
        puzzle.place_bridge("b4", (1, 3), (1, 1))

    def test_enclosed_area(self, square):
        constraint = EnclosedAreaSizeConstraint(2, 2, 1)
        result = constraint.check(square)
        assert not result.satisfied
        assert "not in a fully enclosed area" in result.message
        self.close_ring(square)
        assert constraint.check(square).satisfied

    def test_enclosed_area_wrong_size(self, square):
        self.close_ring(square)
        result = EnclosedAreaSizeConstraint(2, 2, 4).check(square)
        assert not result.satisfied
        assert "size 1" in result.message

    def test_enclosed_area_size_zero(self, square):
        assert EnclosedAreaSizeConstraint(0, 0, 0).check(square).satisfied
        self.close_ring(square)
        assert EnclosedAreaSizeConstraint(2, 1, 0).check(square).satisfied
        assert not EnclosedAreaSizeConstraint(2, 2, 0).check(square).satisfied

    def test_covered_cell_needs_size_zero(self, square):
        self.close_ring(square)
        assert not EnclosedAreaSizeConstraint(2, 1, 1).check(square).satisfied

    def test_must_touch_bridges(self, square):
        square.place_bridge("b1", (1, 1), (3, 1))
        assert MustTouchAHorizontalBridge(2, 2).check(square).satisfied
        assert MustTouchAHorizontalBridge(2, 0).check(square).satisfied
        result = MustTouchAVerticalBridge(2, 2).check(square)
        assert not result.satisfied
        assert result.glyph_message == "no adjacent bridge"
        square.place_bridge("b2", (3, 1), (3, 3))
        assert MustTouchAVerticalBridge(2, 2).check(square).satisfied

    def test_must_have_water_without_flow(self, square):
        result = MustHaveWaterConstraint(2, 2).check(square)
        assert not result.satisfied
        assert result.affected_elements == ["2,2"]
