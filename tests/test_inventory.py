"""Tests for bridge types and the bridge inventory."""

import pytest

from bridgeflow.core import BridgeInventory, BridgeType, BridgeTypeSpec, GridPoint


class TestBridgeInventory:
    """Test token allocation and return."""

    @pytest.fixture
    def inventory(self):
        return BridgeInventory([
            BridgeTypeSpec(BridgeType(id="wood"), count=2),
            BridgeTypeSpec(BridgeType(id="stone", length=3), count=1),
        ])

    def test_ids_assigned_in_declaration_order(self, inventory):
        assert [b.id for b in inventory.bridges] == ["b1", "b2", "b3"]
        assert [b.type.id for b in inventory.bridges] == ["wood", "wood", "stone"]
        assert len(inventory) == 3

    def test_take_returns_first_unplaced(self, inventory):
        first = inventory.take_bridge("wood")
        assert first.id == "b1"
        first.start, first.end = GridPoint(0, 0), GridPoint(2, 0)
        assert inventory.take_bridge("wood").id == "b2"

    def test_take_signals_exhaustion(self, inventory):
        stone = inventory.take_bridge("stone")
        stone.start, stone.end = GridPoint(0, 0), GridPoint(3, 0)
        assert inventory.take_bridge("stone") is None
        assert inventory.take_bridge("missing") is None

    def test_return_clears_endpoints(self, inventory):
        bridge = inventory.get_bridge("b3")
        bridge.start, bridge.end = GridPoint(0, 0), GridPoint(3, 0)
        inventory.return_bridge("b3")
        assert not bridge.is_placed
        assert bridge.start is None and bridge.end is None

    def test_return_unknown_bridge_raises(self, inventory):
        with pytest.raises(ValueError):
            inventory.return_bridge("b99")

    def test_counts_include_exhausted_types(self, inventory):
        stone = inventory.get_bridge("b3")
        stone.start, stone.end = GridPoint(0, 0), GridPoint(3, 0)
        assert inventory.counts_by_type() == {"wood": 2, "stone": 0}

    def test_token_count_never_changes(self, inventory):
        bridge = inventory.take_bridge("wood")
        bridge.start, bridge.end = GridPoint(0, 0), GridPoint(1, 0)
        inventory.return_bridge(bridge.id)
        assert len(inventory.bridges) == 3

    def test_bridge_types_unique(self):
        wood = BridgeType(id="wood")
        inventory = BridgeInventory([BridgeTypeSpec(wood, 1), BridgeTypeSpec(wood, 2)])
        assert [t.id for t in inventory.bridge_types] == ["wood"]
        assert len(inventory) == 3


class TestBridgeType:
    """Test span legality of bridge types."""

    def test_variable_length_allows_any_span(self):
        bridge_type = BridgeType(id="rope")
        assert not bridge_type.has_length()
        assert bridge_type.allows_span(GridPoint(0, 0), GridPoint(7, 0))

    def test_fixed_length_within_tolerance(self):
        bridge_type = BridgeType(id="stone", length=3)
        assert bridge_type.allows_span(GridPoint(0, 0), GridPoint(3, 0))
        assert not bridge_type.allows_span(GridPoint(0, 0), GridPoint(2, 0))

    def test_span_predicate_is_authoritative(self):
        diagonal = BridgeType(
            id="diag", length=3,
            span_predicate=lambda s, e: abs(e.x - s.x) == abs(e.y - s.y),
        )
        assert diagonal.allows_span(GridPoint(0, 0), GridPoint(2, 2))
        assert not diagonal.allows_span(GridPoint(0, 0), GridPoint(3, 0))

    def test_spec_from_dict(self):
        spec = BridgeTypeSpec.from_dict({"id": "wood", "color": "brown", "length": 2,
                                         "mustCoverIsland": True})
        assert spec.count == 1
        assert spec.bridge_type.colour == "brown"
        assert spec.bridge_type.length == 2
        assert spec.bridge_type.must_cover_island

    def test_spec_without_id_raises(self):
        with pytest.raises(ValueError):
            BridgeTypeSpec.from_dict({"length": 2})
