"""
Fixed pool of bridge tokens owned by a puzzle.
"""

from typing import Dict, List, Optional

from .bridge import Bridge, BridgeType, BridgeTypeSpec


class BridgeInventory:
    """Inventory of bridge tokens; the number of tokens never changes after construction"""

    def __init__(self, type_specs: List[BridgeTypeSpec]):
        self._bridges: List[Bridge] = []
        self._by_id: Dict[str, Bridge] = {}
        self._types: Dict[str, BridgeType] = {}

        counter = 0
        for spec in type_specs:
            self._types.setdefault(spec.bridge_type.id, spec.bridge_type)
            for _ in range(spec.count):
                counter += 1
                bridge = Bridge(id=f"b{counter}", type=spec.bridge_type)
                self._bridges.append(bridge)
                self._by_id[bridge.id] = bridge

    @property
    def bridges(self) -> List[Bridge]:
        """All bridges, whether placed or not"""
        return self._bridges

    @property
    def bridge_types(self) -> List[BridgeType]:
        """Declared bridge types, unique by id, in declaration order"""
        return list(self._types.values())

    def get_bridge_type(self, type_id: str) -> Optional[BridgeType]:
        return self._types.get(type_id)

    def get_bridge(self, bridge_id: str) -> Optional[Bridge]:
        return self._by_id.get(bridge_id)

    def get_available_of_type(self, type_id: str) -> List[Bridge]:
        """Unplaced bridges of a given type"""
        return [b for b in self._bridges if b.type.id == type_id and not b.is_placed]

    def take_bridge(self, type_id: str) -> Optional[Bridge]:
        """Next unplaced bridge of the given type, or None when exhausted"""
        available = self.get_available_of_type(type_id)
        return available[0] if available else None

    def return_bridge(self, bridge_id: str):
        """Clear a bridge's endpoints so it can be reused"""
        bridge = self._by_id.get(bridge_id)
        if bridge is None:
            raise ValueError(f"No such bridge {bridge_id}")
        bridge.clear()

    def counts_by_type(self) -> Dict[str, int]:
        """Number of unplaced bridges of every declared type (zero included)"""
        counts = {type_id: 0 for type_id in self._types}
        for bridge in self._bridges:
            if not bridge.is_placed:
                counts[bridge.type.id] += 1
        return counts

    def __len__(self):
        return len(self._bridges)

    def __repr__(self):
        return f"BridgeInventory({len(self._bridges)} bridges, {len(self._types)} types)"
