"""
Constraints over the placed bridges themselves.
"""

from itertools import combinations
from typing import Any, Dict, List, Optional, Tuple

from ..config import get_config
from ..core.geometry import segments_intersect
from .base import Constraint, ConstraintResult


class AllBridgesPlacedConstraint(Constraint):
    """Every inventory token must be placed"""

    def check(self, puzzle) -> ConstraintResult:
        unplaced = [b.id for b in puzzle.bridges if not b.is_placed]
        return self._result(
            not unplaced, unplaced,
            f"Some bridges are unplaced: {', '.join(unplaced)}",
        )


class NoCrossingConstraint(Constraint):
    """
    No two placed bridges may cross.

    Bridges sharing any endpoint are exempt regardless of geometry. Every
    crossing pair is reported.
    """

    def check(self, puzzle) -> ConstraintResult:
        pairs: List[Tuple[str, str]] = []
        for b1, b2 in combinations(puzzle.placed_bridges, 2):
            if self.cross(b1.start, b1.end, b2.start, b2.end):
                pairs.append((b1.id, b2.id))

        affected = list(dict.fromkeys(bid for pair in pairs for bid in pair))
        result = self._result(
            not pairs, affected,
            "Crossing bridges detected: " + ", ".join(f"{a}:{b}" for a, b in pairs),
        )
        self.violations = pairs
        return result

    @staticmethod
    def cross(a1, a2, b1, b2) -> bool:
        shares_endpoint = a1 in (b1, b2) or a2 in (b1, b2)
        if shares_endpoint:
            return False
        return segments_intersect(a1, a2, b1, b2)


class BridgeLengthConstraint(Constraint):
    """Placed bridges of one type must have the expected Euclidean length"""

    required_params = ('typeId', 'length')

    def __init__(self, type_id: str, expected_length: float):
        super().__init__()
        self.type_id = type_id
        self.expected_length = expected_length

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'BridgeLengthConstraint':
        params = params or {}
        cls._require(params)
        return cls(str(params['typeId']), float(params['length']))

    def check(self, puzzle) -> ConstraintResult:
        tolerance = get_config().length_tolerance
        violations = [
            b.id for b in puzzle.placed_bridges
            if b.type.id == self.type_id and abs(b.length - self.expected_length) > tolerance
        ]
        return self._result(
            not violations, violations,
            f"Bridge length mismatch for type {self.type_id}: {', '.join(violations)}",
        )


class BridgeMustCoverIslandConstraint(Constraint):
    """Placed bridges whose type must cover an island pass over at least one island"""

    def check(self, puzzle) -> ConstraintResult:
        island_positions = {island.position for island in puzzle.islands}
        violations = [
            b.id for b in puzzle.placed_bridges
            if b.type.must_cover_island and not island_positions.intersection(b.covered_tiles())
        ]
        plural = '' if len(violations) == 1 else 's'
        return self._result(
            not violations, violations,
            f"Bridge{plural} must cover island{plural}: {', '.join(violations)}",
            "not island under bridge",
        )
