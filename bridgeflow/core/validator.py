"""
Validator running a puzzle's constraint set.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..constraints import ConstraintResult
from .puzzle import BridgePuzzle


@dataclass
class ConstraintOutcome:
    """Result of one constraint tagged with the constraint's identity"""
    constraint_id: Optional[str]
    constraint_type: str
    result: ConstraintResult


@dataclass
class ValidationResult:
    """Result of puzzle validation"""
    all_satisfied: bool = True
    per_constraint: List[ConstraintOutcome] = field(default_factory=list)
    unsatisfied_count: int = 0

    @property
    def errors(self) -> List[str]:
        """Messages of the unsatisfied constraints"""
        return [
            outcome.result.message or f"{outcome.constraint_type} not satisfied"
            for outcome in self.per_constraint if not outcome.result.satisfied
        ]

    def __bool__(self):
        return self.all_satisfied

    def __repr__(self):
        status = "Valid" if self.all_satisfied else "Invalid"
        return f"ValidationResult({status}, {self.unsatisfied_count} of {len(self.per_constraint)} unsatisfied)"


class PuzzleValidator:
    """Checks every constraint attached to a puzzle against its live state"""

    def __init__(self, puzzle: BridgePuzzle):
        self.puzzle = puzzle

    def validate_all(self) -> ValidationResult:
        result = ValidationResult()
        for constraint in self.puzzle.constraints:
            outcome = constraint.check(self.puzzle)
            result.per_constraint.append(
                ConstraintOutcome(constraint.id, constraint.__class__.__name__, outcome))
            if not outcome.satisfied:
                result.unsatisfied_count += 1
        result.all_satisfied = result.unsatisfied_count == 0
        return result

    def is_solved(self) -> bool:
        return self.validate_all().all_satisfied
