"""
Base class and result type for puzzle constraints.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.puzzle import BridgePuzzle


@dataclass(frozen=True)
class ConstraintResult:
    """Outcome of a single constraint check"""
    satisfied: bool
    affected_elements: List[str] = field(default_factory=list)
    message: Optional[str] = None
    glyph_message: Optional[str] = None

    def __bool__(self):
        return self.satisfied


class Constraint(ABC):
    """A predicate over the live state of a puzzle"""

    # Parameter names that from_spec requires
    required_params: Sequence[str] = ()

    def __init__(self):
        self.id: Optional[str] = None
        self.description: Optional[str] = None
        self.violations: List[Any] = []

    @abstractmethod
    def check(self, puzzle: 'BridgePuzzle') -> ConstraintResult:
        """Evaluate the constraint against the puzzle without mutating it."""
        pass

    @classmethod
    def from_spec(cls, params: Optional[Dict[str, Any]] = None) -> 'Constraint':
        """Build the constraint from a loosely-typed parameter mapping"""
        params = params or {}
        cls._require(params)
        return cls()

    @classmethod
    def _require(cls, params: Dict[str, Any]):
        missing = [name for name in cls.required_params if name not in params]
        if missing:
            raise ValueError(f"{cls.__name__} missing parameters: {', '.join(missing)}")

    def _result(self, satisfied: bool, affected: List[str], message: Optional[str] = None,
                glyph_message: Optional[str] = None) -> ConstraintResult:
        self.violations = [] if satisfied else list(affected)
        return ConstraintResult(
            satisfied=satisfied,
            affected_elements=list(affected),
            message=None if satisfied else message,
            glyph_message=None if satisfied else glyph_message,
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self.id!r})"
