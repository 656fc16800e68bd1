"""
Constraints for bridge puzzles.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from ..config import get_config
from ..core.utils import setup_logger
from .base import Constraint, ConstraintResult
from .bridge_constraints import (
    AllBridgesPlacedConstraint, NoCrossingConstraint,
    BridgeLengthConstraint, BridgeMustCoverIslandConstraint
)
from .island_constraints import (
    IslandBridgeCountConstraint, IslandsConnectedConstraint,
    IslandMustBeCoveredConstraint, IslandColourSeparationConstraint,
    IslandDirectionalBridgeConstraint, IslandPassingBridgeCountConstraint,
    IslandVisibilityConstraint
)
from .grid_constraints import (
    GridCellConstraint, MustHaveWaterConstraint, EnclosedAreaSizeConstraint,
    MustTouchAHorizontalBridge, MustTouchAVerticalBridge
)

__all__ = [
    # Base classes
    'Constraint',
    'ConstraintResult',
    'GridCellConstraint',

    # Bridge constraints
    'AllBridgesPlacedConstraint',
    'NoCrossingConstraint',
    'BridgeLengthConstraint',
    'BridgeMustCoverIslandConstraint',

    # Island constraints
    'IslandBridgeCountConstraint',
    'IslandsConnectedConstraint',
    'IslandMustBeCoveredConstraint',
    'IslandColourSeparationConstraint',
    'IslandDirectionalBridgeConstraint',
    'IslandPassingBridgeCountConstraint',
    'IslandVisibilityConstraint',

    # Grid cell constraints
    'MustHaveWaterConstraint',
    'EnclosedAreaSizeConstraint',
    'MustTouchAHorizontalBridge',
    'MustTouchAVerticalBridge',

    # Factory
    'CONSTRAINT_REGISTRY',
    'get_constraint_class',
    'create_constraints_from_spec',
]


# Constraint registry keyed by specification type tag
CONSTRAINT_REGISTRY = {
    'AllBridgesPlacedConstraint': AllBridgesPlacedConstraint,
    'NoCrossingConstraint': NoCrossingConstraint,
    'BridgeLengthConstraint': BridgeLengthConstraint,
    'BridgeMustCoverIslandConstraint': BridgeMustCoverIslandConstraint,
    'IslandBridgeCountConstraint': IslandBridgeCountConstraint,
    'IslandsConnectedConstraint': IslandsConnectedConstraint,
    'IslandMustBeCoveredConstraint': IslandMustBeCoveredConstraint,
    'IslandColourSeparationConstraint': IslandColourSeparationConstraint,
    'IslandColorSeparationConstraint': IslandColourSeparationConstraint,
    'IslandDirectionalBridgeConstraint': IslandDirectionalBridgeConstraint,
    'IslandPassingBridgeCountConstraint': IslandPassingBridgeCountConstraint,
    'IslandVisibilityConstraint': IslandVisibilityConstraint,
    'MustHaveWaterConstraint': MustHaveWaterConstraint,
    'EnclosedAreaSizeConstraint': EnclosedAreaSizeConstraint,
    'MustTouchAHorizontalBridge': MustTouchAHorizontalBridge,
    'MustTouchAVerticalBridge': MustTouchAVerticalBridge,
}

logger = setup_logger("ConstraintFactory")


def get_constraint_class(name: str):
    """
    Get a constraint class by its specification type tag.

    Raises:
        ValueError: If the type tag is not recognized
    """
    constraint_class = CONSTRAINT_REGISTRY.get(name)
    if not constraint_class:
        raise ValueError(f"Unknown constraint type: {name}. Available: {list(CONSTRAINT_REGISTRY.keys())}")
    return constraint_class


def create_constraints_from_spec(specs: Optional[Iterable[Union[Dict[str, Any], Constraint]]],
                                 strict: Optional[bool] = None) -> List[Constraint]:
    """
    Build constraints from {type, params, id?} specifications.

    Already-built Constraint instances pass through unchanged. In strict mode
    (the configured default) an unknown type raises ValueError; otherwise it
    is logged and skipped.
    """
    if strict is None:
        strict = get_config().strict_constraints

    constraints: List[Constraint] = []
    for spec in specs or []:
        if isinstance(spec, Constraint):
            constraints.append(spec)
            continue

        type_name = spec.get('type')
        try:
            constraint_class = get_constraint_class(type_name)
        except ValueError:
            if strict:
                raise
            logger.warning(f"Skipping unknown constraint type: {type_name}")
            continue

        constraint = constraint_class.from_spec(spec.get('params'))
        constraint.id = spec.get('id', constraint.id)
        constraints.append(constraint)

    return constraints
