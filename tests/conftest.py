"""Shared fixtures for the bridgeflow test suite."""

import pytest

from bridgeflow.config import set_config
from bridgeflow.core import BridgePuzzle, BridgeType, BridgeTypeSpec, Island


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the default configuration."""
    config = set_config(None)
    yield config
    set_config(None)


@pytest.fixture
def wood_puzzle():
    """4x4 grid, islands at (1,1) and (3,1), one variable-length wood bridge."""
    return BridgePuzzle(
        width=4, height=4,
        islands=[Island("A", 1, 1), Island("B", 3, 1)],
        bridge_types=[BridgeTypeSpec(BridgeType(id="wood"), count=1)],
        puzzle_id="wood",
    )


@pytest.fixture
def cross_puzzle():
    """5x5 grid with islands in a plus shape around an empty centre."""
    islands = [
        Island("W", 0, 2),
        Island("E", 4, 2),
        Island("N", 2, 0),
        Island("S", 2, 4),
        Island("C", 4, 4),
    ]
    return BridgePuzzle(
        width=5, height=5,
        islands=islands,
        bridge_types=[BridgeTypeSpec(BridgeType(id="plank"), count=4)],
        puzzle_id="cross",
    )
