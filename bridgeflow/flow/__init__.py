"""
Water flow extension of the bridge puzzle.
"""

from .flow_types import FlowTile
from .connectivity import ConnectivityManager, ConnectivityState, ConnectivityTile
from .flow_puzzle import FlowPuzzle

__all__ = [
    'FlowTile',
    'FlowPuzzle',
    'ConnectivityManager',
    'ConnectivityState',
    'ConnectivityTile',
]
