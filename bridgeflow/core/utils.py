"""
Utility functions for the bridgeflow puzzle core.
"""

import logging
import time
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_config


def setup_logger(name: str, log_file: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level, defaults to the configured level

    Returns:
        Configured logger
    """
    config = get_config()
    level = (level or config.log_level).upper()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))

    # Remove existing handlers
    logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level))

    # Formatter
    formatter = logging.Formatter(config.log_format, datefmt=config.log_date_format)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Use the logger of the first argument (instance or class) when present
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")
        else:
            logging.getLogger(func.__module__).debug(
                f"{func.__name__} took {execution_time:.3f} seconds")

        return result
    return wrapper


def calculate_bridge_stats(puzzle) -> Dict[str, Any]:
    """Calculate statistics for the bridges of a puzzle"""
    placed = puzzle.placed_bridges
    per_type: Dict[str, int] = {bt.id: 0 for bt in puzzle.get_available_bridge_types()}
    for bridge in placed:
        per_type[bridge.type.id] = per_type.get(bridge.type.id, 0) + 1

    stats = {
        'total_bridges': len(puzzle.bridges),
        'placed_bridges': len(placed),
        'unplaced_bridges': len(puzzle.bridges) - len(placed),
        'placed_by_type': per_type,
        'all_placed': puzzle.all_bridges_placed(),
    }

    # Euclidean lengths of placed bridges
    if placed:
        lengths = [bridge.length for bridge in placed]
        stats['avg_bridge_length'] = sum(lengths) / len(lengths)
        stats['max_bridge_length'] = max(lengths)
        stats['min_bridge_length'] = min(lengths)
    else:
        stats['avg_bridge_length'] = 0
        stats['max_bridge_length'] = 0
        stats['min_bridge_length'] = 0

    return stats
