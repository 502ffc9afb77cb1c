"""Utility functions and helpers."""

from genetic_drawing.utils.log import setup_logger
from genetic_drawing.utils.run_manager import RunManager, Run, RunMetadata

__all__ = [
    "setup_logger",
    "RunManager",
    "Run",
    "RunMetadata",
]
