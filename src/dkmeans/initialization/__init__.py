"""Initialization strategies for clustering algorithms."""

from .random import RandomInit
from .from_previous import FromPreviousInit

__all__ = [
    'RandomInit',
    'FromPreviousInit'
]
