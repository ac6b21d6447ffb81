"""Assignment strategies for clustering algorithms."""

from .hard import HardAssignment, assign_round

__all__ = [
    'HardAssignment',
    'assign_round'
]
