"""Per-cluster running statistics."""

from .base import BaseAccumulator, accumulate, merge_partials
from .coordinate import CoordinateAccumulator
from .symbol import SymbolAccumulator

__all__ = [
    'BaseAccumulator',
    'CoordinateAccumulator',
    'SymbolAccumulator',
    'accumulate',
    'merge_partials'
]
