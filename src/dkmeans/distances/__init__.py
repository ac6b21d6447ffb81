"""Distance metrics for clustering algorithms."""

from .euclidean import SquaredEuclideanDistance
from .hamming import HammingDistance

__all__ = [
    'SquaredEuclideanDistance',
    'HammingDistance'
]
