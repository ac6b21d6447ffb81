"""Clustering algorithm implementations."""

from .base import BaseClusteringAlgorithm
from .kmeans import KMeans
from .parallel_kmeans import ParallelKMeans

__all__ = [
    'BaseClusteringAlgorithm',
    'KMeans',
    'ParallelKMeans'
]
