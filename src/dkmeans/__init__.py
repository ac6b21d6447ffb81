"""
dkmeans: K-means clustering over a coordinator and a group of workers.

This package clusters two kinds of elements with one aggregation contract:
- 2D points (squared Euclidean distance, mean centroid)
- Fixed-length DNA strands (Hamming distance, per-position majority)

Each worker owns one contiguous slice of the dataset. The coordinator
broadcasts centroids, collects per-cluster partial statistics and decides
when to stop. Single-process, multi-process, multi-thread, torch.distributed
and MPI executions all produce the same partition from the same start.

Example usage:
    >>> import torch
    >>> from dkmeans import KMeans, ParallelKMeans
    >>>
    >>> X = torch.randn(1000, 2)
    >>>
    >>> # Sequential
    >>> kmeans = KMeans(n_clusters=5, random_state=0).fit(X)
    >>>
    >>> # Same clustering with 4 worker processes
    >>> pkm = ParallelKMeans(n_clusters=5, n_workers=4, random_state=0).fit(X)
    >>> bool((kmeans.labels_ == pkm.labels_).all())
    True
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms import KMeans, ParallelKMeans

# Element spaces
from .spaces import CoordinateSpace, SymbolSpace, DNA_ALPHABET

# Distributed building blocks
from .distributed import (
    Coordinator,
    Worker,
    QueueChannel,
    create_participant,
    run_group,
    run_participant
)

# Input / output
from .io import (
    read_points,
    read_symbols,
    write_clusters,
    generate_dna,
    generate_points
)

# Visualization
from .visualization import plot_clusters_2d

# Convenience imports
from .base import (
    ClusteringResult,
    WorkerReport,
    LengthMismatchError,
    ProtocolError
)

__all__ = [
    # Algorithms
    'KMeans',
    'ParallelKMeans',

    # Spaces
    'CoordinateSpace',
    'SymbolSpace',
    'DNA_ALPHABET',

    # Distributed
    'Coordinator',
    'Worker',
    'QueueChannel',
    'create_participant',
    'run_group',
    'run_participant',

    # I/O
    'read_points',
    'read_symbols',
    'write_clusters',
    'generate_dna',
    'generate_points',

    # Visualization
    'plot_clusters_2d',

    # Core data structures
    'ClusteringResult',
    'WorkerReport',
    'LengthMismatchError',
    'ProtocolError',

    # Version
    '__version__'
]
