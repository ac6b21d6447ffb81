"""Base classes and interfaces for distributed K-means clustering."""

from .interfaces import (
    DistanceMetric,
    ClusterAccumulator,
    ElementSpace,
    InitializationStrategy,
    ConvergenceCriterion,
    Channel,
    Participant
)

from .data_structures import (
    UNASSIGNED,
    Phase,
    Message,
    Partition,
    RoundRecord,
    ClusteringResult,
    WorkerReport,
    labels_from_clusters
)

from .errors import LengthMismatchError, ProtocolError

__all__ = [
    # Interfaces
    'DistanceMetric',
    'ClusterAccumulator',
    'ElementSpace',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'Channel',
    'Participant',

    # Data structures
    'UNASSIGNED',
    'Phase',
    'Message',
    'Partition',
    'RoundRecord',
    'ClusteringResult',
    'WorkerReport',
    'labels_from_clusters',

    # Errors
    'LengthMismatchError',
    'ProtocolError'
]
