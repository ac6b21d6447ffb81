"""
Core data structures for the distributed K-means algorithms.

This module provides the message envelope exchanged between participants,
the data partition owned by a worker, and the containers returned to callers.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum
import torch
from torch import Tensor


# Cluster index of an element that has not been assigned yet. Distinct from
# every valid index 0..k-1, so the first round always counts as a change.
UNASSIGNED = -1


class Phase(Enum):
    """The four steps of one coordinator/worker round."""

    BROADCAST = 1        # coordinator -> worker: current centroids
    VOTE = 2             # worker -> coordinator: did any local label change
    STOP = 3             # coordinator -> worker: stop or continue
    REPORT_PARTIAL = 4   # worker -> coordinator: k local accumulators


@dataclass(frozen=True)
class Message:
    """Envelope carried by a Channel.

    The phase travels with the payload so a receiver can reject anything
    sent out of order instead of misreading it.
    """
    phase: Phase
    round: int
    payload: Any = None


@dataclass(frozen=True)
class Partition:
    """Contiguous half-open range [start, end) of dataset indices."""
    rank: int
    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start <= self.end:
            raise ValueError(f"Invalid partition range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def indices(self) -> Tensor:
        """Global dataset indices covered by this partition."""
        return torch.arange(self.start, self.end, dtype=torch.long)

    def take(self, points: Tensor) -> Tensor:
        """Rows of ``points`` owned by this partition."""
        return points[self.start:self.end]


@dataclass
class RoundRecord:
    """What happened in one round; used for logging and tests."""
    iteration: int
    changed: bool
    converged: bool
    counts: List[int] = field(default_factory=list)


@dataclass
class ClusteringResult:
    """Authoritative cluster state at termination.

    Attributes:
        centroids: The k centroids the final assignment was made against
        clusters: k sorted (m_j,) tensors of member indices
        labels: (n,) cluster index per element
        n_iter: Number of assignment rounds executed
        converged: Whether the last round produced no membership change
        history: One RoundRecord per round
        accumulators: The k merged accumulators the result was built from
    """
    centroids: List[Tensor]
    clusters: List[Tensor]
    labels: Tensor
    n_iter: int
    converged: bool
    history: List[RoundRecord] = field(default_factory=list)
    accumulators: List[Any] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_clusters(self) -> int:
        return len(self.clusters)

    @property
    def counts(self) -> List[int]:
        """Member count per cluster."""
        return [len(members) for members in self.clusters]

    def members_of(self, points: Tensor, cluster_idx: int) -> Tensor:
        """Rows of ``points`` that belong to one cluster."""
        return points[self.clusters[cluster_idx]]


@dataclass
class WorkerReport:
    """A worker's view of the run after it stopped."""
    rank: int
    partition: Partition
    rounds: int
    labels: Tensor
    metadata: Dict[str, Any] = field(default_factory=dict)


def labels_from_clusters(clusters: List[Tensor], n_points: int,
                         check_coverage: bool = True) -> Tensor:
    """Build an (n,) label tensor from per-cluster member indices.

    Args:
        clusters: k tensors of member indices
        n_points: Dataset size
        check_coverage: Require every index to appear exactly once

    Raises:
        RuntimeError: If coverage is checked and members are missing or
            duplicated
    """
    labels = torch.full((n_points,), UNASSIGNED, dtype=torch.long)
    seen = torch.zeros(n_points, dtype=torch.long)
    for k, members in enumerate(clusters):
        labels[members] = k
        seen.index_add_(0, members, torch.ones_like(members))

    if check_coverage and not bool((seen == 1).all()):
        missing = int((seen == 0).sum())
        duplicated = int((seen > 1).sum())
        raise RuntimeError(
            f"Cluster membership is not a partition of the dataset: "
            f"{missing} missing, {duplicated} duplicated")
    return labels
