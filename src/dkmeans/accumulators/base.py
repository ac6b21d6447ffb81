"""
Shared accumulator behaviour and helpers for folding labelled blocks.
"""

from typing import List, Sequence
import torch
from torch import Tensor

from ..base.interfaces import ClusterAccumulator, ElementSpace


class BaseAccumulator(ClusterAccumulator):
    """Membership bookkeeping common to all accumulators.

    Subclasses keep their aggregate in ``_fold`` / ``_combine``. Every update
    builds new tensors instead of writing in place, so a partial that was
    handed to a channel is never altered afterwards.
    """

    def __init__(self):
        self._members = torch.empty(0, dtype=torch.long)

    def reset(self) -> None:
        self._members = torch.empty(0, dtype=torch.long)
        self._reset_aggregate()

    def assign_many(self, points: Tensor, indices: Tensor) -> None:
        if points.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {points.dim()}D")
        indices = torch.as_tensor(indices, dtype=torch.long).reshape(-1)
        if indices.shape[0] != points.shape[0]:
            raise ValueError(f"Got {points.shape[0]} elements but "
                             f"{indices.shape[0]} indices")
        if points.shape[0] == 0:
            return

        self._fold(points)
        self._members = torch.cat([self._members, indices])

    def merge(self, other: ClusterAccumulator) -> 'BaseAccumulator':
        if type(other) is not type(self):
            raise ValueError(f"Cannot merge {type(other).__name__} "
                             f"into {type(self).__name__}")
        self._combine(other)
        self._members = torch.cat([self._members, other.members])
        return self

    @property
    def count(self) -> int:
        return int(self._members.shape[0])

    @property
    def members(self) -> Tensor:
        return self._members

    def _reset_aggregate(self) -> None:
        raise NotImplementedError

    def _fold(self, points: Tensor) -> None:
        raise NotImplementedError

    def _combine(self, other: 'BaseAccumulator') -> None:
        raise NotImplementedError


def accumulate(space: ElementSpace, points: Tensor, indices: Tensor,
               labels: Tensor, n_clusters: int) -> List[ClusterAccumulator]:
    """Fold a labelled block of elements into k fresh accumulators.

    Args:
        space: Element space providing the accumulator type
        points: (n, m) elements
        indices: (n,) global dataset index of each element
        labels: (n,) cluster index of each element
        n_clusters: Number of clusters k

    Returns:
        List of k accumulators
    """
    accumulators = [space.new_accumulator() for _ in range(n_clusters)]
    for k, accumulator in enumerate(accumulators):
        mask = labels == k
        if mask.any():
            accumulator.assign_many(points[mask], indices[mask])
    return accumulators


def merge_partials(space: ElementSpace,
                   partials: Sequence[Sequence[ClusterAccumulator]],
                   n_clusters: int) -> List[ClusterAccumulator]:
    """Merge several k-long accumulator arrays cluster by cluster.

    Args:
        space: Element space providing the accumulator type
        partials: One k-long list per contributor
        n_clusters: Number of clusters k

    Returns:
        List of k merged accumulators (the inputs are not modified)
    """
    merged = [space.new_accumulator() for _ in range(n_clusters)]
    for partial in partials:
        if len(partial) != n_clusters:
            raise ValueError(f"Expected {n_clusters} accumulators, "
                             f"got {len(partial)}")
        for accumulator, piece in zip(merged, partial):
            accumulator.merge(piece)
    return merged
