"""
Hard assignment strategy for K-means.

Assigns each element to its nearest centroid under the space's metric.
"""

from typing import List, Tuple
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric, ClusterAccumulator, ElementSpace
from ..base.data_structures import UNASSIGNED
from ..accumulators.base import accumulate


class HardAssignment:
    """Hard (discrete) assignment to the nearest centroid.

    Ties are broken in favour of the lowest cluster index, which keeps runs
    reproducible regardless of how the data is partitioned.
    """

    def compute_distances(self, points: Tensor, centroids: List[Tensor],
                          metric: DistanceMetric) -> Tensor:
        """Build the (n, k) distance matrix."""
        n_points = points.shape[0]
        n_clusters = len(centroids)

        distances = torch.zeros(n_points, n_clusters, dtype=torch.float64,
                                device=points.device)
        for k, centroid in enumerate(centroids):
            distances[:, k] = metric.compute(points, centroid).to(torch.float64)
        return distances

    def compute_assignments(self, points: Tensor, centroids: List[Tensor],
                            metric: DistanceMetric) -> Tensor:
        """Assign each element to its nearest centroid.

        Args:
            points: (n, m) elements
            centroids: k centroid tensors
            metric: Distance metric

        Returns:
            (n,) tensor of cluster indices
        """
        if len(centroids) == 0:
            raise ValueError("At least one centroid is required")
        if points.shape[0] == 0:
            return torch.empty(0, dtype=torch.long)

        distances = self.compute_distances(points, centroids, metric)
        # argmin returns the first minimal index
        return torch.argmin(distances, dim=1)


def assign_round(space: ElementSpace, points: Tensor, indices: Tensor,
                 centroids: List[Tensor], previous: Tensor
                 ) -> Tuple[Tensor, List[ClusterAccumulator], int]:
    """One local assignment pass over a block of elements.

    Assigns every element to its nearest centroid, folds it into a fresh
    accumulator for that cluster and counts how many elements moved.
    Elements that were still UNASSIGNED always count as moved.

    Args:
        space: Element space of the run
        points: (n, m) elements owned by the caller
        indices: (n,) their global dataset indices
        centroids: k current centroids
        previous: (n,) cluster index of each element from the last round

    Returns:
        (labels, accumulators, n_changed)
    """
    labels = HardAssignment().compute_assignments(points, centroids, space.metric)
    moved = (previous == UNASSIGNED) | (labels != previous)
    accumulators = accumulate(space, points, indices, labels, len(centroids))
    return labels, accumulators, int(moved.sum())
