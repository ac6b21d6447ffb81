"""
K-means clustering algorithm.

Single-process rendition of the coordinator/worker round: one process owns
every element, so the assignment pass and the aggregation happen in place
of the message exchange. For the same data order and the same initial
centroids it produces exactly the partition the distributed algorithm
produces.
"""

from typing import Optional
import time
import warnings
import torch
from torch import Tensor

from ..base.interfaces import ElementSpace, InitializationStrategy
from ..base.data_structures import (
    UNASSIGNED, RoundRecord, ClusteringResult, labels_from_clusters
)
from ..assignments.hard import assign_round
from ..utils.convergence import ChangeInAssignments
from .base import BaseClusteringAlgorithm


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions elements into K clusters by alternating nearest-centroid
    assignment with centroid recomputation until no element changes cluster
    or the round cap is reached.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    space : str or ElementSpace, optional
        'coordinates' (squared Euclidean distance, mean centroid) or
        'symbols' (Hamming distance, per-position majority). Inferred from
        the data when None.
    init : str or array-like, default='random'
        Initialization method:
        - 'random' : K distinct elements drawn from the dataset
        - K initial centroids in the same form as the data
    max_iter : int, default=100
        Maximum number of assignment rounds
    verbose : int, default=0
        Verbosity level
    random_state : int, optional
        Random seed for reproducibility

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Centroids of the final assignment round
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    clusters_ : list of Tensor
        Sorted member indices of every cluster
    inertia_ : float
        Total distance of every element to its cluster's centroid
    n_iter_ : int
        Number of assignment rounds run
    converged_ : bool
        Whether the last round left every element in place

    Examples
    --------
    >>> kmeans = KMeans(n_clusters=2, random_state=0)
    >>> labels = kmeans.fit_predict([(0.0, 0.0), (0.0, 1.0), (10.0, 10.0), (10.0, 11.0)])
    """

    def _run(self, points: Tensor, space: ElementSpace,
             init: InitializationStrategy,
             generator: Optional[torch.Generator]) -> ClusteringResult:
        n_points = points.shape[0]
        indices = torch.arange(n_points, dtype=torch.long)
        labels = torch.full((n_points,), UNASSIGNED, dtype=torch.long)

        centroids = init.initialize(points, self.n_clusters, generator)
        convergence = ChangeInAssignments()
        history = []
        start_time = time.time()

        for iteration in range(1, self.max_iter + 1):
            iter_start_time = time.time()

            labels, accumulators, n_changed = assign_round(
                space, points, indices, centroids, labels
            )
            converged = convergence.check({'n_changed': n_changed,
                                           'iteration': iteration})
            counts = [acc.count for acc in accumulators]
            history.append(RoundRecord(iteration=iteration, changed=n_changed > 0,
                                       converged=converged, counts=counts))

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: {n_changed} changed ({iter_time:.3f}s)")

            if converged or iteration == self.max_iter:
                break
            centroids = [acc.centroid() for acc in accumulators]

        total_time = time.time() - start_time
        if self.verbose:
            if converged:
                print(f"Converged at iteration {iteration}")
            else:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

        clusters = [torch.sort(acc.members).values for acc in accumulators]
        return ClusteringResult(
            centroids=[c.clone() for c in centroids],
            clusters=clusters,
            labels=labels_from_clusters(clusters, n_points),
            n_iter=iteration,
            converged=converged,
            history=history,
            accumulators=accumulators,
            metadata={'time': total_time}
        )
