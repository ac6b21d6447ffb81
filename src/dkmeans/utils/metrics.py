"""
Clustering quality measures.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


def inertia(points: Tensor, labels: Tensor, centroids: List[Tensor],
            metric: DistanceMetric) -> float:
    """Total distance of every element to the centroid of its cluster.

    For coordinates with the squared Euclidean metric this is the usual
    within-cluster sum of squares; for symbol strings it is the total
    number of mismatched positions.

    Args:
        points: (n, m) elements
        labels: (n,) cluster indices
        centroids: k centroid tensors
        metric: Distance metric of the element space

    Returns:
        Objective value as a float
    """
    total = 0.0
    for k, centroid in enumerate(centroids):
        mask = labels == k
        if mask.any():
            total += float(metric.compute(points[mask], centroid).sum())
    return total
