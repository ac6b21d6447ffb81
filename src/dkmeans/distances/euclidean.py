"""
Euclidean distance metric for coordinate clustering.

Only the ranking of distances matters when assigning elements, so the
square root is skipped.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class SquaredEuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - μ||² where μ is the cluster centroid.
    """

    def compute(self, points: Tensor, centroid: Tensor, **kwargs) -> Tensor:
        """Compute squared Euclidean distances from points to a centroid.

        Args:
            points: (n, d) tensor of points
            centroid: (d,) centroid

        Returns:
            (n,) tensor of squared distances
        """
        if centroid.dim() != 1 or centroid.shape[0] != points.shape[1]:
            raise ValueError(f"Centroid of shape {tuple(centroid.shape)} does not "
                             f"match points of dimension {points.shape[1]}")

        diff = points - centroid.to(points.dtype).unsqueeze(0)
        return torch.sum(diff * diff, dim=1)
