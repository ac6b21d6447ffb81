"""
Random initialization strategy.

Selects random elements from the dataset as initial centroids.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class RandomInit(InitializationStrategy):
    """Random initialization by selecting elements from the dataset.

    Draws indices uniformly and redraws any index that was already chosen,
    so the k initial centroids come from k distinct dataset positions.
    """

    def select_indices(self, n_points: int, n_clusters: int,
                       generator: Optional[torch.Generator] = None) -> List[int]:
        """Draw n_clusters distinct indices in [0, n_points)."""
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        chosen: List[int] = []
        seen = set()
        while len(chosen) < n_clusters:
            index = int(torch.randint(n_points, (1,), generator=generator))
            if index in seen:
                continue
            seen.add(index)
            chosen.append(index)
        return chosen

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[Tensor]:
        """Initialize centroids with randomly chosen elements.

        Args:
            points: (n, m) elements
            n_clusters: Number of clusters
            generator: Random source for reproducible draws

        Returns:
            List of n_clusters centroid tensors (copies of dataset rows)
        """
        indices = self.select_indices(points.shape[0], n_clusters, generator)
        return [points[idx].clone() for idx in indices]
