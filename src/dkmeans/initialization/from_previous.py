"""
Initialization from caller-supplied centroids.

Used to reproduce a run exactly, e.g. to compare the sequential and the
distributed algorithm from the same starting point.
"""

from typing import List, Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class FromPreviousInit(InitializationStrategy):
    """Initialize from a fixed list of centroids."""

    def __init__(self, centroids: Sequence[Tensor]):
        """
        Args:
            centroids: One tensor per cluster
        """
        self.centroids = [c.clone() for c in centroids]

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[Tensor]:
        if len(self.centroids) != n_clusters:
            raise ValueError(f"Expected {n_clusters} centroids, "
                             f"got {len(self.centroids)}")
        if points.shape[0] > 0:
            for i, c in enumerate(self.centroids):
                if c.shape != points.shape[1:]:
                    raise ValueError(f"Centroid {i} has shape {tuple(c.shape)}, "
                                     f"expected {tuple(points.shape[1:])}")
        return [c.to(points.dtype).clone() for c in self.centroids]
