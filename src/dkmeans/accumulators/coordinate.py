"""
Sum-and-count accumulator for coordinate clusters.

The simplest aggregate: the centroid is the mean of the members, so the
per-axis sums and the member count are enough to derive it.
"""

import torch
from torch import Tensor

from .base import BaseAccumulator


class CoordinateAccumulator(BaseAccumulator):
    """Per-axis coordinate sums and member count for one cluster.

    Used in coordinate K-means, where partial sums from different workers
    simply add up.
    """

    def __init__(self, dimension: int = 2, dtype: torch.dtype = torch.float64):
        """
        Args:
            dimension: Number of coordinates per element
            dtype: Floating dtype of the running sums
        """
        self._dimension = dimension
        self._dtype = dtype
        super().__init__()
        self._reset_aggregate()

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def sums(self) -> Tensor:
        """(d,) per-axis sums of the members."""
        return self._sums

    def centroid(self) -> Tensor:
        """Mean of the members.

        An empty cluster yields the origin. This matches earlier releases
        and is kept for output compatibility; it is a known limitation, not
        a modelling choice.
        """
        if self.count == 0:
            return torch.zeros(self._dimension, dtype=self._dtype)
        return self._sums / self.count

    def _reset_aggregate(self) -> None:
        self._sums = torch.zeros(self._dimension, dtype=self._dtype)

    def _fold(self, points: Tensor) -> None:
        if points.shape[1] != self._dimension:
            raise ValueError(f"Expected dimension {self._dimension}, "
                             f"got {points.shape[1]}")
        self._sums = self._sums + points.to(self._dtype).sum(dim=0)

    def _combine(self, other: 'CoordinateAccumulator') -> None:
        if other.dimension != self._dimension:
            raise ValueError(f"Cannot merge dimension {other.dimension} "
                             f"into dimension {self._dimension}")
        self._sums = self._sums + other.sums.to(self._dtype)

    def __repr__(self) -> str:
        return (f"CoordinateAccumulator(dimension={self._dimension}, "
                f"count={self.count})")
