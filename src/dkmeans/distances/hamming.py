"""
Hamming distance metric for fixed-length symbol strings.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..base.errors import LengthMismatchError


class HammingDistance(DistanceMetric):
    """Number of positions at which two equal-length strings differ.

    Strings are (L,) tensors of symbol codes. A zero-length centroid is the
    placeholder an empty cluster leaves behind; it sits at the maximal
    distance L from every string, so it only wins a tie on index order.
    """

    def compute(self, points: Tensor, centroid: Tensor, **kwargs) -> Tensor:
        """Count mismatched positions between each string and the centroid.

        Args:
            points: (n, L) tensor of symbol codes
            centroid: (L,) tensor of symbol codes, or an empty tensor

        Returns:
            (n,) tensor of mismatch counts

        Raises:
            LengthMismatchError: If the centroid is non-empty and its length
                differs from L
        """
        n_points, length = points.shape

        if centroid.numel() == 0:
            return torch.full((n_points,), length, dtype=torch.long,
                              device=points.device)

        if centroid.dim() != 1 or centroid.shape[0] != length:
            raise LengthMismatchError(
                f"Cannot compare strings of length {length} with a centroid "
                f"of length {centroid.shape[-1]}")

        return (points != centroid.unsqueeze(0)).sum(dim=1)
