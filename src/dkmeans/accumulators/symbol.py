"""
Majority-vote accumulator for fixed-length symbol strings.
"""

from typing import Optional
import torch
from torch import Tensor
import torch.nn.functional as F

from .base import BaseAccumulator
from ..base.errors import LengthMismatchError


class SymbolAccumulator(BaseAccumulator):
    """Per-position symbol frequencies for one cluster.

    The tally is an (L, A) count matrix over a fixed alphabet of A symbols.
    The string length L is taken from the first element folded in.
    """

    def __init__(self, n_symbols: int, length: Optional[int] = None):
        """
        Args:
            n_symbols: Alphabet size A
            length: String length L (learned from the first element if None)
        """
        self._n_symbols = n_symbols
        self._length = length
        super().__init__()
        self._reset_aggregate()

    @property
    def n_symbols(self) -> int:
        return self._n_symbols

    @property
    def length(self) -> Optional[int]:
        return self._length

    @property
    def tally(self) -> Optional[Tensor]:
        """(L, A) symbol counts, or None before anything was folded in."""
        return self._tally

    def centroid(self) -> Tensor:
        """Majority symbol at every position.

        Candidates are scanned in alphabet order and the first symbol that
        reaches the maximum count wins. An empty cluster yields the empty
        string, which is a known limitation kept for output compatibility.
        """
        if self.count == 0 or self._tally is None:
            return torch.empty(0, dtype=torch.long)
        # argmax returns the first maximal index
        return self._tally.argmax(dim=1)

    def _reset_aggregate(self) -> None:
        self._tally = None

    def _check_length(self, length: int) -> None:
        if self._length is None:
            self._length = length
        elif length != self._length:
            raise LengthMismatchError(f"Expected strings of length {self._length}, "
                                      f"got {length}")

    def _fold(self, points: Tensor) -> None:
        self._check_length(points.shape[1])
        if points.numel() and (points.min() < 0 or points.max() >= self._n_symbols):
            raise ValueError(f"Symbol codes must lie in [0, {self._n_symbols})")

        counts = F.one_hot(points.long(), num_classes=self._n_symbols).sum(dim=0)
        self._tally = counts if self._tally is None else self._tally + counts

    def _combine(self, other: 'SymbolAccumulator') -> None:
        if other.n_symbols != self._n_symbols:
            raise ValueError(f"Cannot merge an alphabet of {other.n_symbols} "
                             f"symbols into one of {self._n_symbols}")
        if other.tally is None:
            return
        self._check_length(other.length)
        self._tally = other.tally.clone() if self._tally is None else self._tally + other.tally

    def __repr__(self) -> str:
        return (f"SymbolAccumulator(length={self._length}, "
                f"n_symbols={self._n_symbols}, count={self.count})")
