"""
Symbol-string element space: fixed-length strings over a small alphabet.

Strings are encoded as rows of alphabet codes so that distances and tallies
run as tensor operations.
"""

from typing import Any, List, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import ElementSpace, DistanceMetric, ClusterAccumulator
from ..base.errors import LengthMismatchError
from ..distances.hamming import HammingDistance
from ..accumulators.symbol import SymbolAccumulator


DNA_ALPHABET = "ACGT"


class SymbolSpace(ElementSpace):
    """Fixed-length strings ranked by Hamming distance.

    Examples
    --------
    >>> space = SymbolSpace("ACGT")
    >>> X = space.encode(["AAC", "TTA"])
    >>> space.decode(X[1])
    'TTA'
    """

    def __init__(self, alphabet: str = DNA_ALPHABET):
        """
        Args:
            alphabet: Ordered symbols; the order breaks majority-vote ties
        """
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError(f"alphabet has repeated symbols: {alphabet!r}")
        self.alphabet = alphabet
        self._codes = {symbol: code for code, symbol in enumerate(alphabet)}
        self._metric = HammingDistance()

    @property
    def n_symbols(self) -> int:
        return len(self.alphabet)

    @property
    def metric(self) -> DistanceMetric:
        return self._metric

    def new_accumulator(self) -> ClusterAccumulator:
        return SymbolAccumulator(self.n_symbols)

    def encode(self, strings: Sequence[str]) -> Tensor:
        """Encode strings of one common length to an (n, L) code tensor.

        Raises:
            LengthMismatchError: If the strings differ in length
            ValueError: On a symbol outside the alphabet
        """
        strings = list(strings)
        if not strings:
            return torch.empty(0, 0, dtype=torch.long)

        length = len(strings[0])
        rows = []
        for i, string in enumerate(strings):
            if len(string) != length:
                raise LengthMismatchError(f"Record {i} has length {len(string)}, "
                                          f"expected {length}")
            try:
                rows.append([self._codes[symbol] for symbol in string])
            except KeyError as e:
                raise ValueError(f"Record {i} contains symbol {e.args[0]!r} "
                                 f"outside alphabet {self.alphabet!r}") from None
        return torch.tensor(rows, dtype=torch.long).reshape(len(strings), length)

    def decode(self, codes: Tensor) -> Union[str, List[str]]:
        """Decode an (L,) tensor to a string, or an (n, L) tensor to a list."""
        if codes.dim() == 2:
            return [self.decode(row) for row in codes]
        return "".join(self.alphabet[int(c)] for c in codes.tolist())

    def prepare(self, records: Any) -> Tensor:
        """Accept a sequence of strings or an already encoded tensor."""
        if isinstance(records, Tensor):
            if records.dim() != 2:
                raise ValueError(f"Expected 2D tensor, got {records.dim()}D")
            X = records.long()
            if X.numel() and (X.min() < 0 or X.max() >= self.n_symbols):
                raise ValueError(f"Symbol codes must lie in [0, {self.n_symbols})")
            return X
        if isinstance(records, str):
            raise TypeError("Expected a sequence of strings, got a single string")
        return self.encode(records)

    def format(self, element: Tensor) -> str:
        return self.decode(element)

    def __repr__(self) -> str:
        return f"SymbolSpace(alphabet={self.alphabet!r})"
