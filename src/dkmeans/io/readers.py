"""
Dataset readers for the two input formats.

* Points: one comma-separated record per line; the first two fields are
  the x and y coordinates.
* DNA strands: one string per line.
"""

from typing import List, Union
import os
import numpy as np
import torch
from torch import Tensor

PathLike = Union[str, os.PathLike]


def read_points(path: PathLike, delimiter: str = ',', dimension: int = 2) -> Tensor:
    """Read a CSV of coordinates.

    Args:
        path: Input file
        delimiter: Field separator
        dimension: Number of leading fields used per record

    Returns:
        (n, dimension) float64 tensor, in file order

    Raises:
        ValueError: If a record has too few or non-numeric fields
    """
    data = np.loadtxt(path, delimiter=delimiter, usecols=range(dimension),
                      dtype=np.float64, ndmin=2)
    if data.size == 0:
        data = data.reshape(0, dimension)
    return torch.from_numpy(data)


def read_symbols(path: PathLike) -> List[str]:
    """Read one string per line, skipping blank lines.

    Args:
        path: Input file

    Returns:
        List of stripped strings, in file order
    """
    with open(path, 'r') as f:
        return [line.strip() for line in f if line.strip()]
