"""
Coordinate element space: points in R^d (pairs by default).
"""

from typing import Any
import torch
from torch import Tensor

from ..base.interfaces import ElementSpace, DistanceMetric, ClusterAccumulator
from ..distances.euclidean import SquaredEuclideanDistance
from ..accumulators.coordinate import CoordinateAccumulator
from ..utils.validation import validate_data


class CoordinateSpace(ElementSpace):
    """Real-valued coordinates ranked by squared Euclidean distance."""

    def __init__(self, dimension: int = 2, dtype: torch.dtype = torch.float64):
        """
        Args:
            dimension: Coordinates per element
            dtype: Floating dtype used for elements and sums
        """
        if dimension < 1:
            raise ValueError(f"dimension must be positive, got {dimension}")
        self.dimension = dimension
        self.dtype = dtype
        self._metric = SquaredEuclideanDistance()

    @property
    def metric(self) -> DistanceMetric:
        return self._metric

    def new_accumulator(self) -> ClusterAccumulator:
        return CoordinateAccumulator(self.dimension, self.dtype)

    def prepare(self, records: Any) -> Tensor:
        """Convert a list of tuples, an array or a tensor to (n, d) floats."""
        X = validate_data(records, dtype=self.dtype)
        if X.shape[1] != self.dimension:
            raise ValueError(f"Expected {self.dimension} coordinates per record, "
                             f"got {X.shape[1]}")
        return X

    def format(self, element: Tensor) -> str:
        values = ", ".join(repr(float(v)) for v in element.tolist())
        return f"({values})"

    def __repr__(self) -> str:
        return f"CoordinateSpace(dimension={self.dimension})"
