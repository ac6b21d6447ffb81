"""
Core interfaces for the distributed K-means package.

This module defines the abstract base classes shared by the sequential and
the multi-process algorithms, so that both element types (coordinate points
and fixed-length symbol strings) flow through one aggregation contract.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import torch
from torch import Tensor

from .data_structures import Message
from .errors import ProtocolError


class DistanceMetric(ABC):
    """Abstract base class for element-to-centroid dissimilarities.

    Distances are only ever used for ranking, so any monotone transform of a
    true distance (e.g. the squared Euclidean distance) is acceptable.
    """

    @abstractmethod
    def compute(self, points: Tensor, centroid: Tensor, **kwargs) -> Tensor:
        """Compute distances from points to one centroid.

        Args:
            points: (n, m) tensor of elements
            centroid: (m,) tensor holding one cluster representative
            **kwargs: Metric-specific parameters

        Returns:
            (n,) tensor of non-negative distances
        """
        pass


class ClusterAccumulator(ABC):
    """Running statistics for one cluster during one round.

    Holds the members assigned this round (as global dataset indices) and an
    aggregate from which the next centroid is derived without rescanning
    the members.
    """

    @abstractmethod
    def reset(self) -> None:
        """Clear membership and aggregate."""
        pass

    @abstractmethod
    def assign_many(self, points: Tensor, indices: Tensor) -> None:
        """Fold a block of elements into this cluster.

        Args:
            points: (m, d) tensor of elements
            indices: (m,) tensor of their global dataset indices
        """
        pass

    def assign(self, element: Tensor, index: int) -> None:
        """Fold a single element into this cluster."""
        self.assign_many(element.unsqueeze(0),
                         torch.tensor([index], dtype=torch.long))

    @abstractmethod
    def merge(self, other: 'ClusterAccumulator') -> 'ClusterAccumulator':
        """Combine another partial for the same cluster into this one.

        ``other`` is left untouched. Returns ``self``.
        """
        pass

    @abstractmethod
    def centroid(self) -> Tensor:
        """Derive a new representative from the aggregate."""
        pass

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of members currently held."""
        pass

    @property
    @abstractmethod
    def members(self) -> Tensor:
        """(count,) tensor of member indices."""
        pass


class ElementSpace(ABC):
    """Everything that differs between element types.

    A space knows how to turn raw records into a tensor, which metric ranks
    elements against centroids, which accumulator aggregates them, and how
    to render one element for reports.
    """

    @property
    @abstractmethod
    def metric(self) -> DistanceMetric:
        """Distance metric for this element type."""
        pass

    @abstractmethod
    def new_accumulator(self) -> ClusterAccumulator:
        """Create an empty accumulator for one cluster."""
        pass

    @abstractmethod
    def prepare(self, records: Any) -> Tensor:
        """Validate raw records and convert them to an (n, m) tensor."""
        pass

    @abstractmethod
    def format(self, element: Tensor) -> str:
        """Human-readable rendering of one element or centroid."""
        pass


class InitializationStrategy(ABC):
    """Abstract base class for choosing the initial centroids."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[Tensor]:
        """Choose initial centroids.

        Args:
            points: (n, m) tensor of elements
            n_clusters: Number of clusters to initialize
            generator: Random source; ambient torch state when None

        Returns:
            List of n_clusters centroid tensors
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class Channel(ABC):
    """Point-to-point, blocking message passing between participants.

    Messages between one fixed pair of ranks are delivered in send order.
    Nothing is guaranteed across different peers. There is no timeout:
    a receive blocks until the peer's next message arrives.
    """

    @property
    @abstractmethod
    def rank(self) -> int:
        """This participant's rank; 0 is the coordinator."""
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        """Total number of participants."""
        pass

    @abstractmethod
    def send(self, message: Any, dst: int) -> None:
        """Send an envelope to ``dst``."""
        pass

    @abstractmethod
    def _receive(self, src: int) -> Any:
        """Block for the next envelope from ``src``."""
        pass

    def recv(self, src: int, phase: Any) -> Any:
        """Receive the next envelope from ``src`` and check its phase.

        Raises:
            ProtocolError: If the peer sent something other than ``phase``
        """
        message = self._receive(src)
        if not isinstance(message, Message):
            raise ProtocolError(
                f"rank {self.rank} expected a {phase.name} envelope from "
                f"rank {src}, got {type(message).__name__}")
        if message.phase is not phase:
            raise ProtocolError(
                f"rank {self.rank} expected {phase.name} from rank {src}, "
                f"got {message.phase.name} (round {message.round})")
        return message

    def close(self) -> None:
        """Release channel resources."""
        pass


class Participant(ABC):
    """One member of the process group: the coordinator or a worker."""

    def __init__(self, channel: Channel, verbose: int = 0):
        self.channel = channel
        self.verbose = verbose

    @property
    def rank(self) -> int:
        return self.channel.rank

    @property
    def size(self) -> int:
        return self.channel.size

    @abstractmethod
    def run(self) -> Any:
        """Execute this participant's state machine to completion."""
        pass

    def _log(self, level: int, message: str) -> None:
        if self.verbose >= level:
            print(f"[{self.name}] {message}")

    @property
    def name(self) -> str:
        return f"rank {self.rank}"
