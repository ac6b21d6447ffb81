"""
Base class for the K-means estimators.

Provides the estimator surface shared by the single-process and the
distributed algorithm: input preparation, initialization, result
bookkeeping, prediction and parameter access.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor

from ..base.interfaces import ElementSpace, InitializationStrategy
from ..base.data_structures import ClusteringResult
from ..assignments.hard import HardAssignment
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..spaces import resolve_space
from ..utils.metrics import inertia
from ..utils.validation import (
    check_n_clusters, check_max_iter, check_random_state
)


class BaseClusteringAlgorithm:
    """Base class for K-means style estimators.

    Subclasses implement ``_run``, which turns prepared elements and an
    initialization strategy into a ClusteringResult.
    """

    def __init__(self,
                 n_clusters: int,
                 space: Optional[Union[str, ElementSpace]] = None,
                 init: Any = 'random',
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            n_clusters: Number of clusters K
            space: Element space, 'coordinates', 'symbols', or None to infer
                from the data passed to fit
            init: 'random', or K initial centroids in the form of the data
            max_iter: Maximum number of assignment rounds
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for initialization
        """
        self.n_clusters = n_clusters
        self.space = space
        self.init = init
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state

        # Algorithm state
        self.fitted_ = False
        self.space_: Optional[ElementSpace] = None
        self.result_: Optional[ClusteringResult] = None
        self.labels_: Optional[Tensor] = None
        self.clusters_: Optional[List[Tensor]] = None
        self.n_iter_ = 0
        self.converged_ = False
        self.history_ = []
        self._inertia = None

    @abstractmethod
    def _run(self, points: Tensor, space: ElementSpace,
             init: InitializationStrategy,
             generator: Optional[torch.Generator]) -> ClusteringResult:
        """Cluster prepared elements.

        Args:
            points: (n, m) prepared elements
            space: Resolved element space
            init: Initialization strategy
            generator: Random source, or None for the ambient torch state

        Returns:
            ClusteringResult
        """
        pass

    def fit(self, X: Any, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: Coordinates (list of tuples, array or (n, d) tensor) or
                a list of equal-length strings
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        space = resolve_space(self.space, X)
        points = space.prepare(X)

        check_n_clusters(self.n_clusters, points.shape[0])
        check_max_iter(self.max_iter)
        generator = check_random_state(self.random_state)
        init = self._create_initialization(space)

        if self.verbose:
            print(f"Clustering {points.shape[0]} elements into {self.n_clusters} clusters...")

        result = self._run(points, space, init, generator)

        self.space_ = space
        self.result_ = result
        self.labels_ = result.labels
        self.clusters_ = result.clusters
        self.n_iter_ = result.n_iter
        self.converged_ = result.converged
        self.history_ = result.history
        self._inertia = inertia(points, result.labels, result.centroids, space.metric)
        self.fitted_ = True
        return self

    def fit_predict(self, X: Any, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return cluster assignments.

        Args:
            X: Input elements
            y: Ignored

        Returns:
            (n,) tensor of cluster assignments
        """
        return self.fit(X).labels_

    def predict(self, X: Any) -> Tensor:
        """Assign new elements to the nearest fitted centroid.

        Args:
            X: Input elements of the fitted space

        Returns:
            (n,) tensor of cluster assignments
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        points = self.space_.prepare(X)
        return HardAssignment().compute_assignments(
            points, self.result_.centroids, self.space_.metric
        )

    def _create_initialization(self, space: ElementSpace) -> InitializationStrategy:
        if isinstance(self.init, InitializationStrategy):
            return self.init
        if isinstance(self.init, str):
            if self.init == 'random':
                return RandomInit()
            raise ValueError(f"Unknown init method: {self.init}")

        # Custom initial centroids provided
        if isinstance(self.init, (list, tuple)) and self.init \
                and all(isinstance(c, Tensor) for c in self.init):
            return FromPreviousInit(self.init)
        centers = space.prepare(self.init)
        return FromPreviousInit(list(centers))

    @property
    def cluster_centers_(self) -> Union[Tensor, List[Tensor]]:
        """Centroids the final assignment was made against.

        Stacked into a (K, m) tensor; returned as a list when an empty
        symbol cluster left a centroid of a different length.
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        centroids = self.result_.centroids
        if len({tuple(c.shape) for c in centroids}) == 1:
            return torch.stack(centroids)
        return list(centroids)

    @property
    def inertia_(self) -> float:
        """Total distance of each element to its cluster's centroid."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._inertia

    def format_centers(self) -> List[str]:
        """Human-readable centroids (e.g. "(x, y)" or a DNA string)."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return [self.space_.format(c) for c in self.result_.centroids]

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'space': self.space,
            'init': self.init,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key} for {type(self).__name__}")
            setattr(self, key, value)
        return self
