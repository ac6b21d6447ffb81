"""
Distributed K-means on one machine.

Runs the coordinator/worker protocol with the calling process as the
coordinator and ``n_workers`` workers, each owning one contiguous slice of
the dataset.
"""

from typing import Any, Dict, Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import ElementSpace, InitializationStrategy
from ..base.data_structures import ClusteringResult
from ..distributed.launcher import run_group, BACKENDS
from .base import BaseClusteringAlgorithm


class ParallelKMeans(BaseClusteringAlgorithm):
    """K-means over a coordinator and a group of workers.

    Accepts every parameter of KMeans plus:

    Parameters
    ----------
    n_workers : int, default=2
        Number of worker participants (at least 1)
    backend : {'process', 'thread'}, default='process'
        Run workers as spawned child processes or as threads of this
        process

    For the same data order and the same initial centroids the result
    matches KMeans exactly, whatever the number of workers.
    """

    def __init__(self,
                 n_clusters: int,
                 space: Optional[Union[str, ElementSpace]] = None,
                 init: Any = 'random',
                 max_iter: int = 100,
                 n_workers: int = 2,
                 backend: str = 'process',
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        super().__init__(
            n_clusters=n_clusters,
            space=space,
            init=init,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state
        )
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{backend}', expected one of {BACKENDS}")
        self.n_workers = n_workers
        self.backend = backend

    def _run(self, points: Tensor, space: ElementSpace,
             init: InitializationStrategy,
             generator: Optional[torch.Generator]) -> ClusteringResult:
        return run_group(
            points, space, self.n_clusters,
            max_iter=self.max_iter,
            n_workers=self.n_workers,
            init=init,
            generator=generator,
            backend=self.backend,
            verbose=self.verbose
        )

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params.update({
            'n_workers': self.n_workers,
            'backend': self.backend
        })
        return params
