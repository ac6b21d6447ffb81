"""Rank-based selection of the participant role."""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import Channel, ElementSpace, InitializationStrategy, Participant
from .coordinator import Coordinator
from .worker import Worker


def create_participant(channel: Channel,
                       points: Tensor,
                       space: ElementSpace,
                       n_clusters: int,
                       max_iter: int = 100,
                       init: Optional[InitializationStrategy] = None,
                       generator: Optional[torch.Generator] = None,
                       verbose: int = 0) -> Participant:
    """Build the coordinator for rank 0 and a worker for any other rank.

    Every rank receives the same arguments; a worker ignores the ones that
    only matter for coordination (max_iter, init, generator).
    """
    if channel.rank == 0:
        return Coordinator(channel, points, space, n_clusters, max_iter=max_iter,
                           init=init, generator=generator, verbose=verbose)
    return Worker(channel, points, space, n_clusters, verbose=verbose)
