"""Coordinator/worker protocol, channels and launchers."""

from .partitioner import partition_range, partition_all
from .channel import QueueChannel, TorchDistributedChannel, MPIChannel
from .worker import Worker
from .coordinator import Coordinator
from .participant import create_participant
from .launcher import run_group, run_participant, make_channel

__all__ = [
    # Partitioning
    'partition_range',
    'partition_all',

    # Channels
    'QueueChannel',
    'TorchDistributedChannel',
    'MPIChannel',

    # Participants
    'Worker',
    'Coordinator',
    'create_participant',

    # Launching
    'run_group',
    'run_participant',
    'make_channel'
]
