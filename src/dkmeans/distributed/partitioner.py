"""
Static partitioning of the dataset across worker ranks.

Ranks 1..size-1 are workers; rank 0 coordinates and owns no data. Each
worker gets ``N // (size - 1)`` consecutive elements and the last worker
also takes the remainder. The imbalance keeps the ranges identical to
earlier releases, so reports stay byte-for-byte comparable.
"""

from typing import List

from ..base.data_structures import Partition
from ..utils.validation import check_group_size


def partition_range(n_points: int, size: int, rank: int) -> Partition:
    """Range of dataset indices owned by one worker.

    Args:
        n_points: Dataset size N
        size: Number of participants including the coordinator
        rank: Worker rank in 1..size-1

    Returns:
        Partition [len*(rank-1), len*(rank-1)+len), or up to N for the
        last rank

    Raises:
        ValueError: If size < 2, rank is not a worker rank, or N < 0
    """
    check_group_size(size)
    if not 1 <= rank < size:
        raise ValueError(f"rank {rank} is not a worker rank (1..{size - 1})")
    if n_points < 0:
        raise ValueError(f"n_points must be non-negative, got {n_points}")

    length = n_points // (size - 1)
    start = length * (rank - 1)
    end = n_points if rank == size - 1 else start + length
    return Partition(rank=rank, start=start, end=end)


def partition_all(n_points: int, size: int) -> List[Partition]:
    """Partitions of every worker, in rank order."""
    return [partition_range(n_points, size, rank) for rank in range(1, size)]
