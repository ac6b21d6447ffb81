"""
Worker side of the distributed K-means protocol.

Each round a worker:

1. waits for the coordinator's centroids (BROADCAST),
2. assigns every element of its own partition to the nearest centroid and
   folds it into fresh local accumulators,
3. reports whether any local element changed cluster (VOTE),
4. waits for the stop/continue directive (STOP),
5. sends its k local accumulators (REPORT_PARTIAL) and either stops or
   waits for the next round.

A worker only ever reads and writes the elements of its own partition.
"""

from typing import List, Optional
import time
import torch
from torch import Tensor

from ..base.interfaces import Channel, ElementSpace, Participant
from ..base.data_structures import (
    UNASSIGNED, Phase, Message, Partition, WorkerReport
)
from ..base.errors import ProtocolError
from ..assignments.hard import assign_round
from .partitioner import partition_range

COORDINATOR = 0


class Worker(Participant):
    """Worker state machine.

    AWAIT_CENTROIDS -> COMPUTE -> REPORT_CHANGE -> AWAIT_STOP ->
    REPORT_PARTIAL -> (AWAIT_CENTROIDS | done)
    """

    def __init__(self,
                 channel: Channel,
                 points: Tensor,
                 space: ElementSpace,
                 n_clusters: int,
                 partition: Optional[Partition] = None,
                 verbose: int = 0):
        """
        Args:
            channel: Channel of this worker's rank
            points: (n, m) full dataset, in the same order on every rank
            space: Element space of the run
            n_clusters: Number of clusters k
            partition: Owned range; derived from the rank when None
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        """
        super().__init__(channel, verbose)
        if channel.rank == COORDINATOR:
            raise ValueError("Rank 0 is the coordinator, not a worker")

        self.space = space
        self.n_clusters = n_clusters
        if partition is None:
            partition = partition_range(points.shape[0], channel.size, channel.rank)
        self.partition = partition
        self.points = self.partition.take(points).clone()
        self.indices = self.partition.indices()

        # Current cluster index of every owned element
        self.labels = torch.full((len(self.partition),), UNASSIGNED, dtype=torch.long)
        self.rounds_ = 0

    @property
    def name(self) -> str:
        return f"worker {self.rank}"

    def run(self) -> WorkerReport:
        """Take part in rounds until the coordinator says stop."""
        self._log(1, f"owns [{self.partition.start}, {self.partition.end})")

        while True:
            round_start = time.time()

            centroids, iteration = self._await_centroids()
            changed, accumulators = self._compute(centroids)
            self._send(Phase.VOTE, iteration, changed)

            stop = self._await_stop(iteration)
            self._send(Phase.REPORT_PARTIAL, iteration, accumulators)
            self.rounds_ = iteration

            self._log(2, f"round {iteration}: changed={changed} stop={stop} "
                         f"({time.time() - round_start:.3f}s)")
            if stop:
                break

        self._log(1, f"finished after {self.rounds_} rounds")
        return WorkerReport(
            rank=self.rank,
            partition=self.partition,
            rounds=self.rounds_,
            labels=self.labels.clone()
        )

    def _await_centroids(self):
        message = self.channel.recv(COORDINATOR, Phase.BROADCAST)
        centroids = message.payload
        if not isinstance(centroids, (list, tuple)) or len(centroids) != self.n_clusters:
            raise ProtocolError(f"{self.name} expected {self.n_clusters} centroids "
                                f"in round {message.round}")
        return list(centroids), message.round

    def _compute(self, centroids: List[Tensor]):
        """Assign owned elements and build this round's local accumulators."""
        labels, accumulators, n_changed = assign_round(
            self.space, self.points, self.indices, centroids, self.labels
        )
        self.labels = labels
        return n_changed > 0, accumulators

    def _await_stop(self, iteration: int) -> bool:
        message = self.channel.recv(COORDINATOR, Phase.STOP)
        if message.round != iteration:
            raise ProtocolError(f"{self.name} got the directive for round "
                                f"{message.round} during round {iteration}")
        return bool(message.payload)

    def _send(self, phase: Phase, iteration: int, payload) -> None:
        self.channel.send(Message(phase=phase, round=iteration, payload=payload),
                          COORDINATOR)
