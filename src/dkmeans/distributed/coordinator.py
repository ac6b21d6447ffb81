"""
Coordinator side of the distributed K-means protocol.

The coordinator (rank 0) owns no data. It chooses the initial centroids,
drives the rounds, aggregates the workers' partial accumulators and is the
only participant that holds the authoritative clustering at the end.
"""

from typing import List, Optional
import time
import warnings
import torch
from torch import Tensor

from ..base.interfaces import (
    Channel, ClusterAccumulator, ElementSpace, InitializationStrategy, Participant
)
from ..base.data_structures import (
    Phase, Message, RoundRecord, ClusteringResult, labels_from_clusters
)
from ..base.errors import ProtocolError
from ..accumulators.base import merge_partials
from ..initialization.random import RandomInit
from ..utils.convergence import ChangeInAssignments
from ..utils.validation import check_n_clusters, check_max_iter, check_group_size


class Coordinator(Participant):
    """Coordinator state machine.

    Each round runs BROADCAST -> COLLECT_VOTES -> DECIDE -> SEND_DIRECTIVE ->
    COLLECT_PARTIALS. After a stop directive the merged partials of that
    round are the final clusters; after a continue directive they yield the
    next centroids.
    """

    def __init__(self,
                 channel: Channel,
                 points: Tensor,
                 space: ElementSpace,
                 n_clusters: int,
                 max_iter: int = 100,
                 init: Optional[InitializationStrategy] = None,
                 generator: Optional[torch.Generator] = None,
                 verbose: int = 0):
        """
        Args:
            channel: Channel of rank 0
            points: (n, m) full dataset, used for initialization and checks
            space: Element space of the run
            n_clusters: Number of clusters k
            max_iter: Maximum number of assignment rounds
            init: Initialization strategy (random dataset elements by default)
            generator: Random source for initialization
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        """
        super().__init__(channel, verbose)
        if channel.rank != 0:
            raise ValueError(f"The coordinator must be rank 0, got rank {channel.rank}")
        check_group_size(channel.size)
        check_n_clusters(n_clusters, points.shape[0])
        check_max_iter(max_iter)

        self.points = points
        self.space = space
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.init = init if init is not None else RandomInit()
        self.generator = generator
        self.convergence = ChangeInAssignments()

    @property
    def name(self) -> str:
        return "coordinator"

    @property
    def workers(self) -> range:
        return range(1, self.size)

    def run(self) -> ClusteringResult:
        """Drive rounds until convergence or the round cap."""
        n_points = self.points.shape[0]
        centroids = self.init.initialize(self.points, self.n_clusters, self.generator)
        self.convergence.reset()
        history: List[RoundRecord] = []
        start = time.time()

        self._log(1, f"clustering {n_points} elements into {self.n_clusters} "
                     f"clusters with {self.size - 1} workers")

        for iteration in range(1, self.max_iter + 1):
            self._broadcast(centroids, iteration)

            changed = self._collect_votes(iteration)
            converged = self.convergence.check({'changed': changed,
                                                'iteration': iteration})
            stop = converged or iteration == self.max_iter
            self._send_directive(stop, iteration)

            accumulators = self._collect_partials(iteration)
            counts = [acc.count for acc in accumulators]
            history.append(RoundRecord(iteration=iteration, changed=changed,
                                       converged=converged, counts=counts))

            if self.verbose >= 2:
                self._log(2, f"round {iteration}: changed={changed} sizes={counts}")
            elif self.verbose and iteration % 10 == 0:
                self._log(1, f"round {iteration}: changed={changed}")

            if stop:
                break
            centroids = [acc.centroid() for acc in accumulators]

        if converged:
            self._log(1, f"converged after {iteration} rounds "
                         f"({time.time() - start:.3f}s)")
        elif self.verbose:
            warnings.warn(f"Coordinator did not converge within {self.max_iter} rounds")

        clusters = [torch.sort(acc.members).values for acc in accumulators]
        labels = labels_from_clusters(clusters, n_points, check_coverage=True)

        return ClusteringResult(
            centroids=[c.clone() for c in centroids],
            clusters=clusters,
            labels=labels,
            n_iter=iteration,
            converged=converged,
            history=history,
            accumulators=accumulators,
            metadata={'n_workers': self.size - 1,
                      'time': time.time() - start}
        )

    def _broadcast(self, centroids: List[Tensor], iteration: int) -> None:
        message = Message(phase=Phase.BROADCAST, round=iteration, payload=centroids)
        for worker in self.workers:
            self.channel.send(message, worker)

    def _collect_votes(self, iteration: int) -> bool:
        changed = False
        for worker in self.workers:
            message = self._recv(worker, Phase.VOTE, iteration)
            changed = changed or bool(message.payload)
        return changed

    def _send_directive(self, stop: bool, iteration: int) -> None:
        message = Message(phase=Phase.STOP, round=iteration, payload=stop)
        for worker in self.workers:
            self.channel.send(message, worker)

    def _collect_partials(self, iteration: int) -> List[ClusterAccumulator]:
        partials = []
        for worker in self.workers:
            message = self._recv(worker, Phase.REPORT_PARTIAL, iteration)
            if not isinstance(message.payload, (list, tuple)) \
                    or len(message.payload) != self.n_clusters:
                raise ProtocolError(f"worker {worker} sent a malformed partial "
                                    f"in round {iteration}")
            partials.append(message.payload)
        return merge_partials(self.space, partials, self.n_clusters)

    def _recv(self, worker: int, phase: Phase, iteration: int) -> Message:
        message = self.channel.recv(worker, phase)
        if message.round != iteration:
            raise ProtocolError(f"worker {worker} sent {phase.name} for round "
                                f"{message.round} during round {iteration}")
        return message
