"""
Channel implementations.

All channels are blocking, point-to-point and FIFO per pair of ranks, with
no timeout. A missing message stalls the receiver for good; that is the
accepted failure mode of a single batch job.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
import pickle
import queue

import torch.distributed as dist

from ..base.interfaces import Channel
from ..base.data_structures import Message
from ..utils.validation import check_group_size


class QueueChannel(Channel):
    """Channel over one FIFO queue per ordered (sender, receiver) pair.

    Envelopes are pickled on send and unpickled on receive, so peers never
    share objects even when they run as threads of one process. Only the
    coordinator/worker pairs are wired; workers never talk to each other.

    A receiver can be given a liveness check with ``watch``. It then polls its
    queue and asks the check about the sender between polls, so a peer that
    died before sending is reported instead of waited on forever.
    """

    def __init__(self, rank: int, size: int, queues: Dict[Tuple[int, int], Any]):
        """
        Args:
            rank: This participant's rank
            size: Group size
            queues: Mapping (src, dst) -> queue with put/get
        """
        self._rank = rank
        self._size = size
        self._queues = queues
        self._check: Optional[Callable[[int], None]] = None
        self._poll_interval = 0.5

    @classmethod
    def create_group(cls, size: int, context: Optional[Any] = None) -> List['QueueChannel']:
        """Build connected channels for ranks 0..size-1.

        Args:
            size: Number of participants including the coordinator
            context: A multiprocessing context for process peers, or None
                for in-process (thread) peers

        Returns:
            One channel per rank, indexed by rank
        """
        check_group_size(size)
        make_queue = queue.Queue if context is None else context.Queue

        queues = {}
        for worker in range(1, size):
            queues[(0, worker)] = make_queue()
            queues[(worker, 0)] = make_queue()
        return [cls(rank, size, queues) for rank in range(size)]

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return self._size

    def watch(self, check: Callable[[int], None], poll_interval: float = 0.5) -> None:
        """Check the sender's liveness while waiting for its next envelope.

        Args:
            check: Called with the sender's rank whenever a poll comes back
                empty; raises if that peer can no longer send
            poll_interval: Seconds per poll
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self._check = check
        self._poll_interval = poll_interval

    def _queue(self, src: int, dst: int):
        try:
            return self._queues[(src, dst)]
        except KeyError:
            raise ValueError(f"No link from rank {src} to rank {dst}") from None

    def send(self, message: Message, dst: int) -> None:
        self._queue(self._rank, dst).put(pickle.dumps(message))

    def _receive(self, src: int) -> Any:
        inbox = self._queue(src, self._rank)
        if self._check is None:
            return pickle.loads(inbox.get())
        while True:
            try:
                data = inbox.get(timeout=self._poll_interval)
            except queue.Empty:
                self._check(src)
                continue
            return pickle.loads(data)

    def __repr__(self) -> str:
        return f"QueueChannel(rank={self._rank}, size={self._size})"


class TorchDistributedChannel(Channel):
    """Channel over an initialized ``torch.distributed`` process group.

    Rank and size are read from the process group, so the launcher
    (e.g. ``torchrun``) decides who coordinates. Envelopes travel as
    pickled objects; the gloo backend keeps everything on CPU.
    """

    def __init__(self, group: Optional[Any] = None):
        if not dist.is_available():
            raise RuntimeError("torch.distributed is not available in this build")
        if not dist.is_initialized():
            raise RuntimeError("torch.distributed process group is not initialized; "
                               "use TorchDistributedChannel.from_environment()")
        self.group = group
        self._rank = dist.get_rank(group)
        self._size = dist.get_world_size(group)
        self._owns_group = False

    @classmethod
    def from_environment(cls, backend: str = 'gloo') -> 'TorchDistributedChannel':
        """Join the process group described by the environment.

        Reads RANK, WORLD_SIZE, MASTER_ADDR and MASTER_PORT as set by
        ``torchrun``.
        """
        owns = False
        if not dist.is_initialized():
            dist.init_process_group(backend=backend)
            owns = True
        channel = cls()
        channel._owns_group = owns
        return channel

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return self._size

    def send(self, message: Message, dst: int) -> None:
        dist.send_object_list([message], dst=dst, group=self.group)

    def _receive(self, src: int) -> Any:
        buffer = [None]
        dist.recv_object_list(buffer, src=src, group=self.group)
        return buffer[0]

    def close(self) -> None:
        if self._owns_group and dist.is_initialized():
            dist.destroy_process_group()
            self._owns_group = False

    def __repr__(self) -> str:
        return f"TorchDistributedChannel(rank={self._rank}, size={self._size})"


class MPIChannel(Channel):
    """Channel over an MPI communicator (``mpi4py``).

    The envelope phase doubles as the MPI tag. Receives accept any tag so
    that an out-of-order envelope is reported instead of blocking forever.
    ``mpi4py`` is only imported when no communicator is passed in.
    """

    def __init__(self, comm: Optional[Any] = None):
        if comm is None:
            from mpi4py import MPI
            comm = MPI.COMM_WORLD
        self.comm = comm

    @property
    def rank(self) -> int:
        return self.comm.Get_rank()

    @property
    def size(self) -> int:
        return self.comm.Get_size()

    def send(self, message: Message, dst: int) -> None:
        self.comm.send(message, dest=dst, tag=message.phase.value)

    def _receive(self, src: int) -> Any:
        # mpi4py receives with ANY_TAG by default
        return self.comm.recv(source=src)

    def __repr__(self) -> str:
        return f"MPIChannel(rank={self.rank}, size={self.size})"
