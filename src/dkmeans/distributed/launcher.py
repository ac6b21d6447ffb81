"""
Starting a process group on one machine.

``run_group`` wires a coordinator and ``n_workers`` workers over queue
channels, runs the workers as child processes (or threads) and the
coordinator in the caller. ``run_participant`` is the entry point for
launchers that start every rank themselves (``torchrun``, ``mpirun``).
"""

from typing import Dict, List, Optional, Union
import threading
import torch
import torch.multiprocessing as mp
from torch import Tensor

from ..base.interfaces import Channel, ElementSpace, InitializationStrategy
from ..base.data_structures import ClusteringResult, WorkerReport
from ..utils.validation import check_group_size, check_max_iter, check_n_clusters
from .channel import QueueChannel, TorchDistributedChannel, MPIChannel
from .coordinator import Coordinator
from .participant import create_participant
from .worker import Worker

BACKENDS = ('process', 'thread')


def _worker_entry(channel: Channel, points: Tensor, space: ElementSpace,
                  n_clusters: int, verbose: int) -> None:
    # Runs in a spawned child, so it has to be importable at module level
    torch.set_num_threads(1)
    Worker(channel, points, space, n_clusters, verbose=verbose).run()


def run_group(points: Tensor,
              space: ElementSpace,
              n_clusters: int,
              max_iter: int = 100,
              n_workers: int = 2,
              init: Optional[InitializationStrategy] = None,
              generator: Optional[torch.Generator] = None,
              backend: str = 'process',
              verbose: int = 0) -> ClusteringResult:
    """Run one distributed clustering on this machine.

    Args:
        points: (n, m) prepared dataset
        space: Element space of the run
        n_clusters: Number of clusters k
        max_iter: Maximum number of assignment rounds
        n_workers: Number of worker ranks (group size is n_workers + 1)
        init: Initialization strategy for the coordinator
        generator: Random source for initialization
        backend: 'process' for spawned child processes, 'thread' for threads
        verbose: Verbosity level

    Returns:
        The coordinator's ClusteringResult

    Raises:
        ValueError: On invalid configuration, before anything is started
        RuntimeError: If a worker fails
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend '{backend}', expected one of {BACKENDS}")
    if isinstance(n_workers, bool) or not isinstance(n_workers, int):
        raise TypeError(f"n_workers must be int, got {type(n_workers)}")
    check_group_size(n_workers + 1)
    check_n_clusters(n_clusters, points.shape[0])
    check_max_iter(max_iter)

    if backend == 'process':
        return _run_processes(points, space, n_clusters, max_iter, n_workers,
                              init, generator, verbose)
    return _run_threads(points, space, n_clusters, max_iter, n_workers,
                        init, generator, verbose)


def _run_processes(points, space, n_clusters, max_iter, n_workers,
                   init, generator, verbose) -> ClusteringResult:
    context = mp.get_context('spawn')
    channels = QueueChannel.create_group(n_workers + 1, context=context)

    processes = []
    for rank in range(1, n_workers + 1):
        process = context.Process(
            target=_worker_entry,
            args=(channels[rank], points, space, n_clusters, verbose),
            name=f"dkmeans-worker-{rank}"
        )
        process.start()
        processes.append(process)

    def check(rank: int) -> None:
        process = processes[rank - 1]
        # exit code 0 means its last envelope is already in the pipe
        if process.exitcode not in (None, 0):
            raise RuntimeError(f"{process.name} exited with code {process.exitcode}")

    channels[0].watch(check)

    try:
        coordinator = Coordinator(channels[0], points, space, n_clusters,
                                  max_iter=max_iter, init=init, generator=generator,
                                  verbose=verbose)
        result = coordinator.run()
    except BaseException:
        for process in processes:
            process.terminate()
        for process in processes:
            process.join()
        raise

    failed = []
    for process in processes:
        process.join()
        if process.exitcode != 0:
            failed.append(f"{process.name} (exit code {process.exitcode})")
    if failed:
        raise RuntimeError(f"Worker processes failed: {', '.join(failed)}")
    return result


def _run_threads(points, space, n_clusters, max_iter, n_workers,
                 init, generator, verbose) -> ClusteringResult:
    channels = QueueChannel.create_group(n_workers + 1)
    reports: List[Optional[WorkerReport]] = [None] * n_workers
    failures: Dict[int, BaseException] = {}

    def target(rank: int) -> None:
        try:
            worker = Worker(channels[rank], points, space, n_clusters, verbose=verbose)
            reports[rank - 1] = worker.run()
        except Exception as e:
            failures[rank] = e

    def check(rank: int) -> None:
        if rank in failures:
            error = failures[rank]
            raise RuntimeError(f"Worker thread {rank} failed: {error}") from error

    channels[0].watch(check)

    threads = [threading.Thread(target=target, args=(rank,), daemon=True,
                                name=f"dkmeans-worker-{rank}")
               for rank in range(1, n_workers + 1)]
    for thread in threads:
        thread.start()

    coordinator = Coordinator(channels[0], points, space, n_clusters,
                              max_iter=max_iter, init=init, generator=generator,
                              verbose=verbose)
    result = coordinator.run()

    for thread in threads:
        thread.join()
    for rank in sorted(failures):
        check(rank)

    result.metadata['worker_reports'] = reports
    return result


def run_participant(channel: Channel,
                    points: Tensor,
                    space: ElementSpace,
                    n_clusters: int,
                    max_iter: int = 100,
                    init: Optional[InitializationStrategy] = None,
                    generator: Optional[torch.Generator] = None,
                    verbose: int = 0) -> Union[ClusteringResult, WorkerReport]:
    """Run this rank's role over an externally created channel.

    Every rank must call this with the same dataset. The channel is closed
    afterwards.

    Returns:
        ClusteringResult on rank 0, the rank's WorkerReport elsewhere
    """
    try:
        participant = create_participant(channel, points, space, n_clusters,
                                         max_iter=max_iter, init=init,
                                         generator=generator, verbose=verbose)
        return participant.run()
    finally:
        channel.close()


def make_channel(backend: str) -> Channel:
    """Channel for a rank started by an external launcher.

    Args:
        backend: 'torch' (torchrun environment, gloo) or 'mpi' (mpi4py)
    """
    if backend == 'torch':
        return TorchDistributedChannel.from_environment()
    if backend == 'mpi':
        return MPIChannel()
    raise ValueError(f"Unknown external backend '{backend}', expected 'torch' or 'mpi'")
