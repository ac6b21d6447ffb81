"""
Command line interface.

    dkmeans points input.csv clusters.txt -k 3 --workers 4
    dkmeans dna strands.txt clusters.txt -k 5 --backend thread
    dkmeans generate-dna strands.txt --clusters 5 --per-cluster 100 --length 20
    torchrun --nproc_per_node 4 -m dkmeans points input.csv out.txt -k 3 --backend torch
    mpiexec -n 4 python -m dkmeans dna strands.txt out.txt -k 5 --backend mpi
"""

from typing import List, Optional
import argparse
import sys

from .algorithms import KMeans, ParallelKMeans
from .distributed.launcher import make_channel, run_participant
from .io import read_points, read_symbols, write_clusters, generate_dna, write_symbols
from .spaces import CoordinateSpace, SymbolSpace, DNA_ALPHABET
from .utils.validation import (
    check_group_size, check_max_iter, check_n_clusters, check_random_state
)

BACKENDS = ('sequential', 'process', 'thread', 'torch', 'mpi')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dkmeans',
        description="K-means over 2D points or DNA strands, sequential or distributed"
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, help_text in (('points', "cluster 2D points read from a CSV file"),
                            ('dna', "cluster DNA strands, one per line")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('input', help="Input data file")
        sub.add_argument('output', help="Report file (overwritten)")
        sub.add_argument('-k', '--clusters', type=int, required=True,
                         help="Number of clusters")
        sub.add_argument('--max-iter', type=int, default=100,
                         help="Maximum number of assignment rounds (default: 100)")
        sub.add_argument('--workers', type=int, default=2,
                         help="Worker count for the process/thread backends (default: 2)")
        sub.add_argument('--backend', choices=BACKENDS, default='process',
                         help="How to run the clustering (default: process)")
        sub.add_argument('--seed', type=int, default=None,
                         help="Seed for the initial centroids")
        sub.add_argument('-v', '--verbose', action='count', default=0,
                         help="Print progress (repeat for more detail)")
        if name == 'dna':
            sub.add_argument('--alphabet', default=DNA_ALPHABET,
                             help="Symbol order; earlier symbols win majority-vote "
                                  "ties (default: %(default)s)")

    gen = subparsers.add_parser('generate-dna', help="write a synthetic DNA dataset")
    gen.add_argument('output', help="Output file, one strand per line")
    gen.add_argument('--clusters', type=int, required=True, help="Number of centre strands")
    gen.add_argument('--per-cluster', type=int, required=True,
                     help="Strands per cluster, centre included")
    gen.add_argument('--length', type=int, required=True, help="Strand length")
    gen.add_argument('--seed', type=int, default=None, help="Random seed")

    return parser


def _cluster(args: argparse.Namespace) -> None:
    if args.command == 'points':
        space = CoordinateSpace()
        points = space.prepare(read_points(args.input))
    else:
        space = SymbolSpace(args.alphabet)
        points = space.prepare(read_symbols(args.input))

    if args.backend in ('torch', 'mpi'):
        _cluster_external(args, space, points)
        return

    if args.backend == 'sequential':
        estimator = KMeans(args.clusters, space=space, max_iter=args.max_iter,
                           verbose=args.verbose, random_state=args.seed)
    else:
        estimator = ParallelKMeans(args.clusters, space=space, max_iter=args.max_iter,
                                   n_workers=args.workers, backend=args.backend,
                                   verbose=args.verbose, random_state=args.seed)
    estimator.fit(points)
    write_clusters(args.output, estimator.result_, points, space)
    if args.verbose:
        _summarize(estimator.result_, estimator.inertia_)


def _cluster_external(args: argparse.Namespace, space, points) -> None:
    """Run this process's rank of a group started by torchrun or mpiexec."""
    channel = make_channel(args.backend)

    # Every rank validates, so a bad configuration fails before any round
    try:
        check_group_size(channel.size)
        check_n_clusters(args.clusters, points.shape[0])
        check_max_iter(args.max_iter)
    except (TypeError, ValueError):
        channel.close()
        raise

    generator = check_random_state(args.seed) if channel.rank == 0 else None
    result = run_participant(channel, points, space, args.clusters,
                             max_iter=args.max_iter, generator=generator,
                             verbose=args.verbose)
    if channel.rank == 0:
        write_clusters(args.output, result, points, space)
        if args.verbose:
            _summarize(result)


def _summarize(result, inertia: Optional[float] = None) -> None:
    state = "converged" if result.converged else "stopped at the round cap"
    print(f"{state} after {result.n_iter} rounds; cluster sizes {result.counts}")
    if inertia is not None:
        print(f"inertia: {inertia:.6f}")


def _generate(args: argparse.Namespace) -> None:
    generator = check_random_state(args.seed)
    strands = generate_dna(args.clusters, args.per_cluster, args.length,
                           generator=generator)
    write_symbols(args.output, strands)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'generate-dna':
            _generate(args)
        else:
            _cluster(args)
    except (OSError, ValueError, TypeError) as e:
        print(f"dkmeans: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
