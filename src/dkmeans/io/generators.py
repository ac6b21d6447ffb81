"""
Synthetic dataset generators.
"""

from typing import List, Optional, Union
import os
import torch
from torch import Tensor

from ..spaces.symbols import SymbolSpace, DNA_ALPHABET


def generate_dna(n_clusters: int,
                 n_per_cluster: int,
                 length: int,
                 generator: Optional[torch.Generator] = None,
                 alphabet: str = DNA_ALPHABET,
                 max_tries: int = 10000) -> List[str]:
    """Generate clustered DNA strands.

    Draws ``n_clusters`` random centre strands whose pairwise Hamming
    distance is at least ``length - 3`` (redrawing a candidate otherwise),
    then ``n_per_cluster - 1`` variants of each centre. A variant differs
    from its centre in 1 to 4 positions, each replaced by a different
    symbol.

    Args:
        n_clusters: Number of centre strands
        n_per_cluster: Strands per cluster, centre included
        length: Length of every strand
        generator: Random source
        alphabet: Symbols to draw from
        max_tries: Draws allowed per centre before giving up

    Returns:
        List of n_clusters * n_per_cluster strands; each centre is followed
        by its variants

    Raises:
        ValueError: On non-positive sizes
        RuntimeError: If no sufficiently distant centre is found
    """
    if n_clusters < 1 or n_per_cluster < 1 or length < 1:
        raise ValueError("n_clusters, n_per_cluster and length must be positive")

    space = SymbolSpace(alphabet)
    n_symbols = space.n_symbols
    min_distance = length - 3

    centres: List[Tensor] = []
    for _ in range(n_clusters):
        for _ in range(max_tries):
            candidate = torch.randint(n_symbols, (length,), generator=generator)
            if all(int((candidate != c).sum()) >= min_distance for c in centres):
                break
        else:
            raise RuntimeError(f"No centre at distance >= {min_distance} from the "
                               f"others after {max_tries} draws")
        centres.append(candidate)

    strands = []
    for centre in centres:
        strands.append(centre)
        for _ in range(n_per_cluster - 1):
            n_mutations = int(torch.randint(1, min(4, length) + 1, (1,), generator=generator))
            positions = torch.randperm(length, generator=generator)[:n_mutations]
            shift = torch.randint(1, n_symbols, (n_mutations,), generator=generator) \
                if n_symbols > 1 else torch.zeros(n_mutations, dtype=torch.long)
            variant = centre.clone()
            variant[positions] = (centre[positions] + shift) % n_symbols
            strands.append(variant)

    return [space.decode(s) for s in strands]


def write_symbols(path: Union[str, os.PathLike], strings: List[str]) -> None:
    """Write one string per line."""
    with open(path, 'w') as f:
        for s in strings:
            f.write(s + "\n")


def generate_points(n_clusters: int,
                    n_per_cluster: int,
                    spread: float = 1.0,
                    scale: float = 10.0,
                    generator: Optional[torch.Generator] = None) -> Tensor:
    """Gaussian blobs in the plane.

    Args:
        n_clusters: Number of blobs
        n_per_cluster: Points per blob
        spread: Standard deviation around each blob centre
        scale: Centres are drawn uniformly from [-scale, scale]^2
        generator: Random source

    Returns:
        (n_clusters * n_per_cluster, 2) float64 tensor, blob by blob
    """
    centres = (torch.rand(n_clusters, 2, generator=generator, dtype=torch.float64)
               * 2 - 1) * scale
    noise = torch.randn(n_clusters, n_per_cluster, 2, generator=generator,
                        dtype=torch.float64) * spread
    return (centres.unsqueeze(1) + noise).reshape(-1, 2)
