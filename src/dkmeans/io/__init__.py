"""Dataset readers, report writers and synthetic data generators."""

from .readers import read_points, read_symbols
from .writers import format_clusters, write_clusters
from .generators import generate_dna, generate_points, write_symbols

__all__ = [
    'read_points',
    'read_symbols',
    'format_clusters',
    'write_clusters',
    'generate_dna',
    'generate_points',
    'write_symbols'
]
