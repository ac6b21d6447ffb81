"""
Plain-text cluster report.

Format::

    Cluster 0:
    \t(1.0, 2.0)
    \t(1.5, 2.5)
    Cluster 1:
    \tACGTTA

Clusters appear in index order and members in ascending dataset order.
"""

from typing import List, Union
import os
from torch import Tensor

from ..base.interfaces import ElementSpace
from ..base.data_structures import ClusteringResult


def format_clusters(result: ClusteringResult, points: Tensor,
                    space: ElementSpace) -> List[str]:
    """Report lines for a clustering result.

    Args:
        result: Final clustering
        points: (n, m) prepared elements the result indexes into
        space: Element space used to render members

    Returns:
        Lines without trailing newlines
    """
    lines = []
    for k in range(result.n_clusters):
        lines.append(f"Cluster {k}:")
        for element in result.members_of(points, k):
            lines.append("\t" + space.format(element))
    return lines


def write_clusters(path: Union[str, os.PathLike], result: ClusteringResult,
                   points: Tensor, space: ElementSpace) -> None:
    """Write the cluster report to ``path``, replacing any existing file."""
    with open(path, 'w') as f:
        for line in format_clusters(result, points, space):
            f.write(line + "\n")
