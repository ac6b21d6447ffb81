"""
Cluster visualization for coordinate results.
"""

from typing import Optional, List, Union
import torch
from torch import Tensor
import matplotlib.pyplot as plt


def plot_clusters_2d(X: Tensor,
                     labels: Tensor,
                     centers: Optional[Union[Tensor, List[Tensor]]] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 30,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.

    Args:
        X: (n, 2) points
        labels: (n,) cluster labels
        centers: Optional (k, 2) centroids
        ax: Matplotlib axes (created if None)
        colors: One color per cluster index
        alpha: Point transparency
        center_marker: Marker for centroids
        center_size: Size of centroid markers
        point_size: Size of points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if X.dim() != 2 or X.shape[1] != 2:
        raise ValueError(f"Expected (n, 2) points, got shape {tuple(X.shape)}")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    X_np = X.detach().cpu().numpy()
    labels_np = labels.detach().cpu().numpy()

    n_clusters = int(labels_np.max()) + 1 if labels_np.size else 0
    if centers is not None:
        n_clusters = max(n_clusters, len(centers))

    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i % cmap.N) for i in range(n_clusters)]

    # Empty clusters get no scatter but keep their color slot
    for k in range(n_clusters):
        mask = labels_np == k
        if not mask.any():
            continue
        ax.scatter(X_np[mask, 0], X_np[mask, 1],
                   c=[colors[k]],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {k} ({int(mask.sum())})')

    if centers is not None:
        if isinstance(centers, (list, tuple)):
            centers = torch.stack(list(centers))
        centers_np = centers.detach().cpu().numpy()
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centroids',
                   zorder=10)

    ax.set_xlabel('x')
    ax.set_ylabel('y')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax
