"""
Input validation utilities.

Configuration problems are reported before any round begins: every check in
this module raises immediately and nothing is recovered.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np


def validate_data(X: Union[Tensor, np.ndarray, list, tuple],
                  dtype: torch.dtype = torch.float64,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1) -> Tensor:
    """Validate and convert coordinate input to a 2D tensor.

    Args:
        X: Input data (tensor, numpy array, or list of tuples)
        dtype: Target data type
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required

    Returns:
        Validated (n, d) tensor

    Raises:
        TypeError: If X cannot be converted
        ValueError: If validation fails
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype)
    elif isinstance(X, (list, tuple)):
        try:
            X = torch.tensor(X, dtype=dtype)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cannot convert records to a numeric tensor: {e}") from e
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1 and X.numel() == 0:
        X = X.reshape(0, 0)
    if X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")

    n_samples = X.shape[0]
    if n_samples < ensure_min_samples:
        raise ValueError(f"Found {n_samples} samples, but need at least "
                         f"{ensure_min_samples}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        ValueError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, int):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_max_iter(max_iter: int) -> None:
    """Validate the iteration cap."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, int):
        raise TypeError(f"max_iter must be int, got {type(max_iter)}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")


def check_group_size(size: int) -> None:
    """Validate the number of participants (one coordinator plus workers).

    Raises:
        ValueError: If there is no worker
    """
    if size < 2:
        raise ValueError(f"A process group needs at least 2 participants "
                         f"(1 coordinator + 1 worker), got {size}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None
    """
    if random_state is None:
        return None
    elif isinstance(random_state, bool):
        raise TypeError("random_state must be int or Generator, got bool")
    elif isinstance(random_state, (int, np.integer)):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
