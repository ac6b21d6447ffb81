"""Utility functions for distributed K-means."""

from .convergence import ChangeInAssignments

from .metrics import inertia

from .validation import (
    validate_data,
    check_n_clusters,
    check_max_iter,
    check_group_size,
    check_random_state
)

__all__ = [
    # Convergence criteria
    'ChangeInAssignments',

    # Metrics
    'inertia',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_max_iter',
    'check_group_size',
    'check_random_state'
]
