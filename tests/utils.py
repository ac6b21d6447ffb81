# tests/utils.py
"""
Small, reusable helpers used across the dkmeans test suite.

Functions:
- as_sets(clusters): cluster member tensors as a set of frozensets, for
  comparisons that ignore cluster numbering.
- same_partition(labels_a, labels_b): True if two label vectors describe the
  same grouping up to renumbering.
- perm_invariant_accuracy(y_pred, split_index): best accuracy over label swap
  for 2-way synthetic splits.
- time_block(label, meta=None): context manager that prints wall-clock time.
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Iterable, Set

import numpy as np
import torch


def as_sets(clusters: Iterable[torch.Tensor]) -> Set[FrozenSet[int]]:
    """Member indices of every non-empty cluster, numbering ignored."""
    return {frozenset(c.tolist()) for c in clusters if len(c) > 0}


def same_partition(labels_a: torch.Tensor, labels_b: torch.Tensor) -> bool:
    """Whether two label vectors induce the same grouping."""
    a = np.asarray(labels_a)
    b = np.asarray(labels_b)
    if a.shape != b.shape:
        return False
    forward: Dict[int, int] = {}
    backward: Dict[int, int] = {}
    for x, y in zip(a.tolist(), b.tolist()):
        if forward.setdefault(x, y) != y or backward.setdefault(y, x) != x:
            return False
    return True


def perm_invariant_accuracy(y_pred: np.ndarray, split_index: int) -> float:
    """
    Best accuracy over label swaps for 2-way synthetic datasets where the
    first `split_index` points belong to class 0 and the rest to class 1.
    """
    y_pred = np.asarray(y_pred)
    if y_pred.ndim != 1:
        raise ValueError(f"y_pred must be 1D, got shape {y_pred.shape}")
    n = y_pred.size
    if not (0 <= split_index <= n):
        raise ValueError(f"split_index must be in [0, {n}], got {split_index}")

    first = y_pred[:split_index]
    second = y_pred[split_index:]

    acc_a = (np.sum(first == 0) + np.sum(second == 1)) / max(1, n)
    acc_b = (np.sum(first == 1) + np.sum(second == 0)) / max(1, n)

    return float(max(acc_a, acc_b))


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":400,"workers":3} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
        print(f"[timing] {label}{meta_str} {dt:.3f}s")
