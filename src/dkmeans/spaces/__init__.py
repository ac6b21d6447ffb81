"""Element spaces: the per-type glue between data, metric and accumulator."""

from typing import Any, Optional, Union
import numpy as np

from ..base.interfaces import ElementSpace
from .coordinates import CoordinateSpace
from .symbols import SymbolSpace, DNA_ALPHABET


def resolve_space(space: Optional[Union[str, ElementSpace]],
                  records: Any = None) -> ElementSpace:
    """Turn a space argument into an ElementSpace instance.

    Args:
        space: An ElementSpace, 'coordinates', 'symbols', or None to infer
            from the records (strings -> symbols, anything else -> coordinates)
        records: Raw input used for inference

    Returns:
        ElementSpace instance
    """
    if isinstance(space, ElementSpace):
        return space

    if space is None:
        if isinstance(records, (list, tuple)) and records and isinstance(records[0], str):
            return SymbolSpace()
        return CoordinateSpace(_infer_dimension(records))

    if space == 'coordinates':
        return CoordinateSpace(_infer_dimension(records))
    elif space in ('symbols', 'dna'):
        return SymbolSpace()
    else:
        raise ValueError(f"Unknown element space: {space}")


def _infer_dimension(records: Any, default: int = 2) -> int:
    if records is None:
        return default
    try:
        shape = np.shape(records)
    except ValueError:
        return default
    if len(shape) == 2 and shape[1] > 0:
        return int(shape[1])
    return default


__all__ = [
    'CoordinateSpace',
    'SymbolSpace',
    'DNA_ALPHABET',
    'resolve_space'
]
