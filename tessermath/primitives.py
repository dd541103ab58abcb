"""Numeric traits for the scalar types vectors and matrices are built from.

Every supported scalar type is a numpy dtype with an explicit representation
of zero and one, so a ``float32`` pipeline stays ``float32`` through every
transform.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import DTypeLike

from tessermath.errors import DimensionMismatch

DEFAULT_DTYPE = np.dtype(np.float64)

_ZERO = {
    np.dtype(np.float64): np.float64(0.0),
    np.dtype(np.float32): np.float32(0.0),
    np.dtype(np.int64): np.int64(0),
    np.dtype(np.int32): np.int32(0),
}

_ONE = {
    np.dtype(np.float64): np.float64(1.0),
    np.dtype(np.float32): np.float32(1.0),
    np.dtype(np.int64): np.int64(1),
    np.dtype(np.int32): np.int32(1),
}


def scalar_type(dtype: Optional[DTypeLike] = None) -> np.dtype:
    """Resolve a dtype-like value to a supported scalar type.

    Args:
        dtype: Anything numpy accepts as a dtype, or None for the default

    Returns:
        The resolved numpy dtype
    """
    resolved = DEFAULT_DTYPE if dtype is None else np.dtype(dtype)
    if resolved not in _ZERO:
        raise TypeError(f"Unsupported scalar type: {resolved}")
    return resolved


def zero(dtype: Optional[DTypeLike] = None) -> np.generic:
    """Return the value representing zero for the given scalar type."""
    return _ZERO[scalar_type(dtype)]


def one(dtype: Optional[DTypeLike] = None) -> np.generic:
    """Return the value representing one for the given scalar type."""
    return _ONE[scalar_type(dtype)]


def check_dimension(size: int) -> int:
    """Validate a vector length or matrix side-length."""
    if size <= 0:
        raise DimensionMismatch(f"Invalid dimension {size}, must be positive")
    return size
