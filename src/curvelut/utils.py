"""
Utility functions for LUT construction (NumPy/CPU implementation)

Provides helpers for the fixed-point discretization policy, sample dtypes
and identity tables.
"""

import numpy as np


def discretize(value: float, scale: int) -> int:
    """
    Map a normalized coordinate onto the integer sample grid.

    Uses the add-half-then-truncate rounding of the LUT builder, so ties
    round up for non-negative inputs.

    Args:
        value: Normalized coordinate, usually in [0, 1]
        scale: Maximum sample value (2**bit_depth - 1)

    Returns:
        Integer sample position

    Example:
        >>> discretize(0.5, 255)
        128
        >>> discretize(0.25, 255)
        64
    """
    return int(value * scale + 0.5)


def sample_dtype(bit_depth: int) -> np.dtype:
    """
    Backing storage type for samples of the given bit depth.

    Args:
        bit_depth: Integer sample depth (1-16)

    Returns:
        np.uint8 for depths up to 8 bits, np.uint16 otherwise
    """
    return np.dtype(np.uint8) if bit_depth <= 8 else np.dtype(np.uint16)


def identity_lut(lut_size: int, dtype: np.dtype | type = np.uint16) -> np.ndarray:
    """
    Build the identity table entry[i] = i.

    Args:
        lut_size: Number of entries (2**bit_depth)
        dtype: Storage type of the entries

    Returns:
        Identity LUT [lut_size]
    """
    return np.arange(lut_size, dtype=dtype)


def freeze(array: np.ndarray) -> np.ndarray:
    """Mark an array read-only so it can be shared between workers."""
    array.flags.writeable = False
    return array
