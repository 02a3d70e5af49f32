"""
Natural cubic spline fitting and LUT sampling.

Finds the curve through the control points with zero second derivative at
both ends, then samples it on every integer LUT index. The spline is not
convexity-preserving, so sampled values may overshoot the control hull;
they are saturated to [0, scale].
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from curvelut.curve.kernels import (
    evaluate_spline_numba,
    natural_spline_moments_numba,
    sample_spline_lut_numba,
)
from curvelut.errors import AllocationFailureError
from curvelut.points import ControlPoint, as_arrays
from curvelut.utils import identity_lut

logger = logging.getLogger(__name__)


def natural_spline_moments(points: Sequence[ControlPoint]) -> np.ndarray:
    """
    Solve for the second derivatives of the natural spline at each knot.

    Args:
        points: Validated control points (at least two)

    Returns:
        Second derivatives [n]; the first and last are zero
    """
    x, y = as_arrays(points)
    return natural_spline_moments_numba(x, y)


def fit_lut(
    points: Sequence[ControlPoint],
    lut_size: int,
    scale: int,
    dtype: np.dtype | type = np.uint16,
) -> np.ndarray:
    """
    Build a LUT from a control point sequence.

    An empty sequence yields the identity map.

    Args:
        points: Validated control points (empty or at least two)
        lut_size: Number of LUT entries (2**bit_depth)
        scale: Maximum sample value (lut_size - 1)
        dtype: Storage type of the LUT entries

    Returns:
        LUT [lut_size] with every entry in [0, scale]

    Raises:
        AllocationFailureError: If working memory cannot be allocated

    Example:
        >>> lut = fit_lut([ControlPoint(0, 1), ControlPoint(1, 0)], 256, 255)
        >>> int(lut[0]), int(lut[255])
        (255, 0)
    """
    try:
        if not points:
            return identity_lut(lut_size, dtype)

        x, y = as_arrays(points)
        moments = natural_spline_moments_numba(x, y)

        lut = np.empty(lut_size, dtype=dtype)
        sample_spline_lut_numba(x, y, moments, scale, lut)
    except MemoryError as e:
        raise AllocationFailureError(
            f"cannot allocate working memory for a {len(points)}-point spline "
            f"and a {lut_size}-entry LUT"
        ) from e

    logger.debug("[Spline] Fitted %d points onto %d entries", len(points), lut_size)
    return lut


def evaluate_spline(points: Sequence[ControlPoint], xs: np.ndarray | Sequence[float]) -> np.ndarray:
    """
    Evaluate the continuous spline at normalized abscissae.

    Useful for inspecting a curve independently of any bit depth. Values
    are not clamped, so overshoot between knots is visible.

    Args:
        points: Validated control points (empty means identity)
        xs: Query positions in [0, 1]

    Returns:
        Curve values [len(xs)] as float64

    Example:
        >>> pts = [ControlPoint(0, 0), ControlPoint(0.5, 0.58), ControlPoint(1, 1)]
        >>> float(evaluate_spline(pts, [0.5])[0])
        0.58
    """
    xs = np.asarray(xs, dtype=np.float64).ravel()
    if not points:
        return xs.copy()

    x, y = as_arrays(points)
    moments = natural_spline_moments_numba(x, y)

    out = np.empty_like(xs)
    evaluate_spline_numba(x, y, moments, xs, out)
    return out
