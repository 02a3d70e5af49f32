"""
Numba-optimized kernels for curve LUT construction and plane remapping.

The spline kernels are sequential (a handful of control points, one LUT per
slot) and compiled without fastmath so the zero-pivot test and the rounding
policy behave exactly as written. The remap kernel is the per-frame hot loop.
It is serial and nogil: callers parallelize by remapping frames from their
own threads, and no call enters Numba's threading layer.
"""

import numpy as np
from numba import njit

# ============================================================================
# Spline Kernels
# ============================================================================


@njit(cache=True, nogil=True)
def solve_tridiagonal_numba(
    sub: np.ndarray,
    main: np.ndarray,
    sup: np.ndarray,
    rhs: np.ndarray,
) -> np.ndarray:
    """
    Thomas algorithm for a tridiagonal system.

    Forward elimination normalizes rows 1..n-1 by their pivot; the first row
    must already have a unit pivot, as the natural boundary row does. A pivot
    of exactly zero uses a multiplier of 1 instead of failing.

    Args:
        sub: Sub-diagonal [n] (sub[0] unused)
        main: Main diagonal [n]
        sup: Super-diagonal [n] (sup[n-1] unused)
        rhs: Right-hand side [n]

    Returns:
        Solution vector [n]
    """
    n = main.shape[0]
    c = sup.copy()
    r = rhs.copy()

    for i in range(1, n):
        den = main[i] - sub[i] * c[i - 1]
        k = 1.0 / den if den != 0.0 else 1.0
        c[i] *= k
        r[i] = (r[i] - sub[i] * r[i - 1]) * k

    for i in range(n - 2, -1, -1):
        r[i] = r[i] - c[i] * r[i + 1]

    return r


@njit(cache=True, nogil=True)
def natural_spline_moments_numba(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Second derivatives of the natural cubic spline through (x, y).

    Boundary rows pin the first and last second derivative to zero.

    Args:
        x: Strictly increasing knot abscissae [n], n >= 2
        y: Knot ordinates [n]

    Returns:
        Second derivatives at the knots [n]
    """
    n = x.shape[0]
    h = np.empty(n - 1, dtype=np.float64)
    for i in range(n - 1):
        h[i] = x[i + 1] - x[i]

    sub = np.zeros(n, dtype=np.float64)
    main = np.zeros(n, dtype=np.float64)
    sup = np.zeros(n, dtype=np.float64)
    rhs = np.zeros(n, dtype=np.float64)

    main[0] = 1.0
    main[n - 1] = 1.0
    for i in range(1, n - 1):
        sub[i] = h[i - 1]
        main[i] = 2.0 * (h[i - 1] + h[i])
        sup[i] = h[i]
        rhs[i] = 6.0 * ((y[i + 1] - y[i]) / h[i] - (y[i] - y[i - 1]) / h[i - 1])

    return solve_tridiagonal_numba(sub, main, sup, rhs)


@njit(cache=True, nogil=True)
def sample_spline_lut_numba(
    x: np.ndarray,
    y: np.ndarray,
    moments: np.ndarray,
    scale: int,
    lut: np.ndarray,
) -> None:
    """
    Sample a natural cubic spline onto every integer LUT index.

    Indices left of the first knot and right of the last knot take the
    knot's value. Every segment is evaluated over its discretized span
    inclusive at both ends; shared knots are written twice with equal values.

    Args:
        x: Knot abscissae [n] in [0, 1]
        y: Knot ordinates [n] in [0, 1]
        moments: Spline second derivatives [n]
        scale: Maximum sample value
        lut: Output LUT [scale + 1]
    """
    n = x.shape[0]
    lut_size = lut.shape[0]

    # Left padding
    x_first = int(x[0] * scale + 0.5)
    y_first = min(max(int(y[0] * scale + 0.5), 0), scale)
    for i in range(x_first):
        lut[i] = y_first

    for k in range(n - 1):
        h = x[k + 1] - x[k]
        a = y[k]
        b = (y[k + 1] - y[k]) / h - h * moments[k] / 2.0 - h * (moments[k + 1] - moments[k]) / 6.0
        c = moments[k] / 2.0
        d = (moments[k + 1] - moments[k]) / (6.0 * h)

        x_start = int(x[k] * scale + 0.5)
        x_end = int(x[k + 1] * scale + 0.5)
        for xi in range(x_start, x_end + 1):
            t = (xi - x_start) / scale
            yy = a + b * t + c * t * t + d * t * t * t
            lut[xi] = min(max(int(yy * scale + 0.5), 0), scale)

    # Right padding
    x_last = int(x[n - 1] * scale + 0.5)
    y_last = min(max(int(y[n - 1] * scale + 0.5), 0), scale)
    for i in range(x_last, lut_size):
        lut[i] = y_last


@njit(cache=True, nogil=True)
def evaluate_spline_numba(
    x: np.ndarray,
    y: np.ndarray,
    moments: np.ndarray,
    xs: np.ndarray,
    out: np.ndarray,
) -> None:
    """
    Evaluate a natural cubic spline at arbitrary normalized abscissae.

    Outside the knot range the end knot values are held constant. Results
    are not clamped.

    Args:
        x: Knot abscissae [n]
        y: Knot ordinates [n]
        moments: Spline second derivatives [n]
        xs: Query abscissae [m]
        out: Output buffer [m]
    """
    n = x.shape[0]

    for j in range(xs.shape[0]):
        q = xs[j]
        if q <= x[0]:
            out[j] = y[0]
            continue
        if q >= x[n - 1]:
            out[j] = y[n - 1]
            continue

        k = 0
        while k < n - 2 and x[k + 1] <= q:
            k += 1

        h = x[k + 1] - x[k]
        b = (y[k + 1] - y[k]) / h - h * moments[k] / 2.0 - h * (moments[k + 1] - moments[k]) / 6.0
        c = moments[k] / 2.0
        d = (moments[k + 1] - moments[k]) / (6.0 * h)
        t = q - x[k]
        out[j] = y[k] + b * t + c * t * t + d * t * t * t


# ============================================================================
# Plane Remap Kernel
# ============================================================================


@njit(cache=True, nogil=True)
def apply_lut_plane_numba(
    src: np.ndarray,
    lut: np.ndarray,
    dst: np.ndarray,
) -> None:
    """
    Remap every sample of a plane through a LUT: dst = lut[src].

    Compiled once per sample dtype (uint8 and uint16). The LUT is always
    2**bit_depth entries long, so indices need no bounds check. src and dst
    may be the same array.

    Args:
        src: Source plane [height, width]
        lut: LUT [2**bit_depth] of the plane dtype
        dst: Destination plane [height, width]
    """
    height = src.shape[0]
    width = src.shape[1]

    for row in range(height):
        for col in range(width):
            dst[row, col] = lut[src[row, col]]


# ============================================================================
# Helper Functions
# ============================================================================


def warmup_curve_kernels() -> None:
    """
    Warm up Numba JIT compilation for curve kernels.

    Call this once at import time to avoid first-call compilation overhead.
    """
    x = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    y = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    moments = natural_spline_moments_numba(x, y)

    xs = np.linspace(0.0, 1.0, 16)
    out = np.empty_like(xs)
    evaluate_spline_numba(x, y, moments, xs, out)

    for dtype, lut_size in ((np.uint8, 256), (np.uint16, 1024)):
        lut = np.empty(lut_size, dtype=dtype)
        sample_spline_lut_numba(x, y, moments, lut_size - 1, lut)

        plane = np.zeros((4, 4), dtype=dtype)
        apply_lut_plane_numba(plane, lut, plane)


# Warmup on import to avoid first-call overhead
warmup_curve_kernels()
