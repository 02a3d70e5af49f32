"""
Control point parsing and validation.

Curve specifications arrive in one of two textual conveniences, which carry
the same content:

- a flat numeric array ``[x0, y0, x1, y1, ...]`` (or an array of pairs)
- a delimited string ``"x0/y0 x1/y1 ..."`` where any non-numeric character
  acts as a separator

Both are decoded into ``(x, y)`` float pairs and then validated against the
integer sample grid of the target format by :func:`parse_points`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from curvelut.errors import (
    DegenerateCurveError,
    NonIncreasingXError,
    OddPointListError,
    OutOfRangeCoordinateError,
)
from curvelut.utils import discretize

logger = logging.getLogger(__name__)

# Leading whitespace is skipped like C's strtod
_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

PointPairs: TypeAlias = list[tuple[float, float]]
CurveSpec: TypeAlias = str | Sequence[float] | Sequence[Sequence[float]] | np.ndarray


@dataclass(frozen=True)
class ControlPoint:
    """
    A normalized (x, y) anchor of a tone curve.

    Attributes:
        x: Input coordinate in [0, 1]
        y: Output coordinate in [0, 1]

    Raises:
        OutOfRangeCoordinateError: If x or y lies outside [0, 1]
    """

    x: float
    y: float

    def __post_init__(self):
        """Validate coordinates."""
        if not (0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0):
            raise OutOfRangeCoordinateError(
                f"invalid key point coordinates ({self.x}, {self.y}), "
                f"x and y must be in the [0, 1] range"
            )

    def __repr__(self) -> str:
        return f"ControlPoint({self.x:g}, {self.y:g})"


def _strtod(text: str, pos: int) -> tuple[float, int]:
    """Read a float at pos; returns 0.0 without advancing when none is found."""
    match = _NUMBER_RE.match(text, pos)
    if match is None:
        return 0.0, pos
    return float(match.group(1)), match.end()


def points_from_string(text: str) -> PointPairs:
    """
    Decode the delimited-string curve syntax.

    Numbers are read pairwise; exactly one character after each number is
    consumed as a separator, whatever it is.

    Args:
        text: Curve text such as "0/0 0.5/0.58 1/1"

    Returns:
        List of (x, y) pairs

    Example:
        >>> points_from_string("0/0 0.5/0.4 1/1")
        [(0.0, 0.0), (0.5, 0.4), (1.0, 1.0)]
        >>> points_from_string("0:0,1:1")
        [(0.0, 0.0), (1.0, 1.0)]
    """
    pairs: PointPairs = []
    pos = 0
    end = len(text)

    while pos < end:
        x, pos = _strtod(text, pos)
        if pos < end:
            pos += 1

        y, pos = _strtod(text, pos)
        if pos < end:
            pos += 1

        pairs.append((x, y))

    return pairs


def points_from_array(values: Sequence[float] | Sequence[Sequence[float]] | np.ndarray) -> PointPairs:
    """
    Decode the numeric array curve syntax.

    Accepts a flat ``[x0, y0, x1, y1, ...]`` sequence or an array of pairs.

    Args:
        values: Numeric curve specification

    Returns:
        List of (x, y) pairs

    Raises:
        OddPointListError: If the flattened array has an odd element count
    """
    flat = np.asarray(values, dtype=np.float64).ravel()

    if flat.size % 2:
        raise OddPointListError(
            f"point array has {flat.size} elements, expected an even count "
            f"of interleaved x/y values"
        )

    return [(float(x), float(y)) for x, y in flat.reshape(-1, 2)]


def read_points(spec: CurveSpec | None) -> PointPairs | None:
    """
    Decode a curve specification in either syntax.

    Args:
        spec: String, numeric array, or None

    Returns:
        List of (x, y) pairs, or None if spec is None
    """
    if spec is None:
        return None
    if isinstance(spec, str):
        return points_from_string(spec)
    if isinstance(spec, bytes):
        return points_from_string(spec.decode("ascii"))
    return points_from_array(spec)


def parse_points(pairs: Iterable[tuple[float, float]], scale: int) -> tuple[ControlPoint, ...]:
    """
    Validate decoded pairs into an ordered control point sequence.

    Points must be strictly increasing in x once discretized onto the
    integer sample grid, so two points that collide at the working bit depth
    are rejected even if they differ as real numbers.

    Args:
        pairs: Decoded (x, y) pairs in curve order
        scale: Maximum sample value (2**bit_depth - 1)

    Returns:
        Tuple of ControlPoint; empty means the identity curve

    Raises:
        OutOfRangeCoordinateError: If a coordinate lies outside [0, 1]
        NonIncreasingXError: If consecutive points are not strictly increasing
        DegenerateCurveError: If exactly one point is given

    Example:
        >>> parse_points([(0.0, 0.0), (1.0, 1.0)], 255)
        (ControlPoint(0, 0), ControlPoint(1, 1))
    """
    points: list[ControlPoint] = []
    last_x = -1

    for x, y in pairs:
        point = ControlPoint(float(x), float(y))
        x_pos = discretize(point.x, scale)

        if points and last_x >= x_pos:
            raise NonIncreasingXError(
                f"key point coordinates are too close from each other or not strictly "
                f"increasing on the x-axis (x={points[-1].x:g} then x={point.x:g} "
                f"at scale {scale})"
            )

        points.append(point)
        last_x = x_pos

    if len(points) == 1:
        raise DegenerateCurveError(
            "only one point is defined, this is unlikely to behave as you expect. "
            "Give at least two points, or none for the identity curve."
        )

    return tuple(points)


def format_points(points: Iterable[ControlPoint]) -> str:
    """
    Render control points in the delimited-string syntax.

    Example:
        >>> format_points([ControlPoint(0, 1), ControlPoint(1, 0)])
        '0/1 1/0'
    """
    return " ".join(f"{p.x:g}/{p.y:g}" for p in points)


def as_arrays(points: Sequence[ControlPoint]) -> tuple[np.ndarray, np.ndarray]:
    """Split control points into contiguous float64 x and y arrays."""
    x = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    y = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return x, y
