"""
Configuration errors raised while building curve LUTs.

Every failure is detected at construction time. Each kind has its own
exception class so callers can branch on the type instead of the message.
"""

from __future__ import annotations


class CurveError(ValueError):
    """Base class for all curve configuration errors."""

    kind = "CurveError"

    def __init__(self, message: str):
        super().__init__(f"Curve: {message}")


class UnsupportedFormatError(CurveError):
    """Source format is not constant, not integer, or deeper than 16 bits."""

    kind = "UnsupportedFormat"


class InvalidPresetError(CurveError):
    """Preset id or name is not in the preset table."""

    kind = "InvalidPreset"


class OddPointListError(CurveError):
    """A numeric point array has an odd number of elements."""

    kind = "OddPointList"


class PlaneIndexOutOfRangeError(CurveError):
    """Plane selection references a plane the format does not have."""

    kind = "PlaneIndexOutOfRange"


class DuplicatePlaneError(CurveError):
    """Plane selection names the same plane twice."""

    kind = "DuplicatePlane"


class TooManyCurvesError(CurveError):
    """More per-plane curves were given than the format has planes."""

    kind = "TooManyCurves"


class OutOfRangeCoordinateError(CurveError):
    """A control point lies outside the unit square."""

    kind = "OutOfRangeCoordinate"


class NonIncreasingXError(CurveError):
    """Two control points collide or invert order at the working resolution."""

    kind = "NonIncreasingX"


class DegenerateCurveError(CurveError):
    """Exactly one control point was supplied for a channel."""

    kind = "DegenerateCurve"


class CurveFileIOError(CurveError):
    """Curve file cannot be opened or fully read."""

    kind = "CurveFileIO"


class MalformedAcvDataError(CurveError):
    """Curve file data is shorter than its declared layout requires."""

    kind = "MalformedAcvData"


class AllocationFailureError(CurveError):
    """Working memory for the spline solve could not be allocated."""

    kind = "AllocationFailure"
