"""
curvelut - Per-channel tone curves for planar images

Computes one lookup table per plane from a few control points using natural
cubic spline interpolation, and remaps every sample of a frame through it.
The discretized equivalent of the curves tool in image editors.

Features:
- Natural cubic spline LUTs at any integer bit depth from 1 to 16
- Curves given as "x/y x/y" text or numeric arrays
- Master curve applied on top of the per-plane curves
- Eleven built-in presets (negative, vintage, cross process, ...)
- Photoshop .acv curve file import
- Plane-selective remapping with Numba-compiled kernels
- Immutable, read-only LUTs shared safely across worker threads

Example - Fluent builder:
    >>> from curvelut import Curves, Frame, VideoFormat
    >>>
    >>> curves = Curves().preset("vintage").master("0/0 0.5/0.58 1/1")
    >>> frame = Frame.blank(VideoFormat.rgb(8), 1920, 1080)
    >>> frame = curves(frame, inplace=True)

Example - One-shot configuration:
    >>> from curvelut import build_filter_config
    >>>
    >>> config = build_filter_config(
    ...     VideoFormat.yuv(10),
    ...     curves=["0/0 0.5/0.58 1/1"],
    ...     planes=[0],
    ... )
    >>> config.remap(src, dst)
"""

__version__ = "0.1.0"

# .acv curve files
from curvelut.acv import decode_acv, read_acv

# LUT composition
from curvelut.compose import compose_lut, compose_luts

# Spline fitting and presets
from curvelut.curve.presets import PRESETS, CurvePreset
from curvelut.curve.spline import evaluate_spline, fit_lut

# Errors
from curvelut.errors import (
    AllocationFailureError,
    CurveError,
    CurveFileIOError,
    DegenerateCurveError,
    DuplicatePlaneError,
    InvalidPresetError,
    MalformedAcvDataError,
    NonIncreasingXError,
    OddPointListError,
    OutOfRangeCoordinateError,
    PlaneIndexOutOfRangeError,
    TooManyCurvesError,
    UnsupportedFormatError,
)

# Filter configuration and remapping
from curvelut.filter import FilterConfig, build_filter_config, remap_frame, remap_plane

# Frames
from curvelut.frame import Frame, VideoFormat

# Fluent builder
from curvelut.pipeline import Curves

# Control points
from curvelut.points import (
    ControlPoint,
    format_points,
    parse_points,
    points_from_array,
    points_from_string,
)

# Protocols
from curvelut.protocols import PlanarFrame

__all__ = [
    # Version
    "__version__",
    # Core classes
    "Curves",
    "CurvePreset",
    "FilterConfig",
    "Frame",
    "VideoFormat",
    "ControlPoint",
    "PRESETS",
    # Protocols
    "PlanarFrame",
    # Construction
    "build_filter_config",
    "parse_points",
    "points_from_array",
    "points_from_string",
    "format_points",
    "fit_lut",
    "evaluate_spline",
    "compose_lut",
    "compose_luts",
    "decode_acv",
    "read_acv",
    # Remapping
    "remap_plane",
    "remap_frame",
    # Errors
    "CurveError",
    "UnsupportedFormatError",
    "InvalidPresetError",
    "OddPointListError",
    "PlaneIndexOutOfRangeError",
    "DuplicatePlaneError",
    "TooManyCurvesError",
    "OutOfRangeCoordinateError",
    "NonIncreasingXError",
    "DegenerateCurveError",
    "CurveFileIOError",
    "MalformedAcvDataError",
    "AllocationFailureError",
]
