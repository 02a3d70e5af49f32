"""
Curve filter configuration and frame remapping.

build_filter_config turns raw host values (preset, per-plane curves, master
curve, .acv file, plane list) into an immutable FilterConfig holding one
finished LUT per plane. Construction is all-or-nothing: it either returns a
complete configuration or raises a CurveError.

Slot defaults are resolved in this order, each step only filling slots that
are still empty:

1. explicit curves
2. curves decoded from the .acv file
3. preset defaults

Remapping is a pure function of (FilterConfig, source samples). LUTs are
read-only, so one configuration can serve concurrent workers as long as each
writes its own destination frame.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from numbers import Integral

import numpy as np

from curvelut.acv import decode_acv, read_acv
from curvelut.compose import compose_luts
from curvelut.constants import (
    MASTER_SLOT,
    MAX_BIT_DEPTH,
    MIN_BIT_DEPTH,
    NUM_COLOR_PLANES,
    NUM_SLOTS,
    SAMPLE_TYPE_INTEGER,
    SLOT_NAMES,
)
from curvelut.curve.kernels import apply_lut_plane_numba
from curvelut.curve.presets import CurvePreset
from curvelut.curve.spline import fit_lut
from curvelut.errors import (
    DuplicatePlaneError,
    PlaneIndexOutOfRangeError,
    TooManyCurvesError,
    UnsupportedFormatError,
)
from curvelut.frame import Frame, VideoFormat
from curvelut.points import ControlPoint, CurveSpec, format_points, parse_points, read_points
from curvelut.protocols import PlanarFrame
from curvelut.utils import freeze

logger = logging.getLogger(__name__)


class FilterConfig:
    """
    Immutable per-instance state of a curve filter.

    Attributes:
        format: Sample layout the LUTs were built for
        planes: Sorted plane indices that are remapped; others pass through
        luts: Four read-only LUTs (plane0, plane1, plane2, master); the
            plane LUTs already include the master pass
        points: Control points that produced each slot
    """

    __slots__ = ("format", "planes", "luts", "points")

    def __init__(
        self,
        format: VideoFormat,
        planes: tuple[int, ...],
        luts: tuple[np.ndarray, ...],
        points: tuple[tuple[ControlPoint, ...], ...],
    ):
        self.format = format
        self.planes = planes
        self.luts = luts
        self.points = points

    @property
    def scale(self) -> int:
        """Maximum sample value of the format."""
        return self.format.scale

    @property
    def master_lut(self) -> np.ndarray:
        """LUT of the master curve on its own."""
        return self.luts[MASTER_SLOT]

    def lut(self, plane: int) -> np.ndarray:
        """Finished LUT applied to a plane."""
        return self.luts[plane]

    def is_identity(self) -> bool:
        """True if every slot uses the identity curve."""
        return not any(self.points)

    def remap(self, src: PlanarFrame, dst: PlanarFrame) -> None:
        """Remap the selected planes of src into dst (see remap_frame)."""
        remap_frame(self, src, dst)

    def apply(self, frame: Frame, inplace: bool = True) -> Frame:
        """
        Apply the curves to a frame.

        Args:
            frame: Source frame
            inplace: If True, remap the selected planes of frame directly

        Returns:
            Frame with remapped planes; unselected planes equal the input
        """
        dst = frame if inplace else frame.copy()
        remap_frame(self, frame, dst)
        return dst

    def __call__(self, frame: Frame, inplace: bool = True) -> Frame:
        """Apply the curves to a frame (callable interface)."""
        return self.apply(frame, inplace=inplace)

    def __repr__(self) -> str:
        curves = ", ".join(
            f"{SLOT_NAMES[slot]}='{format_points(points)}'"
            for slot, points in enumerate(self.points)
            if points
        )
        return (
            f"FilterConfig({self.format.bit_depth}-bit, planes={list(self.planes)}"
            f"{', ' + curves if curves else ''})"
        )


# ============================================================================
# Construction
# ============================================================================


def check_format(fmt: VideoFormat) -> None:
    """
    Reject formats the LUT engine cannot serve.

    Raises:
        UnsupportedFormatError: If fmt is variable, float, or deeper than 16 bits
    """
    if (
        not fmt.constant
        or fmt.sample_type != SAMPLE_TYPE_INTEGER
        or not MIN_BIT_DEPTH <= fmt.bit_depth <= MAX_BIT_DEPTH
    ):
        raise UnsupportedFormatError(
            f"only constant format {MIN_BIT_DEPTH}-{MAX_BIT_DEPTH} bit integer input supported, "
            f"got {fmt}"
        )


def select_planes(planes: Iterable[int] | None, num_planes: int) -> tuple[int, ...]:
    """
    Validate a plane selection.

    Args:
        planes: Plane indices, or None/empty for every plane
        num_planes: Number of planes in the format

    Returns:
        Sorted tuple of selected plane indices

    Raises:
        PlaneIndexOutOfRangeError: If an index is not an integer plane of the format
        DuplicatePlaneError: If an index is repeated
    """
    selected = list(planes) if planes is not None else []
    if not selected:
        return tuple(range(min(num_planes, NUM_COLOR_PLANES)))

    seen: set[int] = set()
    for plane in selected:
        if isinstance(plane, bool) or not isinstance(plane, Integral):
            raise PlaneIndexOutOfRangeError(
                f"plane index {plane!r} must be an integer, got {type(plane).__name__}"
            )
        plane = int(plane)
        if not 0 <= plane < min(num_planes, NUM_COLOR_PLANES):
            raise PlaneIndexOutOfRangeError(
                f"plane index {plane} out of range, format has {num_planes} plane(s)"
            )
        if plane in seen:
            raise DuplicatePlaneError(f"plane {plane} specified twice")
        seen.add(plane)

    return tuple(sorted(seen))


def _is_specified(pairs: list | None) -> bool:
    return bool(pairs)


def resolve_slot_pairs(
    num_planes: int,
    preset: int | str = 0,
    curves: Sequence[CurveSpec | None] | None = None,
    master: CurveSpec | None = None,
    acv: str | os.PathLike | bytes | None = None,
) -> list[list[tuple[float, float]]]:
    """
    Decode raw curve inputs and fill empty slots from the .acv file and preset.

    Returns:
        Four lists of raw (x, y) pairs, one per slot; empty means identity

    Raises:
        InvalidPresetError: If the preset is unknown
        TooManyCurvesError: If more curves than planes are given
        OddPointListError: If a numeric curve has an odd length
        CurveFileIOError, MalformedAcvDataError: If the .acv file is unusable
    """
    curve_preset = CurvePreset.get(preset)

    curves = list(curves) if curves is not None else []
    if len(curves) > num_planes:
        raise TooManyCurvesError(
            f"more curves given than there are planes ({len(curves)} > {num_planes})"
        )

    slots: list[list[tuple[float, float]] | None] = [None] * NUM_SLOTS
    for i, spec in enumerate(curves):
        slots[i] = read_points(spec)
    slots[MASTER_SLOT] = read_points(master)

    if acv is not None:
        decoded = decode_acv(bytes(acv)) if isinstance(acv, (bytes, bytearray)) else read_acv(acv)
        for slot, pairs in enumerate(decoded):
            if not _is_specified(slots[slot]) and pairs is not None:
                slots[slot] = pairs
                logger.debug("[Curves] %s filled from curve file", SLOT_NAMES[slot])

    for slot in curve_preset.slots:
        if not _is_specified(slots[slot]):
            slots[slot] = read_points(curve_preset.defaults_for(slot))
            logger.debug("[Curves] %s filled from preset '%s'", SLOT_NAMES[slot], curve_preset.name)

    return [pairs or [] for pairs in slots]


def build_filter_config(
    fmt: VideoFormat,
    preset: int | str = 0,
    curves: Sequence[CurveSpec | None] | None = None,
    master: CurveSpec | None = None,
    acv: str | os.PathLike | bytes | None = None,
    planes: Iterable[int] | None = None,
) -> FilterConfig:
    """
    Build the immutable filter state from raw configuration values.

    Args:
        fmt: Format of the frames that will be processed
        preset: Preset index (0-10) or name; 0/"none" for no preset
        curves: Per-plane curves, each a "x/y x/y" string or a numeric array
        master: Curve applied after the per-plane curves
        acv: Photoshop .acv file path, or its raw bytes
        planes: Plane indices to process; None for all planes

    Returns:
        Ready FilterConfig

    Raises:
        CurveError: Subclass describing the first configuration problem

    Example:
        >>> config = build_filter_config(VideoFormat.rgb(8), preset="negative")
        >>> int(config.lut(0)[0]), int(config.lut(0)[255])
        (255, 0)
    """
    check_format(fmt)
    selected = select_planes(planes, fmt.num_planes)

    slot_pairs = resolve_slot_pairs(fmt.num_planes, preset, curves, master, acv)

    scale = fmt.scale
    points = tuple(parse_points(pairs, scale) for pairs in slot_pairs)

    luts = [fit_lut(p, fmt.lut_size, scale, fmt.dtype) for p in points]
    master_lut = luts[MASTER_SLOT] if points[MASTER_SLOT] else None
    plane_luts = compose_luts(luts[:NUM_COLOR_PLANES], master_lut)

    config = FilterConfig(
        format=fmt,
        planes=selected,
        luts=tuple(freeze(lut) for lut in (*plane_luts, luts[MASTER_SLOT])),
        points=points,
    )
    logger.info(
        "[Curves] Built %d-bit filter for planes %s (preset=%r, %d curve(s) set)",
        fmt.bit_depth,
        list(selected),
        preset,
        sum(1 for p in points if p),
    )
    return config


# ============================================================================
# Remapping
# ============================================================================


def remap_plane(src: np.ndarray, dst: np.ndarray, lut: np.ndarray) -> None:
    """
    Write lut[src] into dst for every sample position.

    Args:
        src: Source plane [height, width]
        dst: Destination plane [height, width], may be src itself
        lut: LUT of the plane dtype, 2**bit_depth entries

    Raises:
        UnsupportedFormatError: If plane and LUT storage types differ
        ValueError: If src and dst shapes differ
    """
    if src.dtype != lut.dtype or dst.dtype != lut.dtype:
        raise UnsupportedFormatError(
            f"plane dtype {src.dtype}/{dst.dtype} does not match LUT dtype {lut.dtype}"
        )
    if src.shape != dst.shape:
        raise ValueError(f"Source plane {src.shape} and destination plane {dst.shape} differ")

    apply_lut_plane_numba(src, lut, dst)


def remap_frame(config: FilterConfig, src: PlanarFrame, dst: PlanarFrame) -> None:
    """
    Remap the selected planes of src into a pre-allocated dst.

    Unselected planes of dst are not touched; the caller copies them when
    dst is a separate buffer.

    Args:
        config: Filter built for src's format
        src: Source frame
        dst: Destination frame of the same format

    Raises:
        UnsupportedFormatError: If a frame's format differs from the config's
    """
    if src.format != config.format or dst.format != config.format:
        raise UnsupportedFormatError(
            f"frame format {src.format} does not match filter format {config.format}"
        )

    for plane in config.planes:
        remap_plane(src.planes[plane], dst.planes[plane], config.luts[plane])

    logger.debug("[Curves] Remapped planes %s", list(config.planes))
