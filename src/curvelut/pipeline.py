"""
Curves: Composable tone curve builder with lazy LUT compilation.

This module provides a fluent API for describing a curves adjustment and
compiling it into per-plane lookup tables for a given frame format.

Key Features:
- Method chaining for intuitive configuration
- Presets, explicit per-plane curves, master curve and .acv files combined
  with a fixed precedence (explicit > .acv > preset)
- Lazy compilation with dirty flag tracking, cached per frame format
- In-place operation support for performance

Example:
    >>> curves = (Curves()
    ...     .preset("vintage")            # Fills plane curves
    ...     .curve(0, "0/0 0.5/0.58 1/1") # Overrides the preset for plane 0
    ...     .master([0, 0, 0.5, 0.4, 1, 1])
    ...     .planes(0, 1, 2)
    ... )
    >>> frame = curves(frame, inplace=True)
"""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from numbers import Integral
from typing import Self

from curvelut.constants import NUM_COLOR_PLANES
from curvelut.curve.presets import CurvePreset
from curvelut.errors import InvalidPresetError, PlaneIndexOutOfRangeError
from curvelut.filter import FilterConfig, build_filter_config
from curvelut.frame import Frame, VideoFormat
from curvelut.points import CurveSpec
from curvelut.validators import validate_range, validate_type

logger = logging.getLogger(__name__)


def _is_set(spec: CurveSpec | None) -> bool:
    """True for a non-empty curve specification."""
    return spec is not None and len(spec) > 0


class Curves:
    """
    Composable curves adjustment with lazy LUT compilation.

    Slots:
    - curve(0..2): per-plane curves
    - master: global curve applied on top of every plane curve

    Sources, highest precedence first:
    - explicit curves set with curve() / master()
    - curves read from a Photoshop .acv file set with acv()
    - preset defaults set with preset()

    An empty curve ("" or []) counts as unset, so a lower-precedence source
    can still fill the slot.

    Example:
        >>> curves = Curves().preset("negative")
        >>> config = curves.compile(VideoFormat.rgb(8))
        >>> int(config.lut(0)[10])
        245
    """

    __slots__ = (
        "_preset",
        "_curves",  # dict[int, CurveSpec] for planes 0..2
        "_master",
        "_acv",  # Path or raw bytes, decoded at compile time
        "_planes",
        "_config",  # Compiled FilterConfig for the last format
        "_is_dirty",
    )

    def __init__(self):
        """Initialize an identity curves adjustment."""
        self._preset: int | str = 0
        self._curves: dict[int, CurveSpec] = {}
        self._master: CurveSpec | None = None
        self._acv: str | os.PathLike | bytes | None = None
        self._planes: tuple[int, ...] | None = None

        self._config: FilterConfig | None = None
        self._is_dirty: bool = True

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def is_compiled(self) -> bool:
        """Check if LUTs are compiled and up-to-date."""
        return self._config is not None and not self._is_dirty

    @property
    def needs_compilation(self) -> bool:
        """Check if compilation is needed."""
        return not self.is_compiled

    @property
    def config(self) -> FilterConfig | None:
        """Last compiled configuration, if any."""
        return self._config

    # ========================================================================
    # Configuration
    # ========================================================================

    @validate_type((Integral, str), "preset", error=InvalidPresetError)
    def preset(self, preset: int | str) -> Self:
        """
        Select a preset that fills the slots left unset.

        Args:
            preset: Preset index (0-10) or name such as "vintage"

        Returns:
            Self for method chaining

        Example:
            >>> Curves().preset(8)           # negative
            >>> Curves().preset("lighter")
        """
        CurvePreset.get(preset)
        self._preset = preset
        self._is_dirty = True
        return self

    @validate_type(Integral, "plane", error=PlaneIndexOutOfRangeError)
    @validate_range(0, NUM_COLOR_PLANES - 1, "plane", error=PlaneIndexOutOfRangeError)
    def curve(self, plane: int, points: CurveSpec) -> Self:
        """
        Set the curve of one plane.

        Args:
            plane: Plane index (0, 1 or 2)
            points: "x/y x/y" text or a numeric [x0, y0, x1, y1, ...] array

        Returns:
            Self for method chaining
        """
        self._curves[int(plane)] = points
        self._is_dirty = True
        return self

    def master(self, points: CurveSpec) -> Self:
        """
        Set the master curve, applied after each plane curve.

        Args:
            points: "x/y x/y" text or a numeric [x0, y0, x1, y1, ...] array

        Returns:
            Self for method chaining
        """
        self._master = points
        self._is_dirty = True
        return self

    def acv(self, source: str | os.PathLike | bytes) -> Self:
        """
        Take curves from a Photoshop .acv file.

        The file is read when the LUTs are compiled.

        Args:
            source: Path to the file, or its raw bytes

        Returns:
            Self for method chaining
        """
        self._acv = source
        self._is_dirty = True
        return self

    def planes(self, *planes: int) -> Self:
        """
        Restrict processing to some planes; others are copied unchanged.

        Args:
            *planes: Plane indices; none selects every plane

        Returns:
            Self for method chaining

        Example:
            >>> Curves().preset("darker").planes(0)  # Luma only
        """
        self._planes = tuple(planes) if planes else None
        self._is_dirty = True
        return self

    # ========================================================================
    # Compilation
    # ========================================================================

    def _curve_list(self) -> list[CurveSpec | None]:
        if not self._curves:
            return []
        return [self._curves.get(i) for i in range(max(self._curves) + 1)]

    def compile(self, fmt: VideoFormat) -> FilterConfig:
        """
        Build the LUTs for a frame format.

        Reuses the previous result when nothing changed and the format is
        the same.

        Args:
            fmt: Format of the frames that will be processed

        Returns:
            Compiled FilterConfig

        Raises:
            CurveError: If the configuration is invalid for this format
        """
        if self.is_compiled and self._config.format == fmt:
            logger.debug("[Curves] Already compiled, skipping")
            return self._config

        self._config = build_filter_config(
            fmt,
            preset=self._preset,
            curves=self._curve_list(),
            master=self._master,
            acv=self._acv,
            planes=self._planes,
        )
        self._is_dirty = False
        return self._config

    def apply(self, frame: Frame, inplace: bool = True) -> Frame:
        """
        Apply the curves to a frame.

        Args:
            frame: Source frame
            inplace: If True, modifies the frame's selected planes directly

        Returns:
            Frame with remapped planes
        """
        config = self.compile(frame.format)
        result = config.apply(frame, inplace=inplace)
        logger.debug("[Curves] Applied to %dx%d frame", frame.width, frame.height)
        return result

    def __call__(self, frame: Frame, inplace: bool = True) -> Frame:
        """Apply the curves to a frame (callable interface)."""
        return self.apply(frame, inplace=inplace)

    # ========================================================================
    # Utilities
    # ========================================================================

    def is_identity(self) -> bool:
        """True if no curve source is set."""
        return (
            CurvePreset.get(self._preset).id == 0
            and not any(_is_set(spec) for spec in self._curves.values())
            and not _is_set(self._master)
            and self._acv is None
        )

    def reset(self) -> Self:
        """
        Reset to the identity adjustment.

        Returns:
            Self for method chaining
        """
        self._preset = 0
        self._curves = {}
        self._master = None
        self._acv = None
        self._planes = None
        self._config = None
        self._is_dirty = True
        logger.debug("[Curves] Reset to defaults")
        return self

    def copy(self) -> Self:
        """
        Create a deep copy of this builder.

        Returns:
            Independent Curves with the same settings
        """
        return deepcopy(self)

    def __len__(self) -> int:
        """Return number of explicitly set curves (planes + master)."""
        return sum(1 for spec in self._curves.values() if _is_set(spec)) + _is_set(self._master)

    def __repr__(self) -> str:
        """String representation."""
        parts = []
        preset = CurvePreset.get(self._preset)
        if preset.id:
            parts.append(f"preset='{preset.name}'")
        for plane in sorted(self._curves):
            parts.append(f"curve{plane}={self._curves[plane]!r}")
        if _is_set(self._master):
            parts.append(f"master={self._master!r}")
        if self._acv is not None:
            parts.append("acv=<bytes>" if isinstance(self._acv, bytes) else f"acv={os.fspath(self._acv)!r}")
        if self._planes is not None:
            parts.append(f"planes={list(self._planes)}")
        return f"Curves({', '.join(parts)})" if parts else "Curves(identity)"
