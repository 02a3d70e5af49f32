"""
CurvePreset: Pre-configured tone curve presets.

Provides the classic curve looks (negative, vintage, cross process, contrast
variants). A preset only fills channel slots the caller left unspecified.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from curvelut.constants import MAX_PRESET_ID, MIN_PRESET_ID
from curvelut.errors import InvalidPresetError


@dataclass(frozen=True)
class CurvePreset:
    """
    Default control points for some of the four channel slots.

    Attributes:
        id: Preset index (0-10)
        name: Preset name
        curves: Default curve text per slot (plane0, plane1, plane2, master);
            None leaves the slot unspecified
    """

    id: int
    name: str
    curves: tuple[str | None, str | None, str | None, str | None] = (None, None, None, None)

    @property
    def slots(self) -> tuple[int, ...]:
        """Slots this preset provides a default for."""
        return tuple(i for i, curve in enumerate(self.curves) if curve)

    def defaults_for(self, slot: int) -> str | None:
        """Default curve text for a slot, or None."""
        return self.curves[slot]

    @classmethod
    def from_id(cls, preset_id: int) -> CurvePreset:
        """
        Look up a preset by index.

        Raises:
            InvalidPresetError: If preset_id is outside [0, 10]
        """
        if (
            isinstance(preset_id, bool)
            or not isinstance(preset_id, Integral)
            or not MIN_PRESET_ID <= preset_id <= MAX_PRESET_ID
        ):
            raise InvalidPresetError(
                f"preset must be 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, or 10, got {preset_id!r}"
            )
        return PRESETS[preset_id]

    @classmethod
    def from_name(cls, name: str) -> CurvePreset:
        """
        Look up a preset by name (case-insensitive, '-' or '_').

        Raises:
            InvalidPresetError: If no preset has this name
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        preset = _BY_NAME.get(key)
        if preset is None:
            raise InvalidPresetError(
                f"unknown preset '{name}'. Valid presets are: {', '.join(_BY_NAME)}"
            )
        return preset

    @classmethod
    def get(cls, preset: int | str) -> CurvePreset:
        """Look up a preset by index or name."""
        if isinstance(preset, str):
            return cls.from_name(preset)
        return cls.from_id(preset)

    def __repr__(self) -> str:
        return f"CurvePreset({self.id}, '{self.name}')"


def _master(curve: str) -> tuple[None, None, None, str]:
    return (None, None, None, curve)


PRESETS: tuple[CurvePreset, ...] = (
    CurvePreset(0, "none"),
    CurvePreset(
        1,
        "color_negative",
        (
            "0.129/1 0.466/0.498 0.725/0",
            "0.109/1 0.301/0.498 0.517/0",
            "0.098/1 0.235/0.498 0.423/0",
            None,
        ),
    ),
    CurvePreset(
        2,
        "cross_process",
        (
            "0/0 0.25/0.156 0.501/0.501 0.686/0.745 1/1",
            "0/0 0.25/0.188 0.38/0.501 0.745/0.815 1/0.815",
            "0/0 0.231/0.094 0.709/0.874 1/1",
            None,
        ),
    ),
    CurvePreset(3, "darker", _master("0/0 0.5/0.4 1/1")),
    CurvePreset(4, "increase_contrast", _master("0/0 0.149/0.066 0.831/0.905 0.905/0.98 1/1")),
    CurvePreset(5, "lighter", _master("0/0 0.4/0.5 1/1")),
    CurvePreset(6, "linear_contrast", _master("0/0 0.305/0.286 0.694/0.713 1/1")),
    CurvePreset(7, "medium_contrast", _master("0/0 0.286/0.219 0.639/0.643 1/1")),
    CurvePreset(8, "negative", _master("0/1 1/0")),
    CurvePreset(9, "strong_contrast", _master("0/0 0.301/0.196 0.592/0.6 0.686/0.737 1/1")),
    CurvePreset(
        10,
        "vintage",
        (
            "0/0.11 0.42/0.51 1/0.95",
            "0/0 0.50/0.48 1/1",
            "0/0.22 0.49/0.44 1/0.8",
            None,
        ),
    ),
)

_BY_NAME: dict[str, CurvePreset] = {preset.name: preset for preset in PRESETS}
