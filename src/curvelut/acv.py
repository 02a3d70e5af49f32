"""
Photoshop .acv curve file decoding.

Layout, all fields big-endian uint16::

    version, curve_count,
    curve_count x (point_count, point_count x (output, input))

Values are on the editor's 8-bit scale. The first curve record is the
composite curve and lands in the master slot; the next three are the
per-plane curves.
"""

from __future__ import annotations

import logging
import os
from typing import TypeAlias

import numpy as np

from curvelut.constants import (
    ACV_FIELD_BYTES,
    ACV_MAX_CURVES,
    ACV_SLOT_ORDER,
    ACV_VALUE_SCALE,
    NUM_SLOTS,
)
from curvelut.errors import CurveFileIOError, MalformedAcvDataError

logger = logging.getLogger(__name__)

SlotPairs: TypeAlias = list[list[tuple[float, float]] | None]


def decode_acv(data: bytes) -> SlotPairs:
    """
    Decode .acv bytes into raw curves per channel slot.

    Args:
        data: Raw file contents

    Returns:
        Four entries (plane0, plane1, plane2, master), each a list of
        normalized (x, y) pairs or None when the file has no curve for it

    Raises:
        MalformedAcvDataError: If the data ends before a declared field

    Example:
        >>> raw = bytes([0, 4, 0, 1, 0, 2, 0, 255, 0, 0, 0, 0, 0, 255])
        >>> decode_acv(raw)[3]
        [(0.0, 1.0), (1.0, 0.0)]
    """
    if len(data) < 2 * ACV_FIELD_BYTES:
        raise MalformedAcvDataError(
            f"curve data truncated: {len(data)} bytes, header needs {2 * ACV_FIELD_BYTES}"
        )

    fields = np.frombuffer(data, dtype=">u2", count=len(data) // ACV_FIELD_BYTES)
    pos = 0

    def field(what: str) -> int:
        nonlocal pos
        if pos >= fields.shape[0]:
            raise MalformedAcvDataError(
                f"curve data truncated: {len(data)} bytes, missing {what} "
                f"at offset {pos * ACV_FIELD_BYTES}"
            )
        value = int(fields[pos])
        pos += 1
        return value

    field("version")
    curve_count = field("curve count")

    slots: SlotPairs = [None] * NUM_SLOTS
    for i in range(min(curve_count, ACV_MAX_CURVES)):
        point_count = field(f"point count of curve {i}")
        pairs = []
        for _ in range(point_count):
            output = field(f"output value of curve {i}")
            input_ = field(f"input value of curve {i}")
            pairs.append((input_ / ACV_VALUE_SCALE, output / ACV_VALUE_SCALE))

        slots[ACV_SLOT_ORDER[i]] = pairs
        logger.debug("[ACV] Curve %d -> slot %d: %d points", i, ACV_SLOT_ORDER[i], point_count)

    return slots


def read_acv(path: str | os.PathLike) -> SlotPairs:
    """
    Read and decode a .acv curve file.

    Args:
        path: Path to the file

    Returns:
        Four raw slot curves, as decode_acv

    Raises:
        CurveFileIOError: If the file cannot be opened or read
        MalformedAcvDataError: If the contents are truncated
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise CurveFileIOError(f"cannot read curve file '{os.fspath(path)}': {e.strerror}") from e

    logger.info("[ACV] Read %d bytes from %s", len(data), os.fspath(path))
    return decode_acv(data)
