"""
LUT composition utilities.

The master curve is applied as a second pass on top of each per-plane
curve: composed[x] = master[plane[x]].
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def compose_lut(lut: np.ndarray, master: np.ndarray) -> np.ndarray:
    """
    Compose two LUTs so that the result applies lut first, then master.

    Args:
        lut: Inner LUT [N]
        master: Outer LUT [N]

    Returns:
        New LUT [N] with entry[x] = master[lut[x]]

    Example:
        >>> lut = np.array([0, 2, 3, 3], dtype=np.uint8)
        >>> master = np.array([3, 2, 1, 0], dtype=np.uint8)
        >>> compose_lut(lut, master)
        array([3, 1, 0, 0], dtype=uint8)
    """
    if lut.shape != master.shape:
        raise ValueError(
            f"Cannot compose LUTs of different sizes: {lut.shape[0]} and {master.shape[0]}"
        )
    return master[lut]


def compose_luts(
    channel_luts: Sequence[np.ndarray],
    master: np.ndarray | None,
) -> list[np.ndarray]:
    """
    Apply an optional master LUT on top of every channel LUT.

    Args:
        channel_luts: Per-plane LUTs
        master: Master LUT, or None when no master curve was supplied

    Returns:
        Per-plane LUTs; the inputs unchanged when master is None
    """
    if master is None:
        return list(channel_luts)

    logger.debug("[Compose] Applying master LUT to %d channel LUTs", len(channel_luts))
    return [compose_lut(lut, master) for lut in channel_luts]
