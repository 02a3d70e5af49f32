"""
Protocol definitions for curvelut frame interfaces.

Defines what a host frame must expose for plane remapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from curvelut.frame import VideoFormat


@runtime_checkable
class PlanarFrame(Protocol):
    """
    Protocol for frames accepted by the remap operation.

    Frame implements it; hosts can pass their own objects as long as they
    expose the format and one 2-D sample array per plane.
    """

    @property
    def format(self) -> VideoFormat:
        """Sample layout of the planes."""
        ...

    @property
    def planes(self) -> list[np.ndarray]:
        """One 2-D array per plane."""
        ...
