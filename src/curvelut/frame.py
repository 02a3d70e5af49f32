"""
Planar frame containers.

VideoFormat describes the sample layout a filter is built for; Frame holds
one 2-D NumPy array per plane. Planes may be strided views, so a host can
wrap its own buffers without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from curvelut.constants import SAMPLE_TYPE_INTEGER, VALID_SAMPLE_TYPES
from curvelut.utils import sample_dtype


@dataclass(frozen=True)
class VideoFormat:
    """
    Sample layout of a planar image.

    Attributes:
        bit_depth: Bits per sample
        num_planes: Number of planes (1 for gray, 3 for YUV/RGB)
        sample_type: "integer" or "float"
        constant: False for variable-format streams
    """

    bit_depth: int
    num_planes: int = 3
    sample_type: str = SAMPLE_TYPE_INTEGER
    constant: bool = True

    def __post_init__(self):
        """Validate format description."""
        if self.sample_type not in VALID_SAMPLE_TYPES:
            raise ValueError(
                f"Invalid sample_type: {self.sample_type}. Must be one of {VALID_SAMPLE_TYPES}"
            )
        if self.num_planes < 1:
            raise ValueError(f"num_planes={self.num_planes} must be at least 1")

    @property
    def lut_size(self) -> int:
        """Number of representable sample values."""
        return 1 << self.bit_depth

    @property
    def scale(self) -> int:
        """Maximum representable sample value."""
        return self.lut_size - 1

    @property
    def dtype(self) -> np.dtype:
        """Backing storage type of a sample."""
        return sample_dtype(self.bit_depth)

    @classmethod
    def gray(cls, bit_depth: int = 8) -> VideoFormat:
        """Single-plane integer format."""
        return cls(bit_depth, num_planes=1)

    @classmethod
    def yuv(cls, bit_depth: int = 8) -> VideoFormat:
        """Three-plane integer YUV format."""
        return cls(bit_depth, num_planes=3)

    @classmethod
    def rgb(cls, bit_depth: int = 8) -> VideoFormat:
        """Three-plane integer RGB format."""
        return cls(bit_depth, num_planes=3)


@dataclass
class Frame:
    """
    One planar image.

    Attributes:
        planes: One 2-D array per plane, of the format's dtype
        format: Sample layout of the planes
    """

    planes: list[np.ndarray]
    format: VideoFormat = field(repr=False)

    def __post_init__(self) -> None:
        """Check planes against the format."""
        if len(self.planes) != self.format.num_planes:
            raise ValueError(
                f"Frame has {len(self.planes)} planes, format expects {self.format.num_planes}"
            )
        for i, plane in enumerate(self.planes):
            if plane.ndim != 2:
                raise ValueError(f"Plane {i} must be 2-D, got shape {plane.shape}")

    @property
    def width(self) -> int:
        """Width of plane 0."""
        return self.planes[0].shape[1]

    @property
    def height(self) -> int:
        """Height of plane 0."""
        return self.planes[0].shape[0]

    @classmethod
    def blank(cls, format: VideoFormat, width: int, height: int) -> Frame:
        """Allocate a zero-filled frame with full-size planes."""
        planes = [np.zeros((height, width), dtype=format.dtype) for _ in range(format.num_planes)]
        return cls(planes, format)

    def copy(self) -> Frame:
        """Deep copy of the plane data."""
        return Frame([plane.copy() for plane in self.planes], self.format)

    def __len__(self) -> int:
        """Return number of planes."""
        return len(self.planes)
