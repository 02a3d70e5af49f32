"""
Example: Tone curve usage.

Demonstrates how to use curvelut for:
- Presets
- Explicit per-plane and master curves
- Photoshop .acv curve files
- Restricting the adjustment to some planes
"""

import logging
import tempfile
from pathlib import Path

import numpy as np

from curvelut import Curves, Frame, VideoFormat, build_filter_config, remap_frame

# Configure logging to see LUT construction messages
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_sample_frame(fmt: VideoFormat, width: int = 640, height: int = 360) -> Frame:
    """Generate a horizontal gradient frame for demonstration."""
    ramp = np.linspace(0, fmt.scale, width).round().astype(fmt.dtype)
    planes = [np.tile(ramp, (height, 1)) for _ in range(fmt.num_planes)]
    return Frame(planes, fmt)


def describe(name: str, frame: Frame):
    """Print a few samples along the gradient of every plane."""
    columns = np.linspace(0, frame.width - 1, 5).astype(int)
    for index, plane in enumerate(frame.planes):
        print(f"  {name} plane {index}: {plane[0, columns].tolist()}")


def example_1_presets():
    """Example 1: Apply presets."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Presets")
    print("=" * 70)

    fmt = VideoFormat.rgb(8)
    for preset in ("none", "vintage", "strong_contrast", "negative"):
        frame = generate_sample_frame(fmt)
        Curves().preset(preset)(frame)
        describe(preset, frame)


def example_2_explicit_curves():
    """Example 2: Explicit plane curves on top of a master curve."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Explicit Curves (plane curve, then master)")
    print("=" * 70)

    curves = (
        Curves()
        .curve(0, "0/0 0.5/0.58 1/1")  # Lift plane 0 midtones
        .curve(2, [0.0, 0.0, 0.5, 0.4, 1.0, 1.0])  # Pull plane 2 down
        .master("0/0.05 1/0.95")  # Compress the range of every plane
    )
    print(f"Builder: {curves!r}")

    frame = generate_sample_frame(VideoFormat.rgb(8))
    curves(frame)
    describe("explicit", frame)


def example_3_acv_file():
    """Example 3: Read curves from a Photoshop .acv file."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: .acv Curve File")
    print("=" * 70)

    # version 4, one curve (the composite), three (output, input) points
    data = np.array([4, 1, 3, 0, 0, 160, 128, 255, 255], dtype=">u2").tobytes()

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "lift.acv"
        path.write_bytes(data)

        # The preset only fills what the file leaves unset
        curves = Curves().acv(path).preset("vintage")
        frame = generate_sample_frame(VideoFormat.rgb(8))
        curves(frame)
        describe("acv", frame)


def example_4_high_bit_depth():
    """Example 4: 10-bit luma-only adjustment with the functional API."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: 10-bit YUV, Luma Only")
    print("=" * 70)

    fmt = VideoFormat.yuv(10)
    config = build_filter_config(fmt, preset="increase_contrast", planes=[0])
    print(f"Config: {config!r}")

    src = generate_sample_frame(fmt)
    dst = Frame.blank(fmt, src.width, src.height)
    remap_frame(config, src, dst)
    describe("yuv10", dst)


def main():
    """Run all examples."""
    example_1_presets()
    example_2_explicit_curves()
    example_3_acv_file()
    example_4_high_bit_depth()


if __name__ == "__main__":
    main()
