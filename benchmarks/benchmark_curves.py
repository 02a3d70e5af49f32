"""
Benchmark curve LUT construction and plane remapping.

Compares the Numba remap kernel against NumPy fancy indexing for common
frame sizes and bit depths.
"""

import time
from typing import Callable

import numpy as np

from curvelut import Frame, VideoFormat, build_filter_config, remap_frame


def benchmark_function(func: Callable, warmup: int = 5, iterations: int = 50) -> tuple[float, float]:
    """Benchmark a function and return average time in milliseconds."""
    # Warmup
    for _ in range(warmup):
        func()

    # Benchmark
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)  # Convert to ms

    return np.mean(times), np.std(times)


def benchmark_construction():
    """Benchmark building the LUTs of a filter configuration."""
    print("=" * 80)
    print("LUT Construction")
    print("=" * 80)

    for bit_depth in (8, 10, 16):
        fmt = VideoFormat.rgb(bit_depth)

        def build():
            return build_filter_config(fmt, preset="vintage", master="0/0 0.4/0.5 1/1")

        mean_time, std_time = benchmark_function(build)
        print(f"  {bit_depth:2d}-bit: {mean_time:8.3f} ± {std_time:6.3f} ms")


def benchmark_remap():
    """Benchmark remapping full frames."""
    print("\n" + "=" * 80)
    print("Frame Remap: Numba vs NumPy")
    print("=" * 80)

    sizes = [(1280, 720), (1920, 1080), (3840, 2160)]
    rng = np.random.default_rng(42)

    for bit_depth in (8, 10):
        fmt = VideoFormat.rgb(bit_depth)
        config = build_filter_config(fmt, preset="strong_contrast")
        luts = [config.lut(i) for i in range(3)]

        for width, height in sizes:
            print(f"\n--- {bit_depth}-bit {width}x{height} ---")

            planes = [
                rng.integers(0, fmt.lut_size, size=(height, width)).astype(fmt.dtype) for _ in range(3)
            ]
            src = Frame(planes, fmt)
            dst = Frame.blank(fmt, width, height)

            def numba_remap():
                remap_frame(config, src, dst)

            def numpy_remap():
                for i in range(3):
                    np.take(luts[i], src.planes[i], out=dst.planes[i])

            numba_mean, numba_std = benchmark_function(numba_remap)
            numpy_mean, numpy_std = benchmark_function(numpy_remap)
            pixels = width * height * 3

            print(f"  Numba: {numba_mean:8.3f} ± {numba_std:6.3f} ms  ({pixels / numba_mean / 1000:8.1f} Msamples/s)")
            print(f"  NumPy: {numpy_mean:8.3f} ± {numpy_std:6.3f} ms  ({pixels / numpy_mean / 1000:8.1f} Msamples/s)")
            print(f"  Speedup: {numpy_mean / numba_mean:.2f}x")


if __name__ == "__main__":
    benchmark_construction()
    benchmark_remap()
