"""
Tests for LUT composition.
"""

import numpy as np
import pytest

from curvelut import VideoFormat, build_filter_config, compose_lut, compose_luts
from curvelut.curve.spline import fit_lut
from curvelut.points import parse_points, points_from_string


def random_lut(rng, lut_size=256, dtype=np.uint8):
    """Create a random LUT with entries in [0, lut_size - 1]."""
    return rng.integers(0, lut_size, size=lut_size).astype(dtype)


def test_compose_law():
    """Test composed[x] == master[lut[x]] for every x."""
    rng = np.random.default_rng(0)
    lut = random_lut(rng)
    master = random_lut(rng)

    composed = compose_lut(lut, master)

    for x in range(256):
        assert composed[x] == master[lut[x]]


def test_compose_law_16bit():
    """Test the composition law on 16-bit LUTs."""
    rng = np.random.default_rng(1)
    lut = random_lut(rng, 65536, np.uint16)
    master = random_lut(rng, 65536, np.uint16)

    np.testing.assert_array_equal(compose_lut(lut, master), master[lut.astype(np.int64)])


def test_compose_without_master():
    """Test that no master leaves channel LUTs unchanged."""
    rng = np.random.default_rng(2)
    luts = [random_lut(rng) for _ in range(3)]

    result = compose_luts(luts, None)

    assert len(result) == 3
    for original, composed in zip(luts, result):
        assert composed is original


def test_compose_with_identity_master():
    """Test that an identity master leaves values unchanged."""
    rng = np.random.default_rng(3)
    luts = [random_lut(rng) for _ in range(3)]
    identity = np.arange(256, dtype=np.uint8)

    for original, composed in zip(luts, compose_luts(luts, identity)):
        np.testing.assert_array_equal(composed, original)


def test_compose_size_mismatch():
    """Test that LUTs of different sizes cannot be composed."""
    with pytest.raises(ValueError, match="different sizes"):
        compose_lut(np.arange(256, dtype=np.uint16), np.arange(1024, dtype=np.uint16))


def test_compose_does_not_modify_inputs():
    """Test that composition returns new arrays."""
    lut = np.arange(256, dtype=np.uint8)
    master = (255 - np.arange(256)).astype(np.uint8)
    lut_before = lut.copy()

    compose_luts([lut], master)

    np.testing.assert_array_equal(lut, lut_before)


def test_master_applied_after_channel_curve():
    """Test that the filter applies the master curve on top of the plane curve."""
    fmt = VideoFormat.rgb(8)
    channel_text = "0/0 0.5/0.58 1/1"
    master_text = "0/0 0.4/0.5 1/1"

    config = build_filter_config(fmt, curves=[channel_text], master=master_text)

    channel = fit_lut(parse_points(points_from_string(channel_text), 255), 256, 255, np.uint8)
    master = fit_lut(parse_points(points_from_string(master_text), 255), 256, 255, np.uint8)

    np.testing.assert_array_equal(config.lut(0), master[channel])
    np.testing.assert_array_equal(config.master_lut, master)
    # Planes without their own curve get the master alone
    np.testing.assert_array_equal(config.lut(1), master)
