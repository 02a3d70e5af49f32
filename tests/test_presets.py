"""Tests for CurvePreset and preset defaults."""

import numpy as np
import pytest

from curvelut import VideoFormat, build_filter_config
from curvelut.constants import MASTER_SLOT
from curvelut.curve.presets import PRESETS, CurvePreset
from curvelut.curve.spline import fit_lut
from curvelut.errors import InvalidPresetError
from curvelut.points import parse_points, points_from_string


@pytest.fixture
def rgb8():
    """8-bit three-plane format."""
    return VideoFormat.rgb(8)


class TestPresetTable:
    """Test the preset table itself."""

    def test_eleven_presets(self):
        """Test that ids 0-10 are all present and ordered."""
        assert len(PRESETS) == 11
        assert [p.id for p in PRESETS] == list(range(11))

    def test_names(self):
        """Test a few preset names."""
        assert CurvePreset.from_id(0).name == "none"
        assert CurvePreset.from_id(8).name == "negative"
        assert CurvePreset.from_id(10).name == "vintage"

    def test_none_preset_is_empty(self):
        """Test that preset 0 provides no defaults."""
        assert CurvePreset.from_id(0).slots == ()

    def test_master_only_presets(self):
        """Test that contrast presets only set the master slot."""
        for preset_id in range(3, 10):
            assert CurvePreset.from_id(preset_id).slots == (MASTER_SLOT,)

    def test_color_presets(self):
        """Test that color presets set the three plane slots."""
        for preset_id in (1, 2, 10):
            assert CurvePreset.from_id(preset_id).slots == (0, 1, 2)

    @pytest.mark.parametrize("scale", [255, 1023, 65535])
    def test_all_presets_valid(self, scale):
        """Test that every preset curve passes validation."""
        for preset in PRESETS:
            for slot in preset.slots:
                points = parse_points(points_from_string(preset.defaults_for(slot)), scale)
                assert len(points) >= 2


class TestPresetLookup:
    """Test preset lookup by id and name."""

    @pytest.mark.parametrize("preset_id", [-1, 11, 100])
    def test_invalid_id(self, preset_id):
        """Test that ids outside [0, 10] are rejected."""
        with pytest.raises(InvalidPresetError, match="preset must be"):
            CurvePreset.from_id(preset_id)

    def test_non_integer_id(self):
        """Test that non-integer ids are rejected."""
        with pytest.raises(InvalidPresetError):
            CurvePreset.from_id(2.5)
        with pytest.raises(InvalidPresetError):
            CurvePreset.from_id(True)

    def test_numpy_integer_id(self):
        """Test that NumPy integers are accepted."""
        assert CurvePreset.from_id(np.int64(8)).name == "negative"

    @pytest.mark.parametrize("name", ["vintage", "Vintage", " VINTAGE "])
    def test_name_case_insensitive(self, name):
        """Test case-insensitive names."""
        assert CurvePreset.from_name(name).id == 10

    def test_name_separators(self):
        """Test that '-' and '_' are interchangeable."""
        assert CurvePreset.from_name("cross-process").id == 2
        assert CurvePreset.from_name("strong_contrast").id == 9

    def test_unknown_name(self):
        """Test that unknown names are rejected with the valid list."""
        with pytest.raises(InvalidPresetError, match="vintage"):
            CurvePreset.from_name("sepia")

    def test_get_dispatch(self):
        """Test lookup by either id or name."""
        assert CurvePreset.get(5) is CurvePreset.get("lighter")


class TestPresetApplication:
    """Test presets through filter construction."""

    def test_negative_preset(self, rgb8):
        """Test that preset 8 inverts every plane."""
        config = build_filter_config(rgb8, preset=8)

        for plane in range(3):
            np.testing.assert_array_equal(config.lut(plane), 255 - np.arange(256))

    def test_negative_preset_16bit(self):
        """Test the negative preset at 16 bits."""
        config = build_filter_config(VideoFormat.rgb(16), preset="negative")

        np.testing.assert_array_equal(config.lut(1), 65535 - np.arange(65536))

    def test_invalid_preset_in_config(self, rgb8):
        """Test that an out-of-range preset aborts construction."""
        with pytest.raises(InvalidPresetError):
            build_filter_config(rgb8, preset=11)

    def test_explicit_curve_overrides_preset(self, rgb8):
        """Test that an explicit curve replaces the preset default for its slot only."""
        explicit = "0/0 0.5/0.58 1/1"
        config = build_filter_config(rgb8, preset="vintage", curves=[explicit])

        expected_plane0 = fit_lut(parse_points(points_from_string(explicit), 255), 256, 255, np.uint8)
        preset_plane1 = fit_lut(
            parse_points(points_from_string(PRESETS[10].defaults_for(1)), 255), 256, 255, np.uint8
        )

        np.testing.assert_array_equal(config.lut(0), expected_plane0)
        np.testing.assert_array_equal(config.lut(1), preset_plane1)

    def test_explicit_master_overrides_preset(self, rgb8):
        """Test that an explicit master curve replaces a master preset."""
        config = build_filter_config(rgb8, preset="negative", master="0/0 1/1")

        np.testing.assert_array_equal(config.lut(0), np.arange(256))

    def test_empty_explicit_curve_keeps_preset(self, rgb8):
        """Test that an empty curve counts as unset."""
        with_empty = build_filter_config(rgb8, preset="negative", master="")
        without = build_filter_config(rgb8, preset="negative")

        np.testing.assert_array_equal(with_empty.lut(0), without.lut(0))
