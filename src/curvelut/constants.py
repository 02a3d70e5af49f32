"""
Constants and default values for curvelut.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

# =============================================================================
# Format Constants
# =============================================================================

MIN_BIT_DEPTH = 1
MAX_BIT_DEPTH = 16  # LUT entries are stored as uint16 at most
SAMPLE_TYPE_INTEGER = "integer"
SAMPLE_TYPE_FLOAT = "float"
VALID_SAMPLE_TYPES = {SAMPLE_TYPE_INTEGER, SAMPLE_TYPE_FLOAT}

# =============================================================================
# Channel Slots
# =============================================================================

NUM_COLOR_PLANES = 3  # plane0, plane1, plane2
MASTER_SLOT = 3  # Applied on top of the per-plane curves
NUM_SLOTS = 4  # Three planes + master
SLOT_NAMES = ("plane0", "plane1", "plane2", "master")

# =============================================================================
# Presets
# =============================================================================

MIN_PRESET_ID = 0  # "none"
MAX_PRESET_ID = 10  # "vintage"

# =============================================================================
# Photoshop .acv Curve Files
# =============================================================================

ACV_MAX_CURVES = 4  # Composite + R, G, B
ACV_VALUE_SCALE = 255.0  # Editor works on an 8-bit scale
ACV_FIELD_BYTES = 2  # Big-endian uint16 fields
ACV_SLOT_ORDER = (MASTER_SLOT, 0, 1, 2)  # First record is the composite curve
