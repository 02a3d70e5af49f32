"""
Curve processing module.

Provides natural cubic spline LUT fitting and pre-configured curve presets.
"""

from curvelut.curve.presets import PRESETS, CurvePreset
from curvelut.curve.spline import evaluate_spline, fit_lut, natural_spline_moments

__all__ = ["CurvePreset", "PRESETS", "evaluate_spline", "fit_lut", "natural_spline_moments"]
