"""
Tests for Numba-optimized curve kernels.

Tests correctness of the spline and remap kernels against NumPy references.
"""

import numpy as np
import pytest

# Import Numba kernels - tests will be skipped if not available
curve_kernels = pytest.importorskip(
    "curvelut.curve.kernels",
    reason="Numba not installed"
)


class TestTridiagonalSolve:
    """Test the Thomas algorithm kernel."""

    def test_matches_dense_solve(self):
        """Test against np.linalg.solve on a diagonally dominant system."""
        rng = np.random.default_rng(0)
        n = 12
        sub = rng.random(n)
        sup = rng.random(n)
        main = 2.0 + sub + sup
        main[0] = 1.0  # unit pivot on the first row
        sub[0] = 0.0
        sup[-1] = 0.0
        rhs = rng.random(n)

        dense = np.diag(main) + np.diag(sub[1:], -1) + np.diag(sup[:-1], 1)
        expected = np.linalg.solve(dense, rhs)

        result = curve_kernels.solve_tridiagonal_numba(sub, main, sup, rhs)

        np.testing.assert_allclose(result, expected, rtol=1e-10, atol=1e-12)

    def test_inputs_not_modified(self):
        """Test that the kernel works on copies."""
        sub = np.array([0.0, 1.0, 0.0])
        main = np.array([1.0, 4.0, 1.0])
        sup = np.array([0.0, 1.0, 0.0])
        rhs = np.array([0.0, 6.0, 0.0])
        before = [a.copy() for a in (sub, main, sup, rhs)]

        curve_kernels.solve_tridiagonal_numba(sub, main, sup, rhs)

        for original, after in zip(before, (sub, main, sup, rhs)):
            np.testing.assert_array_equal(original, after)

    def test_zero_pivot_fallback(self):
        """
        Known edge case: a zero pivot uses a multiplier of 1.

        The system below is singular (0 * x1 = 5). Instead of failing, the
        solver skips normalization for that row and returns x1 = 5. This is
        not a true solution; the test pins the behavior so it does not change
        silently.
        """
        sub = np.array([0.0, 0.0, 0.0])
        main = np.array([1.0, 0.0, 1.0])
        sup = np.array([0.0, 0.0, 0.0])
        rhs = np.array([0.0, 5.0, 0.0])

        result = curve_kernels.solve_tridiagonal_numba(sub, main, sup, rhs)

        np.testing.assert_array_equal(result, [0.0, 5.0, 0.0])


class TestSplineKernels:
    """Test spline construction kernels."""

    def test_moments_natural(self):
        """Test that end moments are zero."""
        x = np.array([0.0, 0.3, 0.6, 1.0])
        y = np.array([0.0, 0.8, 0.1, 1.0])

        moments = curve_kernels.natural_spline_moments_numba(x, y)

        assert moments[0] == 0.0
        assert moments[-1] == 0.0
        assert moments.shape == (4,)

    def test_sample_matches_evaluate(self):
        """Test that LUT sampling agrees with continuous evaluation at knot-aligned x."""
        x = np.array([0.0, 64 / 255, 192 / 255, 1.0])
        y = np.array([0.1, 0.6, 0.3, 0.9])
        moments = curve_kernels.natural_spline_moments_numba(x, y)

        lut = np.empty(256, dtype=np.uint16)
        curve_kernels.sample_spline_lut_numba(x, y, moments, 255, lut)

        out = np.empty(4)
        curve_kernels.evaluate_spline_numba(x, y, moments, x, out)
        for xi, yi in zip(x, out):
            assert lut[int(xi * 255 + 0.5)] == int(yi * 255 + 0.5)

    @pytest.mark.parametrize("dtype,lut_size", [(np.uint8, 256), (np.uint16, 4096)])
    def test_sample_dtypes(self, dtype, lut_size):
        """Test sampling into both storage types."""
        x = np.array([0.0, 1.0])
        y = np.array([0.0, 1.0])
        moments = curve_kernels.natural_spline_moments_numba(x, y)

        lut = np.empty(lut_size, dtype=dtype)
        curve_kernels.sample_spline_lut_numba(x, y, moments, lut_size - 1, lut)

        np.testing.assert_array_equal(lut, np.arange(lut_size))


class TestApplyLutPlane:
    """Test the plane remap kernel."""

    @pytest.mark.parametrize("dtype,lut_size", [(np.uint8, 256), (np.uint16, 65536)])
    def test_matches_numpy(self, dtype, lut_size):
        """Test dst == lut[src] against NumPy fancy indexing."""
        rng = np.random.default_rng(1)
        src = rng.integers(0, lut_size, size=(37, 53)).astype(dtype)
        lut = rng.integers(0, lut_size, size=lut_size).astype(dtype)
        dst = np.empty_like(src)

        curve_kernels.apply_lut_plane_numba(src, lut, dst)

        np.testing.assert_array_equal(dst, lut[src])

    def test_in_place(self):
        """Test that src and dst may be the same array."""
        src = np.arange(256, dtype=np.uint8).reshape(16, 16)
        lut = (255 - np.arange(256)).astype(np.uint8)

        curve_kernels.apply_lut_plane_numba(src, lut, src)

        np.testing.assert_array_equal(src.ravel(), 255 - np.arange(256))

    def test_compiled_serial(self):
        """Test that the remap kernel does not use Numba's threading layer."""
        assert not curve_kernels.apply_lut_plane_numba.targetoptions.get("parallel", False)
        assert curve_kernels.apply_lut_plane_numba.targetoptions.get("nogil", False)
