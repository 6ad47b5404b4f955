"""
Unit Tests for the Transform Engine Core

Validates the generic Cooley-Tukey kernel, FFTResult and the two lookup
caches. Transforms are compared against scipy.fft (rescaled to the engine's
1/sqrt(N) convention) and against closed-form DFTs.

Test Coverage:
    - FFTBase: correctness, known transforms, round trip, edge cases
    - FFTResult: immutability, accessors, equality
    - Twiddle / bit-reversal caches: values, lazy population, read-only tables

Run:
    pytest tests/test_fft_core.py -v
"""

import cmath
import math
import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest
from scipy.fft import fft as scipy_fft

from fftengine.core import ANY_SIZE, FFTBase, FFTResult, bitrev, fft, twiddle

TOL = 1e-9


def scipy_reference(real, imag=None, forward=True):
    x = np.asarray(real, dtype=np.complex128)
    if imag is not None:
        x = x + 1j * np.asarray(imag)
    n = len(x)
    if forward:
        return scipy_fft(x) / np.sqrt(n)
    return np.conj(scipy_fft(np.conj(x))) / np.sqrt(n)


class TestFFTBase:
    """Test suite for the generic kernel."""

    def test_matches_scipy_random_complex(self):
        """Forward transform of random complex input matches scipy."""
        rng = np.random.default_rng(1)
        kernel = FFTBase()
        for n in [2, 4, 8, 16, 64, 128, 512, 1024, 4096]:
            re = rng.standard_normal(n)
            im = rng.standard_normal(n)
            ours = kernel.transform(re, im, True).to_complex()
            error = np.abs(ours - scipy_reference(re, im, True)).max()
            assert error < TOL, f"FFT failed for N={n}: {error:.2e}"

    def test_inverse_matches_scipy(self):
        rng = np.random.default_rng(2)
        re = rng.standard_normal(256)
        im = rng.standard_normal(256)
        ours = FFTBase().transform(re, im, False).to_complex()
        error = np.abs(ours - scipy_reference(re, im, False)).max()
        assert error < TOL

    def test_closed_form_1_to_8(self):
        """[1..8] forward matches the closed-form DFT and round-trips."""
        x = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]
        n = len(x)
        expected = [
            sum(x[t] * cmath.exp(-2j * math.pi * k * t / n) for t in range(n)) / math.sqrt(n)
            for k in range(n)
        ]

        kernel = FFTBase()
        result = kernel.transform(x, [0.0] * n, True)
        for k in range(n):
            assert abs(result.real_at(k) - expected[k].real) < TOL
            assert abs(result.imaginary_at(k) - expected[k].imag) < TOL

        back = kernel.transform(result.real_parts(), result.imaginary_parts(), False)
        np.testing.assert_allclose(back.real_parts(), x, atol=TOL)
        np.testing.assert_allclose(back.imaginary_parts(), np.zeros(n), atol=TOL)

        print(f"\n[Closed form N=8]")
        print(f"  X[0] = {result.real_at(0):.6f} (expected {36 / math.sqrt(8):.6f})")

    def test_forward_uses_negative_exponent(self):
        """Bin 1 of [1, 2, 3, 4] is (-2 + 2j) / 2, not its conjugate."""
        result = FFTBase().transform([1.0, 2.0, 3.0, 4.0])
        np.testing.assert_allclose(result.to_complex(), [5, -1 + 1j, -1, -1 - 1j], atol=TOL)
        inverse = FFTBase().transform([1.0, 2.0, 3.0, 4.0], False)
        np.testing.assert_allclose(inverse.to_complex(), [5, -1 - 1j, -1, -1 + 1j], atol=TOL)

    @pytest.mark.parametrize("n", [4, 16, 128, 1024, 16384, 65536])
    def test_matches_numpy_fft(self, n):
        x = np.random.default_rng(n + 1).standard_normal(n)
        ours = FFTBase().transform(x).to_complex()
        assert np.abs(ours - np.fft.fft(x) / np.sqrt(n)).max() < TOL * np.sqrt(n)

    @pytest.mark.parametrize("n", [2, 4, 8, 32, 256, 2048, 8192, 65536])
    def test_round_trip(self, n):
        """inverse(forward(x)) recovers x within 1e-9 relative error."""
        rng = np.random.default_rng(n)
        re = rng.standard_normal(n) * 100.0
        im = rng.standard_normal(n) * 100.0
        kernel = FFTBase()

        spectrum = kernel.transform(re, im, True)
        back = kernel.transform(spectrum.real_parts(), spectrum.imaginary_parts(), False)

        scale = np.abs(re + 1j * im).max()
        error = np.abs(back.to_complex() - (re + 1j * im)).max() / scale
        assert error < TOL, f"Round trip error {error:.2e} for N={n}"

    def test_linearity(self):
        rng = np.random.default_rng(3)
        n = 128
        x = rng.standard_normal(n)
        y = rng.standard_normal(n)
        a, b = 2.5, -1.3
        kernel = FFTBase()

        combined = kernel.transform(a * x + b * y).to_complex()
        separate = a * kernel.transform(x).to_complex() + b * kernel.transform(y).to_complex()
        assert np.abs(combined - separate).max() < TOL

    def test_parseval(self):
        """Energy is preserved under the 1/sqrt(N) normalisation."""
        rng = np.random.default_rng(4)
        for n in [8, 64, 1024]:
            re = rng.standard_normal(n)
            im = rng.standard_normal(n)
            energy_in = np.sum(re ** 2 + im ** 2)
            energy_out = np.sum(FFTBase().transform(re, im).power_spectrum())
            assert abs(energy_in - energy_out) / energy_in < TOL

    def test_impulse_gives_flat_spectrum(self):
        n = 64
        x = np.zeros(n)
        x[0] = 1.0
        mags = FFTBase().transform(x).magnitudes()
        np.testing.assert_allclose(mags, np.full(n, 1.0 / np.sqrt(n)), atol=TOL)

    def test_dc_goes_to_bin_zero(self):
        n = 32
        result = FFTBase().transform(np.ones(n))
        assert abs(result.real_at(0) - np.sqrt(n)) < TOL
        assert np.abs(result.magnitudes()[1:]).max() < TOL

    def test_sinusoid_energy_at_k_and_n_minus_k(self):
        n, k = 128, 5
        t = np.arange(n)
        x = np.cos(2 * np.pi * k * t / n)
        mags = FFTBase().transform(x).magnitudes()

        assert abs(mags[k] - np.sqrt(n) / 2) < TOL
        assert abs(mags[n - k] - np.sqrt(n) / 2) < TOL
        others = np.delete(mags, [k, n - k])
        assert others.max() < TOL

    def test_real_only_overload(self):
        x = np.arange(16, dtype=float)
        kernel = FFTBase()
        assert kernel.transform(x) == kernel.transform(x, np.zeros(16), True)
        assert kernel.transform(x, False) == kernel.transform(x, None, False)
        assert kernel.transform_real(x, forward=False) == kernel.transform(x, np.zeros(16), False)

    def test_does_not_mutate_inputs(self):
        re = np.arange(8, dtype=float)
        im = np.ones(8)
        re_before, im_before = re.copy(), im.copy()
        FFTBase().transform(re, im, True)
        np.testing.assert_array_equal(re, re_before)
        np.testing.assert_array_equal(im, im_before)

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError, match="same length"):
            FFTBase().transform(np.zeros(8), np.zeros(4))

    @pytest.mark.parametrize("n", [0, 1, 3, 6, 12, 100])
    def test_non_power_of_two_rejected(self, n):
        with pytest.raises(ValueError, match="power of 2"):
            FFTBase().transform(np.zeros(n))

    def test_multidimensional_rejected(self):
        with pytest.raises(ValueError, match="1D"):
            FFTBase().transform(np.zeros((4, 4)))

    def test_supported_size(self):
        kernel = FFTBase()
        assert kernel.supported_size() == ANY_SIZE
        assert kernel.supports_size(2)
        assert kernel.supports_size(65536)
        assert not kernel.supports_size(1)
        assert not kernel.supports_size(24)
        assert "Cooley-Tukey" in kernel.description()

    def test_functional_form_returns_interleaved(self):
        out = fft([1.0, 0.0], [0.0, 0.0], True)
        assert out.shape == (4,)
        np.testing.assert_allclose(out, [1 / np.sqrt(2), 0.0, 1 / np.sqrt(2), 0.0])


class TestFFTResult:
    """Test suite for the immutable result container."""

    def test_interleaved_constructor(self):
        r = FFTResult([1.0, 2.0, 3.0, 4.0])
        assert r.size() == 2
        assert len(r) == 2
        np.testing.assert_array_equal(r.real_parts(), [1.0, 3.0])
        np.testing.assert_array_equal(r.imaginary_parts(), [2.0, 4.0])

    def test_odd_length_rejected(self):
        with pytest.raises(ValueError, match="even"):
            FFTResult([1.0, 2.0, 3.0])

    def test_from_parts(self):
        r = FFTResult.from_parts([1.0, 3.0], [2.0, 4.0])
        assert r == FFTResult([1.0, 2.0, 3.0, 4.0])

    def test_from_parts_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            FFTResult.from_parts([1.0, 2.0], [1.0])

    def test_multidimensional_rejected(self):
        with pytest.raises(ValueError, match="1D"):
            FFTResult(np.zeros((3, 2)))
        with pytest.raises(ValueError, match="1D"):
            FFTResult.from_parts(np.zeros((2, 2)), np.zeros((2, 2)))

    def test_defensive_copy_in(self):
        data = np.array([1.0, 2.0, 3.0, 4.0])
        r = FFTResult(data)
        data[0] = 99.0
        assert r.real_at(0) == 1.0

    def test_defensive_copy_out(self):
        r = FFTResult([1.0, 2.0, 3.0, 4.0])
        for accessor in (r.real_parts, r.imaginary_parts, r.interleaved, r.magnitudes,
                         r.phases, r.power_spectrum, r.to_complex):
            values = accessor()
            values[0] = -123.0
        assert r.real_at(0) == 1.0
        assert r.imaginary_at(0) == 2.0

    def test_derived_values(self):
        r = FFTResult.from_parts([3.0, 0.0, -1.0], [4.0, 2.0, 0.0])
        np.testing.assert_allclose(r.magnitudes(), [5.0, 2.0, 1.0])
        np.testing.assert_allclose(r.power_spectrum(), [25.0, 4.0, 1.0])
        np.testing.assert_allclose(r.phases(), [math.atan2(4, 3), math.pi / 2, math.pi])
        assert r.magnitude_at(0) == 5.0
        assert r.power_at(1) == 4.0
        assert r.phase_at(2) == pytest.approx(math.pi)

    @pytest.mark.parametrize("index", [-1, 2, 100])
    def test_index_out_of_range(self, index):
        r = FFTResult([1.0, 2.0, 3.0, 4.0])
        for accessor in (r.real_at, r.imaginary_at, r.magnitude_at, r.phase_at, r.power_at):
            with pytest.raises(IndexError):
                accessor(index)

    def test_equality_and_hash(self):
        a = FFTResult([1.0, 2.0, 3.0, 4.0])
        b = FFTResult([1.0, 2.0, 3.0, 4.0])
        c = FFTResult([1.0, 2.0, 3.0, 4.000001])
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert a != "not a result"
        assert len({a, b, c}) == 2

    def test_repr(self):
        r = FFTResult([3.0, 4.0])
        assert repr(r) == "FFTResult[size=1, first_magnitude=5.000]"
        assert repr(FFTResult([])) == "FFTResult[size=0, first_magnitude=0.000]"


class TestTwiddleCache:
    """Test suite for precomputed twiddle factors."""

    def test_precomputed_sizes(self):
        for n in twiddle.PRECOMPUTED_SIZES:
            assert twiddle.is_precomputed(n)

    def test_forward_and_inverse_values(self):
        angle = 2 * math.pi / 8
        assert twiddle.get_cos(8, 1, True) == pytest.approx(math.cos(angle), abs=1e-15)
        assert twiddle.get_sin(8, 1, True) == pytest.approx(-math.sin(angle), abs=1e-15)
        assert twiddle.get_cos(8, 1, False) == pytest.approx(math.cos(angle), abs=1e-15)
        assert twiddle.get_sin(8, 1, False) == pytest.approx(math.sin(angle), abs=1e-15)
        assert twiddle.get_twiddle(8, 2, True) == pytest.approx((0.0, -1.0), abs=1e-15)

    def test_index_wraps(self):
        assert twiddle.get_cos(16, 17) == twiddle.get_cos(16, 1)
        assert twiddle.get_sin(16, 17) == twiddle.get_sin(16, 1)

    def test_uncached_size_direct_evaluation(self):
        # Scalar accessors evaluate cos/sin directly and store nothing
        n = 1 << 22
        angle = 2 * math.pi * 3 / n
        assert not twiddle.is_precomputed(n)
        assert twiddle.get_cos(n, 3) == pytest.approx(math.cos(angle))
        assert twiddle.get_sin(n, 3, True) == pytest.approx(-math.sin(angle))
        assert twiddle.get_sin(n, 3, False) == pytest.approx(math.sin(angle))
        assert not twiddle.is_precomputed(n)

    @pytest.mark.parametrize("n", [0, -4, 12])
    def test_scalar_accessors_reject_bad_size(self, n):
        with pytest.raises(ValueError, match="power of 2"):
            twiddle.get_cos(n, 1)
        with pytest.raises(ValueError, match="power of 2"):
            twiddle.get_sin(n, 1, False)
        with pytest.raises(ValueError):
            twiddle.get_twiddle(n, 1)

    def test_tables_populated_lazily_and_memoised(self):
        n = 1 << 14
        cos_a, sin_a = twiddle.get_tables(n, True)
        cos_b, sin_b = twiddle.get_tables(n, True)
        assert twiddle.is_precomputed(n)
        assert cos_a is cos_b
        assert sin_a is sin_b
        _, sin_inv = twiddle.get_tables(n, False)
        np.testing.assert_array_equal(sin_inv, -sin_a)

    def test_tables_are_read_only(self):
        cos_t, sin_t = twiddle.get_tables(64)
        with pytest.raises(ValueError):
            cos_t[0] = 2.0
        with pytest.raises(ValueError):
            sin_t[0] = 2.0

    def test_tables_reject_non_power_of_two(self):
        with pytest.raises(ValueError):
            twiddle.get_tables(12)

    def test_cache_stats(self):
        stats = twiddle.cache_stats()
        assert stats.entries >= sum(twiddle.PRECOMPUTED_SIZES)
        assert 4096 in stats.sizes
        assert "TwiddleFactorCache" in str(stats)


class TestBitReversalCache:
    """Test suite for bit-reversal tables."""

    def test_size_8_table(self):
        np.testing.assert_array_equal(bitrev.get_table(8), [0, 4, 2, 6, 1, 5, 3, 7])

    def test_size_2_table(self):
        np.testing.assert_array_equal(bitrev.get_table(2), [0, 1])

    def test_table_is_involution(self):
        for n in [16, 256, 4096]:
            table = bitrev.get_table(n)
            np.testing.assert_array_equal(table[table], np.arange(n))

    def test_bit_reverse_scalar(self):
        assert bitrev.bit_reverse(1, 3) == 4
        assert bitrev.bit_reverse(6, 3) == 3
        assert bitrev.bit_reverse(1, 5) == 16

    def test_lazy_population(self):
        n = 1 << 15
        first = bitrev.get_table(n)
        assert bitrev.is_precomputed(n)
        assert bitrev.get_table(n) is first

    def test_read_only(self):
        with pytest.raises(ValueError):
            bitrev.get_table(8)[0] = 5

    @pytest.mark.parametrize("n", [0, 3, 6, 100])
    def test_non_power_of_two_rejected(self, n):
        with pytest.raises(ValueError, match="power of 2"):
            bitrev.get_table(n)

    def test_cache_stats(self):
        stats = bitrev.cache_stats()
        assert stats.name == "BitReversalCache"
        assert 8 in stats.sizes
        assert stats.bytes >= stats.entries * 4
