"""
Generic Cooley-Tukey FFT kernel (Numba JIT)

This module holds the reference transform used for every power-of-two size
that has no specialised kernel, and the small interface every kernel shares.

Algorithm (in-place, natural-order input):
1. Copy the input into fresh working buffers
2. log2(N) butterfly stages; butterfly (k, k + n2) uses the twiddle with
   index bitrev(k >> nu1), read from the twiddle cache
3. One bit-reversal permutation, read from the bit-reversal cache
4. Scale by 1/sqrt(N) in both directions, so inverse(forward(x)) == x

Conventions:
    forward:  X[k] = 1/sqrt(N) * sum_n x[n] * exp(-2*pi*i*k*n/N)
    inverse:  x[n] = 1/sqrt(N) * sum_k X[k] * exp(+2*pi*i*k*n/N)
"""

import math
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union, Sequence

import numpy as np
from numba import jit

from . import bitrev, twiddle
from .result import FFTResult

ArrayLike = Union[Sequence[float], np.ndarray]

# supported_size() value of kernels that accept any power of two
ANY_SIZE = -1


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def prepare_input(
    real: ArrayLike,
    imaginary: Optional[ArrayLike] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Copy caller arrays into float64 working buffers.

    A missing imaginary part is treated as all zeros.

    Raises:
        ValueError: If an input is not 1-D or the lengths differ
    """
    re = np.array(real, dtype=np.float64, copy=True)
    if re.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {re.shape}")
    if imaginary is None:
        im = np.zeros_like(re)
    else:
        im = np.array(imaginary, dtype=np.float64, copy=True)
        if im.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {im.shape}")
        if im.shape[0] != re.shape[0]:
            raise ValueError("Real and imaginary arrays must have same length")
    return re, im


def _resolve_overload(imaginary, forward: bool):
    # transform(real, False) reads as the real-only overload
    if isinstance(imaginary, (bool, np.bool_)):
        return None, bool(imaginary)
    return imaginary, bool(forward)


class FFT(ABC):
    """
    Capability shared by every transform kernel.

    Kernels are stateless: one instance may be used from many threads, and
    every call allocates its own buffers.
    """

    @abstractmethod
    def transform(
        self,
        real: ArrayLike,
        imaginary: Optional[ArrayLike] = None,
        forward: bool = True,
    ) -> FFTResult:
        """
        Transform a complex signal.

        Args:
            real: Real parts, length N
            imaginary: Imaginary parts, length N (None means all zeros)
            forward: True for the forward transform, False for the inverse

        Returns:
            FFTResult of size N
        """

    @abstractmethod
    def supported_size(self) -> int:
        """The one size this kernel targets, or ANY_SIZE."""

    @abstractmethod
    def supports_size(self, size: int) -> bool:
        pass

    def transform_real(self, real: ArrayLike, forward: bool = True) -> FFTResult:
        """Transform a real signal (imaginary part zero)."""
        return self.transform(real, None, forward)

    def description(self) -> str:
        size = self.supported_size()
        if size == ANY_SIZE:
            return "Generic FFT implementation (supports any power-of-2 size)"
        return f"FFT implementation (size {size})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(supported_size={self.supported_size()})"


@jit(nopython=True, cache=True)
def _fft_inplace(x_re, x_im, cos_t, sin_t, rev):
    """Butterfly stages followed by the bit-reversal permutation, in place."""
    n = x_re.shape[0]
    nu = 0
    m = n
    while m > 1:
        m >>= 1
        nu += 1

    n2 = n // 2
    nu1 = nu - 1
    k = 0
    for stage in range(nu):
        while k < n:
            for i in range(n2):
                p = rev[k >> nu1]
                c = cos_t[p]
                s = sin_t[p]
                j = k + n2
                t_re = x_re[j] * c - x_im[j] * s
                t_im = x_im[j] * c + x_re[j] * s
                x_re[j] = x_re[k] - t_re
                x_im[j] = x_im[k] - t_im
                x_re[k] += t_re
                x_im[k] += t_im
                k += 1
            k += n2
        k = 0
        nu1 -= 1
        n2 //= 2

    for k in range(n):
        r = rev[k]
        if r > k:
            t_re = x_re[k]
            t_im = x_im[k]
            x_re[k] = x_re[r]
            x_im[k] = x_im[r]
            x_re[r] = t_re
            x_im[r] = t_im


@jit(nopython=True, cache=True)
def interleave_scaled(x_re, x_im, scale):
    n = x_re.shape[0]
    out = np.empty(2 * n, dtype=np.float64)
    for i in range(n):
        out[2 * i] = x_re[i] * scale
        out[2 * i + 1] = x_im[i] * scale
    return out


def fft(real: ArrayLike, imaginary: Optional[ArrayLike] = None, forward: bool = True) -> np.ndarray:
    """
    Compute the normalised DFT of a power-of-two length signal.

    Parameters
    ----------
    real : array_like
        Real parts, length N (N a power of two, N >= 2)
    imaginary : array_like, optional
        Imaginary parts, length N. Zeros if omitted.
    forward : bool
        Direction of the transform

    Returns
    -------
    np.ndarray
        Interleaved (real, imaginary) output of length 2N, scaled by 1/sqrt(N)

    Raises
    ------
    ValueError
        If the lengths differ or N is not a power of two >= 2
    """
    x_re, x_im = prepare_input(real, imaginary)
    n = x_re.shape[0]
    if n < 2 or not is_power_of_two(n):
        raise ValueError(f"Array length must be a power of 2, got: {n}")

    cos_t, sin_t = twiddle.get_tables(n, forward)
    rev = bitrev.get_table(n)
    _fft_inplace(x_re, x_im, cos_t, sin_t, rev)
    return interleave_scaled(x_re, x_im, 1.0 / math.sqrt(n))


class FFTBase(FFT):
    """
    Reference Cooley-Tukey implementation, correct for every power-of-two size.

    The factory falls back to this kernel for any size without a registered
    specialisation.
    """

    def transform(self, real, imaginary=None, forward=True) -> FFTResult:
        imaginary, forward = _resolve_overload(imaginary, forward)
        return FFTResult(fft(real, imaginary, forward))

    def supported_size(self) -> int:
        return ANY_SIZE

    def supports_size(self, size: int) -> bool:
        return size >= 2 and is_power_of_two(size)

    def description(self) -> str:
        return "Generic FFT implementation (Cooley-Tukey algorithm)"


class FixedSizeKernel(FFT):
    """
    Base for kernels hard-wired to a single transform size.

    Subclasses set SIZE and implement _compute(re, im, forward), which
    receives private float64 buffers of length SIZE and returns the
    interleaved, normalised output.
    """

    SIZE: int = 0

    @abstractmethod
    def _compute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> np.ndarray:
        pass

    def transform(self, real, imaginary=None, forward=True) -> FFTResult:
        imaginary, forward = _resolve_overload(imaginary, forward)
        re, im = prepare_input(real, imaginary)
        if re.shape[0] != self.SIZE:
            raise ValueError(f"Array length must be {self.SIZE}, got: {re.shape[0]}")
        return FFTResult(self._compute(re, im, forward))

    def supported_size(self) -> int:
        return self.SIZE

    def supports_size(self, size: int) -> bool:
        return size == self.SIZE
