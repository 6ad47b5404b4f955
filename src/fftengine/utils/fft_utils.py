"""
Convenience entry points on top of the default factory.

Most callers only need fft()/ifft(): they pick the best registered kernel
for the input length and return an FFTResult. The remaining helpers build
test signals and deal with non-power-of-two inputs by zero padding.
"""

from typing import List, Optional, Sequence, Union

import numpy as np

from ..core.base import is_power_of_two
from ..core.result import FFTResult
from ..factory.registry import DefaultFFTFactory, default_factory

ArrayLike = Union[Sequence[float], np.ndarray]

SIGNAL_TYPES = ('impulse', 'dc', 'sine', 'cosine', 'mixed', 'random')


def fft(
    real: ArrayLike,
    imaginary: Optional[ArrayLike] = None,
    forward: bool = True,
    factory: Optional[DefaultFFTFactory] = None,
) -> FFTResult:
    """
    Transform a signal with the best kernel registered for its length.

    Args:
        real: Real parts (length a power of two)
        imaginary: Imaginary parts, or None for a real signal
        forward: Direction of the transform
        factory: Registry to use (defaults to the process-wide factory)

    Raises:
        ValueError: If lengths differ or the length is not a power of two
    """
    if isinstance(imaginary, (bool, np.bool_)):
        imaginary, forward = None, bool(imaginary)
    n = len(real)
    if imaginary is not None and len(imaginary) != n:
        raise ValueError("Real and imaginary arrays must have same length")
    if n < 2 or not is_power_of_two(n):
        raise ValueError(f"Array length must be a power of 2, got: {n}")
    kernel = (factory or default_factory()).create_fft(n)
    return kernel.transform(real, imaginary, forward)


def ifft(
    real: ArrayLike,
    imaginary: Optional[ArrayLike] = None,
    factory: Optional[DefaultFFTFactory] = None,
) -> FFTResult:
    """Inverse transform; undoes fft() exactly (up to rounding)."""
    return fft(real, imaginary, forward=False, factory=factory)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 0)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def zero_pad_to_power_of_two(x: ArrayLike) -> np.ndarray:
    """Append zeros so the length becomes a power of two (minimum 2)."""
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    target = max(2, next_power_of_two(x.shape[0]))
    return np.pad(x, (0, target - x.shape[0]), mode='constant')


def generate_test_signal(
    size: int,
    sample_rate: float,
    frequencies: Sequence[float],
    amplitudes: Sequence[float],
) -> np.ndarray:
    """Sum of sinusoids sampled at sample_rate."""
    if len(frequencies) != len(amplitudes):
        raise ValueError("frequencies and amplitudes must have the same length")
    t = np.arange(size) / sample_rate
    signal = np.zeros(size)
    for freq, amp in zip(frequencies, amplitudes):
        signal += amp * np.sin(2 * np.pi * freq * t)
    return signal


def generate_sine_wave(size: int, frequency: float, sample_rate: float) -> np.ndarray:
    return generate_test_signal(size, sample_rate, [frequency], [1.0])


def generate_named_signal(size: int, kind: str, seed: int = 42) -> np.ndarray:
    """
    Standard test signals.

    Args:
        size: Number of samples
        kind: One of 'impulse', 'dc', 'sine' (5 cycles), 'cosine' (3 cycles),
            'mixed' (5, 10 and 15 cycles), 'random' (seeded Gaussian)
        seed: Seed for 'random'

    Raises:
        ValueError: For an unknown kind
    """
    n = np.arange(size)
    kind = kind.lower()
    if kind == 'impulse':
        signal = np.zeros(size)
        if size > 0:
            signal[0] = 1.0
        return signal
    if kind == 'dc':
        return np.ones(size)
    if kind == 'sine':
        return np.sin(2.0 * np.pi * 5 * n / size)
    if kind == 'cosine':
        return np.cos(2.0 * np.pi * 3 * n / size)
    if kind == 'mixed':
        return (np.sin(2.0 * np.pi * 5 * n / size)
                + 0.5 * np.cos(2.0 * np.pi * 10 * n / size)
                + 0.25 * np.sin(2.0 * np.pi * 15 * n / size))
    if kind == 'random':
        rng = np.random.default_rng(seed)
        return rng.standard_normal(size)
    raise ValueError(f"Unknown signal type: {kind}")


def frequency_bins(size: int, sample_rate: float) -> np.ndarray:
    """Centre frequency in Hz of each of the size output bins (k * fs / N)."""
    return np.arange(size) * sample_rate / size


def implementation_info(size: int) -> str:
    return default_factory().implementation_info(size)


def supported_sizes() -> List[int]:
    return default_factory().supported_sizes()
