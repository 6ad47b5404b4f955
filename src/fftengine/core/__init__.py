"""
Transform engine core.

Modules:
    - base: FFT kernel interface and the generic Cooley-Tukey kernel
    - result: FFTResult, the immutable spectrum
    - twiddle: twiddle-factor cache
    - bitrev: bit-reversal cache
"""

from .base import ANY_SIZE, FFT, FFTBase, FixedSizeKernel, fft, is_power_of_two
from .result import FFTResult
from . import bitrev, twiddle

__all__ = [
    'ANY_SIZE',
    'FFT',
    'FFTBase',
    'FixedSizeKernel',
    'FFTResult',
    'fft',
    'is_power_of_two',
    'bitrev',
    'twiddle',
]
