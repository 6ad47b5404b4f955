"""
Size-specialised FFT kernels.

Each kernel here is a real specialisation of the generic algorithm for one
size, registered with priority 50 so the factory prefers it over the generic
fallback:
    - FFTOptimized8: fully unrolled 8-point network
    - FFTOptimized32: 32-point network driven by a precompiled schedule
"""

from .fft8 import FFTOptimized8, fft8
from .fft32 import FFTOptimized32, fft32, build_schedule

__all__ = [
    'FFTOptimized8',
    'FFTOptimized32',
    'fft8',
    'fft32',
    'build_schedule',
]
