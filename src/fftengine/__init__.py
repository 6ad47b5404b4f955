"""
fftengine - Cooley-Tukey FFT with automatic kernel selection

Computes the normalised Discrete Fourier Transform of power-of-two length
complex signals. A registry picks, per size, the highest-priority kernel:
hand-specialised kernels for sizes 8 and 32, the generic Cooley-Tukey kernel
for everything else. The generic kernel reads precomputed twiddle factors
and bit-reversal tables from process-wide caches.

Modules:
    - core: generic kernel, FFTResult, twiddle and bit-reversal caches
    - optimized: size-specialised kernels
    - factory: implementation registry and discovery
    - utils: convenience API, signal generators, logging
    - config: YAML configuration
    - validation: kernel correctness checks

Example:
    >>> from fftengine import DefaultFFTFactory
    >>> kernel = DefaultFFTFactory().create_fft(8)
    >>> spectrum = kernel.transform([1, 2, 3, 4, 5, 6, 7, 8])
    >>> round(spectrum.real_at(0), 6)
    12.727922
"""

from .core import ANY_SIZE, FFT, FFTBase, FFTResult, FixedSizeKernel
from .factory import DefaultFFTFactory, ImplementationSpec, default_factory, implementation
from .optimized import FFTOptimized8, FFTOptimized32
from .utils.fft_utils import fft, ifft

__all__ = [
    'ANY_SIZE',
    'FFT',
    'FFTBase',
    'FFTResult',
    'FixedSizeKernel',
    'DefaultFFTFactory',
    'ImplementationSpec',
    'default_factory',
    'implementation',
    'FFTOptimized8',
    'FFTOptimized32',
    'fft',
    'ifft',
]

__version__ = '1.0.0'
