"""
Utility modules.
"""

from .logging import setup_logging
from .fft_utils import (
    fft,
    ifft,
    next_power_of_two,
    zero_pad_to_power_of_two,
    generate_test_signal,
    generate_sine_wave,
    generate_named_signal,
    frequency_bins,
    implementation_info,
    supported_sizes,
    SIGNAL_TYPES,
)

__all__ = [
    'setup_logging',
    'fft',
    'ifft',
    'next_power_of_two',
    'zero_pad_to_power_of_two',
    'generate_test_signal',
    'generate_sine_wave',
    'generate_named_signal',
    'frequency_bins',
    'implementation_info',
    'supported_sizes',
    'SIGNAL_TYPES',
]
