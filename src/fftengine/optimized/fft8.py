"""
8-point FFT with the butterfly network fully unrolled.

Three radix-2 stages with hard-coded twiddles (1, -i, W8^1, W8^3) and the
bit-reversal permutation reduced to the two swaps (1,4) and (3,6). Output
is identical in convention to the generic kernel: 1/sqrt(8) scaling in both
directions.
"""

import math

import numpy as np
from numba import jit

from ..core.base import FixedSizeKernel
from ..factory.implementation import implementation

SIZE = 8
NORM_FACTOR = 1.0 / math.sqrt(8.0)

# cos/sin of pi/4 and 3*pi/4
W8_1_COS = 0.7071067811865476
W8_1_SIN = 0.7071067811865475
W8_3_COS = -0.7071067811865475
W8_3_SIN = 0.7071067811865476


@jit(nopython=True, cache=True)
def fft8(re, im, forward):
    """Unrolled 8-point transform of the working buffers re, im (modified in place)."""
    sign = -1.0 if forward else 1.0

    # Stage 1: span 4, twiddle 1
    for a in range(4):
        b = a + 4
        t_re = re[b]
        t_im = im[b]
        re[b] = re[a] - t_re
        im[b] = im[a] - t_im
        re[a] = re[a] + t_re
        im[a] = im[a] + t_im

    # Stage 2: span 2
    t_re = re[2]
    t_im = im[2]
    re[2] = re[0] - t_re
    im[2] = im[0] - t_im
    re[0] = re[0] + t_re
    im[0] = im[0] + t_im

    t_re = re[3]
    t_im = im[3]
    re[3] = re[1] - t_re
    im[3] = im[1] - t_im
    re[1] = re[1] + t_re
    im[1] = im[1] + t_im

    t_re = -sign * im[6]
    t_im = sign * re[6]
    re[6] = re[4] - t_re
    im[6] = im[4] - t_im
    re[4] = re[4] + t_re
    im[4] = im[4] + t_im

    t_re = -sign * im[7]
    t_im = sign * re[7]
    re[7] = re[5] - t_re
    im[7] = im[5] - t_im
    re[5] = re[5] + t_re
    im[5] = im[5] + t_im

    # Stage 3: span 1
    t_re = re[1]
    t_im = im[1]
    re[1] = re[0] - t_re
    im[1] = im[0] - t_im
    re[0] = re[0] + t_re
    im[0] = im[0] + t_im

    t_re = -sign * im[3]
    t_im = sign * re[3]
    re[3] = re[2] - t_re
    im[3] = im[2] - t_im
    re[2] = re[2] + t_re
    im[2] = im[2] + t_im

    t_re = W8_1_COS * re[5] - sign * W8_1_SIN * im[5]
    t_im = W8_1_COS * im[5] + sign * W8_1_SIN * re[5]
    re[5] = re[4] - t_re
    im[5] = im[4] - t_im
    re[4] = re[4] + t_re
    im[4] = im[4] + t_im

    t_re = W8_3_COS * re[7] - sign * W8_3_SIN * im[7]
    t_im = W8_3_COS * im[7] + sign * W8_3_SIN * re[7]
    re[7] = re[6] - t_re
    im[7] = im[6] - t_im
    re[6] = re[6] + t_re
    im[6] = im[6] + t_im

    # Bit reversal: swap (1,4) and (3,6)
    t_re = re[1]
    t_im = im[1]
    re[1] = re[4]
    im[1] = im[4]
    re[4] = t_re
    im[4] = t_im

    t_re = re[3]
    t_im = im[3]
    re[3] = re[6]
    im[3] = im[6]
    re[6] = t_re
    im[6] = t_im

    out = np.empty(16, dtype=np.float64)
    for i in range(8):
        out[2 * i] = re[i] * NORM_FACTOR
        out[2 * i + 1] = im[i] * NORM_FACTOR
    return out


@implementation(
    size=SIZE,
    priority=50,
    description="Unrolled 8-point FFT (hard-coded twiddles, inline bit reversal)",
    characteristics=('complete-unrolling', 'hardcoded-twiddles', 'inline-bit-reversal'),
)
class FFTOptimized8(FixedSizeKernel):
    """Size-8 kernel; forward and inverse both run the unrolled network."""

    SIZE = SIZE

    def _compute(self, re, im, forward):
        return fft8(re, im, forward)

    def description(self) -> str:
        return "Unrolled FFT implementation (size 8)"
