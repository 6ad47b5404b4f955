"""
32-point FFT driven by a precompiled butterfly schedule.

The generic kernel recomputes, for every butterfly, which pair of samples it
combines and which twiddle index it needs. For a fixed size both are known in
advance, so at import time the 80 butterflies (5 stages x 16) are flattened
into index arrays with their twiddle values already looked up for each
direction, and the final permutation is reduced to its 12 swaps. The hot path
is then a straight walk over the schedule.
"""

import math
from typing import NamedTuple

import numpy as np
from numba import jit

from ..core import bitrev, twiddle
from ..core.base import FixedSizeKernel, interleave_scaled
from ..factory.implementation import implementation

SIZE = 32


class ButterflySchedule(NamedTuple):
    top: np.ndarray
    bottom: np.ndarray
    cos: np.ndarray
    sin_forward: np.ndarray
    sin_inverse: np.ndarray
    swap_a: np.ndarray
    swap_b: np.ndarray


def build_schedule(n: int) -> ButterflySchedule:
    """
    Flatten the generic kernel's butterfly loop for size n.

    Visits butterflies in exactly the order the generic kernel does, so the
    scheduled transform performs the same floating point operations.
    """
    rev = bitrev.get_table(n)
    cos_t, sin_fwd = twiddle.get_tables(n, True)
    _, sin_inv = twiddle.get_tables(n, False)

    nu = n.bit_length() - 1
    top, bottom, tw = [], [], []
    n2, nu1 = n // 2, nu - 1
    for _stage in range(nu):
        k = 0
        while k < n:
            for _ in range(n2):
                top.append(k)
                bottom.append(k + n2)
                tw.append(int(rev[k >> nu1]))
                k += 1
            k += n2
        nu1 -= 1
        n2 //= 2

    tw = np.asarray(tw, dtype=np.int64)
    swaps = [(k, int(r)) for k, r in enumerate(rev) if r > k]

    def frozen(values, dtype):
        arr = np.ascontiguousarray(values, dtype=dtype)
        arr.setflags(write=False)
        return arr

    return ButterflySchedule(
        top=frozen(top, np.int64),
        bottom=frozen(bottom, np.int64),
        cos=frozen(cos_t[tw], np.float64),
        sin_forward=frozen(sin_fwd[tw], np.float64),
        sin_inverse=frozen(sin_inv[tw], np.float64),
        swap_a=frozen([a for a, _ in swaps], np.int64),
        swap_b=frozen([b for _, b in swaps], np.int64),
    )


@jit(nopython=True, cache=True)
def _run_schedule(re, im, top, bottom, c, s, swap_a, swap_b):
    for b in range(top.shape[0]):
        k = top[b]
        j = bottom[b]
        t_re = re[j] * c[b] - im[j] * s[b]
        t_im = im[j] * c[b] + re[j] * s[b]
        re[j] = re[k] - t_re
        im[j] = im[k] - t_im
        re[k] += t_re
        im[k] += t_im

    for q in range(swap_a.shape[0]):
        a = swap_a[q]
        b = swap_b[q]
        t_re = re[a]
        t_im = im[a]
        re[a] = re[b]
        im[a] = im[b]
        re[b] = t_re
        im[b] = t_im


SCHEDULE_32 = build_schedule(SIZE)
_SCALE = 1.0 / math.sqrt(SIZE)


def fft32(re: np.ndarray, im: np.ndarray, forward: bool = True) -> np.ndarray:
    """Scheduled 32-point transform of the working buffers re, im (modified in place)."""
    sched = SCHEDULE_32
    sin = sched.sin_forward if forward else sched.sin_inverse
    _run_schedule(re, im, sched.top, sched.bottom, sched.cos, sin, sched.swap_a, sched.swap_b)
    return interleave_scaled(re, im, _SCALE)


@implementation(
    size=SIZE,
    priority=50,
    description="Scheduled 32-point FFT (precompiled butterfly pairs and twiddles)",
    characteristics=('precomputed-schedule', 'precomputed-twiddles', 'no-bit-reversal-math'),
)
class FFTOptimized32(FixedSizeKernel):
    """Size-32 kernel; forward and inverse both run the precompiled schedule."""

    SIZE = SIZE

    def _compute(self, re, im, forward):
        return fft32(re, im, forward)

    def description(self) -> str:
        return "Scheduled FFT implementation (size 32)"
