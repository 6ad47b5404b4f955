"""
Twiddle Factor Cache

Precomputed cos/sin values of the FFT rotation factors. Profiling the generic
kernel showed the trigonometric calls dominate its cost, so the kernel reads
whole tables from here instead of calling cos/sin per butterfly.

For size N the table holds W[k] = exp(-2*pi*i*k/N), k = 0..N-1:
    forward:  (cos, sin) = ( cos(2*pi*k/N), -sin(2*pi*k/N))
    inverse:  (cos, sin) = ( cos(2*pi*k/N), +sin(2*pi*k/N))

Indices wrap modulo N. Tables for PRECOMPUTED_SIZES are built at import;
other sizes are built on first table request and kept for the life of the
process.
"""

import math
from typing import List, Tuple

import numpy as np

from ._cache import ComputeIfAbsentCache
from .bitrev import CacheStats, PRECOMPUTED_SIZES, is_power_of_two

_TABLES = ComputeIfAbsentCache('TwiddleFactorCache')


class _TwiddleTable:
    """cos/sin of -2*pi*k/n for one size, plus the negated sines for inverse transforms."""

    __slots__ = ('size', 'cos', 'sin_forward', 'sin_inverse')

    def __init__(self, n: int):
        k = np.arange(n, dtype=np.float64)
        arg = -2.0 * np.pi * k / n
        self.size = n
        self.cos = np.cos(arg)
        self.sin_forward = np.sin(arg)
        self.sin_inverse = -self.sin_forward
        for table in (self.cos, self.sin_forward, self.sin_inverse):
            table.setflags(write=False)


def _table(n: int) -> _TwiddleTable:
    return _TABLES.get_or_compute(n, _TwiddleTable)


def _check_size(n: int) -> int:
    n = int(n)
    if not is_power_of_two(n):
        raise ValueError(f"Size must be a power of 2, got: {n}")
    return n


def get_cos(n: int, k: int, forward: bool = True) -> float:
    """Cosine of the twiddle angle for index k of an n-point transform."""
    n = _check_size(n)
    table = _TABLES.get(n)
    if table is not None:
        return float(table.cos[k % n])
    arg = (-2.0 if forward else 2.0) * math.pi * k / n
    return math.cos(arg)


def get_sin(n: int, k: int, forward: bool = True) -> float:
    """Sine of the twiddle angle for index k; the sign flips with direction."""
    n = _check_size(n)
    table = _TABLES.get(n)
    if table is not None:
        sin = table.sin_forward if forward else table.sin_inverse
        return float(sin[k % n])
    arg = (-2.0 if forward else 2.0) * math.pi * k / n
    return math.sin(arg)


def get_twiddle(n: int, k: int, forward: bool = True) -> Tuple[float, float]:
    return get_cos(n, k, forward), get_sin(n, k, forward)


def get_tables(n: int, forward: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """
    Full (cos, sin) tables for an n-point transform in the given direction.

    Builds and caches the table the first time an unlisted size is requested.

    Raises:
        ValueError: If n is not a power of two
    """
    table = _table(_check_size(n))
    return table.cos, (table.sin_forward if forward else table.sin_inverse)


def is_precomputed(n: int) -> bool:
    return n in _TABLES


def cached_sizes() -> List[int]:
    return _TABLES.keys()


def cache_stats() -> CacheStats:
    entries = 0
    total_bytes = 0
    for _, table in _TABLES.items():
        entries += table.size
        # cos + forward sin + inverse sin
        total_bytes += table.cos.nbytes * 3
    return CacheStats(name=_TABLES.name, sizes=cached_sizes(), entries=entries, bytes=total_bytes)


for _size in PRECOMPUTED_SIZES:
    _table(_size)
