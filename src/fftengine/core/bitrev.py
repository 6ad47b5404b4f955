"""
Bit-Reversal Cache

Lookup tables for the bit-reversal permutation used by the final stage of the
Cooley-Tukey transform. Entry k of the table for size N holds k with its
log2(N) low bits reversed.

Tables for PRECOMPUTED_SIZES are built when the module is imported; any
other power-of-two size is built on first request and memoised. Tables are
never evicted, so memory grows with the number of distinct sizes used
(4-8 bytes per entry).
"""

import logging
from dataclasses import dataclass
from typing import List

import numpy as np
from numba import jit

from ._cache import ComputeIfAbsentCache

logger = logging.getLogger(__name__)

PRECOMPUTED_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096)

_CACHE = ComputeIfAbsentCache('BitReversalCache')


@dataclass(frozen=True)
class CacheStats:
    """Summary of what a cache currently holds."""
    name: str
    sizes: List[int]
    entries: int
    bytes: int

    @property
    def kilobytes(self) -> float:
        return self.bytes / 1024.0

    def __str__(self) -> str:
        return f"{self.name}: {len(self.sizes)} sizes cached, ~{self.kilobytes:.2f} KB memory"


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@jit(nopython=True, cache=True)
def bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the low n_bits bits of x."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fill_table(table: np.ndarray, n_bits: int) -> None:
    for i in range(table.shape[0]):
        table[i] = bit_reverse(i, n_bits)


def _compute_table(size: int) -> np.ndarray:
    n_bits = size.bit_length() - 1
    table = np.empty(size, dtype=np.int64)
    _fill_table(table, n_bits)
    table.setflags(write=False)
    if size not in PRECOMPUTED_SIZES:
        logger.debug("Computed bit-reversal table for size %d", size)
    return table


def get_table(size: int) -> np.ndarray:
    """
    Return the bit-reversal permutation for size.

    Args:
        size: Transform size, must be a power of two

    Returns:
        Read-only int64 array of length size

    Raises:
        ValueError: If size is not a power of two
    """
    size = int(size)
    if not is_power_of_two(size):
        raise ValueError(f"Size must be a power of 2, got: {size}")
    return _CACHE.get_or_compute(size, _compute_table)


def is_precomputed(size: int) -> bool:
    """True if a table for size is already cached."""
    return size in _CACHE


def cached_sizes() -> List[int]:
    return _CACHE.keys()


def cache_stats() -> CacheStats:
    entries = 0
    total_bytes = 0
    for _, table in _CACHE.items():
        entries += table.shape[0]
        total_bytes += table.nbytes
    return CacheStats(name=_CACHE.name, sizes=cached_sizes(), entries=entries, bytes=total_bytes)


for _size in PRECOMPUTED_SIZES:
    get_table(_size)
