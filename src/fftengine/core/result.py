"""
Immutable container for the output of one transform.

The spectrum is stored as interleaved (real, imaginary) float64 pairs. The
constructor copies its input and every array accessor returns a fresh copy,
so callers can never modify a result after the fact. Magnitude, phase and
power are derived on each call.
"""

from typing import Sequence, Union

import numpy as np

ArrayLike = Union[Sequence[float], np.ndarray]


class FFTResult:
    """
    Complex spectrum of size N backed by a private interleaved buffer of length 2N.

    Examples
    --------
    >>> r = FFTResult([1.0, 0.0, 0.0, 1.0])
    >>> r.size()
    2
    >>> r.magnitude_at(1)
    1.0
    """

    __slots__ = ('_data', '_size')

    def __init__(self, interleaved: ArrayLike):
        data = np.array(interleaved, dtype=np.float64, copy=True)
        if data.ndim != 1:
            raise ValueError(f"Interleaved result array must be 1D, got shape {data.shape}")
        if data.shape[0] % 2 != 0:
            raise ValueError("Interleaved result array length must be even")
        data.setflags(write=False)
        self._data = data
        self._size = data.shape[0] // 2

    @classmethod
    def from_parts(cls, real: ArrayLike, imaginary: ArrayLike) -> 'FFTResult':
        """Build a result from separate real and imaginary arrays of equal length."""
        real = np.asarray(real, dtype=np.float64)
        imaginary = np.asarray(imaginary, dtype=np.float64)
        if real.ndim != 1 or imaginary.ndim != 1:
            raise ValueError("Real and imaginary arrays must be 1D")
        if real.shape[0] != imaginary.shape[0]:
            raise ValueError("Real and imaginary arrays must have same length")
        interleaved = np.empty(2 * real.shape[0], dtype=np.float64)
        interleaved[0::2] = real
        interleaved[1::2] = imaginary
        return cls(interleaved)

    def size(self) -> int:
        """Number of complex samples."""
        return self._size

    def __len__(self) -> int:
        return self._size

    # ---- bulk accessors (always copies) ----

    def real_parts(self) -> np.ndarray:
        return self._data[0::2].copy()

    def imaginary_parts(self) -> np.ndarray:
        return self._data[1::2].copy()

    def interleaved(self) -> np.ndarray:
        return self._data.copy()

    def to_complex(self) -> np.ndarray:
        return self._data[0::2] + 1j * self._data[1::2]

    def magnitudes(self) -> np.ndarray:
        re = self._data[0::2]
        im = self._data[1::2]
        return np.sqrt(re * re + im * im)

    def phases(self) -> np.ndarray:
        return np.arctan2(self._data[1::2], self._data[0::2])

    def power_spectrum(self) -> np.ndarray:
        re = self._data[0::2]
        im = self._data[1::2]
        return re * re + im * im

    # ---- indexed accessors ----

    def _check_index(self, index: int) -> int:
        index = int(index)
        if index < 0 or index >= self._size:
            raise IndexError(f"Index {index} out of bounds for size {self._size}")
        return index

    def real_at(self, index: int) -> float:
        index = self._check_index(index)
        return float(self._data[2 * index])

    def imaginary_at(self, index: int) -> float:
        index = self._check_index(index)
        return float(self._data[2 * index + 1])

    def magnitude_at(self, index: int) -> float:
        index = self._check_index(index)
        re = float(self._data[2 * index])
        im = float(self._data[2 * index + 1])
        return float(np.sqrt(re * re + im * im))

    def phase_at(self, index: int) -> float:
        index = self._check_index(index)
        return float(np.arctan2(self._data[2 * index + 1], self._data[2 * index]))

    def power_at(self, index: int) -> float:
        index = self._check_index(index)
        re = float(self._data[2 * index])
        im = float(self._data[2 * index + 1])
        return re * re + im * im

    # ---- value semantics ----

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, FFTResult):
            return NotImplemented
        # Bitwise, so that equality agrees with __hash__ (0.0 vs -0.0, NaN)
        return self._data.tobytes() == other._data.tobytes()

    def __hash__(self) -> int:
        return hash(self._data.tobytes())

    def __repr__(self) -> str:
        first = self.magnitude_at(0) if self._size > 0 else 0.0
        return f"FFTResult[size={self._size}, first_magnitude={first:.3f}]"
