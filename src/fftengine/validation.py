"""
Correctness checks for FFT kernels.

validate_kernel() runs a kernel on a seeded random complex signal and
compares it against a direct O(N^2) DFT with the same 1/sqrt(N) scaling,
then checks the inverse round trip and Parseval's energy identity.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .core.base import FFT


def reference_dft(real, imaginary=None, forward: bool = True) -> np.ndarray:
    """
    Direct DFT, normalised by 1/sqrt(N), as a complex array.

    Independent of the FFT kernels: builds the full N x N matrix of
    exp(-/+ 2*pi*i*k*n/N).
    """
    x = np.asarray(real, dtype=np.float64).astype(np.complex128)
    if imaginary is not None:
        x = x + 1j * np.asarray(imaginary, dtype=np.float64)
    n = x.shape[0]
    sign = -1.0 if forward else 1.0
    idx = np.arange(n)
    # Reduce k*n mod N first so the angles stay small and exact
    matrix = np.exp(sign * 2j * np.pi * (np.outer(idx, idx) % n) / n)
    return matrix @ x / np.sqrt(n)


@dataclass
class CheckResult:
    name: str
    max_error: float
    passed: bool


@dataclass
class ValidationReport:
    """Outcome of validate_kernel()."""
    kernel: str
    size: int
    tolerance: float
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(check.passed for check in self.checks)

    def message(self) -> str:
        if self.valid:
            return f"{self.kernel} (size {self.size}): all {len(self.checks)} checks passed"
        failed = [c.name for c in self.checks if not c.passed]
        return f"{self.kernel} (size {self.size}): failed {', '.join(failed)}"

    def detailed_report(self) -> str:
        lines = [self.message()]
        for check in self.checks:
            status = "PASS" if check.passed else "FAIL"
            lines.append(f"  {check.name:<12s} max_error={check.max_error:.2e}  {status}")
        return "\n".join(lines)


def validate_kernel(
    kernel: FFT,
    size: int,
    tolerance: float = 1e-9,
    seed: Optional[int] = 0,
) -> ValidationReport:
    """
    Check a kernel against the reference DFT for one size.

    Checks:
        reference: forward output vs reference_dft (absolute error)
        round-trip: inverse(forward(x)) vs x, relative to max |x|
        parseval: |sum |x|^2 - sum |X|^2|, relative to sum |x|^2

    Raises:
        ValueError: If the kernel does not support size
    """
    if not kernel.supports_size(size):
        raise ValueError(f"{type(kernel).__name__} does not support size {size}")

    rng = np.random.default_rng(seed)
    real = rng.standard_normal(size)
    imag = rng.standard_normal(size)

    spectrum = kernel.transform(real, imag, True)
    expected = reference_dft(real, imag, True)
    ref_error = float(np.max(np.abs(spectrum.to_complex() - expected)))

    back = kernel.transform(spectrum.real_parts(), spectrum.imaginary_parts(), False)
    x = real + 1j * imag
    scale = float(np.max(np.abs(x)))
    rt_error = float(np.max(np.abs(back.to_complex() - x))) / scale

    energy_in = float(np.sum(real ** 2 + imag ** 2))
    energy_out = float(np.sum(spectrum.power_spectrum()))
    parseval_error = abs(energy_in - energy_out) / energy_in

    # The O(N^2) reference accumulates its own rounding, so allow it to grow with N
    ref_tolerance = tolerance * max(1.0, np.sqrt(size))

    report = ValidationReport(kernel=type(kernel).__name__, size=size, tolerance=tolerance)
    report.checks.append(CheckResult('reference', ref_error, ref_error < ref_tolerance))
    report.checks.append(CheckResult('round-trip', rt_error, rt_error < tolerance))
    report.checks.append(CheckResult('parseval', parseval_error, parseval_error < tolerance))
    return report
