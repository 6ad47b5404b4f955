#!/usr/bin/env python3
"""
Command line front end for the transform engine.

Usage:
    fftengine transform 1 2 3 4 5 6 7 8 [--inverse] [--imag ...] [--pad]
    fftengine registry
    fftengine caches
    fftengine validate [--sizes 2 8 32 1024] [--tolerance 1e-9]

Global options:
    --config CONFIG_PATH   YAML engine configuration
    --log-level LEVEL      Override the configured log level
"""

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import EngineConfig, load_config
from .core import bitrev, twiddle
from .core.base import FFTBase
from .factory.discovery import discovery_report
from .factory.registry import DefaultFFTFactory
from .utils.fft_utils import zero_pad_to_power_of_two
from .validation import validate_kernel

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_VALIDATE_SIZES = [2, 4, 8, 16, 32, 64, 256, 1024]


def cmd_transform(args, factory: DefaultFFTFactory) -> int:
    real = list(args.values)
    imag = list(args.imag) if args.imag else None
    if args.pad:
        real = list(zero_pad_to_power_of_two(real))
        if imag is not None:
            imag = list(zero_pad_to_power_of_two(imag))

    kernel = factory.create_fft(len(real))
    result = kernel.transform(real, imag, not args.inverse)

    direction = "inverse" if args.inverse else "forward"
    table = Table(
        title=f"{direction.capitalize()} transform, N={result.size()}",
        box=box.SIMPLE_HEAVY,
    )
    table.add_column("Bin", justify="right", style="cyan")
    table.add_column("Real", justify="right")
    table.add_column("Imag", justify="right")
    table.add_column("Magnitude", justify="right", style="green")
    table.add_column("Phase (rad)", justify="right")

    magnitudes = result.magnitudes()
    phases = result.phases()
    for k, (re, im) in enumerate(zip(result.real_parts(), result.imaginary_parts())):
        table.add_row(
            str(k),
            f"{re:.{args.precision}f}",
            f"{im:.{args.precision}f}",
            f"{magnitudes[k]:.{args.precision}f}",
            f"{phases[k]:.{args.precision}f}",
        )

    console.print(table)
    console.print(f"[dim]Kernel: {kernel.description()}[/dim]")
    return 0


def cmd_registry(args, factory: DefaultFFTFactory) -> int:
    table = Table(title="FFT Implementation Registry", box=box.ROUNDED)
    table.add_column("Size", justify="right", style="cyan")
    table.add_column("Selected implementation")
    table.add_column("Priority", justify="right")
    table.add_column("Alternatives", justify="right")

    for size in factory.supported_sizes():
        entries = factory.implementations(size)
        if entries:
            best = entries[0]
            table.add_row(str(size), best.description, str(best.priority), str(len(entries) - 1))
        else:
            table.add_row(str(size), "[dim]generic fallback (FFTBase)[/dim]", "-", "0")

    console.print(table)
    if args.verbose:
        console.print(Panel(discovery_report(), title="Discovery", expand=False))
    return 0


def cmd_caches(args, factory: DefaultFFTFactory) -> int:
    table = Table(title="Precomputed tables", box=box.ROUNDED)
    table.add_column("Cache")
    table.add_column("Sizes", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Memory (KB)", justify="right")
    table.add_column("Cached sizes")

    for stats in (twiddle.cache_stats(), bitrev.cache_stats()):
        table.add_row(
            stats.name,
            str(len(stats.sizes)),
            str(stats.entries),
            f"{stats.kilobytes:.1f}",
            ", ".join(str(s) for s in stats.sizes),
        )
    console.print(table)
    return 0


def cmd_validate(args, factory: DefaultFFTFactory) -> int:
    table = Table(title=f"Kernel validation (tolerance {args.tolerance:g})", box=box.ROUNDED)
    table.add_column("Size", justify="right", style="cyan")
    table.add_column("Kernel")
    table.add_column("Reference", justify="right")
    table.add_column("Round trip", justify="right")
    table.add_column("Parseval", justify="right")
    table.add_column("Status", justify="center")

    failures = 0
    for size in args.sizes:
        kernels = [factory.create_fft(size)]
        if not isinstance(kernels[0], FFTBase):
            kernels.append(FFTBase())
        for kernel in kernels:
            report = validate_kernel(kernel, size, tolerance=args.tolerance, seed=args.seed)
            errors = {check.name: check.max_error for check in report.checks}
            status = "[green]✓ PASS[/green]" if report.valid else "[red]✗ FAIL[/red]"
            if not report.valid:
                failures += 1
                logger.warning(report.detailed_report())
            table.add_row(
                str(size),
                report.kernel,
                f"{errors['reference']:.2e}",
                f"{errors['round-trip']:.2e}",
                f"{errors['parseval']:.2e}",
                status,
            )

    console.print(table)
    if failures:
        console.print(f"[red]{failures} kernel(s) failed validation[/red]")
        return 1
    console.print("[green]All kernels passed[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fftengine',
        description='Cooley-Tukey FFT engine with size-specialised kernels',
    )
    parser.add_argument('--config', type=str, default=None, help='Path to YAML configuration file')
    parser.add_argument('--log-level', type=str, default=None, help='Override configured log level')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('transform', help='Transform a list of samples')
    p.add_argument('values', type=float, nargs='+', help='Real parts of the signal')
    p.add_argument('--imag', type=float, nargs='+', default=None, help='Imaginary parts')
    p.add_argument('--inverse', action='store_true', help='Run the inverse transform')
    p.add_argument('--pad', action='store_true', help='Zero-pad to the next power of two')
    p.add_argument('--precision', type=int, default=6, help='Digits after the decimal point')
    p.set_defaults(func=cmd_transform)

    p = sub.add_parser('registry', help='Show which kernel serves each size')
    p.add_argument('-v', '--verbose', action='store_true', help='Include the discovery report')
    p.set_defaults(func=cmd_registry)

    p = sub.add_parser('caches', help='Show twiddle and bit-reversal cache contents')
    p.set_defaults(func=cmd_caches)

    p = sub.add_parser('validate', help='Check kernels against a direct DFT')
    p.add_argument('--sizes', type=int, nargs='+', default=DEFAULT_VALIDATE_SIZES)
    p.add_argument('--tolerance', type=float, default=1e-9)
    p.add_argument('--seed', type=int, default=0)
    p.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else EngineConfig()
        if args.log_level:
            config = dataclasses.replace(config, log_level=args.log_level)
        config.apply()
        factory = config.create_factory()
        return args.func(args, factory)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
