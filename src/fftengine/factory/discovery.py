"""
Discovery of self-declared FFT kernels.

Kernels are found through an explicit table of "module:Class" paths rather
than by scanning packages. Each listed class carries an ImplementationSpec
(see implementation.py). Entries that fail to import, or that carry no spec,
are logged and skipped so that one broken kernel never prevents the factory
from starting.
"""

import importlib
import logging
import threading
from typing import Dict, Iterable, List, Optional

from .implementation import ImplementationSpec, get_spec

logger = logging.getLogger(__name__)

BUILTIN_IMPLEMENTATIONS = (
    'fftengine.optimized.fft8:FFTOptimized8',
    'fftengine.optimized.fft32:FFTOptimized32',
)

_builtin_lock = threading.Lock()
_builtin_discovered: Optional[Dict[int, List[ImplementationSpec]]] = None


def load_implementation(path: str) -> ImplementationSpec:
    """
    Import "package.module:ClassName" and return its declared spec.

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the class does not exist
        ValueError: If the path is malformed or the class declares no spec
    """
    module_name, sep, attr = path.partition(':')
    if not sep or not module_name or not attr:
        raise ValueError(f"Implementation path must look like 'module:Class', got: {path!r}")
    module = importlib.import_module(module_name)
    cls = getattr(module, attr)
    spec = get_spec(cls)
    if spec is None:
        raise ValueError(f"{path} is not decorated with @implementation")
    return spec


def _perform_discovery(paths: Iterable[str]) -> Dict[int, List[ImplementationSpec]]:
    found: Dict[int, List[ImplementationSpec]] = {}
    for path in paths:
        try:
            spec = load_implementation(path)
        except Exception as e:
            logger.warning("Failed to load FFT implementation %s: %s", path, e)
            continue
        if not spec.auto_register:
            logger.debug("Skipping %s (auto_register=False)", path)
            continue
        found.setdefault(spec.size, []).append(spec)
        logger.debug("Discovered FFT implementation %s for size %d", path, spec.size)

    for specs in found.values():
        specs.sort(key=lambda s: s.priority, reverse=True)

    total = sum(len(specs) for specs in found.values())
    logger.info("Discovered %d FFT implementations", total)
    return found


def discover_implementations(paths: Optional[Iterable[str]] = None) -> Dict[int, List[ImplementationSpec]]:
    """
    Collect auto-registering kernels grouped by size, highest priority first.

    Args:
        paths: "module:Class" entries to load. Defaults to BUILTIN_IMPLEMENTATIONS,
            whose result is computed once per process.

    Returns:
        Mapping size -> list of ImplementationSpec
    """
    global _builtin_discovered
    if paths is not None:
        return _perform_discovery(paths)

    if _builtin_discovered is None:
        with _builtin_lock:
            if _builtin_discovered is None:
                _builtin_discovered = _perform_discovery(BUILTIN_IMPLEMENTATIONS)
    return {size: list(specs) for size, specs in _builtin_discovered.items()}


def discovery_report(paths: Optional[Iterable[str]] = None) -> str:
    """Human-readable listing of discovered kernels (diagnostic only)."""
    discovered = discover_implementations(paths)
    lines = [
        "FFT Implementation Discovery Report:",
        "===================================",
    ]
    if not discovered:
        lines.append("No implementations discovered.")
        return "\n".join(lines) + "\n"

    for size in sorted(discovered):
        lines.append("")
        lines.append(f"Size {size}:")
        for spec in discovered[size]:
            lines.append(
                f"  - {spec.description} (priority: {spec.priority}, auto-register: {spec.auto_register})"
            )
            if spec.characteristics:
                lines.append(f"    Characteristics: {', '.join(spec.characteristics)}")
    return "\n".join(lines) + "\n"
