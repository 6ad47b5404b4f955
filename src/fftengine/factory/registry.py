"""
Priority-ordered registry of FFT kernels.

DefaultFFTFactory keeps, per transform size, a tuple of ImplementationSpec
sorted by descending priority. create_fft() builds the first kernel whose
spec and instance both accept the size, and falls back to the generic
FFTBase when none does, so every power-of-two size always gets a correct
kernel.

Each size's tuple is replaced wholesale under that size's lock; readers use
whatever tuple is currently published and never take a lock.
"""

import logging
import operator
import threading
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..core.base import FFT, FFTBase, is_power_of_two
from .discovery import discover_implementations
from .implementation import DEFAULT_PRIORITY, ImplementationSpec

logger = logging.getLogger(__name__)

# Sizes always listed by supported_sizes(), served by the generic fallback
FALLBACK_SIZES = tuple(2 ** i for i in range(1, 14))  # 2 .. 8192


def _as_size(size) -> Optional[int]:
    if isinstance(size, bool):
        return None
    try:
        return operator.index(size)
    except TypeError:
        return None


def _check_size(size) -> int:
    value = _as_size(size)
    if value is None:
        raise ValueError(f"Size must be an integer, got: {size!r}")
    if value < 2 or not is_power_of_two(value):
        raise ValueError(f"Size must be a power of 2 (>= 2), got: {value}")
    return value


class DefaultFFTFactory:
    """
    Creates the best available FFT kernel for a size.

    Args:
        auto_discover: Register kernels found by discovery at construction
        discovery_paths: "module:Class" entries to discover instead of the
            built-in table
    """

    def __init__(self, auto_discover: bool = True, discovery_paths: Optional[Iterable[str]] = None):
        self._entries: Dict[int, Tuple[ImplementationSpec, ...]] = {}
        self._size_locks: Dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

        if auto_discover:
            self._register_discovered(discovery_paths)

    def _register_discovered(self, paths: Optional[Iterable[str]]) -> None:
        try:
            discovered = discover_implementations(paths)
        except Exception:
            logger.warning("FFT implementation discovery failed; using generic fallback only", exc_info=True)
            return

        count = 0
        for size in sorted(discovered):
            for spec in discovered[size]:
                try:
                    self.register_spec(spec)
                    count += 1
                except ValueError as e:
                    logger.warning("Skipping discovered implementation %s: %s", spec.name, e)
        logger.info("Auto-registration completed for %d implementations", count)

    def _lock_for(self, size: int) -> threading.Lock:
        lock = self._size_locks.get(size)
        if lock is not None:
            return lock
        with self._guard:
            return self._size_locks.setdefault(size, threading.Lock())

    # ---- registration ----

    def register_spec(self, spec: ImplementationSpec) -> None:
        """Add a fully described implementation under spec.size."""
        size = _check_size(spec.size)
        if spec.factory is None or not callable(spec.factory):
            raise ValueError("Implementation supplier cannot be None and must be callable")
        with self._lock_for(size):
            current = self._entries.get(size, ())
            # sorted() is stable: equal priorities keep registration order
            self._entries[size] = tuple(sorted(current + (spec,), key=lambda s: -s.priority))
        logger.debug("Registered %s for size %d with priority %d", spec.name, size, spec.priority)

    def register_implementation(
        self,
        size: int,
        supplier: Callable[[], FFT],
        priority: int = DEFAULT_PRIORITY,
        description: Optional[str] = None,
        characteristics: Tuple[str, ...] = (),
    ) -> None:
        """
        Register a kernel supplier for one size.

        Args:
            size: Power-of-two transform size
            supplier: Zero-argument callable returning an FFT kernel
            priority: Higher wins; generic fallback is implicit
            description: Text for diagnostics (defaults to the supplier name)
            characteristics: Descriptive tags

        Raises:
            ValueError: If size is not a power of two or supplier is missing
        """
        size = _check_size(size)
        if supplier is None:
            raise ValueError("Implementation supplier cannot be None")
        if not callable(supplier):
            raise TypeError(f"Implementation supplier must be callable, got: {type(supplier).__name__}")
        spec = ImplementationSpec(
            size=size,
            priority=int(priority),
            factory=supplier,
            description=description or getattr(supplier, '__name__', 'custom implementation'),
            characteristics=tuple(characteristics),
        )
        self.register_spec(spec)

    def unregister_implementations(self, size: int) -> bool:
        """Remove every entry for size. Returns True if anything was removed."""
        size = _as_size(size)
        if size is None:
            return False
        with self._lock_for(size):
            removed = self._entries.pop(size, None)
        if removed:
            logger.debug("Unregistered %d implementations for size %d", len(removed), size)
        return bool(removed)

    # ---- lookup ----

    def implementations(self, size: int) -> Tuple[ImplementationSpec, ...]:
        """Registered specs for size, highest priority first."""
        return self._entries.get(size, ())

    def implementation_count(self, size: int) -> int:
        return len(self._entries.get(size, ()))

    def create_fft(self, size: int) -> FFT:
        """
        Return a kernel able to transform signals of length size.

        Raises:
            ValueError: If size is not a power of two >= 2
        """
        size = _check_size(size)
        for spec in self._entries.get(size, ()):
            if not spec.accepts(size):
                continue
            kernel = spec.factory()
            if not isinstance(kernel, FFT):
                logger.warning("%s returned %s instead of an FFT kernel; trying next implementation",
                               spec.name, type(kernel).__name__)
                continue
            if not kernel.supports_size(size):
                logger.warning("%s does not support size %d; trying next implementation", spec.name, size)
                continue
            return kernel
        return FFTBase()

    def supports_size(self, size: int) -> bool:
        value = _as_size(size)
        return value is not None and value >= 2 and is_power_of_two(value)

    def supported_sizes(self) -> List[int]:
        sizes = set(FALLBACK_SIZES)
        sizes.update(list(self._entries))
        return sorted(sizes)

    def implementation_info(self, size: int) -> str:
        """Diagnostic description of what create_fft(size) would use."""
        if not self.supports_size(size):
            return "Invalid size (not power of 2)"
        entries = self._entries.get(size, ())
        if entries:
            best = entries[0]
            return f"{best.description} (priority: {best.priority})"
        return f"FFTBase (generic fallback implementation for size {size})"

    def registry_report(self) -> str:
        lines = [
            "FFT Factory Implementation Registry:",
            "=====================================",
        ]
        for size in self.supported_sizes():
            lines.append(f"Size {size}: {self.implementation_info(size)}")
            entries = self._entries.get(size, ())
            if len(entries) > 1:
                lines.append("  Alternative implementations:")
                for spec in entries[1:]:
                    lines.append(f"    - {spec.description} (priority: {spec.priority})")
        return "\n".join(lines) + "\n"


_default_lock = threading.Lock()
_default_factory: Optional[DefaultFFTFactory] = None


def default_factory() -> DefaultFFTFactory:
    """Process-wide factory with the built-in kernels registered."""
    global _default_factory
    if _default_factory is None:
        with _default_lock:
            if _default_factory is None:
                _default_factory = DefaultFFTFactory()
    return _default_factory
