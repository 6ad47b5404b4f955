"""
Registration metadata for FFT kernels.

A kernel class declares the size it targets, its priority and descriptive
tags with the @implementation decorator. Discovery reads the attached
ImplementationSpec from an explicit list of classes; nothing is found by
scanning modules.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from ..core.base import ANY_SIZE, FFT

SPEC_ATTRIBUTE = '__fft_implementation__'

DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class ImplementationSpec:
    """One registrable kernel: where it applies and how to build it."""
    size: int
    priority: int
    factory: Callable[[], FFT]
    description: str = ''
    characteristics: Tuple[str, ...] = ()
    auto_register: bool = True
    supports: Optional[Callable[[int], bool]] = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return getattr(self.factory, '__name__', repr(self.factory))

    def accepts(self, size: int) -> bool:
        """Capability check for a requested size."""
        if self.supports is not None:
            return bool(self.supports(size))
        return self.size == ANY_SIZE or self.size == size


def implementation(
    size: int,
    priority: int = DEFAULT_PRIORITY,
    description: str = '',
    characteristics: Tuple[str, ...] = (),
    auto_register: bool = True,
):
    """
    Class decorator attaching an ImplementationSpec to an FFT kernel.

    Example:
        @implementation(size=8, priority=50, characteristics=('unrolled',))
        class FFTOptimized8(FixedSizeKernel):
            ...
    """
    def decorate(cls):
        spec = ImplementationSpec(
            size=size,
            priority=priority,
            factory=cls,
            description=description or cls.__name__,
            characteristics=tuple(characteristics),
            auto_register=auto_register,
        )
        setattr(cls, SPEC_ATTRIBUTE, spec)
        return cls

    return decorate


def get_spec(cls) -> Optional[ImplementationSpec]:
    """The spec declared on cls itself (not inherited), or None."""
    spec = cls.__dict__.get(SPEC_ATTRIBUTE)
    if isinstance(spec, ImplementationSpec):
        return spec
    return None
