"""
Kernel registration and selection.

    - implementation: @implementation decorator and ImplementationSpec
    - discovery: explicit table of built-in kernels
    - registry: DefaultFFTFactory, the priority-ordered registry
"""

from .implementation import ImplementationSpec, implementation, get_spec, DEFAULT_PRIORITY
from .discovery import BUILTIN_IMPLEMENTATIONS, discover_implementations, discovery_report, load_implementation
from .registry import DefaultFFTFactory, default_factory, FALLBACK_SIZES

__all__ = [
    'ImplementationSpec',
    'implementation',
    'get_spec',
    'DEFAULT_PRIORITY',
    'BUILTIN_IMPLEMENTATIONS',
    'discover_implementations',
    'discovery_report',
    'load_implementation',
    'DefaultFFTFactory',
    'default_factory',
    'FALLBACK_SIZES',
]
