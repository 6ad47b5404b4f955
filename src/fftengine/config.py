"""
Engine configuration loaded from YAML.

Example config:

    cache:
      warm_sizes: [8192, 16384]
    factory:
      auto_discover: true
      discovery_paths:
        - fftengine.optimized.fft8:FFTOptimized8
    logging:
      level: INFO
      file: logs/fftengine.log

Every key is optional. The transform core never reads configuration on its
own; callers (the CLI, applications) load a config and apply it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .core import bitrev, twiddle
from .core.base import is_power_of_two
from .factory.registry import DefaultFFTFactory
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class EngineConfig:
    """Settings for cache warm-up, kernel discovery and logging."""
    warm_sizes: List[int] = field(default_factory=list)
    auto_discover: bool = True
    discovery_paths: Optional[List[str]] = None
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        for size in self.warm_sizes:
            if isinstance(size, bool) or not isinstance(size, int) or size < 2 or not is_power_of_two(size):
                raise ValueError(f"cache.warm_sizes entries must be powers of 2 (>= 2), got: {size!r}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {_LOG_LEVELS}, got: {self.log_level}")

    @classmethod
    def from_dict(cls, config: Optional[Dict]) -> 'EngineConfig':
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a mapping, got: {type(config).__name__}")
        cache_cfg = config.get('cache', {}) or {}
        factory_cfg = config.get('factory', {}) or {}
        log_cfg = config.get('logging', {}) or {}

        paths = factory_cfg.get('discovery_paths', None)
        return cls(
            warm_sizes=list(cache_cfg.get('warm_sizes', []) or []),
            auto_discover=bool(factory_cfg.get('auto_discover', True)),
            discovery_paths=list(paths) if paths is not None else None,
            log_level=log_cfg.get('level', 'INFO'),
            log_file=log_cfg.get('file', None),
        )

    def to_dict(self) -> Dict:
        return {
            'cache': {'warm_sizes': list(self.warm_sizes)},
            'factory': {
                'auto_discover': self.auto_discover,
                'discovery_paths': self.discovery_paths,
            },
            'logging': {'level': self.log_level, 'file': self.log_file},
        }

    def apply(self) -> None:
        """Configure logging and populate both caches for warm_sizes."""
        setup_logging(log_file=self.log_file, level=self.log_level)
        for size in self.warm_sizes:
            twiddle.get_tables(size)
            bitrev.get_table(size)
        if self.warm_sizes:
            logger.info("Warmed twiddle and bit-reversal caches for sizes %s", self.warm_sizes)

    def create_factory(self) -> DefaultFFTFactory:
        return DefaultFFTFactory(auto_discover=self.auto_discover, discovery_paths=self.discovery_paths)


def load_config(config_path: Union[str, Path]) -> EngineConfig:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return EngineConfig.from_dict(yaml.safe_load(f))
