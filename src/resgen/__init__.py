"""Resgen — инкрементальный движок производства ресурсов.

- ResourceGenerator: агрегация генераторов по правилам комбинирования с кэшем
- EngineConfig / CacheStats: конфигурация и счётчики кэша
"""

from .config import CacheStats, EngineConfig
from .engine import (
    InvalidGeneratorStateError,
    ResourceGenerator,
)

__all__ = [
    "ResourceGenerator",
    "InvalidGeneratorStateError",
    "EngineConfig",
    "CacheStats",
]
