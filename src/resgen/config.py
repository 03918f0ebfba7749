"""Engine configuration — параметры движка генерации ресурсов."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация ResourceGenerator.

    - track_stats: считать cache hits / пересчёты в CacheStats
    - log_recomputations: писать результат каждого пересчёта в DEBUG-лог
    """
    track_stats: bool = True
    log_recomputations: bool = True


@dataclass
class CacheStats:
    """Счётчики кэша генерации (для диагностики и тестов)."""

    hits: int = 0
    recomputations: int = 0

    def reset(self) -> None:
        self.hits = 0
        self.recomputations = 0
