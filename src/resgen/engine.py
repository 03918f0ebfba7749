"""Resource Generator — агрегация производства ресурсов с кэшированием.

Движок владеет набором активных генераторов, кэшем результатов по ресурсам
и множеством "грязных" ресурсов:
- add_generator / remove_generator изменяют количество генераторов и
  помечают ресурс как dirty
- generate возвращает кэш, если ресурс не dirty, иначе пересчитывает
- generate_without_cache всегда пересчитывает и обновляет кэш

Алгоритм агрегации:
    flat  = Σ value·count                       (FLAT)
    mult  = Σ value·count                       (LINEAR_MULTIPLIER)
    mult  = (mult or 1) · Π value^⌊count⌋        (GEOMETRIC_MULTIPLIER)
    exp   = 1 + Σ value·count                   (EXPONENTIAL)
    mag   = Σ int(value·count)                  (MAGNITUDE)

    result = flat · (mult if mult ≠ 0 else 1)
    result = result ** exp          если exp > 1
    result = result · 10 ** mag

Движок однопоточный и не reentrant: конкурентный доступ сериализуется снаружи.
"""

import logging
from typing import Generic, Optional, TypeVar

from src.core.domain.generator import (
    CombinationRule,
    GeneratorDefinition,
    GeneratorInstance,
)
from src.core.math.numeric_policy import (
    NumericPolicy,
    get_policy,
    policy_for_type,
)
from src.resgen.config import CacheStats, EngineConfig

logger = logging.getLogger(__name__)

ResourceT = TypeVar("ResourceT")
ValueT = TypeVar("ValueT")


class InvalidGeneratorStateError(RuntimeError):
    """
    Генератор с правилом вне CombinationRule обнаружен при агрегации.

    Признак повреждённой или несовместимой по версии GeneratorDefinition.
    Такой генератор не пропускается молча: это занизило бы производство.
    """
    pass


class ResourceGenerator(Generic[ResourceT, ValueT]):
    """Генерирует ресурсы на основе списка активных генераторов.

    Для интерпретации значений требуется NumericPolicy. Создание:
    - ResourceGenerator(policy) — явная политика
    - ResourceGenerator.from_preset("float32" | "int" | <registered>)
    - ResourceGenerator.for_value_type(float | int | numpy.float32 | numpy.int32)
    """

    def __init__(
        self,
        policy: NumericPolicy,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            policy: политика арифметики для значений ValueT
            config: конфигурация движка (default: EngineConfig())
        """
        if not isinstance(policy, NumericPolicy):
            raise TypeError(
                f"policy must implement NumericPolicy, got {type(policy).__name__}"
            )

        self.policy = policy
        self.config = config or EngineConfig()
        self.stats = CacheStats()

        # Ключ — identity definition (id), а не равенство полей
        self._active_generators: dict[int, GeneratorInstance] = {}
        self._cached_generation: dict[ResourceT, ValueT] = {}
        self._dirty_resources: set[ResourceT] = set()

    @classmethod
    def from_preset(
        cls, name: str, config: Optional[EngineConfig] = None
    ) -> "ResourceGenerator[ResourceT, ValueT]":
        """Движок с политикой из именованного preset."""
        return cls(get_policy(name), config)

    @classmethod
    def for_value_type(
        cls, value_type: type, config: Optional[EngineConfig] = None
    ) -> "ResourceGenerator[ResourceT, ValueT]":
        """Движок со встроенной политикой для типа значения.

        Raises:
            UnsupportedValueTypeError: если для типа нет встроенной политики
        """
        return cls(policy_for_type(value_type), config)

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def add_generator(
        self, definition: GeneratorDefinition, count: Optional[ValueT] = None
    ) -> None:
        """Добавляет count генераторов (default: one) в список активных.

        Существующий экземпляр увеличивается, иначе создаётся новый.
        Отрицательный count допустим и никогда не удаляет экземпляр:
        удаление происходит только в remove_generator.
        """
        count = self.policy.one if count is None else self.policy.coerce(count)
        key = id(definition)

        generator = self._active_generators.get(key)
        if generator is not None:
            generator.count = self.policy.add(generator.count, count)
        else:
            generator = GeneratorInstance(definition=definition, count=count)
            self._active_generators[key] = generator

        self._dirty_resources.add(definition.resource)

        logger.debug(
            "Added %s x %s for %r, count=%s",
            count, definition.name or definition.rule, definition.resource, generator.count,
        )

    def remove_generator(
        self, definition: GeneratorDefinition, count: Optional[ValueT] = None
    ) -> bool:
        """Удаляет count генераторов (default: one) из списка активных.

        Returns:
            False если генератор не активен (состояние не меняется),
            иначе True (независимо от того, был ли экземпляр удалён)
        """
        key = id(definition)
        generator = self._active_generators.get(key)
        if generator is None:
            return False

        count = self.policy.one if count is None else self.policy.coerce(count)
        generator.count = self.policy.subtract(generator.count, count)

        if self.policy.compare(generator.count, self.policy.zero) <= 0:
            del self._active_generators[key]
            logger.debug(
                "Pruned %s for %r (count=%s)",
                definition.name or definition.rule, definition.resource, generator.count,
            )
        else:
            logger.debug(
                "Removed %s x %s for %r, count=%s",
                count, definition.name or definition.rule, definition.resource, generator.count,
            )

        self._dirty_resources.add(definition.resource)
        return True

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get_generators(self, resource: ResourceT) -> list[GeneratorDefinition]:
        """Definitions всех активных генераторов ресурса (порядок не определён)."""
        return [
            generator.definition
            for generator in self._active_generators.values()
            if generator.resource == resource
        ]

    def get_count(self, definition: GeneratorDefinition) -> Optional[ValueT]:
        """Текущее количество активного генератора или None."""
        generator = self._active_generators.get(id(definition))
        return None if generator is None else generator.count

    def is_dirty(self, resource: ResourceT) -> bool:
        """True если кэш ресурса устарел и будет пересчитан при generate."""
        return resource in self._dirty_resources

    # -------------------------------------------------------------------------
    # Генерация
    # -------------------------------------------------------------------------

    def generate(self, resource: ResourceT) -> ValueT:
        """Производство ресурса с использованием кэша.

        Ресурс, который ни разу не считался и не помечен dirty, даёт zero.
        Для принудительного пересчёта используйте generate_without_cache.
        """
        if resource in self._dirty_resources:
            return self.generate_without_cache(resource)

        if self.config.track_stats:
            self.stats.hits += 1
        return self._cached_generation.get(resource, self.policy.zero)

    def generate_without_cache(self, resource: ResourceT) -> ValueT:
        """Пересчёт производства ресурса с нуля; обновляет кэш и снимает dirty.

        Raises:
            InvalidGeneratorStateError: если у генератора неизвестное правило
        """
        math = self.policy

        flat = math.zero
        mult = math.zero
        exp = math.one
        magnitude = 0

        for generator in self._active_generators.values():
            if generator.resource != resource:
                continue

            rule = generator.rule

            if rule == CombinationRule.FLAT:
                flat = math.add(flat, math.multiply(generator.value, generator.count))

            elif rule == CombinationRule.LINEAR_MULTIPLIER:
                mult = math.add(mult, math.multiply(generator.value, generator.count))

            elif rule == CombinationRule.GEOMETRIC_MULTIPLIER:
                # Первый геометрический множитель начинает с 1, а не с 0
                if math.equals(mult, math.zero):
                    mult = math.one

                for _ in range(math.as_int(generator.count)):
                    mult = math.multiply(mult, generator.value)

            elif rule == CombinationRule.EXPONENTIAL:
                exp = math.add(exp, math.multiply(generator.value, generator.count))

            elif rule == CombinationRule.MAGNITUDE:
                magnitude += math.as_int(math.multiply(generator.value, generator.count))

            else:
                raise InvalidGeneratorStateError(
                    f"Unknown combination rule {rule!r} in generator "
                    f"{generator.definition.name or '<unnamed>'} for resource {resource!r}"
                )

        result = flat
        # Нетронутый множитель не обнуляет flat
        result = math.multiply(result, math.one if math.equals(mult, math.zero) else mult)
        # Степень только если exp > 1: power(x, 1.0) может терять точность
        if math.compare(exp, math.one) > 0:
            result = math.power(result, math.as_float(exp))
        result = math.shift_magnitude(result, magnitude)

        self._cached_generation[resource] = result
        self._dirty_resources.discard(resource)

        if self.config.track_stats:
            self.stats.recomputations += 1
        if self.config.log_recomputations:
            logger.debug(
                "Recomputed %r: flat=%s mult=%s exp=%s magnitude=%d -> %s",
                resource, flat, mult, exp, magnitude, result,
            )

        return result
