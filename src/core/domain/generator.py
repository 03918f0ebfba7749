"""
Generator — Модели генераторов ресурсов

Генератор описывает вклад в производство одного ресурса:
- rule: правило комбинирования (Flat, LinearMultiplier, GeometricMultiplier,
  Exponential, Magnitude)
- resource: ключ ресурса (член enum, предоставленного интеграцией)
- per_unit_value: значение на одну единицу генератора (непрозрачное число,
  арифметика только через NumericPolicy)

GeneratorDefinition — immutable Pydantic модель (принадлежит конфигурации).
GeneratorInstance — изменяемая привязка definition к количеству внутри движка.

ВАЖНО: движок идентифицирует definitions по identity объекта, а не по
равенству полей. Две definitions с одинаковыми полями — разные генераторы.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class CombinationRule(str, Enum):
    """Правило, по которому генератор участвует в итоговом производстве."""

    # Добавляет фиксированное количество: base += value * count
    FLAT = "flat"
    # Множители суммируются перед применением: base * (m1 + m2 + ...)
    LINEAR_MULTIPLIER = "linear_multiplier"
    # Множители перемножаются перед применением: base * (m1 * m2 * ...)
    GEOMETRIC_MULTIPLIER = "geometric_multiplier"
    # Возводит результат в степень
    EXPONENTIAL = "exponential"
    # Сдвигает десятичный порядок результата; значения трактуются как int
    MAGNITUDE = "magnitude"

    @property
    def symbol(self) -> str:
        """Символ правила для отображения в UI."""
        return RULE_SYMBOLS[self]


RULE_SYMBOLS: Final[dict[CombinationRule, str]] = {
    CombinationRule.FLAT: "+",
    CombinationRule.LINEAR_MULTIPLIER: "*",
    CombinationRule.GEOMETRIC_MULTIPLIER: "**",
    CombinationRule.EXPONENTIAL: "^",
    CombinationRule.MAGNITUDE: ">",
}


def rule_symbol(rule: Any) -> str:
    """
    Символ правила комбинирования.

    Raises:
        ValueError: если rule не является членом CombinationRule
    """
    try:
        return RULE_SYMBOLS[CombinationRule(rule)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown combination rule: {rule!r}") from None


# =============================================================================
# GENERATOR DEFINITION
# =============================================================================


class GeneratorDefinition(BaseModel):
    """
    Описание одного вида генератора.

    Immutable модель (frozen=True): движок только читает rule, resource и
    per_unit_value, но никогда их не изменяет.
    """

    rule: CombinationRule = Field(..., description="Правило комбинирования")
    resource: Any = Field(..., description="Ресурс (член enum интеграции)")
    per_unit_value: Any = Field(..., description="Значение на единицу генератора")
    name: str = Field(default="", description="Отображаемое имя (optional)")

    model_config = {"frozen": True}

    @field_validator("resource")
    @classmethod
    def validate_resource(cls, v: Any) -> Any:
        """Ресурс должен быть членом Enum (используется как ключ словаря)."""
        if not isinstance(v, Enum):
            raise ValueError(
                f"resource must be an Enum member, got {type(v).__name__}"
            )
        return v

    @field_validator("per_unit_value")
    @classmethod
    def validate_value_present(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("per_unit_value must not be None")
        return v

    def describe(self) -> str:
        """
        Строка для отображения: "<symbol><value> <resource>".

        Examples:
            "+5 GOLD", "**3 GOLD", ">2 GOLD"
        """
        label = f"{self.rule.symbol}{self.per_unit_value} {self.resource.name}"
        if self.name:
            return f"{self.name} ({label})"
        return label


# =============================================================================
# GENERATOR INSTANCE
# =============================================================================


@dataclass(eq=False)
class GeneratorInstance:
    """
    Активный генератор внутри движка: definition + текущее количество.

    count изменяется только движком (add/remove).
    """

    definition: GeneratorDefinition
    count: Any

    @property
    def resource(self) -> Any:
        return self.definition.resource

    @property
    def value(self) -> Any:
        return self.definition.per_unit_value

    @property
    def rule(self) -> CombinationRule:
        return self.definition.rule
