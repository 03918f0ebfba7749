"""
Numeric Policy — подключаемая арифметика для движка генерации

Движок ресурсов не знает, как устроено значение (float32, int, decimal, big number).
Вся арифметика, сравнение и проекции выполняются через объект политики:
- zero / one — канонические нейтральные элементы
- add / subtract / multiply / divide
- power(a, exponent: float) — возведение в дробную степень
- shift_magnitude(a, shift: int) — умножение на 10**shift
- equals / compare — равенство (приближённое для float) и упорядочивание
- as_float / as_int — lossy-проекции для счётчиков циклов и magnitude

Встроенные политики:
- Float32Policy — IEEE-754 single precision (numpy.float32)
- IntPolicy — машинные 32-битные целые (power/shift через float, затем усечение)

Выбор политики явный: экземпляр, именованный preset ("float32", "int")
или таблица типов для двух встроенных типов значений.

ИЗВЕСТНОЕ ОГРАНИЧЕНИЕ:
power() насыщается/переполняется на границах представления (inf для float32,
INT32_MAX/INT32_MIN для int). Защита от этого намеренно не выполняется.
"""

from abc import ABC, abstractmethod
from typing import Any, Final, Generic, TypeVar

import numpy as np

from src.core.math.numerical_safeguards import (
    INT32_MAX,
    INT32_MIN,
    approximately,
    compare_floats,
    saturate_int32,
    to_float32,
)

V = TypeVar("V")

# Десятичных разрядов в INT32_MAX (2147483647)
INT32_DECIMAL_DIGITS: Final[int] = 10


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedValueTypeError(TypeError):
    """
    Для типа значения нет встроенной числовой политики.

    Возникает при создании движка по типу значения (или по имени preset),
    если политика не найдена. Движок при этом не создаётся.
    """

    def __init__(self, value_type: Any):
        self.value_type = value_type
        type_name = getattr(value_type, "__name__", repr(value_type))
        super().__init__(
            f"No built-in numeric policy for value type {type_name!r}. "
            f"Supply a custom NumericPolicy implementation for this type "
            f"(or register one with register_policy())."
        )


class UnknownPresetError(UnsupportedValueTypeError):
    """Именованный preset не зарегистрирован."""

    def __init__(self, name: str):
        self.value_type = name
        TypeError.__init__(
            self,
            f"Unknown numeric policy preset {name!r}. "
            f"Available presets: {', '.join(available_presets())}; "
            f"register a custom NumericPolicy with register_policy().",
        )


# =============================================================================
# КОНТРАКТ
# =============================================================================


class NumericPolicy(ABC, Generic[V]):
    """
    Контракт арифметики над непрозрачным типом значения V.

    Реализации должны быть stateless: один экземпляр политики может
    разделяться любым количеством движков.
    """

    value_type: type = object

    @property
    @abstractmethod
    def zero(self) -> V: ...

    @property
    @abstractmethod
    def one(self) -> V: ...

    @abstractmethod
    def coerce(self, raw: Any) -> V:
        """Приведение обычного числа Python к представлению политики."""

    @abstractmethod
    def add(self, a: V, b: V) -> V: ...

    @abstractmethod
    def subtract(self, a: V, b: V) -> V: ...

    @abstractmethod
    def multiply(self, a: V, b: V) -> V: ...

    @abstractmethod
    def divide(self, a: V, b: V) -> V: ...

    @abstractmethod
    def power(self, a: V, exponent: float) -> V:
        """a ** exponent. Насыщается на границах представления."""

    @abstractmethod
    def shift_magnitude(self, a: V, shift: int) -> V:
        """a * 10 ** shift (shift может быть отрицательным)."""

    @abstractmethod
    def equals(self, a: V, b: V) -> bool: ...

    @abstractmethod
    def compare(self, a: V, b: V) -> int:
        """-1 если a < b, 0 если a == b, +1 если a > b."""

    @abstractmethod
    def as_float(self, a: V) -> float: ...

    @abstractmethod
    def as_int(self, a: V) -> int:
        """Проекция в int с усечением к нулю."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# =============================================================================
# ВСТРОЕННЫЕ ПОЛИТИКИ
# =============================================================================


class Float32Policy(NumericPolicy[np.float32]):
    """
    IEEE-754 single precision.

    Все результаты — numpy.float32. Переполнение даёт ±inf без warning,
    равенство приближённое (см. numerical_safeguards.approximately).
    """

    value_type = np.float32

    @property
    def zero(self) -> np.float32:
        return np.float32(0.0)

    @property
    def one(self) -> np.float32:
        return np.float32(1.0)

    def coerce(self, raw: Any) -> np.float32:
        return to_float32(raw)

    def add(self, a, b) -> np.float32:
        with np.errstate(over="ignore", invalid="ignore"):
            return to_float32(a) + to_float32(b)

    def subtract(self, a, b) -> np.float32:
        with np.errstate(over="ignore", invalid="ignore"):
            return to_float32(a) - to_float32(b)

    def multiply(self, a, b) -> np.float32:
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            return to_float32(a) * to_float32(b)

    def divide(self, a, b) -> np.float32:
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            return to_float32(a) / to_float32(b)

    def power(self, a, exponent: float) -> np.float32:
        with np.errstate(over="ignore", under="ignore", invalid="ignore", divide="ignore"):
            return np.power(to_float32(a), to_float32(exponent))

    def shift_magnitude(self, a, shift: int) -> np.float32:
        with np.errstate(over="ignore", under="ignore", invalid="ignore"):
            scale = np.power(np.float32(10.0), np.float32(shift))
            return to_float32(a) * scale

    def equals(self, a, b) -> bool:
        return approximately(to_float32(a), to_float32(b))

    def compare(self, a, b) -> int:
        return compare_floats(to_float32(a), to_float32(b))

    def as_float(self, a) -> float:
        return float(to_float32(a))

    def as_int(self, a) -> int:
        return saturate_int32(to_float32(a))


class IntPolicy(NumericPolicy[int]):
    """
    Машинные 32-битные целые.

    Сложение/вычитание/умножение насыщаются в диапазон int32.
    power() и shift_magnitude() с отрицательным сдвигом считаются через float64
    и усекаются к нулю; сдвиг больше 10 разрядов сразу насыщается.
    Деление — целочисленное с усечением к нулю (деление на ноль → ZeroDivisionError).
    Равенство точное.
    """

    value_type = int

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def coerce(self, raw: Any) -> int:
        return saturate_int32(raw)

    def add(self, a, b) -> int:
        return saturate_int32(int(a) + int(b))

    def subtract(self, a, b) -> int:
        return saturate_int32(int(a) - int(b))

    def multiply(self, a, b) -> int:
        return saturate_int32(int(a) * int(b))

    def divide(self, a, b) -> int:
        a, b = int(a), int(b)
        if b == 0:
            raise ZeroDivisionError("IntPolicy.divide: division by zero")

        quotient = abs(a) // abs(b)
        if (a < 0) != (b < 0):
            quotient = -quotient
        return saturate_int32(quotient)

    def power(self, a, exponent: float) -> int:
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            result = np.power(np.float64(int(a)), np.float64(exponent))
        return saturate_int32(result)

    def shift_magnitude(self, a, shift: int) -> int:
        a, shift = int(a), int(shift)
        if a == 0:
            return 0

        if shift >= 0:
            # |a| >= 1, а int32 помещается в 10 десятичных разрядов
            if shift > INT32_DECIMAL_DIGITS:
                return INT32_MAX if a > 0 else INT32_MIN
            return saturate_int32(a * 10 ** shift)

        with np.errstate(under="ignore"):
            result = np.float64(a) * np.power(np.float64(10.0), np.float64(shift))
        return saturate_int32(result)

    def equals(self, a, b) -> bool:
        return int(a) == int(b)

    def compare(self, a, b) -> int:
        a, b = int(a), int(b)
        return (a > b) - (a < b)

    def as_float(self, a) -> float:
        return float(int(a))

    def as_int(self, a) -> int:
        return saturate_int32(a)


# =============================================================================
# PRESETS
# =============================================================================

PRESET_FLOAT32: Final[str] = "float32"
PRESET_INT: Final[str] = "int"

_BUILTIN_POLICIES: Final[dict[str, NumericPolicy]] = {
    PRESET_FLOAT32: Float32Policy(),
    PRESET_INT: IntPolicy(),
}

_PRESETS: dict[str, NumericPolicy] = dict(_BUILTIN_POLICIES)

# Явная таблица типов значений → preset (без рефлексии)
_TYPE_PRESETS: dict[type, str] = {
    float: PRESET_FLOAT32,
    np.float32: PRESET_FLOAT32,
    int: PRESET_INT,
    np.int32: PRESET_INT,
}


def get_policy(name: str) -> NumericPolicy:
    """
    Политика по имени preset.

    Raises:
        UnknownPresetError: если preset не зарегистрирован
    """
    try:
        return _PRESETS[name]
    except KeyError:
        raise UnknownPresetError(name) from None


def register_policy(name: str, policy: NumericPolicy) -> None:
    """
    Регистрация пользовательской политики как именованного preset.

    Повторная регистрация пользовательского имени заменяет предыдущую политику.
    Встроенные presets ("float32", "int") переопределить нельзя.

    Raises:
        ValueError: если имя пустое или совпадает со встроенным preset
        TypeError: если policy не реализует NumericPolicy
    """
    if not name:
        raise ValueError("preset name must be a non-empty string")
    if name in _BUILTIN_POLICIES:
        raise ValueError(f"built-in preset {name!r} cannot be re-registered")
    if not isinstance(policy, NumericPolicy):
        raise TypeError(
            f"policy must implement NumericPolicy, got {type(policy).__name__}"
        )
    _PRESETS[name] = policy


def policy_for_type(value_type: type) -> NumericPolicy:
    """
    Встроенная политика для типа значения.

    Поддерживаются только float/numpy.float32 и int/numpy.int32.

    Raises:
        UnsupportedValueTypeError: для любого другого типа
    """
    preset = _TYPE_PRESETS.get(value_type)
    if preset is None:
        raise UnsupportedValueTypeError(value_type)
    return _BUILTIN_POLICIES[preset]


def available_presets() -> list[str]:
    """Имена зарегистрированных presets (отсортированы)."""
    return sorted(_PRESETS)
