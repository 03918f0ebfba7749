"""
Numerical Safeguards — примитивы для политик арифметики

Модуль содержит численные примитивы, общие для встроенных числовых политик:
- Округление к IEEE-754 single precision (float32)
- Приближённое сравнение float32 (аналог "approximately" для single precision)
- Насыщение (saturation) целых чисел в 32-битный диапазон

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Проекция в int никогда не бросает исключение (NaN → 0, ±Inf → границы int32)
2. Приближённое сравнение симметрично: approximately(a, b) == approximately(b, a)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для сравнения float32
# abs(a - b) < FLOAT32_COMPARE_REL * max(abs(a), abs(b))
FLOAT32_COMPARE_REL: Final[float] = 1e-6

# Абсолютная толерантность около нуля: 8 * наименьший денормализованный float32
FLOAT32_COMPARE_ABS: Final[float] = float(np.finfo(np.float32).smallest_subnormal) * 8.0

# Границы 32-битного целого
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1


# =============================================================================
# FLOAT32
# =============================================================================


def to_float32(value: float) -> np.float32:
    """
    Округление значения к IEEE-754 single precision.

    Значения за пределами диапазона float32 становятся ±Inf (без warning).

    Examples:
        >>> float(to_float32(0.1)) == 0.1
        False
        >>> float(to_float32(1e39))
        inf
    """
    with np.errstate(over="ignore"):
        return np.float32(value)


def approximately(
    a: float,
    b: float,
    rel_tol: float = FLOAT32_COMPARE_REL,
    abs_tol: float = FLOAT32_COMPARE_ABS,
) -> bool:
    """
    Приближённое сравнение двух float32.

    Алгоритм:
        abs(b - a) < max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Точное совпадение (включая равные бесконечности) всегда True.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-6)
        abs_tol: Абсолютная толерантность (default: 8 * smallest subnormal)

    Returns:
        True если значения близки с учётом толерантности

    Examples:
        >>> approximately(0.8, 0.5 + 0.3)
        True
        >>> approximately(1.0, 1.001)
        False
        >>> approximately(0.0, 1e-44)
        True
    """
    a = float(a)
    b = float(b)

    if a == b:
        return True

    return abs(b - a) < max(rel_tol * max(abs(a), abs(b)), abs_tol)


def compare_floats(a: float, b: float) -> int:
    """
    Строгое трёхзначное сравнение float.

    Returns:
        -1 если a < b
         0 если a == b
        +1 если a > b

    NaN сравнивается как меньшее значение, чтобы результат был тотальным.
    """
    a = float(a)
    b = float(b)

    if a < b:
        return -1
    if a > b:
        return 1
    if a == b:
        return 0

    # Хотя бы один NaN
    if math.isnan(a) and math.isnan(b):
        return 0
    return -1 if math.isnan(a) else 1


# =============================================================================
# НАСЫЩЕНИЕ И ПРОЕКЦИИ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def saturate_int32(value: float) -> int:
    """
    Проекция числа в 32-битный int с усечением к нулю и насыщением.

    - Дробная часть отбрасывается (truncation toward zero)
    - Значения за границами int32 прижимаются к INT32_MIN / INT32_MAX
    - +Inf → INT32_MAX, -Inf → INT32_MIN, NaN → 0

    Examples:
        >>> saturate_int32(2.9)
        2
        >>> saturate_int32(-2.9)
        -2
        >>> saturate_int32(float("inf"))
        2147483647
    """
    if isinstance(value, (int, np.integer)):
        return int(clamp(int(value), INT32_MIN, INT32_MAX))

    value = float(value)

    if math.isnan(value):
        return 0
    if math.isinf(value):
        return INT32_MAX if value > 0 else INT32_MIN

    return int(clamp(math.trunc(value), INT32_MIN, INT32_MAX))
