"""
Core math modules для Resgen

Числовые примитивы и подключаемые политики арифметики.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    FLOAT32_COMPARE_ABS,
    FLOAT32_COMPARE_REL,
    INT32_MAX,
    INT32_MIN,
    # Float32
    approximately,
    compare_floats,
    to_float32,
    # Saturation
    clamp,
    saturate_int32,
)

# Numeric Policy
from src.core.math.numeric_policy import (
    PRESET_FLOAT32,
    PRESET_INT,
    Float32Policy,
    IntPolicy,
    NumericPolicy,
    UnsupportedValueTypeError,
    UnknownPresetError,
    available_presets,
    get_policy,
    policy_for_type,
    register_policy,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "FLOAT32_COMPARE_ABS",
    "FLOAT32_COMPARE_REL",
    "INT32_MAX",
    "INT32_MIN",
    # Numerical Safeguards — Float32
    "approximately",
    "compare_floats",
    "to_float32",
    # Numerical Safeguards — Saturation
    "clamp",
    "saturate_int32",
    # Numeric Policy — Presets
    "PRESET_FLOAT32",
    "PRESET_INT",
    # Numeric Policy — Types
    "NumericPolicy",
    "Float32Policy",
    "IntPolicy",
    # Numeric Policy — Exceptions
    "UnsupportedValueTypeError",
    "UnknownPresetError",
    # Numeric Policy — Functions
    "available_presets",
    "get_policy",
    "policy_for_type",
    "register_policy",
]
