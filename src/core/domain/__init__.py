"""
Domain models and value objects.

Contains the generator entities consumed by the production engine.
"""

from src.core.domain.generator import (
    RULE_SYMBOLS,
    CombinationRule,
    GeneratorDefinition,
    GeneratorInstance,
    rule_symbol,
)

__all__ = [
    # Generator model
    "CombinationRule",
    "GeneratorDefinition",
    "GeneratorInstance",
    "RULE_SYMBOLS",
    "rule_symbol",
]
