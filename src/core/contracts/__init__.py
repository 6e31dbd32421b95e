"""
Contract Validation Module

Модуль для валидации конфигурационных контрактов арифметического слоя.
"""

from .validators import (
    ContractValidator,
    MathAdapterConfigValidator,
    SchemaLoader,
    validate_math_adapter_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MathAdapterConfigValidator",
    # Functions
    "validate_math_adapter_config",
]
