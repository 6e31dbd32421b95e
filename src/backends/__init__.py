"""
Numeric backends — взаимозаменяемые вычислительные движки

Порядок по умолчанию (по убыванию приоритета):
1. DecimalBackend — точная десятичная арифметика (decimal)
2. BigIntegerBackend — целые числа произвольной длины (gmpy2)
3. NativeBackend — резервный backend на int/float, всегда доступен
"""

from src.backends.base import BackendResult, MathBackend
from src.backends.big_integer_backend import BigIntegerBackend
from src.backends.decimal_backend import DecimalBackend
from src.backends.native_backend import NativeBackend
from src.core.domain.config import DEFAULT_BACKENDS
from src.core.domain.operation import RoundingStrategy
from src.core.errors import ConfigurationError


def build_backend(name: str, rounding_strategy: RoundingStrategy) -> MathBackend:
    """
    Создание backend'а по имени.

    Args:
        name: Имя backend'а ("decimal", "big_integer", "native")
        rounding_strategy: Правило округления для backend'ов, которым оно нужно

    Raises:
        ConfigurationError: если имя неизвестно
    """
    if name == DecimalBackend.name:
        return DecimalBackend(rounding_strategy)
    if name == BigIntegerBackend.name:
        return BigIntegerBackend()
    if name == NativeBackend.name:
        return NativeBackend(rounding_strategy)
    raise ConfigurationError(f"Unknown backend: {name}")


def default_backends(rounding_strategy: RoundingStrategy) -> list[MathBackend]:
    """Backend'ы по умолчанию в порядке приоритета."""
    return [build_backend(name, rounding_strategy) for name in DEFAULT_BACKENDS]


__all__ = [
    "BackendResult",
    "MathBackend",
    "DecimalBackend",
    "BigIntegerBackend",
    "NativeBackend",
    "build_backend",
    "default_backends",
]
