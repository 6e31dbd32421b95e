"""
MathAdapterConfig — конфигурация арифметического адаптера

Immutable Pydantic модель. Задаётся один раз при конструировании адаптера
и больше не меняется.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from .operation import RoundingStrategy


# =============================================================================
# CONSTANTS
# =============================================================================

# Имена backend'ов, которые умеет собирать фабрика адаптера
KNOWN_BACKENDS: Final[tuple[str, ...]] = ("decimal", "big_integer", "native")

# Порядок по умолчанию (по убыванию приоритета)
DEFAULT_BACKENDS: Final[tuple[str, ...]] = KNOWN_BACKENDS


# =============================================================================
# CONFIG MODEL
# =============================================================================


class MathAdapterConfig(BaseModel):
    """
    Конфигурация MathAdapter.

    rounding_strategy валидируется против закрытого множества RoundingStrategy,
    backends — против KNOWN_BACKENDS.
    """

    rounding_strategy: RoundingStrategy = Field(
        RoundingStrategy.HALF_UP, description="Правило округления для float-вычислений"
    )
    backends: tuple[str, ...] = Field(
        DEFAULT_BACKENDS, description="Имена backend'ов в порядке приоритета"
    )

    model_config = {"frozen": True}

    @field_validator("backends")
    @classmethod
    def validate_backends(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Список непустой и состоит только из известных имён"""
        if not v:
            raise ValueError("backends must not be empty")
        unknown = [name for name in v if name not in KNOWN_BACKENDS]
        if unknown:
            raise ValueError(f"unknown backends: {unknown}, expected one of {list(KNOWN_BACKENDS)}")
        return v
