"""
MathBackend — контракт числового backend'а

Каждый backend объявляет:
- предикат поддержки типа операции (INT/FLOAT)
- предикат доступности (установлена ли runtime-библиотека)
- полный набор операций как типизированные методы

Операции, которые backend не реализует, по умолчанию падают с
UnsupportedOperation("Not a valid library for <operation>").
Адаптер вызывает методы напрямую и оборачивает исход в BackendResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib.util import find_spec
from typing import Callable, ClassVar, Generic, TypeVar

from src.core.domain.operation import OperationType
from src.core.errors import MathError, UnsupportedOperation

T = TypeVar("T")


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class BackendResult(Generic[T]):
    """Исход вызова одной операции на одном backend'е."""

    backend: str
    operation: str
    value: T | None = None
    error: MathError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def capture(
        cls, backend: "MathBackend", operation: str, call: Callable[[], T]
    ) -> "BackendResult[T]":
        """
        Выполнение вызова с фиксацией успеха или ошибки.

        MathError сохраняет свой класс, остальные исключения оборачиваются
        в UnsupportedOperation. Сообщение получает префикс "<backend>.<operation>",
        исходное исключение сохраняется в __cause__.
        """
        try:
            return cls(backend=backend.name, operation=operation, value=call())
        except Exception as exc:
            error_cls = type(exc) if isinstance(exc, MathError) else UnsupportedOperation
            error = error_cls(f"{backend.name}.{operation}: {exc}")
            error.__cause__ = exc
            return cls(backend=backend.name, operation=operation, error=error)


# =============================================================================
# BACKEND CONTRACT
# =============================================================================


class MathBackend(ABC):
    """
    Базовый класс числового backend'а.

    Все операнды — десятичный текст, все арифметические результаты —
    десятичный текст, предикаты возвращают bool.
    """

    # Короткое имя backend'а (для логов и сообщений об ошибках)
    name: ClassVar[str] = "backend"

    # Модуль, наличие которого означает доступность backend'а (None — всегда доступен)
    runtime_module: ClassVar[str | None] = None

    @abstractmethod
    def supports_operation_type(self, operation_type: OperationType) -> bool:
        """True если backend выполняет операции данного типа"""

    def is_enabled(self) -> bool:
        """True если runtime-библиотека backend'а доступна"""
        if self.runtime_module is None:
            return True
        return find_spec(self.runtime_module) is not None

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("add")

    def subtract(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("subtract")

    def multiply(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("multiply")

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("divide")

    def compare(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("compare")

    def modulo(self, operand: str, divided_by: str, precision: int = 0) -> str:
        raise self._unsupported("modulo")

    def power(self, left: str, right: str, precision: int = 0) -> str:
        raise self._unsupported("power")

    def square_root(self, operand: str, precision: int = 0) -> str:
        raise self._unsupported("square_root")

    def absolute(self, operand: str) -> str:
        raise self._unsupported("absolute")

    def negate(self, operand: str) -> str:
        raise self._unsupported("negate")

    # -------------------------------------------------------------------------
    # Теория чисел и специальные функции
    # -------------------------------------------------------------------------

    def factorial(self, operand: str) -> str:
        raise self._unsupported("factorial")

    def gcd(self, left: str, right: str) -> str:
        raise self._unsupported("gcd")

    def root(self, operand: str, nth: int) -> str:
        raise self._unsupported("root")

    def next_prime(self, operand: str) -> str:
        raise self._unsupported("next_prime")

    def is_prime(self, operand: str, reps: int = 10) -> bool:
        raise self._unsupported("is_prime")

    def is_perfect_square(self, operand: str, precision: int = 0) -> bool:
        raise self._unsupported("is_perfect_square")

    def gamma(self, operand: str) -> str:
        raise self._unsupported("gamma")

    def log_gamma(self, operand: str) -> str:
        raise self._unsupported("log_gamma")

    def _unsupported(self, operation: str) -> UnsupportedOperation:
        return UnsupportedOperation(f"Not a valid library for {operation}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
