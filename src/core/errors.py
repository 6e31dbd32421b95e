"""
Errors — иерархия исключений арифметического слоя

Все исключения наследуются от MathError, чтобы вызывающий код мог
перехватить любую ошибку слоя одним except.

Таксономия:
- InvalidOperand: операнд не является числом (или вне домена функции)
- DivisionByZero: явная проверка знаменателя "0"
- UnsupportedOperation: backend не умеет операцию или упал внутри
- InvalidPrecondition: factorial/gcd/root на отрицательных/дробных операндах
- UnknownError: ни один backend не попытался выполнить операцию
- ConfigurationError: невалидная конфигурация адаптера
"""


class MathError(Exception):
    """Базовый класс для всех ошибок арифметического слоя."""


class InvalidOperand(MathError):
    """Операнд не является валидным числом."""


class DivisionByZero(MathError, ZeroDivisionError):
    """Деление на "0" (проверяется до обращения к backend'ам)."""


class UnsupportedOperation(MathError):
    """Backend не поддерживает операцию (или упал при её выполнении)."""


class InvalidPrecondition(MathError):
    """Нарушено предусловие: операнды должны быть целыми и неотрицательными."""


class UnknownError(MathError):
    """Цепочка backend'ов исчерпана без зафиксированной ошибки."""


class ConfigurationError(MathError):
    """Невалидная конфигурация: rounding strategy или список backend'ов."""


__all__ = [
    "MathError",
    "InvalidOperand",
    "DivisionByZero",
    "UnsupportedOperation",
    "InvalidPrecondition",
    "UnknownError",
    "ConfigurationError",
]
