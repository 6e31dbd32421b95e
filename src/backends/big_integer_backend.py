"""
BigIntegerBackend — точная целочисленная арифметика (gmpy2 / GMP)

Прямое отображение операций на примитивы GMP: арифметика, факториал, НОД,
целый корень n-й степени, следующее простое, вероятностный тест простоты
(Миллер–Рабин с reps повторениями), проверка на полный квадрат.

Поддерживает только INT операции: для FLOAT адаптер этот backend пропускает.
Операнды, не являющиеся целыми, отвергаются gmpy2 (ValueError), что
адаптер трактует как "перейти к следующему backend'у".

Гамма-функции не поддерживаются.
"""

from importlib import import_module
from types import ModuleType
from typing import ClassVar

from src.backends.base import MathBackend
from src.core.domain.operation import OperationType
from src.core.errors import UnsupportedOperation


class BigIntegerBackend(MathBackend):
    """Backend целочисленной арифметики произвольной длины."""

    name: ClassVar[str] = "big_integer"
    runtime_module: ClassVar[str | None] = "gmpy2"

    @property
    def gmp(self) -> ModuleType:
        """Модуль gmpy2 (импортируется при первом обращении)."""
        return import_module(self.runtime_module)

    def supports_operation_type(self, operation_type: OperationType) -> bool:
        # Только INT
        return operation_type is not OperationType.FLOAT

    def _mpz(self, operand: str):
        return self.gmp.mpz(operand.strip())

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, left: str, right: str, precision: int = 0) -> str:
        return str(self._mpz(left) + self._mpz(right))

    def subtract(self, left: str, right: str, precision: int = 0) -> str:
        return str(self._mpz(left) - self._mpz(right))

    def multiply(self, left: str, right: str, precision: int = 0) -> str:
        return str(self._mpz(left) * self._mpz(right))

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        try:
            a, b = self._mpz(left), self._mpz(right)
        except ValueError as exc:
            raise UnsupportedOperation("Big integer backend can only divide integers.") from exc

        # Частное с усечением к нулю
        return str(self.gmp.t_div(a, b))

    def compare(self, left: str, right: str, precision: int = 0) -> str:
        a, b = self._mpz(left), self._mpz(right)
        return str((a > b) - (a < b))

    def modulo(self, operand: str, divided_by: str, precision: int = 0) -> str:
        # Остаток всегда неотрицательный
        return str(self._mpz(operand) % abs(self._mpz(divided_by)))

    def power(self, left: str, right: str, precision: int = 0) -> str:
        exponent = int(self._mpz(right))
        if exponent < 0:
            raise UnsupportedOperation("Big integer backend cannot raise to a negative power.")
        return str(self._mpz(left) ** exponent)

    def square_root(self, operand: str, precision: int = 0) -> str:
        return str(self.gmp.isqrt(self._mpz(operand)))

    def absolute(self, operand: str) -> str:
        return str(abs(self._mpz(operand)))

    def negate(self, operand: str) -> str:
        return str(-self._mpz(operand))

    # -------------------------------------------------------------------------
    # Теория чисел
    # -------------------------------------------------------------------------

    def factorial(self, operand: str) -> str:
        return str(self.gmp.fac(self._mpz(operand)))

    def gcd(self, left: str, right: str) -> str:
        return str(self.gmp.gcd(self._mpz(left), self._mpz(right)))

    def root(self, operand: str, nth: int) -> str:
        root, _exact = self.gmp.iroot(self._mpz(operand), nth)
        return str(root)

    def next_prime(self, operand: str) -> str:
        return str(self.gmp.next_prime(self._mpz(operand)))

    def is_prime(self, operand: str, reps: int = 10) -> bool:
        return bool(self.gmp.is_prime(self._mpz(operand), reps))

    def is_perfect_square(self, operand: str, precision: int = 0) -> bool:
        return bool(self.gmp.is_square(self._mpz(operand)))
