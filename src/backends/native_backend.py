"""
NativeBackend — резервный backend на встроенных int/float

Всегда доступен и поддерживает INT и FLOAT операции. Единственный backend,
реализующий гамма-функцию, log-гамму, факториал дробного аргумента,
НОД десятичных операндов и пробное деление для простых чисел.

Семантика:
- add/subtract/multiply: при precision == 0 — целочисленная арифметика над
  целыми частями операндов, иначе float с округлением до precision
- divide: при пустой дробной части результата и precision > 0 к тексту
  добавляется ".0" (маркер float в текстовом интерфейсе)
- compare: версионные операнды сравниваются покомпонентно
- float-результаты выводятся с 14 значащими цифрами

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. root не поддерживается (целый корень n-й степени — только BigIntegerBackend)
2. gamma(x) определена для 0 < x ≤ 171.624
3. reps в is_prime принимается, но не используется (тест детерминированный)
"""

import math
from typing import ClassVar

from src.backends.base import MathBackend
from src.core.domain.operation import OperationType, RoundingStrategy
from src.core.errors import UnsupportedOperation
from src.core.math import gamma as gamma_kernels
from src.core.math import number_theory
from src.core.math.decimal_text import (
    compare_versions,
    get_number_precision,
    has_precision,
    is_version_like,
    render_decimal,
    render_float,
    render_int,
    render_number,
    round_float,
    to_decimal,
    to_int,
)


class NativeBackend(MathBackend):
    """
    Резервный backend на встроенных числовых типах.

    Поддерживает INT и FLOAT операции, всегда включён.
    """

    name: ClassVar[str] = "native"
    runtime_module: ClassVar[str | None] = None

    def __init__(self, rounding_strategy: RoundingStrategy = RoundingStrategy.HALF_UP):
        """
        Args:
            rounding_strategy: Правило округления float-результатов
        """
        self.rounding_strategy = rounding_strategy

    def supports_operation_type(self, operation_type: OperationType) -> bool:
        # INT и FLOAT
        return True

    def _round(self, value: float, precision: int) -> str:
        return render_float(round_float(value, precision, self.rounding_strategy))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, left: str, right: str, precision: int = 0) -> str:
        if precision == 0:
            return render_int(to_int(left) + to_int(right))
        return self._round(float(left) + float(right), precision)

    def subtract(self, left: str, right: str, precision: int = 0) -> str:
        if precision == 0:
            return render_int(to_int(left) - to_int(right))
        return self._round(float(left) - float(right), precision)

    def multiply(self, left: str, right: str, precision: int = 0) -> str:
        if precision == 0:
            return render_int(to_int(left) * to_int(right))
        return self._round(float(left) * float(right), precision)

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        if precision == 0:
            numerator, denominator = to_int(left), to_int(right)
            if numerator % denominator == 0:
                quotient = render_number(numerator // denominator)
            else:
                quotient = render_float(numerator / denominator)
        else:
            quotient = self._round(float(left) / float(right), precision)

        # Пустая дробная часть при ненулевой точности: сохраняем маркер float
        if get_number_precision(quotient) == 0 and precision != 0:
            return quotient + ".0"

        return quotient

    def compare(self, left: str, right: str, precision: int = 0) -> str:
        if is_version_like(left, right):
            return str(compare_versions(left, right))

        a, b = to_decimal(left), to_decimal(right)
        return str((a > b) - (a < b))

    def modulo(self, operand: str, divided_by: str, precision: int = 0) -> str:
        return self._round(math.fmod(float(operand), float(divided_by)), precision)

    def power(self, left: str, right: str, precision: int = 0) -> str:
        return self._round(math.pow(float(left), float(right)), precision)

    def square_root(self, operand: str, precision: int = 0) -> str:
        return self._round(math.sqrt(float(operand)), precision)

    def absolute(self, operand: str) -> str:
        if has_precision(operand):
            return render_float(abs(float(operand)))
        return render_int(abs(to_int(operand)))

    def negate(self, operand: str) -> str:
        if has_precision(operand):
            return render_float(-float(operand))
        return render_int(-to_int(operand))

    # -------------------------------------------------------------------------
    # Теория чисел
    # -------------------------------------------------------------------------

    def factorial(self, operand: str) -> str:
        if not has_precision(operand):
            return render_int(number_theory.factorial(to_int(operand)))

        # n! = Γ(n + 1)
        result = self.gamma(render_float(float(operand) + 1.0))
        if has_precision(result):
            return render_float(float(result))
        return render_int(to_int(result))

    def gcd(self, left: str, right: str) -> str:
        return render_decimal(number_theory.decimal_gcd(left, right))

    def root(self, operand: str, nth: int) -> str:
        raise UnsupportedOperation("Not a valid library for root^n.")

    def next_prime(self, operand: str) -> str:
        return render_int(number_theory.next_prime(to_int(operand)))

    def is_prime(self, operand: str, reps: int = 10) -> bool:
        return number_theory.is_prime(to_int(operand))

    def is_perfect_square(self, operand: str, precision: int = 0) -> bool:
        """
        Корень, вычисленный с precision + 1, совпадает со своей целой частью.

        Корень рендерится с 14 значащими цифрами, поэтому для операндов
        от ~10^14 возможны ложные срабатывания (is_perfect_square("99999999999999")
        возвращает True). Точную проверку выполняет BigIntegerBackend.
        """
        candidate = self.square_root(operand, precision + 1)
        return candidate == render_int(to_int(candidate))

    # -------------------------------------------------------------------------
    # Гамма-функции
    # -------------------------------------------------------------------------

    def gamma(self, operand: str) -> str:
        x = float(operand)
        gamma_kernels.validate_gamma_argument(x)

        if x < gamma_kernels.GAMMA_NEAR_ZERO_THRESHOLD:
            return render_float(gamma_kernels.gamma_near_zero(x))

        if x < gamma_kernels.GAMMA_RATIONAL_THRESHOLD:
            return render_float(gamma_kernels.gamma_rational(x))

        # Γ(x) = exp(log Γ(x)), log Γ берётся в опубликованной (текстовой) форме
        return render_float(math.exp(float(self.log_gamma(operand))))

    def log_gamma(self, operand: str) -> str:
        x = float(operand)
        gamma_kernels.validate_log_gamma_argument(x)

        if x < gamma_kernels.GAMMA_RATIONAL_THRESHOLD:
            return render_float(math.log(abs(float(self.gamma(operand)))))

        return render_float(gamma_kernels.log_gamma_stirling(x))

    def __repr__(self) -> str:
        return f"NativeBackend(rounding_strategy={self.rounding_strategy.value!r})"
