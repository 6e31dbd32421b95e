"""
DecimalBackend — точная десятичная арифметика (модуль decimal)

Все операции принимают явный scale (количество цифр после '.') и возвращают
текст ровно с scale цифрами после '.':
- add/multiply/divide/power/compare: точное вычисление, усечение до scale
- subtract/square_root: вычисление с scale+1, затем округление до scale по
  RoundingStrategy (чтобы избежать смещения от усечения)
- modulo: только целочисленный (scale > 0 не поддерживается)

Версионные операнды ("1.30.5") в compare не поддерживаются: порядок версий
не совпадает с порядком десятичных чисел, сравнение выполняет NativeBackend.

Теория чисел, absolute/negate и гамма-функции не поддерживаются.
"""

from decimal import ROUND_DOWN, Decimal, localcontext
from typing import ClassVar

from src.backends.base import MathBackend
from src.core.domain.operation import OperationType, RoundingStrategy
from src.core.errors import UnsupportedOperation
from src.core.math.decimal_text import (
    CONTEXT_GUARD_DIGITS,
    exact_context_precision,
    is_version_like,
    render_decimal,
    round_decimal,
    to_decimal,
)


def _truncate(value: Decimal, scale: int) -> Decimal:
    """Усечение до scale цифр после '.' (без округления)."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + scale + CONTEXT_GUARD_DIGITS)
        return value.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_DOWN)


class DecimalBackend(MathBackend):
    """
    Backend точной десятичной арифметики.

    Поддерживает INT и FLOAT операции.
    """

    name: ClassVar[str] = "decimal"
    runtime_module: ClassVar[str | None] = "decimal"

    def __init__(self, rounding_strategy: RoundingStrategy = RoundingStrategy.HALF_UP):
        """
        Args:
            rounding_strategy: Правило округления для subtract/square_root
        """
        self.rounding_strategy = rounding_strategy

    def supports_operation_type(self, operation_type: OperationType) -> bool:
        # INT и FLOAT
        return True

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, left: str, right: str, precision: int = 0) -> str:
        a, b = to_decimal(left), to_decimal(right)
        with localcontext() as ctx:
            ctx.prec = exact_context_precision(a, b)
            return self._render(a + b, precision)

    def subtract(self, left: str, right: str, precision: int = 0) -> str:
        a, b = to_decimal(left), to_decimal(right)
        with localcontext() as ctx:
            ctx.prec = exact_context_precision(a, b)
            extended = _truncate(a - b, precision + 1)
        return render_decimal(round_decimal(extended, precision, self.rounding_strategy), precision)

    def multiply(self, left: str, right: str, precision: int = 0) -> str:
        a, b = to_decimal(left), to_decimal(right)
        with localcontext() as ctx:
            ctx.prec = _digits(a) + _digits(b) + CONTEXT_GUARD_DIGITS
            return self._render(a * b, precision)

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        a, b = to_decimal(left), to_decimal(right)
        with localcontext() as ctx:
            # Разрядов хватает на целую часть частного и scale цифр после '.';
            # ROUND_DOWN гарантирует, что отброшенные разряды не повлияют на усечение
            ctx.prec = max(a.adjusted() - b.adjusted(), 0) + precision + CONTEXT_GUARD_DIGITS
            ctx.rounding = ROUND_DOWN
            return self._render(a / b, precision)

    def compare(self, left: str, right: str, precision: int = 0) -> str:
        if is_version_like(left, right):
            raise UnsupportedOperation("Decimal backend cannot do version compare.")

        a = _truncate(to_decimal(left), precision)
        b = _truncate(to_decimal(right), precision)
        return str((a > b) - (a < b))

    def modulo(self, operand: str, divided_by: str, precision: int = 0) -> str:
        if precision > 0:
            raise UnsupportedOperation(
                "Precision is not supported. Use the native backend modulo, it uses fmod."
            )

        a, b = to_decimal(operand), to_decimal(divided_by)
        with localcontext() as ctx:
            ctx.prec = exact_context_precision(a, b)
            # remainder сохраняет знак делимого
            return self._render(a % b, 0)

    def power(self, left: str, right: str, precision: int = 0) -> str:
        base, exponent = to_decimal(left), to_decimal(right)
        if exponent != exponent.to_integral_value():
            raise UnsupportedOperation("Exponent cannot have a fractional part.")

        n = int(exponent)
        with localcontext() as ctx:
            ctx.prec = _digits(base) * max(abs(n), 1) + CONTEXT_GUARD_DIGITS
            magnitude = base ** abs(n)

        if n >= 0:
            return self._render(magnitude, precision)

        return self.divide("1", render_decimal(magnitude), precision)

    def square_root(self, operand: str, precision: int = 0) -> str:
        value = to_decimal(operand)
        with localcontext() as ctx:
            ctx.prec = max(value.adjusted(), 0) // 2 + precision + 1 + CONTEXT_GUARD_DIGITS
            ctx.rounding = ROUND_DOWN
            extended = _truncate(value.sqrt(), precision + 1)
        return render_decimal(round_decimal(extended, precision, self.rounding_strategy), precision)

    def _render(self, value: Decimal, scale: int) -> str:
        return render_decimal(_truncate(value, scale), scale)

    def __repr__(self) -> str:
        return f"DecimalBackend(rounding_strategy={self.rounding_strategy.value!r})"


def _digits(value: Decimal) -> int:
    """Количество разрядов мантиссы с учётом экспоненты."""
    return exact_context_precision(value, Decimal(0))
