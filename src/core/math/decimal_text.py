"""
Decimal Text — разбор, округление и рендеринг десятичного текста

Десятичный текст (знак + цифры + опциональная '.' + цифры) — единственный
формат обмена между адаптером и backend'ами. Модуль содержит чистые
функции для работы с ним:
- Точность (количество цифр после '.')
- Текстовые проверки (знак, версионная форма)
- Приведение к int/Decimal с семантикой усечения
- Округление по RoundingStrategy (включая half-odd)
- Рендеринг float с 14 значащими цифрами

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Точность определяется только по тексту, без численных преобразований
2. Отрицательность определяется по текстовому знаку
3. Округление выполняется в Decimal-домене (без двойного округления float)
4. Рендеринг детерминирован: одинаковый float → одинаковый текст
"""

import math
from decimal import ROUND_DOWN, ROUND_UP, Decimal, localcontext
from typing import Final

from src.core.domain.operation import RoundingStrategy

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество значащих цифр при рендеринге float
FLOAT_SIGNIFICANT_DIGITS: Final[int] = 14

# Запас разрядов контекста Decimal сверх требуемых
CONTEXT_GUARD_DIGITS: Final[int] = 4


# =============================================================================
# ТОЧНОСТЬ И ТЕКСТОВЫЕ ПРОВЕРКИ
# =============================================================================


def get_number_precision(value: str | int | float) -> int:
    """
    Количество цифр после '.' в тексте числа.

    Args:
        value: Число или его десятичный текст

    Returns:
        Количество символов после '.', 0 если точки нет

    Examples:
        >>> get_number_precision("4.23")
        2
        >>> get_number_precision("6.356548")
        6
        >>> get_number_precision("4")
        0
    """
    text = str(value).strip()
    if "." not in text:
        return 0
    return len(text) - text.index(".") - 1


def has_precision(value: str | int | float) -> bool:
    """True если текст числа содержит '.'"""
    return "." in str(value)


def is_negative_text(value: str) -> bool:
    """
    Отрицательность по текстовому знаку.

    Не зависит от точности представления: "-0.000" считается отрицательным.
    """
    return value.strip().startswith("-")


def is_version_like(left: str, right: str) -> bool:
    """
    Оба операнда имеют форму версии (больше одной '.').

    Examples:
        >>> is_version_like("0.90.01", "0.91.04")
        True
        >>> is_version_like("1.4", "1.04")
        False
    """
    return left.count(".") > 1 and right.count(".") > 1


def compare_versions(left: str, right: str) -> int:
    """
    Сравнение версионных строк покомпонентно.

    Числовые компоненты сравниваются как целые, остальные — как строки.
    Недостающие компоненты считаются нулевыми.

    Returns:
        -1, 0 или 1

    Examples:
        >>> compare_versions("0.90.01", "0.91.04")
        -1
        >>> compare_versions("1.105.02", "1.049.9")
        1
        >>> compare_versions("1.2", "1.2.0")
        0
    """
    left_parts = left.strip().split(".")
    right_parts = right.strip().split(".")
    width = max(len(left_parts), len(right_parts))
    left_parts += ["0"] * (width - len(left_parts))
    right_parts += ["0"] * (width - len(right_parts))

    for left_part, right_part in zip(left_parts, right_parts):
        if left_part.isdigit() and right_part.isdigit():
            a, b = int(left_part), int(right_part)
        else:
            a, b = left_part, right_part
        if a != b:
            return -1 if a < b else 1

    return 0


# =============================================================================
# ПРИВЕДЕНИЕ ТИПОВ
# =============================================================================


def to_decimal(value: str | int | float) -> Decimal:
    """
    Разбор десятичного текста в Decimal.

    Raises:
        decimal.InvalidOperation: если текст не является числом
    """
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value).strip())


def to_int(value: str | int | float) -> int:
    """
    Целая часть числа (усечение к нулю).

    Examples:
        >>> to_int("5.5")
        5
        >>> to_int("-5.5")
        -5
        >>> to_int("1.2e3")
        1200
    """
    return int(to_decimal(value))


def to_text(value: str | int | float) -> str:
    """
    Десятичный текст скалярного операнда.

    bool приводится к "1"/"0", int выводится без ограничения на количество цифр.

    Examples:
        >>> to_text(True)
        '1'
        >>> to_text(42)
        '42'
        >>> to_text("2.50")
        '2.50'
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return render_int(value)
    return str(value)


def exact_context_precision(*values: Decimal) -> int:
    """
    Разрядность контекста, достаточная для точного сложения значений.

    Покрывает диапазон от старшего разряда самого большого значения до
    младшего разряда самого точного.
    """
    finite = [v for v in values if v.is_finite()]
    if not finite:
        return CONTEXT_GUARD_DIGITS
    top = max(v.adjusted() for v in finite)
    bottom = min(v.as_tuple().exponent for v in finite)
    return max(top - bottom, 0) + 1 + CONTEXT_GUARD_DIGITS


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def _quantum(precision: int) -> Decimal:
    return Decimal(1).scaleb(-precision)


def _quantize_half_odd(value: Decimal, precision: int) -> Decimal:
    """Half-odd: при точной половине выбирается соседнее нечётное значение."""
    quantum = _quantum(precision)
    truncated = value.quantize(quantum, rounding=ROUND_DOWN)
    if (value - truncated).copy_abs() * 2 != quantum:
        # Не половина: обычное округление к ближайшему
        return value.quantize(quantum, rounding=RoundingStrategy.HALF_EVEN.decimal_rounding)

    if int(truncated.scaleb(precision)) % 2:
        return truncated
    return value.quantize(quantum, rounding=ROUND_UP)


def round_decimal(value: Decimal, precision: int, strategy: RoundingStrategy) -> Decimal:
    """
    Округление Decimal до precision цифр после '.'.

    Args:
        value: Исходное значение
        precision: Количество цифр после '.' (>= 0)
        strategy: Правило разрешения половинных значений

    Returns:
        Округлённое значение ровно с precision цифрами после '.'

    Examples:
        >>> round_decimal(Decimal("2.5"), 0, RoundingStrategy.HALF_UP)
        Decimal('3')
        >>> round_decimal(Decimal("2.5"), 0, RoundingStrategy.HALF_EVEN)
        Decimal('2')
        >>> round_decimal(Decimal("2.5"), 0, RoundingStrategy.HALF_ODD)
        Decimal('3')
        >>> round_decimal(Decimal("3.5"), 0, RoundingStrategy.HALF_ODD)
        Decimal('3')
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    if not value.is_finite():
        return value

    with localcontext() as ctx:
        ctx.prec = max(
            ctx.prec,
            value.adjusted() + precision + CONTEXT_GUARD_DIGITS,
            exact_context_precision(value),
        )
        if strategy is RoundingStrategy.HALF_ODD:
            return _quantize_half_odd(value, precision)
        return value.quantize(_quantum(precision), rounding=strategy.decimal_rounding)


def round_float(value: float, precision: int, strategy: RoundingStrategy) -> float:
    """
    Округление float до precision цифр после '.'.

    Округляется кратчайшее десятичное представление значения (repr),
    поэтому 2.675 округляется как 2.675, а не как 2.67499999...

    Examples:
        >>> round_float(2.675, 2, RoundingStrategy.HALF_UP)
        2.68
        >>> round_float(5.299999999999997, 1, RoundingStrategy.HALF_UP)
        5.3
    """
    if not math.isfinite(value):
        return value
    return float(round_decimal(Decimal(repr(value)), precision, strategy))


# =============================================================================
# РЕНДЕРИНГ
# =============================================================================


def render_float(value: float) -> str:
    """
    Текст float с 14 значащими цифрами, без хвостовых нулей.

    Большие и очень малые значения выводятся в экспоненциальной форме.
    Отрицательный ноль выводится как "0".

    Examples:
        >>> render_float(23.999999999999996)
        '24'
        >>> render_float(0.1 + 0.2)
        '0.3'
        >>> render_float(5.562092414534147e305)
        '5.5620924145341E+305'
    """
    if value == 0:
        return "0"
    return format(value, f".{FLOAT_SIGNIFICANT_DIGITS}G")


def render_number(value: int | float) -> str:
    """Текст int через render_int, float — через render_float."""
    if isinstance(value, float):
        return render_float(value)
    return render_int(value)


def render_int(value: int) -> str:
    """
    Текст целого любой длины.

    str(int) ограничен sys.get_int_max_str_digits(), Decimal(int) — нет.

    Examples:
        >>> render_int(-42)
        '-42'
        >>> len(render_int(10 ** 5000))
        5001
    """
    return format(Decimal(value), "f")


def render_decimal(value: Decimal, scale: int | None = None) -> str:
    """
    Текст Decimal в позиционной записи.

    Args:
        value: Значение
        scale: Фиксированное количество цифр после '.' (значение должно
            быть уже приведено к этому scale); None — без хвостовых нулей

    Examples:
        >>> render_decimal(Decimal("4.40"), 2)
        '4.40'
        >>> render_decimal(Decimal("2.20"))
        '2.2'
        >>> render_decimal(Decimal("-0.00"), 2)
        '0.00'
    """
    if value.is_zero():
        value = value.copy_abs()

    if scale is None:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
            value = value.normalize()
        if value.is_zero():
            return "0"

    return format(value, "f")


__all__ = [
    "CONTEXT_GUARD_DIGITS",
    "FLOAT_SIGNIFICANT_DIGITS",
    "compare_versions",
    "exact_context_precision",
    "get_number_precision",
    "has_precision",
    "is_negative_text",
    "is_version_like",
    "render_decimal",
    "render_float",
    "render_int",
    "render_number",
    "round_decimal",
    "round_float",
    "to_decimal",
    "to_int",
    "to_text",
]
