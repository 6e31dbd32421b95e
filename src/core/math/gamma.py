"""
Gamma — аппроксимации гамма-функции и логарифма гамма-функции

Численные ядра для float-аргументов (double precision):
- Асимптотика около нуля: Γ(x) ≈ 1 / (x·(1 + γx)), γ — константа Эйлера–Маскерони
- Рациональная аппроксимация на [1, 2) с редукцией аргумента для x < 12
- Ряд Стирлинга (8 членов) для log Γ(x) при x ≥ 12

ФОРМУЛЫ:
    Γ(x + 1) = x·Γ(x)
    log Γ(x) ≈ (x - ½)·log(x) - x + ½·log(2π) + Σ c_k / x^(2k-1)

ОБЛАСТЬ ОПРЕДЕЛЕНИЯ:
    0 < x ≤ 171.624 (выше — переполнение double)

Коэффициенты: W. J. Cody, "An Overview of Software Development for Special
Functions" (1976); реализация по мотивам picomath (hewgill.com/picomath).
"""

import math
from typing import Final

from src.core.errors import InvalidOperand

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Константа Эйлера–Маскерони γ
EULER_MASCHERONI: Final[float] = 0.577215664901532860606512090

# Ниже этого порога используется асимптотика около нуля
GAMMA_NEAR_ZERO_THRESHOLD: Final[float] = 0.001

# Ниже этого порога — рациональная аппроксимация, выше — через log Γ
GAMMA_RATIONAL_THRESHOLD: Final[float] = 12.0

# Максимальный аргумент, для которого Γ(x) помещается в double
GAMMA_MAX_ARGUMENT: Final[float] = 171.624

# ½·log(2π)
HALF_LOG_TWO_PI: Final[float] = 0.91893853320467274178032973640562

# Числитель рациональной аппроксимации на [1, 2)
GAMMA_NUMERATOR: Final[tuple[float, ...]] = (
    -1.71618513886549492533811e0,
    2.47656508055759199108314e1,
    -3.79804256470945635097577e2,
    6.29331155312818442661052e2,
    8.66966202790413211295064e2,
    -3.14512729688483675254357e4,
    -3.61444134186911729807069e4,
    6.64561438202405440627855e4,
)

# Знаменатель рациональной аппроксимации на [1, 2)
GAMMA_DENOMINATOR: Final[tuple[float, ...]] = (
    -3.08402300119738975254353e1,
    3.15350626979604161529144e2,
    -1.01515636749021914166146e3,
    -3.10777167157231109440444e3,
    2.25381184209801510330112e4,
    4.75584627752788110767815e3,
    -1.34659959864969306392456e5,
    -1.15132259675553483497211e5,
)

# Коэффициенты ряда Стирлинга: B_2k / (2k·(2k-1))
STIRLING_COEFFICIENTS: Final[tuple[float, ...]] = (
    1.0 / 12.0,
    -1.0 / 360.0,
    1.0 / 1260.0,
    -1.0 / 1680.0,
    1.0 / 1188.0,
    -691.0 / 360360.0,
    1.0 / 156.0,
    -3617.0 / 122400.0,
)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_gamma_argument(x: float) -> None:
    """
    Проверка области определения Γ(x).

    Raises:
        InvalidOperand: если x ≤ 0 или x > GAMMA_MAX_ARGUMENT
    """
    validate_log_gamma_argument(x)

    if x > GAMMA_MAX_ARGUMENT:
        raise InvalidOperand("Number too large.")


def validate_log_gamma_argument(x: float) -> None:
    """
    Проверка области определения log Γ(x).

    Raises:
        InvalidOperand: если x ≤ 0 (или NaN)
    """
    if not x > 0.0:
        raise InvalidOperand("Operand must be a positive number.")


# =============================================================================
# ЯДРА
# =============================================================================


def gamma_near_zero(x: float) -> float:
    """
    Γ(x) для 0 < x < GAMMA_NEAR_ZERO_THRESHOLD.

    Examples:
        >>> round(gamma_near_zero(0.000001), 2)
        999999.42
    """
    return 1.0 / (x * (1.0 + EULER_MASCHERONI * x))


def gamma_rational(x: float) -> float:
    """
    Γ(x) для GAMMA_NEAR_ZERO_THRESHOLD ≤ x < GAMMA_RATIONAL_THRESHOLD.

    Аргумент приводится к y ∈ [1, 2):
    - x < 1: y = x + 1, результат делится на x
    - x ≥ 1: y = x - n, результат умножается на y·(y+1)·…·(y+n-1)

    Examples:
        >>> gamma_rational(5.0)
        24.0
    """
    y = x
    shift = 0
    less_than_one = y < 1.0

    if less_than_one:
        y += 1.0
    else:
        shift = math.floor(y) - 1
        y -= shift

    numerator = 0.0
    denominator = 1.0
    z = y - 1.0
    for p, q in zip(GAMMA_NUMERATOR, GAMMA_DENOMINATOR):
        numerator = (numerator + p) * z
        denominator = denominator * z + q

    result = numerator / denominator + 1.0

    if less_than_one:
        # Γ(x) = Γ(x + 1) / x
        result /= y - 1.0
    else:
        # Γ(y + n) = y·(y+1)·…·(y+n-1)·Γ(y)
        for _ in range(shift):
            result *= y
            y += 1.0

    return result


def log_gamma_stirling(x: float) -> float:
    """
    log Γ(x) рядом Стирлинга, точен при x ≥ GAMMA_RATIONAL_THRESHOLD.

    Ряд по степеням 1/x² вычисляется схемой Горнера от старшего коэффициента.
    """
    z = 1.0 / (x * x)
    total = STIRLING_COEFFICIENTS[-1]
    for coefficient in reversed(STIRLING_COEFFICIENTS[:-1]):
        total *= z
        total += coefficient

    series = total / x
    return (x - 0.5) * math.log(x) - x + HALF_LOG_TWO_PI + series


__all__ = [
    "EULER_MASCHERONI",
    "GAMMA_DENOMINATOR",
    "GAMMA_MAX_ARGUMENT",
    "GAMMA_NEAR_ZERO_THRESHOLD",
    "GAMMA_NUMERATOR",
    "GAMMA_RATIONAL_THRESHOLD",
    "HALF_LOG_TWO_PI",
    "STIRLING_COEFFICIENTS",
    "gamma_near_zero",
    "gamma_rational",
    "log_gamma_stirling",
    "validate_gamma_argument",
    "validate_log_gamma_argument",
]
