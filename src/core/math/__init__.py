"""
Core math modules

Чистые численные примитивы арифметического слоя: валидация чисел,
работа с десятичным текстом, гамма-функция и теоретико-числовые алгоритмы.
"""

# Number Validator
from src.core.math.number_validator import (
    NUMBER_PATTERN,
    DefaultNumberValidator,
    NumberValidator,
)

# Decimal Text
from src.core.math.decimal_text import (
    FLOAT_SIGNIFICANT_DIGITS,
    compare_versions,
    get_number_precision,
    has_precision,
    is_negative_text,
    is_version_like,
    render_decimal,
    render_float,
    render_number,
    round_decimal,
    round_float,
    to_decimal,
    to_int,
)

# Gamma
from src.core.math.gamma import (
    EULER_MASCHERONI,
    GAMMA_MAX_ARGUMENT,
    GAMMA_NEAR_ZERO_THRESHOLD,
    GAMMA_RATIONAL_THRESHOLD,
    gamma_near_zero,
    gamma_rational,
    log_gamma_stirling,
    validate_gamma_argument,
    validate_log_gamma_argument,
)

# Number Theory
from src.core.math.number_theory import (
    decimal_gcd,
    euclid_gcd,
    factorial,
    is_prime,
    next_prime,
    smallest_decimal_place_count,
)

__all__ = [
    # Number Validator
    "NUMBER_PATTERN",
    "DefaultNumberValidator",
    "NumberValidator",
    # Decimal Text
    "FLOAT_SIGNIFICANT_DIGITS",
    "compare_versions",
    "get_number_precision",
    "has_precision",
    "is_negative_text",
    "is_version_like",
    "render_decimal",
    "render_float",
    "render_number",
    "round_decimal",
    "round_float",
    "to_decimal",
    "to_int",
    # Gamma
    "EULER_MASCHERONI",
    "GAMMA_MAX_ARGUMENT",
    "GAMMA_NEAR_ZERO_THRESHOLD",
    "GAMMA_RATIONAL_THRESHOLD",
    "gamma_near_zero",
    "gamma_rational",
    "log_gamma_stirling",
    "validate_gamma_argument",
    "validate_log_gamma_argument",
    # Number Theory
    "decimal_gcd",
    "euclid_gcd",
    "factorial",
    "is_prime",
    "next_prime",
    "smallest_decimal_place_count",
]
