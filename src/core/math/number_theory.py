"""
Number Theory — целочисленные алгоритмы без внешних библиотек

- Факториал итеративным произведением
- НОД алгоритмом Евклида, включая десятичные операнды
- Простота пробным делением до ⌊√n⌋
- Следующее простое линейным перебором

Сложность пробного деления O(√n): функции предназначены для резервного
пути, когда big-integer backend недоступен.
"""

import math
from decimal import Decimal, localcontext

from src.core.math.decimal_text import (
    exact_context_precision,
    get_number_precision,
    to_decimal,
)


def factorial(n: int) -> int:
    """
    n! итеративным произведением от n до 1.

    Returns:
        1 для n < 2

    Examples:
        >>> factorial(10)
        3628800
        >>> factorial(0)
        1
    """
    result = 1
    while n >= 2:
        result *= n
        n -= 1
    return result


def euclid_gcd(a: int, b: int) -> int:
    """
    НОД алгоритмом Евклида.

    Examples:
        >>> euclid_gcd(80, 120)
        40
    """
    while b:
        a, b = b, a % b
    return a


def smallest_decimal_place_count(left: str, right: str) -> int:
    """
    Меньшее из количеств цифр после '.' двух операндов.

    Examples:
        >>> smallest_decimal_place_count("1.005", "2.4")
        1
        >>> smallest_decimal_place_count("1.005", "2.5399")
        3
    """
    return min(get_number_precision(left), get_number_precision(right))


def decimal_gcd(left: str, right: str) -> Decimal:
    """
    НОД десятичных операндов.

    Оба операнда умножаются на 10^k, где k — МЕНЬШЕЕ из их количеств цифр
    после '.', затем выполняется алгоритм Евклида над целыми частями, и
    результат делится обратно на 10^k. Операнд с большим числом цифр
    после '.' при этом усекается.

    Args:
        left: Десятичный текст (неотрицательный)
        right: Десятичный текст (неотрицательный)

    Returns:
        НОД как Decimal

    Raises:
        ZeroDivisionError: если масштабированный делитель усекается до 0

    Examples:
        >>> decimal_gcd("4.4", "6.66")
        Decimal('2.2')
        >>> decimal_gcd("6.66", "4.44")
        Decimal('2.22')
        >>> decimal_gcd("10", "50")
        Decimal('10')
    """
    exponent = smallest_decimal_place_count(left, right)
    a, b = to_decimal(left), to_decimal(right)

    with localcontext() as ctx:
        # scaleb только сдвигает экспоненту: хватает разрядов самих операндов
        ctx.prec = max(ctx.prec, exact_context_precision(a, b))
        a, b = a.scaleb(exponent), b.scaleb(exponent)
        if not b:
            return a.scaleb(-exponent)

        # Первый шаг идёт по исходному (возможно дробному) делителю:
        # при нулевом остатке НОД — сам делитель
        remainder = int(a) % int(b)
        if not remainder:
            return b.scaleb(-exponent)

        return Decimal(euclid_gcd(int(b), remainder)).scaleb(-exponent)


def is_prime(n: int) -> bool:
    """
    Простота пробным делением на [2, ⌊√n⌋].

    Examples:
        >>> is_prime(5)
        True
        >>> is_prime(9)
        False
        >>> is_prime(1)
        False
    """
    if n < 2:
        return False

    limit = math.isqrt(n)
    for divisor in range(2, limit + 1):
        if n % divisor == 0:
            return False
    return True


def next_prime(n: int) -> int:
    """
    Наименьшее простое число, строго большее n.

    Examples:
        >>> next_prime(5)
        7
        >>> next_prime(-10)
        2
    """
    candidate = n + 1
    while not is_prime(candidate):
        candidate += 1
    return candidate


__all__ = [
    "decimal_gcd",
    "euclid_gcd",
    "factorial",
    "is_prime",
    "next_prime",
    "smallest_decimal_place_count",
]
