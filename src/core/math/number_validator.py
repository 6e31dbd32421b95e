"""
Number Validator — проверка, что скаляр является числом

Валидным считается скаляр (str/int/float/bool/Decimal), лексически
являющийся числом: опциональный знак, цифры, опциональная десятичная
точка, опциональная экспонента. Функция чистая и не бросает исключений.
"""

import math
import re
from decimal import Decimal
from typing import Any, Final, Protocol, runtime_checkable

# Опциональный знак, мантисса с точкой или без, опциональная экспонента.
# Пробелы по краям допускаются.
NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$"
)


@runtime_checkable
class NumberValidator(Protocol):
    """Контракт валидатора чисел"""

    def is_valid(self, value: Any) -> bool:
        """True если value — скаляр, лексически являющийся числом"""
        ...


class DefaultNumberValidator:
    """
    Валидатор по умолчанию.

    Examples:
        >>> validator = DefaultNumberValidator()
        >>> validator.is_valid("39.039")
        True
        >>> validator.is_valid("7E-10")
        True
        >>> validator.is_valid("ThisIsNotANumber")
        False
        >>> validator.is_valid([1, 2])
        False
    """

    def is_valid(self, value: Any) -> bool:
        # bool — подкласс int, поэтому проходит как 0/1
        if isinstance(value, int):
            return True

        if isinstance(value, float):
            return math.isfinite(value)

        if isinstance(value, Decimal):
            return value.is_finite()

        if isinstance(value, str):
            return NUMBER_PATTERN.match(value) is not None

        return False
