"""
Тесты для NumberValidator

Проверяемые инварианты:
1. Валидны только скаляры, лексически являющиеся числом
2. Валидатор не бросает исключений
3. DefaultNumberValidator удовлетворяет протоколу NumberValidator
"""

from decimal import Decimal

import pytest

from src.core.math.number_validator import (
    NUMBER_PATTERN,
    DefaultNumberValidator,
    NumberValidator,
)


@pytest.fixture
def validator():
    return DefaultNumberValidator()


class TestDefaultNumberValidator:
    """Тесты DefaultNumberValidator.is_valid"""

    @pytest.mark.parametrize(
        "value",
        [True, False, 3, "4", 43.029, "39.039", 1.2e3, "1.2e3", 7e-10, "7E-10"],
    )
    def test_valid_numbers(self, validator, value):
        """Скаляры-числа проходят валидацию."""
        assert validator.is_valid(value) is True

    @pytest.mark.parametrize("value", ["-5", "+5", ".5", "5.", " 42 ", "-0.000"])
    def test_valid_signed_and_partial_forms(self, validator, value):
        """Знак, пропущенная целая/дробная часть и пробелы по краям допустимы."""
        assert validator.is_valid(value) is True

    def test_not_a_number_string(self, validator):
        assert validator.is_valid("ThisIsNotANumber") is False

    @pytest.mark.parametrize("value", ["", ".", "1.2.3", "1e", "0x1F", "1 000", "--1"])
    def test_malformed_strings(self, validator, value):
        """Строки, не являющиеся числом, отвергаются."""
        assert validator.is_valid(value) is False

    @pytest.mark.parametrize("value", [None, [1, 2], {"a": 1}, (1,), object()])
    def test_non_scalars_rejected(self, validator, value):
        """Не-скаляры отвергаются без исключений."""
        assert validator.is_valid(value) is False

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_floats_rejected(self, validator, value):
        assert validator.is_valid(value) is False

    def test_decimal_values(self, validator):
        assert validator.is_valid(Decimal("1.50")) is True
        assert validator.is_valid(Decimal("NaN")) is False

    def test_satisfies_protocol(self, validator):
        """DefaultNumberValidator структурно реализует NumberValidator."""
        assert isinstance(validator, NumberValidator)


class TestNumberPattern:
    """Тесты регулярного выражения NUMBER_PATTERN"""

    def test_exponent_forms(self):
        assert NUMBER_PATTERN.match("1e10")
        assert NUMBER_PATTERN.match("1.5E+3")
        assert NUMBER_PATTERN.match("2e-7")

    def test_rejects_embedded_garbage(self):
        assert NUMBER_PATTERN.match("12abc") is None
        assert NUMBER_PATTERN.match("abc12") is None
