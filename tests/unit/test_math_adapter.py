"""
Тесты для MathAdapter — оркестратор цепочки backend'ов

Проверяемые инварианты:
1. Невалидный операнд → InvalidOperand до обращения к backend'ам
2. Делитель "0" → DivisionByZero до обращения к backend'ам
3. factorial/gcd/root на дробных/отрицательных операндах → InvalidPrecondition
4. Первый успешный backend возвращает результат, остальные не вызываются
5. Исчерпанная цепочка → последняя ошибка либо UnknownError
6. Конфигурация неизменна после конструирования
"""

import logging
import math
from decimal import Decimal

import pytest

from src.adapter import MathAdapter
from src.backends import DecimalBackend, NativeBackend
from src.backends.base import MathBackend
from src.core.domain.operation import OperationType, RoundingStrategy
from src.core.errors import (
    ConfigurationError,
    DivisionByZero,
    InvalidOperand,
    InvalidPrecondition,
    UnknownError,
    UnsupportedOperation,
)


# =============================================================================
# FIXTURES
# =============================================================================


class AcceptAllValidator:
    """Валидатор, пропускающий любые операнды."""

    def is_valid(self, value) -> bool:
        return True


class RejectAllValidator:
    """Валидатор, отвергающий любые операнды."""

    def is_valid(self, value) -> bool:
        return False


class ScriptedBackend(MathBackend):
    """Backend с заданным исходом add и журналом вызовов."""

    def __init__(
        self,
        name: str,
        result: str | None = None,
        error: Exception | None = None,
        types: tuple[OperationType, ...] = (OperationType.INT, OperationType.FLOAT),
        enabled: bool = True,
    ):
        self.name = name
        self.result = result
        self.error = error
        self.types = types
        self.enabled = enabled
        self.calls: list[tuple] = []

    def supports_operation_type(self, operation_type: OperationType) -> bool:
        return operation_type in self.types

    def is_enabled(self) -> bool:
        return self.enabled

    def _outcome(self, *call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return self.result

    def add(self, left: str, right: str, precision: int = 0) -> str:
        return self._outcome("add", left, right, precision)

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        return self._outcome("divide", left, right, precision)

    def factorial(self, operand: str) -> str:
        return self._outcome("factorial", operand)

    def is_prime(self, operand: str, reps: int = 10) -> bool:
        return self._outcome("is_prime", operand, reps)


@pytest.fixture
def adapter():
    return MathAdapter()


@pytest.fixture
def native_adapter():
    """Адаптер только с резервным backend'ом."""
    return MathAdapter(backends=[NativeBackend()])


# =============================================================================
# ТЕСТЫ: Конструирование
# =============================================================================


class TestConstruction:
    """Тесты конфигурации адаптера"""

    def test_defaults(self, adapter):
        assert adapter.rounding_strategy is RoundingStrategy.HALF_UP
        assert [backend.name for backend in adapter.backends] == [
            "decimal", "big_integer", "native",
        ]

    def test_rounding_strategy_from_string(self):
        adapter = MathAdapter(rounding_strategy="half-even")
        assert adapter.rounding_strategy is RoundingStrategy.HALF_EVEN
        # Стратегия передаётся backend'ам по умолчанию
        assert adapter.backends[-1].rounding_strategy is RoundingStrategy.HALF_EVEN

    def test_invalid_rounding_strategy(self):
        with pytest.raises(ConfigurationError, match="Invalid rounding strategy"):
            MathAdapter(rounding_strategy="round-away")

    def test_non_backend_element(self):
        with pytest.raises(ConfigurationError, match="MathBackend"):
            MathAdapter(backends=[NativeBackend(), object()])

    def test_backends_immutable(self):
        backends = [NativeBackend()]
        adapter = MathAdapter(backends=backends)
        backends.append(DecimalBackend())
        assert len(adapter.backends) == 1
        assert isinstance(adapter.backends, tuple)

    def test_supported_rounding_strategies(self):
        assert MathAdapter.supported_rounding_strategies() == (
            "half-up", "half-down", "half-even", "half-odd",
        )

    def test_repr(self, native_adapter):
        assert repr(native_adapter) == "MathAdapter(backends=[native], rounding_strategy='half-up')"


# =============================================================================
# ТЕСТЫ: Валидация и точность
# =============================================================================


class TestValidation:
    """Тесты валидации операндов и get_precision"""

    def test_invalid_operand_named(self, adapter):
        with pytest.raises(InvalidOperand) as exc_info:
            adapter.add("Foo", "9")
        assert str(exc_info.value).endswith("Invalid number: Foo")

    def test_get_precision(self, adapter):
        assert adapter.get_precision("4.23") == 2
        assert adapter.get_precision("6.356548") == 6
        assert adapter.get_precision("4") == 0

    def test_get_precision_invalid(self, adapter):
        with pytest.raises(InvalidOperand, match="Invalid number: Foo"):
            adapter.get_precision("Foo")

    def test_get_number_precision_without_validation(self):
        assert MathAdapter.get_number_precision("2.50") == 2
        assert MathAdapter.get_number_precision(7) == 0

    def test_bool_operands_as_integers(self, adapter, native_adapter):
        """bool — подкласс int: True/False считаются как 1/0."""
        assert adapter.add(True, 1) == "2"
        assert adapter.get_precision(True) == 0
        assert native_adapter.add(False, "2.5", 1) == "2.5"
        assert native_adapter.compare(True, False) == "1"

    def test_numeric_scalars_accepted(self, native_adapter):
        assert native_adapter.add(2, 0.5, 1) == "2.5"
        assert native_adapter.get_precision(2.25) == 2

    def test_injected_validator_used(self):
        adapter = MathAdapter(validator=RejectAllValidator())
        with pytest.raises(InvalidOperand):
            adapter.add("1", "2")

    def test_validation_precedes_backends(self):
        backend = ScriptedBackend("first", result="3")
        adapter = MathAdapter(backends=[backend])
        with pytest.raises(InvalidOperand):
            adapter.add("1", "two")
        assert backend.calls == []


# =============================================================================
# ТЕСТЫ: Цепочка backend'ов
# =============================================================================


class TestDelegateChain:
    """Тесты chain of responsibility"""

    def test_first_success_wins(self):
        first = ScriptedBackend("first", result="A")
        second = ScriptedBackend("second", result="B")
        adapter = MathAdapter(backends=[first, second])
        assert adapter.add("1", "2") == "A"
        assert second.calls == []

    def test_failure_falls_through(self):
        first = ScriptedBackend("first", error=UnsupportedOperation("nope"))
        second = ScriptedBackend("second", result="B")
        adapter = MathAdapter(backends=[first, second])
        assert adapter.add("1", "2", 3) == "B"
        assert first.calls == [("add", "1", "2", 3)]
        assert second.calls == [("add", "1", "2", 3)]

    def test_disabled_backend_skipped(self):
        first = ScriptedBackend("first", result="A", enabled=False)
        second = ScriptedBackend("second", result="B")
        assert MathAdapter(backends=[first, second]).add("1", "2") == "B"
        assert first.calls == []

    def test_unsupported_type_skipped(self):
        int_only = ScriptedBackend("int_only", result="A", types=(OperationType.INT,))
        fallback = ScriptedBackend("fallback", result="B")
        adapter = MathAdapter(backends=[int_only, fallback])
        assert adapter.add("1", "2") == "A"
        assert adapter.add("1.5", "2") == "B"
        assert len(int_only.calls) == 1

    def test_last_error_raised(self):
        first = ScriptedBackend("first", error=UnsupportedOperation("first failed"))
        second = ScriptedBackend("second", error=InvalidOperand("second failed"))
        adapter = MathAdapter(backends=[first, second])
        with pytest.raises(InvalidOperand, match="second.add: second failed"):
            adapter.add("1", "2")

    def test_foreign_exception_wrapped(self):
        backend = ScriptedBackend("broken", error=ValueError("boom"))
        adapter = MathAdapter(backends=[backend])
        with pytest.raises(UnsupportedOperation, match="broken.add: boom") as exc_info:
            adapter.add("1", "2")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_no_backends(self):
        with pytest.raises(UnknownError, match="Unknown error"):
            MathAdapter(backends=[]).add("1", "2")

    def test_no_eligible_backend(self):
        backend = ScriptedBackend("int_only", result="A", types=(OperationType.INT,))
        with pytest.raises(UnknownError):
            MathAdapter(backends=[backend]).add("1.5", "2")

    def test_debug_logging(self, caplog):
        first = ScriptedBackend("first", error=UnsupportedOperation("nope"))
        second = ScriptedBackend("second", result="B")
        adapter = MathAdapter(backends=[first, second])
        with caplog.at_level(logging.DEBUG, logger="src.adapter.math_adapter"):
            adapter.add("1", "2")
        messages = [record.getMessage() for record in caplog.records]
        assert "Backend failed: first.add: nope" in messages
        assert "second handled add" in messages


# =============================================================================
# ТЕСТЫ: Проверки уровня адаптера
# =============================================================================


class TestShortCircuits:
    """Тесты проверок, выполняемых до обращения к backend'ам"""

    def test_division_by_zero(self):
        backend = ScriptedBackend("first", result="X")
        adapter = MathAdapter(backends=[backend])
        with pytest.raises(DivisionByZero):
            adapter.divide("5", "0")
        assert backend.calls == []

    def test_division_by_zero_is_zero_division_error(self, adapter):
        with pytest.raises(ZeroDivisionError):
            adapter.divide("5", "0")

    @pytest.mark.parametrize("operand", ["4.4", "-5", "-0"])
    def test_factorial_precondition(self, operand):
        backend = ScriptedBackend("first", result="X")
        adapter = MathAdapter(backends=[backend])
        with pytest.raises(InvalidPrecondition, match="whole, positive"):
            adapter.factorial(operand)
        assert backend.calls == []

    def test_gcd_precondition(self, adapter):
        with pytest.raises(InvalidPrecondition):
            adapter.gcd("-5", "0")
        with pytest.raises(InvalidPrecondition):
            adapter.gcd("4.4", "6.6")

    def test_root_precondition(self, adapter):
        with pytest.raises(InvalidPrecondition):
            adapter.root("-5", 2)

    def test_root_without_backends(self):
        with pytest.raises(InvalidPrecondition):
            MathAdapter(backends=[]).root("27", 3)

    def test_is_prime_short_circuits(self):
        backend = ScriptedBackend("first", result=True)
        adapter = MathAdapter(backends=[backend])
        assert adapter.is_prime("1") is False
        assert adapter.is_prime("2") is True
        assert adapter.is_prime("7.0") is False
        assert backend.calls == []
        assert adapter.is_prime("5", reps=3) is True
        assert backend.calls == [("is_prime", "5", 3)]


# =============================================================================
# ТЕСТЫ: Операции через цепочку по умолчанию
# =============================================================================


class TestArithmetic:
    """Тесты add/subtract/multiply/divide/compare"""

    def test_add_subtract(self, adapter):
        assert adapter.add("2", "2") == "4"
        assert adapter.add("2.2", "2.2", 1) == "4.4"
        assert adapter.subtract("2.3", "2.2", 1) == "0.1"

    @pytest.mark.parametrize("adapter_fixture", ["adapter", "native_adapter"])
    @pytest.mark.parametrize("precision", [0, 1, 2, 4])
    @pytest.mark.parametrize(
        "left, right",
        [
            (2, 3),
            ("2", "3"),
            (2.25, 1.005),
            ("-7.5", "3.333"),
            (123456789012345678901234567890, 0.1),
        ],
    )
    def test_add_commutative(self, request, adapter_fixture, precision, left, right):
        adapter = request.getfixturevalue(adapter_fixture)
        assert adapter.add(left, right, precision) == adapter.add(right, left, precision)

    def test_multiply(self, adapter):
        assert adapter.multiply("2.2", "2.2") == "4"
        assert adapter.multiply("2.2", "2.2", 2) == "4.84"

    def test_divide(self, adapter):
        assert adapter.divide("2", "2") == "1"
        assert adapter.divide("2.2", "1.1", 1) == "2.0"

    def test_compare(self, adapter):
        assert adapter.compare("1.4", "1.04", 2) == "1"
        assert adapter.compare("1", "10") == "-1"
        assert adapter.compare("3", "3") == "0"

    def test_compare_versions(self, adapter):
        """Версионные пары обходят валидацию и сравниваются резервным backend'ом."""
        assert adapter.compare("0.90.01", "0.91.04", 5) == "-1"
        assert adapter.compare("1.30.5", "1.29.99") == "1"

    def test_compare_validates_numbers(self, adapter):
        with pytest.raises(InvalidOperand):
            adapter.compare("1.2.3", "abc")


class TestModuloPowerRoot:
    """Тесты modulo/power/square_root/absolute/negate"""

    def test_modulo(self, adapter):
        assert adapter.modulo("5", "10") == "5"
        assert adapter.modulo("5.5", "10", 1) == "5.5"

    def test_power(self, adapter):
        assert adapter.power("5", "10") == "9765625"
        assert adapter.power("5.5", "12", 2) == "766217865.41"

    def test_square_root(self, adapter):
        assert adapter.square_root("9") == "3"
        assert adapter.square_root("49.39", 4) == "7.0278"
        assert adapter.square_root("49.39", 2) == "7.03"
        assert adapter.square_root("1439.39", 3) == "37.939"

    def test_absolute_negate(self, adapter):
        assert adapter.absolute("-9") == "9"
        assert adapter.absolute("-49.39") == "49.39"
        assert adapter.negate("9") == "-9"
        assert adapter.negate("-49.39") == "49.39"


class TestNumberTheory:
    """Тесты factorial/gcd/root/next_prime/is_prime/is_perfect_square"""

    def test_factorial(self, adapter):
        assert adapter.factorial("10") == "3628800"

    def test_factorial_beyond_str_digit_limit(self):
        """Без gmpy2 факториал считает резервный backend; 2000! — 5736 цифр."""
        adapter = MathAdapter(backends=[DecimalBackend(), NativeBackend()])
        result = adapter.factorial("2000")
        assert len(result) == 5736
        assert Decimal(result) == Decimal(math.factorial(2000))

    def test_gcd(self, adapter):
        assert adapter.gcd("10", "50") == "10"
        assert adapter.gcd("80", "120") == "40"

    def test_root(self, adapter):
        pytest.importorskip("gmpy2")
        assert adapter.root("32", 3) == "3"

    def test_root_on_native_only(self, native_adapter):
        with pytest.raises(UnsupportedOperation, match="root\\^n"):
            native_adapter.root("27", 3)

    def test_next_prime(self, adapter):
        assert adapter.next_prime("5") == "7"
        assert adapter.next_prime("5.5") == "7"

    def test_is_prime(self, adapter):
        assert adapter.is_prime("1") is False
        assert adapter.is_prime("2") is True
        assert adapter.is_prime("5") is True
        assert adapter.is_prime("9") is False

    @pytest.mark.parametrize("operand, expected", [
        ("1", True), ("4", True), ("9", True), ("3", False), ("5", False), ("26", False),
    ])
    def test_is_perfect_square(self, adapter, operand, expected):
        assert adapter.is_perfect_square(operand) is expected


class TestGamma:
    """Тесты gamma/log_gamma"""

    def test_gamma(self, adapter):
        assert adapter.gamma("5") == "24"
        assert adapter.gamma("7.5") == "1871.2543057978"

    def test_log_gamma(self, adapter):
        assert adapter.log_gamma("3.5") == "1.2009736023471"

    def test_gamma_domain(self, adapter):
        with pytest.raises(InvalidOperand, match="Operand must be a positive number"):
            adapter.gamma("0")
        with pytest.raises(InvalidOperand, match="Number too large"):
            adapter.gamma("172")


class TestPermissiveValidator:
    """Адаптер с валидатором, пропускающим всё: ошибки приходят от backend'ов"""

    def test_backend_errors_surface(self):
        adapter = MathAdapter(validator=AcceptAllValidator(), backends=[DecimalBackend()])
        with pytest.raises(UnsupportedOperation, match="decimal.add"):
            adapter.add("Foo", "9")
