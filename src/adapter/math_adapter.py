"""
MathAdapter — оркестратор арифметики произвольной точности

Единая точка входа для арифметических, теоретико-числовых и специальных
функций над десятичным текстом. Сам ничего не вычисляет: валидирует
операнды, выводит OperationType и делегирует операцию цепочке backend'ов.

Цепочка (chain of responsibility):
- backend'ы перебираются в порядке приоритета
- пропускаются выключенные и не поддерживающие OperationType
- первый успех возвращается сразу
- ошибка backend'а фиксируется (BackendResult), перебор продолжается
- цепочка исчерпана: поднимается последняя ошибка, либо UnknownError

Проверки уровня адаптера (до обращения к backend'ам):
- каждый операнд проходит NumberValidator (иначе InvalidOperand)
- divide: делитель "0" → DivisionByZero
- factorial/gcd/root: операнды целые и неотрицательные по тексту
  (иначе InvalidPrecondition)
- is_prime: precision > 0 или "1" → False, "2" → True
- compare: тип операции всегда FLOAT, версионные пары ("1.30.5") не валидируются

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Конфигурация (validator, backends, rounding_strategy) неизменна после конструирования
2. Backend'ы не видят невалидных операндов (кроме версионных пар в compare)
3. Отрицательность операнда определяется по тексту, не численно
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping, TypeVar

from pydantic import ValidationError

from src.backends import BackendResult, MathBackend, build_backend, default_backends
from src.core.contracts import validate_math_adapter_config
from src.core.domain.config import MathAdapterConfig
from src.core.domain.operation import OperationType, RoundingStrategy
from src.core.errors import (
    ConfigurationError,
    DivisionByZero,
    InvalidOperand,
    InvalidPrecondition,
    MathError,
    UnknownError,
)
from src.core.math.decimal_text import (
    get_number_precision,
    is_negative_text,
    is_version_like,
    to_text,
)
from src.core.math.number_validator import DefaultNumberValidator, NumberValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

WHOLE_POSITIVE_MESSAGE = "Arguments must be whole, positive numbers."


class MathAdapter:
    """
    Оркестратор операций над числами произвольной точности.

    Examples:
        >>> adapter = MathAdapter()
        >>> adapter.add("2.2", "2.2", 1)
        '4.4'
        >>> adapter.compare("0.90.01", "0.91.04", 5)
        '-1'
        >>> adapter.gamma("5")
        '24'
    """

    def __init__(
        self,
        validator: NumberValidator | None = None,
        backends: Iterable[MathBackend] | None = None,
        rounding_strategy: RoundingStrategy | str = RoundingStrategy.HALF_UP,
    ):
        """
        Args:
            validator: Валидатор операндов (по умолчанию DefaultNumberValidator)
            backends: Backend'ы в порядке приоритета
                (по умолчанию decimal → big_integer → native)
            rounding_strategy: Правило округления для float-вычислений

        Raises:
            ConfigurationError: неизвестная стратегия округления или
                элемент backends, не являющийся MathBackend
        """
        try:
            strategy = RoundingStrategy(rounding_strategy)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid rounding strategy: {rounding_strategy!r}. "
                f"Supported: {list(self.supported_rounding_strategies())}"
            ) from exc

        if backends is None:
            backends = default_backends(strategy)

        backends = tuple(backends)
        for backend in backends:
            if not isinstance(backend, MathBackend):
                raise ConfigurationError(
                    f"Backend must be an instance of MathBackend, got {type(backend).__name__}"
                )

        self._validator = validator if validator is not None else DefaultNumberValidator()
        self._backends = backends
        self._rounding_strategy = strategy

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], validator: NumberValidator | None = None
    ) -> "MathAdapter":
        """
        Сборка адаптера из plain-конфигурации (например, распарсенного JSON).

        Args:
            config: {"rounding_strategy": "...", "backends": ["decimal", ...]}
            validator: Валидатор операндов

        Raises:
            ConfigurationError: конфигурация не проходит JSON Schema
                контракт или pydantic-модель
        """
        validate_math_adapter_config(config)

        try:
            settings = MathAdapterConfig.model_validate(dict(config))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid math adapter configuration: {exc}") from exc

        backends = [build_backend(name, settings.rounding_strategy) for name in settings.backends]
        return cls(
            validator=validator,
            backends=backends,
            rounding_strategy=settings.rounding_strategy,
        )

    # =========================================================================
    # КОНФИГУРАЦИЯ
    # =========================================================================

    @property
    def validator(self) -> NumberValidator:
        return self._validator

    @property
    def backends(self) -> tuple[MathBackend, ...]:
        return self._backends

    @property
    def rounding_strategy(self) -> RoundingStrategy:
        return self._rounding_strategy

    @staticmethod
    def supported_rounding_strategies() -> tuple[str, ...]:
        """Допустимые значения rounding_strategy"""
        return tuple(strategy.value for strategy in RoundingStrategy)

    # =========================================================================
    # ТОЧНОСТЬ
    # =========================================================================

    @staticmethod
    def get_number_precision(value: str | int | float) -> int:
        """Количество цифр после '.' без валидации операнда"""
        return get_number_precision(value)

    def get_precision(self, value: str | int | float) -> int:
        """
        Количество цифр после '.' в валидном числе.

        Raises:
            InvalidOperand: value не является числом
        """
        (text,) = self._validate(value)
        return get_number_precision(text)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, left: str, right: str, precision: int = 0) -> str:
        left, right = self._validate(left, right)
        return self._delegate(
            "add", OperationType.infer(left, right),
            lambda backend: backend.add(left, right, precision),
        )

    def subtract(self, left: str, right: str, precision: int = 0) -> str:
        left, right = self._validate(left, right)
        return self._delegate(
            "subtract", OperationType.infer(left, right),
            lambda backend: backend.subtract(left, right, precision),
        )

    def multiply(self, left: str, right: str, precision: int = 0) -> str:
        left, right = self._validate(left, right)
        return self._delegate(
            "multiply", OperationType.infer(left, right),
            lambda backend: backend.multiply(left, right, precision),
        )

    def divide(self, left: str, right: str, precision: int = 0) -> str:
        """
        Деление.

        Raises:
            DivisionByZero: текст делителя — ровно "0"
        """
        left, right = self._validate(left, right)
        if right.strip() == "0":
            raise DivisionByZero("Division by zero.")

        return self._delegate(
            "divide", OperationType.infer(left, right),
            lambda backend: backend.divide(left, right, precision),
        )

    def compare(self, left: str, right: str, precision: int = 0) -> str:
        """
        Трёхзначное сравнение: "-1", "0" или "1".

        Пары версионных строк ("1.30.5", "1.29.99") сравниваются по правилам
        версий и проходят мимо NumberValidator.
        """
        left, right = to_text(left), to_text(right)
        if not is_version_like(left, right):
            left, right = self._validate(left, right)

        # Целочисленный backend сравнение не выполняет
        return self._delegate(
            "compare", OperationType.FLOAT,
            lambda backend: backend.compare(left, right, precision),
        )

    def modulo(self, operand: str, divided_by: str, precision: int = 0) -> str:
        operand, divided_by = self._validate(operand, divided_by)
        return self._delegate(
            "modulo", OperationType.infer(operand, divided_by),
            lambda backend: backend.modulo(operand, divided_by, precision),
        )

    def power(self, left: str, right: str, precision: int = 0) -> str:
        left, right = self._validate(left, right)
        return self._delegate(
            "power", OperationType.infer(left, right),
            lambda backend: backend.power(left, right, precision),
        )

    def square_root(self, operand: str, precision: int = 0) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "square_root", OperationType.infer(operand),
            lambda backend: backend.square_root(operand, precision),
        )

    def absolute(self, operand: str) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "absolute", OperationType.infer(operand),
            lambda backend: backend.absolute(operand),
        )

    def negate(self, operand: str) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "negate", OperationType.infer(operand),
            lambda backend: backend.negate(operand),
        )

    # =========================================================================
    # ТЕОРИЯ ЧИСЕЛ
    # =========================================================================

    def factorial(self, operand: str) -> str:
        (operand,) = self._require_whole_positive(operand)
        return self._delegate(
            "factorial", OperationType.INT,
            lambda backend: backend.factorial(operand),
        )

    def gcd(self, left: str, right: str) -> str:
        left, right = self._require_whole_positive(left, right)
        return self._delegate(
            "gcd", OperationType.INT,
            lambda backend: backend.gcd(left, right),
        )

    def root(self, operand: str, nth: int) -> str:
        """
        Целый корень n-й степени.

        Raises:
            InvalidPrecondition: операнд не целый/отрицательный, либо
                ни один backend не был опрошен
        """
        (operand,) = self._require_whole_positive(operand)

        last_error: MathError | None = None
        for backend in self._delegates("root", OperationType.INT):
            result = BackendResult.capture(backend, "root", lambda: backend.root(operand, nth))
            if result.ok:
                return result.value
            logger.debug("Backend failed: %s", result.error)
            last_error = result.error

        if last_error is not None:
            raise last_error
        raise InvalidPrecondition(WHOLE_POSITIVE_MESSAGE)

    def next_prime(self, operand: str) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "next_prime", OperationType.infer(operand),
            lambda backend: backend.next_prime(operand),
        )

    def is_prime(self, operand: str, reps: int = 10) -> bool:
        """
        Проверка на простоту.

        Args:
            operand: Проверяемое число
            reps: Количество повторений вероятностного теста
                (учитывается только целочисленным backend'ом)
        """
        (operand,) = self._validate(operand)

        text = operand.strip()
        if get_number_precision(text) > 0 or text == "1":
            return False
        if text == "2":
            return True

        return self._delegate(
            "is_prime", OperationType.infer(operand),
            lambda backend: backend.is_prime(operand, reps),
        )

    def is_perfect_square(self, operand: str, precision: int = 0) -> bool:
        (operand,) = self._validate(operand)
        return self._delegate(
            "is_perfect_square", OperationType.infer(operand),
            lambda backend: backend.is_perfect_square(operand, precision),
        )

    # =========================================================================
    # ГАММА-ФУНКЦИИ
    # =========================================================================

    def gamma(self, operand: str) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "gamma", OperationType.infer(operand),
            lambda backend: backend.gamma(operand),
        )

    def log_gamma(self, operand: str) -> str:
        (operand,) = self._validate(operand)
        return self._delegate(
            "log_gamma", OperationType.infer(operand),
            lambda backend: backend.log_gamma(operand),
        )

    # =========================================================================
    # ВНУТРЕННЕЕ
    # =========================================================================

    def _validate(self, *operands: Any) -> tuple[str, ...]:
        """
        Валидация операндов и приведение их к тексту.

        Raises:
            InvalidOperand: операнд не является числом
        """
        for operand in operands:
            if not self._validator.is_valid(operand):
                raise InvalidOperand(f"Invalid number: {operand}")
        return tuple(to_text(operand) for operand in operands)

    def _require_whole_positive(self, *operands: Any) -> tuple[str, ...]:
        """
        Операнды валидны, целые и не имеют текстового минуса.

        Raises:
            InvalidOperand: операнд не является числом
            InvalidPrecondition: операнд дробный или отрицательный
        """
        texts = self._validate(*operands)
        if OperationType.infer(*texts) is not OperationType.INT or any(
            is_negative_text(text) for text in texts
        ):
            raise InvalidPrecondition(WHOLE_POSITIVE_MESSAGE)
        return texts

    def _delegates(self, operation: str, operation_type: OperationType) -> Iterator[MathBackend]:
        """Backend'ы, пригодные для операции данного типа, в порядке приоритета"""
        for backend in self._backends:
            if not backend.is_enabled():
                logger.debug("Skipping %s for %s: backend disabled", backend.name, operation)
                continue
            if not backend.supports_operation_type(operation_type):
                logger.debug(
                    "Skipping %s for %s: %s operations not supported",
                    backend.name, operation, operation_type.value,
                )
                continue
            yield backend

    def _delegate(
        self,
        operation: str,
        operation_type: OperationType,
        call: Callable[[MathBackend], T],
    ) -> T:
        """
        Выполнение операции первым успешным backend'ом.

        Raises:
            MathError: последняя зафиксированная ошибка backend'а
            UnknownError: ни один backend не был опрошен
        """
        last_error: MathError | None = None
        for backend in self._delegates(operation, operation_type):
            result = BackendResult.capture(backend, operation, lambda: call(backend))
            if result.ok:
                logger.debug("%s handled %s", backend.name, operation)
                return result.value

            logger.debug("Backend failed: %s", result.error)
            last_error = result.error

        if last_error is not None:
            raise last_error
        raise UnknownError("Unknown error.")

    def __repr__(self) -> str:
        names = ", ".join(backend.name for backend in self._backends)
        return (
            f"MathAdapter(backends=[{names}], "
            f"rounding_strategy={self._rounding_strategy.value!r})"
        )
