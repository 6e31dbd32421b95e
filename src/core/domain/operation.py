"""
Operation — типы операций и стратегии округления

OperationType выводится для каждого вызова по форме десятичного текста:
если хотя бы один операнд содержит '.', операция FLOAT, иначе INT.

RoundingStrategy — закрытое множество правил разрешения "ничьих" при
округлении до заданной точности.
"""

from decimal import ROUND_HALF_DOWN, ROUND_HALF_EVEN, ROUND_HALF_UP
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class OperationType(str, Enum):
    """Тип операции, определяющий подходящие backend'ы"""

    INT = "int"
    FLOAT = "float"

    @classmethod
    def infer(cls, *operands: str) -> "OperationType":
        """
        Вывод типа операции по тексту операндов.

        Args:
            operands: Десятичные тексты операндов

        Returns:
            FLOAT если хотя бы один операнд содержит '.', иначе INT

        Examples:
            >>> OperationType.infer("2", "2")
            <OperationType.INT: 'int'>
            >>> OperationType.infer("2", "2.5")
            <OperationType.FLOAT: 'float'>
        """
        if any("." in operand for operand in operands):
            return cls.FLOAT
        return cls.INT


class RoundingStrategy(str, Enum):
    """Правило округления половинных значений"""

    HALF_UP = "half-up"
    HALF_DOWN = "half-down"
    HALF_EVEN = "half-even"
    HALF_ODD = "half-odd"

    @property
    def decimal_rounding(self) -> str | None:
        """
        Соответствующая константа модуля decimal.

        Returns:
            Константа ROUND_HALF_* или None для HALF_ODD
            (в decimal нет аналога, округление выполняется вручную)
        """
        return _DECIMAL_ROUNDING.get(self)


_DECIMAL_ROUNDING: dict[RoundingStrategy, str] = {
    RoundingStrategy.HALF_UP: ROUND_HALF_UP,
    RoundingStrategy.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingStrategy.HALF_EVEN: ROUND_HALF_EVEN,
}
