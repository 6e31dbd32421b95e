"""
Domain types of the arithmetic layer.

Contains operation typing, rounding strategies and adapter configuration.
"""

from src.core.domain.config import DEFAULT_BACKENDS, KNOWN_BACKENDS, MathAdapterConfig
from src.core.domain.operation import OperationType, RoundingStrategy

__all__ = [
    # Operation typing
    "OperationType",
    "RoundingStrategy",
    # Configuration
    "DEFAULT_BACKENDS",
    "KNOWN_BACKENDS",
    "MathAdapterConfig",
]
