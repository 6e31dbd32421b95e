"""
Adapter — публичная точка входа арифметического слоя
"""

from src.adapter.math_adapter import MathAdapter

__all__ = ["MathAdapter"]
