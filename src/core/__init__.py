"""
Core building blocks of the arithmetic layer.

Contains the error taxonomy, domain types (operation typing, rounding
strategies, configuration), pure numeric primitives and the configuration
contract. Nothing here depends on a particular numeric backend.
"""
