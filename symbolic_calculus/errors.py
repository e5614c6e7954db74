"""Exceptions raised by the parser and the expression tree."""

from typing import Any, Optional


class ExpressionError(Exception):
    """Base class for all symbolic_calculus errors"""


class ParseError(ExpressionError, ValueError):
    """
    Raised when a string (or one of its substrings) cannot be parsed.

    The ``expression`` attribute holds the substring that failed, which is
    not necessarily the whole input.
    """

    def __init__(self, expression: str, reason: Optional[str] = None):
        self.expression = expression
        self.reason = reason
        message = f"Cannot parse expression: {expression!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NotDifferentiableError(ExpressionError, ArithmeticError):
    """Raised by differentiate() for a power whose base and exponent both depend on x"""

    def __init__(self, node: Any):
        self.node = node
        super().__init__(f"Cannot differentiate {node.to_string()}: "
                         "neither base nor exponent is a constant")
