"""Symbolic Calculus Package

Parses arithmetic expressions over x into immutable trees that can be
evaluated, differentiated symbolically and pretty-printed.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, UnaryOpNode, NodeType, OpType, Associativity,
  make_power, ExpressionValidator, validate_tree_structure
)
from .parser import ExpressionParser, parse, DEFAULT_MAX_DEPTH
from .errors import ExpressionError, ParseError, NotDifferentiableError
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode", "NodeType", "OpType", "Associativity",
  "make_power", "ExpressionValidator", "validate_tree_structure",
  "ExpressionParser", "parse", "DEFAULT_MAX_DEPTH",
  "ExpressionError", "ParseError", "NotDifferentiableError",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
