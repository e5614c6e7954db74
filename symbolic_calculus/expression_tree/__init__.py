"""Expression Tree Module

Immutable expression trees over the single variable x.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode,
    make_power,
    format_literal
)
from .core.operators import (
    NodeType,
    OpType,
    Associativity,
    OPERATOR_TABLE,
    evaluate_variable,
    evaluate_constant,
    evaluate_binary_op,
    evaluate_unary_op
)
from .core.derivatives import DERIVATIVE_RULES
from .utils import ExpressionValidator, validate_tree_structure

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode",
    "make_power", "format_literal",
    "NodeType", "OpType", "Associativity", "OPERATOR_TABLE",
    "evaluate_variable", "evaluate_constant", "evaluate_binary_op", "evaluate_unary_op",
    "DERIVATIVE_RULES",
    "ExpressionValidator", "validate_tree_structure"
]
