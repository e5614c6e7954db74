"""Core expression tree components."""

from .node import (
    Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode,
    classify_power, make_power, format_literal
)
from .operators import (
    NodeType, OpType, Associativity, OperatorSpec, OPERATOR_TABLE, POWER_OPS,
    ADDITIVE_OP_MAP, MULTIPLICATIVE_OP_MAP, UNARY_OP_MAP,
    evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op
)
from .derivatives import DERIVATIVE_RULES

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode',
    'classify_power', 'make_power', 'format_literal',
    'NodeType', 'OpType', 'Associativity', 'OperatorSpec', 'OPERATOR_TABLE', 'POWER_OPS',
    'ADDITIVE_OP_MAP', 'MULTIPLICATIVE_OP_MAP', 'UNARY_OP_MAP',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op',
    'DERIVATIVE_RULES'
]
