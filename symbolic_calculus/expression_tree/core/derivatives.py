"""
Differentiation Rules

One pure rule per operator tag. A binary rule receives the original
(undifferentiated) ``left`` and ``right`` children, a unary rule its single
operand, and returns a brand-new subtree for d/dx of the node.

Every rule copies an operand before placing it in the result, including
operands it only uses once, so the derivative never shares a node with the
source tree. ``None`` marks an operator with no derivative rule.
"""

from typing import Callable, Dict, Optional

from .node import (
  Node, ConstantNode, BinaryOpNode, UnaryOpNode, make_power
)
from .operators import OpType


def _add(left: Node, right: Node) -> Node:
  return BinaryOpNode(OpType.ADD, left, right)


def _sub(left: Node, right: Node) -> Node:
  return BinaryOpNode(OpType.SUB, left, right)


def _mul(left: Node, right: Node) -> Node:
  return BinaryOpNode(OpType.MUL, left, right)


def _div(left: Node, right: Node) -> Node:
  return BinaryOpNode(OpType.DIV, left, right)


def derive_add(g: Node, h: Node) -> Node:
  """d(g + h) = d(g) + d(h)"""
  return _add(g.differentiate(), h.differentiate())


def derive_sub(g: Node, h: Node) -> Node:
  """d(g - h) = d(g) - d(h)"""
  return _sub(g.differentiate(), h.differentiate())


def derive_mul(g: Node, h: Node) -> Node:
  """Product rule: g*d(h) + d(g)*h"""
  return _add(_mul(g.copy(), h.differentiate()),
              _mul(g.differentiate(), h.copy()))


def derive_div(g: Node, h: Node) -> Node:
  """Quotient rule written as d(g)/h - g*(d(h)/h^2)"""
  h_squared = make_power(h.copy(), ConstantNode(2.0))
  return _sub(_div(g.differentiate(), h.copy()),
              _mul(g.copy(), _div(h.differentiate(), h_squared)))


def derive_pow_const_base(c: ConstantNode, h: Node) -> Node:
  """Exponential rule: log(c) * c^h * d(h)"""
  log_c = UnaryOpNode(OpType.LOG, c.copy())
  return _mul(_mul(log_c, make_power(c.copy(), h.copy())),
              h.differentiate())


def derive_pow_const_exp(g: Node, c: ConstantNode) -> Node:
  """Power rule: c * g^(c-1) * d(g)"""
  # c-1 is folded into one literal so the new power keeps a constant exponent
  lowered = make_power(g.copy(), ConstantNode(c.value - 1.0))
  return _mul(_mul(c.copy(), lowered), g.differentiate())


def derive_log(g: Node) -> Node:
  """d(log(g)) = d(g) / g"""
  return _div(g.differentiate(), g.copy())


def derive_paren(g: Node) -> Node:
  """d((g)) = (d(g))"""
  return UnaryOpNode(OpType.PAREN, g.differentiate())


DERIVATIVE_RULES: Dict[OpType, Optional[Callable[..., Node]]] = {
  OpType.ADD: derive_add,
  OpType.SUB: derive_sub,
  OpType.MUL: derive_mul,
  OpType.DIV: derive_div,
  OpType.POW_CONST_BASE: derive_pow_const_base,
  OpType.POW_CONST_EXP: derive_pow_const_exp,
  # g(x)^h(x) needs the generalised exponent rule, which is not supported
  OpType.POW: None,
  OpType.LOG: derive_log,
  OpType.PAREN: derive_paren,
}
