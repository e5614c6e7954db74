import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Tuple
from .operators import (
  NodeType, OpType, Associativity, OPERATOR_TABLE, POWER_OPS,
  is_binary, is_unary,
  evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op
)
from ...errors import NotDifferentiableError
from ...logging_system import log_debug

VARIABLE_NAME = 'x'


def format_literal(value: float) -> str:
  """Canonical text of a literal: shortest round-trip repr, with NaN and Infinity spelled out.

  Matches the ``1.0E7`` style scientific notation of other runtimes only for
  magnitudes between 1e-3 and 1e7; outside that range Python prints
  ``10000000.0`` and ``1e-05``.
  """
  if np.isnan(value):
    return 'NaN'
  if np.isinf(value):
    return 'Infinity' if value > 0 else '-Infinity'
  return repr(float(value))


class Node(ABC):
  """Immutable expression tree node.

  Nodes are fully formed by their constructor; assigning to any attribute
  afterwards raises AttributeError. Subclasses set their fields through
  ``_init_field``.
  """

  __slots__ = ('_hash', '_size', '_depth')

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} is immutable; cannot set {name!r}")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {name!r}")

  def _init_field(self, name: str, value):
    object.__setattr__(self, name, value)

  @abstractmethod
  def evaluate(self, x: np.ndarray) -> np.ndarray:
    pass

  @abstractmethod
  def differentiate(self) -> 'Node':
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def convert_to_string(self, indent_level: int) -> str:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @property
  @abstractmethod
  def node_type(self) -> NodeType:
    pass

  def children(self) -> Tuple['Node', ...]:
    return ()

  def size(self) -> int:
    return self._size

  def depth(self) -> int:
    return self._depth

  def __hash__(self) -> int:
    return self._hash

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()})"


class VariableNode(Node):
  __slots__ = ()

  def __init__(self):
    self._init_field('_hash', hash((NodeType.VARIABLE, VARIABLE_NAME)))
    self._init_field('_size', 1)
    self._init_field('_depth', 1)

  @property
  def node_type(self) -> NodeType:
    return NodeType.VARIABLE

  def evaluate(self, x: np.ndarray) -> np.ndarray:
    return evaluate_variable(x)

  def differentiate(self) -> 'ConstantNode':
    return ConstantNode(1.0)

  def copy(self) -> 'VariableNode':
    return VariableNode()

  def convert_to_string(self, indent_level: int) -> str:
    return '\t' * indent_level + VARIABLE_NAME + '\n'

  def to_string(self) -> str:
    return VARIABLE_NAME

  def to_sympy(self) -> sp.Symbol:
    return sp.Symbol(VARIABLE_NAME)


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    value = float(value)
    self._init_field('value', value)
    self._init_field('_hash', hash((NodeType.CONSTANT, format_literal(value))))
    self._init_field('_size', 1)
    self._init_field('_depth', 1)

  @property
  def node_type(self) -> NodeType:
    return NodeType.CONSTANT

  def evaluate(self, x: np.ndarray) -> np.ndarray:
    return evaluate_constant(x.shape[0], self.value)

  def differentiate(self) -> 'ConstantNode':
    return ConstantNode(0.0)

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def convert_to_string(self, indent_level: int) -> str:
    return '\t' * indent_level + format_literal(self.value) + '\n'

  def to_string(self) -> str:
    return format_literal(self.value)

  def to_sympy(self) -> sp.Expr:
    return sp.sympify(self.value)


class BinaryOpNode(Node):
  __slots__ = ('op_type', 'left', 'right')

  def __init__(self, op_type: OpType, left: Node, right: Node):
    op_type = OpType(op_type)
    if not is_binary(op_type):
      raise ValueError(f"{op_type.name} is not a binary operator")
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("BinaryOpNode children must both be Node instances")
    if op_type in POWER_OPS and op_type != classify_power(left, right):
      raise ValueError(f"{op_type.name} does not match operands; build powers with make_power()")
    self._init_field('op_type', op_type)
    self._init_field('left', left)
    self._init_field('right', right)
    self._init_field('_hash', hash((NodeType.BINARY_OP, op_type, hash(left), hash(right))))
    self._init_field('_size', 1 + left.size() + right.size())
    self._init_field('_depth', 1 + max(left.depth(), right.depth()))

  @property
  def node_type(self) -> NodeType:
    return NodeType.BINARY_OP

  @property
  def sign(self) -> str:
    return OPERATOR_TABLE[self.op_type].sign

  @property
  def associativity(self) -> Associativity:
    return OPERATOR_TABLE[self.op_type].associativity

  def children(self) -> Tuple[Node, Node]:
    return (self.left, self.right)

  def evaluate(self, x: np.ndarray) -> np.ndarray:
    if self.associativity is Associativity.RIGHT_TO_LEFT:
      right_val = self.right.evaluate(x)
      left_val = self.left.evaluate(x)
    else:
      left_val = self.left.evaluate(x)
      right_val = self.right.evaluate(x)
    return evaluate_binary_op(left_val, right_val, int(self.op_type))

  def differentiate(self) -> Node:
    from .derivatives import DERIVATIVE_RULES
    rule = DERIVATIVE_RULES[self.op_type]
    if rule is None:
      log_debug(f"No derivative rule for {self.op_type.name} at {self.to_string()}")
      raise NotDifferentiableError(self)
    return rule(self.left, self.right)

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.op_type, self.left.copy(), self.right.copy())

  def convert_to_string(self, indent_level: int) -> str:
    return ('\t' * indent_level + self.sign + '\n'
            + self.left.convert_to_string(indent_level + 1)
            + self.right.convert_to_string(indent_level + 1))

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.sign} {self.right.to_string()})"

  def to_sympy(self) -> sp.Expr:
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.op_type == OpType.ADD:
      return sp.Add(left, right)
    elif self.op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op_type == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    elif self.op_type in POWER_OPS:
      return sp.Pow(left, right)
    raise RuntimeError(f"to_sympy reached unexpected binary operation {self.op_type.name}")


class UnaryOpNode(Node):
  __slots__ = ('op_type', 'operand')

  def __init__(self, op_type: OpType, operand: Node):
    op_type = OpType(op_type)
    if not is_unary(op_type):
      raise ValueError(f"{op_type.name} is not a unary operator")
    if not isinstance(operand, Node):
      raise TypeError("UnaryOpNode operand must be a Node instance")
    self._init_field('op_type', op_type)
    self._init_field('operand', operand)
    self._init_field('_hash', hash((NodeType.UNARY_OP, op_type, hash(operand))))
    self._init_field('_size', 1 + operand.size())
    self._init_field('_depth', 1 + operand.depth())

  @property
  def node_type(self) -> NodeType:
    return NodeType.UNARY_OP

  @property
  def sign(self) -> str:
    return OPERATOR_TABLE[self.op_type].sign

  def children(self) -> Tuple[Node]:
    return (self.operand,)

  def evaluate(self, x: np.ndarray) -> np.ndarray:
    return evaluate_unary_op(self.operand.evaluate(x), int(self.op_type))

  def differentiate(self) -> Node:
    from .derivatives import DERIVATIVE_RULES
    return DERIVATIVE_RULES[self.op_type](self.operand)

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.op_type, self.operand.copy())

  def convert_to_string(self, indent_level: int) -> str:
    return ('\t' * indent_level + self.sign + '\n'
            + self.operand.convert_to_string(indent_level + 1))

  def to_string(self) -> str:
    inner = self.operand.to_string()
    if self.op_type == OpType.LOG:
      return f"log({inner})"
    # binary operands already carry their own parentheses
    if isinstance(self.operand, BinaryOpNode):
      return inner
    return f"({inner})"

  def to_sympy(self) -> sp.Expr:
    operand = self.operand.to_sympy()
    if self.op_type == OpType.LOG:
      return sp.log(operand)
    elif self.op_type == OpType.PAREN:
      return operand
    raise RuntimeError(f"to_sympy reached unexpected unary operation {self.op_type.name}")


def classify_power(base: Node, exponent: Node) -> OpType:
  """Pick the power tag for ``base ^ exponent``; a literal exponent wins over a literal base"""
  if isinstance(exponent, ConstantNode):
    return OpType.POW_CONST_EXP
  if isinstance(base, ConstantNode):
    return OpType.POW_CONST_BASE
  return OpType.POW


def make_power(base: Node, exponent: Node) -> BinaryOpNode:
  return BinaryOpNode(classify_power(base, exponent), base, exponent)
