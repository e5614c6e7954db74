import numpy as np
import numba
from enum import Enum, IntEnum
from typing import Dict, NamedTuple

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  BINARY_OP = 2
  UNARY_OP = 3

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW_CONST_BASE = 4  # c ^ h
  POW_CONST_EXP = 5   # g ^ c
  POW = 6             # g ^ h, not differentiable
  # Unary ops
  LOG = 7
  PAREN = 8

class Associativity(Enum):
  LEFT_TO_RIGHT = 'left'
  RIGHT_TO_LEFT = 'right'

class OperatorSpec(NamedTuple):
  sign: str
  arity: int
  associativity: Associativity

OPERATOR_TABLE: Dict[OpType, OperatorSpec] = {
  OpType.ADD: OperatorSpec('+', 2, Associativity.LEFT_TO_RIGHT),
  OpType.SUB: OperatorSpec('-', 2, Associativity.LEFT_TO_RIGHT),
  OpType.MUL: OperatorSpec('*', 2, Associativity.LEFT_TO_RIGHT),
  OpType.DIV: OperatorSpec('/', 2, Associativity.LEFT_TO_RIGHT),
  OpType.POW_CONST_BASE: OperatorSpec('^', 2, Associativity.RIGHT_TO_LEFT),
  OpType.POW_CONST_EXP: OperatorSpec('^', 2, Associativity.RIGHT_TO_LEFT),
  OpType.POW: OperatorSpec('^', 2, Associativity.RIGHT_TO_LEFT),
  OpType.LOG: OperatorSpec('log()', 1, Associativity.LEFT_TO_RIGHT),
  OpType.PAREN: OperatorSpec('()', 1, Associativity.LEFT_TO_RIGHT),
}

POWER_OPS = frozenset({OpType.POW_CONST_BASE, OpType.POW_CONST_EXP, OpType.POW})

# Mapping dictionaries used by the parser
ADDITIVE_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB}
MULTIPLICATIVE_OP_MAP = {'*': OpType.MUL, '/': OpType.DIV}
UNARY_OP_MAP = {'log': OpType.LOG}

def is_binary(op_type: OpType) -> bool:
  return OPERATOR_TABLE[op_type].arity == 2

def is_unary(op_type: OpType) -> bool:
  return OPERATOR_TABLE[op_type].arity == 1

# Plain ints so numba freezes them as compile-time constants
_ADD = int(OpType.ADD)
_SUB = int(OpType.SUB)
_MUL = int(OpType.MUL)
_DIV = int(OpType.DIV)
_POW_CONST_BASE = int(OpType.POW_CONST_BASE)
_POW_CONST_EXP = int(OpType.POW_CONST_EXP)
_POW = int(OpType.POW)
_LOG = int(OpType.LOG)
_PAREN = int(OpType.PAREN)

@numba.njit(cache=True, inline='always')
def evaluate_variable(x):
  return x.copy()

@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)

@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, op_type):
  if op_type == _ADD:
    return left_val + right_val
  elif op_type == _SUB:
    return left_val - right_val
  elif op_type == _MUL:
    return left_val * right_val
  elif op_type == _DIV:
    return left_val / right_val
  elif op_type == _POW_CONST_BASE or op_type == _POW_CONST_EXP or op_type == _POW:
    return np.power(left_val, right_val)
  return np.full(left_val.shape[0], np.nan)

@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_op(operand_val, op_type):
  if op_type == _LOG:
    return np.log(operand_val)
  elif op_type == _PAREN:
    return operand_val.copy()
  return np.full(operand_val.shape[0], np.nan)
