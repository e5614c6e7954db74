"""
Expression Parser

Recursive-descent parser for arithmetic over the single variable x.

Grammar (loosest binding first)::

    S -> A
    A -> A ('+' | '-') M | M        left-associative
    M -> M ('*' | '/') E | E        left-associative
    E -> P '^' E | P                right-associative
    P -> 'log' '(' S ')' | '(' S ')' | L | V
    L -> decimal or scientific float literal, optionally signed
    V -> 'x'

The left-recursive tiers scan right to left so the rightmost operator at
parenthesis depth 0 becomes the root, which gives left associativity. The
power tier scans left to right so the leftmost '^' becomes the root, which
gives right associativity.
"""

import re
from enum import Enum
from typing import Iterable, Tuple

from .errors import ParseError
from .expression_tree import Expression
from .expression_tree.core.node import (
  Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode, make_power, VARIABLE_NAME
)
from .expression_tree.core.operators import (
  ADDITIVE_OP_MAP, MULTIPLICATIVE_OP_MAP, UNARY_OP_MAP, OpType
)
from .logging_system import LogLevel, log_info, log_warning, log_parse_failure

DEFAULT_MAX_DEPTH = 100

POWER_SIGN = '^'

# Optional sign, then NaN, Infinity, digits[.digits][exp] or .digits[exp].
# Hexadecimal floats and f/d type suffixes are not accepted.
LITERAL_PATTERN = re.compile(
  r'[+-]?(?:NaN|Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)', re.ASCII
)

# A numeric mantissa ending right before an exponent marker, e.g. the "2.5" in "2.5e-3"
_MANTISSA_TAIL = re.compile(r'(?<![\w.])(?:\d+\.?\d*|\.\d+)$', re.ASCII)

_SIGN_PRECEDERS = frozenset('+-*/^(')


class ScanDirection(Enum):
  LEFT_TO_RIGHT = 'left_to_right'
  RIGHT_TO_LEFT = 'right_to_left'


def _is_sign(text: str, index: int) -> bool:
  """True if the '+'/'-' at ``index`` is a literal's sign rather than a binary operator"""
  if index == 0:
    return True
  previous = text[index - 1]
  if previous in _SIGN_PRECEDERS:
    return True
  if previous in 'eE' and _MANTISSA_TAIL.search(text[:index - 1]):
    return True
  return False


def find_operator(text: str, operators: Iterable[str], direction: ScanDirection) -> int:
  """
  Index of the first operator at parenthesis depth 0, scanning in ``direction``.

  Returns -1 when there is none. The whole string is scanned so that an
  unclosed or over-closed parenthesis fails here, at the tier that sees it.
  """
  operators = frozenset(operators)
  if direction is ScanDirection.RIGHT_TO_LEFT:
    indices = range(len(text) - 1, -1, -1)
    opening, closing = ')', '('
  else:
    indices = range(len(text))
    opening, closing = '(', ')'

  depth = 0
  found = -1
  for index in indices:
    char = text[index]
    if char == opening:
      depth += 1
    elif char == closing:
      depth -= 1
      if depth < 0:
        raise ParseError(text, "unbalanced parentheses")
    elif (depth == 0 and found < 0 and char in operators
          and not (char in '+-' and _is_sign(text, index))):
      found = index

  if depth != 0:
    raise ParseError(text, "unbalanced parentheses")
  return found


def matching_paren(text: str, open_index: int) -> int:
  """Index of the ')' closing the '(' at ``open_index``, or -1"""
  depth = 0
  for index in range(open_index, len(text)):
    if text[index] == '(':
      depth += 1
    elif text[index] == ')':
      depth -= 1
      if depth == 0:
        return index
  return -1


class ExpressionParser:
  """Parses strings into immutable expression trees.

  ``max_depth`` bounds the depth of the produced tree; deeper input raises
  ParseError instead of exhausting the interpreter stack. Depth is tree
  depth, not parenthesis nesting: each operator of a left-associative chain
  adds a level, so with the default of 100 a sum of 100 terms parses and one
  of 101 terms does not.
  """

  def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
      raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}")
    self.max_depth = max_depth

  def parse(self, text: str) -> Expression:
    if not isinstance(text, str):
      raise TypeError(f"Expected a string to parse, got {type(text).__name__}")

    stripped = ''.join(text.split())
    try:
      root = self._parse_additive(stripped, 1)
    except ParseError as exc:
      log_parse_failure(text, exc.expression, exc.reason)
      raise
    except RecursionError as exc:
      log_warning(f"Recursion limit hit while parsing {stripped!r}; lower max_depth")
      raise ParseError(stripped, "expression nested too deeply") from exc

    log_info(f"Parsed {stripped!r} into {root.size()} nodes (depth {root.depth()})",
             LogLevel.DETAILED)
    return Expression(root)

  def _enter(self, text: str, depth: int):
    if not text:
      raise ParseError(text, "empty expression")
    if depth > self.max_depth:
      raise ParseError(text, f"nesting deeper than {self.max_depth}")

  @staticmethod
  def _split(text: str, index: int) -> Tuple[str, str, str]:
    prefix, operator, suffix = text[:index], text[index], text[index + 1:]
    if not prefix or not suffix:
      raise ParseError(text, f"missing operand for {operator!r}")
    return prefix, operator, suffix

  def _parse_additive(self, text: str, depth: int) -> Node:
    self._enter(text, depth)
    index = find_operator(text, ADDITIVE_OP_MAP, ScanDirection.RIGHT_TO_LEFT)
    if index < 0:
      return self._parse_multiplicative(text, depth)
    prefix, operator, suffix = self._split(text, index)
    left = self._parse_additive(prefix, depth + 1)
    right = self._parse_multiplicative(suffix, depth + 1)
    return BinaryOpNode(ADDITIVE_OP_MAP[operator], left, right)

  def _parse_multiplicative(self, text: str, depth: int) -> Node:
    self._enter(text, depth)
    index = find_operator(text, MULTIPLICATIVE_OP_MAP, ScanDirection.RIGHT_TO_LEFT)
    if index < 0:
      return self._parse_power(text, depth)
    prefix, operator, suffix = self._split(text, index)
    left = self._parse_multiplicative(prefix, depth + 1)
    right = self._parse_power(suffix, depth + 1)
    return BinaryOpNode(MULTIPLICATIVE_OP_MAP[operator], left, right)

  def _parse_power(self, text: str, depth: int) -> Node:
    self._enter(text, depth)
    index = find_operator(text, POWER_SIGN, ScanDirection.LEFT_TO_RIGHT)
    if index < 0:
      return self._parse_primary(text, depth)
    base_text, _, exponent_text = self._split(text, index)
    base = self._parse_primary(base_text, depth + 1)
    exponent = self._parse_power(exponent_text, depth + 1)
    # the power's differentiation rule is fixed here, from the operand kinds
    return make_power(base, exponent)

  def _parse_primary(self, text: str, depth: int) -> Node:
    self._enter(text, depth)

    for name, op_type in UNARY_OP_MAP.items():
      if text.startswith(name + '(') and matching_paren(text, len(name)) == len(text) - 1:
        return UnaryOpNode(op_type, self._parse_group(text, len(name) + 1, depth))

    if text[0] == '(' and matching_paren(text, 0) == len(text) - 1:
      return UnaryOpNode(OpType.PAREN, self._parse_group(text, 1, depth))

    literal = self.parse_literal(text)
    if literal is not None:
      return literal

    variable = self.parse_variable(text)
    if variable is not None:
      return variable

    raise ParseError(text, "not a literal, the variable x, or a parenthesised group")

  def _parse_group(self, text: str, start: int, depth: int) -> Node:
    inner = text[start:-1]
    if not inner:
      raise ParseError(text, "empty parentheses")
    return self._parse_additive(inner, depth + 1)

  @staticmethod
  def parse_literal(text: str):
    if LITERAL_PATTERN.fullmatch(text):
      return ConstantNode(float(text))
    return None

  @staticmethod
  def parse_variable(text: str):
    if text == VARIABLE_NAME:
      return VariableNode()
    return None


_DEFAULT_PARSER = ExpressionParser()


def parse(text: str) -> Expression:
  """Parse ``text`` with the default parser; raises ParseError if it is malformed"""
  return _DEFAULT_PARSER.parse(text)
