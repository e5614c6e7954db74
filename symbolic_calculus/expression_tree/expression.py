import numpy as np
import sympy as sp
from typing import Optional, Union
from .core.node import Node

ArrayLike = Union[float, int, np.ndarray]


class Expression:
  """Public handle on an expression tree root with a cached infix string"""

  __slots__ = ('_root', '_string_cache')

  def __init__(self, root: Node):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self._root = root
    self._string_cache: Optional[str] = None

  @property
  def root(self) -> Node:
    return self._root

  def evaluate(self, x: ArrayLike) -> Union[float, np.ndarray]:
    """Value at ``x``; a scalar gives a float, an array gives an array of the same shape"""
    x_arr = np.asarray(x, dtype=np.float64)
    flat = np.ascontiguousarray(x_arr.reshape(-1))
    result = self._root.evaluate(flat)
    if x_arr.ndim == 0:
      return float(result[0])
    return result.reshape(x_arr.shape)

  def differentiate(self) -> 'Expression':
    """New, fully independent expression for d/dx.

    Raises NotDifferentiableError when a power has x on both sides.
    """
    return Expression(self._root.differentiate())

  def deep_copy(self) -> 'Expression':
    return Expression(self._root.copy())

  copy = deep_copy

  def convert_to_string(self, indent_level: int = 0) -> str:
    if isinstance(indent_level, bool) or not isinstance(indent_level, (int, np.integer)):
      raise TypeError("indent_level must be an integer")
    if indent_level < 0:
      raise ValueError("indent_level must be non-negative")
    return self._root.convert_to_string(int(indent_level))

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self._root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    return self._root.to_sympy()

  def size(self) -> int:
    """Node count"""
    return self._root.size()

  def depth(self) -> int:
    return self._root.depth()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()})"

  def __hash__(self) -> int:
    return hash(self._root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    if hash(self) != hash(other):
      return False
    return self.convert_to_string() == other.convert_to_string()
