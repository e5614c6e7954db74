import numpy as np
from typing import List, Optional
from ..core.node import Node, ConstantNode
from .tree_utils import get_all_nodes, has_internal_aliasing


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, x: Optional[np.ndarray] = None,
                          allow_non_finite: bool = True) -> bool:
    """Structural check, plus a finite-value check on sample points when ``x`` is given"""
    if ExpressionValidator.structural_errors(node, allow_non_finite):
      return False

    if x is not None:
      return ExpressionValidator._test_evaluation(node, x)

    return True

  @staticmethod
  def structural_errors(node: Node, allow_non_finite: bool = True) -> List[str]:
    """Human-readable list of structural problems in the tree; empty when valid"""
    errors = []
    if has_internal_aliasing(node):
      errors.append("tree shares a node between two parents")

    if not allow_non_finite:
      for current in get_all_nodes(node):
        if isinstance(current, ConstantNode) and not np.isfinite(current.value):
          errors.append(f"non-finite literal {current.to_string()}")

    return errors

  @staticmethod
  def _test_evaluation(node: Node, x: np.ndarray) -> bool:
    x = np.ascontiguousarray(np.asarray(x, dtype=np.float64).reshape(-1))
    result = node.evaluate(x)
    return bool(np.all(np.isfinite(result)))


def validate_tree_structure(node: Node) -> bool:
  return not ExpressionValidator.structural_errors(node)
