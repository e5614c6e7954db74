"""Utilities for expression trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, count_nodes,
    find_nodes_by_operator, get_constants, get_variables,
    node_ids, shares_nodes, has_internal_aliasing
)
from .validator import ExpressionValidator, validate_tree_structure

__all__ = [
    'get_all_nodes', 'calculate_tree_depth', 'count_nodes',
    'find_nodes_by_operator', 'get_constants', 'get_variables',
    'node_ids', 'shares_nodes', 'has_internal_aliasing',
    'ExpressionValidator', 'validate_tree_structure'
]
