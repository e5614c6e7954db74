"""
Tree Utility Functions

Traversal and structural helpers for expression trees. Traversals are
iterative so they work on trees deeper than the interpreter's recursion limit.
"""

from typing import List, Set, Union

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, VariableNode
from ..core.operators import OpType
from ..expression import Expression

TreeLike = Union[Node, Expression]


def _root_of(tree: TreeLike) -> Node:
    if isinstance(tree, Expression):
        return tree.root
    return tree


def get_all_nodes(tree: TreeLike, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        tree: Root node of the tree, or an Expression
        traversal_order: 'breadth_first' (default) or 'depth_first' (pre-order)

    Returns:
        List of all nodes in the tree
    """
    node = _root_of(tree)
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = [node]
    all_nodes = []
    index = 0

    while index < len(nodes_to_visit):
        current_node = nodes_to_visit[index]
        index += 1
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        # reversed so the left child is visited first
        stack.extend(reversed(current_node.children()))

    return all_nodes


def calculate_tree_depth(tree: TreeLike) -> int:
    """Maximum depth of the tree (leaf nodes have depth 1)"""
    return _root_of(tree).depth()


def count_nodes(tree: TreeLike) -> int:
    return _root_of(tree).size()


def find_nodes_by_operator(tree: TreeLike, op_type: OpType) -> List[Node]:
    """All operator nodes carrying ``op_type``, in pre-order"""
    return [node for node in get_all_nodes(tree, 'depth_first')
            if isinstance(node, (BinaryOpNode, UnaryOpNode)) and node.op_type == op_type]


def get_constants(tree: TreeLike) -> List[ConstantNode]:
    return [node for node in get_all_nodes(tree, 'depth_first') if isinstance(node, ConstantNode)]


def get_variables(tree: TreeLike) -> List[VariableNode]:
    return [node for node in get_all_nodes(tree, 'depth_first') if isinstance(node, VariableNode)]


def node_ids(tree: TreeLike) -> Set[int]:
    return {id(node) for node in get_all_nodes(tree)}


def shares_nodes(first: TreeLike, second: TreeLike) -> bool:
    """True if any node object appears in both trees"""
    return not node_ids(first).isdisjoint(node_ids(second))


def has_internal_aliasing(tree: TreeLike) -> bool:
    """True if some node object is reachable along two different paths"""
    nodes = get_all_nodes(tree)
    return len(nodes) != len({id(node) for node in nodes})
