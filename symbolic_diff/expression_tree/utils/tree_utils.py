"""
Tree Utility Functions

Traversal and rewriting helpers shared by the differentiator, the
Expression wrapper and the tests.
"""

from typing import List, Callable

from ..core.node import (
    Node, VariableNode, ConstantNode, NegateNode, BinaryOpNode, UnaryOpNode,
    make_binary, make_function, neg
)
from ...errors import UnsupportedExpressionError


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first traversal (recursive)"""
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    children = node.children()
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def contains_variable(node: Node) -> bool:
    return any(isinstance(n, VariableNode) for n in _depth_first_traversal(node))


def map_tree(node: Node, fn: Callable[[Node], Node]) -> Node:
    """
    Rebuild the tree bottom-up, replacing each leaf by fn(leaf).

    Interior nodes are rebuilt with the same operator; the input tree is
    left untouched.
    """
    if isinstance(node, (VariableNode, ConstantNode)):
        return fn(node)
    elif isinstance(node, NegateNode):
        return neg(map_tree(node.operand, fn))
    elif isinstance(node, BinaryOpNode):
        return make_binary(node.op, map_tree(node.left, fn), map_tree(node.right, fn))
    elif isinstance(node, UnaryOpNode):
        return make_function(node.op, map_tree(node.operand, fn))
    raise UnsupportedExpressionError(f"Unable to rebuild expression [{node!r}]")


def substitute_variable(node: Node, replacement: Node) -> Node:
    """Replace every occurrence of the variable with `replacement`."""
    return map_tree(node, lambda leaf: replacement if isinstance(leaf, VariableNode) else leaf)
