"""Utilities for expression trees."""

from .simplifier import ExpressionSimplifier, simplify
from .formatter import format_expression, format_constant, op_symbol, function_name
from .sympy_utils import SymPyBridge
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, contains_variable, map_tree, substitute_variable
)

__all__ = [
    'ExpressionSimplifier', 'simplify',
    'format_expression', 'format_constant', 'op_symbol', 'function_name',
    'SymPyBridge',
    'get_all_nodes', 'calculate_tree_depth', 'contains_variable', 'map_tree',
    'substitute_variable'
]
