"""Expression Tree Module

Node types, operator tables, simplifier, formatter and tree helpers.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    NegateNode,
    BinaryOpNode,
    UnaryOpNode,
    as_binary_op,
    as_function,
    make_binary,
    make_function,
    X, const, neg, add, sub, mul, div, power, exp, log, sin, cos
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    VARIABLE_SYMBOL,
    fold_constants
)
from .utils import (
    ExpressionSimplifier, simplify, format_expression, op_symbol, function_name,
    SymPyBridge, substitute_variable
)

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "NegateNode", "BinaryOpNode", "UnaryOpNode",
    "as_binary_op", "as_function", "make_binary", "make_function",
    "X", "const", "neg", "add", "sub", "mul", "div", "power", "exp", "log", "sin", "cos",
    "NodeType", "OpType", "BINARY_OP_MAP", "UNARY_OP_MAP", "VARIABLE_SYMBOL", "fold_constants",
    "ExpressionSimplifier", "simplify", "format_expression", "op_symbol", "function_name",
    "SymPyBridge", "substitute_variable"
]
