"""Core expression tree components."""

from .node import (
    Node, VariableNode, ConstantNode, NegateNode, BinaryOpNode, UnaryOpNode,
    as_binary_op, as_function, make_binary, make_function,
    X, const, neg, add, sub, mul, div, power, exp, log, sin, cos
)
from .operators import (
    NodeType, OpType, BINARY_OPS, UNARY_OPS, BINARY_OP_MAP, UNARY_OP_MAP,
    BINARY_OP_SYMBOLS, UNARY_OP_NAMES, PRECEDENCE, VARIABLE_SYMBOL,
    fold_constants, evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op
)

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'NegateNode', 'BinaryOpNode', 'UnaryOpNode',
    'as_binary_op', 'as_function', 'make_binary', 'make_function',
    'X', 'const', 'neg', 'add', 'sub', 'mul', 'div', 'power', 'exp', 'log', 'sin', 'cos',
    'NodeType', 'OpType', 'BINARY_OPS', 'UNARY_OPS', 'BINARY_OP_MAP', 'UNARY_OP_MAP',
    'BINARY_OP_SYMBOLS', 'UNARY_OP_NAMES', 'PRECEDENCE', 'VARIABLE_SYMBOL',
    'fold_constants', 'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op'
]
