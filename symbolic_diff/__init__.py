"""Symbolic Differentiation Package

Parses single-variable infix formulas, differentiates them with respect to x,
reduces the result to a canonical form and renders it back to text.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode, NegateNode,
  BinaryOpNode, UnaryOpNode, OpType,
  as_binary_op, as_function, make_binary, make_function,
  X, const, neg, add, sub, mul, div, power, exp, log, sin, cos,
  simplify, format_expression
)
from .differentiation import differentiate
from .parser import (
  parse_expression, tokenize, level_tokens, group_tokens, parse_token_groups, parse_item
)
from .pipeline import DerivativePipeline, derivative
from .errors import (
  SymbolicDiffError, ParseError, UnsupportedExpressionError, DerivativeCompositionError
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode", "NegateNode",
  "BinaryOpNode", "UnaryOpNode", "OpType",
  "as_binary_op", "as_function", "make_binary", "make_function",
  "X", "const", "neg", "add", "sub", "mul", "div", "power", "exp", "log", "sin", "cos",
  "simplify", "format_expression", "differentiate",
  "parse_expression", "tokenize", "level_tokens", "group_tokens", "parse_token_groups", "parse_item",
  "DerivativePipeline", "derivative",
  "SymbolicDiffError", "ParseError", "UnsupportedExpressionError", "DerivativeCompositionError",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
