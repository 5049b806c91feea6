"""
Expression Formatter

Renders an expression tree as infix text that the parser reads back into the
same tree. Binary nodes are wrapped in parentheses based on their parent
node and on which side of it they sit; function arguments start a fresh
context, so `sin(x + 1)` carries no extra parentheses.
"""

import math
from typing import Optional

from ..core.node import Node, VariableNode, ConstantNode, NegateNode, BinaryOpNode, UnaryOpNode
from ..core.operators import OpType, PRECEDENCE, VARIABLE_SYMBOL
from ...errors import UnsupportedExpressionError


def format_constant(value: float) -> str:
  """Shortest text that parses back to the same float; integral values lose the '.0'."""
  if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
    return str(int(value))
  return repr(value)


def op_symbol(node: Node) -> str:
  if isinstance(node, BinaryOpNode):
    return node.symbol
  raise UnsupportedExpressionError(f"No operator symbol for expression [{node!r}]")


def function_name(node: Node) -> str:
  if isinstance(node, UnaryOpNode):
    return node.name
  raise UnsupportedExpressionError(f"No function name for expression [{node!r}]")


def _needs_parentheses(node: BinaryOpNode, parent: Optional[Node], is_right: bool) -> bool:
  if parent is None or isinstance(parent, UnaryOpNode):
    return False
  if isinstance(parent, NegateNode):
    return True
  precedence = PRECEDENCE[node.op]
  parent_precedence = PRECEDENCE[parent.op]
  if precedence != parent_precedence:
    return precedence < parent_precedence
  # Same level: left-to-right grouping keeps the left operand bare
  return is_right or parent.op == OpType.POW


def _format(node: Node, parent: Optional[Node], is_right: bool) -> str:
  if isinstance(node, VariableNode):
    return VARIABLE_SYMBOL

  # Anything that starts with '-' is wrapped when it is an operand of + - * / ^
  if isinstance(node, ConstantNode):
    text = format_constant(node.value)
    if text.startswith('-') and isinstance(parent, BinaryOpNode):
      return f"({text})"
    return text

  if isinstance(node, NegateNode):
    text = '-' + _format(node.operand, node, False)
    if isinstance(parent, BinaryOpNode):
      return f"({text})"
    return text

  if isinstance(node, BinaryOpNode):
    text = (f"{_format(node.left, node, False)} {op_symbol(node)} "
            f"{_format(node.right, node, True)}")
    if _needs_parentheses(node, parent, is_right):
      return f"({text})"
    return text

  if isinstance(node, UnaryOpNode):
    argument = _format(node.operand, None, False)
    if node.op == OpType.EXP:
      return f"e^({argument})"
    return f"{function_name(node)}({argument})"

  raise UnsupportedExpressionError(f"Unable to format expression [{node!r}]")


def format_expression(node: Node) -> str:
  """Render `node` as infix text."""
  return _format(node, None, False)
