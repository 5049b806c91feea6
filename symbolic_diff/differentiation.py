"""
Symbolic Differentiation

Structural recursion producing d/dx of an expression tree. Rules are tried
most specific first; unary functions of anything other than the bare variable
go through the general chain rule, which differentiates f(x) once and
substitutes the inner expression back into the result.
"""

from .expression_tree.core.node import (
  Node, VariableNode, ConstantNode, NegateNode,
  as_binary_op, as_function, make_binary, make_function,
  X, const, neg, add, mul, div, power, log
)
from .expression_tree.core.operators import OpType
from .expression_tree.utils.tree_utils import substitute_variable
from .errors import UnsupportedExpressionError, DerivativeCompositionError
from .logging_system import is_verbose, log_debug


def differentiate(node: Node) -> Node:
  """Return the (unsimplified) derivative of `node` with respect to x."""
  if is_verbose():
    log_debug(f"differentiate {node!r}")

  if isinstance(node, VariableNode):
    return const(1.0)

  if isinstance(node, ConstantNode):
    return const(0.0)

  if isinstance(node, NegateNode):
    return neg(differentiate(node.operand))

  view = as_binary_op(node)
  if view is not None:
    return _differentiate_binary(*view)

  function = as_function(node)
  if function is not None:
    op, argument = function
    if isinstance(argument, VariableNode):
      return _function_identity(op)
    return chain_rule(op, argument)

  raise UnsupportedExpressionError(f"Unable to match expression [{node!r}]")


def _differentiate_binary(op: OpType, left: Node, right: Node) -> Node:
  if op in (OpType.ADD, OpType.SUB):
    return make_binary(op, differentiate(left), differentiate(right))

  if op == OpType.MUL:
    # (fg)' = f'g + fg'
    return add(mul(differentiate(left), right), mul(left, differentiate(right)))

  if op == OpType.POW:
    return _differentiate_power(left, right)

  if isinstance(left, ConstantNode) and left.value == 1.0:
    # (1/f)' = -f' / f^2
    return neg(div(differentiate(right), power(right, const(2.0))))

  if isinstance(right, ConstantNode):
    return div(differentiate(left), right)

  # (f/g)' = (f'g - fg') / g^2
  numerator = make_binary(OpType.SUB, mul(differentiate(left), right), mul(left, differentiate(right)))
  return div(numerator, power(right, const(2.0)))


def _differentiate_power(base: Node, exponent: Node) -> Node:
  if isinstance(exponent, ConstantNode):
    n = exponent.value
    outer = mul(const(n), power(base, const(n - 1.0)))
    if isinstance(base, VariableNode):
      return outer
    return mul(outer, differentiate(base))

  if isinstance(base, ConstantNode):
    # (a^g)' = ln(a) a^g g'
    return mul(mul(log(base), power(base, exponent)), differentiate(exponent))

  # (f^g)' = f^g (g' ln f + g f' / f)
  return mul(
    power(base, exponent),
    add(mul(differentiate(exponent), log(base)), div(mul(exponent, differentiate(base)), base))
  )


def _function_identity(op: OpType) -> Node:
  if op == OpType.EXP:
    return make_function(OpType.EXP, X)
  if op == OpType.LOG:
    return div(const(1.0), X)
  if op == OpType.SIN:
    return make_function(OpType.COS, X)
  if op == OpType.COS:
    return neg(make_function(OpType.SIN, X))
  raise UnsupportedExpressionError(f"No derivative known for function {op!r}")


def chain_rule(op: OpType, inner: Node) -> Node:
  """d/dx g(f) = g'(f) * f'"""
  outer_derivative = differentiate(make_function(op, X))
  return compose_derivative(outer_derivative, inner, differentiate(inner))


def compose_derivative(outer_derivative: Node, inner: Node, inner_derivative: Node) -> Node:
  """
  Substitute `inner` for x inside g'(x) and multiply by f'.

  g'(x) must be a function call, an operator node or a negation of one of
  those; anything else cannot be composed.
  """
  shell = outer_derivative.operand if isinstance(outer_derivative, NegateNode) else outer_derivative

  function = as_function(shell)
  if function is not None:
    op, argument = function
    composed = make_function(op, substitute_variable(argument, inner))
  elif as_binary_op(shell) is not None:
    composed = substitute_variable(shell, inner)
  else:
    raise DerivativeCompositionError(f"Unable to match compound function [{outer_derivative!r}]")

  if shell is not outer_derivative:
    composed = neg(composed)
  return mul(composed, inner_derivative)
