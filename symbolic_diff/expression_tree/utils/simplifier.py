from typing import Optional
from ..core.node import (
  Node, ConstantNode, NegateNode, BinaryOpNode,
  as_binary_op, make_binary, const, neg, add, sub, mul, div
)
from ..core.operators import OpType, fold_constants
from ...logging_system import is_verbose, log_debug


def _is_const(node: Node, value: Optional[float] = None) -> bool:
  if not isinstance(node, ConstantNode):
    return False
  return value is None or node.value == value


def _scaled_term(node: Node):
  """Split `c * e` into (c, e); any other node is (1, node)."""
  if isinstance(node, BinaryOpNode) and node.op == OpType.MUL and _is_const(node.left):
    return node.left.value, node.right
  return 1.0, node


class ExpressionSimplifier:
  """
  Rewrites a tree to its canonical reduced form.

  Rules are tried top-down against the current node, constant folding first.
  Every rule either shrinks the tree or moves a constant to its canonical
  side (right of a sum, left of a product); none of them produces a shape
  that another rule rewrites back. Extensions to the table must keep that
  property or simplify() stops terminating.
  """

  @staticmethod
  def simplify(node: Node) -> Node:
    if isinstance(node, NegateNode):
      return ExpressionSimplifier._simplify_negate(node)

    view = as_binary_op(node)
    if view is None:
      # Variables, constants and function calls are left alone
      return node
    op, left, right = view

    if _is_const(left) and _is_const(right):
      return const(fold_constants(op, left.value, right.value))

    if op == OpType.ADD:
      rewritten = ExpressionSimplifier._simplify_add(left, right)
    elif op == OpType.SUB:
      rewritten = ExpressionSimplifier._simplify_sub(left, right)
    elif op == OpType.MUL:
      rewritten = ExpressionSimplifier._simplify_mul(left, right)
    elif op == OpType.DIV:
      rewritten = ExpressionSimplifier._simplify_div(left, right)
    else:
      rewritten = ExpressionSimplifier._simplify_pow(left, right)

    if rewritten is not None:
      return rewritten
    return ExpressionSimplifier._simplify_children(node, op, left, right)

  @staticmethod
  def _rewrite(rule: str, result: Node) -> Node:
    if is_verbose():
      log_debug(f"simplify[{rule}] -> {result!r}")
    return ExpressionSimplifier.simplify(result)

  @staticmethod
  def _simplify_negate(node: NegateNode) -> Node:
    operand = node.operand
    if _is_const(operand, 0.0):
      return const(0.0)
    if _is_const(operand):
      return const(-operand.value)
    if isinstance(operand, NegateNode):
      return ExpressionSimplifier._rewrite('double-negation', operand.operand)
    simplified = ExpressionSimplifier.simplify(operand)
    if simplified != operand:
      return ExpressionSimplifier.simplify(neg(simplified))
    return node

  @staticmethod
  def _simplify_add(left: Node, right: Node) -> Optional[Node]:
    rewrite = ExpressionSimplifier._rewrite
    if _is_const(right, 0.0):
      return rewrite('add-zero', left)
    if _is_const(left, 0.0):
      return rewrite('add-zero', right)
    if _is_const(left):
      return rewrite('add-constant-right', add(right, left))
    if isinstance(right, NegateNode):
      return rewrite('add-negation', sub(left, right.operand))
    if isinstance(left, NegateNode):
      return rewrite('add-negation', sub(right, left.operand))

    left_factor, left_term = _scaled_term(left)
    right_factor, right_term = _scaled_term(right)
    if left_term == right_term:
      return rewrite('collect-terms', mul(const(left_factor + right_factor), left_term))
    return None

  @staticmethod
  def _simplify_sub(left: Node, right: Node) -> Optional[Node]:
    rewrite = ExpressionSimplifier._rewrite
    if _is_const(right, 0.0):
      return rewrite('sub-zero', left)
    if _is_const(left, 0.0):
      return rewrite('sub-from-zero', neg(right))
    if isinstance(right, NegateNode):
      return rewrite('sub-negation', add(left, right.operand))
    if left == right:
      return const(0.0)
    return None

  @staticmethod
  def _simplify_mul(left: Node, right: Node) -> Optional[Node]:
    rewrite = ExpressionSimplifier._rewrite
    if _is_const(right, 1.0):
      return rewrite('mul-one', left)
    if _is_const(left, 1.0):
      return rewrite('mul-one', right)
    if _is_const(right, 0.0) or _is_const(left, 0.0):
      return const(0.0)
    if _is_const(right):
      return rewrite('mul-constant-left', mul(right, left))

    if _is_const(left):
      # c1 * (c2 * e) and c1 * (c2 / e) merge the constants
      inner = as_binary_op(right)
      if inner is not None and _is_const(inner[1]):
        inner_op, inner_const, inner_rest = inner
        if inner_op == OpType.MUL:
          return rewrite('merge-factors', mul(const(left.value * inner_const.value), inner_rest))
        if inner_op == OpType.DIV:
          return rewrite('merge-numerator', div(const(left.value * inner_const.value), inner_rest))
      if left.value == -1.0:
        return rewrite('mul-minus-one', neg(right))

    left_view = as_binary_op(left)
    if left_view is not None and left_view[0] == OpType.DIV and _is_const(left_view[1]):
      return rewrite('reciprocal-factor', mul(left_view[1], div(right, left_view[2])))
    right_view = as_binary_op(right)
    if right_view is not None and right_view[0] == OpType.DIV and _is_const(right_view[1]):
      return rewrite('reciprocal-factor', mul(right_view[1], div(left, right_view[2])))

    if isinstance(left, NegateNode):
      return rewrite('mul-sign', neg(mul(left.operand, right)))
    if isinstance(right, NegateNode):
      return rewrite('mul-sign', neg(mul(left, right.operand)))
    return None

  @staticmethod
  def _simplify_div(left: Node, right: Node) -> Optional[Node]:
    rewrite = ExpressionSimplifier._rewrite
    if _is_const(left, 0.0):
      return const(0.0)
    if _is_const(right, 1.0):
      return rewrite('div-one', left)
    if isinstance(left, NegateNode):
      return rewrite('div-sign', neg(div(left.operand, right)))
    if isinstance(right, NegateNode):
      return rewrite('div-sign', neg(div(left, right.operand)))
    return None

  @staticmethod
  def _simplify_pow(left: Node, right: Node) -> Optional[Node]:
    if _is_const(left, 0.0):
      return const(0.0)
    if _is_const(left, 1.0):
      return const(1.0)
    if _is_const(right, 0.0):
      return const(1.0)
    if _is_const(right, 1.0):
      return ExpressionSimplifier._rewrite('pow-one', left)
    return None

  @staticmethod
  def _simplify_children(node: Node, op: OpType, left: Node, right: Node) -> Node:
    left_s = ExpressionSimplifier.simplify(left)
    right_s = ExpressionSimplifier.simplify(right)
    if left_s != left or right_s != right:
      # A simplified child can expose a rule at this level
      return ExpressionSimplifier.simplify(make_binary(op, left_s, right_s))
    return node


def simplify(node: Node) -> Node:
  """Reduce `node` to its canonical form (a fixpoint of the rule table)."""
  return ExpressionSimplifier.simplify(node)
