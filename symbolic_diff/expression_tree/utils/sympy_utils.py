import sympy as sp
from functools import reduce
from typing import Optional

from ..core.node import Node, X, const, neg, add, mul, power, exp, log, sin, cos, SYMPY_VARIABLE
from ...errors import UnsupportedExpressionError


class SymPyBridge:
  """Converts trees to and from SymPy and uses SymPy as an independent oracle"""

  def __init__(self, variable: Optional[sp.Symbol] = None):
    self.variable = variable if variable is not None else SYMPY_VARIABLE

  def to_sympy(self, node: Node) -> sp.Expr:
    expr = node.to_sympy()
    if self.variable != SYMPY_VARIABLE:
      expr = expr.subs(SYMPY_VARIABLE, self.variable)
    return expr

  def from_sympy(self, expr: sp.Expr) -> Node:
    """Convert a SymPy expression in one symbol back into a tree"""
    if expr == self.variable:
      return X
    if expr.is_Number:
      value = float(expr)
      return neg(const(-value)) if value < 0 else const(value)
    if expr.is_Add:
      return reduce(add, [self.from_sympy(arg) for arg in expr.args])
    if expr.is_Mul:
      return reduce(mul, [self.from_sympy(arg) for arg in expr.args])
    if expr.is_Pow:
      base, exponent = expr.args
      if base == sp.E:
        return exp(self.from_sympy(exponent))
      return power(self.from_sympy(base), self.from_sympy(exponent))
    if isinstance(expr, sp.exp):
      return exp(self.from_sympy(expr.args[0]))
    if isinstance(expr, sp.log):
      return log(self.from_sympy(expr.args[0]))
    if isinstance(expr, sp.sin):
      return sin(self.from_sympy(expr.args[0]))
    if isinstance(expr, sp.cos):
      return cos(self.from_sympy(expr.args[0]))
    raise UnsupportedExpressionError(f"No tree form for SymPy expression [{expr}]")

  def derivative(self, node: Node) -> sp.Expr:
    return sp.diff(self.to_sympy(node), self.variable)

  def are_equivalent(self, a: Node, b: Node) -> bool:
    """True when SymPy can reduce a - b to zero"""
    try:
      difference = sp.simplify(self.to_sympy(a) - self.to_sympy(b))
    except (TypeError, ValueError):
      return False
    return difference == 0
