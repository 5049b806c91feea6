import numpy as np
import sympy as sp
from typing import Optional, Union
from .core.node import Node


class Expression:
  """Expression tree root with a cached infix rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    self.root = root
    self._string_cache: Optional[str] = None

  @classmethod
  def from_string(cls, expr_str: str) -> 'Expression':
    from ..parser import parse_expression
    return cls(parse_expression(expr_str))

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def differentiate(self) -> 'Expression':
    """Raw derivative, not simplified"""
    from ..differentiation import differentiate
    return Expression(differentiate(self.root))

  def simplify(self) -> 'Expression':
    from .utils.simplifier import simplify
    return Expression(simplify(self.root))

  def evaluate(self, values: Union[float, np.ndarray]) -> np.ndarray:
    """Evaluate at one or many values of x; IEEE inf/nan are passed through."""
    array = np.atleast_1d(np.asarray(values, dtype=np.float64))
    return self.root.evaluate(array)

  def size(self) -> int:
    return self.root.size()

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.root!r})"

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root
