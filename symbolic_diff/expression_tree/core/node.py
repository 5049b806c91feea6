import math
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from .operators import (
  NodeType, OpType, BINARY_OPS, UNARY_OPS, BINARY_OP_SYMBOLS, UNARY_OP_NAMES,
  VARIABLE_SYMBOL, evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op
)

# Names used by repr(), e.g. Mul(Const(2.0), X)
OP_REPR_NAMES = {
  OpType.ADD: 'Add',
  OpType.SUB: 'Sub',
  OpType.MUL: 'Mul',
  OpType.DIV: 'Div',
  OpType.POW: 'Pow',
  OpType.EXP: 'Exp',
  OpType.LOG: 'Log',
  OpType.SIN: 'Sin',
  OpType.COS: 'Cos',
}

SYMPY_VARIABLE = sp.Symbol(VARIABLE_SYMBOL)


class Node(ABC):
  """Immutable expression tree node with structural equality and cached hash/size"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  def __setattr__(self, name, value):
    # Public fields are write-once; private slots hold caches
    if not name.startswith('_') and hasattr(self, name):
      raise AttributeError(f"{type(self).__name__} is immutable, cannot set '{name}'")
    object.__setattr__(self, name, value)

  @abstractmethod
  def evaluate(self, values: np.ndarray) -> np.ndarray:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  @abstractmethod
  def _structurally_equal(self, other: 'Node') -> bool:
    pass

  def to_string(self) -> str:
    from ..utils.formatter import format_expression
    return format_expression(self)

  def __str__(self) -> str:
    return self.to_string()

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if self is other:
      return True
    if type(self) is not type(other):
      return False
    return self._structurally_equal(other)


class VariableNode(Node):
  __slots__ = ()

  def evaluate(self, values: np.ndarray) -> np.ndarray:
    return evaluate_variable(values)

  def to_sympy(self):
    return SYMPY_VARIABLE

  def children(self):
    return ()

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE,))

  def _structurally_equal(self, other) -> bool:
    return True

  def __repr__(self) -> str:
    return 'X'


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, values: np.ndarray) -> np.ndarray:
    return evaluate_constant(values.shape[0], self.value)

  def to_sympy(self):
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def children(self):
    return ()

  def _compute_hash(self) -> int:
    # nan != nan, but two NaN leaves are the same tree
    if math.isnan(self.value):
      return hash((NodeType.CONSTANT, 'nan'))
    return hash((NodeType.CONSTANT, self.value))

  def _structurally_equal(self, other) -> bool:
    if math.isnan(self.value) and math.isnan(other.value):
      return True
    return self.value == other.value

  def __repr__(self) -> str:
    return f"Const({self.value!r})"


class NegateNode(Node):
  __slots__ = ('operand',)

  def __init__(self, operand: Node):
    super().__init__()
    self.operand = operand

  def evaluate(self, values: np.ndarray) -> np.ndarray:
    return evaluate_unary_op(self.operand.evaluate(values), 'neg')

  def to_sympy(self):
    return -self.operand.to_sympy()

  def children(self):
    return (self.operand,)

  def _compute_hash(self) -> int:
    return hash((NodeType.NEGATE, hash(self.operand)))

  def _structurally_equal(self, other) -> bool:
    return self.operand == other.operand

  def __repr__(self) -> str:
    return f"Neg({self.operand!r})"


class BinaryOpNode(Node):
  __slots__ = ('op', 'left', 'right')

  def __init__(self, op: OpType, left: Node, right: Node):
    super().__init__()
    if op not in BINARY_OPS:
      raise ValueError(f"{op!r} is not a binary operator")
    self.op = OpType(op)
    self.left = left
    self.right = right

  @property
  def symbol(self) -> str:
    return BINARY_OP_SYMBOLS[self.op]

  def evaluate(self, values: np.ndarray) -> np.ndarray:
    left_val = self.left.evaluate(values)
    right_val = self.right.evaluate(values)
    return evaluate_binary_op(left_val, right_val, self.symbol)

  def to_sympy(self):
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.op == OpType.ADD:
      return sp.Add(left, right)
    elif self.op == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)

  def children(self):
    return (self.left, self.right)

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.op, hash(self.left), hash(self.right)))

  def _structurally_equal(self, other) -> bool:
    return self.op == other.op and self.left == other.left and self.right == other.right

  def __repr__(self) -> str:
    return f"{OP_REPR_NAMES[self.op]}({self.left!r}, {self.right!r})"


class UnaryOpNode(Node):
  __slots__ = ('op', 'operand')

  def __init__(self, op: OpType, operand: Node):
    super().__init__()
    if op not in UNARY_OPS:
      raise ValueError(f"{op!r} is not a unary function")
    self.op = OpType(op)
    self.operand = operand

  @property
  def name(self) -> str:
    return UNARY_OP_NAMES[self.op]

  def evaluate(self, values: np.ndarray) -> np.ndarray:
    return evaluate_unary_op(self.operand.evaluate(values), self.name)

  def to_sympy(self):
    operand = self.operand.to_sympy()
    if self.op == OpType.EXP:
      return sp.exp(operand)
    elif self.op == OpType.LOG:
      return sp.log(operand)
    elif self.op == OpType.SIN:
      return sp.sin(operand)
    return sp.cos(operand)

  def children(self):
    return (self.operand,)

  def _compute_hash(self) -> int:
    return hash((NodeType.UNARY_OP, self.op, hash(self.operand)))

  def _structurally_equal(self, other) -> bool:
    return self.op == other.op and self.operand == other.operand

  def __repr__(self) -> str:
    return f"{OP_REPR_NAMES[self.op]}({self.operand!r})"


def as_binary_op(node: Node) -> Optional[Tuple[OpType, Node, Node]]:
  """Operator view: (tag, left, right) for + - * / ^ nodes, otherwise None."""
  if isinstance(node, BinaryOpNode):
    return node.op, node.left, node.right
  return None


def as_function(node: Node) -> Optional[Tuple[OpType, Node]]:
  """Function view: (tag, argument) for exp/log/sin/cos nodes, otherwise None."""
  if isinstance(node, UnaryOpNode):
    return node.op, node.operand
  return None


def make_binary(op: OpType, left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(op, left, right)


def make_function(op: OpType, argument: Node) -> UnaryOpNode:
  return UnaryOpNode(op, argument)


X = VariableNode()


def const(value: float) -> ConstantNode:
  return ConstantNode(value)


def neg(operand: Node) -> NegateNode:
  return NegateNode(operand)


def add(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(OpType.ADD, left, right)


def sub(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(OpType.SUB, left, right)


def mul(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(OpType.MUL, left, right)


def div(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(OpType.DIV, left, right)


def power(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(OpType.POW, left, right)


def exp(argument: Node) -> UnaryOpNode:
  return UnaryOpNode(OpType.EXP, argument)


def log(argument: Node) -> UnaryOpNode:
  return UnaryOpNode(OpType.LOG, argument)


def sin(argument: Node) -> UnaryOpNode:
  return UnaryOpNode(OpType.SIN, argument)


def cos(argument: Node) -> UnaryOpNode:
  return UnaryOpNode(OpType.COS, argument)
