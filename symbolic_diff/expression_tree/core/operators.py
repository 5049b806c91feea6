import numpy as np
import numba
from enum import IntEnum

VARIABLE_SYMBOL = 'x'


class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  NEGATE = 2
  BINARY_OP = 3
  UNARY_OP = 4


class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  # Unary functions
  EXP = 5
  LOG = 6
  SIN = 7
  COS = 8


BINARY_OPS = (OpType.ADD, OpType.SUB, OpType.MUL, OpType.DIV, OpType.POW)
UNARY_OPS = (OpType.EXP, OpType.LOG, OpType.SIN, OpType.COS)

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW}
UNARY_OP_MAP = {'exp': OpType.EXP, 'log': OpType.LOG, 'sin': OpType.SIN, 'cos': OpType.COS}

BINARY_OP_SYMBOLS = {op: symbol for symbol, op in BINARY_OP_MAP.items()}
UNARY_OP_NAMES = {op: name for name, op in UNARY_OP_MAP.items()}

# Binding strength used by the formatter and the flat-group parser
PRECEDENCE = {
  OpType.ADD: 1,
  OpType.SUB: 1,
  OpType.MUL: 2,
  OpType.DIV: 2,
  OpType.POW: 3,
}


def fold_constants(op: OpType, left: float, right: float) -> float:
  """IEEE float64 arithmetic: division by zero gives inf/nan instead of raising."""
  a = np.float64(left)
  b = np.float64(right)
  with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
    if op == OpType.ADD:
      result = a + b
    elif op == OpType.SUB:
      result = a - b
    elif op == OpType.MUL:
      result = a * b
    elif op == OpType.DIV:
      result = np.true_divide(a, b)
    elif op == OpType.POW:
      result = np.power(a, b)
    else:
      raise ValueError(f"Not a binary operator: {op!r}")
  return float(result)


@numba.njit(cache=True, inline='always')
def evaluate_variable(values):
  return values.astype(np.float64)


@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)


@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op(left_val, right_val, operator):
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    return np.true_divide(left_val, right_val)
  elif operator == '^':
    return np.power(left_val, right_val)
  return np.full(left_val.shape[0], np.nan)


@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_op(operand_val, operator):
  if operator == 'exp':
    return np.exp(operand_val)
  elif operator == 'log':
    return np.log(operand_val)
  elif operator == 'sin':
    return np.sin(operand_val)
  elif operator == 'cos':
    return np.cos(operand_val)
  elif operator == 'neg':
    return -operand_val
  return np.full(operand_val.shape[0], np.nan)
