"""
Infix Expression Parser

Text is turned into a tree in four stages:

  tokenize            characters -> tokens ('(' ')' operators names numbers)
  level_tokens        tokens -> (token, depth) pairs, parentheses dropped
  group_tokens        runs of equal depth -> (token list, depth) groups
  parse_token_groups  groups -> tree, nested spans parsed first

Inside one span the operands are folded with their operators by binding
strength ('^' right-to-left, then '* /', then '+ -' left-to-right), so any
fully parenthesized input parses exactly as written. Any malformed input
raises ParseError; there is no partial result.
"""

from typing import List, Tuple, Union

from .expression_tree.core.node import Node, X, const, neg, power, make_binary, make_function
from .expression_tree.core.operators import (
  OpType, BINARY_OP_MAP, BINARY_OP_SYMBOLS, UNARY_OP_MAP, PRECEDENCE, VARIABLE_SYMBOL
)
from .errors import ParseError
from .logging_system import is_verbose, log_debug

LeveledToken = Tuple[str, int]
TokenGroup = Tuple[List[str], int]
SpanItem = Union[str, Node]

EXPONENTIAL_BASE = 'e'


def _skip_spaces(text: str, i: int) -> int:
  while i < len(text) and text[i].isspace():
    i += 1
  return i


def _scan_number(text: str, i: int) -> int:
  """Return the end index of the numeric literal starting at i"""
  n = len(text)
  while i < n and (text[i].isdigit() or text[i] == '.'):
    i += 1
  if i < n and text[i] in 'eE':
    k = i + 1
    if k < n and text[k] in '+-':
      k += 1
    if k < n and text[k].isdigit():
      while k < n and text[k].isdigit():
        k += 1
      i = k
  return i


def tokenize(text: str) -> List[str]:
  """Single pass scanner. `e^(` is read as the function name 'exp'."""
  tokens = []
  i = 0
  n = len(text)
  while i < n:
    ch = text[i]
    if ch.isspace():
      i += 1
    elif ch in '()' or ch in BINARY_OP_MAP:
      tokens.append(ch)
      i += 1
    elif ch.isdigit() or ch == '.':
      end = _scan_number(text, i)
      tokens.append(text[i:end])
      i = end
    elif ch.isalpha():
      end = i
      while end < n and text[end].isalpha():
        end += 1
      word = text[i:end]
      if word == EXPONENTIAL_BASE:
        caret = _skip_spaces(text, end)
        if caret < n and text[caret] == '^':
          paren = _skip_spaces(text, caret + 1)
          if paren < n and text[paren] == '(':
            word = 'exp'
            end = paren
      tokens.append(word)
      i = end
    else:
      raise ParseError(f"Unexpected character {ch!r} at position {i}")
  return tokens


def level_tokens(tokens: List[str]) -> List[LeveledToken]:
  """Attach the parenthesis depth to every token and drop the parentheses."""
  leveled = []
  depth = 0
  previous = None
  for token in tokens:
    # '()' and ')(' would let two spans of equal depth merge into one group
    if previous == '(' and token == ')':
      raise ParseError("Empty parentheses '()'")
    if previous == ')' and token == '(':
      raise ParseError("Missing operator between ')' and '('")
    previous = token
    if token == '(':
      depth += 1
    elif token == ')':
      depth -= 1
      if depth < 0:
        raise ParseError("Unbalanced parentheses: ')' without matching '('")
    else:
      leveled.append((token, depth))
  if depth != 0:
    raise ParseError(f"Unbalanced parentheses: {depth} '(' not closed")
  return leveled


def group_tokens(leveled: List[LeveledToken]) -> List[TokenGroup]:
  """Coalesce neighbouring tokens of equal depth, folding from the right."""
  groups: List[TokenGroup] = []
  for token, depth in reversed(leveled):
    if groups and groups[-1][1] == depth:
      groups[-1][0].insert(0, token)
    else:
      groups.append(([token], depth))
  groups.reverse()
  return groups


def parse_item(token: str) -> Node:
  """Resolve a single token to a leaf: the variable or a numeric constant."""
  if token == VARIABLE_SYMBOL:
    return X
  try:
    return const(float(token))
  except ValueError:
    raise ParseError(f"Unable to resolve token '{token}'") from None


def merge_expressions(operands: List[Node], operators: List[OpType]) -> Node:
  """Fold operands pairwise, strongest operators first."""
  operands = list(operands)
  operators = list(operators)

  i = len(operators) - 1
  while i >= 0:
    if operators[i] == OpType.POW:
      operands[i] = power(operands[i], operands[i + 1])
      del operands[i + 1]
      del operators[i]
    i -= 1

  for level in (2, 1):
    i = 0
    while i < len(operators):
      if PRECEDENCE[operators[i]] == level:
        operands[i] = make_binary(operators[i], operands[i], operands[i + 1])
        del operands[i + 1]
        del operators[i]
      else:
        i += 1

  return operands[0]


def merge_tokens_with_expressions(items: List[SpanItem]) -> Node:
  """
  Parse one span: raw tokens mixed with the trees of its nested spans.

  A function name must be followed by a nested span (its argument); a '-' in
  operand position negates the operand that follows it.
  """
  operands: List[Node] = []
  operators: List[OpType] = []
  negations = 0
  expect_operand = True

  i = 0
  while i < len(items):
    item = items[i]
    if expect_operand:
      if item == '-':
        negations += 1
        i += 1
        continue
      if isinstance(item, Node):
        operand = item
        i += 1
      elif item in UNARY_OP_MAP:
        if i + 1 >= len(items) or not isinstance(items[i + 1], Node):
          raise ParseError(f"Function '{item}' requires a parenthesized argument")
        operand = make_function(UNARY_OP_MAP[item], items[i + 1])
        i += 2
      elif item in BINARY_OP_MAP:
        raise ParseError(f"Operator '{item}' is missing its left operand")
      else:
        operand = parse_item(item)
        i += 1
      for _ in range(negations):
        operand = neg(operand)
      negations = 0
      operands.append(operand)
      expect_operand = False
    else:
      if isinstance(item, str) and item in BINARY_OP_MAP:
        operators.append(BINARY_OP_MAP[item])
        expect_operand = True
        i += 1
      else:
        shown = item if isinstance(item, str) else f"({item})"
        raise ParseError(f"Missing operator before '{shown}'")

  if expect_operand:
    if operators:
      raise ParseError(f"Operator '{BINARY_OP_SYMBOLS[operators[-1]]}' is missing its right operand")
    if negations:
      raise ParseError("Operator '-' is missing its operand")
    raise ParseError("Empty expression")

  return merge_expressions(operands, operators)


def parse_flat_expression(tokens: List[str]) -> Node:
  """Parse a span that has no nested parentheses."""
  return merge_tokens_with_expressions(list(tokens))


def _parse_span(groups: List[TokenGroup], start: int, depth: int) -> Tuple[Node, int]:
  items: List[SpanItem] = []
  i = start
  while i < len(groups) and groups[i][1] >= depth:
    tokens, group_depth = groups[i]
    if group_depth == depth:
      items.extend(tokens)
      i += 1
    else:
      nested, i = _parse_span(groups, i, depth + 1)
      items.append(nested)

  if groups[start][1] == depth and i == start + 1:
    return parse_flat_expression(items), i
  return merge_tokens_with_expressions(items), i


def parse_token_groups(groups: List[TokenGroup]) -> Node:
  """Build the tree for a whole group sequence."""
  if not groups:
    raise ParseError("Empty expression")
  node, end = _parse_span(groups, 0, 0)
  if end != len(groups):
    raise ParseError("Unbalanced parentheses")
  return node


def parse_expression(text: str) -> Node:
  """Parse infix text into an expression tree."""
  tokens = tokenize(text)
  leveled = level_tokens(tokens)
  groups = group_tokens(leveled)
  if is_verbose():
    log_debug(f"tokens {tokens}")
    log_debug(f"groups {groups}")
  try:
    return parse_token_groups(groups)
  except RecursionError:
    raise ParseError(f"Expression nested too deeply ({max(depth for _, depth in groups)} levels)") from None
