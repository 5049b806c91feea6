"""Exceptions raised by the parser, the differentiator and the lookup helpers."""


class SymbolicDiffError(Exception):
  """Base class for every failure of a parse/differentiate/simplify/format call"""


class ParseError(SymbolicDiffError, ValueError):
  """Malformed token stream, unbalanced parentheses or an unresolvable token"""


class UnsupportedExpressionError(SymbolicDiffError, TypeError):
  """A tree shape that no rule or lookup recognises"""


class DerivativeCompositionError(SymbolicDiffError):
  """The chain rule produced an outer derivative it cannot substitute into"""
