"""
End-to-end derivative pipeline: text -> tree -> d/dx -> canonical tree -> text.
"""

import time
from typing import Optional

from .expression_tree.core.node import Node
from .expression_tree.utils.formatter import format_expression
from .expression_tree.utils.simplifier import simplify
from .differentiation import differentiate
from .parser import parse_expression
from .errors import SymbolicDiffError
from .logging_system import LogLevel, SymbolicDiffLogger, get_logger, configure_logging


class DerivativePipeline:
  """
  Parses, differentiates, simplifies and formats expressions in x.

  Parameters
  ----------
  simplify_result : bool
      Reduce each derivative to canonical form before returning it.
  log_level : LogLevel, optional
      When given, reconfigures the package logger for this pipeline.
  log_to_file : bool
      Also write log records to `log_file_path` (or a timestamped file).
  """

  def __init__(self, simplify_result: bool = True,
               log_level: Optional[LogLevel] = None,
               log_to_file: bool = False,
               log_file_path: Optional[str] = None):
    self.simplify_result = simplify_result
    if log_level is not None or log_to_file:
      self.logger: SymbolicDiffLogger = configure_logging(
        log_level=log_level if log_level is not None else LogLevel.MINIMAL,
        log_to_file=log_to_file,
        log_file_path=log_file_path
      )
    else:
      self.logger = get_logger()

  def parse(self, text: str) -> Node:
    node = parse_expression(text)
    self.logger.stage('parse', repr(node))
    return node

  def differentiate(self, node: Node) -> Node:
    derivative = differentiate(node)
    self.logger.stage('derivative', repr(derivative))
    return derivative

  def simplify(self, node: Node) -> Node:
    simplified = simplify(node)
    self.logger.stage('simplify', repr(simplified))
    return simplified

  def format(self, node: Node) -> str:
    return format_expression(node)

  def run_expression(self, text: str, order: int = 1) -> Node:
    """Return the order-th derivative of `text` as a tree."""
    if order < 1:
      raise ValueError(f"Derivative order must be at least 1, got {order}")

    start = time.time()
    try:
      node = self.parse(text)
      for _ in range(order):
        node = self.differentiate(node)
        if self.simplify_result:
          node = self.simplify(node)
    except SymbolicDiffError as e:
      self.logger.critical(f"{type(e).__name__} while differentiating '{text}': {e}")
      raise

    self.logger.result_summary({
      'input': text,
      'order': order,
      'result size': node.size(),
      'elapsed (s)': time.time() - start,
    })
    return node

  def run(self, text: str, order: int = 1) -> str:
    """Return the order-th derivative of `text` as infix text."""
    return self.format(self.run_expression(text, order))


def derivative(text: str, simplify: bool = True, order: int = 1) -> str:
  """Differentiate infix `text` with respect to x and render the result."""
  return DerivativePipeline(simplify_result=simplify).run(text, order)
