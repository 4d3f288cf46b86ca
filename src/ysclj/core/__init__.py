"""
Compiler core: grammar, AST construction and printing.
"""

from ysclj.core.constructor import construct
from ysclj.core.grammar import GRAMMAR
from ysclj.core.printer import print_ast, print_node

__all__ = [
  "GRAMMAR",
  "construct",
  "print_ast",
  "print_node",
]
