"""
CLI Command Handlers Facade.

Re-exports the handlers defined in `ysclj.cli.handlers`.
"""

from ysclj.cli.handlers.compile import handle_compile
from ysclj.cli.handlers.grammar import handle_grammar
from ysclj.cli.handlers.paths import handle_yspath

__all__ = [
  "handle_compile",
  "handle_grammar",
  "handle_yspath",
]
