"""
Grammar Command Handler.

Implements ``ysclj grammar``: lists the lexical patterns or checks a single
pattern against a piece of text.
"""

from typing import Optional

from rich.markup import escape
from rich.table import Table

from ysclj.core.grammar import GRAMMAR
from ysclj.errors import GrammarError
from ysclj.utils.console import console, log_error, log_success, log_warning


def handle_grammar(name: Optional[str] = None, text: Optional[str] = None) -> int:
  """
  Handles the 'grammar' command.

  Args:
      name: Pattern to inspect. All patterns are listed when None.
      text: Candidate text to match against `name`.

  Returns:
      int: 0 on success or match, 1 on unknown pattern or no match.
  """
  if name is None:
    table = Table(title="YAMLScript Lexical Patterns")
    table.add_column("Name", style="cyan")
    table.add_column("Expanded source", overflow="fold")
    for pattern_name in GRAMMAR.names():
      table.add_row(pattern_name, GRAMMAR.source(pattern_name))
    console.print(table)
    return 0

  try:
    matcher = GRAMMAR[name]
  except GrammarError as e:
    log_error(escape(str(e)))
    return 1

  if text is None:
    console.print(GRAMMAR.source(name), markup=False)
    return 0

  match = matcher.fullmatch(text)
  if match is None:
    log_warning(escape(f"'{name}' does not match {text!r}"))
    return 1

  groups = ", ".join(repr(g) for g in match.groups())
  log_success(escape(f"'{name}' matches {text!r}" + (f" groups: {groups}" if groups else "")))
  return 0
