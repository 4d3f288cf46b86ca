"""
Composable Pattern Definitions.

Provides `PatternTable`, an ordered registry of named regular-expression
templates. A template may reference any previously defined pattern with
``$name``; expansion splices the referenced pattern's source text in place of
the reference (plain text substitution) until no references remain, then
compiles the result.

Because a name can only be defined once and only earlier names are visible,
definition order is resolution order and expansion always terminates.

Example::

    table = PatternTable()
    table.define("inum", r"-?\\d+")
    table.expand(r"$inum\\.\\d*")  # same as re.compile(r"-?\\d+\\.\\d*")
"""

import logging
import re
from typing import Dict, Iterable, List, Pattern, Tuple

from ysclj.errors import GrammarError

logger = logging.getLogger(__name__)

# A reference is letters only and must not run into another letter, so that
# `$sym` never matches the head of `$symw`.
_REFERENCE = re.compile(r"\$([a-zA-Z]+)(?![a-zA-Z])")


class PatternTable:
  """
  Ordered table of named, interpolated regular expressions.

  Attributes:
      _sources (Dict[str, str]): Fully expanded source text per name.
      _compiled (Dict[str, Pattern]): Compiled matcher per name.
  """

  def __init__(self) -> None:
    self._sources: Dict[str, str] = {}
    self._compiled: Dict[str, Pattern[str]] = {}

  @classmethod
  def from_definitions(cls, definitions: Iterable[Tuple[str, str]]) -> "PatternTable":
    """
    Builds a table from an ordered list of ``(name, template)`` pairs.

    Args:
        definitions: Pattern definitions; each may only reference earlier names.

    Returns:
        PatternTable: The populated table.

    Raises:
        GrammarError: If a template references an unknown name.
    """
    table = cls()
    for name, template in definitions:
      table.define(name, template)
    return table

  def interpolate(self, template: str) -> str:
    """
    Resolves every ``$name`` reference in `template` to source text.

    Args:
        template: Regex template text.

    Returns:
        str: The template with all references substituted.

    Raises:
        GrammarError: If a reference names an undefined pattern.
    """
    text = template
    while True:
      match = _REFERENCE.search(text)
      if not match:
        return text
      name = match.group(1)
      if name not in self._sources:
        raise GrammarError(f"Unresolved pattern reference '${name}' in template {template!r}")
      value = self._sources[name]
      # Callable replacement so backslashes in `value` stay literal.
      text = re.sub(rf"\${name}(?![a-zA-Z])", lambda _m: value, text)

  def expand(self, template: str) -> Pattern[str]:
    """
    Interpolates `template` and compiles it.

    Args:
        template: Regex template text with optional ``$name`` references.

    Returns:
        Pattern: The compiled matcher.

    Raises:
        GrammarError: If a reference cannot be resolved.
    """
    return re.compile(self.interpolate(template))

  def define(self, name: str, template: str) -> Pattern[str]:
    """
    Expands `template` and registers it under `name`.

    Args:
        name: Pattern name (letters only, so it can be referenced).
        template: Regex template text.

    Returns:
        Pattern: The compiled matcher.

    Raises:
        GrammarError: If `name` is invalid or already defined, or a reference
            cannot be resolved.
    """
    if not re.fullmatch(r"[a-zA-Z]+", name):
      raise GrammarError(f"Invalid pattern name: {name!r}")
    if name in self._sources:
      raise GrammarError(f"Pattern '{name}' is already defined")

    source = self.interpolate(template)
    compiled = re.compile(source)
    self._sources[name] = source
    self._compiled[name] = compiled
    logger.debug("Defined pattern %s", name)
    return compiled

  def source(self, name: str) -> str:
    """Returns the expanded source text of a defined pattern."""
    try:
      return self._sources[name]
    except KeyError:
      raise GrammarError(f"Unknown pattern: '{name}'") from None

  def names(self) -> List[str]:
    """Pattern names in definition order."""
    return list(self._sources)

  def __getitem__(self, name: str) -> Pattern[str]:
    try:
      return self._compiled[name]
    except KeyError:
      raise GrammarError(f"Unknown pattern: '{name}'") from None

  def __contains__(self, name: object) -> bool:
    return name in self._compiled

  def __len__(self) -> int:
    return len(self._compiled)
