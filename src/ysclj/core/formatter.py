"""
Code Formatter Collaborators.

The printer emits one top-level form per line and leaves layout to an
external formatter. This module provides:

- `ZprintFormatter`: pipes the code through the ``zprint`` executable with a
  fixed style and the "parse entire input" option.
- `PassthroughFormatter`: returns the code unchanged.
- `get_formatter`: picks one from a `RuntimeConfig`.
"""

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING, Protocol

from ysclj.enums import FormatterKind
from ysclj.errors import FormatterError

if TYPE_CHECKING:
  from ysclj.config import RuntimeConfig

logger = logging.getLogger(__name__)


class Formatter(Protocol):
  """Anything that can lay out Clojure source text."""

  def format(self, code: str) -> str: ...


class PassthroughFormatter:
  """Formatter that performs no layout."""

  def format(self, code: str) -> str:
    return code


class ZprintFormatter:
  """
  Formats Clojure code with the ``zprint`` command line tool.

  Attributes:
      style (str): zprint style name (e.g. ``community``).
      command (str): Executable name or path.
  """

  def __init__(self, style: str = "community", command: str = "zprint") -> None:
    self.style = style
    self.command = command

  @property
  def options(self) -> str:
    """The zprint options map, as EDN text. The input is always parsed as a whole program."""
    return f"{{:style :{self.style} :parse-string-all? true}}"

  def format(self, code: str) -> str:
    """
    Runs zprint over `code`.

    Args:
        code: Newline-joined Clojure forms.

    Returns:
        str: The formatted code.

    Raises:
        FormatterError: If the executable is missing or exits non-zero.
    """
    executable = shutil.which(self.command)
    if executable is None:
      raise FormatterError(f"Formatter executable not found: '{self.command}'")

    logger.debug("Running %s %s", executable, self.options)
    proc = subprocess.run(
      [executable, self.options],
      input=code,
      capture_output=True,
      text=True,
      encoding="utf-8",
      check=False,
    )
    if proc.returncode != 0:
      raise FormatterError(f"zprint failed (exit {proc.returncode}): {proc.stderr.strip()}")
    return proc.stdout


def get_formatter(config: "RuntimeConfig") -> Formatter:
  """
  Builds the formatter selected by the configuration.

  Args:
      config: Active runtime configuration.

  Returns:
      Formatter: The configured collaborator.
  """
  if config.formatter == FormatterKind.NONE:
    return PassthroughFormatter()
  return ZprintFormatter(style=config.style, command=config.zprint_command)
