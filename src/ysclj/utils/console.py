"""
Console and Logging Utilities.

All user-facing output goes through the standard `logging` library, rendered
by `rich`. The module keeps one proxied Rich console so that tests (or an
embedding application) can redirect output with `set_console` while every
module keeps importing the same `console` object.

A custom ``SUCCESS`` level (25) sits between INFO and WARNING. Records from
module loggers are rendered as plain text; the ``log_*`` helpers opt in to
Rich markup.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Stable handle around a swappable `rich.console.Console`.

  Swapping the backend also re-points the root logger's `RichHandler`, so
  ``logging`` calls follow the console.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._level = logging.INFO
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  def set_level(self, level: int) -> None:
    """Changes the root logging threshold (e.g. DEBUG for ``--verbose``)."""
    self._level = level
    self._configure_logging()

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=False,
      rich_tracebacks=True,
    )
    root_logger.setLevel(self._level)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and logging to `new_console`.

  Args:
      new_console (Console): e.g. ``Console(file=io.StringIO())`` in tests.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores logging and console output to standard output."""
  console.reset()


def get_console() -> Console:
  """Returns the active Rich console backend."""
  return console.backend


def log_info(msg: str) -> None:
  logging.info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, msg, extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(msg, extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message.

  Args:
      msg (str): The message content. Can include rich markup like [path].
  """
  logging.error(msg, extra={"markup": True})
