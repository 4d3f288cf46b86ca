"""
Search Path Resolution.

Resolves the directories searched for YAMLScript libraries. The ``YSPATH``
environment variable (colon separated) wins whenever it is set, even to an
empty string. Otherwise the directory of the document being compiled is used,
or the working directory when the document is an in-memory source named
``/NO-NAME``.
"""

import os
from typing import List, Optional

from ysclj.errors import ConfigurationError

YSPATH_ENV = "YSPATH"

# Path given to documents that were not read from disk.
NO_NAME = "NO-NAME"
IN_MEMORY_BASE = f"/{NO_NAME}"


def abspath(path: str, base: Optional[str] = None) -> str:
  """
  Makes `path` absolute, relative to `base` (default: the working directory).

  Args:
      path: A file system path.
      base: Directory to resolve a relative `path` against.

  Returns:
      str: The absolute path.
  """
  if os.path.isabs(path):
    return path
  root = abspath(base) if base is not None else os.getcwd()
  return os.path.abspath(os.path.join(root, path))


def dirname(path: str) -> str:
  """Returns the parent directory of `path`, or ``"."`` for a bare name."""
  parent = os.path.dirname(path)
  return parent or "."


def get_yspath(base: Optional[str]) -> List[str]:
  """
  Returns the library search path for a document.

  Args:
      base: Path of the document being compiled, exactly ``"/NO-NAME"`` for
          an in-memory document, or None when unknown.

  Returns:
      List[str]: Absolute search directories, in order.

  Raises:
      ConfigurationError: If ``YSPATH`` is unset and no default can be derived.
  """
  yspath = os.environ.get(YSPATH_ENV)
  if yspath is None and base is not None:
    if base == IN_MEMORY_BASE:
      yspath = os.getcwd()
    else:
      yspath = abspath(dirname(base))
  if yspath is None:
    raise ConfigurationError(f"{YSPATH_ENV} environment variable not set")
  # An empty entry (or an empty YSPATH) stands for the working directory.
  return [abspath(p) for p in yspath.split(":")]
