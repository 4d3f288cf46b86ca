"""
YSPATH Command Handler.

Implements ``ysclj yspath``: prints the resolved library search path.
"""

import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape

from ysclj.errors import ConfigurationError
from ysclj.utils.console import log_error
from ysclj.utils.paths import get_yspath


def handle_yspath(document: Optional[Path] = None) -> int:
  """
  Handles the 'yspath' command.

  Args:
      document: Document whose directory is the default search path.

  Returns:
      int: Exit code.
  """
  try:
    entries = get_yspath(str(document) if document else None)
  except ConfigurationError as e:
    log_error(escape(str(e)))
    return 1

  for entry in entries:
    sys.stdout.write(f"{entry}\n")
  return 0
