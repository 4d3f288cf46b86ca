"""
Compile Command Handler.

Implements ``ysclj compile``: reads a JSON parse tree, runs the compiler and
writes the Clojure source to a file or standard output.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError
from rich.markup import escape

from ysclj.config import RuntimeConfig
from ysclj.core.engine import Transpiler
from ysclj.enums import FormatterKind
from ysclj.utils.console import log_error, log_success


def handle_compile(
  input_path: Path,
  output_path: Optional[Path],
  no_format: bool = False,
  style: Optional[str] = None,
  overrides: Optional[Dict[str, Any]] = None,
) -> int:
  """
  Handles the 'compile' command execution.

  Args:
      input_path: JSON file holding the parser's provisional tree.
      output_path: Destination file; standard output when None.
      no_format: Skip the external formatter.
      style: Override for the formatter style.
      overrides: Extra ``key=value`` configuration.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.is_file():
    log_error(f"Input not found: [path]{input_path}[/path]")
    return 1

  try:
    config = RuntimeConfig.load(
      formatter=FormatterKind.NONE.value if no_format else None,
      style=style,
      overrides=overrides,
      search_path=input_path.parent,
    )
  except ValidationError as e:
    log_error(escape(f"Invalid configuration: {e}"))
    return 1

  try:
    tree = json.loads(input_path.read_text(encoding="utf-8"))
  except json.JSONDecodeError as e:
    log_error(escape(f"Invalid parse tree in {input_path}: {e}"))
    return 1
  except (UnicodeDecodeError, OSError) as e:
    log_error(escape(f"Cannot read {input_path}: {e}"))
    return 1

  result = Transpiler(config).run(tree)
  if not result.success:
    for err in result.errors:
      log_error(escape(err))
    return 1

  if output_path:
    try:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      output_path.write_text(result.code, encoding="utf-8")
    except OSError as e:
      log_error(escape(f"Cannot write {output_path}: {e}"))
      return 1
    log_success(f"Wrote {result.form_count} forms to [path]{output_path}[/path]")
  else:
    sys.stdout.write(result.code)
    if not result.code.endswith("\n"):
      sys.stdout.write("\n")
  return 0
