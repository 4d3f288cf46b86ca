"""
Compilation Engine.

`Transpiler` drives one document through the pipeline:

1.  **Ingestion**: the parser's JSON-shaped tree becomes typed nodes.
2.  **Construction**: provisional nodes are lowered to the canonical AST and
    the forward-declaration and ``main`` fixups are applied.
3.  **Printing**: top-level forms are rendered and joined.
4.  **Formatting**: the text goes through the configured formatter.

Compiler errors stop the pipeline and are reported in the returned
`ConversionResult`; no partial code is returned.
"""

import logging
from typing import Any, Optional

from ysclj.config import RuntimeConfig
from ysclj.core.constructor import construct
from ysclj.core.conversion_result import ConversionResult
from ysclj.core.formatter import Formatter, get_formatter
from ysclj.core.printer import Printer
from ysclj.errors import YsError

logger = logging.getLogger(__name__)


class Transpiler:
  """
  Compiles provisional YAMLScript trees into Clojure source.

  Attributes:
      config (RuntimeConfig): Active configuration.
      printer (Printer): Printer bound to the configured formatter.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, formatter: Optional[Formatter] = None) -> None:
    """
    Args:
        config: Runtime configuration (defaults to `RuntimeConfig()`).
        formatter: Explicit formatter; overrides the one named in `config`.
    """
    self.config = config or RuntimeConfig()
    self.printer = Printer(formatter if formatter is not None else get_formatter(self.config))

  def run(self, tree: Any) -> ConversionResult:
    """
    Compiles one document.

    Args:
        tree: Root of the provisional tree (raw or typed).

    Returns:
        ConversionResult: Generated code on success, error messages otherwise.
    """
    try:
      top = construct(tree)
      code = self.printer.print(top)
    except YsError as e:
      logger.error("Compilation failed: %s", e)
      return ConversionResult(success=False, errors=[f"{type(e).__name__}: {e}"])

    logger.debug("Compiled %d top-level forms", len(top.forms))
    return ConversionResult(code=code, form_count=len(top.forms))
