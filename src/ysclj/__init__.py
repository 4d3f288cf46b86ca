"""
ysclj Package.

Compiles YAMLScript parse trees into Clojure source code.

Usage
-----

.. code-block:: python

    import ysclj
    from ysclj.core.formatter import PassthroughFormatter

    tree = {"Pairs": [{"Sym": "println"}, {"Str": "hello"}]}
    print(ysclj.compile_tree(tree, formatter=PassthroughFormatter()))
    # (println "hello")
"""

from typing import Any, Optional

from ysclj.config import RuntimeConfig
from ysclj.core.constructor import construct
from ysclj.core.engine import Transpiler
from ysclj.core.formatter import Formatter, get_formatter
from ysclj.core.printer import print_ast

__version__ = "0.1.0"


def compile_tree(tree: Any, formatter: Optional[Formatter] = None, config: Optional[RuntimeConfig] = None) -> str:
  """
  Compiles a provisional YAMLScript tree to Clojure.

  Unlike `Transpiler.run`, errors propagate to the caller unchanged.

  Args:
      tree: Root of the parser's tree (JSON-shaped or typed nodes).
      formatter: Layout collaborator; defaults to the one named in `config`.
      config: Runtime configuration (defaults to `RuntimeConfig()`).

  Returns:
      str: The Clojure source.

  Raises:
      YsError: Any grammar, construction, printing or formatter error.
  """
  if formatter is None:
    formatter = get_formatter(config or RuntimeConfig())
  return print_ast(construct(tree), formatter)


__all__ = [
  "RuntimeConfig",
  "Transpiler",
  "compile_tree",
  "__version__",
]
