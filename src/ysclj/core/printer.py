"""
Clojure Printer.

Serializes the canonical AST into Clojure source text. Rendering of each
node is pure; the joined top-level forms are handed to a `Formatter`
collaborator for layout.
"""

from typing import Any, Callable, Dict, Optional, Type, Union

from ysclj.core.formatter import Formatter, ZprintFormatter
from ysclj.core.nodes import (
  AstNode,
  Bln,
  Chr,
  Empty,
  Flt,
  Int,
  Key,
  Lst,
  Map,
  Nil,
  ProvisionalNode,
  Spc,
  Str,
  Sym,
  Tok,
  Top,
  Vec,
  from_raw,
)
from ysclj.errors import UnknownNodeError

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}


def pr_string(text: str) -> str:
  """Escapes backslash, double quote and newline; nothing else changes."""
  return "".join(_STRING_ESCAPES.get(ch, ch) for ch in text)


def _render_map(node: Map) -> str:
  items = node.items
  pairs = [f"{print_node(items[i])} {print_node(items[i + 1])}" for i in range(0, len(items) - 1, 2)]
  return "{" + ", ".join(pairs) + "}"


_RENDERERS: Dict[Type[AstNode], Callable[[Any], str]] = {
  Empty: lambda n: "",
  Lst: lambda n: "(" + " ".join(print_node(c) for c in n.items) + ")",
  Vec: lambda n: "[" + " ".join(print_node(c) for c in n.items) + "]",
  Map: _render_map,
  Str: lambda n: '"' + pr_string(n.text) + '"',
  Chr: lambda n: "\\" + n.text,
  Spc: lambda n: n.text.replace("::", "."),
  Sym: lambda n: n.text,
  Tok: lambda n: n.text,
  Key: lambda n: n.text,
  Int: lambda n: n.text,
  Flt: lambda n: n.text,
  Bln: lambda n: "true" if n.value else "false",
  Nil: lambda n: "nil",
}


def print_node(node: Union[AstNode, str, Dict[str, Any]]) -> str:
  """
  Renders one canonical node as Clojure text.

  Raw (JSON-shaped) nodes are accepted; a bare tag is read as ``{tag: true}``.

  Args:
      node: A canonical node, or its raw bare-tag / single-entry mapping form.

  Returns:
      str: The Clojure text of the node.

  Raises:
      UnknownNodeError: If the node is not part of the canonical tag set,
          including provisional ``Pairs``/``Forms`` nodes.
  """
  if isinstance(node, (str, dict)):
    node = from_raw(node)
  renderer = _RENDERERS.get(type(node))
  if renderer is None:
    kind = "provisional" if isinstance(node, ProvisionalNode) else "unknown"
    raise UnknownNodeError(f"Unknown AST node type ({kind}): {node!r}", node)
  return renderer(node)


class Printer:
  """
  Renders a `Top` node and formats the result.

  Attributes:
      formatter (Formatter): Layout collaborator applied to the joined text.
  """

  def __init__(self, formatter: Optional[Formatter] = None) -> None:
    self.formatter = formatter if formatter is not None else ZprintFormatter()

  def render(self, top: Top) -> str:
    """Renders every top-level form and joins them with newlines (no layout)."""
    return "\n".join(print_node(form) for form in top.forms)

  def print(self, top: Top) -> str:
    """
    Renders and formats a program.

    Args:
        top: The canonical AST root.

    Returns:
        str: Formatted Clojure source.
    """
    return self.formatter.format(self.render(top))


def print_ast(top: Top, formatter: Optional[Formatter] = None) -> str:
  """
  Renders a YAMLScript AST as Clojure code.

  Args:
      top: The canonical AST root.
      formatter: Layout collaborator (defaults to `ZprintFormatter`).

  Returns:
      str: Formatted Clojure source.
  """
  return Printer(formatter).print(top)
