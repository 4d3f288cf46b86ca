"""
YAMLScript AST Nodes.

This module defines the tagged-union node model shared by the constructor and
the printer. Every tag is a frozen dataclass:

- `AstNode` subclasses form the closed canonical set the printer accepts.
- `ProvisionalNode` subclasses (`Pairs`, `Forms`) only appear in the tree
  produced by the external parser and are eliminated by the constructor.

The external parser hands over a JSON-shaped tree in which a node is either a
bare tag string (``"Nil"``) or a single-entry mapping (``{"Sym": "foo"}``).
`from_raw` and `to_raw` convert between that shape and the typed model.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from ysclj.enums import Tag
from ysclj.errors import UnknownNodeError


@dataclass(frozen=True)
class AstNode(ABC):
  """Abstract base class for canonical AST nodes."""

  tag: ClassVar[Tag]


@dataclass(frozen=True)
class ProvisionalNode(ABC):
  """Abstract base class for parser-only nodes consumed by the constructor."""

  tag: ClassVar[Tag]


def _as_tuple(items: Any) -> Tuple[Any, ...]:
  if isinstance(items, tuple):
    return items
  return tuple(items)


# --- Canonical: no payload ---


@dataclass(frozen=True)
class Empty(AstNode):
  """The empty document; renders to nothing."""

  tag: ClassVar[Tag] = Tag.EMPTY


@dataclass(frozen=True)
class Nil(AstNode):
  tag: ClassVar[Tag] = Tag.NIL


# --- Canonical: sequences ---


@dataclass(frozen=True)
class _SeqNode(AstNode):
  items: Tuple["Node", ...] = ()

  def __post_init__(self) -> None:
    object.__setattr__(self, "items", _as_tuple(self.items))


@dataclass(frozen=True)
class Lst(_SeqNode):
  """A parenthesized list, i.e. a call form."""

  tag: ClassVar[Tag] = Tag.LST


@dataclass(frozen=True)
class Vec(_SeqNode):
  tag: ClassVar[Tag] = Tag.VEC


@dataclass(frozen=True)
class Map(_SeqNode):
  """A map literal; `items` alternate key and value."""

  tag: ClassVar[Tag] = Tag.MAP


# --- Canonical: scalars ---


@dataclass(frozen=True)
class _TextNode(AstNode):
  text: str


@dataclass(frozen=True)
class Str(_TextNode):
  tag: ClassVar[Tag] = Tag.STR


@dataclass(frozen=True)
class Chr(_TextNode):
  tag: ClassVar[Tag] = Tag.CHR


@dataclass(frozen=True)
class Spc(_TextNode):
  """A namespaced symbol written with ``::`` separators."""

  tag: ClassVar[Tag] = Tag.SPC


@dataclass(frozen=True)
class Sym(_TextNode):
  tag: ClassVar[Tag] = Tag.SYM


@dataclass(frozen=True)
class Tok(_TextNode):
  """An opaque token emitted verbatim."""

  tag: ClassVar[Tag] = Tag.TOK


@dataclass(frozen=True)
class Key(_TextNode):
  tag: ClassVar[Tag] = Tag.KEY


@dataclass(frozen=True)
class Int(_TextNode):
  tag: ClassVar[Tag] = Tag.INT


@dataclass(frozen=True)
class Flt(_TextNode):
  tag: ClassVar[Tag] = Tag.FLT


@dataclass(frozen=True)
class Bln(AstNode):
  value: bool

  tag: ClassVar[Tag] = Tag.BLN


# --- Provisional ---


@dataclass(frozen=True)
class Pairs(ProvisionalNode):
  """
  A YAML mapping as produced by the parser.

  `items` alternate key and value. A key may be a tuple of nodes (a compound
  key such as ``(Sym("let"), Sym("x"))`` for an ``x =:`` line).
  """

  items: Tuple[Any, ...] = ()

  tag: ClassVar[Tag] = Tag.PAIRS

  def __post_init__(self) -> None:
    object.__setattr__(self, "items", _as_tuple(self.items))


@dataclass(frozen=True)
class Forms(ProvisionalNode):
  """An implicit block of statements."""

  items: Tuple[Any, ...] = ()

  tag: ClassVar[Tag] = Tag.FORMS

  def __post_init__(self) -> None:
    object.__setattr__(self, "items", _as_tuple(self.items))


Node = Union[AstNode, ProvisionalNode]


@dataclass(frozen=True)
class Top:
  """Root of the canonical AST: the ordered top-level forms of a program."""

  forms: Tuple[AstNode, ...] = ()

  def __post_init__(self) -> None:
    object.__setattr__(self, "forms", _as_tuple(self.forms))


# --- Helpers ---


def is_sym(node: Any, name: str) -> bool:
  """True if `node` is the symbol `name`."""
  return isinstance(node, Sym) and node.text == name


def call_head(node: Any) -> Optional[str]:
  """
  Returns the symbol name in call position of a list form.

  Args:
      node: Any node.

  Returns:
      The head symbol text for ``(head ...)``, otherwise None.
  """
  if isinstance(node, Lst) and node.items and isinstance(node.items[0], Sym):
    return node.items[0].text
  return None


def defn_name(node: Any) -> Optional[str]:
  """Returns NAME for a ``(defn NAME ...)`` form, otherwise None."""
  if call_head(node) == "defn" and len(node.items) > 1 and isinstance(node.items[1], Sym):
    return node.items[1].text
  return None


# --- Raw conversion ---

_NULLARY = {Tag.EMPTY: Empty, Tag.NIL: Nil}
_SEQUENCES = {Tag.LST: Lst, Tag.VEC: Vec, Tag.MAP: Map, Tag.PAIRS: Pairs, Tag.FORMS: Forms}
_TEXTS = {
  Tag.STR: Str,
  Tag.CHR: Chr,
  Tag.SPC: Spc,
  Tag.SYM: Sym,
  Tag.TOK: Tok,
  Tag.KEY: Key,
  Tag.INT: Int,
  Tag.FLT: Flt,
}

# The YAMLScript reader emits the provisional tags in lower case.
_TAG_ALIASES: Dict[str, Tag] = {"pairs": Tag.PAIRS, "forms": Tag.FORMS}


def _resolve_tag(name: Any, raw: Any) -> Tag:
  if isinstance(name, str):
    if name in _TAG_ALIASES:
      return _TAG_ALIASES[name]
    try:
      return Tag(name)
    except ValueError:
      pass
  raise UnknownNodeError(f"Unknown AST node type: {raw!r}", raw)


def _text_payload(payload: Any, raw: Any) -> str:
  if isinstance(payload, bool):
    return "true" if payload else "false"
  if isinstance(payload, (str, int, float)):
    return str(payload)
  raise UnknownNodeError(f"Expected a scalar payload in {raw!r}", raw)


def from_raw(raw: Any) -> Any:
  """
  Converts a JSON-shaped parser tree into typed nodes.

  A bare tag string is shorthand for ``{tag: True}``. A list becomes a tuple
  of nodes (used for compound pair keys).

  Args:
      raw: A bare tag, a single-entry mapping, a list, or an already typed node.

  Returns:
      The typed node (or tuple of nodes for a list).

  Raises:
      UnknownNodeError: If a tag is unknown or the mapping is malformed.
  """
  if isinstance(raw, (AstNode, ProvisionalNode)):
    return raw
  if isinstance(raw, (list, tuple)):
    return tuple(from_raw(item) for item in raw)
  if isinstance(raw, str):
    raw = {raw: True}
  if not isinstance(raw, dict) or len(raw) != 1:
    raise UnknownNodeError(f"Unknown AST node type: {raw!r}", raw)

  ((name, payload),) = raw.items()
  tag = _resolve_tag(name, raw)

  if tag in _NULLARY:
    return _NULLARY[tag]()
  if tag in _SEQUENCES:
    if payload is True:
      payload = []
    if not isinstance(payload, (list, tuple)):
      raise UnknownNodeError(f"Expected a sequence payload in {raw!r}", raw)
    return _SEQUENCES[tag](tuple(from_raw(item) for item in payload))
  if tag == Tag.BLN:
    if isinstance(payload, str):
      return Bln(payload == "true")
    return Bln(bool(payload))
  return _TEXTS[tag](_text_payload(payload, raw))


def to_raw(node: Any) -> Any:
  """
  Converts typed nodes back into the JSON-shaped representation.

  Args:
      node: A typed node, a tuple of nodes, or a `Top`.

  Returns:
      Plain dict/list/str data suitable for `json.dumps`.
  """
  if isinstance(node, Top):
    return {"Top": [to_raw(f) for f in node.forms]}
  if isinstance(node, tuple):
    return [to_raw(item) for item in node]
  if isinstance(node, (Empty, Nil)):
    return node.tag.value
  if isinstance(node, (_SeqNode, Pairs, Forms)):
    return {node.tag.value: [to_raw(item) for item in node.items]}
  if isinstance(node, Bln):
    return {node.tag.value: node.value}
  if isinstance(node, _TextNode):
    return {node.tag.value: node.text}
  raise UnknownNodeError(f"Unknown AST node type: {node!r}", node)
