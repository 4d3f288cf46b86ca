"""
AST Constructor.

Lowers the provisional YAMLScript tree produced by the parser into the
canonical Clojure AST:

- ``Pairs`` (YAML mappings) become call forms, one per key/value pair. A
  leading run of ``let`` pairs collapses into a single ``(let [...] ...)``
  call whose body is the rest of the mapping.
- ``Forms`` (implicit blocks) become statement sequences, with the ``=>``
  connective dropped.
- ``Lst`` children are lowered and spliced one level.

After lowering, two whole-program fixups run on the `Top` node:

1. `declare_undefined` inserts a ``(declare ...)`` form for functions
   referenced before their ``defn``.
2. `maybe_call_main` appends ``(apply main ARGV)`` when ``main`` is defined.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ysclj.core.nodes import (
  AstNode,
  Forms,
  Lst,
  Nil,
  Pairs,
  Sym,
  Str,
  Top,
  Vec,
  call_head,
  defn_name,
  from_raw,
  is_sym,
)
from ysclj.errors import InternalInvariantError

logger = logging.getLogger(__name__)

ARROW = "=>"
LET = "let"
DO = "do"

CALL_MAIN = Lst((Sym("apply"), Sym("main"), Sym("ARGV")))


@dataclass(frozen=True)
class Splice:
  """A transform result that the parent inlines instead of nesting."""

  nodes: Tuple[Any, ...] = ()


Result = Union[AstNode, Splice]


@dataclass(frozen=True)
class TraversalContext:
  """
  Per-node state threaded through the lowering.

  Attributes:
      level: Depth of the node being lowered (root is 1).
  """

  level: int = 0

  def descend(self) -> "TraversalContext":
    return replace(self, level=self.level + 1)


def flatten(items: Iterable[Any]) -> List[Any]:
  """Recursively inlines `Splice` results and tuples (compound keys)."""
  out: List[Any] = []
  for item in items:
    if isinstance(item, Splice):
      out.extend(flatten(item.nodes))
    elif isinstance(item, (tuple, list)):
      out.extend(flatten(item))
    elif item is not None:
      out.append(item)
  return out


def splice_one_level(results: Iterable[Result]) -> List[Any]:
  """Inlines the direct `Splice` children of a sequence of results."""
  out: List[Any] = []
  for result in results:
    if isinstance(result, Splice):
      out.extend(result.nodes)
    else:
      out.append(result)
  return out


# --- Node lowering ---


def construct_node(node: Any, ctx: TraversalContext) -> Result:
  """
  Lowers a single provisional node.

  Args:
      node: A typed node (raw data is ingested by `construct`).
      ctx: The traversal context of the parent.

  Returns:
      The lowered node, or a `Splice` to be inlined by the parent.

  Raises:
      InternalInvariantError: If `ctx` is not a `TraversalContext`.
  """
  if not isinstance(ctx, TraversalContext):
    raise InternalInvariantError(f"Traversal context has unexpected shape: {type(ctx).__name__}")
  ctx = ctx.descend()

  if isinstance(node, Pairs):
    return Splice(tuple(construct_pairs(node, ctx)))
  if isinstance(node, Forms):
    return construct_forms(node, ctx)
  if isinstance(node, Lst):
    return construct_list(node, ctx)
  return node


def _construct_side(side: Any, ctx: TraversalContext) -> Any:
  if isinstance(side, tuple):
    return tuple(construct_node(n, ctx) for n in side)
  if side is None:
    return None
  return construct_node(side, ctx)


def construct_call(key: Any, value: Any) -> Any:
  """
  Builds the form for one lowered key/value pair.

  Args:
      key: Lowered key (node, tuple or `Splice`).
      value: Lowered value, or None when the key had no value.

  Returns:
      The value alone for an ``=>`` key, the bare key for a string key with
      no value, otherwise a call ``(key value...)``.
  """
  if is_sym(key, ARROW):
    return value
  if isinstance(key, Str) and value is None:
    return key
  return Lst(tuple(flatten([key, value])))


def _partition(items: Sequence[Any]) -> List[Tuple[Any, Any]]:
  pairs = []
  for i in range(0, len(items), 2):
    value = items[i + 1] if i + 1 < len(items) else None
    pairs.append((items[i], value))
  return pairs


def _is_let_pair(pair: Tuple[Any, Any]) -> bool:
  key = pair[0]
  if isinstance(key, tuple):
    return bool(key) and is_sym(key[0], LET)
  return is_sym(key, LET)


def _lower_pairs(pairs: List[Tuple[Any, Any]], ctx: TraversalContext) -> List[Any]:
  forms: List[Any] = []
  while pairs:
    split = 0
    while split < len(pairs) and _is_let_pair(pairs[split]):
      split += 1
    if split:
      forms.append(_apply_let_bindings(pairs[:split], pairs[split:], ctx))
      break

    (key, value), pairs = pairs[0], pairs[1:]
    key = _construct_side(key, ctx)
    value = _construct_side(value, ctx)
    forms.extend(flatten([construct_call(key, value)]))
  return forms


def construct_pairs(node: Pairs, ctx: TraversalContext) -> List[Any]:
  """
  Lowers a mapping into its sequence of forms.

  Args:
      node: The ``Pairs`` node.
      ctx: Traversal context.

  Returns:
      List of lowered forms, one per pair (a let-group yields one form for
      itself and everything after it).
  """
  return _lower_pairs(_partition(node.items), ctx)


def _block_value(nodes: Sequence[Any]) -> Any:
  # A binding holds exactly one value; a multi-statement block becomes `do`.
  if not nodes:
    return Nil()
  if len(nodes) == 1:
    return nodes[0]
  return Lst((Sym(DO), *nodes))


def _binding_value(value: Any, ctx: TraversalContext) -> Any:
  if isinstance(value, Lst):
    return construct_list(value, ctx.descend())
  if isinstance(value, Forms):
    return _block_value(construct_forms(value, ctx.descend()).nodes)
  if not isinstance(value, Pairs):
    return value
  # A mapping on the right of a binding is a call, never a map literal.
  lowered = splice_one_level(construct_pairs(value, ctx))
  first = lowered[0] if lowered else None
  if isinstance(first, Lst):
    return first
  return Lst(tuple(flatten([first])))


def _apply_let_bindings(
  lets: List[Tuple[Any, Any]], rest: List[Tuple[Any, Any]], ctx: TraversalContext
) -> Lst:
  terms = [t for t in flatten(term for pair in lets for term in pair) if not is_sym(t, LET)]
  bindings: List[Any] = []
  for name, value in _partition(terms):
    bindings.extend(flatten([name, _binding_value(value, ctx)]))

  body = _lower_pairs(rest, ctx)
  logger.debug("let form with %d bindings, %d body forms", len(bindings) // 2, len(body))
  return Lst((Sym(LET), Vec(tuple(bindings)), *body))


def construct_forms(node: Forms, ctx: TraversalContext) -> Splice:
  """
  Lowers an implicit statement block.

  Args:
      node: The ``Forms`` node.
      ctx: Traversal context.

  Returns:
      Splice: The lowered statements, without ``=>`` connectives.
  """
  lowered = []
  for child in node.items:
    result = construct_node(child, ctx)
    if is_sym(result, ARROW):
      continue
    lowered.append(result)
  return Splice(tuple(splice_one_level(lowered)))


def construct_list(node: Lst, ctx: TraversalContext) -> Lst:
  """Lowers the children of a list form, splicing sequence results."""
  return Lst(tuple(splice_one_level(construct_node(child, ctx) for child in node.items)))


# --- Fixups ---


@dataclass
class DeclarationScan:
  """
  Accumulators for the forward-reference walk.

  Attributes:
      defined: Function names whose ``defn`` has been seen so far.
      forward: Names referenced before their definition, in discovery order.
  """

  defined: Set[str] = field(default_factory=set)
  forward: Dict[str, None] = field(default_factory=dict)


def _scan_declarations(node: Any, defns: Set[str], scan: DeclarationScan) -> DeclarationScan:
  # Pre-order: a defn marks its name before its own children are visited.
  name = defn_name(node)
  if name is not None:
    scan.defined.add(name)
  if isinstance(node, Sym) and node.text in defns and node.text not in scan.defined:
    scan.forward.setdefault(node.text, None)
  for child in getattr(node, "items", ()):
    _scan_declarations(child, defns, scan)
  return scan


def get_declares(top: Top, defns: Iterable[str]) -> List[str]:
  """
  Finds the functions referenced before their definition.

  Args:
      top: The program.
      defns: Names of the top-level function definitions.

  Returns:
      List[str]: Forward-referenced names in first-seen order.
  """
  scan = DeclarationScan()
  names = set(defns)
  for form in top.forms:
    scan = _scan_declarations(form, names, scan)
  return list(scan.forward)


def declare_undefined(top: Top) -> Top:
  """
  Inserts a ``(declare ...)`` form for forward-referenced functions.

  The form goes right after a leading ``(ns ...)`` form, otherwise first.

  Args:
      top: The program.

  Returns:
      Top: The program with the declaration, or `top` unchanged.
  """
  defns = [name for name in (defn_name(f) for f in top.forms) if name is not None]
  declares = get_declares(top, defns)
  if not declares:
    return top

  logger.debug("Forward declaring: %s", ", ".join(declares))
  form = Lst((Sym("declare"), *(Sym(name) for name in declares)))
  forms = list(top.forms)
  if forms and call_head(forms[0]) == "ns":
    forms.insert(1, form)
  else:
    forms.insert(0, form)
  return Top(tuple(forms))


def maybe_call_main(top: Top) -> Top:
  """Appends ``(apply main ARGV)`` if the program defines ``main``."""
  if any(defn_name(form) == "main" for form in top.forms):
    return Top((*top.forms, CALL_MAIN))
  return top


def construct(node: Any, ctx: Optional[TraversalContext] = None) -> Top:
  """
  Constructs the canonical AST for a whole document.

  Args:
      node: Root of the provisional tree, typed or in raw JSON shape.
      ctx: Initial traversal context (defaults to depth 0).

  Returns:
      Top: The program's top-level forms, with forward declarations and the
      implicit ``main`` call applied.

  Raises:
      InternalInvariantError: If the traversal context has the wrong shape.
      UnknownNodeError: If the raw tree contains an unknown tag.
  """
  ctx = TraversalContext() if ctx is None else ctx
  result = construct_node(from_raw(node), ctx)
  if isinstance(result, Splice):
    forms = tuple(splice_one_level(result.nodes))
  else:
    forms = (result,)
  top = Top(forms)
  top = declare_undefined(top)
  return maybe_call_main(top)
