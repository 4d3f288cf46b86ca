"""
Enumerations for ysclj.

Defines the closed set of node tags and the formatter backends understood
by the configuration layer.
"""

from enum import Enum


class Tag(str, Enum):
  """
  Node tags of the YAMLScript AST.

  The first block is the canonical set accepted by the printer. `PAIRS` and
  `FORMS` only exist in the provisional tree handed to the constructor.
  """

  EMPTY = "Empty"
  LST = "Lst"
  VEC = "Vec"
  MAP = "Map"
  STR = "Str"
  CHR = "Chr"
  SPC = "Spc"
  SYM = "Sym"
  TOK = "Tok"
  KEY = "Key"
  INT = "Int"
  FLT = "Flt"
  BLN = "Bln"
  NIL = "Nil"

  # Provisional only
  PAIRS = "Pairs"
  FORMS = "Forms"


class FormatterKind(str, Enum):
  """Available formatter collaborators."""

  ZPRINT = "zprint"
  NONE = "none"
