"""
YAMLScript Lexical Grammar.

Defines the regex parts used to recognize YAMLScript expression tokens. Each
entry of `GRAMMAR_DEFS` is a named template that may reference earlier entries
with ``$name``; the list is expanded once, in order, into the module-level
`GRAMMAR` table.

Tokenizers and line classifiers address matchers by name::

    from ysclj.core.grammar import GRAMMAR
    GRAMMAR["xnum"].fullmatch("-1.5e3")

Patterns written in verbose mode use a scoped ``(?x: ...)`` group so they can
be spliced into non-verbose templates.
"""

from typing import List, Optional, Tuple

from ysclj.core.patterns import PatternTable

# Maximum nesting depth recognized by the `bpar` pattern.
BPAR_DEPTH = 6

# Order matters: a template may only reference names defined above it.
GRAMMAR_DEFS: List[Tuple[str, str]] = [
  # Character token
  (
    "char",
    r"""(?x:
      \\
      (?:
        newline |
        space |
        tab |
        formfeed |
        backspace |
        return |
        .
      )
    )""",
  ),
  # Comment token
  ("comm", r";.*(?:\n|\Z)"),
  # Ignorables
  (
    "ignr",
    r"""(?x:
      (?:
        \#!.*\n? |                  # hashbang line
        [\s,]+ |                    # whitespace, commas
        ;.*\n? |                    # comments
                                    # empty
      )
    )""",
  ),
  # Numeric literals
  ("inum", r"-?\d+"),
  ("fnum", r"$inum\.\d*(?:e$inum)?"),
  ("xnum", r"(?:$fnum|$inum)"),
  # Special operator token
  ("xsym", r"(?:\=\~)"),
  # Operator symbol token
  ("osym", r"(?:[-+*/%<=>~|&.]{1,3})"),
  # Anonymous fn start token
  ("anon", r"(?:\\\()"),
  # Numbered argument token
  ("narg", r"(?:%\d+)"),
  # Regular expression
  (
    "regx",
    r"""(?x:
      / (?=\S)                      # opening slash
      (?:
        \\. |                       # escaped char
        [^\\/\n]                    # any other char
      )+/                           # ending slash
    )""",
  ),
  # Double quoted string
  (
    "dstr",
    r"""(?x:
      "(?:
        \\. |                       # escaped char
        [^\\"]                      # any other char
      )*"
    )""",
  ),
  # Single quoted string
  (
    "sstr",
    r"""(?x:
      '(?:
        '' |                        # escaped single quote
        [^']                        # any other char
      )*'
    )""",
  ),
  # Positive integer
  ("pnum", r"(?:\d+)"),
  # Alphanumeric
  ("anum", r"[a-zA-Z0-9]"),
  # Symbol word
  ("symw", r"(?:$anum+(?:-$anum+)*)"),
  # Path key
  ("pkey", r"(?:$symw|$pnum|$dstr|$sstr)"),
  # Lookup path
  ("path", r"(?:$symw(?:\.$pkey)+)"),
  # Keyword token
  ("keyw", r"(?:\:$symw)"),
  # Clojure symbol
  ("csym", r"(?:[-a-zA-Z0-9_*+?!<=>]+(?:\.(?=\ ))?)"),
  # YAMLScript symbol token
  ("ysym", r"(?:$symw[?!.]?)"),
  # Symbol with default
  ("dsym", r"(?:$symw=)"),
  # Namespace symbol
  ("nspc", r"(?:$symw(?:\:\:$symw)+)"),
  # Fully qualified symbol
  ("fsym", r"(?:(?:$nspc|$symw)\/$ysym)"),
  # Symbol followed by paren
  ("psym", r"(?:(?:$fsym|$ysym)\()"),
  # Earmuff symbol
  ("esym", r"(?:\*$symw\*)"),
  # Pair key for def/let call
  ("defk", r"^($symw) +=$"),
  # Pair key for defn call
  ("dfnk", r"^defn ($ysym)(?:\((.*)\))?$"),
  # Balanced parens, bounded to BPAR_DEPTH levels
  (
    "bpar",
    r"""(?x:
      \(
        [^)(]*(?:\(
          [^)(]*(?:\(
            [^)(]*(?:\(
              [^)(]*(?:\(
                [^)(]*(?:\(
                  [^)(]*
                \)[^)(]*)*
              \)[^)(]*)*
            \)[^)(]*)*
          \)[^)(]*)*
        \)[^)(]*)*
      \)
    )""",
  ),
]

GRAMMAR = PatternTable.from_definitions(GRAMMAR_DEFS)


def matches(name: str, text: str) -> bool:
  """
  Checks whether `text` is exactly one token of the named pattern.

  Args:
      name: Pattern name in `GRAMMAR`.
      text: Candidate substring.

  Returns:
      bool: True on a full match.
  """
  return GRAMMAR[name].fullmatch(text) is not None


def parse_def_key(line: str) -> Optional[str]:
  """
  Recognizes a ``name =`` pair key.

  Args:
      line: The pair key text.

  Returns:
      The bound symbol name, or None if the line is not a def/let key.
  """
  match = GRAMMAR["defk"].match(line)
  return match.group(1) if match else None


def parse_defn_signature(line: str) -> Optional[Tuple[str, Optional[str]]]:
  """
  Recognizes a ``defn name(params)`` pair key.

  Args:
      line: The pair key text.

  Returns:
      Tuple of (function name, raw parameter list or None), or None when the
      line is not a defn signature.
  """
  match = GRAMMAR["dfnk"].match(line)
  if not match:
    return None
  return match.group(1), match.group(2)
