"""
Exception Hierarchy.

All failures raised by the compiler derive from `YsError` so callers can
catch the whole family at one seam. None of these are recoverable inside a
compilation: each one aborts the current document.
"""


class YsError(Exception):
  """Base class for all compiler errors."""


class GrammarError(YsError):
  """
  Raised when a pattern template cannot be resolved.

  Indicates a defect in the grammar definition itself (an unknown or
  duplicated `$name` reference), never a problem with user input.
  """


class InternalInvariantError(YsError):
  """Raised when the constructor observes a traversal value of the wrong shape."""


class UnknownNodeError(YsError, ValueError):
  """
  Raised when a node outside the closed tag set is encountered.

  Attributes:
      node: The offending node (raw or typed).
  """

  def __init__(self, message: str, node: object = None) -> None:
    super().__init__(message)
    self.node = node


class FormatterError(YsError):
  """Raised when the external code formatter fails or is unavailable."""


class ConfigurationError(YsError):
  """Raised when required configuration (e.g. the search path) cannot be derived."""
