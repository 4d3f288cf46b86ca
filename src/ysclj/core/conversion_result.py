"""
Data structures representing the output of the compilation pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code and any errors encountered.
"""

from typing import List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of one compilation.
  """

  code: str = Field(default="", description="The generated Clojure source.")
  errors: List[str] = Field(default_factory=list, description="Error messages encountered.")
  success: bool = Field(default=True, description="True if every stage completed.")
  form_count: int = Field(default=0, description="Number of top-level forms emitted.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
