"""
Runtime Configuration Store.

Settings are read from the ``[tool.ysclj]`` table of the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ysclj.enums import FormatterKind

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

logger = logging.getLogger(__name__)


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the compiler.
  """

  formatter: FormatterKind = Field(FormatterKind.ZPRINT, description="Layout collaborator ('zprint' or 'none').")
  style: str = Field("community", description="zprint style profile.")
  zprint_command: str = Field("zprint", description="zprint executable name or path.")

  @field_validator("style")
  @classmethod
  def validate_style(cls, v: str) -> str:
    """
    Normalizes the style name.

    Args:
        v (str): Raw style name, optionally with a leading ':'.

    Returns:
        str: The bare, lowercase style keyword.

    Raises:
        ValueError: If the style is empty.
    """
    v_clean = v.strip().lstrip(":").lower()
    if not v_clean:
      raise ValueError("Formatter style must not be empty")
    return v_clean

  @classmethod
  def load(
    cls,
    formatter: Optional[str] = None,
    style: Optional[str] = None,
    zprint_command: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        formatter (Optional[str]): Override for the formatter kind.
        style (Optional[str]): Override for the zprint style.
        zprint_command (Optional[str]): Override for the zprint executable.
        overrides (Optional[Dict]): Extra ``key=value`` settings from the CLI.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)
    if toml_dir:
      logger.debug("Using [tool.ysclj] from %s", toml_dir / "pyproject.toml")

    settings: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    settings.update({k: v for k, v in (overrides or {}).items() if k in cls.model_fields})

    explicit = {
      "formatter": formatter,
      "style": style,
      "zprint_command": zprint_command,
    }
    settings.update({k: v for k, v in explicit.items() if v is not None})
    return cls(**settings)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      tool_section = data.get("tool", {})
      return tool_section.get("ysclj", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (bool or string).

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      logger.warning("Ignoring invalid config format: '%s'. Expected 'key=value'.", item)
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    final_val: Any = val_str
    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False

    config[key] = final_val

  return config
