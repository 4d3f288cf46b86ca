"""
Tests for RuntimeConfig.

Verifies that:
1. Defaults select zprint with the community style.
2. Style names are normalized and must not be empty.
3. [tool.ysclj] in pyproject.toml is picked up, including from parent dirs.
4. Explicit arguments beat ``--config`` overrides, which beat TOML.
"""

import pytest
from pydantic import ValidationError

from ysclj.config import RuntimeConfig, parse_cli_key_values
from ysclj.enums import FormatterKind


@pytest.fixture
def toml_file(tmp_path):
  """Creates a pyproject.toml with a ysclj section in the temp dir."""
  fpath = tmp_path / "pyproject.toml"
  content = """
[tool.ysclj]
formatter = "none"
style = "justified"
zprint_command = "/opt/zprint/bin/zprint"
unknown_key = 1
"""
  fpath.write_text(content, encoding="utf-8")
  return fpath


def test_defaults():
  config = RuntimeConfig()
  assert config.formatter == FormatterKind.ZPRINT
  assert config.style == "community"
  assert config.zprint_command == "zprint"


def test_style_normalization():
  assert RuntimeConfig(style=" :Community ").style == "community"
  with pytest.raises(ValidationError):
    RuntimeConfig(style=":")


def test_invalid_formatter_kind():
  with pytest.raises(ValidationError):
    RuntimeConfig(formatter="cljfmt")


def test_load_from_toml(tmp_path, toml_file):
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.formatter == FormatterKind.NONE
  assert config.style == "justified"
  assert config.zprint_command == "/opt/zprint/bin/zprint"


def test_toml_found_in_parent_dir(tmp_path, toml_file):
  nested = tmp_path / "a" / "b"
  nested.mkdir(parents=True)
  assert RuntimeConfig.load(search_path=nested).style == "justified"


def test_priority_order(tmp_path, toml_file):
  config = RuntimeConfig.load(
    style="community",
    overrides={"style": "indent-only", "formatter": "zprint", "bogus": "x"},
    search_path=tmp_path,
  )

  assert config.style == "community"  # explicit wins
  assert config.formatter == FormatterKind.ZPRINT  # override beats TOML
  assert config.zprint_command == "/opt/zprint/bin/zprint"  # TOML fallback


def test_load_without_toml(tmp_path):
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()


def test_parse_cli_key_values():
  parsed = parse_cli_key_values(["debug=False", "style = justified", "zprint_command=a=b", "junk"])
  assert parsed == {"debug": False, "style": "justified", "zprint_command": "a=b"}
  assert parse_cli_key_values(None) == {}


def test_parse_all_cannot_be_disabled(tmp_path):
  config = RuntimeConfig.load(overrides={"parse_all": False}, search_path=tmp_path)
  assert "parse_all" not in RuntimeConfig.model_fields
  assert config == RuntimeConfig()
