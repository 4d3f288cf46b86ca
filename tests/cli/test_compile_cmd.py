"""
Tests for the ``compile`` command.

Verifies:
1. A JSON parse tree compiles to stdout or to ``--out``.
2. ``--no-format`` skips zprint; ``--style`` reaches the formatter.
3. Invalid input, output or configuration reports an error and exits 1.
"""

import json
import subprocess
from unittest.mock import patch

import pytest

from ysclj.cli.__main__ import main

TREE = {"Pairs": [{"Sym": "println"}, {"Str": "hello"}]}


@pytest.fixture
def tree_file(tmp_path):
  path = tmp_path / "hello.json"
  path.write_text(json.dumps(TREE), encoding="utf-8")
  return path


def test_compile_to_stdout(tree_file, capsys):
  assert main(["compile", str(tree_file), "--no-format"]) == 0
  assert capsys.readouterr().out == '(println "hello")\n'


def test_compile_to_file(tree_file, tmp_path, captured_console):
  outfile = tmp_path / "build" / "hello.clj"

  assert main(["compile", str(tree_file), "--out", str(outfile), "--no-format"]) == 0

  assert outfile.read_text(encoding="utf-8") == '(println "hello")'
  assert "Wrote 1 forms" in captured_console.getvalue()


@patch("ysclj.core.formatter.subprocess.run")
@patch("ysclj.core.formatter.shutil.which", return_value="/usr/bin/zprint")
def test_compile_runs_zprint(mock_which, mock_run, tree_file, capsys):
  mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout='(println "hello")\n', stderr="")

  assert main(["compile", str(tree_file), "--style", "justified"]) == 0

  assert mock_run.call_args[0][0][1] == "{:style :justified :parse-string-all? true}"
  assert capsys.readouterr().out == '(println "hello")\n'


def test_compile_config_overrides(tree_file, capsys):
  assert main(["compile", str(tree_file), "--config", "formatter=none"]) == 0
  assert capsys.readouterr().out == '(println "hello")\n'


def test_missing_formatter_fails(tree_file, captured_console):
  code = main(["compile", str(tree_file), "--config", "zprint_command=/no/such/zprint-binary"])

  assert code == 1
  assert "FormatterError" in captured_console.getvalue()


def test_unknown_node_fails(tmp_path, captured_console):
  path = tmp_path / "bad.json"
  path.write_text(json.dumps({"Forms": [{"Pairs": [{"Thing": "[x]"}]}]}), encoding="utf-8")

  assert main(["compile", str(path), "--no-format"]) == 1
  assert "UnknownNodeError" in captured_console.getvalue()


def test_invalid_json(tmp_path, captured_console):
  path = tmp_path / "broken.json"
  path.write_text("{not json", encoding="utf-8")

  assert main(["compile", str(path), "--no-format"]) == 1
  assert "Invalid parse tree" in captured_console.getvalue()


def test_missing_input(tmp_path, captured_console):
  assert main(["compile", str(tmp_path / "absent.json")]) == 1
  assert "Input not found" in captured_console.getvalue()


def test_undecodable_input(tmp_path, captured_console):
  path = tmp_path / "latin.json"
  path.write_bytes(b'{"Str": "\xff\xfe"}')

  assert main(["compile", str(path), "--no-format"]) == 1
  assert "Cannot read" in captured_console.getvalue()


def test_unwritable_output(tree_file, tmp_path, captured_console):
  blocker = tmp_path / "blocker"
  blocker.write_text("", encoding="utf-8")

  code = main(["compile", str(tree_file), "--out", str(blocker / "hello.clj"), "--no-format"])

  assert code == 1
  assert "Cannot write" in captured_console.getvalue()


def test_invalid_style(tree_file, captured_console):
  assert main(["compile", str(tree_file), "--style", ":", "--no-format"]) == 1
  assert "Invalid configuration" in captured_console.getvalue()


@patch("ysclj.core.formatter.subprocess.run")
@patch("ysclj.core.formatter.shutil.which", return_value="/usr/bin/zprint")
def test_whole_program_parsing_is_fixed(mock_which, mock_run, tree_file, capsys):
  mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="x\n", stderr="")

  assert main(["compile", str(tree_file), "--config", "parse_all=false"]) == 0

  assert mock_run.call_args[0][0][1] == "{:style :community :parse-string-all? true}"
