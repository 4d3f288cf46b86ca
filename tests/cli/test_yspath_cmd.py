"""
Tests for the ``yspath`` command and global CLI flags.
"""

import logging

import pytest

from ysclj import __version__
from ysclj.cli.__main__ import main
from ysclj.utils.paths import YSPATH_ENV


def test_yspath_from_env(monkeypatch, capsys):
  monkeypatch.setenv(YSPATH_ENV, "/a:/b")
  assert main(["yspath"]) == 0
  assert capsys.readouterr().out == "/a\n/b\n"


def test_yspath_from_document(monkeypatch, tmp_path, capsys):
  monkeypatch.delenv(YSPATH_ENV, raising=False)
  assert main(["yspath", str(tmp_path / "prog.ys")]) == 0
  assert capsys.readouterr().out == f"{tmp_path}\n"


def test_yspath_unset(monkeypatch, captured_console):
  monkeypatch.delenv(YSPATH_ENV, raising=False)
  assert main(["yspath"]) == 1
  assert "not set" in captured_console.getvalue()


def test_version_flag(capsys):
  with pytest.raises(SystemExit) as excinfo:
    main(["--version"])
  assert excinfo.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_verbose_enables_debug(monkeypatch, capsys):
  monkeypatch.setenv(YSPATH_ENV, "/a")
  assert main(["-v", "yspath"]) == 0
  assert logging.getLogger().level == logging.DEBUG


def test_command_required():
  with pytest.raises(SystemExit):
    main([])
