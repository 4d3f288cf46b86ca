"""
Tests for the Transpiler engine.

Verifies:
1. Successful compilation returns code and the form count.
2. Compiler errors produce a failed result without partial code.
3. The formatter named in the config is used unless one is passed in.
"""

from ysclj.config import RuntimeConfig
from ysclj.core.engine import Transpiler
from ysclj.core.formatter import PassthroughFormatter, ZprintFormatter
from ysclj.errors import FormatterError


class _BrokenFormatter:
  def format(self, code):
    raise FormatterError("zprint failed (exit 1): boom")


def test_run_success(passthrough):
  tree = {"Pairs": [{"Sym": "println"}, {"Str": "hi"}, {"Sym": "inc"}, {"Int": 1}]}

  result = Transpiler(formatter=passthrough).run(tree)

  assert result.success
  assert not result.has_errors
  assert result.code == '(println "hi")\n(inc 1)'
  assert result.form_count == 2


def test_run_reports_unknown_nodes(passthrough):
  result = Transpiler(formatter=passthrough).run({"Forms": [{"Widget": "x"}]})

  assert not result.success
  assert result.code == ""
  assert result.errors[0].startswith("UnknownNodeError:")


def test_run_reports_formatter_failure():
  result = Transpiler(formatter=_BrokenFormatter()).run({"Sym": "a"})

  assert not result.success
  assert result.errors == ["FormatterError: zprint failed (exit 1): boom"]


def test_formatter_from_config():
  assert isinstance(Transpiler(RuntimeConfig(formatter="none")).printer.formatter, PassthroughFormatter)
  assert isinstance(Transpiler().printer.formatter, ZprintFormatter)


def test_explicit_formatter_wins(recording_formatter):
  engine = Transpiler(RuntimeConfig(formatter="zprint"), formatter=recording_formatter)

  result = engine.run({"Forms": [{"Sym": "a"}, {"Sym": "b"}]})

  assert result.code == "a\nb"
  assert recording_formatter.calls == ["a\nb"]
