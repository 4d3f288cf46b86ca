"""
End-to-end compilation of a small program against a stored snapshot.

The tree is in the parser's JSON shape: a mapping with compound ``defn``
keys, a let binding, an ``=>`` value and a forward reference from ``main``.
"""

import json

from ysclj import compile_tree

PROGRAM = """
{"Pairs": [
  [{"Sym": "defn"}, {"Sym": "main"}, {"Vec": [{"Sym": "name"}]}],
  {"Pairs": [{"Sym": "greet"}, {"Sym": "name"}]},

  [{"Sym": "defn"}, {"Sym": "greet"}, {"Vec": [{"Sym": "who"}]}],
  {"Pairs": [
    [{"Sym": "let"}, {"Sym": "msg"}],
    {"Lst": [{"Sym": "str"}, {"Str": "Hello, "}, {"Sym": "who"}, {"Str": "!\\n"}]},
    {"Sym": "println"}, {"Sym": "msg"},
    {"Sym": "=>"}, {"Map": [{"Key": ":ok"}, {"Bln": true}]}
  ]}
]}
"""


def test_greeting_program(snapshot, passthrough):
  code = compile_tree(json.loads(PROGRAM), formatter=passthrough)
  snapshot.assert_match(code, extension="clj")
