#!/usr/bin/env python3
"""
End-to-end translation through the tree-sitter parser (unformatted output).
"""

import pytest

pytest.importorskip("tree_sitter")
pytest.importorskip("tree_sitter_python")

from py2ts.frontend.parser import Parser, parse
from py2ts.shared.errors import ParseError, UnsupportedConstruct

pytestmark = pytest.mark.integration


class TestParser:
    """tree-sitter -> lark Tree/Token"""

    def test_module_root_with_positions(self):
        cst = parse("x = 1\n")
        assert cst.data == "module"
        assert cst.meta.line == 1 and cst.meta.column == 1
        statement = cst.children[0]
        assert statement.data == "expression_statement"
        identifier = statement.children[0].children[0]
        assert identifier.type == "identifier"
        assert (str(identifier), identifier.line, identifier.column) == ("x", 1, 1)

    def test_strings_are_leaves(self):
        cst = parse('s = "a {b}"\n')
        value = cst.children[0].children[0].children[-1]
        assert value.type == "string"
        assert str(value) == '"a {b}"'

    def test_syntax_error_raises(self):
        with pytest.raises(ParseError) as exc:
            Parser().parse("def f(:\n    pass\n", "bad.py")
        assert exc.value.location.file == "bad.py"
        assert exc.value.location.line == 1


class TestEndToEnd:
    """Python source in, TypeScript text out"""

    def test_add_with_default(self, translate):
        text = translate("def add(a, b=1):\n    return a + b\n")
        assert text == "function add(a, { b = 1 } = {}) {\n  return a + b\n}\n"

    def test_typed_defaults_get_an_alias_before_the_function(self, translate):
        text = translate("def make_point(x: int = 0, y: int = 0) -> Point:\n    return Point(x, y)\n")
        alias, function = text.rstrip("\n").split("\n\n")
        assert alias == "type MakePointOptions = { x?: number, y?: number }"
        assert function.startswith("function makePoint({ x = 0, y = 0 }: MakePointOptions = {}): Point {")

    def test_hoisting(self, translate):
        source = (
            "def first_even(values):\n"
            "    for value in values:\n"
            "        if value % 2 == 0:\n"
            "            found = value\n"
            "            break\n"
            "    return found\n"
        )
        assert translate(source).split("\n")[:4] == [
            "function firstEven(values) {",
            "  let value",
            "  let found",
            "  for (value of values) {",
        ]

    def test_if_elif_else_order(self, translate):
        source = (
            "if a:\n    x = 1\n"
            "elif b:\n    x = 2\n"
            "else:\n    x = 3\n"
        )
        assert translate(source) == (
            "let x\n\n"
            "if (a) {\n  x = 1\n} else if (b) {\n  x = 2\n} else {\n  x = 3\n}\n"
        )

    def test_naming_round_trip(self, translate):
        source = "my_value = 1\nprint(my_value)\nobj.my_value = my_value\n"
        assert translate(source) == (
            "let myValue\n\nmyValue = 1\n\nprint(myValue)\n\nobj.myValue = myValue\n"
        )

    def test_keywords_normalized(self, translate):
        text = translate("ok = a and not b or c is None\n")
        assert "ok = a && !b || c == null" in text

    def test_docstring_and_class(self, translate):
        source = (
            '"""Shapes."""\n'
            "import math\n"
            "\n"
            "class Circle(Shape):\n"
            '    """A circle."""\n'
            "\n"
            "    def __init__(self, radius):\n"
            "        super().__init__()\n"
            "        self.radius = radius\n"
            "\n"
            "    def area(self):\n"
            "        return math.pi * self.radius ** 2\n"
        )
        assert translate(source) == (
            "/**\n * Shapes.\n */\n\n"
            "class Circle extends Shape {\n"
            "  /**\n   * A circle.\n   */\n"
            "  constructor(radius) {\n"
            "    super()\n"
            "    this.radius = radius\n"
            "  }\n"
            "  area() {\n"
            "    return math.pi * this.radius ** 2\n"
            "  }\n"
            "}\n"
        )

    def test_raise_becomes_throw(self, translate):
        text = translate("def check(x):\n    if x < 0:\n        raise ValueError('negative')\n")
        assert "    throw new ValueError('negative')" in text.split("\n")

    def test_keyword_arguments(self, translate):
        assert translate("draw(shape, line_width=2)\n") == "draw(shape, { lineWidth: 2 })\n"

    def test_multiline_string_value_preserved(self, translate):
        source = 'def f():\n    x = """a\nb"""\n    return """c\nd"""\n'
        assert translate(source) == "function f() {\n  let x\n  x = `a\nb`\n  return `c\nd`\n}\n"

    def test_reserved_word_attribute(self, translate):
        source = "def f(s):\n    return s.delete(1)\n"
        assert translate(source) == "function f(s) {\n  return s.delete(1)\n}\n"


class TestUnsupported:
    """Fail-fast on constructs without a translation"""

    @pytest.mark.parametrize("source,kind", [
        ("with open(p) as f:\n    pass\n", "with_statement"),
        ("try:\n    pass\nexcept E:\n    pass\n", "try_statement"),
        ("xs = [x for x in ys]\n", "list_comprehension"),
        ("s = f'{x}'\n", "interpolation"),
        ("ok = a in b\n", "in"),
    ])
    def test_unsupported(self, translator, source, kind):
        result = translator.translate(source, "bad.py")
        assert not result.success
        assert isinstance(result.error, UnsupportedConstruct)
        assert result.error.node_kind == kind
        assert result.blocks == []

    def test_error_location_points_at_construct(self, translator):
        result = translator.translate("x = 1\nwith a:\n    pass\n", "bad.py")
        assert (result.error.location.line, result.error.location.column) == (2, 1)
