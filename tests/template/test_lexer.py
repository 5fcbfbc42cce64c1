"""
Тесты для лексического анализатора.

Проверяет токенизацию текста, вывода переменных {{ ... }},
тегов {% ... %}, управление пробелами и позиции токенов.
"""

import pytest

from lqs.errors import ParseError
from lqs.template.lexer import LexerError, TemplateLexer, tokenize_template
from lqs.template.tokens import TokenType


class TestTemplateLexer:

    def test_empty_template(self):
        """Пустой шаблон должен возвращать только EOF токен."""
        tokens = TemplateLexer("").tokenize()

        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_plain_text(self):
        tokens = tokenize_template("Hello, world!")

        assert [t.type for t in tokens] == [TokenType.TEXT, TokenType.EOF]
        assert tokens[0].value == "Hello, world!"

    def test_tag_and_variable(self):
        tokens = tokenize_template("a{% section 'hero' %}b{{ name }}c")

        assert [t.type for t in tokens] == [
            TokenType.TEXT, TokenType.TAG, TokenType.TEXT,
            TokenType.VARIABLE, TokenType.TEXT, TokenType.EOF,
        ]
        assert tokens[1].value == "section 'hero'"
        assert tokens[1].raw == "{% section 'hero' %}"
        assert tokens[3].value == "name"

    def test_positions(self):
        tokens = tokenize_template("line 1\n  {{ x }}")

        variable = tokens[1]
        assert variable.position == 9
        assert variable.line == 2
        assert variable.column == 3

    def test_multiline_tag(self):
        tokens = tokenize_template("{% section\n  'hero' %}")

        assert tokens[0].type == TokenType.TAG
        assert tokens[0].value == "section\n  'hero'"

    def test_whitespace_control(self):
        tokens = tokenize_template("a  \n{%- schema -%}\n  b")

        assert [t.value for t in tokens if t.type != TokenType.EOF] == ["a", "schema", "b"]

    def test_whitespace_control_on_variables(self):
        tokens = tokenize_template("x {{- y -}} z")

        assert [t.value for t in tokens if t.type != TokenType.EOF] == ["x", "y", "z"]

    def test_whitespace_control_drops_blank_text(self):
        tokens = tokenize_template("{% a -%}   {%- b %}")

        assert [t.type for t in tokens] == [TokenType.TAG, TokenType.TAG, TokenType.EOF]

    @pytest.mark.parametrize("text, column", [
        ("hello {% section 'x'", 7),
        ("{{ name", 1),
    ])
    def test_unterminated(self, text, column):
        with pytest.raises(LexerError) as exc:
            tokenize_template(text)
        assert exc.value.line == 1
        assert exc.value.column == column

    def test_lexer_error_is_parse_error(self):
        with pytest.raises(ParseError):
            tokenize_template("{{")
