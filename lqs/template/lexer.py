"""
Лексический анализатор шаблонов.

Разбивает исходный текст на текст, вывод переменных {{ ... }}
и теги {% ... %}. Дефис у разделителя ({%- / -%}) срезает
пробельные символы соседнего текста.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import List, Optional

from .tokens import Token, TokenType
from ..errors import ParseError

_MARKUP_RE = re.compile(
    r"(?P<tag_open>\{%-?)(?P<tag>.*?)(?P<tag_close>-?%\})"
    r"|(?P<var_open>\{\{-?)(?P<var>.*?)(?P<var_close>-?\}\})",
    re.DOTALL,
)
_UNTERMINATED_RE = re.compile(r"\{%|\{\{")


class LexerError(ParseError):
    """Ошибка лексического анализа."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column
        self.position = position


class TemplateLexer:
    """Лексер одного исходного текста."""

    def __init__(self, text: str):
        self.text = text
        # Позиции начала строк для вычисления line/column
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def _locate(self, position: int) -> tuple[int, int]:
        line = bisect_right(self._line_starts, position)
        return line, position - self._line_starts[line - 1] + 1

    def _text_token(self, chunk: str, position: int) -> Optional[Token]:
        bad = _UNTERMINATED_RE.search(chunk)
        if bad:
            line, col = self._locate(position + bad.start())
            raise LexerError(f"Unterminated '{bad.group(0)}'", line, col, position + bad.start())
        if not chunk:
            return None
        line, col = self._locate(position)
        return Token(TokenType.TEXT, chunk, position, line, col, chunk)

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        pos = 0
        strip_next = False

        for m in _MARKUP_RE.finditer(self.text):
            chunk = self.text[pos:m.start()]
            chunk_pos = pos
            if strip_next:
                stripped = chunk.lstrip()
                chunk_pos += len(chunk) - len(stripped)
                chunk = stripped
            if (m.group("tag_open") or m.group("var_open")).endswith("-"):
                chunk = chunk.rstrip()
            text_token = self._text_token(chunk, chunk_pos)
            if text_token is not None:
                tokens.append(text_token)

            line, col = self._locate(m.start())
            if m.group("tag_open") is not None:
                tokens.append(Token(TokenType.TAG, m.group("tag").strip(), m.start(), line, col, m.group(0)))
                strip_next = m.group("tag_close").startswith("-")
            else:
                tokens.append(Token(TokenType.VARIABLE, m.group("var").strip(), m.start(), line, col, m.group(0)))
                strip_next = m.group("var_close").startswith("-")
            pos = m.end()

        tail = self.text[pos:]
        tail_pos = pos
        if strip_next:
            stripped = tail.lstrip()
            tail_pos += len(tail) - len(stripped)
            tail = stripped
        text_token = self._text_token(tail, tail_pos)
        if text_token is not None:
            tokens.append(text_token)

        line, col = self._locate(len(self.text))
        tokens.append(Token(TokenType.EOF, "", len(self.text), line, col))
        return tokens


def tokenize_template(text: str) -> List[Token]:
    """Удобная функция для токенизации текста шаблона."""
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "LexerError", "tokenize_template"]
