"""
Общие регулярные выражения разметки тегов и разбор простых выражений.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

# Фрагмент выражения: строка в кавычках или последовательность символов
# без пробелов, запятых, вертикальной черты и кавычек.
QUOTED_STRING = r"\"[^\"]*\"|'[^']*'"
QUOTED_FRAGMENT = rf"(?:{QUOTED_STRING}|(?:[^\s,|'\"]|{QUOTED_STRING})+)"

# key:value внутри разметки тега
TAG_ATTRIBUTES_RE = re.compile(rf"(\w+)\s*:\s*({QUOTED_FRAGMENT})")

_VARIABLE_PART_RE = re.compile(r"\[[^\]]+\]|[\w\-]+\??")
_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")

# Маркер «литерал не распознан»
NOT_LITERAL = object()

_KEYWORDS = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
    "empty": None,
    "blank": None,
}


def is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"')


def unquote(text: str) -> str:
    """Снимает парные кавычки, если они есть."""
    return text[1:-1] if is_quoted(text) else text


def parse_literal(expression: str) -> Any:
    """Литерал выражения или NOT_LITERAL."""
    if is_quoted(expression):
        return expression[1:-1]
    if expression in _KEYWORDS:
        return _KEYWORDS[expression]
    if _INT_RE.match(expression):
        return int(expression)
    if _FLOAT_RE.match(expression):
        return float(expression)
    return NOT_LITERAL


def split_variable(expression: str) -> List[Any]:
    """
    Разбивает путь переменной на части.

    'settings.sections["hero"].blocks[0]' → ['settings', 'sections', 'hero', 'blocks', 0]
    Части в скобках, не являющиеся литералами, возвращаются как кортеж ('lookup', expr).
    """
    parts: List[Any] = []
    for piece in _VARIABLE_PART_RE.findall(expression):
        if piece.startswith("["):
            inner = piece[1:-1].strip()
            literal = parse_literal(inner)
            parts.append(("lookup", inner) if literal is NOT_LITERAL else literal)
        else:
            parts.append(piece)
    return parts


def extract_attributes(markup: str) -> Dict[str, str]:
    """Пары key:value из разметки тега (значения: неразобранные выражения)."""
    return {m.group(1): m.group(2) for m in TAG_ATTRIBUTES_RE.finditer(markup)}


def split_tag(markup: str) -> Tuple[str, str]:
    """'section "hero" with x' → ('section', '"hero" with x')"""
    parts = markup.strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1].strip() if len(parts) > 1 else ""


__all__ = [
    "QUOTED_FRAGMENT",
    "QUOTED_STRING",
    "TAG_ATTRIBUTES_RE",
    "NOT_LITERAL",
    "is_quoted",
    "unquote",
    "parse_literal",
    "split_variable",
    "extract_attributes",
    "split_tag",
]
