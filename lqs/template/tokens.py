from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    TEXT = "text"
    VARIABLE = "variable"  # {{ expression }}
    TAG = "tag"            # {% name markup %}
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """
    Фрагмент исходника шаблона.

    value у TAG/VARIABLE хранит содержимое между разделителями (обрезанное),
    raw хранит фрагмент целиком, с разделителями; по нему блоки вроде
    {% schema %} восстанавливают неразобранное тело.
    line и column считаются с 1 и используются в сообщениях об ошибках.
    """
    type: TokenType
    value: str
    position: int
    line: int
    column: int
    raw: str = ""


__all__ = ["TokenType", "Token"]
