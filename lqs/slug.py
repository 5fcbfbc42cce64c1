from __future__ import annotations

import re
import unicodedata

# Разделители в значениях with и в именах шаблонов ("blocks/card", "card.liquid")
_ID_SEPARATORS = re.compile(r"[\s/.]+")
_ID_DROP = re.compile(r"[^a-z0-9_-]+")
_ID_DASHES = re.compile(r"-+")


def slugify_id(value: object) -> str:
    """
    Хвост атрибута id обёртки секции (после section_id_prefix).

    Значение with-выражения или имя шаблона приводится к ASCII в нижнем
    регистре; сегменты пути и расширение склеиваются через '-', '_' сохраняется.
    Пустая строка означает, что значение не дало ни одного символа,
    и вызывающий код берёт slug имени шаблона.
    """
    ascii_text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    text = _ID_SEPARATORS.sub("-", ascii_text.lower())
    text = _ID_DASHES.sub("-", _ID_DROP.sub("", text))
    return text.strip("-")


__all__ = ["slugify_id"]
