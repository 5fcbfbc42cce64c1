from __future__ import annotations

from .base import AbstractBlock, AbstractTag, Taggable
from .form import FormBlock
from .include import AbstractInclude, IncludeTag
from .schema import SchemaBlock, SchemaMetadata, extract_schema
from .section import SectionTag

__all__ = [
    "Taggable",
    "AbstractTag",
    "AbstractBlock",
    "AbstractInclude",
    "IncludeTag",
    "SectionTag",
    "SchemaBlock",
    "SchemaMetadata",
    "extract_schema",
    "FormBlock",
]
