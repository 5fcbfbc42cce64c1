from __future__ import annotations

import html
import re

from .base import AbstractBlock
from ..errors import ParseError
from ..template.context import RenderContext
from ..template.document import ParseState, TokenStream
from ..template.expressions import unquote
from ..template.nodes import to_output

_SYNTAX_RE = re.compile(r"\w+")

FORM_ACTIONS = {
    "product": "/cart/add",
    "customer": "/account",
}


class FormBlock(AbstractBlock):
    """
    {% form 'product', id:'add-to-cart' %}...{% endform %}

    Оборачивает тело в <form>; action определяется типом формы,
    пары key:value становятся атрибутами.
    """

    name = "form"

    def __init__(self, markup: str, stream: TokenStream, state: ParseState):
        if not _SYNTAX_RE.search(markup):
            raise ParseError("Syntax Error in 'form'")
        self.form_type = unquote(markup.split(",", 1)[0].strip())
        super().__init__(markup, stream, state)

    def render(self, context: RenderContext) -> str:
        output = super().render(context)

        attrs = [
            ("enctype", "multipart/form-data"),
            ("action", FORM_ACTIONS.get(self.form_type, "")),
            ("method", "post"),
        ]
        attrs.extend((key, to_output(context.get(expr))) for key, expr in self.attributes.items())

        rendered = " ".join(f'{key}="{html.escape(value)}"' for key, value in attrs)
        return f"<form {rendered}>{output}</form>"


__all__ = ["FormBlock", "FORM_ACTIONS"]
