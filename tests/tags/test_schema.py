import pytest

from lqs.errors import ParseError
from lqs.tags import SchemaMetadata, extract_schema
from lqs.template import Environment


@pytest.mark.parametrize("source, css_class", [
    ('{% schema %}{"class": "hero-banner"}{% endschema %}', "hero-banner"),
    ('x{%- schema -%}\n{"class": "  wide  ", "name": "Hero"}\n{%- endschema -%}', "wide"),
    ('{% schema %}{"name": "Hero"}{% endschema %}', ""),
    ('{% schema %}{"class": 5}{% endschema %}', ""),
    ('{% schema %}["class"]{% endschema %}', ""),
    ('{% schema %}{broken{% endschema %}', ""),
    ("no schema here", ""),
])
def test_extract_schema(source: str, css_class: str):
    assert extract_schema(source) == SchemaMetadata(css_class=css_class)


def test_schema_block_renders_nothing():
    assert Environment().render('a{% schema %}{"class": "x"}{% endschema %}b') == "ab"


def test_schema_body_is_not_parsed():
    env = Environment()
    out = env.render("a{% schema %}{{ x }}{% unknown %}{% endschema %}b", {"x": 1})
    assert out == "ab"


def test_unclosed_schema():
    with pytest.raises(ParseError, match="endschema"):
        Environment().parse('{% schema %}{"class": "x"}')
