from pathlib import Path

import pytest

from lqs.errors import NotFoundError, ParseError
from lqs.tags.include import iter_collection

from tests.infrastructure import write, write_snippet


class TestIncludeTag:

    def test_plain(self, env, tpl_root: Path):
        write_snippet(tpl_root, "logo", "<img>")
        assert env.render("a{% include 'logo' %}b") == "a<img>b"

    def test_with(self, env, tpl_root: Path):
        write_snippet(tpl_root, "price", "${{ price }}")
        assert env.render("{% include 'price' with amount %}", {"amount": 5}) == "$5"

    def test_for(self, env, tpl_root: Path):
        write_snippet(tpl_root, "item", "<{{ item }}>")
        assert env.render("{% include 'item' for names %}", {"names": ["a", "b"]}) == "<a><b>"

    def test_for_quoted_collection_name(self, env, tpl_root: Path):
        write_snippet(tpl_root, "item", "<{{ item }}>")
        assert env.render("{% include 'item' for 'names' %}", {"names": ["a", "b"]}) == "<a><b>"

    def test_attributes(self, env, tpl_root: Path):
        write_snippet(tpl_root, "badge", "{{ label }}-{{ color }}")
        out = env.render("{% include 'badge', label: 'new', color: c %}", {"c": "red"})
        assert out == "new-red"

    def test_bindings_restored(self, env, tpl_root: Path):
        write_snippet(tpl_root, "item", "{{ item }}")
        out = env.render("{{ item }}{% include 'item' with 'x' %}{{ item }}", {"item": "o"})
        assert out == "oxo"

    def test_not_wrapped(self, env, tpl_root: Path):
        write_snippet(tpl_root, "logo", "L{% schema %}{\"class\": \"c\"}{% endschema %}")
        assert env.render("{% include 'logo' %}") == "L"

    def test_resolved_in_include_root_only(self, env, tpl_root: Path):
        write(tpl_root / "sections" / "_only-section.liquid", "s")
        with pytest.raises(NotFoundError):
            env.render("{% include 'only-section' %}")

    def test_syntax_error(self, env):
        with pytest.raises(ParseError, match="Error in tag 'include'"):
            env.render("{% include %}")

    def test_as_is_not_include_keyword(self, env, tpl_root: Path):
        write_snippet(tpl_root, "item", "x")
        with pytest.raises(ParseError, match="unexpected 'as items'"):
            env.render("{% include 'item' as items %}")


@pytest.mark.parametrize("value, expected", [
    (None, []),
    ([1, 2], [1, 2]),
    ((1, 2), [1, 2]),
    ("abc", ["abc"]),
    ({"k": "v"}, [{"k": "v"}]),
    (7, [7]),
])
def test_iter_collection(value, expected):
    assert iter_collection(value) == expected
