"""
Тесты построения и рендеринга документов через Environment.
"""

import pytest

from lqs.errors import MissingCollaboratorError, ParseError, RecursionLimitError
from lqs.config import EngineConfig
from lqs.tags import FormBlock, IncludeTag, SchemaBlock, SectionTag
from lqs.template import Environment, ParseState, TagRegistry, create_default_registry
from lqs.template.nodes import TextNode, VariableNode, to_output


class TestRendering:

    def test_text_and_variables(self):
        env = Environment()
        assert env.render("Hello {{ name }}!", {"name": "World"}) == "Hello World!"

    def test_missing_variable_renders_empty(self):
        assert Environment().render("[{{ nope }}]") == "[]"

    def test_parse_builds_nodes(self):
        env = Environment()
        document = env.parse("a{{ b }}")
        assert document.nodelist == [TextNode("a"), VariableNode("b")]

    def test_document_without_tags_has_no_includes(self):
        env = Environment()
        assert env.parse("plain {{ x }}").has_includes(env) is False

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (["a", 1], "a1"),
        ({"k": "v"}, ""),
    ])
    def test_to_output(self, value, expected):
        assert to_output(value) == expected


class TestParseErrors:

    def test_unknown_tag(self):
        with pytest.raises(ParseError, match="Unknown tag 'foo'"):
            Environment().parse("{% foo %}")

    def test_unclosed_block(self):
        with pytest.raises(ParseError, match="endform"):
            Environment().parse("{% form 'product' %}body")

    def test_empty_variable(self):
        with pytest.raises(ParseError, match="Empty variable"):
            Environment().parse("{{ }}")


class TestCollaborators:

    def test_section_without_file_system(self):
        with pytest.raises(MissingCollaboratorError, match="No file system"):
            Environment().render("{% section 'hero' %}")

    def test_render_file_without_file_system(self):
        with pytest.raises(MissingCollaboratorError):
            Environment().render_file("page")


class TestParseState:

    def test_cycle_detected(self):
        env = Environment()
        state = ParseState(env, env.new_context()).descend("section:a").descend("section:b")
        with pytest.raises(RecursionLimitError, match="section:a -> section:b -> section:a") as exc:
            state.descend("section:a")
        assert exc.value.stack == ("section:a", "section:b", "section:a")

    def test_depth_limit(self):
        env = Environment(EngineConfig(max_include_depth=2))
        state = ParseState(env, env.new_context()).descend("a").descend("b")
        with pytest.raises(RecursionLimitError, match="depth limit"):
            state.descend("c")

    def test_descend_does_not_mutate(self):
        env = Environment()
        root = ParseState(env, env.new_context())
        root.descend("a")
        assert root.include_stack == ()


class TestRegistry:

    def test_default_tags(self):
        registry = create_default_registry()
        assert registry.names() == ["form", "include", "schema", "section"]
        assert registry.get("section") is SectionTag
        assert registry.get("include") is IncludeTag
        assert registry.get("schema") is SchemaBlock
        assert registry.get("form") is FormBlock

    def test_duplicate_registration(self):
        registry = TagRegistry()
        registry.register("section", SectionTag)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("section", SectionTag)

    def test_custom_registry_limits_tags(self):
        registry = TagRegistry()
        env = Environment(registry=registry)
        with pytest.raises(ParseError, match="Unknown tag 'section'"):
            env.parse("{% section 'hero' %}")
