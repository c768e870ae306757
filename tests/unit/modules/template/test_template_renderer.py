import pytest

from pagebind.modules.scope import DataScopeStack, ScopeFrame
from pagebind.modules.template import (
    TemplateRenderer,
    extract_paths,
    extract_variables,
    has_placeholders,
    render_template,
    to_text,
)


@pytest.fixture
def scope():
    return DataScopeStack([
        ScopeFrame(name="site", value={"name": "Shop", "open": True}),
        ScopeFrame(name="product", value={
            "name": "Lamp",
            "price": 19.5,
            "stock": 0,
            "discount": None,
            "tags": ["home", "light"],
            "meta": {"sku": "L-1"},
        }, index=3, is_repeating=True),
    ])


@pytest.fixture
def renderer():
    return TemplateRenderer()


class TestTemplateRenderer:
    """Test cases for placeholder rendering."""

    def test_renders_placeholders(self, renderer, scope):
        assert renderer.render("{{product.name}} costs {{ product.price }}", scope) == "Lamp costs 19.5"

    def test_missing_values_render_empty(self, renderer):
        assert renderer.render("Hi {{user.name}}", DataScopeStack()) == "Hi "

    def test_null_renders_empty(self, renderer, scope):
        assert renderer.render("[{{product.discount}}]", scope) == "[]"

    def test_zero_and_booleans(self, renderer, scope):
        assert renderer.render("{{product.stock}}/{{site.open}}", scope) == "0/true"

    def test_structured_values_render_as_json(self, renderer, scope):
        assert renderer.render("{{product.tags}} {{product.meta}}", scope) == '["home","light"] {"sku":"L-1"}'

    def test_index(self, renderer, scope):
        assert renderer.render("#{{index}}", scope) == "#3"

    def test_non_ascii_index_renders_empty(self, renderer, scope):
        assert renderer.render("x {{product.tags.\u00b2}}", scope) == "x "

    def test_text_without_placeholders_is_unchanged(self, renderer, scope):
        assert renderer.render("Plain {text}", scope) == "Plain {text}"

    def test_unclosed_placeholder_is_left_alone(self, renderer, scope):
        assert renderer.render("{{product.name", scope) == "{{product.name"

    @pytest.mark.parametrize("template", [None, ""])
    def test_empty_template(self, renderer, scope, template):
        assert renderer.render(template, scope) == ""

    def test_render_dict(self, renderer, scope):
        data = {
            "title": "{{product.name}}",
            "nested": {"sku": "{{product.meta.sku}}"},
            "items": ["{{site.name}}", {"label": "{{product.price}}"}, 7],
            "count": 2,
        }
        assert renderer.render_dict(data, scope) == {
            "title": "Lamp",
            "nested": {"sku": "L-1"},
            "items": ["Shop", {"label": "19.5"}, 7],
            "count": 2,
        }

    def test_render_template_helper(self, scope):
        assert render_template("{{site.name}}!", scope) == "Shop!"


class TestTemplateHelpers:
    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (False, "false"),
        (42, "42"),
        ("text", "text"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
    ])
    def test_to_text(self, value, expected):
        assert to_text(value) == expected

    def test_has_placeholders(self):
        assert has_placeholders("a {{b}}") is True
        assert has_placeholders("a {b}") is False
        assert has_placeholders(None) is False

    def test_extract_paths_and_variables(self):
        text = "{{ product.name }} in {{category.slug}} by {{product.brand}}"
        assert extract_paths(text) == ["product.name", "category.slug", "product.brand"]
        assert extract_variables(text) == ["product", "category"]
        assert extract_variables(None) == []
