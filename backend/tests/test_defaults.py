"""
Tests for component defaults and the palette catalog.
"""
import pytest

from template_builder.templates.component_types import (
    CATEGORY_ORDER,
    ComponentType,
    parse_component_type,
)
from template_builder.templates.defaults import (
    DEFAULT_PROPERTIES,
    component_catalog,
    defaults_for,
    with_defaults,
)


@pytest.mark.unit
class TestDefaults:
    @pytest.mark.parametrize("component_type", list(ComponentType))
    def test_every_type_has_defaults(self, component_type):
        assert isinstance(defaults_for(component_type), dict)
        assert defaults_for(component_type.value) == DEFAULT_PROPERTIES[component_type]

    def test_hero_defaults(self):
        defaults = defaults_for("hero")
        assert defaults["title"] == "Welcome to Our Site"
        assert defaults["backgroundType"] == "gradient"
        assert defaults["paddingTop"] == 80

    def test_unknown_type_has_empty_defaults(self):
        assert defaults_for("marquee") == {}
        assert with_defaults("marquee", {"a": 1}) == {"a": 1}

    def test_defaults_are_fresh_copies(self):
        first = defaults_for("faq")
        first["items"].append({"question": "x", "answer": "y"})
        first["title"] = "Changed"
        second = defaults_for("faq")
        assert second["title"] == "Frequently Asked Questions"
        assert len(second["items"]) == 3

    def test_with_defaults_caller_wins(self):
        merged = with_defaults("navbar", {"title": "Acme"})
        assert merged["title"] == "Acme"
        assert merged["menuItems"] == "Home,About,Services,Contact"


@pytest.mark.unit
class TestCatalog:
    def test_catalog_lists_every_type_once(self):
        types = [entry["type"] for entry in component_catalog()]
        assert sorted(types) == sorted(t.value for t in ComponentType)
        assert len(types) == len(set(types))

    def test_catalog_categories_follow_display_order(self):
        categories = [entry["category"] for entry in component_catalog()]
        indexes = [CATEGORY_ORDER.index(c) for c in categories]
        assert indexes == sorted(indexes)

    def test_catalog_entries_carry_defaults(self):
        navbar = next(e for e in component_catalog() if e["type"] == "navbar")
        assert navbar["name"] == "Navigation Bar"
        assert navbar["defaults"]["title"] == "Your Site"

    def test_parse_component_type(self):
        assert parse_component_type("hero") is ComponentType.HERO
        assert parse_component_type(" faq ") is ComponentType.FAQ
        assert parse_component_type("HERO") is None
        assert parse_component_type(None) is None
