"""
Tests for theme file assembly.
"""
import pytest

from template_builder.services.component_renderer import render_markup
from template_builder.services.theme_generator import (
    BASE_STYLES,
    FOOTER_PHP,
    HEADER_PHP,
    MAIN_JS,
    PAGE_CLOSE,
    PAGE_OPEN,
    assemble,
    assemble_template,
    generate_functions,
    page_filenames,
    select_home_page,
    theme_header,
)

THEME_FILES = ["style.css", "index.php", "header.php", "footer.php", "functions.php", "js/main.js"]


@pytest.mark.unit
class TestAssemble:
    def test_empty_component_list(self):
        files = assemble([])
        assert list(files) == THEME_FILES
        assert files["index.php"] == PAGE_OPEN + PAGE_CLOSE
        assert files["header.php"] == HEADER_PHP
        assert files["footer.php"] == FOOTER_PHP
        assert files["js/main.js"] == MAIN_JS
        assert files["style.css"].endswith(BASE_STYLES)

    def test_navbar_and_hero(self):
        components = [
            {"id": "navbar-1", "type": "navbar", "properties": {}},
            {"id": "hero-1", "type": "hero", "properties": {"title": "Hi"}},
        ]
        files = assemble(components)
        index = files["index.php"]
        assert index.startswith(PAGE_OPEN)
        assert index.endswith(PAGE_CLOSE)
        assert index.index('class="navbar"') < index.index('class="hero-section"')
        assert "esc_html('Hi')" in index
        css = files["style.css"]
        assert css.index(BASE_STYLES) < css.index(".navbar {") < css.index(".hero-section {")

    def test_unknown_component_keeps_its_place(self):
        files = assemble([{"type": "hero"}, {"type": "marquee"}, {"type": "footer"}])
        index = files["index.php"]
        assert index.index("hero-section") < index.index("Unknown component type: marquee") < index.index("site-footer")

    def test_components_as_models(self):
        from template_builder.schemas import GenerateComponent

        components = [GenerateComponent(type="hero", properties={"title": "Model"}, style={"className": "x"})]
        index = assemble(components)["index.php"]
        assert "esc_html('Model')" in index
        assert 'class="hero-section x"' in index

    def test_reversed_input_reverses_fragments_only(self):
        components = [
            {"type": "navbar", "properties": {"title": "Brand"}},
            {"type": "hero", "properties": {"title": "Hi"}},
            {"type": "faq", "properties": {"items": "Q1|A1"}},
            {"type": "contact", "properties": {}, "style": {"className": "boxed"}},
            {"type": "footer", "properties": {"text": "Bye"}},
        ]
        fragments = [render_markup(c["type"], c["properties"], c.get("style")) for c in components]
        assert len(set(fragments)) == len(components)

        forward = assemble(components)["index.php"]
        backward = assemble(list(reversed(components)))["index.php"]
        assert forward == PAGE_OPEN + "".join(fragments) + PAGE_CLOSE
        assert backward == PAGE_OPEN + "".join(reversed(fragments)) + PAGE_CLOSE

    def test_assemble_is_deterministic(self):
        components = [{"type": "gallery", "properties": {"columns": 2}}, {"type": "faq", "properties": {}}]
        assert assemble(components, {"name": "Same"}) == assemble(components, {"name": "Same"})


@pytest.mark.unit
class TestThemeMetadata:
    def test_theme_header_fields(self):
        header = theme_header({"name": "Acme", "author": "Jane", "version": "2.0.0", "tags": ["a", "b"]})
        assert header.startswith("/*\nTheme Name: Acme\n")
        assert "Author: Jane\n" in header
        assert "Version: 2.0.0\n" in header
        assert "Tags: a, b\n" in header
        assert "Text Domain: acme\n" in header
        assert header.endswith("*/\n\n")

    def test_theme_header_defaults(self):
        header = theme_header(None)
        assert "Theme Name: Custom Template" in header
        assert "Version: 1.0.0" in header
        assert "Author:" not in header

    def test_theme_header_cannot_close_comment_early(self):
        header = theme_header({"name": "Evil */ body { color: red }"})
        assert header.count("*/") == 1

    def test_functions_use_theme_prefix_and_version(self):
        php = generate_functions({"name": "My Theme!", "version": "2.0.0"})
        assert php.startswith("<?php\n")
        assert "function my_theme_setup()" in php
        assert "add_action('wp_enqueue_scripts', 'my_theme_scripts');" in php
        assert "'2.0.0'" in php
        assert "'/js/main.js'" in php
        assert "?>" not in php

    def test_contact_handler_only_with_contact_form(self):
        assert "_handle_contact_form" not in assemble([{"type": "hero"}])["functions.php"]
        functions = assemble([{"type": "contact"}])["functions.php"]
        assert "function custom_template_handle_contact_form()" in functions
        assert "wp_verify_nonce" in functions

    def test_contact_handler_matches_rendered_form(self):
        files = assemble([{"type": " contact "}])
        assert "admin-post.php" in files["index.php"]
        assert "custom_template_handle_contact_form" in files["functions.php"]


@pytest.mark.unit
class TestMultiPageTemplate:
    def test_select_home_page(self):
        pages = [{"name": "A"}, {"name": "B", "is_home_page": True}]
        assert select_home_page(pages)["name"] == "B"
        assert select_home_page([{"name": "A"}, {"name": "B"}])["name"] == "A"
        assert select_home_page([]) is None

    def test_page_filenames(self):
        pages = [
            {"name": "Welcome", "slug": "welcome"},
            {"name": "About", "slug": "about", "is_home_page": True},
            {"name": "Team", "slug": ""},
            {"name": "Team", "slug": "team"},
        ]
        assert page_filenames(pages) == ["page-welcome.php", "index.php", "page-team.php", "page-team-2.php"]

    def test_assemble_template(self):
        pages = [
            {"name": "Home", "slug": "home", "is_home_page": True, "components": [{"type": "navbar"}]},
            {"name": "About", "slug": "about", "components": [{"type": "faq"}, {"type": "contact"}]},
        ]
        files = assemble_template({"name": "Acme"}, pages)
        assert list(files) == [
            "style.css",
            "index.php",
            "page-about.php",
            "header.php",
            "footer.php",
            "functions.php",
            "js/main.js",
        ]
        assert 'class="navbar"' in files["index.php"]
        assert "faq-section" in files["page-about.php"]
        assert "faq-section" not in files["index.php"]
        assert ".navbar {" in files["style.css"]
        assert ".faq-section {" in files["style.css"]
        assert "acme_handle_contact_form" in files["functions.php"]

    def test_home_page_file_listed_first(self):
        pages = [
            {"name": "About", "slug": "about", "components": []},
            {"name": "Home", "slug": "home", "is_home_page": True, "components": []},
        ]
        files = assemble_template(None, pages)
        assert list(files)[1:3] == ["index.php", "page-about.php"]

    def test_template_without_pages(self):
        files = assemble_template({"name": "Empty"}, [])
        assert files["index.php"] == PAGE_OPEN + PAGE_CLOSE
