"""
Tests for per-component markup and style rendering.
"""
import pytest

from template_builder.services.component_renderer import render_markup, render_style
from template_builder.templates.component_types import ComponentType
from template_builder.templates.defaults import defaults_for


@pytest.mark.unit
class TestRenderMarkup:
    def test_hero_title_is_php_escaped_literal(self):
        markup = render_markup("hero", {"title": "Hi"})
        assert "esc_html('Hi')" in markup
        assert 'class="hero-section"' in markup

    def test_single_quote_cannot_break_php_literal(self):
        markup = render_markup("hero", {"title": "It's <b>new</b>"})
        assert "esc_html('It\\'s <b>new</b>')" in markup

    def test_missing_properties_use_defaults(self):
        assert render_markup("hero") == render_markup("hero", defaults_for("hero"))
        assert "esc_html('Welcome to Our Site')" in render_markup("hero", {})

    def test_hero_button_can_be_hidden(self):
        assert "hero-button" in render_markup("hero", {})
        assert "hero-button" not in render_markup("hero", {"showButton": False})

    def test_script_url_replaced(self):
        markup = render_markup("hero", {"buttonLink": "javascript:alert(1)"})
        assert "javascript" not in markup
        assert "esc_url('#')" in markup

    def test_navbar_menu_items(self):
        markup = render_markup("navbar", {"title": "Acme", "menuItems": "Home,About Us"})
        assert "esc_html('Acme')" in markup
        assert "home_url('/')" in markup
        assert "home_url('/about-us/')" in markup
        assert ">About Us</a>" in markup

    def test_faq_items_are_html_escaped(self):
        markup = render_markup("faq", {"items": [{"question": "<b>Q</b>", "answer": "A & B"}]})
        assert "&lt;b&gt;Q&lt;/b&gt;" in markup
        assert "A &amp; B" in markup
        assert "<b>Q</b>" not in markup

    def test_faq_items_from_pipe_lines(self):
        markup = render_markup("faq", {"items": "First?|Yes\nSecond?|No"})
        assert markup.count('class="faq-item"') == 2
        assert "First?" in markup and "Second?" in markup

    def test_gallery_with_images(self):
        markup = render_markup("gallery", {"images": ["https://img.example/1.jpg", "javascript:x"]})
        assert "esc_url('https://img.example/1.jpg')" in markup
        assert markup.count('class="gallery-item"') == 1
        assert "get_field" not in markup

    def test_gallery_without_images_uses_field_or_placeholders(self):
        markup = render_markup("gallery", {"imageCount": 4})
        assert "function_exists('get_field')" in markup
        assert "$i < 4;" in markup

    def test_contact_form_has_nonce(self):
        markup = render_markup("contact", {})
        assert "wp_nonce_field('contact_form', 'contact_nonce')" in markup
        assert "admin-post.php" in markup

    def test_style_classes_on_root_element(self):
        markup = render_markup("hero", {}, {"className": "promo", "hideOnMobile": True})
        assert 'class="hero-section promo hide-on-mobile"' in markup

    def test_invalid_class_tokens_dropped(self):
        markup = render_markup("hero", {}, {"class_name": 'ok "><script>'})
        assert 'class="hero-section ok"' in markup
        assert "<script>" not in markup

    @pytest.mark.parametrize("component_type", list(ComponentType))
    def test_every_type_renders_with_defaults(self, component_type):
        markup = render_markup(component_type, {}, {"hide_on_tablet": True})
        assert markup.strip()
        assert "hide-on-tablet" in markup
        assert "Unknown component type" not in markup
        assert "{{" not in markup

    def test_unknown_type_renders_placeholder(self):
        markup = render_markup("marquee", {"text": "scroll"})
        assert "<!-- Unknown component type: marquee -->" in markup

    def test_unknown_type_name_cannot_close_comment(self):
        markup = render_markup("x--><script>alert(1)</script>")
        assert "<script>" not in markup
        assert markup.count("-->") == 1

    def test_non_dict_properties_fall_back_to_defaults(self):
        assert render_markup("footer", ["not", "a", "dict"]) == render_markup("footer", {})

    def test_rendering_is_deterministic(self):
        props = {"title": "Same", "items": "Q|A"}
        assert render_markup("faq", props) == render_markup("faq", props)


@pytest.mark.unit
class TestRenderStyle:
    def test_gallery_columns(self):
        assert "repeat(4, 1fr)" in render_style("gallery", {"columns": 4})
        assert "repeat(2, 1fr)" in render_style("gallery", {"columns": "2"})

    def test_gallery_columns_bad_value_uses_default(self):
        assert "repeat(3, 1fr)" in render_style("gallery", {"columns": "abc"})
        assert "repeat(3, 1fr)" in render_style("gallery", {"columns": 0})

    def test_gallery_columns_clamped(self):
        assert "repeat(6, 1fr)" in render_style("gallery", {"columns": 99})

    def test_hero_gradient_and_solid_background(self):
        assert "background: linear-gradient(to right, #2563eb, #7c3aed);" in render_style("hero", {})
        solid = render_style("hero", {"backgroundType": "solid", "backgroundColor": "#111111"})
        assert "background: #111111;" in solid

    def test_hero_padding(self):
        css = render_style("hero", {"paddingTop": "abc", "paddingBottom": 1000})
        assert "padding: 80px 0 400px 0;" in css

    def test_color_cannot_inject_rules(self):
        css = render_style("navbar", {"backgroundColor": "red; } body { display: none"})
        assert "red; }" not in css
        assert "background-color: red  body  display: none;" in css

    @pytest.mark.parametrize("component_type", list(ComponentType))
    def test_every_type_has_style(self, component_type):
        css = render_style(component_type, {})
        assert css.strip()
        assert "{{" not in css

    def test_unknown_type_has_no_style(self):
        assert render_style("marquee", {}) == ""

    def test_style_ignores_text_properties(self):
        assert render_style("hero", {"title": "A"}) == render_style("hero", {"title": "B"})
