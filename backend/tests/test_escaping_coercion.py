"""
Tests for the escaping and property coercion helpers.
"""
import pytest

from template_builder.utils.coercion import to_bool, to_int, to_list, to_records, to_text
from template_builder.utils.escaping import (
    css_class_tokens,
    css_comment_text,
    css_value,
    html_comment_text,
    php_identifier,
    php_string,
    safe_url,
    slugify,
)


@pytest.mark.unit
class TestEscaping:
    def test_php_string_wraps_in_single_quotes(self):
        assert php_string("Hi") == "'Hi'"

    def test_php_string_escapes_quote_and_backslash(self):
        assert php_string("It's a \\ test") == "'It\\'s a \\\\ test'"

    def test_php_string_of_none_is_empty_literal(self):
        assert php_string(None) == "''"

    def test_css_value_strips_declaration_breakers(self):
        assert css_value("red; } body { display: none") == "red  body  display: none"
        assert css_value("#fff</style><script>") == "#fff/stylescript"

    def test_css_value_keeps_ordinary_values(self):
        assert css_value("linear-gradient(to right, #2563eb, #7c3aed)") == "linear-gradient(to right, #2563eb, #7c3aed)"

    def test_css_comment_text_cannot_close_comment(self):
        assert "*/" not in css_comment_text("Evil */ theme")
        assert css_comment_text("Line one\nLine two") == "Line one Line two"

    def test_safe_url_blocks_script_schemes(self):
        assert safe_url("javascript:alert(1)") == "#"
        assert safe_url("  JavaScript:alert(1)") == "#"
        assert safe_url("data:text/html,hi", default="") == ""
        assert safe_url("https://example.com/a") == "https://example.com/a"
        assert safe_url("") == "#"

    def test_html_comment_text_escapes_comment_terminator(self):
        assert "-->" not in str(html_comment_text("x--><script>"))

    def test_css_class_tokens_drops_invalid(self):
        assert css_class_tokens('promo wide "bad" 9lives') == ["promo", "wide"]
        assert css_class_tokens(["a", "b c"]) == ["a"]

    def test_php_identifier(self):
        assert php_identifier("My Theme!") == "my_theme"
        assert php_identifier("2024 Launch") == "theme_2024_launch"
        assert php_identifier("!!!") == "custom"
        assert php_identifier(None) == "custom"

    def test_slugify(self):
        assert slugify("About Us") == "about-us"
        assert slugify("  --Hello,  World--  ") == "hello-world"
        assert slugify(None) == ""


@pytest.mark.unit
class TestCoercion:
    def test_to_text(self):
        assert to_text("  hi ", "d") == "hi"
        assert to_text("", "d") == "d"
        assert to_text(None, "d") == "d"
        assert to_text(12, "d") == "12"
        assert to_text({"a": 1}, "d") == "d"

    def test_to_int_parses_numbers_and_strings(self):
        assert to_int(4, 3) == 4
        assert to_int("5", 3) == 5
        assert to_int("2.9", 3) == 2
        assert to_int(7.5, 3) == 7

    def test_to_int_falls_back_on_garbage(self):
        assert to_int("abc", 3) == 3
        assert to_int(None, 3) == 3
        assert to_int(True, 3) == 3
        assert to_int(float("nan"), 3) == 3
        assert to_int("inf", 3) == 3
        assert to_int([1], 3) == 3

    def test_to_int_bounds(self):
        assert to_int(0, 3, minimum=1) == 3
        assert to_int(-2, 3, minimum=1) == 3
        assert to_int(99, 3, minimum=1, maximum=6) == 6

    def test_to_bool(self):
        assert to_bool("false", True) is False
        assert to_bool("Yes") is True
        assert to_bool(0, True) is False
        assert to_bool("maybe", True) is True
        assert to_bool(None) is False

    def test_to_list(self):
        assert to_list("Home, About ,,Contact", []) == ["Home", "About", "Contact"]
        assert to_list(["a", None, " b ", {"x": 1}], []) == ["a", "b"]
        assert to_list("", ["x"]) == ["x"]
        assert to_list(42, ["x"]) == ["x"]

    def test_to_records_from_dicts(self):
        records = to_records([{"question": "Q", "answer": "A", "extra": 1}], ("question", "answer"), [])
        assert records == [{"question": "Q", "answer": "A"}]

    def test_to_records_from_pipe_lines(self):
        records = to_records("Q1|A1\nQ2|A2\n\n", ("question", "answer"), [])
        assert records == [
            {"question": "Q1", "answer": "A1"},
            {"question": "Q2", "answer": "A2"},
        ]

    def test_to_records_missing_keys_become_empty(self):
        assert to_records(["Only question"], ("question", "answer"), []) == [{"question": "Only question", "answer": ""}]

    def test_to_records_flattens_nested_lists(self):
        records = to_records([{"name": "Pro", "features": ["A", "B"]}], ("name", "features"), [])
        assert records == [{"name": "Pro", "features": "A, B"}]

    def test_to_records_empty_uses_default(self):
        default = [{"question": "D", "answer": "E"}]
        assert to_records([], ("question", "answer"), default) == default
        assert to_records(None, ("question", "answer"), default) == default
