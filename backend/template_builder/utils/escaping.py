"""
Escaping helpers keyed to the grammar a value lands in.

Generated theme files mix three syntaxes: HTML (handled by Jinja2 autoescape),
PHP single-quoted string literals, and CSS declarations. Each helper here makes
an arbitrary user string safe for exactly one of those destinations.
"""
import re
from typing import Any, List

from markupsafe import Markup, escape

PHP_IDENTIFIER_FALLBACK = "custom"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")
_CSS_CLASS_TOKEN = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")
# Characters that could end a declaration, open a block, or leave a <style> element
_CSS_UNSAFE = re.compile(r"[;{}<>\\\"'`]|/\*|\*/|[\r\n\f]")
_UNSAFE_URL_SCHEME = re.compile(r"^\s*(javascript|vbscript|data)\s*:", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def php_string(value: Any) -> Markup:
    """Render value as a PHP single-quoted string literal, including the quotes."""
    text = _text(value).replace("\\", "\\\\").replace("'", "\\'")
    return Markup(f"'{text}'")


def css_value(value: Any) -> str:
    """Strip anything that lets a value break out of a CSS declaration."""
    return _CSS_UNSAFE.sub("", _text(value)).strip()


def css_comment_text(value: Any) -> str:
    """Single-line text that can sit inside a /* ... */ block without closing it."""
    text = _WHITESPACE_RUN.sub(" ", _text(value)).strip()
    while "*/" in text:
        text = text.replace("*/", "* /")
    return text


def safe_url(value: Any, default: str = "#") -> str:
    url = _text(value).strip()
    if not url or _UNSAFE_URL_SCHEME.match(url):
        return default
    return url


def html_comment_text(value: Any) -> Markup:
    """Text for an HTML comment body; escaping '>' keeps '-->' from ever appearing."""
    return escape(_text(value))


def css_class_tokens(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        raw = [_text(v) for v in value]
    else:
        raw = _text(value).split()
    return [token for token in raw if _CSS_CLASS_TOKEN.match(token)]


def php_identifier(name: Any, fallback: str = PHP_IDENTIFIER_FALLBACK) -> str:
    """
    Derive a PHP function-name prefix from a template name.
    Runs of non-alphanumerics become a single underscore; result is lower-cased.
    """
    ident = _NON_ALNUM.sub("_", _text(name)).strip("_").lower()
    if not ident:
        return fallback
    if ident[0].isdigit():
        ident = f"theme_{ident}"
    return ident


def slugify(value: Any) -> str:
    return _SLUG_STRIP.sub("-", _text(value).lower()).strip("-")
