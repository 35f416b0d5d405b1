"""
Assemble per-component fragments into the WordPress theme file set.

Output depends only on the inputs: no timestamps, no random ids, and files are
emitted in a fixed order, so the same template always produces the same text.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from jinja2 import Environment, BaseLoader

from template_builder.schemas import TemplateMeta
from template_builder.services.component_renderer import render_markup, render_style
from template_builder.templates.component_types import ComponentType, parse_component_type
from template_builder.utils.escaping import css_comment_text, php_identifier, php_string, slugify

logger = logging.getLogger(__name__)

HOME_PAGE_FILE = "index.php"
SCRIPT_FILE = "js/main.js"

BASE_STYLES = """/* Reset and base styles */
* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}

body {
  font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  line-height: 1.6;
  color: #333;
}

img {
  max-width: 100%;
  display: block;
}

.container {
  max-width: 1200px;
  margin: 0 auto;
  padding: 0 1rem;
}

.section-subtitle {
  color: #6b7280;
  font-size: 1.125rem;
}

/* Responsive visibility */
@media (max-width: 767px) {
  .hide-on-mobile {
    display: none !important;
  }
}

@media (min-width: 768px) and (max-width: 1024px) {
  .hide-on-tablet {
    display: none !important;
  }
}

/* Component styles */
"""

HEADER_PHP = """<!DOCTYPE html>
<html <?php language_attributes(); ?>>
<head>
    <meta charset="<?php bloginfo('charset'); ?>">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <?php wp_head(); ?>
</head>
<body <?php body_class(); ?>>
<?php wp_body_open(); ?>
"""

FOOTER_PHP = """
<?php wp_footer(); ?>
</body>
</html>
"""

MAIN_JS = """// Custom JavaScript for the theme
document.addEventListener('DOMContentLoaded', function () {
    document.querySelectorAll('.faq-question').forEach(function (question) {
        question.addEventListener('click', function () {
            question.parentElement.classList.toggle('is-open');
        });
    });
});
"""

PAGE_OPEN = """<?php get_header(); ?>

<main id="main" class="site-main">
"""

PAGE_CLOSE = """
</main>

<?php get_footer(); ?>
"""

FUNCTIONS_SNIPPET = """<?php
function {{ prefix }}_setup() {
    add_theme_support('title-tag');
    add_theme_support('post-thumbnails');
    add_theme_support('html5', array('search-form', 'comment-form', 'comment-list', 'gallery', 'caption'));

    register_nav_menus(array(
        'primary' => __('Primary Menu', '{{ prefix }}'),
        'footer' => __('Footer Menu', '{{ prefix }}'),
    ));
}
add_action('after_setup_theme', '{{ prefix }}_setup');

function {{ prefix }}_scripts() {
    wp_enqueue_style('{{ prefix }}-style', get_stylesheet_uri(), array(), {{ version|php }});
    wp_enqueue_style('{{ prefix }}-fonts', 'https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap', array(), null);
    wp_enqueue_script('{{ prefix }}-script', get_template_directory_uri() . '/{{ script_file }}', array(), {{ version|php }}, true);
}
add_action('wp_enqueue_scripts', '{{ prefix }}_scripts');
{% if has_contact_form %}

function {{ prefix }}_handle_contact_form() {
    if (!isset($_POST['contact_nonce']) || !wp_verify_nonce(sanitize_text_field(wp_unslash($_POST['contact_nonce'])), 'contact_form')) {
        wp_die(esc_html__('Invalid form submission.', '{{ prefix }}'));
    }

    $name = isset($_POST['name']) ? sanitize_text_field(wp_unslash($_POST['name'])) : '';
    $email = isset($_POST['email']) ? sanitize_email(wp_unslash($_POST['email'])) : '';
    $message = isset($_POST['message']) ? sanitize_textarea_field(wp_unslash($_POST['message'])) : '';

    if ($name && is_email($email) && $message) {
        $to = get_option('admin_email');
        $subject = 'Contact Form Submission from ' . $name;
        $body = "Name: $name\\nEmail: $email\\nMessage: $message";
        $headers = array('Content-Type: text/plain; charset=UTF-8', 'Reply-To: ' . $email);
        wp_mail($to, $subject, $body, $headers);
        wp_safe_redirect(home_url('/?contact=success'));
    } else {
        wp_safe_redirect(home_url('/?contact=error'));
    }
    exit;
}
add_action('admin_post_nopriv_contact_form', '{{ prefix }}_handle_contact_form');
add_action('admin_post_contact_form', '{{ prefix }}_handle_contact_form');
{% endif %}
"""

_env = Environment(loader=BaseLoader(), autoescape=False, trim_blocks=True, keep_trailing_newline=True)
_env.filters["php"] = php_string
_functions_template = _env.from_string(FUNCTIONS_SNIPPET)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _component_parts(component: Any) -> Tuple[Any, Dict[str, Any], Any]:
    properties = _get(component, "properties") or {}
    return _get(component, "type"), properties, _get(component, "style")


def _resolve_meta(meta: Any) -> TemplateMeta:
    if meta is None:
        return TemplateMeta()
    if isinstance(meta, TemplateMeta):
        return meta
    values = {}
    for field in ("name", "description", "author", "version", "tags"):
        value = _get(meta, field)
        if value is not None:
            values[field] = value
    return TemplateMeta(**values)


def theme_header(meta: Any) -> str:
    """Theme metadata comment block WordPress reads from style.css."""
    meta = _resolve_meta(meta)
    lines = ["/*", f"Theme Name: {css_comment_text(meta.name) or 'Custom Template'}"]
    if meta.description:
        lines.append(f"Description: {css_comment_text(meta.description)}")
    if meta.author:
        lines.append(f"Author: {css_comment_text(meta.author)}")
    lines.append(f"Version: {css_comment_text(meta.version) or '1.0.0'}")
    tags = [css_comment_text(tag) for tag in meta.tags if css_comment_text(tag)]
    if tags:
        lines.append(f"Tags: {', '.join(tags)}")
    lines.append(f"Text Domain: {php_identifier(meta.name)}")
    lines.append("*/")
    return "\n".join(lines) + "\n\n"


def generate_stylesheet(components: Iterable[Any], meta: Any = None) -> str:
    css = theme_header(meta) + BASE_STYLES
    for component in components:
        component_type, properties, _ = _component_parts(component)
        css += render_style(component_type, properties)
    return css


def generate_page(components: Iterable[Any]) -> str:
    php = PAGE_OPEN
    for component in components:
        component_type, properties, style = _component_parts(component)
        php += render_markup(component_type, properties, style)
    php += PAGE_CLOSE
    return php


def generate_functions(meta: Any = None, has_contact_form: bool = False) -> str:
    meta = _resolve_meta(meta)
    return _functions_template.render(
        prefix=php_identifier(meta.name),
        version=meta.version,
        script_file=SCRIPT_FILE,
        has_contact_form=has_contact_form,
    )


def _has_contact_form(components: Iterable[Any]) -> bool:
    return any(parse_component_type(_get(c, "type")) is ComponentType.CONTACT for c in components)


def assemble(components: Sequence[Any], meta: Any = None) -> Dict[str, str]:
    """File set for a single component list rendered as the home page (the code view)."""
    components = list(components or [])
    files = {
        "style.css": generate_stylesheet(components, meta),
        HOME_PAGE_FILE: generate_page(components),
        "header.php": HEADER_PHP,
        "footer.php": FOOTER_PHP,
        "functions.php": generate_functions(meta, _has_contact_form(components)),
        SCRIPT_FILE: MAIN_JS,
    }
    logger.info(
        "Theme files assembled",
        extra={"component_count": len(components), "file_count": len(files)},
    )
    return files


def select_home_page(pages: Sequence[Any]) -> Optional[Any]:
    """First page flagged as home, else the first page."""
    for page in pages:
        if _get(page, "is_home_page"):
            return page
    return pages[0] if pages else None


def page_filenames(pages: Sequence[Any]) -> List[str]:
    """File name per page, in page order: index.php for home, page-<slug>.php for the rest."""
    home = select_home_page(pages)
    used = {HOME_PAGE_FILE}
    names = []
    for index, page in enumerate(pages, start=1):
        if page is home:
            names.append(HOME_PAGE_FILE)
            continue
        base = slugify(_get(page, "slug")) or slugify(_get(page, "name")) or f"page-{index}"
        candidate = f"page-{base}.php"
        suffix = 2
        while candidate in used:
            candidate = f"page-{base}-{suffix}.php"
            suffix += 1
        used.add(candidate)
        names.append(candidate)
    return names


def assemble_template(meta: Any, pages: Sequence[Any]) -> Dict[str, str]:
    """Full theme for a stored template: shared files plus one markup file per page."""
    pages = list(pages or [])
    all_components = [c for page in pages for c in (_get(page, "components") or [])]

    files = {"style.css": generate_stylesheet(all_components, meta)}
    if not pages:
        files[HOME_PAGE_FILE] = generate_page([])
    page_files = dict(zip(page_filenames(pages), pages))
    # home page first so index.php leads the archive listing
    for filename in sorted(page_files, key=lambda name: name != HOME_PAGE_FILE):
        files[filename] = generate_page(_get(page_files[filename], "components") or [])
    files["header.php"] = HEADER_PHP
    files["footer.php"] = FOOTER_PHP
    files["functions.php"] = generate_functions(meta, _has_contact_form(all_components))
    files[SCRIPT_FILE] = MAIN_JS

    logger.info(
        "Template theme assembled",
        extra={
            "component_count": len(all_components),
            "file_count": len(files),
        },
    )
    return files
