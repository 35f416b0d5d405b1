"""
Render one builder component into a WordPress markup fragment and a CSS fragment.
Uses Jinja2 snippets per component type; every interpolated value is escaped for
the grammar it lands in (HTML via autoescape, PHP string literals via the `php`
filter, CSS via the style environment's finalize hook).
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from jinja2 import Environment, BaseLoader, Template as JinjaTemplate

from template_builder.templates.component_types import ComponentType, parse_component_type
from template_builder.templates.defaults import DEFAULT_PROPERTIES
from template_builder.utils.coercion import to_bool, to_int, to_list, to_records, to_text
from template_builder.utils.escaping import (
    css_class_tokens,
    css_value,
    html_comment_text,
    php_string,
    safe_url,
    slugify,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400?text=Image"
TEXT_ALIGNMENTS = ("left", "center", "right", "justify")
HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


# Component type -> (markup snippet, style snippet)
COMPONENT_SNIPPETS: Dict[ComponentType, Tuple[str, str]] = {
    ComponentType.NAVBAR: ("""
    <!-- Navigation Bar -->
    <nav class="navbar{{ extra_classes }}">
        <div class="container">
            <div class="nav-brand">
                <a href="<?php echo esc_url(home_url('/')); ?>"><?php echo esc_html({{ title|php }}); ?></a>
            </div>
            <?php if (has_nav_menu('primary')) : ?>
            <?php wp_nav_menu(array('theme_location' => 'primary', 'menu_class' => 'nav-menu', 'container' => false)); ?>
            <?php else : ?>
            <ul class="nav-menu">
{% for item in menu_items %}
                <li><a href="<?php echo esc_url(home_url({{ item.href|php }})); ?>">{{ item.label }}</a></li>
{% endfor %}
            </ul>
            <?php endif; ?>
        </div>
    </nav>
""", """
/* Navigation Bar */
.navbar {
  background-color: {{ background_color }};
  color: {{ text_color }};
  padding: 1rem 0;
  border-bottom: 1px solid #e5e7eb;
}

.navbar .container {
  display: flex;
  align-items: center;
  justify-content: space-between;
}

.nav-brand a {
  font-size: 1.5rem;
  font-weight: bold;
  text-decoration: none;
  color: inherit;
}

.nav-menu {
  display: flex;
  list-style: none;
  gap: 2rem;
}

.nav-menu a {
  text-decoration: none;
  color: inherit;
  transition: color 0.3s;
}

.nav-menu a:hover {
  color: #2563eb;
}

@media (max-width: 768px) {
  .nav-menu {
    display: none;
  }
}
"""),
    ComponentType.HERO: ("""
    <!-- Hero Section -->
    <section class="hero-section{{ extra_classes }}">
        <div class="container">
            <h1 class="hero-title"><?php echo esc_html({{ title|php }}); ?></h1>
            <p class="hero-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
{% if show_button %}
            <a href="<?php echo esc_url({{ button_link|php }}); ?>" class="hero-button"><?php echo esc_html({{ button_text|php }}); ?></a>
{% endif %}
        </div>
    </section>
""", """
/* Hero Section */
.hero-section {
  background: {{ background }};
  color: {{ text_color }};
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
  text-align: center;
}

.hero-title {
  font-size: 3rem;
  font-weight: bold;
  margin-bottom: 1.5rem;
}

.hero-subtitle {
  font-size: 1.25rem;
  margin-bottom: 2rem;
  opacity: 0.9;
}

.hero-button {
  display: inline-block;
  background: #ffffff;
  color: #2563eb;
  padding: 0.75rem 2rem;
  text-decoration: none;
  border-radius: 0.5rem;
  font-weight: 600;
  transition: background-color 0.3s;
}

.hero-button:hover {
  background: #f3f4f6;
}

@media (max-width: 768px) {
  .hero-title {
    font-size: 2rem;
  }

  .hero-subtitle {
    font-size: 1rem;
  }
}
"""),
    ComponentType.GALLERY: ("""
    <!-- Gallery Section -->
    <section class="gallery-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="gallery-grid">
{% if images %}
{% for image in images %}
                <div class="gallery-item">
                    <img src="<?php echo esc_url({{ image|php }}); ?>" alt="<?php echo esc_attr({{ title|php }}); ?>" loading="lazy">
                </div>
{% endfor %}
{% else %}
                <?php
                $images = function_exists('get_field') ? get_field('gallery_images') : array();
                if ($images) :
                    foreach ($images as $image) :
                ?>
                <div class="gallery-item">
                    <img src="<?php echo esc_url($image['url']); ?>" alt="<?php echo esc_attr($image['alt']); ?>" loading="lazy">
                </div>
                <?php
                    endforeach;
                else :
                    for ($i = 0; $i < {{ image_count }}; $i++) :
                ?>
                <div class="gallery-item">
                    <img src="<?php echo esc_url({{ placeholder_url|php }}); ?>" alt="Gallery Image" loading="lazy">
                </div>
                <?php
                    endfor;
                endif;
                ?>
{% endif %}
            </div>
        </div>
    </section>
""", """
/* Gallery Section */
.gallery-section {
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
  background: #f9fafb;
}

.gallery-section h2 {
  text-align: center;
  font-size: 2rem;
  margin-bottom: 3rem;
}

.gallery-grid {
  display: grid;
  grid-template-columns: repeat({{ columns }}, 1fr);
  gap: 1.5rem;
}

.gallery-item img {
  width: 100%;
  height: 250px;
  object-fit: cover;
  border-radius: 0.5rem;
}

@media (max-width: 768px) {
  .gallery-grid {
    grid-template-columns: repeat(2, 1fr);
  }
}

@media (max-width: 480px) {
  .gallery-grid {
    grid-template-columns: 1fr;
  }
}
"""),
    ComponentType.FAQ: ("""
    <!-- FAQ Section -->
    <section class="faq-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="faq-list">
{% for item in faq_items %}
                <div class="faq-item">
                    <h3 class="faq-question">{{ item.question }}</h3>
                    <div class="faq-answer">{{ item.answer }}</div>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* FAQ Section */
.faq-section {
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
  background: #f9fafb;
}

.faq-section h2 {
  text-align: center;
  font-size: 2rem;
  margin-bottom: 3rem;
}

.faq-item {
  background: white;
  border-radius: 0.5rem;
  padding: 1.5rem;
  margin-bottom: 1rem;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
}

.faq-question {
  font-weight: 600;
  margin-bottom: 0.5rem;
  cursor: pointer;
}

.faq-answer {
  color: #6b7280;
}
"""),
    ComponentType.CONTACT: ("""
    <!-- Contact Section -->
    <section class="contact-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="contact-content">
                <div class="contact-form">
                    <form method="post" action="<?php echo esc_url(admin_url('admin-post.php')); ?>">
                        <input type="hidden" name="action" value="contact_form">
                        <?php wp_nonce_field('contact_form', 'contact_nonce'); ?>
                        <input type="text" name="name" placeholder="Your Name" required>
                        <input type="email" name="email" placeholder="Your Email" required>
                        <textarea name="message" placeholder="Your Message" rows="5" required></textarea>
                        <button type="submit"><?php echo esc_html({{ button_text|php }}); ?></button>
                    </form>
                </div>
                <div class="contact-info">
                    <div class="contact-item">
                        <h4>Address</h4>
                        <p><?php echo esc_html({{ address|php }}); ?></p>
                    </div>
                    <div class="contact-item">
                        <h4>Phone</h4>
                        <p><?php echo esc_html({{ phone|php }}); ?></p>
                    </div>
                    <div class="contact-item">
                        <h4>Email</h4>
                        <p><?php echo esc_html({{ email|php }}); ?></p>
                    </div>
                </div>
            </div>
        </div>
    </section>
""", """
/* Contact Section */
.contact-section {
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
}

.contact-section h2 {
  text-align: center;
  font-size: 2rem;
  margin-bottom: 3rem;
}

.contact-content {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 3rem;
}

.contact-form input,
.contact-form textarea {
  width: 100%;
  padding: 0.75rem;
  border: 1px solid #d1d5db;
  border-radius: 0.5rem;
  margin-bottom: 1rem;
}

.contact-form button {
  width: 100%;
  background: #2563eb;
  color: white;
  padding: 0.75rem;
  border: none;
  border-radius: 0.5rem;
  font-weight: 600;
  cursor: pointer;
}

.contact-item {
  margin-bottom: 1.5rem;
}

.contact-item h4 {
  font-weight: 600;
  margin-bottom: 0.5rem;
}

@media (max-width: 768px) {
  .contact-content {
    grid-template-columns: 1fr;
  }
}
"""),
    ComponentType.FOOTER: ("""
    <!-- Footer Section -->
    <footer class="site-footer{{ extra_classes }}">
        <div class="container">
            <div class="footer-content">
                <div class="footer-section">
                    <h3><?php bloginfo('name'); ?></h3>
                    <p><?php bloginfo('description'); ?></p>
                </div>
                <div class="footer-section">
                    <h4>Quick Links</h4>
                    <?php
                    wp_nav_menu(array(
                        'theme_location' => 'footer',
                        'menu_class' => 'footer-menu',
                        'container' => false,
                        'fallback_cb' => false,
                    ));
                    ?>
                </div>
            </div>
            <div class="footer-bottom">
                <p><?php echo esc_html({{ text|php }}); ?></p>
            </div>
        </div>
    </footer>
""", """
/* Footer Section */
.site-footer {
  background: {{ background_color }};
  color: {{ text_color }};
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
}

.footer-content {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
  gap: 2rem;
  margin-bottom: 2rem;
}

.footer-section h3,
.footer-section h4 {
  margin-bottom: 1rem;
}

.footer-menu {
  list-style: none;
}

.footer-menu a {
  color: #d1d5db;
  text-decoration: none;
  transition: color 0.3s;
}

.footer-menu a:hover {
  color: white;
}

.footer-bottom {
  text-align: center;
  padding-top: 2rem;
  border-top: 1px solid #374151;
  color: #9ca3af;
}
"""),
    ComponentType.HEADER: ("""
    <!-- Page Header -->
    <header class="page-header-section{{ extra_classes }}">
        <div class="container">
            <h1 class="page-header-title"><?php echo esc_html({{ title|php }}); ?></h1>
            <p class="page-header-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
        </div>
    </header>
""", """
/* Page Header */
.page-header-section {
  background: {{ background_color }};
  color: {{ text_color }};
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
  text-align: center;
}

.page-header-title {
  font-size: 2.5rem;
  font-weight: bold;
  margin-bottom: 0.75rem;
}

.page-header-subtitle {
  font-size: 1.125rem;
  opacity: 0.8;
}
"""),
    ComponentType.SOCIAL_PROOF: ("""
    <!-- Social Proof -->
    <section class="social-proof-section{{ extra_classes }}">
        <div class="container">
            <p class="social-proof-title"><?php echo esc_html({{ title|php }}); ?></p>
            <div class="social-proof-logos">
{% for logo in logos %}
                <span class="social-proof-logo">{{ logo }}</span>
{% endfor %}
            </div>
            <div class="social-proof-metric">
                <strong><?php echo esc_html({{ metric_value|php }}); ?></strong>
                <span><?php echo esc_html({{ metric_label|php }}); ?></span>
            </div>
        </div>
    </section>
""", """
/* Social Proof */
.social-proof-section {
  padding: 48px 0;
  text-align: center;
}

.social-proof-title {
  color: #6b7280;
  margin-bottom: 2rem;
}

.social-proof-logos {
  display: flex;
  flex-wrap: wrap;
  justify-content: center;
  gap: 2rem;
  margin-bottom: 2rem;
}

.social-proof-logo {
  font-weight: 600;
  color: #9ca3af;
}

.social-proof-metric strong {
  display: block;
  font-size: 2rem;
  color: #2563eb;
}
"""),
    ComponentType.CTA: ("""
    <!-- Call to Action -->
    <section class="cta-section{{ extra_classes }}">
        <div class="container">
            <h2 class="cta-title"><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="cta-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
            <div class="cta-buttons">
                <a href="<?php echo esc_url({{ primary_link|php }}); ?>" class="cta-button cta-button-primary"><?php echo esc_html({{ primary_button|php }}); ?></a>
                <a href="<?php echo esc_url({{ secondary_link|php }}); ?>" class="cta-button cta-button-secondary"><?php echo esc_html({{ secondary_button|php }}); ?></a>
            </div>
        </div>
    </section>
""", """
/* Call to Action */
.cta-section {
  background: {{ background_color }};
  color: {{ text_color }};
  padding: {{ padding_top }}px 0 {{ padding_bottom }}px 0;
  text-align: center;
}

.cta-title {
  font-size: 2.25rem;
  font-weight: bold;
  margin-bottom: 1rem;
}

.cta-subtitle {
  font-size: 1.125rem;
  margin-bottom: 2rem;
  opacity: 0.9;
}

.cta-buttons {
  display: flex;
  flex-wrap: wrap;
  justify-content: center;
  gap: 1rem;
}

.cta-button {
  display: inline-block;
  padding: 0.75rem 2rem;
  border-radius: 0.5rem;
  font-weight: 600;
  text-decoration: none;
}

.cta-button-primary {
  background: #ffffff;
  color: #2563eb;
}

.cta-button-secondary {
  border: 2px solid #ffffff;
  color: #ffffff;
}
"""),
    ComponentType.VALUE_PROPOSITION: ("""
    <!-- Value Proposition -->
    <section class="value-proposition-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="section-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
            <div class="value-grid">
{% for item in value_items %}
                <div class="value-item">
                    <h3>{{ item.title }}</h3>
                    <p>{{ item.description }}</p>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Value Proposition */
.value-proposition-section {
  padding: 60px 0;
  text-align: center;
}

.value-proposition-section h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.value-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(240px, 1fr));
  gap: 2rem;
  margin-top: 3rem;
}

.value-item h3 {
  font-size: 1.25rem;
  margin-bottom: 0.5rem;
}

.value-item p {
  color: #6b7280;
}
"""),
    ComponentType.CLIENT_LOGOS: ("""
    <!-- Client Logos -->
    <section class="client-logos-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="client-logos-grid">
{% for logo in logos %}
                <div class="client-logo">{{ logo }}</div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Client Logos */
.client-logos-section {
  padding: 48px 0;
  background: #f9fafb;
  text-align: center;
}

.client-logos-section h2 {
  font-size: 1.25rem;
  color: #6b7280;
  margin-bottom: 2rem;
}

.client-logos-grid {
  display: flex;
  flex-wrap: wrap;
  justify-content: center;
  align-items: center;
  gap: 2.5rem;
}

.client-logo {
  font-size: 1.125rem;
  font-weight: 700;
  color: #9ca3af;
}
"""),
    ComponentType.PRICING: ("""
    <!-- Pricing Tables -->
    <section class="pricing-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="section-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
            <div class="pricing-grid">
{% for plan in plans %}
                <div class="pricing-plan{% if plan.featured %} is-featured{% endif %}">
                    <h3 class="pricing-name">{{ plan.name }}</h3>
                    <p class="pricing-price">{{ plan.price }}<span>{{ plan.period }}</span></p>
                    <ul class="pricing-features">
{% for feature in plan.features %}
                        <li>{{ feature }}</li>
{% endfor %}
                    </ul>
                    <a href="#" class="pricing-button"><?php echo esc_html({{ button_text|php }}); ?></a>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Pricing Tables */
.pricing-section {
  padding: 60px 0;
  text-align: center;
}

.pricing-section h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.pricing-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(260px, 1fr));
  gap: 2rem;
  margin-top: 3rem;
}

.pricing-plan {
  border: 1px solid #e5e7eb;
  border-radius: 0.75rem;
  padding: 2rem;
}

.pricing-plan.is-featured {
  border-color: #2563eb;
  box-shadow: 0 10px 25px rgba(37, 99, 235, 0.15);
}

.pricing-price {
  font-size: 2.5rem;
  font-weight: bold;
  margin: 1rem 0;
}

.pricing-price span {
  font-size: 1rem;
  color: #6b7280;
}

.pricing-features {
  list-style: none;
  margin-bottom: 2rem;
}

.pricing-features li {
  padding: 0.5rem 0;
  border-bottom: 1px solid #f3f4f6;
}

.pricing-button {
  display: inline-block;
  background: #2563eb;
  color: #ffffff;
  padding: 0.75rem 2rem;
  border-radius: 0.5rem;
  text-decoration: none;
}
"""),
    ComponentType.TRUST_SIGNALS: ("""
    <!-- Trust Signals -->
    <section class="trust-signals-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <ul class="trust-badges">
{% for badge in badges %}
                <li class="trust-badge">{{ badge }}</li>
{% endfor %}
            </ul>
        </div>
    </section>
""", """
/* Trust Signals */
.trust-signals-section {
  padding: 48px 0;
  text-align: center;
}

.trust-signals-section h2 {
  font-size: 1.5rem;
  margin-bottom: 2rem;
}

.trust-badges {
  display: flex;
  flex-wrap: wrap;
  justify-content: center;
  gap: 1.5rem;
  list-style: none;
}

.trust-badge {
  padding: 0.75rem 1.5rem;
  border: 1px solid #d1fae5;
  background: #ecfdf5;
  color: #065f46;
  border-radius: 9999px;
  font-weight: 600;
}
"""),
    ComponentType.VIDEO: ("""
    <!-- Video Player -->
    <section class="video-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="section-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
{% if video_url %}
            <div class="video-wrapper">
                <iframe src="<?php echo esc_url({{ video_url|php }}); ?>" title="<?php echo esc_attr({{ title|php }}); ?>" loading="lazy" allowfullscreen></iframe>
            </div>
{% else %}
            <div class="video-wrapper video-placeholder">
                <span>Video coming soon</span>
            </div>
{% endif %}
        </div>
    </section>
""", """
/* Video Player */
.video-section {
  padding: 60px 0;
  text-align: center;
}

.video-section h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.video-wrapper {
  position: relative;
  max-width: {{ max_width }}px;
  margin: 2rem auto 0;
  aspect-ratio: 16 / 9;
  border-radius: 0.75rem;
  overflow: hidden;
}

.video-wrapper iframe {
  width: 100%;
  height: 100%;
  border: 0;
}

.video-placeholder {
  display: flex;
  align-items: center;
  justify-content: center;
  background: #111827;
  color: #9ca3af;
}
"""),
    ComponentType.IMAGES: ("""
    <!-- Image Block -->
    <section class="images-section{{ extra_classes }}">
        <div class="container">
            <div class="images-grid">
{% for image in images %}
                <img src="<?php echo esc_url({{ image|php }}); ?>" alt="{{ alt_text }}" loading="lazy">
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Image Block */
.images-section {
  padding: 40px 0;
}

.images-grid {
  display: grid;
  grid-template-columns: repeat({{ columns }}, 1fr);
  gap: 1rem;
}

.images-grid img {
  width: 100%;
  height: auto;
  border-radius: 0.5rem;
}

@media (max-width: 768px) {
  .images-grid {
    grid-template-columns: 1fr;
  }
}
"""),
    ComponentType.LOGOS: ("""
    <!-- Logo Strip -->
    <section class="logos-section{{ extra_classes }}">
        <div class="container">
            <div class="logos-row">
{% if logos %}
{% for logo in logos %}
                <img src="<?php echo esc_url({{ logo|php }}); ?>" alt="Logo" class="logo-image" loading="lazy">
{% endfor %}
{% else %}
{% for n in range(1, logo_count + 1) %}
                <div class="logo-placeholder">Logo {{ n }}</div>
{% endfor %}
{% endif %}
            </div>
        </div>
    </section>
""", """
/* Logo Strip */
.logos-section {
  padding: 32px 0;
}

.logos-row {
  display: flex;
  flex-wrap: wrap;
  justify-content: center;
  align-items: center;
  gap: 2rem;
}

.logo-image,
.logo-placeholder {
  height: {{ logo_height }}px;
}

.logo-placeholder {
  display: flex;
  align-items: center;
  padding: 0 1.5rem;
  background: #f3f4f6;
  color: #9ca3af;
  border-radius: 0.375rem;
}
"""),
    ComponentType.FEATURES: ("""
    <!-- Features -->
    <section class="features-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="section-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
            <div class="features-grid">
{% for item in feature_items %}
                <div class="feature-item">
                    <h3>{{ item.title }}</h3>
                    <p>{{ item.description }}</p>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Features */
.features-section {
  padding: 60px 0;
  text-align: center;
}

.features-section h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.features-grid {
  display: grid;
  grid-template-columns: repeat({{ columns }}, 1fr);
  gap: 2rem;
  margin-top: 3rem;
  text-align: left;
}

.feature-item {
  padding: 1.5rem;
  border: 1px solid #e5e7eb;
  border-radius: 0.75rem;
}

.feature-item h3 {
  font-size: 1.125rem;
  margin-bottom: 0.5rem;
}

.feature-item p {
  color: #6b7280;
}

@media (max-width: 768px) {
  .features-grid {
    grid-template-columns: 1fr;
  }
}
"""),
    ComponentType.TEXT: ("""
    <!-- Text Block -->
    <section class="text-section{{ extra_classes }}">
        <div class="container">
            <h2 class="text-title"><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="text-content">
{% for paragraph in paragraphs %}
                <p>{{ paragraph }}</p>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Text Block */
.text-section {
  padding: 48px 0;
  text-align: {{ text_align }};
}

.text-title {
  font-size: 1.75rem;
  margin-bottom: 1rem;
}

.text-content p {
  font-size: {{ font_size }}px;
  margin-bottom: 1rem;
}
"""),
    ComponentType.HEADLINE: ("""
    <!-- Headline -->
    <div class="headline-section{{ extra_classes }}">
        <div class="container">
            <{{ level }} class="headline-text"><?php echo esc_html({{ text|php }}); ?></{{ level }}>
        </div>
    </div>
""", """
/* Headline */
.headline-section {
  padding: 32px 0 16px;
}

.headline-text {
  font-size: {{ font_size }}px;
  font-weight: 800;
  line-height: 1.2;
  color: {{ text_color }};
  text-align: {{ text_align }};
}
"""),
    ComponentType.SUBHEADING: ("""
    <!-- Subheading -->
    <div class="subheading-section{{ extra_classes }}">
        <div class="container">
            <p class="subheading-text"><?php echo esc_html({{ text|php }}); ?></p>
        </div>
    </div>
""", """
/* Subheading */
.subheading-section {
  padding: 8px 0 24px;
}

.subheading-text {
  font-size: {{ font_size }}px;
  color: {{ text_color }};
  text-align: {{ text_align }};
}
"""),
    ComponentType.TEAM: ("""
    <!-- Team Section -->
    <section class="team-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <p class="section-subtitle"><?php echo esc_html({{ subtitle|php }}); ?></p>
            <div class="team-grid">
{% for member in members %}
                <div class="team-member">
{% if member.image %}
                    <img src="<?php echo esc_url({{ member.image|php }}); ?>" alt="{{ member.name }}" class="team-photo" loading="lazy">
{% else %}
                    <div class="team-photo team-initials">{{ member.initials }}</div>
{% endif %}
                    <h3>{{ member.name }}</h3>
                    <p>{{ member.role }}</p>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Team Section */
.team-section {
  padding: 60px 0;
  text-align: center;
}

.team-section h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.team-grid {
  display: grid;
  grid-template-columns: repeat({{ columns }}, 1fr);
  gap: 2rem;
  margin-top: 3rem;
}

.team-photo {
  width: 120px;
  height: 120px;
  margin: 0 auto 1rem;
  border-radius: 50%;
  object-fit: cover;
}

.team-initials {
  display: flex;
  align-items: center;
  justify-content: center;
  background: #dbeafe;
  color: #1e40af;
  font-size: 2rem;
  font-weight: 700;
}

.team-member p {
  color: #6b7280;
}

@media (max-width: 768px) {
  .team-grid {
    grid-template-columns: repeat(2, 1fr);
  }
}
"""),
    ComponentType.TESTIMONIALS: ("""
    <!-- Testimonials -->
    <section class="testimonials-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="testimonials-grid">
{% for item in testimonials %}
                <blockquote class="testimonial">
                    <p>{{ item.quote }}</p>
                    <cite>{{ item.author }}{% if item.company %}, {{ item.company }}{% endif %}</cite>
                </blockquote>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Testimonials */
.testimonials-section {
  padding: 60px 0;
  background: #f9fafb;
}

.testimonials-section h2 {
  text-align: center;
  font-size: 2rem;
  margin-bottom: 3rem;
}

.testimonials-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(280px, 1fr));
  gap: 2rem;
}

.testimonial {
  background: #ffffff;
  padding: 1.5rem;
  border-radius: 0.75rem;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
}

.testimonial p {
  font-style: italic;
  margin-bottom: 1rem;
}

.testimonial cite {
  color: #6b7280;
  font-style: normal;
  font-weight: 600;
}
"""),
    ComponentType.STATS: ("""
    <!-- Statistics -->
    <section class="stats-section{{ extra_classes }}">
        <div class="container">
            <h2><?php echo esc_html({{ title|php }}); ?></h2>
            <div class="stats-grid">
{% for stat in stats %}
                <div class="stat-item">
                    <span class="stat-number">{{ stat.number }}</span>
                    <span class="stat-label">{{ stat.label }}</span>
                </div>
{% endfor %}
            </div>
        </div>
    </section>
""", """
/* Statistics */
.stats-section {
  background: {{ background_color }};
  color: {{ text_color }};
  padding: 60px 0;
  text-align: center;
}

.stats-section h2 {
  font-size: 2rem;
  margin-bottom: 3rem;
}

.stats-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
  gap: 2rem;
}

.stat-number {
  display: block;
  font-size: 2.5rem;
  font-weight: 800;
}

.stat-label {
  opacity: 0.85;
}
"""),
    ComponentType.ABOUT: ("""
    <!-- About Section -->
    <section class="about-section{{ extra_classes }}">
        <div class="container about-content">
            <div class="about-text">
                <h2><?php echo esc_html({{ title|php }}); ?></h2>
                <p><?php echo esc_html({{ description|php }}); ?></p>
                <a href="<?php echo esc_url({{ button_link|php }}); ?>" class="about-button"><?php echo esc_html({{ button_text|php }}); ?></a>
            </div>
            <div class="about-media">
{% if image_url %}
                <img src="<?php echo esc_url({{ image_url|php }}); ?>" alt="<?php echo esc_attr({{ title|php }}); ?>" loading="lazy">
{% else %}
                <div class="about-image-placeholder"></div>
{% endif %}
            </div>
        </div>
    </section>
""", """
/* About Section */
.about-section {
  padding: 60px 0;
}

.about-content {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 3rem;
  align-items: center;
}

.about-text h2 {
  font-size: 2rem;
  margin-bottom: 1rem;
}

.about-text p {
  color: #4b5563;
  margin-bottom: 1.5rem;
}

.about-button {
  display: inline-block;
  background: #2563eb;
  color: #ffffff;
  padding: 0.75rem 2rem;
  border-radius: 0.5rem;
  text-decoration: none;
}

.about-media img,
.about-image-placeholder {
  width: 100%;
  min-height: 280px;
  border-radius: 0.75rem;
  object-fit: cover;
}

.about-image-placeholder {
  background: linear-gradient(135deg, #dbeafe, #ede9fe);
}

@media (max-width: 768px) {
  .about-content {
    grid-template-columns: 1fr;
  }
}
"""),
}

if set(COMPONENT_SNIPPETS) != set(ComponentType):
    raise RuntimeError("COMPONENT_SNIPPETS must cover every ComponentType")


UNKNOWN_COMPONENT_SNIPPET = """
    <!-- Unknown component type: {{ component_type }} -->
"""


class _Props:
    """Reads a property bag, falling back to the type's default for anything missing or malformed."""

    def __init__(self, component_type: ComponentType, properties: Any):
        self._values = properties if isinstance(properties, dict) else {}
        self._defaults = DEFAULT_PROPERTIES[component_type]

    def text(self, key: str) -> str:
        return to_text(self._values.get(key), to_text(self._defaults.get(key), ""))

    def optional_text(self, key: str) -> str:
        return to_text(self._values.get(key), "")

    def number(self, key: str, minimum: int = 0, maximum: Optional[int] = None) -> int:
        return to_int(self._values.get(key), self._defaults[key], minimum=minimum, maximum=maximum)

    def flag(self, key: str, default: bool = True) -> bool:
        return to_bool(self._values.get(key), default)

    def choice(self, key: str, allowed: Sequence[str]) -> str:
        value = to_text(self._values.get(key), "").lower()
        return value if value in allowed else self._defaults[key]

    def items(self, key: str) -> List[str]:
        return to_list(self._values.get(key), to_list(self._defaults.get(key), []))

    def records(self, key: str, keys: Sequence[str]) -> List[Dict[str, str]]:
        return to_records(self._values.get(key), keys, self._defaults.get(key) or [])


def _menu_items(labels: List[str]) -> List[Dict[str, str]]:
    items = []
    for label in labels:
        slug = slugify(label)
        href = "/" if not slug or slug == "home" else f"/{slug}/"
        items.append({"label": label, "href": href})
    return items


def _initials(name: str) -> str:
    return "".join(part[0] for part in name.split()[:2]).upper()


def _urls(values: List[str]) -> List[str]:
    return [url for url in (safe_url(v, default="") for v in values) if url]


def _component_slots(component_type: ComponentType, properties: Any) -> Dict[str, Any]:
    """Resolve every value a snippet pair needs, already coerced and defaulted."""
    p = _Props(component_type, properties)
    out: Dict[str, Any] = {}
    if component_type == ComponentType.NAVBAR:
        out["title"] = p.text("title")
        out["menu_items"] = _menu_items(p.items("menuItems"))
        out["background_color"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
    elif component_type == ComponentType.HERO:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["button_text"] = p.text("buttonText")
        out["button_link"] = safe_url(p.text("buttonLink"))
        out["show_button"] = p.flag("showButton")
        if p.text("backgroundType") == "gradient":
            out["background"] = f"linear-gradient(to right, {p.text('startColor')}, {p.text('endColor')})"
        else:
            out["background"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.GALLERY:
        out["title"] = p.text("title")
        out["columns"] = p.number("columns", minimum=1, maximum=6)
        out["image_count"] = p.number("imageCount", minimum=1, maximum=24)
        out["images"] = _urls(p.items("images"))
        out["placeholder_url"] = PLACEHOLDER_IMAGE_URL
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.FAQ:
        out["title"] = p.text("title")
        out["faq_items"] = p.records("items", ("question", "answer"))
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.CONTACT:
        for key in ("title", "address", "phone", "email"):
            out[key] = p.text(key)
        out["button_text"] = p.text("buttonText")
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.FOOTER:
        out["text"] = p.text("text")
        out["background_color"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.HEADER:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["background_color"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.SOCIAL_PROOF:
        out["title"] = p.text("title")
        out["logos"] = p.items("logos")
        out["metric_value"] = p.text("metricValue")
        out["metric_label"] = p.text("metricLabel")
    elif component_type == ComponentType.CTA:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["primary_button"] = p.text("primaryButton")
        out["primary_link"] = safe_url(p.text("primaryLink"))
        out["secondary_button"] = p.text("secondaryButton")
        out["secondary_link"] = safe_url(p.text("secondaryLink"))
        out["background_color"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
        out["padding_top"] = p.number("paddingTop", maximum=400)
        out["padding_bottom"] = p.number("paddingBottom", maximum=400)
    elif component_type == ComponentType.VALUE_PROPOSITION:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["value_items"] = p.records("items", ("title", "description"))
    elif component_type == ComponentType.CLIENT_LOGOS:
        out["title"] = p.text("title")
        out["logos"] = p.items("logos")
    elif component_type == ComponentType.PRICING:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["button_text"] = p.text("buttonText")
        highlight = p.text("highlightPlan")
        plans = []
        for plan in p.records("plans", ("name", "price", "period", "features")):
            plans.append({
                "name": plan["name"],
                "price": plan["price"],
                "period": plan["period"],
                "features": to_list(plan["features"], []),
                "featured": plan["name"] == highlight,
            })
        out["plans"] = plans
    elif component_type == ComponentType.TRUST_SIGNALS:
        out["title"] = p.text("title")
        out["badges"] = p.items("badges")
    elif component_type == ComponentType.VIDEO:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["video_url"] = safe_url(p.optional_text("videoUrl"), default="")
        out["max_width"] = p.number("maxWidth", minimum=200, maximum=1920)
    elif component_type == ComponentType.IMAGES:
        count = p.number("imageCount", minimum=1, maximum=24)
        out["images"] = _urls(p.items("images")) or [PLACEHOLDER_IMAGE_URL] * count
        out["alt_text"] = p.text("altText")
        out["columns"] = p.number("columns", minimum=1, maximum=6)
    elif component_type == ComponentType.LOGOS:
        out["logos"] = _urls(p.items("logos"))
        out["logo_count"] = p.number("logoCount", minimum=1, maximum=24)
        out["logo_height"] = p.number("logoHeight", minimum=16, maximum=200)
    elif component_type == ComponentType.FEATURES:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        out["feature_items"] = p.records("items", ("title", "description"))
        out["columns"] = p.number("columns", minimum=1, maximum=6)
    elif component_type == ComponentType.TEXT:
        out["title"] = p.text("title")
        content = p.text("content")
        out["paragraphs"] = [block.strip() for block in content.split("\n\n") if block.strip()]
        out["text_align"] = p.choice("textAlign", TEXT_ALIGNMENTS)
        out["font_size"] = p.number("fontSize", minimum=8, maximum=160)
    elif component_type == ComponentType.HEADLINE:
        out["text"] = p.text("text")
        out["level"] = p.choice("level", HEADING_LEVELS)
        out["text_align"] = p.choice("textAlign", TEXT_ALIGNMENTS)
        out["text_color"] = p.text("textColor")
        out["font_size"] = p.number("fontSize", minimum=8, maximum=160)
    elif component_type == ComponentType.SUBHEADING:
        out["text"] = p.text("text")
        out["text_align"] = p.choice("textAlign", TEXT_ALIGNMENTS)
        out["text_color"] = p.text("textColor")
        out["font_size"] = p.number("fontSize", minimum=8, maximum=160)
    elif component_type == ComponentType.TEAM:
        out["title"] = p.text("title")
        out["subtitle"] = p.text("subtitle")
        members = []
        for member in p.records("members", ("name", "role", "image")):
            members.append({
                "name": member["name"],
                "role": member["role"],
                "image": safe_url(member["image"], default=""),
                "initials": _initials(member["name"]),
            })
        out["members"] = members
        out["columns"] = p.number("columns", minimum=1, maximum=6)
    elif component_type == ComponentType.TESTIMONIALS:
        out["title"] = p.text("title")
        out["testimonials"] = p.records("items", ("quote", "author", "company"))
    elif component_type == ComponentType.STATS:
        out["title"] = p.text("title")
        out["stats"] = p.records("items", ("number", "label"))
        out["background_color"] = p.text("backgroundColor")
        out["text_color"] = p.text("textColor")
    elif component_type == ComponentType.ABOUT:
        out["title"] = p.text("title")
        out["description"] = p.text("description")
        out["image_url"] = safe_url(p.optional_text("imageUrl"), default="")
        out["button_text"] = p.text("buttonText")
        out["button_link"] = safe_url(p.text("buttonLink"))
    return out


def _extra_classes(style: Any) -> str:
    """Leading-space class list for a fragment's root element."""
    if style is None:
        return ""
    if hasattr(style, "model_dump"):
        style = style.model_dump()
    if not isinstance(style, dict):
        return ""
    classes = css_class_tokens(style.get("class_name") or style.get("className") or "")
    if to_bool(style.get("hide_on_mobile", style.get("hideOnMobile")), False):
        classes.append("hide-on-mobile")
    if to_bool(style.get("hide_on_tablet", style.get("hideOnTablet")), False):
        classes.append("hide-on-tablet")
    return "".join(f" {c}" for c in classes)


def _markup_environment() -> Environment:
    env = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    env.filters["php"] = php_string
    return env


def _style_environment() -> Environment:
    # CSS is not HTML: no autoescape, but every expression is stripped of declaration breakers
    return Environment(loader=BaseLoader(), autoescape=False, finalize=css_value, keep_trailing_newline=True)


_markup_env = _markup_environment()
_style_env = _style_environment()

# Compiled once at import
_COMPILED: Dict[ComponentType, Tuple[JinjaTemplate, JinjaTemplate]] = {
    component_type: (_markup_env.from_string(markup), _style_env.from_string(style))
    for component_type, (markup, style) in COMPONENT_SNIPPETS.items()
}
_UNKNOWN_TEMPLATE = _markup_env.from_string(UNKNOWN_COMPONENT_SNIPPET)


def render_unknown(component_type: Any) -> str:
    return _UNKNOWN_TEMPLATE.render(component_type=html_comment_text(component_type))


def render_markup(component_type: Any, properties: Optional[Dict[str, Any]] = None, style: Any = None) -> str:
    """Markup fragment for one component. Unknown types yield a placeholder comment instead of raising."""
    parsed = parse_component_type(component_type)
    if parsed is None:
        logger.warning("Unknown component type rendered as placeholder", extra={"component_type": str(component_type)})
        return render_unknown(component_type)
    try:
        ctx = _component_slots(parsed, properties)
        return _COMPILED[parsed][0].render(extra_classes=_extra_classes(style), **ctx)
    except Exception:
        logger.exception("Component markup failed to render", extra={"component_type": parsed.value})
        return render_unknown(component_type)


def render_style(component_type: Any, properties: Optional[Dict[str, Any]] = None) -> str:
    """CSS fragment for one component; depends only on its properties. Unknown types yield ''."""
    parsed = parse_component_type(component_type)
    if parsed is None:
        return ""
    try:
        ctx = _component_slots(parsed, properties)
        return _COMPILED[parsed][1].render(**ctx)
    except Exception:
        logger.exception("Component style failed to render", extra={"component_type": parsed.value})
        return ""
