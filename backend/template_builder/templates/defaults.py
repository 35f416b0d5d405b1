"""
Default property bags per component type.

A freshly added component is seeded from this table, and the renderers read
their fallbacks from it too, so an empty or partial bag renders exactly like a
newly created component.
"""
import copy
from typing import Any, Dict, List, Optional

from template_builder.templates.component_types import ComponentType, catalog_entries, parse_component_type

_FEATURE_ITEMS = [
    {"title": "Advanced Analytics", "description": "Get detailed insights into your performance"},
    {"title": "Team Collaboration", "description": "Work together seamlessly with your team"},
    {"title": "Custom Integrations", "description": "Connect with your favorite tools"},
    {"title": "Mobile Optimized", "description": "Perfect experience on any device"},
    {"title": "Security First", "description": "Enterprise-grade security for your data"},
    {"title": "24/7 Support", "description": "Round-the-clock assistance when you need it"},
]

DEFAULT_PROPERTIES: Dict[ComponentType, Dict[str, Any]] = {
    ComponentType.NAVBAR: {
        "title": "Your Site",
        "menuItems": "Home,About,Services,Contact",
        "backgroundColor": "#ffffff",
        "textColor": "#333333",
    },
    ComponentType.HERO: {
        "title": "Welcome to Our Site",
        "subtitle": "Create amazing experiences with our platform",
        "buttonText": "Get Started",
        "buttonLink": "#",
        "backgroundType": "gradient",
        "backgroundColor": "#2563eb",
        "startColor": "#2563eb",
        "endColor": "#7c3aed",
        "textColor": "#ffffff",
        "paddingTop": 80,
        "paddingBottom": 80,
    },
    ComponentType.GALLERY: {
        "title": "Our Gallery",
        "columns": 3,
        "imageCount": 6,
        "images": [],
        "paddingTop": 60,
        "paddingBottom": 60,
    },
    ComponentType.FAQ: {
        "title": "Frequently Asked Questions",
        "items": [
            {
                "question": "How do I get started?",
                "answer": "Simply sign up for an account and follow our easy setup wizard.",
            },
            {
                "question": "What payment methods do you accept?",
                "answer": "We accept all major credit cards and PayPal.",
            },
            {
                "question": "Can I cancel my subscription?",
                "answer": "Yes, you can cancel your subscription at any time from your account settings.",
            },
        ],
        "paddingTop": 60,
        "paddingBottom": 60,
    },
    ComponentType.CONTACT: {
        "title": "Contact Us",
        "address": "123 Business St, City, State 12345",
        "phone": "(555) 123-4567",
        "email": "contact@example.com",
        "buttonText": "Send Message",
        "paddingTop": 60,
        "paddingBottom": 60,
    },
    ComponentType.FOOTER: {
        "text": "© Your Company. All rights reserved.",
        "backgroundColor": "#1f2937",
        "textColor": "#ffffff",
        "paddingTop": 40,
        "paddingBottom": 40,
    },
    ComponentType.HEADER: {
        "title": "Page Title",
        "subtitle": "A short introduction to this page",
        "backgroundColor": "#f3f4f6",
        "textColor": "#111827",
        "paddingTop": 60,
        "paddingBottom": 60,
    },
    ComponentType.SOCIAL_PROOF: {
        "title": "Trusted by thousands of companies worldwide",
        "logos": "Company A,Company B,Company C,Company D",
        "metricValue": "10K+",
        "metricLabel": "Happy Customers",
    },
    ComponentType.CTA: {
        "title": "Ready to Get Started?",
        "subtitle": "Join thousands of satisfied customers today",
        "primaryButton": "Get Started Free",
        "primaryLink": "#",
        "secondaryButton": "Learn More",
        "secondaryLink": "#",
        "backgroundColor": "#2563eb",
        "textColor": "#ffffff",
        "paddingTop": 60,
        "paddingBottom": 60,
    },
    ComponentType.VALUE_PROPOSITION: {
        "title": "Why Choose Us?",
        "subtitle": "Discover the benefits that set us apart",
        "items": [
            {"title": "Fast & Reliable", "description": "Lightning-fast performance you can count on"},
            {"title": "Easy to Use", "description": "Intuitive interface that anyone can master"},
            {"title": "24/7 Support", "description": "Round-the-clock assistance when you need it"},
        ],
    },
    ComponentType.CLIENT_LOGOS: {
        "title": "Trusted by leading companies",
        "logos": "Acme Corp,Globex,Initech,Umbrella,Hooli",
    },
    ComponentType.PRICING: {
        "title": "Simple, Transparent Pricing",
        "subtitle": "Choose the plan that's right for you",
        "plans": [
            {"name": "Basic", "price": "$9", "period": "/month", "features": "Feature 1, Feature 2, Feature 3"},
            {"name": "Pro", "price": "$29", "period": "/month", "features": "All Basic features, Feature 4, Feature 5, Priority Support"},
            {"name": "Enterprise", "price": "$99", "period": "/month", "features": "All Pro features, Custom integrations, Dedicated support"},
        ],
        "highlightPlan": "Pro",
        "buttonText": "Choose Plan",
    },
    ComponentType.TRUST_SIGNALS: {
        "title": "Your Security Is Our Priority",
        "badges": "SSL Secured,Money Back Guarantee,GDPR Compliant,24/7 Support",
    },
    ComponentType.VIDEO: {
        "title": "Watch Our Demo",
        "subtitle": "See how our solution works in action",
        "videoUrl": "",
        "maxWidth": 800,
    },
    ComponentType.IMAGES: {
        "images": [],
        "altText": "Image",
        "columns": 2,
        "imageCount": 2,
    },
    ComponentType.LOGOS: {
        "logos": [],
        "logoCount": 6,
        "logoHeight": 48,
    },
    ComponentType.FEATURES: {
        "title": "Powerful Features",
        "subtitle": "Everything you need to succeed",
        "items": _FEATURE_ITEMS,
        "columns": 3,
    },
    ComponentType.TEXT: {
        "title": "Your Content Title",
        "content": (
            "Your content goes here. This is a flexible text block that can contain any type "
            "of content you want to display on your website."
        ),
        "textAlign": "left",
        "fontSize": 16,
    },
    ComponentType.HEADLINE: {
        "text": "Your Amazing Headline",
        "level": "h1",
        "textAlign": "center",
        "textColor": "#111827",
        "fontSize": 48,
    },
    ComponentType.SUBHEADING: {
        "text": "Supporting text that provides additional context and information",
        "textAlign": "center",
        "textColor": "#6b7280",
        "fontSize": 20,
    },
    ComponentType.TEAM: {
        "title": "Meet Our Team",
        "subtitle": "The talented people behind our success",
        "members": [
            {"name": "John Doe", "role": "CEO & Founder", "image": ""},
            {"name": "Jane Smith", "role": "CTO", "image": ""},
            {"name": "Mike Johnson", "role": "Lead Designer", "image": ""},
            {"name": "Sarah Wilson", "role": "Marketing Director", "image": ""},
        ],
        "columns": 4,
    },
    ComponentType.TESTIMONIALS: {
        "title": "What Our Customers Say",
        "items": [
            {"quote": "This product has transformed our business completely.", "author": "John Smith", "company": "Tech Corp"},
            {"quote": "Outstanding support and amazing features.", "author": "Sarah Johnson", "company": "StartupXYZ"},
            {"quote": "Best investment we've made this year.", "author": "Mike Brown", "company": "Growth Inc"},
        ],
    },
    ComponentType.STATS: {
        "title": "Our Impact in Numbers",
        "items": [
            {"number": "10K+", "label": "Happy Customers"},
            {"number": "99.9%", "label": "Uptime"},
            {"number": "24/7", "label": "Support"},
            {"number": "50+", "label": "Countries"},
        ],
        "backgroundColor": "#2563eb",
        "textColor": "#ffffff",
    },
    ComponentType.ABOUT: {
        "title": "About Our Company",
        "description": (
            "We are a forward-thinking company dedicated to providing innovative solutions "
            "that help businesses thrive in the digital age."
        ),
        "imageUrl": "",
        "buttonText": "Learn More",
        "buttonLink": "#",
    },
}


def defaults_for(component_type: Any) -> Dict[str, Any]:
    """Fresh copy of the default property bag; unknown types get an empty dict."""
    parsed = parse_component_type(component_type)
    if parsed is None:
        return {}
    return copy.deepcopy(DEFAULT_PROPERTIES[parsed])


def with_defaults(component_type: Any, properties: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Defaults overlaid with caller-supplied properties (caller wins)."""
    merged = defaults_for(component_type)
    merged.update(copy.deepcopy(properties or {}))
    return merged


if set(DEFAULT_PROPERTIES) != set(ComponentType):
    raise RuntimeError("DEFAULT_PROPERTIES must cover every ComponentType")


def component_catalog() -> List[Dict[str, Any]]:
    """Palette entries in display order, each with a fresh copy of its defaults."""
    return [dict(entry, defaults=defaults_for(entry["type"])) for entry in catalog_entries()]
