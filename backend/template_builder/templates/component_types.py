"""
Component kinds the builder palette offers, and their palette metadata.
"""
import enum
from typing import Any, Dict, List, Optional


class ComponentType(str, enum.Enum):
    NAVBAR = "navbar"
    HERO = "hero"
    GALLERY = "gallery"
    FAQ = "faq"
    CONTACT = "contact"
    FOOTER = "footer"
    HEADER = "header"
    SOCIAL_PROOF = "social-proof"
    CTA = "cta"
    VALUE_PROPOSITION = "value-proposition"
    CLIENT_LOGOS = "client-logos"
    PRICING = "pricing"
    TRUST_SIGNALS = "trust-signals"
    VIDEO = "video"
    IMAGES = "images"
    LOGOS = "logos"
    FEATURES = "features"
    TEXT = "text"
    HEADLINE = "headline"
    SUBHEADING = "subheading"
    TEAM = "team"
    TESTIMONIALS = "testimonials"
    STATS = "stats"
    ABOUT = "about"


ALLOWED_COMPONENT_TYPES = {t.value for t in ComponentType}

CATEGORY_ORDER = [
    "Layout",
    "Hero & Headers",
    "Content",
    "Visual",
    "Social Proof",
    "Business",
    "Trust & Team",
]

# type -> (display name, category, description); dict order is palette order
COMPONENT_CATALOG: Dict[ComponentType, tuple] = {
    ComponentType.NAVBAR: ("Navigation Bar", "Layout", "Header navigation menu"),
    ComponentType.HEADER: ("Page Header", "Layout", "Page title banner"),
    ComponentType.FOOTER: ("Footer", "Layout", "Bottom page section"),
    ComponentType.HERO: ("Hero Section", "Hero & Headers", "Main banner area"),
    ComponentType.HEADLINE: ("Headline", "Hero & Headers", "Large attention-grabbing title"),
    ComponentType.SUBHEADING: ("Subheading", "Hero & Headers", "Supporting text under headlines"),
    ComponentType.TEXT: ("Text Block", "Content", "Rich text content"),
    ComponentType.FEATURES: ("Features", "Content", "Product/service features grid"),
    ComponentType.ABOUT: ("About Section", "Content", "Company information"),
    ComponentType.FAQ: ("FAQ Section", "Content", "Frequently asked questions"),
    ComponentType.GALLERY: ("Gallery", "Visual", "Image showcase grid"),
    ComponentType.VIDEO: ("Video Player", "Visual", "Embedded video content"),
    ComponentType.IMAGES: ("Image Block", "Visual", "Single or multiple images"),
    ComponentType.LOGOS: ("Logo Strip", "Visual", "Row of brand logos"),
    ComponentType.TESTIMONIALS: ("Testimonials", "Social Proof", "Customer reviews and quotes"),
    ComponentType.SOCIAL_PROOF: ("Social Proof", "Social Proof", "Customer logos and metrics"),
    ComponentType.CLIENT_LOGOS: ("Client Logos", "Social Proof", "Company logos showcase"),
    ComponentType.STATS: ("Statistics", "Social Proof", "Key numbers and metrics"),
    ComponentType.PRICING: ("Pricing Tables", "Business", "Service pricing plans"),
    ComponentType.CTA: ("Call to Action", "Business", "Action buttons and forms"),
    ComponentType.CONTACT: ("Contact Form", "Business", "Contact information and forms"),
    ComponentType.VALUE_PROPOSITION: ("Value Proposition", "Business", "Key benefits highlight"),
    ComponentType.TRUST_SIGNALS: ("Trust Signals", "Trust & Team", "Security badges and certifications"),
    ComponentType.TEAM: ("Team Section", "Trust & Team", "Team member profiles"),
}


def parse_component_type(value: Any) -> Optional[ComponentType]:
    """Return the ComponentType for value, or None when it is not a known kind."""
    if isinstance(value, ComponentType):
        return value
    try:
        return ComponentType(str(value).strip())
    except ValueError:
        return None


def catalog_entries() -> List[Dict[str, str]]:
    return [
        {"type": t.value, "name": name, "category": category, "description": description}
        for t, (name, category, description) in COMPONENT_CATALOG.items()
    ]


if set(COMPONENT_CATALOG) != set(ComponentType):
    raise RuntimeError("COMPONENT_CATALOG must list every ComponentType exactly once")
