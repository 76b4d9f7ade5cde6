"""Section renderers for content-driven pages.

A page's content document may describe ready-made sections under a
``sections`` key, for example::

    {"sections": {"hero": {"title": "Ship faster", "cta": {...}},
                  "features": {"sectionTitle": "Why us", "items": [...]}}}

Each section type is rendered by a Jinja2 template in
``templates/sections/``.

Key functions:
- render_section: Render one section from its data.
- generate_sections: Render every known section of a page, in page order.
"""

from __future__ import annotations

from typing import Any

from .templates import TemplateEngine, default_engine

SECTION_TYPES = (
    "hero",
    "features",
    "benefits",
    "pricing",
    "faq",
    "testimonials",
    "comparison",
    "cta",
    "blog_list",
)

# Sections emitted by generate_sections, in page order.
PAGE_SECTION_ORDER = (
    "hero",
    "features",
    "benefits",
    "comparison",
    "testimonials",
    "cta",
)


def render_section(name: str, data: Any, engine: TemplateEngine | None = None) -> str:
    """Render a single section.

    ``benefits`` reuses the features layout, titled "Benefits" unless the
    data provides its own ``sectionTitle``.

    Args:
        name: Section type, one of SECTION_TYPES.
        data: Section data from the content document.
        engine: Optional engine (for template overrides).

    Returns:
        Section HTML.

    Raises:
        KeyError: If ``name`` is not a known section type.
    """
    if name not in SECTION_TYPES:
        raise KeyError(f"Unknown section type: {name}")
    engine = engine or default_engine()
    if name == "benefits":
        data = {**data, "sectionTitle": data.get("sectionTitle") or "Benefits"}
        name = "features"
    return engine.render(f"sections/{name}.html.jinja", data=data)


def generate_sections(page_content: Any, engine: TemplateEngine | None = None) -> str:
    """Render the sections a page declares, in PAGE_SECTION_ORDER.

    Args:
        page_content: Page content document.
        engine: Optional engine (for template overrides).

    Returns:
        Section HTML joined by newlines, or ``""`` if the page has none.
    """
    if not isinstance(page_content, dict):
        return ""
    sections = page_content.get("sections")
    if not isinstance(sections, dict):
        return ""
    html = [
        render_section(name, sections[name], engine)
        for name in PAGE_SECTION_ORDER
        if sections.get(name)
    ]
    return "\n".join(html)
