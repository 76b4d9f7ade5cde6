"""Page assembly for Pagewright.

A page is produced from three inputs: a JSON content document, a template
file and an output path. Two assembly modes exist:

- render: the template is rendered against the content (generate_page).
- inject: ready-made sections are spliced into ``<!-- CONTENT:... -->``
  markers and page metadata replaces the template's ``<title>`` and
  description tags (generate_injected_page).

Key pieces:
- PageConfig: Site configuration and extra helpers shared by every page.
- generate_page: Render one page to disk.
- inject_content: Assemble a page from section markers and metadata.
- generate_injected_page: Inject one page to disk.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .content import load_content
from .context import stringify
from .engine import render
from .helpers import Helper, default_helpers
from .sections import SECTION_TYPES, generate_sections, render_section
from .utils import write_output

SECTIONS_MARKER = "<!-- CONTENT:sections -->"

# Section types that may be placed individually with <!-- CONTENT:<type> -->.
INJECTABLE_SECTIONS = tuple(
    name for name in SECTION_TYPES if name != "blog_list"
)

TITLE_RE = re.compile(r"<title>[^<]*</title>")
DESCRIPTION_RE = re.compile(r'<meta name="description" content="[^"]*">')
OG_TITLE_RE = re.compile(r'<meta property="og:title" content="[^"]*">')
OG_DESCRIPTION_RE = re.compile(r'<meta property="og:description" content="[^"]*">')


@dataclass
class PageConfig:
    """Configuration shared by every generated page.

    Attributes:
        site_config: Site-wide data, visible at the root of every page context.
        helpers: Extra helpers layered over the defaults.
    """

    site_config: dict[str, Any] = field(default_factory=dict)
    helpers: Mapping[str, Helper] = field(default_factory=dict)


def _read_template(template_path: str | Path) -> str:
    with open(template_path, encoding="utf-8") as f:
        return f.read()


def generate_page(
    content_path: str | Path,
    template_path: str | Path,
    output_path: str | Path,
    config: PageConfig | None = None,
) -> bool:
    """Render a content document through a template and write the result.

    The page context is the site configuration, overlaid with the content's
    own top-level fields, plus the whole content document under ``page``.

    Args:
        content_path: JSON content document.
        template_path: Template file.
        output_path: Output file; parent directories are created.
        config: Site configuration and extra helpers.

    Returns:
        True if the page was written, False if the content file is missing.

    Raises:
        FileNotFoundError: If the template does not exist.
        json.JSONDecodeError: If the content is not valid JSON.
        TemplateError: If the template is malformed.
    """
    config = config or PageConfig()
    content = load_content(content_path)
    if content is None:
        return False

    template = _read_template(template_path)
    context: dict[str, Any] = {**config.site_config, "page": content}
    if isinstance(content, Mapping):
        context.update(content)

    html = render(template, context, default_helpers.merged(config.helpers))
    write_output(Path(output_path), html)
    return True


def _replace_tag(pattern: re.Pattern, replacement: str, html: str) -> str:
    return pattern.sub(lambda _: replacement, html, count=1)


def inject_content(
    template_html: str,
    page_content: Any,
    site_config: dict[str, Any],
    helpers: Mapping[str, Helper] | None = None,
) -> str:
    """Assemble a page from section markers and page metadata.

    The template itself is rendered first against
    ``{**site_config, "page": page_content}``. Section HTML and metadata are
    spliced in afterwards, so content text is never read as template markup.

    Args:
        template_html: Template source.
        page_content: Page content document.
        site_config: Site-wide configuration.
        helpers: Extra helpers layered over the defaults.

    Returns:
        Assembled HTML.
    """
    context = {**site_config, "page": page_content}
    result = render(template_html, context, default_helpers.merged(helpers))

    if SECTIONS_MARKER in result:
        result = result.replace(SECTIONS_MARKER, generate_sections(page_content))

    sections = page_content.get("sections") if isinstance(page_content, dict) else None
    if isinstance(sections, dict):
        for name in INJECTABLE_SECTIONS:
            marker = f"<!-- CONTENT:{name} -->"
            if marker in result and sections.get(name):
                result = result.replace(marker, render_section(name, sections[name]))

    meta = page_content.get("meta") if isinstance(page_content, dict) else None
    if isinstance(meta, dict):
        title = stringify(meta.get("title"))
        description = stringify(meta.get("description"))
        result = _replace_tag(TITLE_RE, f"<title>{title}</title>", result)
        result = _replace_tag(
            DESCRIPTION_RE, f'<meta name="description" content="{description}">', result
        )
        if meta.get("ogTitle"):
            result = _replace_tag(
                OG_TITLE_RE,
                f'<meta property="og:title" content="{stringify(meta["ogTitle"])}">',
                result,
            )
        if meta.get("ogDescription"):
            og_description = stringify(meta["ogDescription"])
            result = _replace_tag(
                OG_DESCRIPTION_RE,
                f'<meta property="og:description" content="{og_description}">',
                result,
            )
    return result


def generate_injected_page(
    content_path: str | Path,
    template_path: str | Path,
    output_path: str | Path,
    config: PageConfig | None = None,
) -> bool:
    """Like generate_page, but assembles the page with inject_content."""
    config = config or PageConfig()
    content = load_content(content_path)
    if content is None:
        return False

    template = _read_template(template_path)
    html = inject_content(template, content, config.site_config, config.helpers)
    write_output(Path(output_path), html)
    return True
