"""Site building functionality for Pagewright.

A project is described by ``pagewright.yaml`` at its root. The file lists
the pages to generate explicitly; there is no content discovery::

    output_dir: dist
    site:
      name: Acme
      url: https://acme.test
    pages:
      - content: content/pages/home.json
        template: templates/home.html
        output: index.html
      - content: content/pages/pricing.json
        template: templates/landing.html
        output: pricing/index.html
        mode: inject
    blog: content/blog

Content and template paths are relative to the project root; outputs are
relative to the output directory.

Key functions:
- build_site: Generate every configured page and the blog.
- load_config: Load pagewright.yaml with defaults applied.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .blog import generate_blog
from .engine import TemplateError
from .pages import PageConfig, generate_injected_page, generate_page
from .utils import ensure_clean_dir

CONFIG_FILENAME = "pagewright.yaml"

PAGE_MODES = {
    "render": generate_page,
    "inject": generate_injected_page,
}


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG = {
    "output_dir": "dist",
    "site": {},
    "pages": [],
    "blog": None,
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        generated: Output files written for configured pages.
        skipped: Content files that were missing.
        output_dir: Directory where the site was built.
        blog_pages: Output files written for the blog.
    """

    generated: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    output_dir: Path | None = None
    blog_pages: list[Path] = field(default_factory=list)


@dataclass
class PageEntry:
    """One page listed in the configuration."""

    content: Path
    template: Path
    output: Path
    mode: str = "render"


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from pagewright.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def site_config_from(config: dict[str, Any]) -> dict[str, Any]:
    """Return the data every page sees at the root of its context.

    The ``site`` table of the configuration is exposed as ``site``, so
    templates write ``{{site.name}}``.
    """
    site = config.get("site")
    return {"site": site if isinstance(site, dict) else {}}


def _page_entries(
    config: dict[str, Any], project_root: Path, output_dir: Path
) -> list[PageEntry]:
    config_path = project_root / CONFIG_FILENAME
    pages = config.get("pages") or []
    if not isinstance(pages, list):
        raise BuildError(config_path, "'pages' must be a list")
    entries = []
    for number, raw in enumerate(pages, start=1):
        if not isinstance(raw, dict):
            raise BuildError(config_path, f"Page entry {number} must be a mapping")
        for key in ("content", "template", "output"):
            if not raw.get(key):
                raise BuildError(config_path, f"Page entry {number} is missing '{key}'")
        mode = raw.get("mode") or "render"
        if mode not in PAGE_MODES:
            raise BuildError(
                config_path, f"Page entry {number} has unknown mode '{mode}'"
            )
        entries.append(
            PageEntry(
                content=project_root / raw["content"],
                template=project_root / raw["template"],
                output=output_dir / raw["output"],
                mode=mode,
            )
        )
    return entries


def build_site(
    project_root: Path,
    output_dir_override: Path | None = None,
    clean_output: bool = True,
) -> BuildResult:
    """Build every configured page and the blog.

    Args:
        project_root: Root directory of the project.
        output_dir_override: Optional path to write the build output instead
            of the configured output_dir.
        clean_output: Whether to wipe the output directory before building.

    Returns:
        BuildResult listing written and skipped pages.

    Raises:
        BuildError: If the configuration is invalid or a page fails to build.
    """
    config = load_config(project_root)
    output_dir = output_dir_override or (
        project_root / config.get("output_dir", "dist")
    )
    entries = _page_entries(config, project_root, output_dir)
    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    site_config = site_config_from(config)
    page_config = PageConfig(site_config=site_config)
    result = BuildResult(output_dir=output_dir)
    for entry in entries:
        generate = PAGE_MODES[entry.mode]
        try:
            written = generate(entry.content, entry.template, entry.output, page_config)
        except json.JSONDecodeError as exc:
            raise BuildError(
                entry.content,
                f"Invalid JSON on line {exc.lineno}: {exc.msg}",
                exc,
            ) from exc
        except FileNotFoundError as exc:
            raise BuildError(entry.template, "Template not found", exc) from exc
        except TemplateError as exc:
            raise BuildError(entry.template, f"Template error: {exc}", exc) from exc
        except Exception as exc:
            raise BuildError(entry.template, _format_error_message(exc), exc) from exc
        if written:
            result.generated.append(entry.output)
        else:
            result.skipped.append(entry.content)

    if config.get("blog"):
        blog_dir = project_root / config["blog"]
        try:
            result.blog_pages = generate_blog(blog_dir, output_dir, site_config)
        except json.JSONDecodeError as exc:
            raise BuildError(
                blog_dir,
                f"Invalid JSON on line {exc.lineno}: {exc.msg}",
                exc,
            ) from exc
        except Exception as exc:
            raise BuildError(blog_dir, _format_error_message(exc), exc) from exc
    return result


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "TypeError":
        return f"Type error: {error_msg}"

    return f"{error_type}: {error_msg}"
