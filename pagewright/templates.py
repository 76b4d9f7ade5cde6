"""Jinja2 rendering for Pagewright's built-in page fragments.

Page templates use Pagewright's own markup (see engine.py). The reusable
page sections (hero, pricing, FAQ, ...) and the blog pages are shipped as
Jinja2 templates under ``pagewright/templates/`` and rendered here.

Key class:
- TemplateEngine: Jinja2 environment with Pagewright helpers installed as globals.

Template lookup checks caller-supplied directories first, so a project can
override any built-in fragment by providing a file with the same relative
name (for example ``sections/hero.html.jinja``).
"""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from jinja2 import ChainableUndefined, Environment, FileSystemLoader

from .helpers import Helper, default_helpers

__all__ = ["TEMPLATES_DIR", "TemplateEngine", "default_engine"]

TEMPLATES_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        template_dirs: Directories searched before the built-in templates.
        helpers: Helpers exposed to templates as global functions.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        template_dirs: Sequence[Path] | None = None,
        helpers: Mapping[str, Helper] | None = None,
    ):
        """Initialize the template engine.

        Args:
            template_dirs: Optional override directories, searched in order.
            helpers: Optional helpers layered over the defaults.
        """
        self.template_dirs = list(template_dirs or [])
        self.helpers = default_helpers.merged(helpers)
        # Content fields carry markup (icons, answers) and page templates are
        # not escaped either. Missing data renders empty at any depth.
        self.env = Environment(
            loader=FileSystemLoader([*self.template_dirs, TEMPLATES_DIR]),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=ChainableUndefined,
        )
        self._install_globals()

    def _install_globals(self) -> None:
        """Install helpers as global functions in the Jinja environment."""
        for name, helper in self.helpers.items():
            self.env.globals[name] = helper

    def render(self, name: str, **context: Any) -> str:
        """Render a named template.

        Args:
            name: Template name relative to a template directory.
            **context: Variables to make available in the template.

        Returns:
            Rendered string.
        """
        return self.env.get_template(name).render(**context)


@functools.lru_cache(maxsize=1)
def default_engine() -> TemplateEngine:
    """Return the shared engine for the built-in templates."""
    return TemplateEngine()
