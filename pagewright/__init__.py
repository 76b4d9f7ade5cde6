"""Pagewright content-driven page generator.

Pagewright renders HTML pages from JSON content documents and templates
written in a small handlebars-like markup (``{{value}}``, ``{{#each}}``,
``{{#if}}``/``{{#unless}}`` blocks and helper calls). Ready-made page
sections and blog pages are rendered with Jinja2.

The main entry point is the CLI module, which provides commands for
scaffolding a project, building every configured page, and rendering a
single page.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
