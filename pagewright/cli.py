"""Command-line interface for Pagewright.

This module defines the CLI commands using Click framework.

Commands:
- new: Scaffold a new Pagewright project.
- build: Build every page listed in pagewright.yaml.
- page: Render a single page from a content file and a template.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import click
import yaml

from . import __version__

# Starter project copied by `pagewright new`
_STARTER_DIR = Path(__file__).parent / "starter"


@click.group()
@click.version_option(version=__version__, prog_name="pagewright")
def cli():
    """Pagewright content-driven page generator."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Pagewright project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Pagewright site created at {target}")


@cli.command()
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Directory to build into (overrides pagewright.yaml output_dir)",
)
def build(output_dir: Path | None):
    """Build every page listed in pagewright.yaml."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root, output_dir_override=output_dir)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    for path in result.skipped:
        click.echo(f"Skipped {_display_path(path, project_root)} (no content)")
    summary = f"Built {len(result.generated)} pages into {result.output_dir}"
    if result.blog_pages:
        summary += f" (plus {len(result.blog_pages)} blog pages)"
    click.echo(summary)


@cli.command()
@click.argument("content", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("template", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--site",
    "site_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
    help="YAML or JSON file with site settings, exposed to templates as `site`",
)
@click.option("--inject", is_flag=True, help="Assemble the page from section markers")
def page(content: Path, template: Path, output: Path, site_file: Path | None, inject: bool):
    """Render a single page from CONTENT through TEMPLATE into OUTPUT."""
    from .build import site_config_from
    from .engine import TemplateError
    from .pages import PageConfig, generate_injected_page, generate_page

    site: dict = {}
    if site_file is not None:
        with open(site_file, encoding="utf-8") as f:
            site = yaml.safe_load(f) or {}
    config = PageConfig(site_config=site_config_from({"site": site}))
    generate = generate_injected_page if inject else generate_page
    try:
        written = generate(content, template, output, config)
    except FileNotFoundError as exc:
        raise click.ClickException(f"Template not found: {template}") from exc
    except (ValueError, TemplateError) as exc:
        raise click.ClickException(str(exc)) from exc
    if not written:
        raise click.ClickException(f"No content at {content}; nothing written")
    click.echo(f"Wrote {output}")


def main():
    """Entry point for the CLI application."""
    cli()


def _display_path(path: Path, project_root: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Pagewright project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _STARTER_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_STARTER_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
