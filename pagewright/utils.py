"""Utility functions for Pagewright.

This module contains small helpers shared by the renderer, the helper
registry and the build driver.

Key functions:
    slugify: Convert text to a URL slug.
    parse_date: Parse ISO date strings used in content documents.
    write_output: Write rendered text, creating parent directories.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Any

SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Arbitrary text.

    Returns:
        Slug with runs of non-alphanumeric characters collapsed to a single
        hyphen and leading/trailing hyphens removed.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'

        >>> slugify("  Edge -- Cases  ")
        'edge-cases'
    """
    return SLUG_RE.sub("-", text.lower()).strip("-")


def parse_date(value: Any) -> datetime | None:
    """Parse a date value from content data.

    Accepts ``datetime``/``date`` objects and ISO 8601 strings, including a
    trailing ``Z`` for UTC.

    Args:
        value: Value to parse.

    Returns:
        datetime if the value could be parsed, None otherwise.

    Examples:
        >>> parse_date("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0)

        >>> parse_date("not a date") is None
        True
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def write_output(path: Path, text: str) -> None:
    """Write text to ``path``, creating parent directories as needed.

    Existing files are overwritten.

    Args:
        path: Output file path.
        text: Content to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
