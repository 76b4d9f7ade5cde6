"""Content loading for Pagewright.

Content documents are JSON files, one per page, that supply the data a
template renders. A missing content file is not an error: the page is
simply skipped by the caller. Malformed JSON is an error and propagates.

Key pieces:
- load_content: Load one JSON content document.
- BlogContent: Blog configuration plus its list of posts.
- load_blog_content: Load ``config.json`` and ``posts.json`` from a blog directory.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


def load_content(content_path: str | Path) -> Any:
    """Load a JSON content document.

    Relative paths are resolved against the current working directory.

    Args:
        content_path: Path to the JSON file.

    Returns:
        The parsed JSON value, or None if the file does not exist.

    Raises:
        json.JSONDecodeError: If the file exists but is not valid JSON.
    """
    path = Path(content_path)
    if not path.exists():
        print(f"Warning: content file not found: {content_path}")
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)


@dataclass
class BlogContent:
    """Blog data loaded from a blog content directory.

    Attributes:
        config: Parsed ``config.json`` (settings, categories, authors,
            newsletter), or None when absent.
        posts: Post metadata from ``posts.json``.
        directory: Directory the content was loaded from.
    """

    config: dict[str, Any] | None
    posts: list[dict[str, Any]] = field(default_factory=list)
    directory: Path | None = None


def load_blog_content(blog_dir: str | Path) -> BlogContent:
    """Load blog configuration and posts.

    Args:
        blog_dir: Directory containing ``config.json`` and ``posts.json``.

    Returns:
        BlogContent. Missing files yield ``config=None`` and ``posts=[]``.
    """
    blog_dir = Path(blog_dir)
    config = load_content(blog_dir / "config.json")
    posts_doc = load_content(blog_dir / "posts.json")
    posts = posts_doc.get("posts", []) if isinstance(posts_doc, dict) else []
    return BlogContent(
        config=config if isinstance(config, dict) else None,
        posts=[post for post in posts if isinstance(post, dict)],
        directory=blog_dir,
    )
