"""Blog page generation for Pagewright.

The blog is described by two JSON documents in a blog content directory:
``config.json`` (settings, categories, authors, newsletter) and
``posts.json`` (post metadata). Post bodies are optional Markdown files at
``posts/<slug>.md`` next to them.

Key functions:
- published_posts: Published posts, newest first.
- render_blog_index: Render the blog landing page.
- render_blog_post: Render one post page.
- generate_blog: Write the index and every published post to an output directory.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import mistune

from .content import BlogContent, load_blog_content
from .helpers import json as to_json
from .templates import TemplateEngine, default_engine
from .utils import parse_date, write_output

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _heading_id(text: str) -> str:
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class _PostRenderer(mistune.HTMLRenderer):
    """Markdown renderer that gives every heading a unique anchor id."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        base_id = _heading_id(text)
        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'


def markdown_to_html(text: str) -> str:
    """Convert a Markdown post body to HTML."""
    markdown = mistune.create_markdown(
        renderer=_PostRenderer(), plugins=["strikethrough", "table", "url"]
    )
    return markdown(text)


def _published_at(post: dict[str, Any]) -> datetime:
    parsed = parse_date(post.get("publishedAt"))
    if parsed is None:
        return _EPOCH
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def published_posts(posts: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return posts whose status is ``published``, newest first.

    Posts without a parseable ``publishedAt`` sort last.
    """
    published = [post for post in posts if post.get("status") == "published"]
    return sorted(published, key=_published_at, reverse=True)


def resolve_author(post: dict[str, Any], blog_config: dict[str, Any] | None) -> dict:
    """Find the post author in the blog config, falling back to the post itself.

    Args:
        post: Post metadata; ``authorId`` refers to ``blog_config["authors"]``.
        blog_config: Blog configuration, may be None.

    Returns:
        Author mapping with at least a ``name`` key.
    """
    authors = (blog_config or {}).get("authors") or []
    for author in authors:
        if isinstance(author, dict) and author.get("id") == post.get("authorId"):
            return author
    return {"name": post.get("author") or "Unknown"}


def render_blog_index(
    blog: BlogContent,
    site_config: dict[str, Any],
    engine: TemplateEngine | None = None,
) -> str:
    """Render the blog landing page.

    Args:
        blog: Loaded blog content.
        site_config: Site-wide configuration (``site.name`` is used in titles).
        engine: Optional engine (for template overrides).

    Returns:
        Full HTML document.
    """
    engine = engine or default_engine()
    return engine.render(
        "blog/index.html.jinja",
        config=blog.config or {},
        posts=published_posts(blog.posts),
        site=site_config.get("site") or {},
    )


def post_schema(
    post: dict[str, Any], author: dict[str, Any], site_config: dict[str, Any]
) -> dict[str, Any]:
    """Build the schema.org BlogPosting JSON-LD object for a post."""
    schema: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": post.get("title"),
        "description": post.get("excerpt"),
        "datePublished": post.get("publishedAt"),
    }
    if post.get("updatedAt"):
        schema["dateModified"] = post["updatedAt"]
    schema["author"] = {"@type": "Person", "name": author.get("name")}
    image = post.get("image") or {}
    if image.get("src"):
        schema["image"] = image["src"]
    site_name = (site_config.get("site") or {}).get("name") or "Site"
    schema["publisher"] = {"@type": "Organization", "name": site_name}
    return schema


def render_blog_post(
    post: dict[str, Any],
    blog_config: dict[str, Any] | None,
    site_config: dict[str, Any],
    body: str = "",
    engine: TemplateEngine | None = None,
) -> str:
    """Render a single blog post page.

    Args:
        post: Post metadata.
        blog_config: Blog configuration (authors lookup).
        site_config: Site-wide configuration.
        body: Markdown body of the post.
        engine: Optional engine (for template overrides).

    Returns:
        Full HTML document.
    """
    engine = engine or default_engine()
    author = resolve_author(post, blog_config)
    return engine.render(
        "blog/post.html.jinja",
        post=post,
        author=author,
        site=site_config.get("site") or {},
        schema_json=to_json(post_schema(post, author, site_config)),
        content=markdown_to_html(body) if body else "",
    )


def generate_blog(
    blog_dir: Path,
    output_dir: Path,
    site_config: dict[str, Any],
    engine: TemplateEngine | None = None,
) -> list[Path]:
    """Write the blog index and every published post.

    Outputs go to ``<output_dir>/blog/index.html`` and
    ``<output_dir>/blog/<slug>/index.html``. Nothing is written when the
    blog has no posts.

    Args:
        blog_dir: Blog content directory.
        output_dir: Site output directory.
        site_config: Site-wide configuration.
        engine: Optional engine (for template overrides).

    Returns:
        Paths of the files written.
    """
    blog = load_blog_content(blog_dir)
    if not blog.posts:
        return []
    written: list[Path] = []
    index_path = output_dir / "blog" / "index.html"
    write_output(index_path, render_blog_index(blog, site_config, engine))
    written.append(index_path)
    for post in published_posts(blog.posts):
        slug = post.get("slug")
        if not slug:
            print(f"Warning: skipping blog post without slug: {post.get('title')}")
            continue
        body_path = blog_dir / "posts" / f"{slug}.md"
        body = body_path.read_text(encoding="utf-8") if body_path.exists() else ""
        post_path = output_dir / "blog" / slug / "index.html"
        write_output(
            post_path, render_blog_post(post, blog.config, site_config, body, engine)
        )
        written.append(post_path)
    return written
