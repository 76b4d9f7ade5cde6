import json

from pagewright.blog import (
    generate_blog,
    markdown_to_html,
    post_schema,
    published_posts,
    render_blog_index,
    render_blog_post,
    resolve_author,
)
from pagewright.content import BlogContent

POSTS = [
    {"slug": "old", "title": "Old", "status": "published", "publishedAt": "2023-01-01"},
    {"slug": "draft", "title": "Draft", "status": "draft", "publishedAt": "2025-01-01"},
    {
        "slug": "new",
        "title": "New",
        "status": "published",
        "publishedAt": "2024-06-01T10:00:00Z",
    },
    {"slug": "undated", "title": "Undated", "status": "published"},
]

BLOG_CONFIG = {
    "settings": {"title": "Notes", "description": "Things we wrote"},
    "categories": [{"name": "Product", "slug": "product"}],
    "authors": [{"id": "ada", "name": "Ada Lovelace"}],
    "newsletter": {
        "enabled": True,
        "title": "Subscribe",
        "description": "Monthly",
        "action": "/subscribe",
        "placeholder": "you@example.com",
        "buttonText": "Join",
    },
}


def test_published_posts_filters_and_sorts():
    slugs = [post["slug"] for post in published_posts(POSTS)]
    assert slugs == ["new", "old", "undated"]


def test_resolve_author():
    assert resolve_author({"authorId": "ada"}, BLOG_CONFIG)["name"] == "Ada Lovelace"
    assert resolve_author({"authorId": "bob", "author": "Bob"}, BLOG_CONFIG) == {"name": "Bob"}
    assert resolve_author({}, None) == {"name": "Unknown"}


def test_render_blog_index():
    blog = BlogContent(config=BLOG_CONFIG, posts=POSTS)
    html = render_blog_index(blog, {"site": {"name": "Acme"}})
    assert "<title>Notes | Acme</title>" in html
    assert '<a href="/blog/category/product" class="category-link">Product</a>' in html
    assert html.index("/blog/new") < html.index("/blog/old")
    assert "/blog/draft" not in html
    assert 'action="/subscribe"' in html


def test_render_blog_index_defaults():
    html = render_blog_index(BlogContent(config=None, posts=[]), {})
    assert "<title>Blog | Site</title>" in html
    assert "blog-categories" not in html
    assert "blog-newsletter" not in html


def test_render_blog_post():
    post = {
        "slug": "new",
        "title": "New things",
        "excerpt": "What changed",
        "authorId": "ada",
        "category": "Product",
        "publishedAt": "2024-06-01T10:00:00Z",
        "readTime": 4,
        "tags": ["release", "news"],
        "image": {"src": "/img/new.png"},
    }
    html = render_blog_post(post, BLOG_CONFIG, {"site": {"name": "Acme"}}, "## Details\n\nIt *works*.")
    assert "<title>New things | Acme</title>" in html
    assert '<span class="author">Ada Lovelace</span>' in html
    assert "June 1, 2024" in html
    assert '<h2 id="details">Details</h2>' in html
    assert "<em>works</em>" in html
    assert '<a href="/blog/tag/release" class="tag">#release</a>' in html
    assert '<meta property="og:image" content="/img/new.png">' in html
    assert '"@type": "BlogPosting"' in html


def test_post_schema():
    post = {"title": "T", "excerpt": "E", "publishedAt": "2024-01-01", "updatedAt": "2024-02-01"}
    schema = post_schema(post, {"name": "Ada"}, {})
    assert schema["headline"] == "T"
    assert schema["dateModified"] == "2024-02-01"
    assert schema["author"] == {"@type": "Person", "name": "Ada"}
    assert schema["publisher"]["name"] == "Site"
    assert "image" not in schema


def test_markdown_headings_get_unique_ids():
    html = markdown_to_html("# Intro\n\n# Intro\n\n~~gone~~")
    assert '<h1 id="intro">Intro</h1>' in html
    assert '<h1 id="intro-1">Intro</h1>' in html
    assert "<del>gone</del>" in html


def test_generate_blog_writes_index_and_posts(tmp_path):
    blog_dir = tmp_path / "blog"
    (blog_dir / "posts").mkdir(parents=True)
    (blog_dir / "config.json").write_text(json.dumps(BLOG_CONFIG), encoding="utf-8")
    (blog_dir / "posts.json").write_text(json.dumps({"posts": POSTS}), encoding="utf-8")
    (blog_dir / "posts" / "new.md").write_text("Fresh **news**", encoding="utf-8")
    out = tmp_path / "dist"

    written = generate_blog(blog_dir, out, {"site": {"name": "Acme"}})

    assert out / "blog" / "index.html" in written
    assert (out / "blog" / "new" / "index.html").exists()
    assert (out / "blog" / "old" / "index.html").exists()
    assert not (out / "blog" / "draft").exists()
    new_html = (out / "blog" / "new" / "index.html").read_text(encoding="utf-8")
    assert "<strong>news</strong>" in new_html
    assert len(written) == 4


def test_generate_blog_without_posts(tmp_path):
    assert generate_blog(tmp_path / "empty", tmp_path / "dist", {}) == []
    assert not (tmp_path / "dist").exists()
