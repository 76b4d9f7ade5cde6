import json

import pytest

from pagewright.content import BlogContent, load_blog_content, load_content


def test_load_content_parses_json(tmp_path):
    path = tmp_path / "home.json"
    path.write_text('{"title": "Home", "items": [1, 2]}', encoding="utf-8")
    assert load_content(path) == {"title": "Home", "items": [1, 2]}


def test_load_content_accepts_string_paths(tmp_path, monkeypatch):
    (tmp_path / "page.json").write_text('["a"]', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_content("page.json") == ["a"]


def test_load_content_missing_file_warns(tmp_path, capsys):
    missing = tmp_path / "missing.json"
    assert load_content(missing) is None
    assert "content file not found" in capsys.readouterr().out


def test_load_content_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_content(path)


def test_load_blog_content(tmp_path):
    (tmp_path / "config.json").write_text('{"settings": {"title": "News"}}', encoding="utf-8")
    (tmp_path / "posts.json").write_text(
        '{"posts": [{"slug": "a"}, "junk", {"slug": "b"}]}', encoding="utf-8"
    )
    blog = load_blog_content(tmp_path)
    assert blog.config == {"settings": {"title": "News"}}
    assert [post["slug"] for post in blog.posts] == ["a", "b"]
    assert blog.directory == tmp_path


def test_load_blog_content_missing_files(tmp_path, capsys):
    blog = load_blog_content(tmp_path / "blog")
    assert blog == BlogContent(config=None, posts=[], directory=tmp_path / "blog")
    assert capsys.readouterr().out.count("Warning") == 2
