import pytest

from pagewright.sections import generate_sections, render_section
from pagewright.templates import TemplateEngine


def test_hero_section():
    html = render_section(
        "hero",
        {
            "title": "Ship faster",
            "subtitle": "Less waiting",
            "cta": {"primary": {"text": "Start", "href": "/start"}},
            "stats": [{"value": "10x", "label": "speed"}],
        },
    )
    assert '<h1 id="hero-title">Ship faster</h1>' in html
    assert '<p class="hero-subtitle">Less waiting</p>' in html
    assert '<a href="/start" class="btn btn--primary">Start</a>' in html
    assert "btn--secondary" not in html
    assert '<span class="stat-value">10x</span>' in html


def test_features_and_benefits_share_layout():
    data = {"items": [{"title": "Fast", "description": "Very", "icon": "<svg></svg>"}]}
    features = render_section("features", {**data, "sectionTitle": "Why"})
    benefits = render_section("benefits", data)
    assert "<h2>Why</h2>" in features
    assert "<h2>Benefits</h2>" in benefits
    assert '<div class="feature-icon"><svg></svg></div>' in benefits


def test_benefits_keeps_own_title():
    html = render_section("benefits", {"sectionTitle": "Perks", "items": []})
    assert "<h2>Perks</h2>" in html


def test_pricing_section_formats_prices():
    html = render_section(
        "pricing",
        {
            "plans": [
                {
                    "name": "Pro",
                    "highlighted": True,
                    "price": {"monthly": 1299, "currency": "USD"},
                    "features": [
                        {"text": "Support", "included": True},
                        {"text": "SLA", "included": False},
                    ],
                    "cta": {"text": "Buy", "href": "/buy"},
                },
                {
                    "name": "Enterprise",
                    "price": {"custom": True, "label": "Talk to us"},
                    "features": [],
                    "cta": {"text": "Contact", "href": "/contact"},
                },
            ]
        },
    )
    assert "<h2>Pricing</h2>" in html
    assert "$1,299.00" in html
    assert "pricing-card--highlighted" in html
    assert '<span class="check">✓</span>' in html
    assert '<span class="check">✗</span>' in html
    assert '<span class="price-custom">Talk to us</span>' in html


def test_faq_flat_and_categorized():
    flat = render_section("faq", {"items": [{"question": "Why?", "answer": "Because."}]})
    assert "<summary>Why?</summary>" in flat
    assert "<h2>FAQ</h2>" in flat

    grouped = render_section(
        "faq",
        {
            "hero": {"title": "Questions", "subtitle": "Answers"},
            "categories": [
                {"name": "Billing", "items": [{"question": "Refunds?", "answer": "Yes."}]}
            ],
        },
    )
    assert "<h2>Questions</h2>" in grouped
    assert "<h3>Billing</h3>" in grouped
    assert '<div class="faq-answer">Yes.</div>' in grouped


def test_testimonials_render_stars():
    html = render_section(
        "testimonials",
        {
            "sectionTitle": "Loved",
            "items": [
                {
                    "quote": "Great",
                    "rating": 4.5,
                    "author": {"name": "Sam", "title": "CTO", "company": "Initech"},
                }
            ],
        },
    )
    assert '"Great"' in html
    assert "<cite>Sam</cite>" in html
    assert "CTO, Initech" in html
    assert "★★★★½" in html


def test_comparison_table():
    html = render_section(
        "comparison",
        {
            "sectionTitle": "Compare",
            "competitors": ["Us", "Them"],
            "items": [{"feature": "Speed", "values": [True, False]}],
        },
    )
    assert "<th>Them</th>" in html
    assert '<td class="yes">✓</td>' in html
    assert '<td class="no">✗</td>' in html


def test_blog_list_section():
    html = render_section(
        "blog_list",
        {"posts": [{"slug": "hi", "title": "Hi", "publishedAt": "2024-03-05", "readTime": 2}]},
    )
    assert '<a href="/blog/hi">Hi</a>' in html
    assert "Mar 5, 2024" in html
    assert "2 min read" in html


def test_unknown_section_raises():
    with pytest.raises(KeyError):
        render_section("carousel", {})


def test_generate_sections_uses_page_order():
    page = {
        "sections": {
            "cta": {"title": "Last"},
            "hero": {"title": "First"},
            "faq": {"items": []},
        }
    }
    html = generate_sections(page)
    assert html.index('id="hero"') < html.index('id="cta"')
    assert 'id="faq"' not in html


def test_generate_sections_without_sections():
    assert generate_sections({}) == ""
    assert generate_sections(None) == ""
    assert generate_sections({"sections": []}) == ""


def test_template_override_directory(tmp_path):
    (tmp_path / "sections").mkdir()
    (tmp_path / "sections" / "cta.html.jinja").write_text(
        "<aside>{{ data.title | upper }}</aside>", encoding="utf-8"
    )
    engine = TemplateEngine(template_dirs=[tmp_path])
    assert render_section("cta", {"title": "go"}, engine) == "<aside>GO</aside>"
    assert 'id="hero"' in render_section("hero", {"title": "Built in"}, engine)


def test_engine_helpers_are_globals(tmp_path):
    (tmp_path / "sections").mkdir()
    (tmp_path / "sections" / "cta.html.jinja").write_text(
        "{{ shout(data.title) }} {{ slugify('A B') }}", encoding="utf-8"
    )
    engine = TemplateEngine(template_dirs=[tmp_path], helpers={"shout": str.upper})
    assert render_section("cta", {"title": "hi"}, engine) == "HI a-b"
