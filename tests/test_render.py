from shared.models import PreviewRecord, Status
from shared.normalizer import normalize_metadata
from shared.render import render_card, render_page


def test_loading_renders_spinner_only():
    record = PreviewRecord(title="Hidden while loading")
    html = render_card(record, Status.LOADING)

    assert "loading-spinner" in html
    assert "Hidden while loading" not in html


def test_idle_card_contents():
    record = PreviewRecord(
        title="PSU News",
        description="Latest stories",
        image="https://psu.edu/logo.png",
        canonical_link="https://psu.edu/news",
        accent_color="--ddd-primary-2",
    )
    html = render_card(record)

    assert '<h3 class="title">PSU News</h3>' in html
    assert '<p class="desc">Latest stories</p>' in html
    assert '<img src="https://psu.edu/logo.png"' in html
    assert 'href="https://psu.edu/news"' in html
    assert "Visit Site" in html
    assert "border-color: var(--ddd-primary-2)" in html


def test_literal_color_is_used_as_is():
    html = render_card(PreviewRecord(title="t", accent_color="#0047AB"))
    assert "border-color: #0047AB" in html


def test_no_image_and_no_link_on_error_record():
    html = render_card(PreviewRecord(title="No Preview Available", accent_color="--ddd-primary-20"))
    assert "<img" not in html
    assert "<a " not in html


def test_values_are_escaped():
    record = PreviewRecord(
        title="<script>alert(1)</script>",
        description='"quoted" & more',
        image='x" onerror="alert(1)',
        canonical_link="javascript:&quot;",
    )
    html = render_card(record)

    assert "href=" not in html
    assert "<img" not in html

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&quot;quoted&quot; &amp; more" in html
    assert 'onerror="alert' not in html


def test_localized_labels():
    messages = {"loading": "Cargando", "visitSite": "Visitar", "imageAlt": "Imagen"}
    html = render_card(PreviewRecord(title="t", canonical_link="https://x.test"), messages=messages)
    assert "Visitar" in html


def test_render_page_wraps_card():
    html = render_page(PreviewRecord(title="A & B"), lang="es")
    assert html.startswith("<!doctype html>")
    assert '<html lang="es">' in html
    assert "<title>A &amp; B</title>" in html


def test_script_urls_are_not_rendered_as_links():
    record = normalize_metadata(
        {"title": "t", "url": "javascript:alert(document.cookie)", "image": "javascript:alert(1)"},
        "https://e.com",
    )
    html = render_card(record)

    assert "javascript:" not in html
    assert "href=" not in html
    assert "src=" not in html


def test_non_http_schemes_are_dropped():
    record = PreviewRecord(
        title="t",
        image="data:image/svg+xml,<svg onload=alert(1)>",
        canonical_link="//evil.example/path",
    )
    html = render_card(record)
    assert "<img" not in html
    assert "<a " not in html


def test_injected_accent_is_dropped():
    html = render_card(PreviewRecord(title="t", accent_color="red;background:url(//evil)"))
    assert "style=" not in html
    assert "evil" not in html


def test_color_functions_are_kept():
    html = render_card(PreviewRecord(title="t", accent_color="rgb(0, 71, 171)"))
    assert "border-color: rgb(0, 71, 171)" in html
