import re
from html import escape
from typing import Dict, Optional
from urllib.parse import urlparse

from shared.localization import ENGLISH
from shared.models import PreviewRecord, Status

# "--ddd-primary-2", "#0047AB", "rebeccapurple", "rgb(0, 71, 171)"
_CSS_TOKEN = re.compile(r"^--[A-Za-z0-9_-]+$")
_CSS_COLOR = re.compile(
    r"^(#[0-9A-Fa-f]{3,8}|[A-Za-z]+|(rgb|rgba|hsl|hsla)\([0-9.,%\s/]+\))$"
)


def _is_valid_http_url(url: str) -> bool:
    try:
        p = urlparse(url)
        return p.scheme in ("http", "https") and bool(p.netloc)
    except ValueError:
        return False


def _accent_css(token: str) -> str:
    token = (token or "").strip()
    if _CSS_TOKEN.fullmatch(token):
        value = f"var({token})"
    elif _CSS_COLOR.fullmatch(token):
        value = token
    else:
        return ""
    return f' style="border-color: {escape(value, quote=True)}"'


def render_card(
    record: PreviewRecord,
    status: Status = Status.IDLE,
    messages: Optional[Dict[str, str]] = None,
) -> str:
    """Markup for one preview card. Pure; the host decides when to call it."""
    text = messages or ENGLISH

    if status is Status.LOADING:
        return (
            '<div class="wrapper" aria-busy="true">'
            f'<div class="loading-spinner" role="status" aria-label="{escape(text["loading"])}"></div>'
            "</div>"
        )

    parts = [f'<div class="wrapper"{_accent_css(record.accent_color)}>']
    if _is_valid_http_url(record.image):
        parts.append(
            f'<img src="{escape(record.image)}" alt="{escape(text["imageAlt"])}" />'
        )
    parts.append('<div class="content">')
    parts.append(f'<h3 class="title">{escape(record.title)}</h3>')
    parts.append(f'<p class="desc">{escape(record.description)}</p>')
    if _is_valid_http_url(record.canonical_link):
        parts.append(
            f'<a href="{escape(record.canonical_link)}" target="_blank" rel="noopener" class="url">'
            f'{escape(text["visitSite"])}</a>'
        )
    parts.append("</div></div>")
    return "".join(parts)


def render_page(
    record: PreviewRecord,
    status: Status = Status.IDLE,
    messages: Optional[Dict[str, str]] = None,
    lang: str = "en",
) -> str:
    """Standalone HTML document around render_card, used by the HTTP function."""
    title = escape(record.title)
    return f"""<!doctype html>
<html lang="{escape(lang)}">
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <style>
    .wrapper {{ max-width:520px; padding:1rem; border:4px solid currentColor; border-radius:.5rem; font-family: system-ui, sans-serif; }}
    .wrapper img {{ max-width:100%; height:auto; }}
    .loading-spinner {{ width:48px; height:48px; border:8px solid #7cffff; border-top-color:#5202bd; border-radius:50%; animation: spin 1.5s linear infinite; }}
    @keyframes spin {{ 100% {{ transform: rotate(360deg); }} }}
  </style>
</head>
<body>
  {render_card(record, status, messages)}
</body>
</html>"""
