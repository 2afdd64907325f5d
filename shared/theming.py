from urllib.parse import urlparse

from shared.config import DEFAULT_THEME, INSTITUTIONAL_DOMAIN, INSTITUTIONAL_THEME


def default_theme(address: str) -> str:
    """
    Accent token derived from the requested address:
    institutional host -> INSTITUTIONAL_THEME, anything else -> DEFAULT_THEME.
    """
    address = (address or "").strip()
    host = urlparse(address).hostname

    # Scheme-less input like "psu.edu/news" has no hostname after parsing
    haystack = host if host else address.lower()

    if INSTITUTIONAL_DOMAIN and INSTITUTIONAL_DOMAIN.lower() in haystack:
        return INSTITUTIONAL_THEME
    return DEFAULT_THEME
