from typing import Any, Callable, Dict, Mapping, Optional

from shared.localization import ENGLISH
from shared.models import PreviewRecord
from shared.theming import default_theme

TITLE_KEYS = ("og:title", "title")
DESCRIPTION_KEYS = ("description",)
IMAGE_KEYS = ("image", "logo", "og:image")
URL_KEYS = ("url",)
THEME_KEYS = ("theme-color",)


def _first(data: Mapping[str, Any], keys) -> Optional[str]:
    """First non-empty string value among `keys`, in order."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def normalize_metadata(
    data: Mapping[str, Any],
    address: str,
    messages: Optional[Dict[str, str]] = None,
    theme: Callable[[str], str] = default_theme,
) -> PreviewRecord:
    """
    Map the loosely-typed `data` object from the metadata service into a
    complete PreviewRecord. Every field has a fallback:

    title          og:title, title          -> "No Title Available"
    description    description              -> "No Description Available"
    image          image, logo, og:image    -> ""
    canonical_link url                      -> requested address
    accent_color   theme-color              -> default_theme(address)
    """
    text = messages or ENGLISH
    data = data or {}

    return PreviewRecord(
        title=_first(data, TITLE_KEYS) or text["noTitle"],
        description=_first(data, DESCRIPTION_KEYS) or text["noDescription"],
        image=_first(data, IMAGE_KEYS) or "",
        canonical_link=_first(data, URL_KEYS) or address,
        accent_color=_first(data, THEME_KEYS) or theme(address),
    )


def error_record(
    address: str,
    messages: Optional[Dict[str, str]] = None,
    theme: Callable[[str], str] = default_theme,
) -> PreviewRecord:
    text = messages or ENGLISH
    return PreviewRecord(
        title=text["noPreview"],
        description="",
        image="",
        canonical_link="",
        accent_color=theme(address),
    )


def placeholder_record(messages: Optional[Dict[str, str]] = None) -> PreviewRecord:
    text = messages or ENGLISH
    return PreviewRecord(title=text["placeholderTitle"])
