import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from shared.config import DEFAULT_LOCALE, LOCALES_DIR

CATALOG_PREFIX = "link-preview-card"

ENGLISH: Dict[str, str] = {
    "placeholderTitle": "placeholder title",
    "noTitle": "No Title Available",
    "noDescription": "No Description Available",
    "noPreview": "No Preview Available",
    "loading": "Loading preview",
    "visitSite": "Visit Site",
    "imageAlt": "Preview Image",
}

SUPPORTED_LOCALES = ("ar", "es", "hi", "zh")


class Localizer:
    """
    Resolves UI strings for a locale from
    locales/link-preview-card.<locale>.json, falling back to English
    for missing catalogs or missing keys.
    """

    def __init__(self, locales_dir: Optional[Path] = None, default_locale: str = DEFAULT_LOCALE):
        self.locales_dir = Path(locales_dir) if locales_dir else LOCALES_DIR
        self.default_locale = default_locale
        self.lock = threading.RLock()
        self.catalogs: Dict[str, Dict[str, str]] = {"en": dict(ENGLISH)}

    def _load_catalog(self, locale: str) -> Dict[str, str]:
        path = self.locales_dir / f"{CATALOG_PREFIX}.{locale}.json"
        if not path.exists():
            logging.warning("[LinkPreview][i18n] Missing catalog: %s", path)
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logging.exception("[LinkPreview][i18n] Failed loading catalog: %s", path)
            return {}

        if not isinstance(data, dict):
            logging.warning("[LinkPreview][i18n] Catalog is not an object: %s", path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str) and v}

    def messages(self, locale: Optional[str] = None) -> Dict[str, str]:
        """Full message table for `locale`, English keys filled in."""
        locale = (locale or self.default_locale or "en").strip().lower()
        # "es-MX" -> "es"
        locale = locale.split("-", 1)[0].split("_", 1)[0]
        if not locale.isalpha():
            locale = "en"

        with self.lock:
            catalog = self.catalogs.get(locale)
            if catalog is None:
                catalog = self._load_catalog(locale)
                # misses for arbitrary locale strings are not remembered
                if catalog or locale in SUPPORTED_LOCALES:
                    self.catalogs[locale] = catalog

        merged = dict(ENGLISH)
        merged.update(catalog)
        return merged

    def translate(self, key: str, locale: Optional[str] = None) -> str:
        return self.messages(locale).get(key, key)
