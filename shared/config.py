import os
from pathlib import Path
from typing import Optional

# Metadata service that resolves a page address into structured metadata
METADATA_SERVICE_URL: str = os.getenv(
    "METADATA_SERVICE_URL",
    "https://open-apis.hax.cloud/api/services/website/metadata",
)

# Unset means the transport default applies
_timeout = os.getenv("METADATA_TIMEOUT")
METADATA_TIMEOUT: Optional[float] = float(_timeout) if _timeout else None

USER_AGENT: str = os.getenv("LINK_PREVIEW_USER_AGENT", "link-preview-card/1.0")

# Theming policy: addresses on the institutional domain get their own accent
INSTITUTIONAL_DOMAIN: str = os.getenv("INSTITUTIONAL_DOMAIN", "psu.edu")
INSTITUTIONAL_THEME: str = os.getenv("INSTITUTIONAL_THEME", "--ddd-primary-2")
DEFAULT_THEME: str = os.getenv("DEFAULT_THEME", "--ddd-primary-20")

DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")
LOCALES_DIR: Path = Path(
    os.getenv("LOCALES_DIR", str(Path(__file__).resolve().parents[1] / "locales"))
)
