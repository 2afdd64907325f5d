# shared/models.py
from enum import Enum
from typing import Optional


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


class PreviewRecord:
    """
    PreviewRecord is the display-ready result of one fetch cycle:
    - title, description, image (all plain strings, never None)
    - canonical_link echoed by the metadata service
    - accent_color token used for the card border
    """

    def __init__(
        self,
        title: str,
        description: str = "",
        image: str = "",
        canonical_link: str = "",
        accent_color: str = "",
    ):
        self.title = title
        self.description = description
        self.image = image
        self.canonical_link = canonical_link
        self.accent_color = accent_color

    def to_dict(self):
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "canonical_link": self.canonical_link,
            "accent_color": self.accent_color,
        }

    def __eq__(self, other):
        if not isinstance(other, PreviewRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"PreviewRecord({self.to_dict()!r})"


class FetchOutcome:
    """Result of one fetch cycle. Exactly one of record/error is meaningful."""

    def __init__(
        self,
        address: str,
        record: PreviewRecord,
        error: Optional[BaseException] = None,
        stale: bool = False,
    ):
        self.address = address
        self.record = record
        self.error = error
        self.stale = stale

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self):
        return {
            "address": self.address,
            "ok": self.ok,
            "stale": self.stale,
            "error": str(self.error) if self.error else None,
            "record": self.record.to_dict(),
        }
