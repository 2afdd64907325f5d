import logging
from typing import Any, Callable, Dict, List

from shared.controller import PreviewController

LINK_PREVIEW_CARD = "link-preview-card"


class DuplicateRegistrationError(Exception):
    pass


class UnknownComponentError(KeyError):
    pass


class ComponentRegistry:
    """
    Tag -> factory table built once at startup and passed to whoever needs
    to create components. A tag can be registered only once.
    """

    def __init__(self):
        self._factories: Dict[str, Callable[..., Any]] = {}

    def register(self, tag: str, factory: Callable[..., Any]) -> None:
        tag = (tag or "").strip().lower()
        if not tag:
            raise ValueError("component tag must be non-empty")
        if tag in self._factories:
            raise DuplicateRegistrationError(f"'{tag}' has already been registered")
        self._factories[tag] = factory
        logging.debug("[LinkPreview][Registry] Registered %s", tag)

    def create(self, tag: str, **kwargs: Any) -> Any:
        if not isinstance(tag, str):
            raise UnknownComponentError(tag)
        try:
            factory = self._factories[tag.strip().lower()]
        except KeyError:
            raise UnknownComponentError(tag) from None
        return factory(**kwargs)

    def tags(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.strip().lower() in self._factories


def create_default_registry() -> ComponentRegistry:
    registry = ComponentRegistry()
    registry.register(LINK_PREVIEW_CARD, PreviewController)
    return registry
