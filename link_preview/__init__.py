import json
import logging

import azure.functions as func

from shared.localization import SUPPORTED_LOCALES, Localizer
from shared.registry import LINK_PREVIEW_CARD, create_default_registry
from shared.render import render_page

# Built once per warm instance
registry = create_default_registry()
localizer = Localizer()


def _resolve_locale(req: func.HttpRequest) -> str:
    requested = (req.params.get("locale") or "").strip().lower()
    if requested in SUPPORTED_LOCALES or requested == "en":
        return requested

    # Accept-Language: "es-MX,es;q=0.9,en;q=0.8" -> first supported primary tag
    header = req.headers.get("Accept-Language") or ""
    for part in header.split(","):
        tag = part.split(";", 1)[0].strip().lower().split("-", 1)[0]
        if tag in SUPPORTED_LOCALES or tag == "en":
            return tag
    return "en"


async def main(req: func.HttpRequest) -> func.HttpResponse:
    """
    Route: /api/link-preview?href=<address>[&locale=es][&format=json]
    Returns the rendered preview card, or the preview record as JSON.
    """
    logging.info("LINK-PREVIEW request received")

    try:
        route_params = getattr(req, "route_params", {}) or {}
        href = (route_params.get("href") or req.params.get("href") or req.params.get("q") or "").strip()
        if not href:
            logging.warning("No href provided in route or query.")
            return func.HttpResponse("href missing", status_code=400, mimetype="text/plain")

        locale = _resolve_locale(req)
        card = registry.create(LINK_PREVIEW_CARD, localizer=localizer, locale=locale)
        outcome = await card.refresh(href)

        logging.info("LinkPreview href=%s ok=%s locale=%s", href, outcome.ok, locale)

        if (req.params.get("format") or "").lower() == "json":
            body = dict(outcome.record.to_dict(), status=card.status.value, ok=outcome.ok)
            return func.HttpResponse(
                json.dumps(body, ensure_ascii=False),
                status_code=200,
                mimetype="application/json",
            )

        html = render_page(card.record, card.status, card.messages, lang=locale)
        headers = {"Cache-Control": "no-store"}
        return func.HttpResponse(html, status_code=200, mimetype="text/html", headers=headers)

    except Exception:
        logging.exception("[LinkPreview] Unhandled error")
        return func.HttpResponse("Preview error", status_code=500, mimetype="text/plain")
