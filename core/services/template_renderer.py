"""Placeholder substitution for notification templates."""

import re
from collections.abc import Mapping
from typing import Any

from core.models import NotificationTemplate
from core.schemas.notification import RenderedTemplate

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_text(text: str | None, payload: Mapping[str, Any] | None) -> str:
    """Substitute every ``{{ key }}`` in ``text`` with ``payload[key]``.

    Missing keys and None values render as the empty string. Values are not
    HTML-escaped.
    """
    if not text:
        return ""
    payload = payload or {}

    def _replace(match: re.Match) -> str:
        value = payload.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_replace, text)


def render_template(
    template: NotificationTemplate, payload: Mapping[str, Any] | None
) -> RenderedTemplate:
    """Render the subject, email body and in-app text of a template."""
    return RenderedTemplate(
        subject=render_text(template.subject, payload),
        email_html=render_text(template.email_html, payload),
        inapp_text=render_text(template.inapp_text, payload),
    )


def whatsapp_body_for(template: NotificationTemplate) -> str:
    """Unrendered WhatsApp body: the approved body, else in-app text, else subject."""
    return template.whatsapp_body or template.inapp_text or template.subject or ""
