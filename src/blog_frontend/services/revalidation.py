"""CMS webhook handling: map content change events to cache tags."""

from __future__ import annotations

import hmac
from typing import Any

from pydantic import BaseModel, ConfigDict

from blog_frontend.clients.content_client import (
    CATEGORIES_TAG,
    POSTS_TAG,
    category_tag,
    post_tag,
)
from blog_frontend.services.response_cache import ResponseCache
from blog_frontend.utils.logging import get_logger

logger = get_logger("blog_frontend.revalidation")


class WebhookPayload(BaseModel):
    """Body of a CMS webhook call."""

    model_config = ConfigDict(extra="ignore")

    event: str | None = None
    model: str | None = None
    entry: dict[str, Any] | None = None

    @property
    def entry_slug(self) -> str | None:
        slug = (self.entry or {}).get("slug")
        return slug if isinstance(slug, str) and slug else None

    @property
    def is_entry_event(self) -> bool:
        return bool(self.event) and self.event.startswith("entry.")


def is_authorized(authorization: str | None, secret: str) -> bool:
    """True when the header is exactly ``Bearer <secret>``; an unset secret never matches."""
    if not secret or authorization is None:
        return False
    return hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode())


def tags_for_event(payload: WebhookPayload) -> list[str]:
    """Cache tags touched by a webhook event; empty for events we do not track."""
    if not payload.is_entry_event:
        return []

    slug = payload.entry_slug
    if payload.model == "blog":
        return [POSTS_TAG] + ([post_tag(slug)] if slug else [])
    if payload.model == "category":
        return [CATEGORIES_TAG] + ([category_tag(slug)] if slug else [])
    return []


def revalidate(payload: WebhookPayload, cache: ResponseCache | None) -> list[str]:
    """Invalidate the tags for ``payload``. Returns the tags invalidated."""
    tags = tags_for_event(payload)
    for tag in tags:
        dropped = cache.invalidate_tag(tag) if cache is not None else 0
        logger.info("Revalidated tag %s (%d cached responses dropped)", tag, dropped)
    if not tags:
        logger.debug("Ignoring webhook event=%s model=%s", payload.event, payload.model)
    return tags
