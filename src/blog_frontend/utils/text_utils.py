"""Text and URL helpers for rendering CMS content."""

import re
from datetime import datetime
from urllib.parse import quote, urljoin

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(text: str | None) -> int | None:
    """Parse the leading integer of ``text`` the way ``parseInt`` does, or None."""
    if not text:
        return None
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else None


def absolute_url(path: str, base_url: str) -> str:
    """
    Resolve ``path`` against ``base_url``.

    Absolute URLs are returned unchanged; a leading ``/`` replaces the base
    path, matching how browsers resolve links.
    """
    if not base_url:
        return path
    return urljoin(base_url.rstrip("/") + "/", path)


def optimized_image_url(
    image_url: str,
    proxy_url: str = "",
    *,
    width: int = 800,
    quality: int = 75,
) -> str:
    """Route ``image_url`` through the image optimizer when one is configured."""
    if not proxy_url:
        return image_url
    return f"{proxy_url}?url={quote(image_url, safe='')}&w={width}&q={quality}"


def format_date_dotted(value: datetime) -> str:
    """Format as ``YYYY.MM.DD``."""
    return value.strftime("%Y.%m.%d")


def format_date_long(value: datetime) -> str:
    """Format as ``YYYY年M月D日``."""
    return f"{value.year}年{value.month}月{value.day}日"


def capitalize_slug(slug: str) -> str:
    """Uppercase the first character, leaving the rest as-is."""
    return slug[:1].upper() + slug[1:]
