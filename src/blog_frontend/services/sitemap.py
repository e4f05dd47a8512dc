"""Sitemap generation from CMS content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from blog_frontend.clients.content_client import ContentClient
from blog_frontend.config import Settings

HOME_PRIORITY = 1.0
POST_PRIORITY = 0.8
CATEGORY_PRIORITY = 0.7


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: str
    priority: float


async def build_sitemap(
    client: ContentClient,
    settings: Settings,
    now: datetime | None = None,
) -> list[SitemapEntry]:
    """One entry for the home page, then one per post, then one per category."""
    site_url = settings.public_base_url
    now = now or datetime.now(timezone.utc)

    entries = [
        SitemapEntry(
            url=site_url,
            last_modified=now,
            change_frequency="daily",
            priority=HOME_PRIORITY,
        )
    ]

    posts = await client.list_posts(page=1, page_size=settings.sitemap_page_size)
    for post in posts.posts:
        entries.append(SitemapEntry(
            url=f"{site_url}/blog/{post.slug}",
            last_modified=post.last_modified,
            change_frequency="weekly",
            priority=POST_PRIORITY,
        ))

    for category in await client.list_categories():
        entries.append(SitemapEntry(
            url=f"{site_url}/category/{category.slug}",
            last_modified=category.last_modified or now,
            change_frequency="weekly",
            priority=CATEGORY_PRIORITY,
        ))

    return entries


def _w3c_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="seconds")


def render_sitemap_xml(entries: list[SitemapEntry]) -> str:
    """Serialize entries as a sitemaps.org ``urlset`` document."""
    items = []
    for entry in entries:
        items.append(
            "\n".join(
                [
                    "<url>",
                    f"<loc>{escape(entry.url)}</loc>",
                    f"<lastmod>{_w3c_datetime(entry.last_modified)}</lastmod>",
                    f"<changefreq>{entry.change_frequency}</changefreq>",
                    f"<priority>{entry.priority:.1f}</priority>",
                    "</url>",
                ]
            )
        )
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
            "\n".join(items),
            "</urlset>",
        ]
    )
