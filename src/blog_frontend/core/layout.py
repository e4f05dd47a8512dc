"""Header navigation and sidebar data shared by every page."""

from __future__ import annotations

from blog_frontend.clients.content_client import ContentClient
from blog_frontend.config import Settings
from blog_frontend.core.pages import category_link, post_card
from blog_frontend.models.category import sort_by_priority
from blog_frontend.models.views import LayoutData


async def build_layout(client: ContentClient, settings: Settings) -> LayoutData:
    """Fetch recent posts, categories and the featured post, one call after another."""
    recent = await client.list_posts(page=1, page_size=settings.sidebar_recent_count)
    categories = sort_by_priority(await client.list_categories())

    featured = None
    if settings.featured_post_slug:
        post = await client.get_post_by_slug(settings.featured_post_slug)
        if post is not None:
            featured = post_card(post, settings)

    return LayoutData(
        nav_categories=[category_link(c) for c in categories],
        recent_posts=[post_card(p, settings) for p in recent.posts],
        featured_post=featured,
    )
