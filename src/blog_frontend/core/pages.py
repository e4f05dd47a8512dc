"""Page assemblers: fetch content for a route and map it into view data."""

from __future__ import annotations

from blog_frontend.clients.content_client import ContentClient
from blog_frontend.config import Settings
from blog_frontend.models.category import Category, sort_by_priority
from blog_frontend.models.post import Post, PostPage
from blog_frontend.models.views import (
    CategoryIndexPage,
    CategoryLink,
    CategoryListingPage,
    ListingPage,
    OpenGraphImage,
    Pager,
    PostCard,
    PostDetailPage,
    SeoMetadata,
)
from blog_frontend.services.markdown_renderer import render_markdown
from blog_frontend.utils.text_utils import (
    absolute_url,
    capitalize_slug,
    format_date_dotted,
    format_date_long,
    optimized_image_url,
    parse_int_prefix,
)

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630
OG_IMAGE_QUALITY = 75


class PageNotFound(LookupError):
    """The requested page has no content and should be answered with a 404."""


def parse_page_number(raw: str | None) -> int:
    """Parse a ``?page=`` value; absent, non-numeric or non-positive values mean page 1."""
    page = parse_int_prefix(raw)
    if page is None or page < 1:
        return 1
    return page


def category_link(category: Category, active_slug: str | None = None) -> CategoryLink:
    return CategoryLink(
        name=category.name,
        slug=category.slug,
        url=f"/category/{category.slug}",
        active=category.slug == active_slug,
    )


def cover_image_url(post: Post, settings: Settings) -> str | None:
    if post.cover is None or not post.cover.url:
        return None
    return absolute_url(post.cover.url, settings.blog_api_url)


def cover_alt_text(post: Post) -> str:
    if post.cover is not None and post.cover.alternative_text:
        return post.cover.alternative_text
    return post.title


def post_card(post: Post, settings: Settings, active_category: str | None = None) -> PostCard:
    return PostCard(
        title=post.title,
        slug=post.slug,
        url=f"/blog/{post.slug}",
        description=post.description or "",
        image_url=cover_image_url(post, settings),
        image_alt=cover_alt_text(post),
        date_label=format_date_dotted(post.created_at),
        categories=[category_link(c, active_category) for c in post.categories],
    )


def _check_page_in_range(page: int, result: PostPage) -> None:
    page_count = result.pagination.page_count
    if page_count >= 1 and page > page_count:
        raise PageNotFound(f"Page {page} is beyond the last page ({page_count})")


async def build_listing_page(
    client: ContentClient,
    settings: Settings,
    page: int = 1,
) -> ListingPage:
    """Home page: newest posts, ``settings.page_size`` per page."""
    result = await client.list_posts(page=page, page_size=settings.page_size)
    _check_page_in_range(page, result)

    return ListingPage(
        posts=[post_card(p, settings) for p in result.posts],
        pager=Pager(page=page, page_count=result.pagination.page_count, base_path="/"),
        seo=SeoMetadata(title=settings.site_name, description=settings.site_description),
    )


async def build_category_page(
    client: ContentClient,
    settings: Settings,
    slug: str,
    page: int = 1,
) -> CategoryListingPage:
    """Posts of one category. An empty result is a not-found condition."""
    result = await client.list_posts_by_category(slug, page=page, page_size=settings.page_size)
    if result.is_empty:
        raise PageNotFound(f"No posts in category '{slug}'")
    _check_page_in_range(page, result)

    matched = result.posts[0].find_category(slug)
    category_name = matched.name if matched else slug
    title_name = capitalize_slug(slug)

    return CategoryListingPage(
        category_name=category_name,
        category_slug=slug,
        posts=[post_card(p, settings, active_category=slug) for p in result.posts],
        pager=Pager(
            page=page,
            page_count=result.pagination.page_count,
            base_path=f"/category/{slug}",
        ),
        seo=SeoMetadata(
            title=f"Category: {title_name}",
            description=f"Posts in the {title_name} category.",
        ),
    )


async def build_categories_page(client: ContentClient, settings: Settings) -> CategoryIndexPage:
    categories = sort_by_priority(await client.list_categories())
    return CategoryIndexPage(
        categories=[category_link(c) for c in categories],
        seo=SeoMetadata(
            title=f"All Categories | {settings.site_name}",
            description=settings.site_description,
        ),
    )


def post_seo(post: Post, settings: Settings) -> SeoMetadata:
    """Title, description and Open Graph data for a post page."""
    og_image = None
    cover_url = cover_image_url(post, settings)
    if cover_url:
        proxy = settings.image_proxy_url
        image_url = optimized_image_url(
            cover_url, proxy, width=OG_IMAGE_WIDTH, quality=OG_IMAGE_QUALITY
        )
        og_image = OpenGraphImage(
            url=absolute_url(image_url, settings.public_base_url),
            width=OG_IMAGE_WIDTH,
            height=OG_IMAGE_HEIGHT,
            alt=post.title,
        )

    return SeoMetadata(
        title=post.title,
        description=post.description or "",
        og_type="article",
        og_image=og_image,
    )


async def build_post_page(
    client: ContentClient,
    settings: Settings,
    slug: str,
) -> PostDetailPage | None:
    """Detail page for ``slug``; None when no post has that slug."""
    post = await client.get_post_by_slug(slug)
    if post is None:
        return None

    return PostDetailPage(
        title=post.title,
        slug=post.slug,
        date_label=format_date_long(post.created_at),
        body_html=render_markdown(
            post.content or "",
            cms_base_url=settings.blog_api_url,
            image_proxy_url=settings.image_proxy_url,
        ),
        categories=[category_link(c) for c in post.categories],
        seo=post_seo(post, settings),
        cover_url=cover_image_url(post, settings),
        cover_alt=cover_alt_text(post),
    )
