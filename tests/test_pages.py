"""Tests for page assemblers."""

import pytest

from blog_frontend.core.layout import build_layout
from blog_frontend.core.pages import (
    PageNotFound,
    build_categories_page,
    build_category_page,
    build_listing_page,
    build_post_page,
    parse_page_number,
)
from blog_frontend.models.views import Pager


class TestParsePageNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-2", 1), ("3", 3), ("3abc", 3), (" 7", 7)],
    )
    def test_values(self, raw, expected):
        assert parse_page_number(raw) == expected


class TestPager:
    def test_controls_within_range(self):
        page_count = 4
        for page in range(1, page_count + 1):
            pager = Pager(page=page, page_count=page_count)
            assert pager.has_previous == (page > 1)
            assert pager.has_next == (page < page_count)

    def test_urls(self):
        pager = Pager(page=2, page_count=3, base_path="/category/gear")
        assert pager.previous_url == "/category/gear?page=1"
        assert pager.next_url == "/category/gear?page=3"
        assert Pager(page=1, page_count=1).previous_url is None


@pytest.mark.asyncio
async def test_listing_defaults_to_first_page_of_ten(content_client, settings, cms):
    page = await build_listing_page(content_client, settings)

    assert cms.params()["pagination"] == {"page": "1", "pageSize": "10"}
    assert len(page.posts) == 10
    assert page.pager.has_previous is False
    assert page.pager.has_next is True
    assert page.seo.title == settings.site_name


@pytest.mark.asyncio
async def test_listing_last_page_shows_previous_only(content_client, settings):
    page = await build_listing_page(content_client, settings, page=3)
    assert page.pager.page_count == 3
    assert page.pager.has_previous is True
    assert page.pager.has_next is False


@pytest.mark.asyncio
async def test_listing_page_beyond_last_is_not_found(content_client, settings):
    with pytest.raises(PageNotFound):
        await build_listing_page(content_client, settings, page=4)


@pytest.mark.asyncio
async def test_listing_cards(content_client, settings):
    page = await build_listing_page(content_client, settings)
    card = page.posts[0]
    assert card.url == "/blog/post-25"
    assert card.image_url == "http://cms.test/uploads/cover.jpg"
    assert card.image_alt == "Post 25"
    assert card.date_label == "2024.01.02"
    assert [c.url for c in card.categories] == ["/category/cycling"]


@pytest.mark.asyncio
async def test_empty_listing_renders_empty_first_page(content_client, settings, cms):
    cms.posts = []
    page = await build_listing_page(content_client, settings)
    assert page.posts == []
    assert page.pager.has_next is False


@pytest.mark.asyncio
async def test_category_page(content_client, settings):
    page = await build_category_page(content_client, settings, "gear")
    assert page.category_name == "Gear"
    assert page.pager.base_path == "/category/gear"
    assert page.pager.page_count == 2
    assert page.seo.title == "Category: Gear"
    active = [c.slug for card in page.posts for c in card.categories if c.active]
    assert set(active) == {"gear"}


@pytest.mark.asyncio
async def test_category_without_posts_is_not_found(content_client, settings):
    with pytest.raises(PageNotFound):
        await build_category_page(content_client, settings, "unknown")


@pytest.mark.asyncio
async def test_categories_index_sorted_by_priority(content_client, settings):
    page = await build_categories_page(content_client, settings)
    assert [c.slug for c in page.categories] == ["gear", "cycling"]


@pytest.mark.asyncio
async def test_post_page_not_found(content_client, settings):
    assert await build_post_page(content_client, settings, "nope") is None


@pytest.mark.asyncio
async def test_post_page(content_client, settings):
    page = await build_post_page(content_client, settings, "post-2")
    assert page.title == "Post 2"
    assert page.date_label == "2024年1月1日"
    assert "<strong>world</strong>" in page.body_html
    assert page.cover_url == "http://cms.test/uploads/cover.jpg"
    assert page.seo.og_type == "article"
    assert page.seo.og_image.url == "http://cms.test/uploads/cover.jpg"
    assert (page.seo.og_image.width, page.seo.og_image.height) == (1200, 630)


@pytest.mark.asyncio
async def test_post_og_image_through_proxy(content_client, settings):
    settings.image_proxy_url = "/_image"
    page = await build_post_page(content_client, settings, "post-2")
    assert page.seo.og_image.url == (
        "https://blog.example.com/_image?url=http%3A%2F%2Fcms.test%2Fuploads%2Fcover.jpg&w=1200&q=75"
    )


@pytest.mark.asyncio
async def test_layout(content_client, settings):
    settings.featured_post_slug = "post-3"
    layout = await build_layout(content_client, settings)
    assert [p.slug for p in layout.recent_posts] == ["post-25", "post-24", "post-23", "post-22", "post-21"]
    assert [c.slug for c in layout.nav_categories] == ["gear", "cycling"]
    assert layout.featured_post.slug == "post-3"


@pytest.mark.asyncio
async def test_layout_missing_featured_post(content_client, settings):
    settings.featured_post_slug = "gone"
    layout = await build_layout(content_client, settings)
    assert layout.featured_post is None
