"""Tests for Pydantic models."""

from datetime import datetime, timezone

from blog_frontend.models.category import Category, sort_by_priority
from blog_frontend.models.post import Pagination, Post, PostPage

from conftest import make_category, make_post


class TestPost:
    def test_validates_wire_format(self):
        post = Post.model_validate(make_post(3, categories=[make_category(1, "cycling")]))
        assert post.slug == "post-3"
        assert post.cover.url == "/uploads/cover.jpg"
        assert post.categories[0].slug == "cycling"
        assert post.created_at == datetime(2024, 1, 1, 3, tzinfo=timezone.utc)

    def test_last_modified_prefers_update_time(self):
        post = Post.model_validate(make_post(1, updated=True))
        assert post.last_modified == post.updated_at
        assert post.last_modified > post.created_at

    def test_last_modified_falls_back_to_creation(self):
        post = Post.model_validate(make_post(1))
        assert post.last_modified == post.created_at

    def test_missing_cover(self):
        post = Post.model_validate(make_post(1, cover=None))
        assert post.cover is None

    def test_find_category(self):
        post = Post.model_validate(make_post(1, categories=[make_category(1, "gear", "Gear")]))
        assert post.find_category("gear").name == "Gear"
        assert post.find_category("Gear") is None


class TestCategory:
    def test_priority_from_description(self):
        assert Category(name="A", slug="a", description="12").priority == 12
        assert Category(name="A", slug="a", description=" 3 bikes").priority == 3
        assert Category(name="A", slug="a", description="none").priority is None
        assert Category(name="A", slug="a", description=None).priority is None

    def test_sort_by_priority(self):
        categories = [
            Category(name="C", slug="c", description="x"),
            Category(name="B", slug="b", description="2"),
            Category(name="A", slug="a", description="1"),
            Category(name="D", slug="d", description=""),
        ]
        assert [c.slug for c in sort_by_priority(categories)] == ["a", "b", "c", "d"]


class TestPostPage:
    def test_navigation_flags(self):
        page = PostPage(pagination=Pagination(page=2, page_size=10, page_count=3, total=25))
        assert page.has_previous is True
        assert page.has_next is True
        assert page.is_empty is True

    def test_pagination_aliases(self):
        pagination = Pagination.model_validate({"page": 1, "pageSize": 10, "pageCount": 0, "total": 0})
        assert pagination.page_count == 0
