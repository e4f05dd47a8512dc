"""Pydantic data models."""

from blog_frontend.models.category import Category, sort_by_priority
from blog_frontend.models.post import CoverImage, Pagination, Post, PostPage
from blog_frontend.models.query import CmsQuery, PaginationParams

__all__ = [
    "Category",
    "CmsQuery",
    "CoverImage",
    "Pagination",
    "PaginationParams",
    "Post",
    "PostPage",
    "sort_by_priority",
]
