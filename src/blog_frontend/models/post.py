"""Post models for content read from the CMS."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blog_frontend.models.category import Category


class CoverImage(BaseModel):
    """Cover image reference; ``url`` is usually relative to the CMS host."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str
    alternative_text: str | None = Field(default=None, alias="alternativeText")


class Post(BaseModel):
    """Represents a blog post from the CMS API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    title: str
    slug: str
    description: str | None = ""
    content: str | None = ""
    cover: CoverImage | None = None
    categories: list[Category] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    @property
    def last_modified(self) -> datetime:
        """Update time if known, else creation time."""
        return self.updated_at or self.created_at

    def find_category(self, slug: str) -> Category | None:
        """Return this post's category with the given slug."""
        return next((c for c in self.categories if c.slug == slug), None)


class Pagination(BaseModel):
    """Pagination metadata from ``meta.pagination``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = 1
    page_size: int = Field(default=10, alias="pageSize")
    page_count: int = Field(default=0, alias="pageCount")
    total: int = 0


class PostPage(BaseModel):
    """One page of posts, newest first, with its pagination metadata."""

    posts: list[Post] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @property
    def is_empty(self) -> bool:
        return not self.posts

    @property
    def has_previous(self) -> bool:
        return self.pagination.page > 1

    @property
    def has_next(self) -> bool:
        return self.pagination.page < self.pagination.page_count
