"""Plain view data handed to templates; built from already-fetched content."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryLink:
    name: str
    slug: str
    url: str
    active: bool = False


@dataclass(frozen=True)
class PostCard:
    """A post as shown in listings and the sidebar."""

    title: str
    slug: str
    url: str
    description: str = ""
    image_url: str | None = None
    image_alt: str = ""
    date_label: str = ""
    categories: list[CategoryLink] = field(default_factory=list)


@dataclass(frozen=True)
class Pager:
    """Previous/next navigation for a 1-based page number."""

    page: int
    page_count: int
    base_path: str = "/"

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    def _url(self, page: int) -> str:
        return f"{self.base_path}?page={page}"

    @property
    def previous_url(self) -> str | None:
        return self._url(self.page - 1) if self.has_previous else None

    @property
    def next_url(self) -> str | None:
        return self._url(self.page + 1) if self.has_next else None


@dataclass(frozen=True)
class OpenGraphImage:
    url: str
    width: int
    height: int
    alt: str = ""


@dataclass(frozen=True)
class SeoMetadata:
    """Values for ``<title>``, the meta description and Open Graph tags."""

    title: str
    description: str = ""
    og_type: str = "website"
    og_image: OpenGraphImage | None = None


@dataclass(frozen=True)
class ListingPage:
    posts: list[PostCard]
    pager: Pager
    seo: SeoMetadata


@dataclass(frozen=True)
class CategoryListingPage:
    category_name: str
    category_slug: str
    posts: list[PostCard]
    pager: Pager
    seo: SeoMetadata


@dataclass(frozen=True)
class CategoryIndexPage:
    categories: list[CategoryLink]
    seo: SeoMetadata


@dataclass(frozen=True)
class PostDetailPage:
    title: str
    slug: str
    date_label: str
    body_html: str
    categories: list[CategoryLink]
    seo: SeoMetadata
    cover_url: str | None = None
    cover_alt: str = ""


@dataclass(frozen=True)
class LayoutData:
    """Header navigation and sidebar content shared by every page."""

    nav_categories: list[CategoryLink]
    recent_posts: list[PostCard]
    featured_post: PostCard | None = None
