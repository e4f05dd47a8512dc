"""Content client for reading posts and categories from the CMS REST API."""

from typing import Any, Callable, TypeVar

import httpx
from pydantic import ValidationError

from blog_frontend.clients.base import BaseAsyncClient
from blog_frontend.models.category import Category
from blog_frontend.models.post import Pagination, Post, PostPage
from blog_frontend.models.query import NEWEST_FIRST, POST_POPULATE, CmsQuery, PaginationParams, eq
from blog_frontend.services.response_cache import ResponseCache
from blog_frontend.utils.logging import get_logger

T = TypeVar("T")

POSTS_ENDPOINT = "/api/blogs"
CATEGORIES_ENDPOINT = "/api/categories"

POSTS_TAG = "blog_posts"
CATEGORIES_TAG = "categories"


def post_tag(slug: str) -> str:
    return f"blog_post:{slug}"


def category_tag(slug: str) -> str:
    return f"category:{slug}"


class FetchError(RuntimeError):
    """Raised when a CMS request fails at the transport or HTTP level."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        url: str | None = None,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.url = url
        self.status_code = status_code
        self.body = body


class ContentClient(BaseAsyncClient):
    """Client for the CMS ``/api/blogs`` and ``/api/categories`` collections."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 0,
        cache: ResponseCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            transport=transport,
        )
        self.cache = cache
        self.logger = get_logger("blog_frontend.content_client")

    async def _get_json(self, endpoint: str, query: CmsQuery | None, *, operation: str) -> Any:
        url = endpoint
        if query is not None:
            query_string = query.to_query_string()
            if query_string:
                url = f"{endpoint}?{query_string}"

        self.logger.debug("GET %s%s", self.base_url, url)
        try:
            response = await self.get(url)
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            self.logger.warning(
                "CMS returned %s during %s: %s", exc.response.status_code, operation, body[:200]
            )
            raise FetchError(
                f"API error: {exc.response.status_code} - {body}",
                operation=operation,
                url=str(exc.request.url),
                status_code=exc.response.status_code,
                body=body,
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.warning("CMS request failed during %s: %s", operation, exc)
            raise FetchError(
                f"API request failed during {operation}: {exc}",
                operation=operation,
                url=f"{self.base_url}{url}",
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(
                f"API returned invalid JSON during {operation}",
                operation=operation,
                url=str(response.url),
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def _cached(
        self,
        key: str,
        tags: list[str],
        load: Callable[[], Any],
    ) -> Any:
        if self.cache is not None:
            hit, value = self.cache.get(key)
            if hit:
                return value
        value = await load()
        if self.cache is not None:
            self.cache.set(key, value, tags)
        return value

    @staticmethod
    def _validate(operation: str, build: Callable[[], T]) -> T:
        try:
            return build()
        except (ValidationError, KeyError, TypeError, AttributeError) as exc:
            raise FetchError(
                f"Unexpected response shape during {operation}: {exc}",
                operation=operation,
            ) from exc

    def _page_from_payload(self, operation: str, payload: Any) -> PostPage:
        def build() -> PostPage:
            posts = [Post.model_validate(item) for item in payload.get("data") or []]
            meta = payload.get("meta") or {}
            pagination = Pagination.model_validate(meta.get("pagination") or {})
            return PostPage(posts=posts, pagination=pagination)

        return self._validate(operation, build)

    async def _fetch_post_page(
        self,
        operation: str,
        query: CmsQuery,
        tags: list[str],
    ) -> PostPage:
        async def load() -> PostPage:
            payload = await self._get_json(POSTS_ENDPOINT, query, operation=operation)
            return self._page_from_payload(operation, payload)

        key = f"{POSTS_ENDPOINT}?{query.to_query_string()}"
        return await self._cached(key, tags, load)

    async def list_posts(self, page: int = 1, page_size: int = 10) -> PostPage:
        """Fetch one page of posts, newest first, with cover and categories populated."""
        query = CmsQuery(
            populate=POST_POPULATE,
            pagination=PaginationParams(page=page, page_size=page_size),
            sort=NEWEST_FIRST,
        )
        return await self._fetch_post_page("list_posts", query, [POSTS_TAG])

    async def list_posts_by_category(
        self,
        category_slug: str,
        page: int = 1,
        page_size: int = 10,
    ) -> PostPage:
        """Fetch one page of posts that belong to the category with ``category_slug``."""
        query = CmsQuery(
            filters={"categories": {"slug": eq(category_slug)}},
            populate=POST_POPULATE,
            pagination=PaginationParams(page=page, page_size=page_size),
            sort=NEWEST_FIRST,
        )
        tags = [POSTS_TAG, CATEGORIES_TAG, category_tag(category_slug)]
        return await self._fetch_post_page("list_posts_by_category", query, tags)

    async def get_post_by_slug(self, slug: str) -> Post | None:
        """Return the post whose slug equals ``slug`` exactly, or None."""
        operation = "get_post_by_slug"
        query = CmsQuery(filters={"slug": eq(slug)}, populate=POST_POPULATE)

        async def load() -> Post | None:
            payload = await self._get_json(POSTS_ENDPOINT, query, operation=operation)

            def build() -> Post | None:
                data = payload.get("data") or []
                return Post.model_validate(data[0]) if data else None

            return self._validate(operation, build)

        key = f"{POSTS_ENDPOINT}?{query.to_query_string()}"
        return await self._cached(key, [POSTS_TAG, post_tag(slug)], load)

    async def list_categories(self) -> list[Category]:
        """Fetch every category, unfiltered and unpaginated."""
        operation = "list_categories"

        async def load() -> list[Category]:
            payload = await self._get_json(CATEGORIES_ENDPOINT, None, operation=operation)
            return self._validate(
                operation,
                lambda: [Category.model_validate(item) for item in payload.get("data") or []],
            )

        return await self._cached(CATEGORIES_ENDPOINT, [CATEGORIES_TAG], load)


def create_content_client(
    base_url: str,
    *,
    timeout: float = 30.0,
    max_retries: int = 0,
    cache: ResponseCache | None = None,
) -> ContentClient:
    """Factory function to create a ContentClient."""
    return ContentClient(
        base_url=base_url,
        timeout=timeout,
        max_retries=max_retries,
        cache=cache,
    )
