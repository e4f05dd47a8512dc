"""Shared fixtures: settings and an in-memory CMS behind httpx.MockTransport."""

import math
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from blog_frontend.clients.content_client import ContentClient
from blog_frontend.config import Settings
from blog_frontend.utils.query_string import parse_query

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def make_category(id_: int, slug: str, name: str | None = None, description: str = "", updated: bool = False) -> dict:
    data = {
        "id": id_,
        "name": name or slug.title(),
        "slug": slug,
        "description": description,
        "createdAt": iso(EPOCH),
    }
    if updated:
        data["updatedAt"] = iso(EPOCH + timedelta(days=30))
    return data


def make_post(
    n: int,
    slug: str | None = None,
    *,
    categories: list[dict] | None = None,
    cover: str | None = "/uploads/cover.jpg",
    content: str = "Hello **world**.",
    updated: bool = False,
) -> dict:
    created = EPOCH + timedelta(hours=n)
    data = {
        "id": n,
        "title": f"Post {n}",
        "slug": slug or f"post-{n}",
        "description": f"Description {n}",
        "content": content,
        "createdAt": iso(created),
        "updatedAt": iso(created + timedelta(days=1)) if updated else None,
        "cover": {"url": cover, "alternativeText": None} if cover else None,
        "categories": [{"id": c["id"], "name": c["name"], "slug": c["slug"]} for c in categories or []],
    }
    return data


class FakeCms:
    """Serves /api/blogs and /api/categories with CMS filtering and pagination semantics."""

    def __init__(self, posts: list[dict] | None = None, categories: list[dict] | None = None):
        self.posts = posts or []
        self.categories = categories or []
        self.requests: list[httpx.Request] = []
        self.failure: tuple[int, str] | None = None

    def params(self, index: int = -1) -> dict:
        return parse_query(self.requests[index].url.query.decode())

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure:
            status, body = self.failure
            return httpx.Response(status, text=body)

        if request.url.path == "/api/categories":
            return httpx.Response(200, json={"data": self.categories, "meta": {}})
        if request.url.path != "/api/blogs":
            return httpx.Response(404, json={"error": {"status": 404}})

        params = parse_query(request.url.query.decode())
        items = sorted(self.posts, key=lambda p: p["createdAt"], reverse=True)

        filters = params.get("filters", {})
        if "slug" in filters:
            items = [p for p in items if p["slug"] == filters["slug"]["$eq"]]
        if "categories" in filters:
            wanted = filters["categories"]["slug"]["$eq"]
            items = [p for p in items if any(c["slug"] == wanted for c in p["categories"])]

        pagination = params.get("pagination", {})
        page = int(pagination.get("page", 1))
        size = int(pagination.get("pageSize", 25))
        total = len(items)
        return httpx.Response(200, json={
            "data": items[(page - 1) * size: page * size],
            "meta": {
                "pagination": {
                    "page": page,
                    "pageSize": size,
                    "pageCount": math.ceil(total / size),
                    "total": total,
                }
            },
        })


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        blog_api_url="http://cms.test",
        site_url="https://blog.example.com",
        revalidate_token="s3cret",
        cache_ttl_seconds=0,
        featured_post_slug="",
    )


@pytest.fixture
def cms() -> FakeCms:
    cycling = make_category(1, "cycling", "Cycling", description="2")
    gear = make_category(2, "gear", "Gear", description="1")
    posts = [
        make_post(n, categories=[cycling] if n % 2 else [cycling, gear])
        for n in range(1, 26)
    ]
    return FakeCms(posts=posts, categories=[cycling, gear])


@pytest_asyncio.fixture
async def content_client(settings, cms):
    client = ContentClient(
        base_url=settings.blog_api_url,
        transport=httpx.MockTransport(cms.handler),
    )
    async with client:
        yield client
