"""FastAPI application: routes wire requests to page assemblers and templates."""

from __future__ import annotations

import json
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from blog_frontend.clients.content_client import ContentClient, FetchError, create_content_client
from blog_frontend.config import Settings
from blog_frontend.core.layout import build_layout
from blog_frontend.core.pages import (
    PageNotFound,
    build_categories_page,
    build_category_page,
    build_listing_page,
    build_post_page,
    parse_page_number,
)
from blog_frontend.models.views import SeoMetadata
from blog_frontend.services.response_cache import ResponseCache
from blog_frontend.services.revalidation import WebhookPayload, is_authorized, revalidate
from blog_frontend.services.sitemap import build_sitemap, render_sitemap_xml
from blog_frontend.utils.logging import get_logger

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
logger = get_logger("blog_frontend.web")


# --- Dependencies ---


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_content_client(request: Request) -> ContentClient:
    client: ContentClient = request.app.state.content_client
    await client.open()
    return client


def _render(
    request: Request,
    template: str,
    settings: Settings,
    *,
    seo: SeoMetadata | None = None,
    status_code: int = 200,
    **context,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        template,
        {
            "site_name": settings.site_name,
            "site_url": settings.public_base_url,
            "seo": seo or SeoMetadata(title=settings.site_name, description=settings.site_description),
            **context,
        },
        status_code=status_code,
    )


# --- Application factory ---


def create_app(settings: Settings, client: ContentClient | None = None) -> FastAPI:
    """Build the app around one settings object and one content client."""
    if not settings.has_revalidate_token:
        logger.warning("REVALIDATE_TOKEN is not set; webhook calls will be rejected")
    if client is None:
        client = create_content_client(
            settings.blog_api_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            cache=ResponseCache(ttl_seconds=settings.cache_ttl_seconds),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving %s from CMS at %s", settings.public_base_url, settings.blog_api_url)
        await client.open()
        yield
        await client.close()

    app = FastAPI(lifespan=lifespan, title=settings.site_name, docs_url=None, redoc_url=None)
    app.state.settings = settings
    app.state.content_client = client

    @app.exception_handler(PageNotFound)
    async def page_not_found(request: Request, exc: PageNotFound):
        logger.debug("Not found: %s (%s)", request.url.path, exc)
        return _render(
            request,
            "not_found.html",
            settings,
            seo=SeoMetadata(title="Page Not Found"),
            status_code=404,
        )

    @app.exception_handler(FetchError)
    async def fetch_failed(request: Request, exc: FetchError):
        logger.error("CMS fetch failed for %s: %s", request.url.path, exc)
        return _render(
            request,
            "error.html",
            settings,
            seo=SeoMetadata(title="Error"),
            status_code=502,
        )

    # --- Pages ---

    @app.get("/", response_class=HTMLResponse)
    async def listing(
        request: Request,
        page: Optional[str] = Query(None, description="1-based page number"),
        settings: Settings = Depends(get_app_settings),
        client: ContentClient = Depends(get_content_client),
    ):
        view = await build_listing_page(client, settings, parse_page_number(page))
        layout = await build_layout(client, settings)
        return _render(request, "listing.html", settings, seo=view.seo, page=view, layout=layout)

    @app.get("/blog/{slug}", response_class=HTMLResponse)
    async def post_detail(
        request: Request,
        slug: str,
        settings: Settings = Depends(get_app_settings),
        client: ContentClient = Depends(get_content_client),
    ):
        view = await build_post_page(client, settings, slug)
        layout = await build_layout(client, settings)
        if view is None:
            return _render(
                request,
                "not_found.html",
                settings,
                seo=SeoMetadata(title="Post Not Found"),
                status_code=404,
                layout=layout,
                message="Blog post not found",
            )
        return _render(request, "post.html", settings, seo=view.seo, post=view, layout=layout)

    @app.get("/category", response_class=HTMLResponse)
    async def categories_index(
        request: Request,
        settings: Settings = Depends(get_app_settings),
        client: ContentClient = Depends(get_content_client),
    ):
        view = await build_categories_page(client, settings)
        layout = await build_layout(client, settings)
        return _render(request, "categories.html", settings, seo=view.seo, page=view, layout=layout)

    @app.get("/category/{slug}", response_class=HTMLResponse)
    async def category_listing(
        request: Request,
        slug: str,
        page: Optional[str] = Query(None, description="1-based page number"),
        settings: Settings = Depends(get_app_settings),
        client: ContentClient = Depends(get_content_client),
    ):
        view = await build_category_page(client, settings, slug, parse_page_number(page))
        layout = await build_layout(client, settings)
        return _render(request, "category.html", settings, seo=view.seo, page=view, layout=layout)

    @app.get("/sitemap.xml")
    async def sitemap(
        settings: Settings = Depends(get_app_settings),
        client: ContentClient = Depends(get_content_client),
    ):
        entries = await build_sitemap(client, settings)
        return Response(content=render_sitemap_xml(entries), media_type="application/xml")

    # --- Webhook ---

    @app.post("/api/revalidate")
    async def revalidate_webhook(
        request: Request,
        settings: Settings = Depends(get_app_settings),
    ):
        if not is_authorized(request.headers.get("Authorization"), settings.revalidate_token):
            return JSONResponse({"message": "Invalid token"}, status_code=401)

        try:
            body = json.loads(await request.body())
            if not isinstance(body, dict):
                raise ValueError("webhook body must be a JSON object")
            payload = WebhookPayload.model_validate(body)
        except (ValueError, ValidationError):
            return JSONResponse({"message": "Bad request"}, status_code=400)

        revalidate(payload, request.app.state.content_client.cache)
        return {"revalidated": True, "now": int(time.time() * 1000)}

    return app
