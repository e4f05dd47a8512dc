"""CLI commands for the blog front end using Typer."""

import asyncio
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from blog_frontend.clients.content_client import FetchError, create_content_client
from blog_frontend.config import get_settings
from blog_frontend.models.category import sort_by_priority
from blog_frontend.services.sitemap import build_sitemap, render_sitemap_xml
from blog_frontend.utils.logging import setup_logging
from blog_frontend.web.app import create_app


app = typer.Typer(
    name="blog-frontend",
    help="Server-rendered blog front end for a headless CMS",
    no_args_is_help=True,
)

console = Console()


def _fail(exc: FetchError) -> None:
    console.print(f"[red]CMS request failed during {exc.operation}.[/red]")
    console.print(f"[dim]{exc}[/dim]")
    raise typer.Exit(1)


# --- Serve Command ---


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
):
    """Run the web server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


# --- Posts Command ---


@app.command()
def posts(
    page: int = typer.Option(1, "--page", help="Page number"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category slug"),
):
    """List one page of posts."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    async def run():
        async with create_content_client(
            settings.blog_api_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        ) as client:
            if category:
                return await client.list_posts_by_category(category, page, settings.page_size)
            return await client.list_posts(page, settings.page_size)

    try:
        result = asyncio.run(run())
    except FetchError as exc:
        _fail(exc)

    table = Table(title=f"Posts (page {result.pagination.page} of {result.pagination.page_count})")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Categories", style="dim")
    table.add_column("Created", justify="right")

    for post in result.posts:
        table.add_row(
            post.slug,
            post.title,
            ", ".join(c.name for c in post.categories),
            post.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)
    console.print(f"[dim]{result.pagination.total} posts in total[/dim]")


# --- Categories Command ---


@app.command()
def categories():
    """List all categories in navigation order."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    async def run():
        async with create_content_client(
            settings.blog_api_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        ) as client:
            return await client.list_categories()

    try:
        items = sort_by_priority(asyncio.run(run()))
    except FetchError as exc:
        _fail(exc)

    table = Table(title="Categories")
    table.add_column("Priority", justify="right")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")

    for cat in items:
        table.add_row("" if cat.priority is None else str(cat.priority), cat.slug, cat.name)

    console.print(table)


# --- Sitemap Command ---


@app.command()
def sitemap():
    """Print the sitemap XML."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    async def run():
        async with create_content_client(
            settings.blog_api_url,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        ) as client:
            return await build_sitemap(client, settings)

    try:
        entries = asyncio.run(run())
    except FetchError as exc:
        _fail(exc)

    typer.echo(render_sitemap_xml(entries))


if __name__ == "__main__":
    app()
