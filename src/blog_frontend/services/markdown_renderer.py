"""Render post bodies from Markdown into sanitized HTML."""

from __future__ import annotations

import markdown
from bs4 import BeautifulSoup

from blog_frontend.utils.text_utils import absolute_url, optimized_image_url

ALLOWED_TAGS = {
    "a", "abbr", "b", "blockquote", "br", "caption", "code", "del", "div", "em",
    "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img",
    "ins", "kbd", "li", "mark", "ol", "p", "pre", "s", "small", "span", "strong",
    "sub", "sup", "table", "tbody", "td", "th", "thead", "tr", "u", "ul",
}

# Removed together with their content.
DROPPED_TAGS = {"script", "style", "iframe", "object", "embed", "form", "noscript", "template"}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "img": {"src", "alt", "title", "width", "height", "loading"},
    "td": {"align", "colspan", "rowspan"},
    "th": {"align", "colspan", "rowspan"},
    "code": {"class"},
    "span": {"class"},
    "div": {"class"},
}

_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:text/html")

BODY_IMAGE_WIDTH = 800
BODY_IMAGE_HEIGHT = 400


def _is_unsafe_url(value: str) -> bool:
    return value.strip().lower().replace(" ", "").startswith(_UNSAFE_SCHEMES)


def sanitize_html(html_text: str) -> BeautifulSoup:
    """Keep only presentational tags and safe attributes."""
    soup = BeautifulSoup(html_text, "html.parser")

    for tag in soup.find_all(list(DROPPED_TAGS)):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        allowed = ALLOWED_ATTRIBUTES.get(tag.name, set())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag[attr]
            elif attr in ("href", "src") and _is_unsafe_url(str(tag[attr])):
                del tag[attr]

    return soup


def rewrite_images(
    soup: BeautifulSoup,
    *,
    cms_base_url: str,
    image_proxy_url: str = "",
) -> BeautifulSoup:
    """Give every ``<img>`` an absolute, optimized ``src``; drop images without one."""
    for img in soup.find_all("img"):
        src = img.get("src")
        if not isinstance(src, str) or not src.strip():
            img.decompose()
            continue
        img["src"] = optimized_image_url(
            absolute_url(src.strip(), cms_base_url),
            image_proxy_url,
            width=BODY_IMAGE_WIDTH,
        )
        img["alt"] = img.get("alt") or ""
        img["width"] = str(BODY_IMAGE_WIDTH)
        img["height"] = str(BODY_IMAGE_HEIGHT)
        img["loading"] = "lazy"
    return soup


def render_markdown(
    text: str,
    *,
    cms_base_url: str,
    image_proxy_url: str = "",
) -> str:
    """
    Convert a Markdown post body to HTML safe for embedding in a page.

    Raw inline HTML in the source is allowed through for presentational
    tags only; image URLs are resolved against the CMS host.
    """
    if not text:
        return ""
    raw_html = markdown.markdown(text, extensions=["fenced_code", "tables"])
    soup = sanitize_html(raw_html)
    rewrite_images(soup, cms_base_url=cms_base_url, image_proxy_url=image_proxy_url)
    return str(soup)
