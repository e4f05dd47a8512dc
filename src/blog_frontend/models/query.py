"""Structured request shape for CMS collection queries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from blog_frontend.utils.query_string import build_query, parse_query


class PaginationParams(BaseModel):
    """Page-based pagination request."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = 1
    page_size: int = Field(default=10, alias="pageSize")


class CmsQuery(BaseModel):
    """Populate / filter / pagination / sort instructions for a CMS request."""

    model_config = ConfigDict(populate_by_name=True)

    filters: dict[str, Any] | None = None
    populate: dict[str, Any] | None = None
    pagination: PaginationParams | None = None
    sort: list[str] | None = None

    def to_params(self) -> dict[str, Any]:
        """Nested params in wire form, without unset sections."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_query_string(self) -> str:
        return build_query(self.to_params())

    @classmethod
    def from_query_string(cls, query: str) -> "CmsQuery":
        return cls.model_validate(parse_query(query))


def eq(value: Any) -> dict[str, Any]:
    """Equality filter predicate."""
    return {"$eq": value}


POST_POPULATE: dict[str, Any] = {
    "cover": {"fields": ["url", "alternativeText"]},
    "categories": {"fields": ["name", "slug"]},
}

NEWEST_FIRST: list[str] = ["createdAt:desc"]
