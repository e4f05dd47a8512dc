"""Category model for organizing blog content."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blog_frontend.utils.text_utils import parse_int_prefix


class Category(BaseModel):
    """A blog category as returned by the CMS."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    name: str = Field(..., description="Display name")
    slug: str = Field(..., description="Unique URL key")
    description: str | None = Field(
        default="", description="Free text; holds the navigation priority as a number"
    )
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @property
    def priority(self) -> int | None:
        """Leading integer of the description, or None when there is none."""
        return parse_int_prefix(self.description)

    @property
    def last_modified(self) -> datetime | None:
        return self.updated_at or self.created_at


def sort_by_priority(categories: list[Category]) -> list[Category]:
    """Order categories by numeric priority; unprioritized ones go last, ties keep API order."""
    return sorted(
        categories,
        key=lambda c: (c.priority is None, c.priority if c.priority is not None else 0),
    )
