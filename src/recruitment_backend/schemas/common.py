"""Shared pagination schemas and helpers."""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results with the totals needed to navigate the rest."""

    items: List[T]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    """Plain acknowledgement for mutations without a resource body."""

    success: bool = True
    message: str


def clamp_limit(limit: int, maximum: int) -> int:
    """Bound a requested page size to ``1..maximum``."""
    return max(1, min(limit, maximum))


def page_count(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` rows ``limit`` at a time."""
    return math.ceil(total / limit) if limit > 0 else 0


def build_page(items: List[T], total: int, page: int, limit: int) -> Page[T]:
    """Assemble a page; ``limit`` must already be clamped."""
    return Page(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=page_count(total, limit),
    )


def to_payload(schema: type, instance) -> dict:
    """Serialize ``instance`` through ``schema`` into a JSON-ready dict."""
    return schema.model_validate(instance).model_dump(mode="json")
