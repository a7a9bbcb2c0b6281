"""
Shared I/O building blocks.

API payloads use camelCase keys on the wire and snake_case attributes in
Python. Fields whose names contain ``4k`` carry explicit aliases so the wire
name stays ``is4k``/``status4k``.
"""

from __future__ import annotations

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for API schemas (camelCase aliases, readable from ORM objects)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PageInfo(ApiModel):
    pages: int = Field(description="Total number of pages")
    page_size: int = Field(description="Page size used for this response")
    results: int = Field(description="Total number of matching records")
    page: int = Field(description="Current page (1-based)")

    @classmethod
    def build(cls, total: int, take: int, skip: int) -> "PageInfo":
        take = max(take, 1)
        return cls(pages=math.ceil(total / take), page_size=take, results=total, page=math.ceil(skip / take) + 1)


class Page(ApiModel, Generic[T]):
    """Paged list response."""

    page_info: PageInfo
    results: List[T]


class MessageResponse(ApiModel):
    message: str
