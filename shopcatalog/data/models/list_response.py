from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .products import Product


class StringList(BaseModel):
    """Generic container for lists of unique string values."""
    values: List[str] = Field(description="List of unique string values")


class ResultPage(BaseModel):
    """One page of matching products plus pagination metadata."""
    items: List[Product] = Field(default_factory=list, description="Products on the requested page, in sort order")
    page: int = Field(description="Page number after clamping")
    page_size: int = Field(description="Page size after clamping")
    total_matching: int = Field(description="Products surviving the filters, before pagination")
    total_pages: int = Field(description="ceil(total_matching / page_size)")
