from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SortKey(str, Enum):
    """Orderings supported by the product listing."""
    NEWEST = "newest"
    PRICE_ASCENDING = "price_ascending"
    PRICE_DESCENDING = "price_descending"
    RATING_DESCENDING = "rating_descending"


class QueryDescriptor(BaseModel):
    """Filter, sort and pagination parameters for one catalog query.

    Price bounds are not checked against each other here: a descriptor with
    min_price > max_price is valid and simply matches nothing.
    """
    category_id: Optional[str] = Field(default=None, description="Exact-match category filter")
    search_term: Optional[str] = Field(default=None, description="Case-insensitive substring over name and description")
    min_price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False, description="Inclusive lower price bound")
    max_price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False, description="Inclusive upper price bound")
    sort_key: SortKey = Field(default=SortKey.NEWEST, description="Active ordering")
    page: int = Field(default=1, description="1-based page number")
    page_size: int = Field(default=20, description="Items per page")
