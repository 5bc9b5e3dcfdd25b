from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Product(BaseModel):
    """A catalog product record. Read-only once constructed."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Unique product identifier")
    name: str = Field(min_length=1, description="Product display name")
    description: str = Field(default="", description="Searchable free text")
    price: float = Field(ge=0, description="Unit price")
    category_id: Optional[str] = Field(default=None, description="Category identifier, None when uncategorized")
    stock: int = Field(default=0, ge=0, description="Units available")
    rating: float = Field(default=0.0, ge=0, le=5, description="Average review rating")
    created_at: datetime = Field(description="Creation timestamp, drives newest-first ordering")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive timestamps are UTC so every created_at is comparable
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
