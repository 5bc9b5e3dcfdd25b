# shopcatalog/data/interface.py
from __future__ import annotations

from typing import Protocol, Sequence

from .models import (
    # Record models
    Product,
    # List response models
    StringList,
)


# ---- Catalog access protocol ----

class CatalogAccess(Protocol):
    """
    Backend-agnostic contract for catalog consumers.

    - snapshot() MUST return an immutable sequence that stays consistent for
      the whole query, even if the catalog changes afterwards.
    - Implementations MUST NOT cache query results; filtering, sorting and
      paging happen per call in the query pipeline.
    """

    def snapshot(self) -> Sequence[Product]:
        """Return all products in catalog order."""
        ...

    def get_product(self, product_id: str) -> Product:
        """Return one product; raise ProductNotFoundError if absent."""
        ...

    def list_category_ids(self) -> StringList:
        """List distinct category ids, sorted, excluding uncategorized."""
        ...
