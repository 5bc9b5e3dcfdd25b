from __future__ import annotations

from typing import Iterable, Tuple

from ..errors import ProductNotFoundError
from ..interface import CatalogAccess
from ..models import Product, StringList


class InMemoryCatalog(CatalogAccess):
    """
    In-memory implementation.
    - Stores products in insertion order.
    - Writes swap in a new tuple, so snapshots already handed out never change.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: Tuple[Product, ...] = tuple(products)

    def snapshot(self) -> Tuple[Product, ...]:
        return self._products

    def get_product(self, product_id: str) -> Product:
        for product in self._products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def list_category_ids(self) -> StringList:
        ids = {p.category_id for p in self._products if p.category_id is not None}
        return StringList(values=sorted(ids))

    # ---------- catalog management ----------

    def add(self, product: Product) -> None:
        if any(p.id == product.id for p in self._products):
            raise ValueError(f"Duplicate product id: {product.id}")
        self._products = self._products + (product,)

    def replace(self, product: Product) -> None:
        """Swap the stored product with the same id, keeping its position."""
        for idx, existing in enumerate(self._products):
            if existing.id == product.id:
                self._products = self._products[:idx] + (product,) + self._products[idx + 1:]
                return
        raise ProductNotFoundError(product.id)

    def remove(self, product_id: str) -> None:
        remaining = tuple(p for p in self._products if p.id != product_id)
        if len(remaining) == len(self._products):
            raise ProductNotFoundError(product_id)
        self._products = remaining
