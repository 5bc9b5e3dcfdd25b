"""Catalog operations as the storefront API exposes them.

Each method returns a response envelope ready for JSON encoding. Validation
and lookup failures come back as ``{"success": False, ...}`` envelopes so the
transport layer only has to pick a status code.
"""
from __future__ import annotations

from time import perf_counter
from typing import Any, Dict, Mapping, Optional

from ..logging import get_logger
from .errors import ProductNotFoundError, QueryValidationError
from .interface import CatalogAccess
from .models import QueryDescriptor, ResultPage
from .params import parse_query_params
from .pipeline import evaluate
from .response import to_error_response, to_product_response, to_response


class CatalogService:
    """Reads from a CatalogAccess backend and answers listing/detail calls."""

    def __init__(self, access: CatalogAccess) -> None:
        self.access = access
        self.logger = get_logger(__name__)

    def search(self, query: QueryDescriptor) -> ResultPage:
        """Evaluate a typed query against a fresh catalog snapshot."""
        return evaluate(self.access.snapshot(), query)

    def list_products(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        t0 = perf_counter()
        try:
            query = parse_query_params(params or {})
        except QueryValidationError as e:
            self.logger.warning(f"Rejected product listing: {e}")
            return to_error_response(e)

        page = self.search(query)
        took_ms = (perf_counter() - t0) * 1000
        self.logger.info(
            f"list_products: total={page.total_matching} page={page.page}/{page.total_pages} "
            f"returned={len(page.items)} took={took_ms:.2f}ms"
        )
        return to_response(page)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        try:
            product = self.access.get_product(product_id)
        except ProductNotFoundError as e:
            self.logger.info(str(e))
            return to_error_response(e)
        return to_product_response(product)

    def list_categories(self) -> Dict[str, Any]:
        return {"success": True, "data": self.access.list_category_ids().values}
