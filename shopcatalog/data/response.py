"""Shape catalog results into the JSON envelopes the storefront consumes."""
from __future__ import annotations

from typing import Any, Dict

from .errors import QueryValidationError
from .models import Product, ResultPage


def product_payload(product: Product) -> Dict[str, Any]:
    return product.model_dump(mode="json", by_alias=True)


def to_response(page: ResultPage) -> Dict[str, Any]:
    return {
        "success": True,
        "data": {
            "products": [product_payload(p) for p in page.items],
            "pagination": {
                "page": page.page,
                "limit": page.page_size,
                "total": page.total_matching,
                "pages": page.total_pages,
            },
        },
    }


def to_product_response(product: Product) -> Dict[str, Any]:
    return {"success": True, "data": product_payload(product)}


def to_error_response(exc: Exception) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": str(exc)}
    if isinstance(exc, QueryValidationError):
        body["errors"] = dict(exc.errors)
    return body
