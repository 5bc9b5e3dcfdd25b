"""Exceptions raised by the catalog layer."""
from __future__ import annotations

from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for catalog errors."""


class QueryValidationError(CatalogError, ValueError):
    """Raised when listing parameters cannot be turned into a query.

    ``errors`` maps each offending parameter to a human readable message.
    """

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        if message is None:
            message = "Invalid query parameters: " + "; ".join(
                f"{name}: {reason}" for name, reason in self.errors.items()
            )
        super().__init__(message)


class ProductNotFoundError(CatalogError, LookupError):
    """Raised when a product id is not present in the catalog."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class CatalogLoadError(CatalogError, RuntimeError):
    """Raised when a catalog source cannot be read into products."""
