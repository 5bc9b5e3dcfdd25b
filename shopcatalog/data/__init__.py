from .errors import CatalogError, CatalogLoadError, ProductNotFoundError, QueryValidationError
from .models import Product, QueryDescriptor, ResultPage, SortKey
from .pipeline import evaluate

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "ProductNotFoundError",
    "QueryValidationError",
    "Product",
    "QueryDescriptor",
    "ResultPage",
    "SortKey",
    "evaluate",
]
