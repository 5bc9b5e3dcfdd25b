from .query import (
    QueryDescriptor,
    SortKey,
)

from .products import Product
from .list_response import (
    StringList,
    ResultPage,
)

__all__ = [
    # Query classes
    "QueryDescriptor",
    "SortKey",
    # Record models
    "Product",
    # List response models
    "StringList",
    "ResultPage",
]
