"""Filter, sort and paginate a catalog snapshot.

``evaluate`` is pure: it reads the products it is given and returns a fresh
``ResultPage``. Nothing is cached between calls and no product is modified.
"""
from __future__ import annotations

from math import ceil
from typing import Callable, Dict, List, Sequence, Tuple

from .models import Product, QueryDescriptor, ResultPage, SortKey
from ..logging import get_logger

logger = get_logger(__name__)

# sort key -> (field accessor, descending)
_ORDERINGS: Dict[SortKey, Tuple[Callable[[Product], object], bool]] = {
    SortKey.NEWEST: (lambda p: p.created_at, True),
    SortKey.PRICE_ASCENDING: (lambda p: p.price, False),
    SortKey.PRICE_DESCENDING: (lambda p: p.price, True),
    SortKey.RATING_DESCENDING: (lambda p: p.rating, True),
}


def _matches(product: Product, query: QueryDescriptor, term: str) -> bool:
    if query.category_id is not None and product.category_id != query.category_id:
        return False
    if term and term not in product.name.lower() and term not in product.description.lower():
        return False
    if query.min_price is not None and product.price < query.min_price:
        return False
    if query.max_price is not None and product.price > query.max_price:
        return False
    return True


def filter_products(catalog: Sequence[Product], query: QueryDescriptor) -> List[Product]:
    """Return the products satisfying every active filter, in catalog order."""
    term = (query.search_term or "").lower()
    return [product for product in catalog if _matches(product, query, term)]


def sort_products(products: Sequence[Product], sort_key: SortKey) -> List[Product]:
    """Stable sort by a single key; equal keys keep their relative order."""
    accessor, descending = _ORDERINGS[sort_key]
    # sorted() stays stable with reverse=True
    return sorted(products, key=accessor, reverse=descending)


def paginate(products: Sequence[Product], page: int, page_size: int) -> ResultPage:
    page = max(1, page)
    page_size = max(1, page_size)
    total = len(products)
    start = (page - 1) * page_size
    return ResultPage(
        items=list(products[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_matching=total,
        total_pages=max(0, ceil(total / page_size)),
    )


def evaluate(catalog: Sequence[Product], query: QueryDescriptor) -> ResultPage:
    """Run the catalog through filtering, sorting and pagination.

    Args:
        catalog: Products in catalog order. Not modified.
        query: Filters, ordering and page to produce.
    Returns:
        ResultPage: The requested page and its pagination metadata. A page
        past the end of the matches has no items but keeps the totals.
    """
    matched = filter_products(catalog, query)
    ordered = sort_products(matched, query.sort_key)
    result = paginate(ordered, query.page, query.page_size)
    logger.debug(
        f"evaluate: catalog={len(catalog)} matched={result.total_matching} "
        f"sort={query.sort_key.value} page={result.page}/{result.total_pages} size={result.page_size}"
    )
    return result
