"""Turn raw listing parameters (query-string style) into a QueryDescriptor.

Malformed values are rejected with ``QueryValidationError`` rather than
ignored. Parameter names follow the storefront client (``category``,
``search``, ``minPrice``, ``maxPrice``, ``sort``, ``page``, ``limit``); the
QueryDescriptor field names are accepted as well.
"""
from __future__ import annotations

from math import isfinite
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..config import get_config
from .errors import QueryValidationError
from .models import QueryDescriptor, SortKey

PARAM_ALIASES: Dict[str, Tuple[str, ...]] = {
    "category_id": ("category", "categoryId", "category_id"),
    "search_term": ("search", "q", "searchTerm", "search_term"),
    "min_price": ("minPrice", "min_price"),
    "max_price": ("maxPrice", "max_price"),
    "sort_key": ("sort", "sortKey", "sort_key"),
    "page": ("page",),
    "page_size": ("limit", "pageSize", "page_size"),
}

SORT_ALIASES: Dict[str, SortKey] = {
    "price_asc": SortKey.PRICE_ASCENDING,
    "price_desc": SortKey.PRICE_DESCENDING,
    "rating": SortKey.RATING_DESCENDING,
}


def _lookup(params: Mapping[str, Any], field: str) -> Optional[Any]:
    for name in PARAM_ALIASES[field]:
        if name in params:
            value = params[name]
            if isinstance(value, (list, tuple)):
                # repeated query-string keys: last one wins
                value = value[-1] if value else None
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    return None
            return value
    return None


def _parse_price(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError("must be a number") from None
    if not isfinite(number):
        raise ValueError("must be a finite number")
    if number < 0:
        raise ValueError("must not be negative")
    return number


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value))
    except ValueError:
        raise ValueError("must be an integer") from None


def _parse_sort(value: Any) -> SortKey:
    text = str(value).lower()
    if text in SORT_ALIASES:
        return SORT_ALIASES[text]
    try:
        return SortKey(text)
    except ValueError:
        allowed = ", ".join(key.value for key in SortKey)
        raise ValueError(f"must be one of: {allowed}") from None


def parse_query_params(params: Mapping[str, Any]) -> QueryDescriptor:
    """Build a QueryDescriptor from listing parameters.

    Args:
        params: Raw parameters, e.g. a parsed query string. Unknown keys are
            ignored; blank values count as absent.
    Returns:
        QueryDescriptor: Validated descriptor. ``page`` below 1 is clamped to 1.
    Raises:
        QueryValidationError: If a price bound, sort key, page or limit is
            malformed, or min price exceeds max price.
    """
    config = get_config()
    errors: Dict[str, str] = {}
    fields: Dict[str, Any] = {}

    category = _lookup(params, "category_id")
    if category is not None:
        fields["category_id"] = str(category)

    search = _lookup(params, "search_term")
    if search is not None:
        fields["search_term"] = str(search)

    for field, label in (("min_price", "minPrice"), ("max_price", "maxPrice")):
        raw = _lookup(params, field)
        if raw is None:
            continue
        try:
            fields[field] = _parse_price(raw)
        except ValueError as exc:
            errors[label] = str(exc)

    if "min_price" in fields and "max_price" in fields and fields["min_price"] > fields["max_price"]:
        errors["minPrice"] = "must not be greater than maxPrice"

    raw_sort = _lookup(params, "sort_key")
    if raw_sort is not None:
        try:
            fields["sort_key"] = _parse_sort(raw_sort)
        except ValueError as exc:
            errors["sort"] = str(exc)

    raw_page = _lookup(params, "page")
    if raw_page is not None:
        try:
            fields["page"] = max(1, _parse_int(raw_page))
        except ValueError as exc:
            errors["page"] = str(exc)

    raw_limit = _lookup(params, "page_size")
    if raw_limit is None:
        fields["page_size"] = config.default_page_size
    else:
        try:
            limit = _parse_int(raw_limit)
            if limit < 1:
                raise ValueError("must be at least 1")
            if limit > config.max_page_size:
                raise ValueError(f"must be at most {config.max_page_size}")
            fields["page_size"] = limit
        except ValueError as exc:
            errors["limit"] = str(exc)

    if errors:
        raise QueryValidationError(errors)

    try:
        return QueryDescriptor(**fields)
    except ValidationError as exc:
        raise QueryValidationError(
            {".".join(str(loc) for loc in err["loc"]): err["msg"] for err in exc.errors()}
        ) from exc
