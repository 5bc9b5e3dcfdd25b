from datetime import datetime, timedelta
from math import ceil

import pytest
from shopcatalog.data.models import Product, QueryDescriptor, SortKey
from shopcatalog.data.pipeline import evaluate

CREATED = datetime(2024, 1, 1, 12, 0, 0)


def make_product(pid, price, rating, category, name=None, description="", created_at=CREATED):
    return Product(
        id=pid,
        name=name or f"Product {pid}",
        description=description,
        price=price,
        category_id=category,
        stock=10,
        rating=rating,
        created_at=created_at,
    )


@pytest.fixture
def catalog():
    return [
        make_product("A", 10, 4, "x"),
        make_product("B", 30, 2, "y"),
        make_product("C", 20, 5, "x"),
        make_product("D", 5, 1, "x"),
        make_product("E", 50, 3, "y"),
    ]


def ids(page):
    return [p.id for p in page.items]


def test_category_filter_defaults_to_catalog_order_on_created_ties(catalog):
    page = evaluate(catalog, QueryDescriptor(category_id="x", page=1, page_size=2))
    assert ids(page) == ["A", "C"]
    assert page.total_matching == 3
    assert page.total_pages == 2


def test_price_ascending(catalog):
    page = evaluate(catalog, QueryDescriptor(sort_key=SortKey.PRICE_ASCENDING, page=1, page_size=3))
    assert ids(page) == ["D", "A", "C"]
    assert page.total_matching == 5
    assert page.total_pages == 2


def test_rating_descending_second_page(catalog):
    page = evaluate(catalog, QueryDescriptor(sort_key=SortKey.RATING_DESCENDING, page=2, page_size=2))
    assert ids(page) == ["E", "B"]


def test_price_range(catalog):
    page = evaluate(catalog, QueryDescriptor(min_price=15, max_price=35))
    assert sorted(ids(page)) == ["B", "C"]
    assert page.total_matching == 2


def test_unmatched_search_is_empty(catalog):
    page = evaluate(catalog, QueryDescriptor(search_term="nothing like this"))
    assert page.items == []
    assert page.total_matching == 0
    assert page.total_pages == 0


def test_page_past_the_end(catalog):
    page = evaluate(catalog, QueryDescriptor(page=99, page_size=2))
    assert page.items == []
    assert page.total_matching == 5
    assert page.total_pages == 3
    assert page.page == 99


def test_conflicting_price_bounds_match_nothing(catalog):
    page = evaluate(catalog, QueryDescriptor(min_price=40, max_price=10))
    assert page.items == []
    assert page.total_pages == 0


def test_price_bounds_are_inclusive(catalog):
    page = evaluate(catalog, QueryDescriptor(min_price=10, max_price=20, sort_key=SortKey.PRICE_ASCENDING))
    assert ids(page) == ["A", "C"]


def test_category_match_is_exact_and_case_sensitive(catalog):
    assert evaluate(catalog, QueryDescriptor(category_id="X")).total_matching == 0
    uncategorized = catalog + [make_product("F", 1, 0, None)]
    assert evaluate(uncategorized, QueryDescriptor(category_id="x")).total_matching == 3


def test_search_covers_name_and_description_case_insensitively():
    catalog = [
        make_product("1", 5, 0, "a", name="Wireless Mouse"),
        make_product("2", 5, 0, "a", name="Desk Lamp", description="Warm LED light, works with a MOUSE pad"),
        make_product("3", 5, 0, "a", name="Notebook"),
    ]
    page = evaluate(catalog, QueryDescriptor(search_term="mOuSe"))
    assert ids(page) == ["1", "2"]


def test_empty_search_term_is_not_applied(catalog):
    assert evaluate(catalog, QueryDescriptor(search_term="")).total_matching == 5


def test_filters_are_conjunctive(catalog):
    page = evaluate(catalog, QueryDescriptor(category_id="x", min_price=8, max_price=25))
    assert sorted(ids(page)) == ["A", "C"]
    for product in page.items:
        assert product.category_id == "x"
        assert 8 <= product.price <= 25


def test_newest_first():
    catalog = [
        make_product("old", 1, 0, None, created_at=CREATED),
        make_product("new", 1, 0, None, created_at=CREATED + timedelta(days=2)),
        make_product("mid", 1, 0, None, created_at=CREATED + timedelta(days=1)),
    ]
    assert ids(evaluate(catalog, QueryDescriptor())) == ["new", "mid", "old"]


def test_newest_first_with_naive_and_aware_timestamps():
    catalog = [
        Product(id="aware", name="Aware", price=1, created_at="2024-01-01T00:00:00Z"),
        Product(id="naive", name="Naive", price=1, created_at="2024-01-02T00:00:00"),
        Product(id="offset", name="Offset", price=1, created_at="2024-01-01T12:00:00-05:00"),
    ]
    assert ids(evaluate(catalog, QueryDescriptor())) == ["naive", "offset", "aware"]


def test_descending_sorts_keep_catalog_order_on_ties():
    catalog = [
        make_product("p1", 10, 3, None),
        make_product("p2", 20, 3, None),
        make_product("p3", 10, 3, None),
        make_product("p4", 20, 4, None),
    ]
    by_price = evaluate(catalog, QueryDescriptor(sort_key=SortKey.PRICE_DESCENDING))
    assert ids(by_price) == ["p2", "p4", "p1", "p3"]
    by_rating = evaluate(catalog, QueryDescriptor(sort_key=SortKey.RATING_DESCENDING))
    assert ids(by_rating) == ["p4", "p1", "p2", "p3"]


def test_page_and_page_size_are_clamped(catalog):
    page = evaluate(catalog, QueryDescriptor(page=0, page_size=0, sort_key=SortKey.PRICE_ASCENDING))
    assert page.page == 1
    assert page.page_size == 1
    assert ids(page) == ["D"]
    assert page.total_pages == 5

    negative = evaluate(catalog, QueryDescriptor(page=-3, page_size=2))
    assert negative.page == 1
    assert len(negative.items) == 2


@pytest.fixture
def larger_catalog():
    # repeated prices and ratings so ties span page boundaries
    return [
        make_product(
            f"p{i:02d}",
            price=(i * 7) % 5 * 10,
            rating=(i * 3) % 6,
            category="even" if i % 2 == 0 else "odd",
            created_at=CREATED + timedelta(hours=i % 4),
        )
        for i in range(23)
    ]


@pytest.mark.parametrize("sort_key", list(SortKey))
@pytest.mark.parametrize("page_size", [1, 3, 5, 23, 50])
def test_pages_concatenate_to_full_sequence(larger_catalog, sort_key, page_size):
    full = evaluate(larger_catalog, QueryDescriptor(sort_key=sort_key, page_size=len(larger_catalog)))
    first = evaluate(larger_catalog, QueryDescriptor(sort_key=sort_key, page_size=page_size))

    collected = []
    for page_number in range(1, first.total_pages + 2):
        page = evaluate(larger_catalog, QueryDescriptor(sort_key=sort_key, page=page_number, page_size=page_size))
        assert len(page.items) <= page_size
        if page_number > page.total_pages:
            assert page.items == []
        collected.extend(page.items)

    assert [p.id for p in collected] == ids(full)
    assert len(collected) == full.total_matching
    assert first.total_pages == ceil(full.total_matching / page_size)


@pytest.mark.parametrize(
    "query",
    [
        QueryDescriptor(category_id="even", page_size=4),
        QueryDescriptor(min_price=10, max_price=30, sort_key=SortKey.RATING_DESCENDING),
        QueryDescriptor(search_term="p1", sort_key=SortKey.PRICE_DESCENDING, page=2, page_size=3),
        QueryDescriptor(category_id="none"),
    ],
)
def test_result_metadata_is_consistent(larger_catalog, query):
    page = evaluate(larger_catalog, query)
    assert page.total_pages == ceil(page.total_matching / page.page_size)
    assert (page.total_pages == 0) == (page.total_matching == 0)
    for product in page.items:
        if query.category_id is not None:
            assert product.category_id == query.category_id
        if query.min_price is not None:
            assert product.price >= query.min_price
        if query.max_price is not None:
            assert product.price <= query.max_price
        if query.search_term:
            assert query.search_term.lower() in product.name.lower() + " " + product.description.lower()


def test_evaluate_is_idempotent_and_does_not_touch_the_catalog(larger_catalog):
    before = list(larger_catalog)
    query = QueryDescriptor(sort_key=SortKey.PRICE_ASCENDING, page=2, page_size=4)
    assert evaluate(larger_catalog, query) == evaluate(larger_catalog, query)
    assert larger_catalog == before


def test_accepts_tuple_snapshot(catalog):
    page = evaluate(tuple(catalog), QueryDescriptor(page_size=2))
    assert ids(page) == ["A", "B"]
