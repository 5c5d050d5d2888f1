from decimal import Decimal

from sqlalchemy.dialects import postgresql

from services.catalog_service.query_builder import (
    DEFAULT_LIMIT,
    ProductFilters,
    build_product_query,
    parse_id_list,
)


def compile_pg(stmt):
    return stmt.compile(dialect=postgresql.dialect())


def test_parse_id_list_drops_non_numeric_tokens():
    assert parse_id_list("3, 4,abc,,0,-2,7") == [3, 4, 7]
    assert parse_id_list("") == []
    assert parse_id_list(None) == []
    assert parse_id_list("x,y") == []
    assert parse_id_list("3,²,①") == [3]
    assert parse_id_list("٣,4") == [4]


def test_from_query_defaults():
    filters = ProductFilters.from_query()
    assert filters.grade_ids == []
    assert filters.sort == "newest"
    assert filters.page == 1
    assert filters.limit == DEFAULT_LIMIT
    assert filters.offset == 0


def test_from_query_unknown_sort_falls_back_to_newest():
    assert ProductFilters.from_query(sort="title").sort == "newest"
    assert ProductFilters.from_query(sort="price_high").sort == "price_high"


def test_offset_is_derived_from_page_and_limit():
    assert ProductFilters.from_query(page=3, limit=10).offset == 20


def test_blank_search_is_no_constraint():
    assert ProductFilters.from_query(search="   ").search is None


def test_filter_values_are_bound_in_fixed_order():
    filters = ProductFilters.from_query(
        grade_ids="3,4",
        subject_ids="1",
        category_ids="2",
        min_price=Decimal("100"),
        max_price=Decimal("900"),
        search="math",
    )
    compiled = compile_pg(build_product_query(filters))

    filter_params = [
        name for name in compiled.params
        if not name.startswith(("coalesce", "param"))
    ]
    assert filter_params == [
        "grade_id_1",
        "subject_id_1",
        "category_id_1",
        "price_1",
        "price_2",
        "title_1",
        "description_1",
    ]
    assert compiled.params["grade_id_1"] == [3, 4]
    assert compiled.params["price_1"] == Decimal("100")
    assert compiled.params["price_2"] == Decimal("900")


def test_search_text_never_reaches_sql_text():
    hostile = "x'; DROP TABLE products; --"
    compiled = compile_pg(build_product_query(ProductFilters.from_query(search=hostile)))

    assert "DROP TABLE" not in str(compiled)
    assert any("DROP TABLE" in str(value) for value in compiled.params.values())


def test_no_filters_means_no_where_clause():
    sql = str(compile_pg(build_product_query(ProductFilters())))
    assert "WHERE" not in sql
    assert "ORDER BY products.id DESC" in sql


def test_price_sorts_break_ties_by_id():
    sql = str(compile_pg(build_product_query(ProductFilters(sort="price_low"))))
    assert "ORDER BY products.price ASC, products.id DESC" in sql


def test_unlimited_filters_skip_pagination():
    sql = str(compile_pg(build_product_query(ProductFilters(limit=None))))
    assert "LIMIT" not in sql
    assert "OFFSET" not in sql
