from sqlalchemy import column

from app.shared.utils.query import build_query_params, parse_depth, search_clause


def test_defaults():
    params = build_query_params()
    assert params.page == 1
    assert params.limit == 10
    assert params.sort == "createdAt"
    assert params.descending is True
    assert params.search is None
    assert params.depth == 1
    assert params.skip == 0


def test_non_numeric_values_fall_back():
    params = build_query_params(page="abc", limit="xyz", depth="deep")
    assert params.page == 1
    assert params.limit == 10
    assert params.depth == 1


def test_page_floor_and_limit_cap():
    params = build_query_params(page="-3", limit="1000")
    assert params.page == 1
    assert params.limit == 100

    assert build_query_params(limit="0").limit == 10


def test_skip_arithmetic():
    params = build_query_params(page="3", limit="20")
    assert params.skip == 40


def test_order_is_descending_unless_asc():
    assert build_query_params(order="ASC").descending is False
    assert build_query_params(order="sideways").descending is True


def test_search_is_trimmed():
    assert build_query_params(search="  john ").search == "john"
    assert build_query_params(search="   ").search is None


def test_parse_depth_is_clamped():
    assert parse_depth("0") == 0
    assert parse_depth("9") == 2
    assert parse_depth("-1") == 0


def test_search_clause_needs_a_term():
    assert search_clause([column("name")], None) is None
    assert search_clause([], "john") is None


def test_search_clause_escapes_wildcards():
    clause = search_clause([column("name"), column("email")], "50%_off")
    compiled = clause.compile()
    assert "%50\\%\\_off%" in compiled.params.values()
    assert " OR " in str(compiled)
