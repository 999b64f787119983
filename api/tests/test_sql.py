from __future__ import annotations

import re
from types import MappingProxyType

import pytest

from jobly.services.companies import COMPANY_COLUMN_MAP, COMPANY_FILTERS
from jobly.services.errors import RepositoryValidationError
from jobly.services.jobs import JOB_FILTERS
from jobly.services.sql import SqlParams, build_filter_clause, build_set_clause

PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def test_build_set_clause_maps_columns_and_numbers_placeholders() -> None:
    set_sql, values = build_set_clause({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})

    assert set_sql == '"first_name"=$1, "age"=$2'
    assert values == ["Aliya", 32]


def test_build_set_clause_uses_key_when_column_map_is_empty() -> None:
    set_sql, values = build_set_clause({"title": "New title", "salary": None}, {})

    assert set_sql == '"title"=$1, "salary"=$2'
    assert values == ["New title", None]


@pytest.mark.parametrize("column_map", [{}, {"name": "company_name"}, COMPANY_COLUMN_MAP])
def test_build_set_clause_rejects_empty_fields(column_map) -> None:
    with pytest.raises(RepositoryValidationError, match="No data"):
        build_set_clause({}, column_map)


def test_build_set_clause_placeholders_follow_value_order() -> None:
    fields = {"logoUrl": "http://x.img", "name": "X", "numEmployees": 0, "description": "d"}

    set_sql, values = build_set_clause(fields, COMPANY_COLUMN_MAP)

    fragments = set_sql.split(", ")
    positions = [int(PLACEHOLDER_RE.search(fragment).group(1)) for fragment in fragments]
    assert positions == list(range(1, len(fields) + 1))
    assert values == list(fields.values())
    assert fragments[0] == '"logo_url"=$1'
    assert fragments[2] == '"num_employees"=$3'


def test_build_set_clause_does_not_modify_column_map() -> None:
    column_map = MappingProxyType({"numEmployees": "num_employees"})

    build_set_clause({"numEmployees": 3}, column_map)

    assert dict(column_map) == {"numEmployees": "num_employees"}


def test_sql_params_continue_numbering_after_set_clause() -> None:
    set_sql, values = build_set_clause({"name": "New"}, COMPANY_COLUMN_MAP)
    params = SqlParams(list(values))

    assert params.bind("c1") == "$2"
    assert params.values == ["New", "c1"]


def test_build_filter_clause_without_filters_is_empty() -> None:
    assert build_filter_clause({}, COMPANY_FILTERS) == ("", [])
    assert build_filter_clause({"name": None, "min_employees": None}, COMPANY_FILTERS) == ("", [])


def test_build_filter_clause_company_filters_in_fixed_order() -> None:
    where_sql, values = build_filter_clause(
        {"max_employees": 100, "name": "net", "min_employees": 10},
        COMPANY_FILTERS,
    )

    assert where_sql == "where name ilike $1 and num_employees >= $2 and num_employees <= $3"
    assert values == ["%net%", 10, 100]


def test_build_filter_clause_treats_zero_as_a_bound() -> None:
    where_sql, values = build_filter_clause({"min_employees": 0}, COMPANY_FILTERS)

    assert where_sql == "where num_employees >= $1"
    assert values == [0]


def test_build_filter_clause_skips_blank_substring() -> None:
    assert build_filter_clause({"name": "   "}, COMPANY_FILTERS) == ("", [])


def test_build_filter_clause_equity_flag_binds_nothing() -> None:
    where_sql, values = build_filter_clause({"min_salary": 2, "has_equity": True}, JOB_FILTERS)

    assert where_sql == "where j.salary >= $1 and j.equity > 0"
    assert values == [2]


@pytest.mark.parametrize("flag", [False, None, "true", 1])
def test_build_filter_clause_equity_flag_requires_exact_true(flag) -> None:
    where_sql, values = build_filter_clause({"title": "3", "has_equity": flag}, JOB_FILTERS)

    assert where_sql == "where j.title ilike $1"
    assert values == ["%3%"]


@pytest.mark.parametrize(
    "filters",
    [
        {},
        {"has_equity": False},
        {"title": ""},
        {"has_equity": True},
        {"title": "eng", "min_salary": 0, "has_equity": True},
    ],
)
def test_build_filter_clause_never_emits_bare_where(filters) -> None:
    where_sql, values = build_filter_clause(filters, JOB_FILTERS)

    assert where_sql.strip() != "where"
    if where_sql:
        assert where_sql.startswith("where ")
    assert len(PLACEHOLDER_RE.findall(where_sql)) == len(values)
