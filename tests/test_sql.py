"""
Unit tests for the SQL fragment builders.

Tests cover:
- Partial update SET clauses and placeholder numbering
- Job filter WHERE clauses
- Company filter WHERE clauses
"""

import re

import pytest

from app.core.exceptions import BadRequestError
from app.core.sql import sql_for_company_filters, sql_for_job_filters, sql_for_partial_update


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_company_update(self):
        """Aliased keys map to columns, the rest are used verbatim"""
        result = sql_for_partial_update(
            {
                "handle": "new",
                "name": "New",
                "description": "New Description",
                "numEmployees": 1,
                "logoUrl": "http://new.img",
            },
            {"numEmployees": "num_employees", "logoUrl": "logo_url"},
        )

        assert result.set_cols == (
            '"handle"=$1, "name"=$2, "description"=$3, "num_employees"=$4, "logo_url"=$5'
        )
        assert result.values == ["new", "New", "New Description", 1, "http://new.img"]

    def test_placeholders_align_with_values(self):
        """Fragment i holds $i and binds values[i-1]"""
        data = {"b": 2, "a": None, "firstName": "Aliya", "z": "last"}
        result = sql_for_partial_update(data, {"firstName": "first_name"})

        fragments = result.set_cols.split(", ")
        assert len(fragments) == len(result.values) == len(data)
        for i, fragment in enumerate(fragments, start=1):
            assert fragment.endswith(f"=${i}")
        assert result.values == [2, None, "Aliya", "last"]
        assert fragments[2] == '"first_name"=$3'

    def test_insertion_order_is_kept(self):
        result = sql_for_partial_update({"salary": 1, "title": "t"}, {})
        assert result.set_cols == '"salary"=$1, "title"=$2'

    def test_empty_data_is_bad_request(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"numEmployees": "num_employees"})
        assert exc_info.value.message == "No data"
        assert exc_info.value.status_code == 400

    def test_allowed_columns(self):
        """Resolved column names are checked against the allowlist"""
        result = sql_for_partial_update(
            {"companyHandle": "c2"},
            {"companyHandle": "company_handle"},
            allowed_columns={"company_handle"},
        )
        assert result.set_cols == '"company_handle"=$1'

        with pytest.raises(BadRequestError):
            sql_for_partial_update(
                {'id" = 1; --': 1},
                {},
                allowed_columns={"title"},
            )


class TestJobFilters:
    """Tests for sql_for_job_filters"""

    def test_no_filters(self):
        assert sql_for_job_filters({}) == ("", [])

    def test_absent_and_falsy_filters_are_skipped(self):
        criteria = {"title": None, "minSalary": None, "hasEquity": None}
        assert sql_for_job_filters(criteria) == ("", [])
        assert sql_for_job_filters({"title": "", "minSalary": 0}) == ("", [])

    def test_title(self):
        where_sql, values = sql_for_job_filters({"title": "j1"})
        assert where_sql == "WHERE title ILIKE $1"
        assert values == ["%j1%"]

    def test_all_filters_in_fixed_order(self):
        where_sql, values = sql_for_job_filters(
            {"hasEquity": "true", "minSalary": 100001, "title": "j1"}
        )
        assert where_sql == "WHERE title ILIKE $1 AND salary >= $2 AND equity > $3"
        assert values == ["%j1%", 100001, 0]

    def test_numbering_follows_emitted_predicates(self):
        where_sql, values = sql_for_job_filters({"minSalary": 5, "hasEquity": True})
        assert where_sql == "WHERE salary >= $1 AND equity > $2"
        assert values == [5, 0]

    @pytest.mark.parametrize("flag", ["false", False, "True", 1, "yes"])
    def test_equity_requires_literal_true(self, flag):
        assert sql_for_job_filters({"hasEquity": flag}) == ("", [])

    def test_placeholder_count_matches_values(self):
        where_sql, values = sql_for_job_filters({"title": "x", "hasEquity": True})
        assert re.findall(r"\$(\d+)", where_sql) == ["1", "2"]
        assert len(values) == 2


class TestCompanyFilters:
    """Tests for sql_for_company_filters"""

    def test_no_filters(self):
        assert sql_for_company_filters({}) == ("", [])

    def test_strict_bounds(self):
        where_sql, values = sql_for_company_filters({"minEmployees": 10, "maxEmployees": 20})
        assert where_sql == "WHERE num_employees > $1 AND num_employees < $2"
        assert values == [10, 20]

    def test_all_filters(self):
        where_sql, values = sql_for_company_filters(
            {"maxEmployees": 3, "name": "net", "minEmployees": 1}
        )
        assert where_sql == (
            "WHERE name ILIKE $1 AND num_employees > $2 AND num_employees < $3"
        )
        assert values == ["%net%", 1, 3]
