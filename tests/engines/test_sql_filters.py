"""Unit tests for engines.sql.filters."""

from datetime import date, datetime
from decimal import Decimal

from sql_builder.core.property_path import UNDEFINED
from sql_builder.engines.sql.filters import (
    escape_sql_string,
    in_list,
    sql_bool,
    sql_date,
    sql_json,
    sql_literal,
    sql_scalar,
    sql_string,
)


class TestSqlString:
    def test_none(self):
        assert sql_string(None) == "NULL"
        assert sql_string(UNDEFINED) == "NULL"

    def test_plain(self):
        assert sql_string("hello") == "'hello'"

    def test_quote_escape(self):
        assert sql_string("a'b'c") == "'a''b''c'"

    def test_backslash_escape(self):
        assert sql_string("a\\b\\c") == "'a\\\\b\\\\c'"

    def test_escape_without_quotes(self):
        assert escape_sql_string("it's") == "it''s"


class TestSqlBool:
    def test_values(self):
        assert sql_bool(True) == "TRUE"
        assert sql_bool(False) == "FALSE"
        assert sql_bool(None) == "NULL"


class TestSqlDate:
    def test_date(self):
        assert sql_date(date(2025, 1, 15)) == "'2025-01-15'"

    def test_datetime(self):
        assert sql_date(datetime(2025, 1, 15, 12, 30, 0)) == "'2025-01-15T12:30:00'"


class TestSqlJson:
    def test_dict(self):
        assert sql_json({"a": 1}) == "'{\"a\": 1}'"

    def test_quote_inside(self):
        assert sql_json({"a": "it's"}) == "'{\"a\": \"it''s\"}'"

    def test_none(self):
        assert sql_json(None) == "NULL"


class TestSqlScalar:
    def test_numbers_not_quoted(self):
        assert sql_scalar(42) == "42"
        assert sql_scalar(-1.5) == "-1.5"
        assert sql_scalar(Decimal("10.25")) == "10.25"

    def test_non_finite_numbers_are_null(self):
        assert sql_scalar(float("nan")) == "NULL"
        assert sql_scalar(float("inf")) == "NULL"
        assert sql_scalar(float("-inf")) == "NULL"
        assert sql_scalar(Decimal("NaN")) == "NULL"
        assert sql_scalar(Decimal("Infinity")) == "NULL"

    def test_bool_before_int(self):
        assert sql_scalar(True) == "TRUE"

    def test_null(self):
        assert sql_scalar(None) == "NULL"
        assert sql_scalar(UNDEFINED) == "NULL"

    def test_date(self):
        assert sql_scalar(date(2024, 2, 29)) == "'2024-02-29'"

    def test_other_objects_quoted(self):
        class Code:
            def __str__(self) -> str:
                return "x'y"

        assert sql_scalar(Code()) == "'x''y'"


class TestInList:
    def test_ints(self):
        assert in_list([1, 2, 3]) == "(1,2,3)"

    def test_strings(self):
        assert in_list(["a", "b'c"]) == "('a','b''c')"

    def test_mixed_with_null(self):
        assert in_list([1, "a", None]) == "(1,'a',NULL)"

    def test_empty(self):
        assert in_list([]) == "()"


class TestSqlLiteral:
    def test_list_and_tuple(self):
        assert sql_literal([1, 2]) == "(1,2)"
        assert sql_literal(("x",)) == "('x')"

    def test_scalar(self):
        assert sql_literal("abc") == "'abc'"
