"""Property-based tests for block nesting, FOR expansion, escaping and binding."""

from hypothesis import given, settings
from hypothesis import strategies as st

from sql_builder import SQLBuilder
from sql_builder.engines.sql.condition import evaluate_condition
from tests.utils.sql import format_sql

flags_strategy = st.lists(st.booleans(), max_size=5)


def _nested_template(outer: list[bool], inner: list[bool]) -> str:
    outer_ifs = "".join(f"/*IF o{i}*/ AND o{i}/*END*/" for i in range(len(outer)))
    inner_ifs = "".join(f"/*IF n{j}*/ OR n{j}/*END*/" for j in range(len(inner)))
    return (
        "SELECT 1 /*BEGIN*/WHERE 1=1"
        + outer_ifs
        + "/*BEGIN*/ AND (0=1"
        + inner_ifs
        + ")/*END*/"
        + "/*END*/"
    )


@settings(max_examples=200)
@given(outer=flags_strategy, inner=st.lists(st.booleans(), min_size=1, max_size=5))
def test_nested_begin_keeps_text_only_when_a_guard_holds(outer, inner):
    entity = {f"o{i}": v for i, v in enumerate(outer)}
    entity.update({f"n{j}": v for j, v in enumerate(inner)})
    sql = SQLBuilder().generate_sql(_nested_template(outer, inner), entity)

    inner_kept = any(inner)
    if not (any(outer) or inner_kept):
        assert format_sql(sql) == "SELECT 1"
        return
    expected = "SELECT 1 WHERE 1=1" + "".join(f" AND o{i}" for i, v in enumerate(outer) if v)
    if inner_kept:
        expected += " AND (0=1" + "".join(f" OR n{j}" for j, v in enumerate(inner) if v) + ")"
    assert sql == expected


@given(values=st.lists(st.integers(min_value=-(10**6), max_value=10**6), max_size=8))
def test_for_repeats_once_per_element(values):
    sql = SQLBuilder().generate_sql("SELECT 0 /*FOR v:vs*/UNION SELECT /*v*/1/*END*/", {"vs": values})
    assert sql == "SELECT 0 " + "".join(f"UNION SELECT {v}\n" for v in values)
    assert sql.count("\n") == len(values)


@given(value=st.text(max_size=40))
def test_literal_string_is_escaped(value):
    sql = SQLBuilder().generate_sql("SELECT /*s*/'x'", {"s": value})
    assert sql == "SELECT '" + value.replace("\\", "\\\\").replace("'", "''") + "'"


@given(ids=st.lists(st.integers(), min_size=1, max_size=10), other=st.integers())
def test_positional_placeholders_are_consecutive(ids, other):
    t = "WHERE a IN /*ids*/(1) AND b = /*other*/1"
    sql, params = SQLBuilder().generate_parameterized_sql(t, {"ids": ids, "other": other}, "postgres")
    n = len(ids)
    assert sql == "WHERE a IN (" + ",".join(f"${i}" for i in range(1, n + 1)) + f") AND b = ${n + 1}"
    assert params == [*ids, other]


@given(ids=st.lists(st.integers(), min_size=1, max_size=10))
def test_named_placeholders_are_suffixed(ids):
    sql, params = SQLBuilder().generate_parameterized_sql("WHERE a IN /*ids*/(1)", {"ids": ids}, "mssql")
    assert sql == "WHERE a IN (" + ",".join(f"@ids_{i}" for i in range(len(ids))) + ")"
    assert params == {f"ids_{i}": v for i, v in enumerate(ids)}


@given(a=st.booleans(), b=st.booleans(), c=st.booleans())
def test_and_binds_tighter_than_or(a, b, c):
    assert evaluate_condition("(a || b && c)", {"a": a, "b": b, "c": c}) is (a or (b and c))


@given(x=st.integers(min_value=-1000, max_value=1000), y=st.integers(min_value=-1000, max_value=1000))
def test_relational_and_loose_equality(x, y):
    entity = {"x": x, "y": y, "ys": str(y)}
    assert evaluate_condition("x < y", entity) is (x < y)
    assert evaluate_condition("x >= y", entity) is (x >= y)
    assert evaluate_condition("x == ys", entity) is (x == y)
    assert evaluate_condition("y === ys", entity) is False
