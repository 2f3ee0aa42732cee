"""
Literal rendering for generate_sql (no bind parameters).

Turns bind values into SQL literal text with escaping to avoid SQL injection:

* ``None`` / ``UNDEFINED`` -> ``NULL``
* ``str`` -> ``'...'`` with ``'`` doubled and ``\\`` doubled
* ``bool`` -> ``TRUE`` / ``FALSE``
* ``int`` / ``float`` / ``Decimal`` -> plain number (NaN and infinities -> ``NULL``)
* ``date`` / ``datetime`` -> quoted ISO text
* ``dict`` -> quoted JSON
* ``list`` / ``tuple`` -> ``(a,b,c)`` of the above
"""

import json
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sql_builder.core.property_path import UNDEFINED

# Single-quote and backslash escape for SQL strings
_SQL_QUOTE_ESCAPE = str.maketrans({"'": "''", "\\": "\\\\"})


def escape_sql_string(value: str) -> str:
    """Double single quotes and backslashes (no surrounding quotes)."""
    return value.translate(_SQL_QUOTE_ESCAPE)


def sql_string(value: Any) -> str:
    """
    Quote and escape a value as a SQL string. None -> 'NULL' (literal).
    """
    if value is None or value is UNDEFINED:
        return "NULL"
    return f"'{escape_sql_string(str(value))}'"


def sql_bool(value: Any) -> str:
    """TRUE/FALSE works in Postgres, MySQL, SQLite and Trino."""
    if value is None or value is UNDEFINED:
        return "NULL"
    return "TRUE" if bool(value) else "FALSE"


def sql_date(value: date | datetime) -> str:
    """Quoted ISO text: '2025-01-15' or '2025-01-15T12:30:00'."""
    return f"'{value.isoformat()}'"


def sql_json(value: Any) -> str:
    """
    JSON/JSONB: serialize to string and quote-escape. None -> 'NULL'.
    """
    if value is None or value is UNDEFINED:
        return "NULL"
    return sql_string(json.dumps(value, default=str))


def sql_scalar(value: Any) -> str:
    """Render a single (non-list) value as SQL literal text."""
    if value is None or value is UNDEFINED:
        return "NULL"
    if isinstance(value, bool):
        return sql_bool(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(value) if math.isfinite(value) else "NULL"
    if isinstance(value, Decimal):
        return str(value) if value.is_finite() else "NULL"
    if isinstance(value, str):
        return sql_string(value)
    if isinstance(value, date):
        return sql_date(value)
    if isinstance(value, dict):
        return sql_json(value)
    return sql_string(value)


def in_list(value: list[Any] | tuple[Any, ...]) -> str:
    """
    Turn a list into a SQL IN list: ``(1,'a',NULL)``. Only string elements are
    quoted.
    """
    return "(" + ",".join(sql_scalar(v) for v in value) + ")"


def sql_literal(value: Any) -> str:
    """Render any bind value as SQL literal text (lists become IN lists)."""
    if isinstance(value, (list, tuple)):
        return in_list(value)
    return sql_scalar(value)
