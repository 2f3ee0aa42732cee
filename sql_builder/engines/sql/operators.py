"""
JavaScript-style value semantics for IF conditions.

Conditions are written the way the template authors think about values:
``==`` coerces across types, ``===`` does not, ``&&``/``||`` return one of
their operands, and ``[]`` / ``{}`` are truthy while ``0``, ``''``, ``null``,
``undefined`` and ``NaN`` are falsy.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from sql_builder.core.property_path import UNDEFINED

_NUMERIC_STRING = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_UNDEFINED_T = "undefined"
_NULL_T = "null"
_BOOLEAN_T = "boolean"
_NUMBER_T = "number"
_STRING_T = "string"
_OBJECT_T = "object"


def js_type(value: Any) -> str:
    if value is UNDEFINED:
        return _UNDEFINED_T
    if value is None:
        return _NULL_T
    if isinstance(value, bool):
        return _BOOLEAN_T
    if isinstance(value, (int, float, Decimal)):
        return _NUMBER_T
    if isinstance(value, str):
        return _STRING_T
    return _OBJECT_T


def is_truthy(value: Any) -> bool:
    """Falsy: False, 0, NaN, '', None, UNDEFINED. Everything else is truthy."""
    t = js_type(value)
    if t in (_UNDEFINED_T, _NULL_T):
        return False
    if t == _BOOLEAN_T:
        return value
    if t == _NUMBER_T:
        return value != 0 and not _is_nan(value)
    if t == _STRING_T:
        return value != ""
    return True


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_string(value: Any) -> str:
    t = js_type(value)
    if t == _UNDEFINED_T:
        return "undefined"
    if t == _NULL_T:
        return "null"
    if t == _BOOLEAN_T:
        return "true" if value else "false"
    if t == _NUMBER_T:
        return _format_number(value)
    if t == _STRING_T:
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(
            "" if v is None or v is UNDEFINED else to_string(v) for v in value
        )
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def to_number(value: Any) -> float | int | Decimal:
    t = js_type(value)
    if t == _UNDEFINED_T:
        return math.nan
    if t == _NULL_T:
        return 0
    if t == _BOOLEAN_T:
        return 1 if value else 0
    if t == _NUMBER_T:
        return value
    if t == _OBJECT_T:
        return to_number(to_string(value))
    s = value.strip()
    if not s:
        return 0
    if s in ("Infinity", "+Infinity"):
        return math.inf
    if s == "-Infinity":
        return -math.inf
    if _NUMERIC_STRING.match(s):
        return float(s)
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    """``===``: same type and same value; containers compare by identity."""
    lt = js_type(left)
    if lt != js_type(right):
        return False
    if lt == _OBJECT_T:
        if isinstance(left, (list, dict, set)) or isinstance(right, (list, dict, set)):
            return left is right
        return type(left) is type(right) and left == right
    return left == right


def loose_equals(left: Any, right: Any) -> bool:
    """``==``: null == undefined, numbers/strings/booleans coerce to number."""
    lt, rt = js_type(left), js_type(right)
    if lt == rt:
        return strict_equals(left, right)
    nullish = (_NULL_T, _UNDEFINED_T)
    if lt in nullish and rt in nullish:
        return True
    if lt in nullish or rt in nullish:
        return False
    if lt == _BOOLEAN_T:
        return loose_equals(to_number(left), right)
    if rt == _BOOLEAN_T:
        return loose_equals(left, to_number(right))
    if lt == _NUMBER_T and rt == _STRING_T:
        return left == to_number(right)
    if lt == _STRING_T and rt == _NUMBER_T:
        return to_number(left) == right
    if lt == _OBJECT_T:
        return loose_equals(to_string(left), right)
    if rt == _OBJECT_T:
        return loose_equals(left, to_string(right))
    return False


def _relational(left: Any, right: Any, cmp: Callable[[Any, Any], bool]) -> bool:
    # dates are compared natively, the way JS compares Date.valueOf()
    if isinstance(left, date) and isinstance(right, date) and type(left) is type(right):
        return cmp(left, right)
    if js_type(left) == _OBJECT_T:
        left = to_string(left)
    if js_type(right) == _OBJECT_T:
        right = to_string(right)
    if isinstance(left, str) and isinstance(right, str):
        return cmp(left, right)
    ln, rn = to_number(left), to_number(right)
    if _is_nan(ln) or _is_nan(rn):
        return False
    if isinstance(ln, Decimal) != isinstance(rn, Decimal):
        ln, rn = float(ln), float(rn)
    return cmp(ln, rn)


def logical_and(left: Any, right: Any) -> Any:
    return right if is_truthy(left) else left


def logical_or(left: Any, right: Any) -> Any:
    return left if is_truthy(left) else right


def logical_not(operand: Any) -> bool:
    return not is_truthy(operand)


BINARY_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "==": loose_equals,
    "!=": lambda a, b: not loose_equals(a, b),
    "===": strict_equals,
    "!==": lambda a, b: not strict_equals(a, b),
    "<": lambda a, b: _relational(a, b, lambda x, y: x < y),
    "<=": lambda a, b: _relational(a, b, lambda x, y: x <= y),
    ">": lambda a, b: _relational(a, b, lambda x, y: x > y),
    ">=": lambda a, b: _relational(a, b, lambda x, y: x >= y),
    "&&": logical_and,
    "||": logical_or,
}

UNARY_OPERATORS: dict[str, Callable[[Any], Any]] = {
    "!": logical_not,
}
