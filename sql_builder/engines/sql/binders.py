"""
Placeholder rendering for generate_parameterized_sql.

One collector per render call. ``bind()`` renders the placeholder text for a
value and records the value in ``params``:

    postgres  $1, $2, ...   params: list
    mysql     ?             params: list
    oracle    :name         params: dict
    mssql     @name         params: dict

Lists expand to one placeholder per element: ``($1,$2)``, ``(?,?)``,
``(:ids_0,:ids_1)``.
"""

from __future__ import annotations

import re
from typing import Any

from sql_builder.core.property_path import UNDEFINED
from sql_builder.engines.sql.errors import BindConfigurationError, UnsupportedBindModeError
from sql_builder.models import BindTypeEnum

_OPTIONAL_DOT = re.compile(r"\??\.")
_NON_WORD = re.compile(r"\W")


def param_name(path: str) -> str:
    """``user?.address.city`` -> ``user_address_city``."""
    return _NON_WORD.sub("_", _OPTIONAL_DOT.sub("_", path.strip()))


def _same_value(a: Any, b: Any) -> bool:
    return a is b or (type(a) is type(b) and a == b)


def _driver_value(value: Any) -> Any:
    return None if value is UNDEFINED else value


class BindCollector:
    """Accumulates bind parameters and the ``$N`` counter for one render."""

    def __init__(self, bind_type: BindTypeEnum) -> None:
        self.bind_type = bind_type
        self.next_index = 1
        self.positional_params: list[Any] = []
        self.named_params: dict[str, Any] = {}

    @property
    def params(self) -> list[Any] | dict[str, Any]:
        return self.positional_params if self.bind_type.is_positional else self.named_params

    def _positional(self, value: Any) -> str:
        self.positional_params.append(_driver_value(value))
        if self.bind_type == BindTypeEnum.POSTGRES:
            marker = f"${self.next_index}"
            self.next_index += 1
            return marker
        return "?"

    def _named(self, name: str, value: Any) -> str:
        value = _driver_value(value)
        key = name
        suffix = 0
        # same name bound twice with different values (e.g. inside FOR): keep both
        while key in self.named_params and not _same_value(self.named_params[key], value):
            suffix += 1
            key = f"{name}_{suffix}"
        self.named_params[key] = value
        prefix = ":" if self.bind_type == BindTypeEnum.ORACLE else "@"
        return f"{prefix}{key}"

    def bind(self, path: str, value: Any) -> str:
        """Record *value* and return the placeholder text replacing the tag."""
        if self.bind_type.is_positional:
            if isinstance(value, (list, tuple)):
                return "(" + ",".join(self._positional(v) for v in value) + ")"
            return self._positional(value)

        name = param_name(path)
        if isinstance(value, (list, tuple)):
            return "(" + ",".join(self._named(f"{name}_{i}", v) for i, v in enumerate(value)) + ")"
        return self._named(name, value)

    def bind_array_cast(self, path: str, value: Any, cast: str | None) -> str:
        """
        PostgreSQL ``ANY (/*ids*/ARRAY[...]::int[])``: bind the whole list as one
        parameter and keep the explicit cast: ``$1::int[]``.
        """
        if self.bind_type != BindTypeEnum.POSTGRES:
            raise UnsupportedBindModeError(
                f"ARRAY[...] bind '{path}' is only supported for bind type "
                f"'{BindTypeEnum.POSTGRES.value}', not '{self.bind_type.value}'"
            )
        if not cast:
            raise BindConfigurationError(
                f"ARRAY[...] bind '{path}' requires an explicit cast, e.g. ARRAY[1]::int[]"
            )
        if isinstance(value, tuple):
            value = list(value)
        return self._positional(value) + cast
