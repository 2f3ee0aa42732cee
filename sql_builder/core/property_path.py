"""
Property path resolution against a bind entity.

Paths use ``.`` for member access and ``?.`` for guarded access, e.g.
``user.address?.city``. Lookups never raise: a missing key (or a ``None``
intermediate) resolves to the ``UNDEFINED`` sentinel, which is distinct from a
key that is present with value ``None``.

Supported containers:
- mappings (``dict`` and any ``Mapping``): key lookup
- lists/tuples: numeric index segments and the ``length`` pseudo-property
- strings: the ``length`` pseudo-property
- other objects: public attributes (dataclasses, pydantic models, namespaces)
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any

_PATH_SPLIT = re.compile(r"(\?\.)|\.")
_OPTIONAL = "?."


class _UndefinedType:
    """Sentinel for "no such property". Falsy, singleton."""

    _instance: _UndefinedType | None = None

    def __new__(cls) -> _UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> _UndefinedType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _UndefinedType:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _UndefinedType()


def split_path(path: str) -> list[str]:
    """Split ``a?.b.c`` into member names, dropping the ``?.`` markers."""
    parts = [p for p in _PATH_SPLIT.split(path.strip()) if p]
    return [p for p in parts if p != _OPTIONAL]


def _lookup(obj: Any, key: str) -> tuple[bool, Any]:
    if isinstance(obj, Mapping):
        if key in obj:
            return True, obj[key]
        return False, UNDEFINED
    if isinstance(obj, str):
        if key == "length":
            return True, len(obj)
        return False, UNDEFINED
    if isinstance(obj, (list, tuple)):
        if key == "length":
            return True, len(obj)
        if key.isdigit() and int(key) < len(obj):
            return True, obj[int(key)]
        return False, UNDEFINED
    if isinstance(obj, (bool, int, float)) or key.startswith("_"):
        return False, UNDEFINED
    if hasattr(obj, key):
        return True, getattr(obj, key)
    return False, UNDEFINED


class LoopScope(Mapping):
    """
    Read-only view used inside a FOR loop: *name* resolves to the current
    item, every other top-level name falls through to *parent* (a mapping or
    any object with public attributes).
    """

    def __init__(self, parent: Any, name: str, value: Any) -> None:
        self.parent = parent
        self.name = name
        self.value = value

    def __getitem__(self, key: str) -> Any:
        if key == self.name:
            return self.value
        found, value = _lookup(self.parent, key)
        if not found:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        if key == self.name:
            return True
        return isinstance(key, str) and _lookup(self.parent, key)[0]

    def __iter__(self) -> Iterator[str]:
        yield self.name
        if isinstance(self.parent, Mapping):
            yield from (k for k in self.parent if k != self.name)

    def __len__(self) -> int:
        return sum(1 for _ in self)


def _resolve(entity: Any, path: str) -> tuple[bool, Any]:
    keys = split_path(path)
    if not keys:
        return False, UNDEFINED
    obj = entity
    for key in keys:
        if obj is None or obj is UNDEFINED:
            return False, UNDEFINED
        found, obj = _lookup(obj, key)
        if not found:
            return False, UNDEFINED
    return True, obj


def get_property(entity: Any, path: str) -> Any:
    """
    Return the value at *path* in *entity*, or ``UNDEFINED`` if any segment is
    missing. A present ``None`` is returned as ``None``.
    """
    return _resolve(entity, path)[1]


def has_property(entity: Any, path: str) -> bool:
    """True if every segment of *path* exists (the final value may be None)."""
    return _resolve(entity, path)[0]


def describe_entity(entity: Any) -> list[str] | str:
    """Top-level keys of a mapping entity, or the type name of any other entity (for logs)."""
    if isinstance(entity, Mapping):
        return list(entity.keys())
    return type(entity).__name__
