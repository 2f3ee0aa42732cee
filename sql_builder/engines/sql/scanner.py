"""
Tag scanner: find every ``/*...*/`` tag in a SQL template and classify it.

    /*BEGIN*/            -> BEGIN
    /*IF cond*/          -> IF   (contents = "cond")
    /*FOR item:items*/   -> FOR  (contents = "item:items")
    /*END*/              -> END
    /*anything else*/    -> BIND (contents = property path)

A BIND tag is followed by a dummy value that keeps the template runnable as
plain SQL (``/*name*/'abc'``, ``/*ids*/(1, 2)``, ``/*limit*/100``). The
scanner measures that dummy so the renderer can drop it; ``Tag.end`` of a
BIND covers tag + dummy.

PostgreSQL array binds are written as ``= ANY (/*ids*/ARRAY[1, 2]::int[])``;
the ``::int[]`` cast is captured so it can be re-emitted after the
placeholder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sql_builder.engines.sql.errors import TemplateScanError
from sql_builder.models import TagTypeEnum

TAG_PATTERN = re.compile(r"/\*(.*?)\*/")

_IF_RE = re.compile(r"^IF(?:\s+(.*))?$")
_FOR_RE = re.compile(r"^FOR(?:\s+(.*))?$")
_ARRAY_START_RE = re.compile(r"ARRAY\[", re.IGNORECASE)
_ARRAY_CAST_RE = re.compile(
    r"::[ \t]*[A-Za-z_][\w.]*(?:[ \t]+[A-Za-z_]\w*)*"
    r"[ \t]*(?:\([ \t]*\d+[ \t]*(?:,[ \t]*\d+[ \t]*)?\))?[ \t]*\[\]"
)

_QUOTES = ("'", '"')
_DUMMY_STOP = frozenset(" \t\r\n,")


@dataclass(frozen=True)
class Tag:
    """One tag occurrence. Offsets index into the template string."""

    type: TagTypeEnum
    match: str
    contents: str
    start: int
    end: int
    pg_array: bool = False
    array_cast: str | None = None


# ---------------------------------------------------------------------------
# Dummy value measurement
# ---------------------------------------------------------------------------


def _skip_quoted(template: str, start: int) -> int:
    """Return the index just past the quoted literal opening at *start*.

    A doubled quote (``'it''s'``) does not terminate the literal.
    """
    quote = template[start]
    i = start + 1
    length = len(template)
    while i < length:
        c = template[i]
        if c == quote:
            if i + 1 < length and template[i + 1] == quote:
                i += 2
                continue
            return i + 1
        if c == "\n":
            break
        i += 1
    raise TemplateScanError("Unterminated quote in bind dummy value", template, start)


def _skip_parenthesized(template: str, start: int) -> int:
    """Return the index just past the ``)`` matching the ``(`` at *start*."""
    depth = 0
    i = start
    length = len(template)
    while i < length:
        c = template[i]
        if c in _QUOTES:
            i = _skip_quoted(template, i)
            continue
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        elif c == "\n":
            break
        i += 1
    raise TemplateScanError("Unterminated parenthesis in bind dummy value", template, start)


def _skip_bracketed(template: str, start: int) -> int:
    """Return the index just past the ``]`` matching the ``[`` at *start*."""
    depth = 0
    i = start
    length = len(template)
    while i < length:
        c = template[i]
        if c in _QUOTES:
            i = _skip_quoted(template, i)
            continue
        if c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth == 0:
                return i + 1
        elif c == "\n":
            break
        i += 1
    raise TemplateScanError("Unterminated ARRAY[...] in bind dummy value", template, start)


def measure_dummy(template: str, start: int) -> tuple[int, bool, str | None]:
    """
    Measure the dummy value that begins at *start* (right after a BIND tag).

    Returns ``(end, pg_array, array_cast)``: the end offset of the dummy, whether
    it is a PostgreSQL ``ARRAY[...]`` literal, and its ``::type[]`` cast if any.
    """
    if _ARRAY_START_RE.match(template, start):
        end = _skip_bracketed(template, start + len("ARRAY"))
        cast = _ARRAY_CAST_RE.match(template, end)
        if cast:
            return cast.end(), True, cast.group(0)
        return end, True, None

    i = start
    length = len(template)
    while i < length:
        c = template[i]
        if c in _QUOTES:
            return _skip_quoted(template, i), False, None
        if c == "(":
            return _skip_parenthesized(template, i), False, None
        if c == ")":
            raise TemplateScanError("Closing parenthesis without opening in bind dummy value", template, i)
        if c in _DUMMY_STOP or template.startswith("/*", i) or template.startswith("--", i):
            return i, False, None
        i += 1
    return length, False, None


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def _classify(inner: str) -> tuple[TagTypeEnum, str]:
    if inner == "BEGIN":
        return TagTypeEnum.BEGIN, ""
    m = _IF_RE.match(inner)
    if m:
        return TagTypeEnum.IF, (m.group(1) or "").strip()
    m = _FOR_RE.match(inner)
    if m:
        return TagTypeEnum.FOR, (m.group(1) or "").strip()
    if inner == "END":
        return TagTypeEnum.END, ""
    return TagTypeEnum.BIND, inner


def scan_tags(template: str) -> list[Tag]:
    """Return all tags of *template* in document order.

    Tags that fall inside a BIND tag's dummy value are part of the dummy and
    are not reported.
    """
    tags: list[Tag] = []
    pos = 0
    while True:
        m = TAG_PATTERN.search(template, pos)
        if m is None:
            break
        tag_type, contents = _classify(m.group(1).strip())
        end = m.end()
        pg_array, array_cast = False, None
        if tag_type == TagTypeEnum.BIND:
            end, pg_array, array_cast = measure_dummy(template, end)
        tags.append(
            Tag(
                type=tag_type,
                match=m.group(0),
                contents=contents,
                start=m.start(),
                end=end,
                pg_array=pg_array,
                array_cast=array_cast,
            )
        )
        pos = end
    return tags
