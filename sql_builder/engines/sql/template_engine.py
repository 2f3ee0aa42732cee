"""
SQL builder: render 2-way SQL templates with a bind entity.

Templates stay runnable as plain SQL; directives live in comments:

    SELECT * FROM activity
    /*BEGIN*/WHERE
      1 = 1
      /*IF projectNames.length*/AND project_name IN /*projectNames*/('project1')/*END*/
      /*IF status != null*/AND status = /*status*/1/*END*/
    /*END*/

``generate_sql`` inlines escaped literals; ``generate_parameterized_sql``
emits dialect placeholders and returns the bind parameters alongside.

Every call scans and structures the template from scratch; nothing is
cached or shared between calls, so one SQLBuilder can serve many threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sql_builder.core.config import SQLBuilderSettings
from sql_builder.core.property_path import LoopScope, describe_entity, get_property, has_property
from sql_builder.engines.sql.binders import BindCollector
from sql_builder.engines.sql.condition import evaluate_condition
from sql_builder.engines.sql.errors import (
    BindConfigurationError,
    SQLBuilderError,
    UnknownPropertyError,
    UnsupportedBindModeError,
    UnsupportedBindTypeError,
)
from sql_builder.engines.sql.filters import sql_literal
from sql_builder.engines.sql.parser import BlockNode, parse_parameters, parse_template, split_for_contents
from sql_builder.engines.sql.scanner import TAG_PATTERN, Tag
from sql_builder.models import BindTypeEnum, TagTypeEnum

_log = logging.getLogger(__name__)

_GUARD_TYPES = (TagTypeEnum.IF, TagTypeEnum.FOR)


def coerce_bind_type(value: BindTypeEnum | str) -> BindTypeEnum:
    """Accept an enum member or its (case-insensitive) string value."""
    if isinstance(value, BindTypeEnum):
        return value
    if isinstance(value, str):
        try:
            return BindTypeEnum(value.strip().lower())
        except ValueError as e:
            supported = ", ".join(b.value for b in BindTypeEnum)
            raise UnsupportedBindTypeError(
                f"Unsupported bind type: {value!r}. Supported: {supported}"
            ) from e
    raise UnsupportedBindTypeError(f"Unsupported bind type: {value!r}")


@dataclass
class _RenderState:
    """Per-call state threaded through the recursive render."""

    template: str
    collector: BindCollector | None = None
    pos: int = 0
    # IF/FOR: guard held on last visit; BEGIN: body was kept on last visit
    outcomes: dict[BlockNode, bool] = field(default_factory=dict)


def _has_guards(node: BlockNode) -> bool:
    return any(
        c.type in _GUARD_TYPES or (c.type == TagTypeEnum.BEGIN and _has_guards(c))
        for c in node.children
    )


def _is_suppressed(state: _RenderState, end: BlockNode) -> bool:
    parent = end.parent
    if parent is None:
        return False
    if parent.type in _GUARD_TYPES:
        return not state.outcomes.get(parent, False)
    guards = [
        c
        for c in parent.children
        if c.type in _GUARD_TYPES or (c.type == TagTypeEnum.BEGIN and _has_guards(c))
    ]
    return bool(guards) and not any(state.outcomes.get(c, False) for c in guards)


def _render_bind(state: _RenderState, entity: Any, tag: Tag) -> str:
    path = tag.contents
    if state.collector is None:
        if tag.pg_array:
            raise UnsupportedBindModeError(
                f"ARRAY[...] bind '{path}' at offset {tag.start} is not supported by generate_sql; "
                "use generate_parameterized_sql with bind type 'postgres'"
            )
        if not has_property(entity, path):
            raise UnknownPropertyError(path, tag.start)
        return sql_literal(get_property(entity, path))

    value = get_property(entity, path)
    if tag.pg_array:
        return state.collector.bind_array_cast(path, value, tag.array_cast)
    return state.collector.bind(path, value)


def _render(state: _RenderState, entity: Any, nodes: list[BlockNode]) -> str:
    """
    Render *nodes* (siblings) and return the text. Inside a block the text is
    returned at its END; at top level the template tail is appended.
    """
    template = state.template
    out: list[str] = []
    for node in nodes:
        tag = node.tag

        if tag.type == TagTypeEnum.END:
            suppressed = _is_suppressed(state, node)
            if node.parent is not None and node.parent.type == TagTypeEnum.BEGIN:
                state.outcomes[node.parent] = not suppressed
            if suppressed:
                state.pos = tag.end
                return ""
            out.append(template[state.pos : tag.start])
            state.pos = tag.end
            return "".join(out)

        out.append(template[state.pos : tag.start])
        state.pos = tag.end

        if tag.type == TagTypeEnum.BEGIN:
            state.outcomes[node] = False
            out.append(_render(state, entity, node.children))

        elif tag.type == TagTypeEnum.IF:
            ok = evaluate_condition(tag.contents, entity)
            state.outcomes[node] = ok
            if ok:
                out.append(_render(state, entity, node.children))
            else:
                state.pos = node.end_node.tag.end

        elif tag.type == TagTypeEnum.FOR:
            item, path = split_for_contents(tag)
            collection = get_property(entity, path)
            ok = isinstance(collection, (list, tuple)) and len(collection) > 0
            state.outcomes[node] = ok
            if ok:
                for value in collection:
                    # every iteration re-reads the same template slice
                    state.pos = tag.end
                    out.append(_render(state, LoopScope(entity, item, value), node.children))
                    out.append("\n")
            else:
                state.pos = node.end_node.tag.end

        else:
            out.append(_render_bind(state, entity, tag))

    out.append(template[state.pos :])
    return "".join(out)


class SQLBuilder:
    """
    Generates SQL from a template and a bind entity.

    ``bind_type`` (or ``settings.bind_type``) is the default dialect for
    ``generate_parameterized_sql``; it can also be given per call.
    """

    def __init__(
        self,
        bind_type: BindTypeEnum | str | None = None,
        *,
        settings: SQLBuilderSettings | None = None,
    ) -> None:
        self.settings = settings or SQLBuilderSettings()
        self.bind_type: BindTypeEnum | None = (
            coerce_bind_type(bind_type) if bind_type is not None else self.settings.bind_type
        )

    def _preview(self, template: str) -> str:
        limit = self.settings.error_preview_chars
        return template[:limit] + "..." if len(template) > limit else template

    def _run(self, template: str, entity: Any, collector: BindCollector | None) -> str:
        _entity = entity if entity is not None else {}
        if not TAG_PATTERN.search(template):
            return template
        try:
            state = _RenderState(template=template, collector=collector)
            sql = _render(state, _entity, parse_template(template))
        except SQLBuilderError as e:
            _log.warning(
                "SQL template render failed: %s. Entity keys: %s. Template preview:\n%s",
                e,
                describe_entity(_entity),
                self._preview(template),
            )
            raise
        _log.debug("Rendered SQL: %s", sql)
        return sql

    def generate_sql(self, template: str, entity: Any = None) -> str:
        """
        Render *template* with values from *entity* (a mapping or an object with
        public attributes) inlined as escaped SQL literals.

        Raises UnknownPropertyError when a bind tag names a property the entity
        does not have (a property set to None renders ``NULL``).
        """
        return self._run(template, entity, None)

    def generate_parameterized_sql(
        self,
        template: str,
        entity: Any = None,
        bind_type: BindTypeEnum | str | None = None,
    ) -> tuple[str, list[Any] | dict[str, Any]]:
        """
        Render *template* with placeholders for *bind_type* and return
        ``(sql, params)``; params is a list for postgres/mysql and a dict for
        oracle/mssql.
        """
        if bind_type is not None:
            resolved = coerce_bind_type(bind_type)
        elif self.bind_type is not None:
            resolved = self.bind_type
        else:
            raise BindConfigurationError(
                "bind_type is required: pass it to generate_parameterized_sql() or SQLBuilder()"
            )
        collector = BindCollector(resolved)
        sql = self._run(template, entity, collector)
        _log.debug("Bind params (%s): %d", resolved.value, len(collector.params))
        return sql, collector.params

    def parse_parameters(self, template: str) -> list[str]:
        """Top-level entity property names *template* reads, sorted."""
        return parse_parameters(template)
