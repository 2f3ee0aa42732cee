"""
Structure the flat tag list of a SQL template into blocks, and extract the
parameter names a template reads.

    BEGIN
      ├ IF
      │  ├ BIND
      │  └ END
      ├ BIND
      └ END

Every BEGIN/IF/FOR node ends with its END as last child.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sql_builder.core.property_path import split_path
from sql_builder.engines.sql.condition import TokenType, tokenize
from sql_builder.engines.sql.errors import TemplateStructureError
from sql_builder.engines.sql.scanner import Tag, scan_tags
from sql_builder.models import TagTypeEnum


@dataclass(eq=False)
class BlockNode:
    tag: Tag
    parent: BlockNode | None = field(default=None, repr=False)
    children: list[BlockNode] = field(default_factory=list)

    @property
    def type(self) -> TagTypeEnum:
        return self.tag.type

    @property
    def end_node(self) -> BlockNode:
        """The END closing this block (only valid for BEGIN/IF/FOR)."""
        return self.children[-1]


def build_blocks(tags: list[Tag]) -> list[BlockNode]:
    """Nest *tags* by matching each BEGIN/IF/FOR with its END.

    Raises TemplateStructureError for an END without an open block or a block
    left open at the end of the template.
    """
    roots: list[BlockNode] = []
    stack: list[BlockNode] = []

    for tag in tags:
        parent = stack[-1] if stack else None
        if tag.type == TagTypeEnum.END:
            if parent is None:
                raise TemplateStructureError("END tag without matching BEGIN/IF/FOR", tag.start)
            stack.pop()
            parent.children.append(BlockNode(tag=tag, parent=parent))
            continue
        node = BlockNode(tag=tag, parent=parent)
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
        if tag.type.opens_block:
            stack.append(node)

    if stack:
        open_tag = stack[-1].tag
        raise TemplateStructureError(f"{open_tag.type.value} tag is never closed by END", open_tag.start)
    return roots


def parse_template(template: str) -> list[BlockNode]:
    """Scan and structure *template* in one step."""
    return build_blocks(scan_tags(template))


def split_for_contents(tag: Tag) -> tuple[str, str]:
    """Split a FOR tag's ``item:collection`` into ``(item, collection)``."""
    name, sep, collection = tag.contents.partition(":")
    name, collection = name.strip(), collection.strip()
    if not sep or not name or not collection:
        raise TemplateStructureError(
            f"FOR tag must look like /*FOR item:collection*/, got {tag.match!r}", tag.start
        )
    return name, collection


# ---------------------------------------------------------------------------
# Parameter names
# ---------------------------------------------------------------------------


def _root_name(path: str) -> str | None:
    parts = split_path(path)
    return parts[0] if parts else None


def _collect(nodes: list[BlockNode], scope: frozenset[str], names: set[str]) -> None:
    for node in nodes:
        tag = node.tag
        if tag.type == TagTypeEnum.BIND:
            root = _root_name(tag.contents)
            if root and root not in scope:
                names.add(root)
        elif tag.type == TagTypeEnum.IF:
            for token in tokenize(tag.contents):
                if token.type == TokenType.IDENTIFIER:
                    root = _root_name(token.value)
                    if root and root not in scope:
                        names.add(root)
            _collect(node.children, scope, names)
        elif tag.type == TagTypeEnum.FOR:
            item, collection = split_for_contents(tag)
            root = _root_name(collection)
            if root and root not in scope:
                names.add(root)
            _collect(node.children, scope | {item}, names)
        elif tag.type == TagTypeEnum.BEGIN:
            _collect(node.children, scope, names)


def parse_parameters(template: str) -> list[str]:
    """
    Return the sorted top-level property names *template* reads from the bind
    entity (BIND paths, FOR collections, IF identifiers). FOR loop variables
    are not reported.
    """
    names: set[str] = set()
    _collect(parse_template(template), frozenset(), names)
    return sorted(names)
