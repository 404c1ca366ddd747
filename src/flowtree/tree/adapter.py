"""Read-only view of a parse-tree node.

``tree_sitter.Node`` satisfies ``SyntaxNode`` as-is; tests use small
in-memory fakes. Everything in this package talks to nodes only through
this protocol and the helpers below.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol

from flowtree.core.errors import ErrorCode
from flowtree.tree.nodes import BuildWarning


class SyntaxNode(Protocol):
    """Capability the builder needs from a parser node."""

    @property
    def type(self) -> str: ...

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...

    @property
    def named_child_count(self) -> int: ...

    def named_child(self, index: int) -> SyntaxNode | None: ...

    def child_by_field_name(self, name: str) -> SyntaxNode | None: ...

    def children_by_field_name(self, name: str) -> list[SyntaxNode]: ...


class MissingFieldError(Exception):
    """A node lacks a field its category requires."""

    def __init__(self, node: SyntaxNode, field_name: str) -> None:
        super().__init__(f"{node.type} has no '{field_name}' field")
        self.node = node
        self.field_name = field_name

    def to_warning(self, source: bytes) -> BuildWarning:
        return BuildWarning(
            code=ErrorCode.MISSING_FIELD,
            message=str(self),
            node_type=self.node.type,
            field_name=self.field_name,
            start_byte=self.node.start_byte,
            line=line_of(self.node, source),
        )


def named_children(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Named children in source order, skipping holes."""
    for i in range(node.named_child_count):
        child = node.named_child(i)
        if child is not None:
            yield child


def require_field(node: SyntaxNode, field_name: str) -> SyntaxNode:
    child = node.child_by_field_name(field_name)
    if child is None:
        raise MissingFieldError(node, field_name)
    return child


def node_text(node: SyntaxNode, source: bytes) -> str:
    """Source text covered by ``node``."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def span_text(nodes: Iterable[SyntaxNode], source: bytes) -> str:
    """Source text from the earliest start to the latest end of ``nodes``.

    Returns an empty string when ``nodes`` is empty.
    """
    nodes = list(nodes)
    if not nodes:
        return ""
    start = min(n.start_byte for n in nodes)
    end = max(n.end_byte for n in nodes)
    return source[start:end].decode("utf-8", errors="replace")


def line_of(node: SyntaxNode, source: bytes) -> int:
    return source.count(b"\n", 0, node.start_byte) + 1
