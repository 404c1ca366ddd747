"""Shared fixtures for tree tests.

``FakeSource`` builds in-memory syntax nodes whose byte ranges point at
snippets of one source string, so builder and locator behavior can be
checked without a grammar (and with shapes a grammar would never produce).
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from flowtree.parsing.packs import C_PACK, PYTHON_PACK, ControlProfile


@dataclass(eq=False)
class FakeNode:
    """Minimal SyntaxNode."""

    type: str
    start_byte: int
    end_byte: int
    children: list[FakeNode] = field(default_factory=list)
    fields: dict[str, list[FakeNode]] = field(default_factory=dict)

    @property
    def named_child_count(self) -> int:
        return len(self.children)

    def named_child(self, index: int) -> FakeNode | None:
        return self.children[index]

    def child_by_field_name(self, name: str) -> FakeNode | None:
        nodes = self.fields.get(name)
        return nodes[0] if nodes else None

    def children_by_field_name(self, name: str) -> list[FakeNode]:
        return list(self.fields.get(name, []))


class FakeSource:
    """Source text plus a factory for nodes spanning its snippets."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.source = text.encode()

    def node(
        self,
        node_type: str,
        snippet: str,
        *children: FakeNode,
        nth: int = 0,
        **fields: FakeNode | list[FakeNode],
    ) -> FakeNode:
        """Node spanning the ``nth`` occurrence of ``snippet``.

        Named children are ``children`` plus every field value, in source
        order.
        """
        start = -1
        for _ in range(nth + 1):
            start = self.source.index(snippet.encode(), start + 1)

        field_map = {
            name: value if isinstance(value, list) else [value] for name, value in fields.items()
        }
        named = list(children)
        for nodes in field_map.values():
            named.extend(n for n in nodes if n not in named)
        named.sort(key=lambda n: n.start_byte)

        return FakeNode(
            type=node_type,
            start_byte=start,
            end_byte=start + len(snippet.encode()),
            children=named,
            fields=field_map,
        )


@pytest.fixture
def c_profile() -> ControlProfile:
    return C_PACK.profile


@pytest.fixture
def python_profile() -> ControlProfile:
    return PYTHON_PACK.profile


@pytest.fixture
def fake_source() -> type[FakeSource]:
    """The FakeSource class, for tests that build their own nodes."""
    return FakeSource
