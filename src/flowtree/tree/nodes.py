"""Summary node data model.

A SummaryNode is one entry of the control-structure tree: a function, one
classified control structure, or a plain instruction. Nodes are immutable;
``with_branch_tag`` returns a tagged copy instead of rewriting a node that is
already part of a tree.

Wire format (``to_dict``)::

    {"type": "if", "data": "x > 0", "condition": "", "nodes": [...]}
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from flowtree.core.errors import ErrorCode


class NodeKind(str, Enum):
    """Control-structure categories a summary node can have."""

    FUNCTION = "function"
    IF = "if"
    SWITCH = "switch"
    CASE = "case"
    FOR = "for"
    WHILE = "while"
    DO_WHILE = "doWhile"
    INSTRUCTION = "instruction"
    TRY = "try"  # Reserved, never emitted


@dataclass(frozen=True, slots=True)
class SummaryNode:
    """One node of the control-structure tree."""

    kind: NodeKind
    text: str = ""
    branch_tag: str = ""
    children: tuple[SummaryNode, ...] = ()

    def with_branch_tag(self, tag: str) -> SummaryNode:
        """Copy of this node with ``branch_tag`` replaced by ``tag``."""
        return replace(self, branch_tag=tag)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire format (``type``/``data``/``condition``/``nodes``)."""
        root: dict[str, Any] = {}
        stack: list[tuple[SummaryNode, dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            out["type"] = node.kind.value
            out["data"] = node.text
            out["condition"] = node.branch_tag
            if node.kind is NodeKind.INSTRUCTION:
                out["nodes"] = None
                continue
            nodes: list[dict[str, Any]] = [{} for _ in node.children]
            out["nodes"] = nodes
            stack.extend(zip(node.children, nodes))
        return root

    def walk(self) -> list[SummaryNode]:
        """This node and all descendants, pre-order."""
        out: list[SummaryNode] = []
        stack: list[SummaryNode] = [self]
        while stack:
            node = stack.pop()
            out.append(node)
            stack.extend(reversed(node.children))
        return out


@dataclass(frozen=True, slots=True)
class BuildWarning:
    """A summary node that was skipped because its syntax node was incomplete."""

    code: ErrorCode
    message: str
    node_type: str
    field_name: str
    start_byte: int
    line: int  # 1-based

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.code.name,
            "message": self.message,
            "node_type": self.node_type,
            "field": self.field_name,
            "start_byte": self.start_byte,
            "line": self.line,
        }


@dataclass
class TreeResult:
    """Everything one transform produced for one source buffer."""

    language: str
    functions: list[SummaryNode] = field(default_factory=list)
    warnings: list[BuildWarning] = field(default_factory=list)
    error_count: int = 0

    def to_wire(self) -> list[dict[str, Any]]:
        """The function forest in wire format."""
        return [fn.to_dict() for fn in self.functions]

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "functions": self.to_wire(),
            "warnings": [w.to_dict() for w in self.warnings],
            "error_count": self.error_count,
        }
