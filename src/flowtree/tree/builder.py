"""Control tree builder.

Walks a function body and classifies every named child into one of the
control-structure categories of the language's ``ControlProfile``:

========================  ===============  ==========================
Category                  Emitted kind     Annotation
========================  ===============  ==========================
block                     (flattened)      -
instruction               ``instruction``  text = statement
for                       ``for``          branch_tag = header span
while                     ``while``        branch_tag = test
do                        ``doWhile``      branch_tag = raw condition
if                        ``if``           text = test
switch                    ``switch``       text = test
case                      ``case``         branch_tag = value/default
========================  ===============  ==========================

Anything else is dropped. Direct children of an ``if`` get ``branch_tag``
``"true"`` or ``"false"`` depending on the branch they came from; this
replaces whatever tag the child already had, loop headers included.

The walk runs off an explicit work stack, so nesting depth is bounded by
memory rather than the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import structlog

from flowtree.parsing.packs import ControlProfile
from flowtree.tree.adapter import (
    MissingFieldError,
    SyntaxNode,
    named_children,
    node_text,
    require_field,
    span_text,
)
from flowtree.tree.nodes import BuildWarning, NodeKind, SummaryNode

logger = structlog.get_logger()

BRANCH_TRUE = "true"
BRANCH_FALSE = "false"
DEFAULT_CASE = "default"

# Every field that can be part of a loop header, across grammars.
# C/C++/JS: initializer; condition; update (JS: increment)
# Python/JS for-in: left, right (JS: kind holds var/let/const)
# C++ range-for: type declarator : right
_FOR_HEADER_FIELDS = (
    "initializer",
    "condition",
    "update",
    "increment",
    "kind",
    "left",
    "right",
    "type",
    "declarator",
)


@dataclass
class _Pending:
    """A summary node whose children are still being built."""

    kind: NodeKind
    text: str = ""
    branch_tag: str = ""
    children: list[SummaryNode] = field(default_factory=list)

    def freeze(self) -> SummaryNode:
        return SummaryNode(
            kind=self.kind,
            text=self.text,
            branch_tag=self.branch_tag,
            children=tuple(self.children),
        )


class _Source(NamedTuple):
    """A syntax node waiting to be classified.

    ``tag`` overrides the branch tag of whatever the node produces.
    ``alternatives`` is set for an ``elif`` treated as a nested ``if``.
    """

    node: SyntaxNode
    tag: str | None = None
    alternatives: Sequence[SyntaxNode] | None = None


class _Visit(NamedTuple):
    source: _Source
    out: list[SummaryNode]


class _Finish(NamedTuple):
    pending: _Pending
    tag: str | None
    out: list[SummaryNode]


# (node to emit or None to splice, sources for its children)
Expansion = tuple[_Pending | None, list[_Source]]
Handler = Callable[[SyntaxNode], Expansion]


class ControlTreeBuilder:
    """Builds summary nodes for the statements of one source buffer.

    Args:
        source: The bytes the syntax nodes were parsed from.
        profile: Grammar profile of the source language.
        warnings: List that skipped-node warnings are appended to. A new
            list is created when omitted.
    """

    def __init__(
        self,
        source: bytes,
        profile: ControlProfile,
        warnings: list[BuildWarning] | None = None,
    ) -> None:
        self.source = source
        self.profile = profile
        self.warnings: list[BuildWarning] = warnings if warnings is not None else []
        self._handlers: dict[str, Handler] = {}
        for types, handler in (
            (profile.block_types, self._block),
            (profile.instruction_types, self._instruction),
            (profile.for_types, self._for),
            (profile.while_types, self._while),
            (profile.do_types, self._do_while),
            (profile.if_types, self._if),
            (profile.switch_types, self._switch),
            (profile.case_types, self._case),
        ):
            for node_type in types:
                self._handlers[node_type] = handler

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def build(self, node: SyntaxNode) -> list[SummaryNode]:
        """Summary nodes for the named children of ``node``, in source order."""
        return self._run([_Source(child) for child in named_children(node)])

    def build_branch(self, node: SyntaxNode) -> list[SummaryNode]:
        """Summary nodes for a loop body or branch.

        A block yields its statements; a single unbraced statement yields
        itself.
        """
        return self.classify(node)

    def classify(self, node: SyntaxNode) -> list[SummaryNode]:
        """Summary nodes for one syntax node: none, one, or a flattened block."""
        return self._run([_Source(node)])

    def record(self, err: MissingFieldError) -> None:
        """Keep a warning for a node that had to be skipped."""
        warning = err.to_warning(self.source)
        self.warnings.append(warning)
        logger.warning(
            "node_skipped",
            node_type=warning.node_type,
            field=warning.field_name,
            line=warning.line,
        )

    # -----------------------------------------------------------------
    # Work loop
    # -----------------------------------------------------------------

    def _run(self, sources: Sequence[_Source]) -> list[SummaryNode]:
        out: list[SummaryNode] = []
        stack: list[_Visit | _Finish] = [_Visit(s, out) for s in reversed(sources)]

        while stack:
            item = stack.pop()

            if isinstance(item, _Finish):
                summary = item.pending.freeze()
                if item.tag is not None:
                    summary = summary.with_branch_tag(item.tag)
                item.out.append(summary)
                continue

            source = item.source
            try:
                pending, children = self._expand(source)
            except MissingFieldError as err:
                self.record(err)
                continue

            if pending is None:
                # Spliced children inherit the block's branch tag
                stack.extend(
                    _Visit(child._replace(tag=child.tag or source.tag), item.out)
                    for child in reversed(children)
                )
            else:
                # Finish runs after every child pushed above it
                stack.append(_Finish(pending, source.tag, item.out))
                stack.extend(_Visit(child, pending.children) for child in reversed(children))

        return out

    def _expand(self, source: _Source) -> Expansion:
        if source.alternatives is not None:
            return self._if_expand(source.node, source.alternatives)
        handler = self._handlers.get(source.node.type)
        if handler is None:
            logger.debug(
                "unhandled_node", node_type=source.node.type, start_byte=source.node.start_byte
            )
            return None, []
        return handler(source.node)

    # -----------------------------------------------------------------
    # Handlers
    # -----------------------------------------------------------------

    def _block(self, node: SyntaxNode) -> Expansion:
        return None, [_Source(child) for child in named_children(node)]

    def _instruction(self, node: SyntaxNode) -> Expansion:
        return _Pending(NodeKind.INSTRUCTION, text=node_text(node, self.source)), []

    def _for(self, node: SyntaxNode) -> Expansion:
        header = [
            part
            for part in (node.child_by_field_name(name) for name in _FOR_HEADER_FIELDS)
            if part is not None
        ]
        body = require_field(node, "body")
        return _Pending(NodeKind.FOR, branch_tag=span_text(header, self.source)), [_Source(body)]

    def _while(self, node: SyntaxNode) -> Expansion:
        condition = self._test_text(node, "condition")
        body = require_field(node, "body")
        return _Pending(NodeKind.WHILE, branch_tag=condition), [_Source(body)]

    def _do_while(self, node: SyntaxNode) -> Expansion:
        # Trailing condition is kept verbatim, parentheses included
        condition = node_text(require_field(node, "condition"), self.source)
        body = require_field(node, "body")
        return _Pending(NodeKind.DO_WHILE, branch_tag=condition), [_Source(body)]

    def _if(self, node: SyntaxNode) -> Expansion:
        return self._if_expand(node, node.children_by_field_name("alternative"))

    def _switch(self, node: SyntaxNode) -> Expansion:
        condition = self._test_text(node, "condition", "value")
        return _Pending(NodeKind.SWITCH, text=condition), [
            _Source(child) for child in named_children(node)
        ]

    def _case(self, node: SyntaxNode) -> Expansion:
        value = node.child_by_field_name("value")
        tag = node_text(value, self.source) if value is not None else DEFAULT_CASE
        return _Pending(NodeKind.CASE, branch_tag=tag), [
            _Source(child) for child in named_children(node)
        ]

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    def _if_expand(self, node: SyntaxNode, alternatives: Sequence[SyntaxNode]) -> Expansion:
        """An ``if`` whose false branch is built from ``alternatives``."""
        condition = self._test_text(node, "condition")

        consequence = node.child_by_field_name("consequence")
        if consequence is not None:
            children = [_Source(consequence, BRANCH_TRUE)]
        else:
            skip = {(alt.start_byte, alt.end_byte) for alt in alternatives}
            children = [
                _Source(child, BRANCH_TRUE)
                for child in named_children(node)
                if (child.start_byte, child.end_byte) not in skip
            ]

        if alternatives:
            head, rest = alternatives[0], alternatives[1:]
            if head.type in self.profile.elif_types:
                # elif: a nested if whose own else is whatever follows it
                children.append(_Source(head, BRANCH_FALSE, rest))
            else:
                children.append(_Source(head, BRANCH_FALSE))

        return _Pending(NodeKind.IF, text=condition), children

    def _test_text(self, node: SyntaxNode, *field_names: str) -> str:
        """Text of a test expression with enclosing parentheses removed."""
        condition = None
        for name in field_names:
            condition = node.child_by_field_name(name)
            if condition is not None:
                break
        if condition is None:
            raise MissingFieldError(node, field_names[0])

        inner = condition.child_by_field_name("value")
        if inner is None and condition.type == "parenthesized_expression":
            inner = next(
                (c for c in named_children(condition) if c.type != "comment"),
                None,
            )
        return node_text(inner if inner is not None else condition, self.source)
