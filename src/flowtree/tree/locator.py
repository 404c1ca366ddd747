"""Function locator.

Scans a whole parse tree for function definitions and emits one flat
``function`` summary per definition found, nested definitions included.
"""

from __future__ import annotations

import structlog

from flowtree.parsing.packs import ControlProfile
from flowtree.tree.adapter import (
    MissingFieldError,
    SyntaxNode,
    named_children,
    require_field,
    span_text,
)
from flowtree.tree.builder import ControlTreeBuilder
from flowtree.tree.nodes import BuildWarning, NodeKind, SummaryNode

logger = structlog.get_logger()


def locate(
    root: SyntaxNode,
    source: bytes,
    profile: ControlProfile,
    warnings: list[BuildWarning] | None = None,
) -> list[SummaryNode]:
    """Find every function under ``root`` and summarize its body.

    The walk is pre-order and covers the entire tree, so a function defined
    inside another function (or inside a class, namespace, ...) comes out as
    a later sibling of its container, never as its child.

    A function missing its signature or body field is skipped, with a
    warning appended to ``warnings``; functions nested inside it are still
    found.

    Args:
        root: Root of the parse tree.
        source: Bytes the tree was parsed from.
        profile: Grammar profile of the source language.
        warnings: Optional list collecting skipped-node warnings.

    Returns:
        Function summaries in source order.
    """
    builder = ControlTreeBuilder(source, profile, warnings)
    functions: list[SummaryNode] = []

    # Explicit stack: pre-order without recursing once per tree level
    stack: list[SyntaxNode] = [root]
    while stack:
        node = stack.pop()
        if node.type in profile.function_types:
            summary = _summarize(node, builder)
            if summary is not None:
                functions.append(summary)
        stack.extend(reversed(list(named_children(node))))

    logger.debug("functions_located", count=len(functions))
    return functions


def _summarize(node: SyntaxNode, builder: ControlTreeBuilder) -> SummaryNode | None:
    profile = builder.profile
    try:
        signature_parts = [
            part
            for part in (node.child_by_field_name(name) for name in profile.signature_fields)
            if part is not None
        ]
        if not signature_parts:
            raise MissingFieldError(node, profile.signature_fields[0])
        body = require_field(node, "body")
    except MissingFieldError as err:
        builder.record(err)
        return None

    return SummaryNode(
        kind=NodeKind.FUNCTION,
        text=span_text(signature_parts, builder.source),
        children=tuple(builder.build(body)),
    )
