"""Source text to control-structure tree, end to end."""

from __future__ import annotations

import structlog

from flowtree.parsing.treesitter import TreeSitterParser
from flowtree.tree.locator import locate
from flowtree.tree.nodes import BuildWarning, TreeResult

logger = structlog.get_logger()


def transform(
    language: str,
    source: bytes,
    parser: TreeSitterParser | None = None,
) -> TreeResult:
    """Parse ``source`` as ``language`` and summarize every function in it.

    Args:
        language: Canonical language name ("c", "cpp", "python", "javascript").
        source: Raw source bytes.
        parser: Parser to reuse. A fresh one is created when omitted; never
            share one parser between threads.

    Returns:
        TreeResult with the function forest and any skipped-node warnings.

    Raises:
        RequestError: If the language is not supported.
    """
    if parser is None:
        parser = TreeSitterParser()
    parsed = parser.parse(language, source)

    warnings: list[BuildWarning] = []
    functions = locate(parsed.root_node, parsed.source, parsed.pack.profile, warnings)

    logger.info(
        "tree_built",
        language=parsed.language,
        source_bytes=len(source),
        syntax_nodes=parsed.total_nodes,
        functions=len(functions),
        summary_nodes=sum(len(fn.walk()) for fn in functions),
        warnings=len(warnings),
        parse_errors=parsed.error_count,
    )
    return TreeResult(
        language=parsed.language,
        functions=functions,
        warnings=warnings,
        error_count=parsed.error_count,
    )
