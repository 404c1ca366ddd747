"""Tree-sitter parsing for the supported languages.

Grammars are loaded lazily from their ``tree_sitter_<lang>`` wheels and the
compiled ``tree_sitter.Language`` objects are cached per process. Parser
instances are not shared between threads: build one ``TreeSitterParser``
per request.
"""

from __future__ import annotations

import importlib
import threading
from dataclasses import dataclass, field
from typing import Any

import structlog
import tree_sitter

from flowtree.core.errors import RequestError
from flowtree.parsing.packs import LanguagePack, get_pack, supported_languages

logger = structlog.get_logger()

_LANGUAGE_CACHE: dict[str, tree_sitter.Language] = {}
_LANGUAGE_LOCK = threading.Lock()


def load_language(pack: LanguagePack) -> tree_sitter.Language:
    """Load (or fetch from cache) the compiled grammar for a pack."""
    with _LANGUAGE_LOCK:
        cached = _LANGUAGE_CACHE.get(pack.grammar_name)
        if cached is not None:
            return cached
        try:
            module = importlib.import_module(pack.grammar_module)
        except ImportError as err:
            raise ValueError(
                f"Grammar not installed: {pack.grammar_package}>={pack.min_version}"
            ) from err
        lang = tree_sitter.Language(module.language())
        _LANGUAGE_CACHE[pack.grammar_name] = lang
        logger.debug("grammar_loaded", language=pack.name, module=pack.grammar_module)
        return lang


def resolve_pack(language: str) -> LanguagePack:
    """Look up the pack for a language selector.

    Raises:
        RequestError: If the selector names no supported language.
    """
    pack = get_pack(language)
    if pack is None:
        raise RequestError.unsupported_language(language, supported_languages())
    return pack


@dataclass
class ParseResult:
    """Result of parsing a source buffer."""

    tree: Any  # Tree-sitter Tree (not serializable)
    pack: LanguagePack
    source: bytes
    error_count: int
    total_nodes: int

    @property
    def language(self) -> str:
        return self.pack.name

    @property
    def root_node(self) -> Any:
        return self.tree.root_node


@dataclass
class TreeSitterParser:
    """
    Tree-sitter parser for the supported languages.

    Usage::

        parser = TreeSitterParser()
        result = parser.parse("c", b"int add(int a, int b) { return a + b; }")
        result.root_node.type  # "translation_unit"
    """

    _parser: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()

    def parse(self, language: str, content: bytes) -> ParseResult:
        """
        Parse source bytes with the grammar selected by ``language``.

        Args:
            language: Canonical language name ("c", "cpp", "python", "javascript")
            content: Raw source bytes

        Returns:
            ParseResult with tree and error counts.

        Raises:
            RequestError: If the language is not supported.
        """
        pack = resolve_pack(language)
        self._parser.language = load_language(pack)
        tree = self._parser.parse(content)

        error_count = 0
        total_nodes = 0

        # Iterative walk; deeply nested sources must not hit the recursion limit
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            total_nodes += 1
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        if error_count:
            logger.debug("parse_errors", language=pack.name, error_count=error_count)

        return ParseResult(
            tree=tree,
            pack=pack,
            source=content,
            error_count=error_count,
            total_nodes=total_nodes,
        )
