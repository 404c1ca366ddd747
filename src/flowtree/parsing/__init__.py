"""Tree-sitter parsing and per-language grammar profiles."""

from flowtree.parsing.packs import (
    PACKS,
    ControlProfile,
    LanguagePack,
    get_pack,
    get_pack_for_ext,
    supported_languages,
)
from flowtree.parsing.treesitter import ParseResult, TreeSitterParser, resolve_pack

__all__ = [
    "PACKS",
    "ControlProfile",
    "LanguagePack",
    "ParseResult",
    "TreeSitterParser",
    "get_pack",
    "get_pack_for_ext",
    "resolve_pack",
    "supported_languages",
]
