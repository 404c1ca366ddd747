"""Unified LanguagePack: single source of truth for all tree-sitter config.

Every language that FlowTree supports has exactly ONE LanguagePack that
consolidates:
- Grammar install metadata (package, module, version)
- File extension detection
- The ControlProfile mapping grammar node types onto control-structure
  categories

The PACKS registry is the canonical lookup: ``PACKS["python"]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# =========================================================================
# Dataclasses
# =========================================================================


@dataclass(frozen=True)
class ControlProfile:
    """Maps a grammar's node types onto control-structure categories.

    The builder and locator only ever consult these sets, so a new grammar
    is supported by describing it here. Field names (``condition``,
    ``body``, ``alternative``, ``value``, ...) are looked up on the nodes
    themselves.
    """

    function_types: frozenset[str] = frozenset()
    # Fields whose combined span is the function's signature text
    signature_fields: tuple[str, ...] = ("declarator",)

    block_types: frozenset[str] = frozenset()
    instruction_types: frozenset[str] = frozenset()
    for_types: frozenset[str] = frozenset()
    while_types: frozenset[str] = frozenset()
    do_types: frozenset[str] = frozenset()
    if_types: frozenset[str] = frozenset()
    # Alternatives that carry their own condition (Python ``elif``)
    elif_types: frozenset[str] = frozenset()
    switch_types: frozenset[str] = frozenset()
    case_types: frozenset[str] = frozenset()


@dataclass(frozen=True)
class LanguagePack:
    """Complete tree-sitter configuration for a single language."""

    # -- Identity --
    name: str  # Canonical language name ("python", "cpp", ...)
    grammar_name: str  # tree-sitter grammar key

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-python")
    grammar_module: str  # Python import ("tree_sitter_python")
    min_version: str

    # -- File detection --
    extensions: frozenset[str] = field(default_factory=frozenset)

    # -- Control-structure classification --
    profile: ControlProfile = field(default_factory=ControlProfile)


# =========================================================================
# C family
# =========================================================================

_C_PROFILE = ControlProfile(
    function_types=frozenset({"function_definition", "function_declaration"}),
    signature_fields=("declarator",),
    block_types=frozenset({"compound_statement", "else_clause"}),
    instruction_types=frozenset({"return_statement", "expression_statement", "declaration"}),
    for_types=frozenset({"for_statement"}),
    while_types=frozenset({"while_statement"}),
    do_types=frozenset({"do_statement"}),
    if_types=frozenset({"if_statement"}),
    switch_types=frozenset({"switch_statement"}),
    case_types=frozenset({"case_statement"}),
)

_CPP_PROFILE = ControlProfile(
    function_types=_C_PROFILE.function_types,
    signature_fields=("declarator",),
    block_types=_C_PROFILE.block_types,
    instruction_types=_C_PROFILE.instruction_types,
    for_types=frozenset({"for_statement", "for_range_loop"}),
    while_types=_C_PROFILE.while_types,
    do_types=_C_PROFILE.do_types,
    if_types=_C_PROFILE.if_types,
    switch_types=_C_PROFILE.switch_types,
    case_types=_C_PROFILE.case_types,
)

C_PACK = LanguagePack(
    name="c",
    grammar_name="c",
    grammar_package="tree-sitter-c",
    grammar_module="tree_sitter_c",
    min_version="0.23.0",
    extensions=frozenset({"c", "h"}),
    profile=_C_PROFILE,
)

CPP_PACK = LanguagePack(
    name="cpp",
    grammar_name="cpp",
    grammar_package="tree-sitter-cpp",
    grammar_module="tree_sitter_cpp",
    min_version="0.23.0",
    extensions=frozenset({"cpp", "cc", "cxx", "hpp", "hxx", "hh"}),
    profile=_CPP_PROFILE,
)


# =========================================================================
# PYTHON
# =========================================================================

# No do/while or switch: ``match`` statements are dropped like any other
# unclassified node.
_PYTHON_PROFILE = ControlProfile(
    function_types=frozenset({"function_definition"}),
    signature_fields=("name", "parameters"),
    block_types=frozenset({"block", "else_clause"}),
    instruction_types=frozenset({"return_statement", "expression_statement"}),
    for_types=frozenset({"for_statement"}),
    while_types=frozenset({"while_statement"}),
    if_types=frozenset({"if_statement"}),
    elif_types=frozenset({"elif_clause"}),
)

PYTHON_PACK = LanguagePack(
    name="python",
    grammar_name="python",
    grammar_package="tree-sitter-python",
    grammar_module="tree_sitter_python",
    min_version="0.23.0",
    extensions=frozenset({"py", "pyi", "pyw"}),
    profile=_PYTHON_PROFILE,
)


# =========================================================================
# JAVASCRIPT
# =========================================================================

_JAVASCRIPT_PROFILE = ControlProfile(
    function_types=frozenset(
        {"function_declaration", "generator_function_declaration", "method_definition"}
    ),
    signature_fields=("name", "parameters"),
    block_types=frozenset({"statement_block", "else_clause", "switch_body"}),
    instruction_types=frozenset(
        {
            "return_statement",
            "expression_statement",
            "lexical_declaration",
            "variable_declaration",
        }
    ),
    for_types=frozenset({"for_statement", "for_in_statement"}),
    while_types=frozenset({"while_statement"}),
    do_types=frozenset({"do_statement"}),
    if_types=frozenset({"if_statement"}),
    switch_types=frozenset({"switch_statement"}),
    case_types=frozenset({"switch_case", "switch_default"}),
)

JAVASCRIPT_PACK = LanguagePack(
    name="javascript",
    grammar_name="javascript",
    grammar_package="tree-sitter-javascript",
    grammar_module="tree_sitter_javascript",
    min_version="0.23.0",
    extensions=frozenset({"js", "jsx", "mjs", "cjs"}),
    profile=_JAVASCRIPT_PROFILE,
)


# =========================================================================
# Registry
# =========================================================================

_ALL_PACKS: tuple[LanguagePack, ...] = (
    C_PACK,
    CPP_PACK,
    PYTHON_PACK,
    JAVASCRIPT_PACK,
)

# name -> Pack
PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}

# Extension -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack


# =========================================================================
# Public API
# =========================================================================


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by language name."""
    return PACKS.get(name)


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (with or without leading dot)."""
    return _EXT_TO_PACK.get(ext.lower().lstrip("."))


def supported_languages() -> list[str]:
    """Sorted canonical names of every supported language."""
    return sorted(PACKS)
