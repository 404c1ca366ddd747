"""Control-structure trees: data model, builder, function locator."""

from flowtree.tree.adapter import MissingFieldError, SyntaxNode
from flowtree.tree.builder import ControlTreeBuilder
from flowtree.tree.locator import locate
from flowtree.tree.nodes import BuildWarning, NodeKind, SummaryNode, TreeResult
from flowtree.tree.transform import transform

__all__ = [
    "BuildWarning",
    "ControlTreeBuilder",
    "MissingFieldError",
    "NodeKind",
    "SummaryNode",
    "SyntaxNode",
    "TreeResult",
    "locate",
    "transform",
]
