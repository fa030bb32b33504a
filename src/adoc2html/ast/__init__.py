#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/ast/__init__.py
"""Document tree produced by the AsciiDoc parser and consumed by renderers."""

from adoc2html.ast.nodes import (
    Block,
    Document,
    Footnote,
    Inline,
    ListItem,
    ListNode,
    Node,
    NodeKind,
    Section,
    Table,
    TableCell,
    TableRow,
    Text,
)

__all__ = [
    "Block",
    "Document",
    "Footnote",
    "Inline",
    "ListItem",
    "ListNode",
    "Node",
    "NodeKind",
    "Section",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
]
