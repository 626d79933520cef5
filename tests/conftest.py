"""Shared fixtures for building syntax trees by hand."""

from __future__ import annotations

import pytest

from sqlign.nodes import Span, SyntaxNode, SyntaxTree
from sqlign.source import SourceBuffer


class TreeFactory:
    """Builds terminals whose spans point into a growing source buffer.

    Each ``leaf`` call appends its text (followed by a space) to the buffer,
    so hand-built trees always carry valid spans.
    """

    def __init__(self) -> None:
        self._data = bytearray()

    def leaf(self, text: str, kind: str = "identifier") -> SyntaxNode:
        start = len(self._data)
        self._data.extend(text.encode("utf-8"))
        span = Span(start, len(self._data))
        self._data.extend(b" ")
        return SyntaxNode(kind, span=span)

    def node(self, kind: str, *children: SyntaxNode) -> SyntaxNode:
        return SyntaxNode(kind, tuple(children))

    def dotted(self, *parts: str) -> SyntaxNode:
        children: list[SyntaxNode] = []
        for i, part in enumerate(parts):
            if i:
                children.append(self.leaf(".", "punctuation"))
            children.append(self.leaf(part))
        return self.node("dotted_name", *children)

    def binary(self, left: SyntaxNode, op: str, right: SyntaxNode) -> SyntaxNode:
        return self.node("binary_expression", left, self.leaf(op, "operator"), right)

    @property
    def buffer(self) -> SourceBuffer:
        return SourceBuffer(bytes(self._data))

    def tree(self, *top_level: SyntaxNode) -> SyntaxTree:
        return SyntaxTree(root=self.node("program", *top_level), buffer=self.buffer)


@pytest.fixture
def factory() -> TreeFactory:
    """Fresh TreeFactory with an empty buffer."""
    return TreeFactory()


@pytest.fixture
def scenario_tree(factory: TreeFactory) -> SyntaxTree:
    """Hand-built tree for ``SELECT a.b FROM t WHERE x = 1``."""
    f = factory
    stmt = f.node(
        "select_statement",
        f.node("select_clause", f.leaf("SELECT", "keyword"), f.dotted("a", "b")),
        f.node("from_clause", f.leaf("FROM", "keyword"), f.leaf("t")),
        f.node(
            "where_clause",
            f.leaf("WHERE", "keyword"),
            f.binary(f.leaf("x"), "=", f.leaf("1", "literal")),
        ),
    )
    return f.tree(stmt)
