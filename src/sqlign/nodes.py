"""Syntax tree nodes for sqlign.

The tree is produced once by a tree source (see ``sqlign.treesource``) and
only traversed afterwards. Every node is a frozen dataclass with slots.

Tree shape:
program
├── <type>_statement
│   ├── <keyword>_clause
│   │   ├── terminal (keyword, identifier, literal, ...)
│   │   ├── dotted_name
│   │   ├── binary_expression
│   │   └── parenthesized_expression / subquery / expression ...
│   └── ...
├── terminator
└── comment

Terminals carry a byte span into the ``SourceBuffer`` instead of a copy of
their text, so the buffer must outlive any render pass over the tree.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from sqlign.source import SourceBuffer


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open byte range ``[start, end)`` into a source buffer."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """A labeled node of the syntax tree.

    Attributes:
        kind: Grammatical category tag (``select_statement``, ``from_clause``,
            ``dotted_name``, ``identifier``, ...)
        children: Child nodes in left-to-right source order
        span: Byte range of the literal text; set on terminals only

    """

    kind: str
    children: tuple[SyntaxNode, ...] = ()
    span: Span | None = None

    @property
    def is_terminal(self) -> bool:
        """True when the node has no children."""
        return not self.children

    def walk(self, depth: int = 0) -> Iterator[tuple[int, SyntaxNode]]:
        """Yield ``(depth, node)`` pairs depth-first, in source order."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """A syntax tree together with the buffer its spans point into."""

    root: SyntaxNode
    buffer: SourceBuffer
