"""SQL tree source built on sqlparse.

Turns SQL text into the labeled SyntaxTree the renderers consume. sqlparse
is a non-validating, lossless tokenizer with light grouping; this module
maps its token groups onto sqlign's node kinds:

- each statement becomes ``<type>_statement`` (``statement`` when sqlparse
  cannot tell the type); a trailing ``;`` becomes a root-level
  ``terminator`` and comment-only statements become root-level ``comment``
  terminals
- statement tokens are split into ``<keyword>_clause`` nodes at DML/DDL/CTE
  keywords and at clause keywords (FROM, WHERE, GROUP BY, any JOIN, ...)
- ``a.b.c`` runs become ``dotted_name``, comparisons and arithmetic become
  ``binary_expression``, parentheses become ``parenthesized_expression`` or
  ``subquery``

Whitespace and comments inside statements are not part of the tree.
Terminal spans are byte offsets into the UTF-8 encoded source.

Example:
    >>> tree = parse_sql("SELECT a.b FROM t")
    >>> [c.kind for c in tree.root.children[0].children]
    ['select_clause', 'from_clause']

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import accumulate

import sqlparse
from sqlparse import sql
from sqlparse import tokens as T
from sqlparse.exceptions import SQLParseError

from sqlign.errors import TreeSourceError
from sqlign.nodes import Span, SyntaxNode, SyntaxTree
from sqlign.source import SourceBuffer
from sqlign.utils.logger import get_logger

logger = get_logger(__name__)

# Keywords (besides DML/DDL/CTE and any *JOIN) that open a new clause
CLAUSE_KEYWORDS = frozenset(
    {
        "FROM",
        "WHERE",
        "GROUP BY",
        "ORDER BY",
        "HAVING",
        "LIMIT",
        "OFFSET",
        "SET",
        "VALUES",
        "RETURNING",
        "UNION",
        "UNION ALL",
        "INTERSECT",
        "EXCEPT",
        "WINDOW",
        "QUALIFY",
    }
)

_WORD = re.compile(r"\S+")


@dataclass(frozen=True, slots=True)
class _Item:
    """A converted node with its byte extent (and literal text for terminals)."""

    node: SyntaxNode
    start: int
    end: int
    text: str = ""


def parse_sql(source: str, *, source_file: str | None = None) -> SyntaxTree:
    """Parse SQL text into a labeled syntax tree.

    Args:
        source: SQL text, one or more statements
        source_file: Optional source path for error messages

    Returns:
        SyntaxTree rooted at a ``program`` node

    Raises:
        TreeSourceError: If sqlparse fails or its tokens cannot be mapped
            back onto the source text
    """
    return _TreeBuilder(source, source_file).build()


def clause_kind(keyword: str) -> str:
    """Kind label for a clause opened by ``keyword``.

    Example:
        >>> clause_kind("GROUP  BY")
        'group_by_clause'
    """
    return "_".join(word.lower() for word in keyword.split()) + "_clause"


def statement_kind(statement_type: str) -> str:
    """Kind label for a statement of sqlparse type ``statement_type``."""
    if statement_type == "UNKNOWN":
        return "statement"
    return "_".join(word.lower() for word in statement_type.split()) + "_statement"


def _is_comment(token: sql.Token) -> bool:
    return isinstance(token, sql.Comment) or token.ttype in T.Comment


def _significant(tokens: Sequence[sql.Token]) -> list[sql.Token]:
    return [t for t in tokens if not (t.is_whitespace or _is_comment(t))]


def _clause_label(token: sql.Token) -> str | None:
    if token.is_group or token.ttype not in T.Keyword:
        return None
    keyword = " ".join(token.normalized.split())
    if (
        token.ttype in T.Keyword.DML
        or token.ttype in T.Keyword.DDL
        or token.ttype in T.Keyword.CTE
        or keyword in CLAUSE_KEYWORDS
        or keyword.endswith("JOIN")
    ):
        return clause_kind(keyword)
    return None


def _leaf_kind(ttype) -> str:
    if ttype in T.Keyword:
        return "keyword"
    if ttype in T.Name:
        return "identifier"
    if ttype in T.Literal:
        return "literal"
    if ttype in T.Operator:
        return "operator"
    if ttype in T.Punctuation:
        return "punctuation"
    if ttype in T.Wildcard:
        return "wildcard"
    return "token"


def _group(kind: str, items: Sequence[_Item]) -> _Item:
    return _Item(
        SyntaxNode(kind, tuple(item.node for item in items)),
        items[0].start,
        items[-1].end,
    )


def _dotted_parts(node: SyntaxNode) -> tuple[SyntaxNode, ...]:
    return node.children if node.kind == "dotted_name" else (node,)


_NOT_NAME_PART = frozenset({"punctuation", "operator"})


def _merge_dotted(items: list[_Item]) -> list[_Item]:
    """Fold ``x . y`` runs into dotted_name, whatever whitespace surrounds the dot."""
    merged: list[_Item] = []
    i = 0
    while i < len(items):
        item = items[i]
        if (
            item.node.kind == "punctuation"
            and item.text == "."
            and merged
            and i + 1 < len(items)
            and merged[-1].node.kind not in _NOT_NAME_PART
            and items[i + 1].node.kind not in _NOT_NAME_PART
        ):
            left = merged.pop()
            right = items[i + 1]
            children = (*_dotted_parts(left.node), item.node, *_dotted_parts(right.node))
            merged.append(_Item(SyntaxNode("dotted_name", children), left.start, right.end))
            i += 2
            continue
        merged.append(item)
        i += 1
    return merged


def _fold_binary(items: list[_Item]) -> _Item | None:
    """Fold ``a op b op c`` into left-associative binary_expression nodes."""
    if len(items) < 3 or len(items) % 2 == 0:
        return None
    if any(items[i].node.kind not in ("operator", "wildcard") for i in range(1, len(items), 2)):
        return None
    folded = items[0]
    for i in range(1, len(items), 2):
        folded = _group("binary_expression", (folded, items[i], items[i + 1]))
    return folded


class _TreeBuilder:
    """One-shot conversion of sqlparse statements into a SyntaxTree."""

    def __init__(self, source: str, source_file: str | None) -> None:
        self._source = source
        self._source_file = source_file
        self._buffer = SourceBuffer(source, source_file=source_file)
        # Character index -> byte offset in the UTF-8 encoding
        self._byte_at = list(accumulate((len(ch.encode("utf-8")) for ch in source), initial=0))
        self._starts: dict[int, int] = {}
        self._dropped: set[int] = set()

    def build(self) -> SyntaxTree:
        try:
            statements = sqlparse.parse(self._source)
        except SQLParseError as e:
            raise TreeSourceError(str(e), source_file=self._source_file) from e

        self._locate(statements)
        children: list[SyntaxNode] = []
        for statement in statements:
            children.extend(self._statement(statement))

        logger.debug(
            "Built tree with %d top-level nodes from %d sqlparse statements",
            len(children),
            len(statements),
        )
        return SyntaxTree(root=SyntaxNode("program", tuple(children)), buffer=self._buffer)

    def _locate(self, statements: Sequence[sql.Statement]) -> None:
        """Record the character offset of every leaf token."""
        cursor = 0
        for statement in statements:
            for leaf in statement.flatten():
                if not leaf.value:
                    continue
                index = self._source.find(leaf.value, cursor)
                if index < 0:
                    loc = self._buffer.location(self._byte_at[cursor])
                    raise TreeSourceError(
                        f"cannot locate token {leaf.value!r} in source",
                        lineno=loc.lineno,
                        col_offset=loc.col_offset,
                        source_file=self._source_file,
                    )
                self._starts[id(leaf)] = index
                cursor = index + len(leaf.value)

    def _span(self, start: int, end: int) -> Span:
        return Span(self._byte_at[start], self._byte_at[end])

    def _token_span(self, token: sql.Token) -> Span:
        leaves = [leaf for leaf in token.flatten() if leaf.value]
        first, last = leaves[0], leaves[-1]
        return self._span(self._starts[id(first)], self._starts[id(last)] + len(last.value))

    def _statement(self, statement: sql.Statement) -> list[SyntaxNode]:
        # sqlparse may group the closing ";" into a trailing WHERE, so the
        # terminator is looked up among the leaves, not the top-level tokens.
        leaves = [
            leaf
            for leaf in statement.flatten()
            if not (leaf.is_whitespace or leaf.ttype in T.Comment)
        ]
        terminator = None
        if leaves and leaves[-1].match(T.Punctuation, ";"):
            terminator = leaves[-1]
            self._dropped.add(id(terminator))

        tokens = [t for t in statement.tokens if not t.is_whitespace]
        body = [t for t in tokens if not _is_comment(t) and id(t) not in self._dropped]

        if not body and terminator is None:
            return [SyntaxNode("comment", span=self._token_span(t)) for t in tokens]

        nodes = [SyntaxNode(statement_kind(statement.get_type()), tuple(self._clauses(body)))]
        if terminator is not None:
            nodes.append(SyntaxNode("terminator", span=self._token_span(terminator)))
        return nodes

    def _clauses(self, tokens: Sequence[sql.Token]) -> list[SyntaxNode]:
        clauses: list[SyntaxNode] = []
        kind: str | None = None
        items: list[_Item] = []
        for token in self._clause_stream(tokens):
            label = _clause_label(token)
            if label is not None or kind is None:
                if kind is not None:
                    clauses.append(self._clause(kind, items))
                kind = label or "expression_clause"
                items = []
            items.extend(self._convert(token))
        if kind is not None:
            clauses.append(self._clause(kind, items))
        return clauses

    def _clause(self, kind: str, items: list[_Item]) -> SyntaxNode:
        return SyntaxNode(kind, tuple(item.node for item in _merge_dotted(items)))

    def _clause_stream(self, tokens: Sequence[sql.Token]) -> Iterator[sql.Token]:
        """Yield statement tokens, opening groups that start with a clause keyword.

        sqlparse groups WHERE (and, depending on version, VALUES and HAVING)
        into a single token; those are flattened one level so their keyword
        starts a clause of its own.
        """
        for token in _significant(tokens):
            if token.is_group and not isinstance(token, sql.Parenthesis):
                inner = _significant(token.tokens)
                if inner and _clause_label(inner[0]) is not None:
                    yield from self._clause_stream(token.tokens)
                    continue
            yield token

    def _convert(self, token: sql.Token) -> list[_Item]:
        if not token.is_group:
            return self._leaf(token)

        items = _merge_dotted(
            [item for child in _significant(token.tokens) for item in self._convert(child)]
        )
        if not items:
            return []

        if isinstance(token, sql.Parenthesis):
            has_dml = any(t.ttype in T.Keyword.DML for t in token.tokens)
            kind = "subquery" if has_dml else "parenthesized_expression"
        elif isinstance(token, sql.Comparison) and len(items) == 3:
            kind = "binary_expression"
        elif isinstance(token, sql.Operation) and (folded := _fold_binary(items)) is not None:
            return [folded]
        elif len(items) == 1:
            return items
        elif isinstance(token, sql.IdentifierList):
            kind = "identifier_list"
        elif isinstance(token, sql.Function):
            kind = "function_call"
        elif isinstance(token, sql.Identifier):
            kind = "aliased_expression"
        else:
            kind = "expression"
        return [_group(kind, items)]

    def _leaf(self, token: sql.Token) -> list[_Item]:
        if not token.value or id(token) in self._dropped:
            return []
        start = self._starts[id(token)]
        kind = _leaf_kind(token.ttype)
        if kind == "keyword":
            # One terminal per word: "GROUP   BY" renders as "GROUP BY".
            return [
                self._terminal(kind, start + m.start(), start + m.end(), m.group())
                for m in _WORD.finditer(token.value)
            ]
        return [self._terminal(kind, start, start + len(token.value), token.value)]

    def _terminal(self, kind: str, start: int, end: int, text: str) -> _Item:
        span = self._span(start, end)
        return _Item(SyntaxNode(kind, span=span), span.start, span.end, text)
