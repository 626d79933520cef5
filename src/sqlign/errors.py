"""Exception classes for sqlign.

Provides standardized exceptions for error handling throughout sqlign.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlign.nodes import Span


def _format_location(
    lineno: int | None,
    col_offset: int | None,
    source_file: str | None,
) -> str:
    location = ""
    if source_file:
        location = f"{source_file}:"
    if lineno is not None:
        location += f"{lineno}:"
        if col_offset is not None:
            location += f"{col_offset}:"
    if location:
        location = location.rstrip(":") + " "
    return location


class SqlignError(Exception):
    """Base exception for all sqlign errors.

    Subclass this for specific error categories.
    """

    pass


class TreeSourceError(SqlignError):
    """Error while obtaining a syntax tree.

    Raised when SQL text cannot be turned into a labeled tree, or when a
    serialized tree does not have the expected shape.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize tree source error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        super().__init__(f"{_format_location(lineno, col_offset, source_file)}{message}")


class MalformedLeafError(SqlignError):
    """A terminal node's span does not resolve to text.

    The span is missing, empty, out of range for the source buffer, or cuts
    through a UTF-8 sequence. Fatal for the render pass.
    """

    def __init__(
        self,
        kind: str,
        span: Span | None,
        reason: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize malformed leaf error.

        Args:
            kind: Kind label of the offending terminal
            span: The span that failed to resolve (may be None)
            reason: Short description of what is wrong with the span
            lineno: Line of the span start, when it lies inside the buffer
            col_offset: Column of the span start, when it lies inside the buffer
            source_file: Path to source file (optional)
        """
        self.kind = kind
        self.span = span
        self.reason = reason
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        where = f" at bytes {span.start}..{span.end}" if span is not None else ""
        location = _format_location(lineno, col_offset, source_file)
        super().__init__(f"{location}malformed leaf '{kind}'{where}: {reason}")
