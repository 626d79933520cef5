"""Read-only source buffer addressed by byte spans.

Terminal nodes reference their literal text by byte range. SourceBuffer
resolves those ranges and maps byte offsets back to line/column positions
for diagnostics.

Thread Safety:
SourceBuffer never mutates after construction; safe to share.

"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

from sqlign.errors import MalformedLeafError
from sqlign.location import SourceLocation

if TYPE_CHECKING:
    from sqlign.nodes import Span


class SourceBuffer:
    """Immutable byte buffer that terminal spans index into.

    Usage:
            >>> buf = SourceBuffer("SELECT a.b")
            >>> buf.text(Span(7, 10))
            'a.b'

    """

    __slots__ = ("_data", "_line_starts", "source_file")

    def __init__(self, data: bytes | str, source_file: str | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)
        self.source_file = source_file
        starts = [0]
        pos = self._data.find(b"\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = self._data.find(b"\n", pos + 1)
        self._line_starts = starts

    def decode(self) -> str:
        """Decode the whole buffer as UTF-8."""
        return self._data.decode("utf-8")

    def location(self, offset: int) -> SourceLocation:
        """Map a byte offset to a 1-indexed line/column location."""
        index = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[max(index, 0)]
        return SourceLocation(
            lineno=index + 1,
            col_offset=offset - line_start + 1,
            offset=offset,
            source_file=self.source_file,
        )

    def text(self, span: Span | None, *, kind: str = "terminal") -> str:
        """Recover the literal text of a terminal, byte for byte.

        Args:
            span: Byte range of the terminal
            kind: Kind label of the terminal, used in error messages

        Returns:
            The decoded text

        Raises:
            MalformedLeafError: If the span is missing, empty, out of range,
                or does not decode as UTF-8
        """
        if span is None:
            raise MalformedLeafError(kind, span, "terminal has no span")
        if not 0 <= span.start <= len(self._data):
            raise MalformedLeafError(
                kind, span, f"span outside source buffer of {len(self._data)} bytes"
            )
        loc = self.location(span.start)
        if span.end > len(self._data):
            raise self._leaf_error(
                kind, span, f"span outside source buffer of {len(self._data)} bytes", loc
            )
        if span.end <= span.start:
            raise self._leaf_error(kind, span, "empty span", loc)
        try:
            return self._data[span.start : span.end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise self._leaf_error(kind, span, f"invalid UTF-8 ({e.reason})", loc) from e

    @staticmethod
    def _leaf_error(
        kind: str, span: Span, reason: str, loc: SourceLocation
    ) -> MalformedLeafError:
        return MalformedLeafError(
            kind,
            span,
            reason,
            lineno=loc.lineno,
            col_offset=loc.col_offset,
            source_file=loc.source_file,
        )
