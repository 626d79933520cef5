"""Append-only render output.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation.

Thread Safety:
RenderOutput instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class RenderOutput:
    """Append-only text accumulator for one render pass.

    Written left to right and read back once with ``build()``.

    Usage:
            >>> out = RenderOutput()
            >>> out.pad(2).append("FROM t").newline()
            >>> out.build()
            '  FROM t\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> RenderOutput:
        """Append a string (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def pad(self, width: int) -> RenderOutput:
        """Append ``width`` spaces; a negative width appends nothing."""
        if width > 0:
            self._parts.append(" " * width)
        return self

    def newline(self, newline: str = "\n") -> RenderOutput:
        """Append a line break."""
        self._parts.append(newline)
        return self

    def build(self) -> str:
        """Join all parts into the final document."""
        return "".join(self._parts)
