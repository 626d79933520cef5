"""Source location tracking for error messages and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    Line and column are 1-indexed; ``offset`` is the absolute byte offset
    into the source buffer. Columns count bytes, not characters.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute byte offset in source buffer
        source_file: Source file path (optional)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None
