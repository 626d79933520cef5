"""Clause aligner.

Lays out one statement, one clause per line. Each clause is left-padded by
``column_width - len(clause.kind)`` where ``column_width`` is the longest
kind label among the statement's direct children. Padding is driven by the
label length, not by the rendered text, and is computed per statement.

With kinds named ``<keyword>_clause`` this lands the last character of every
clause keyword on the same column::

    SELECT a.b
      FROM t
     WHERE x = 1

"""

from sqlign.config import FormatConfig, get_format_config
from sqlign.nodes import SyntaxNode
from sqlign.output import RenderOutput
from sqlign.renderers.printer import NodePrinter


def column_width(statement: SyntaxNode) -> int:
    """Longest kind label among the direct children, 0 when there are none."""
    return max((len(child.kind) for child in statement.children), default=0)


class ClauseAligner:
    """Render a statement's clauses flush to a common column."""

    __slots__ = ("_config", "_printer")

    def __init__(self, printer: NodePrinter, config: FormatConfig | None = None) -> None:
        self._printer = printer
        self._config = config or get_format_config()

    def render_statement(self, stmt: SyntaxNode, out: RenderOutput) -> None:
        """Append one line per direct child of ``stmt`` to ``out``."""
        width = column_width(stmt)
        for clause in stmt.children:
            out.pad(width - len(clause.kind))
            self._printer.render_node(clause, out)
            out.newline(self._config.newline)
