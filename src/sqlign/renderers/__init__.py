"""sqlign renderers.

Renderers turn a SyntaxTree into aligned SQL text. Dependency order,
leaves first:

- NodePrinter: renders any subtree inline as one line
- ClauseAligner: one padded line per clause of a statement
- StatementRenderer: terminated blocks for each top-level statement

Thread Safety:
Renderers hold only immutable state; every render() call builds its own
RenderOutput. Safe for concurrent use from multiple threads.

"""

from sqlign.renderers.aligner import ClauseAligner, column_width
from sqlign.renderers.printer import Fragment, NodePrinter
from sqlign.renderers.statement import SqlRenderer, StatementRenderer, render_sql

__all__ = [
    "ClauseAligner",
    "Fragment",
    "NodePrinter",
    "SqlRenderer",
    "StatementRenderer",
    "column_width",
    "render_sql",
]
