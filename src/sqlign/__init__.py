"""
sqlign: structure-aware SQL alignment formatter

Re-emits SQL as canonical, vertically aligned text: one clause per line,
every clause keyword flush against a per-statement column.

Quick Start:
    >>> from sqlign import format_sql
    >>> print(format_sql("SELECT a.b FROM t WHERE x = 1"), end="")
    SELECT a.b
      FROM t
     WHERE x = 1
    ;

    >>> # Or parse and render separately
    >>> from sqlign import parse, render
    >>> tree = parse("select 1")
    >>> render(tree)
    'select 1\\n;\\n'

Trees from other grammars:
    Any tree whose nodes carry kind labels and byte spans can be rendered;
    see ``sqlign.serialization`` for the JSON form.
"""

from sqlign.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from sqlign.debug import dump_tree
from sqlign.errors import MalformedLeafError, SqlignError, TreeSourceError
from sqlign.kinds import KindTag, NodeKind, classify
from sqlign.location import SourceLocation
from sqlign.nodes import Span, SyntaxNode, SyntaxTree
from sqlign.output import RenderOutput
from sqlign.renderers import (
    ClauseAligner,
    Fragment,
    NodePrinter,
    SqlRenderer,
    StatementRenderer,
    render_sql,
)
from sqlign.serialization import from_dict, from_json, to_dict, to_json, tree_from_json, tree_to_json
from sqlign.source import SourceBuffer
from sqlign.treesource import parse_sql

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> SyntaxTree:
    """Parse SQL text into a syntax tree.

    Args:
        source: SQL source text
        source_file: Optional source file path for error messages

    Returns:
        SyntaxTree rooted at a ``program`` node
    """
    return parse_sql(source, source_file=source_file)


def render(tree: SyntaxTree, *, config: FormatConfig | None = None) -> str:
    """Render a syntax tree to aligned SQL.

    Args:
        tree: Tree plus the source buffer its spans index into
        config: Format config (active context config if None)

    Returns:
        The formatted document
    """
    return render_sql(tree, config=config)


def format_sql(
    source: str,
    *,
    source_file: str | None = None,
    config: FormatConfig | None = None,
) -> str:
    """Parse and render SQL in one step.

    Example:
        >>> format_sql("SELECT 1; SELECT 2")
        'SELECT 1\\n;\\nSELECT 2\\n;\\n'
    """
    return render(parse(source, source_file=source_file), config=config)


class SqlFormatter:
    """Reusable formatter bound to one configuration.

    Usage:
        >>> fmt = SqlFormatter(FormatConfig(terminator="/"))
        >>> fmt("select 1")
        'select 1\\n/\\n'

    Thread Safety:
        Holds only an immutable config. Safe to share between threads.

    """

    __slots__ = ("_config",)

    def __init__(self, config: FormatConfig | None = None) -> None:
        self._config = config or get_format_config()

    @property
    def config(self) -> FormatConfig:
        return self._config

    def __call__(self, source: str, *, source_file: str | None = None) -> str:
        return format_sql(source, source_file=source_file, config=self._config)

    def parse(self, source: str, *, source_file: str | None = None) -> SyntaxTree:
        return parse(source, source_file=source_file)

    def render(self, tree: SyntaxTree) -> str:
        return render(tree, config=self._config)


__all__ = [
    "__version__",
    # High-level
    "SqlFormatter",
    "format_sql",
    "parse",
    "render",
    # Tree
    "Span",
    "SyntaxNode",
    "SyntaxTree",
    "SourceBuffer",
    "SourceLocation",
    "parse_sql",
    "dump_tree",
    # Kinds
    "KindTag",
    "NodeKind",
    "classify",
    # Renderers
    "ClauseAligner",
    "Fragment",
    "NodePrinter",
    "RenderOutput",
    "SqlRenderer",
    "StatementRenderer",
    "render_sql",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    "tree_from_json",
    "tree_to_json",
    # Configuration (ContextVar-based)
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
    # Errors
    "MalformedLeafError",
    "SqlignError",
    "TreeSourceError",
]
