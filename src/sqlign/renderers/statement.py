"""Statement renderer and the public SQL renderer.

``StatementRenderer`` walks the root's direct children, renders each
statement as an aligned block and terminates it with ``;`` and a line
break. Anything at the top level that is not a statement (stray
terminators, comments) produces no output.

Thread Safety:
All per-render state lives in the RenderOutput created by each render()
call. A SqlRenderer instance can be shared between threads.

"""

from sqlign.config import FormatConfig, get_format_config
from sqlign.kinds import KindTag, classify
from sqlign.nodes import SyntaxNode, SyntaxTree
from sqlign.output import RenderOutput
from sqlign.renderers.aligner import ClauseAligner
from sqlign.renderers.printer import NodePrinter
from sqlign.source import SourceBuffer
from sqlign.utils.logger import get_logger

logger = get_logger(__name__)


class StatementRenderer:
    """Render every top-level statement of a tree as a terminated block."""

    __slots__ = ("_aligner", "_config")

    def __init__(self, buffer: SourceBuffer, config: FormatConfig | None = None) -> None:
        self._config = config or get_format_config()
        self._aligner = ClauseAligner(NodePrinter(buffer, self._config), self._config)

    def render(self, root: SyntaxNode, out: RenderOutput) -> None:
        """Append all statements under ``root`` to ``out``, in tree order."""
        for child in root.children:
            if classify(child.kind, self._config).tag is not KindTag.STATEMENT:
                logger.debug("Skipping top-level %s", child.kind)
                continue
            self._aligner.render_statement(child, out)
            out.append(self._config.terminator)
            out.newline(self._config.newline)


class SqlRenderer:
    """Render a SyntaxTree to aligned SQL text.

    Example:
        >>> from sqlign.treesource import parse_sql
        >>> SqlRenderer().render(parse_sql("select a from t"))
        'select a\\n  from t\\n;\\n'

    """

    __slots__ = ("_config",)

    def __init__(self, config: FormatConfig | None = None) -> None:
        self._config = config

    def render(self, tree: SyntaxTree) -> str:
        """Render the whole tree.

        Raises:
            MalformedLeafError: If a terminal span cannot be resolved. No
                partial document is returned.
        """
        out = RenderOutput()
        StatementRenderer(tree.buffer, self._config).render(tree.root, out)
        return out.build()


def render_sql(tree: SyntaxTree, *, config: FormatConfig | None = None) -> str:
    """Render a tree to aligned SQL text.

    Args:
        tree: Tree and source buffer to render
        config: Format config (active context config if None)

    Returns:
        The formatted document
    """
    return SqlRenderer(config=config).render(tree)
