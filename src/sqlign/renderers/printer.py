"""Inline node printer.

Renders any subtree (clause body, expression, identifier chain) as a single
logical line. Every render call returns a ``Fragment``: the rendered text
plus whether it takes part in space-joining, so the caller decides each
join from two explicit values instead of threading flags through the
recursion.

Spacing rules, keyed on the node's own kind:

- terminal: the literal text from its span, verbatim
- empty statement or clause (no children, no span): nothing, and no join
  space on its account
- dotted_name: children concatenated, no separator
- binary_expression: ``<left> <op> <right>``, one mandatory space each side
- sub-expressions and everything else: children joined by one space

"""

from dataclasses import dataclass
from functools import lru_cache

from sqlign.config import FormatConfig, get_format_config
from sqlign.kinds import KindTag, classify
from sqlign.nodes import SyntaxNode
from sqlign.output import RenderOutput
from sqlign.source import SourceBuffer
from sqlign.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Rendered text of one node.

    Attributes:
        text: The rendered text (never contains a line break added by the printer)
        spaced: Whether a separating space is wanted between this fragment
            and a spaced neighbour; False for empty statements and clauses

    """

    text: str
    spaced: bool = True

    @classmethod
    def of(cls, text: str) -> "Fragment":
        return cls(text=text, spaced=bool(text))


_EMPTY = Fragment("", spaced=False)


@lru_cache(maxsize=256)
def _note_generic(label: str) -> None:
    # Logged once per label; the generic rule is the expected fallback.
    logger.debug("No dedicated layout for kind %r, joining children with spaces", label)


class NodePrinter:
    """Render subtrees inline against one source buffer.

    Thread Safety:
        Holds only the buffer and config, both immutable. Safe to share.

    """

    __slots__ = ("_buffer", "_config")

    def __init__(self, buffer: SourceBuffer, config: FormatConfig | None = None) -> None:
        self._buffer = buffer
        self._config = config or get_format_config()

    def render_node(self, node: SyntaxNode, out: RenderOutput) -> Fragment:
        """Render ``node`` and append its text to ``out``.

        Raises:
            MalformedLeafError: If any terminal below ``node`` has an
                unresolvable span
        """
        fragment = self.fragment(node)
        out.append(fragment.text)
        return fragment

    def fragment(self, node: SyntaxNode) -> Fragment:
        """Render ``node`` to a Fragment without writing anywhere."""
        kind = classify(node.kind, self._config)
        if node.is_terminal:
            if node.span is None and kind.tag in (KindTag.STATEMENT, KindTag.CLAUSE):
                # Empty statement or clause: renders to nothing, joins no space.
                return _EMPTY
            return Fragment.of(self._buffer.text(node.span, kind=node.kind))

        match kind.tag:
            case KindTag.DOTTED_NAME:
                return self._concat(node.children)
            case KindTag.BINARY_EXPRESSION:
                return self._binary(node)
            case KindTag.SUB_EXPRESSION:
                return self._join(node.children)
            case KindTag.STATEMENT | KindTag.CLAUSE:
                # Nested inside an expression (e.g. a subquery body): inline.
                return self._join(node.children)
            case KindTag.GENERIC:
                _note_generic(kind.label)
                return self._join(node.children)

    def _concat(self, children: tuple[SyntaxNode, ...]) -> Fragment:
        return Fragment.of("".join(self.fragment(child).text for child in children))

    def _binary(self, node: SyntaxNode) -> Fragment:
        parts = [self.fragment(child) for child in node.children]
        if len(parts) != 3:
            logger.debug(
                "%s with %d children, spacing every operand",
                node.kind,
                len(parts),
            )
        return Fragment.of(" ".join(part.text for part in parts))

    def _join(self, children: tuple[SyntaxNode, ...]) -> Fragment:
        parts: list[str] = []
        previous = _EMPTY
        for child in children:
            current = self.fragment(child)
            if previous.spaced and current.spaced:
                parts.append(" ")
            parts.append(current.text)
            if current.spaced:
                previous = current
        return Fragment.of("".join(parts))
