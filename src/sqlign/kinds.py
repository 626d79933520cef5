"""Classification of node kind labels.

Kind labels are free-form strings supplied by the tree source. ``classify``
maps each label onto a closed set of tagged variants so renderers dispatch
with an exhaustive ``match`` instead of chains of string comparisons.
Labels that match no structural rule land in ``KindTag.GENERIC`` and keep
their raw text.

Example:
    >>> classify("where_clause")
    NodeKind(tag=<KindTag.CLAUSE: 2>, label='where_clause')
    >>> classify("function_call").tag is KindTag.GENERIC
    True

"""

from dataclasses import dataclass
from enum import Enum, auto

from sqlign.config import FormatConfig, get_format_config


class KindTag(Enum):
    """Structural categories the renderers distinguish."""

    STATEMENT = auto()
    CLAUSE = auto()
    DOTTED_NAME = auto()
    BINARY_EXPRESSION = auto()
    SUB_EXPRESSION = auto()
    GENERIC = auto()


@dataclass(frozen=True, slots=True)
class NodeKind:
    """A classified kind label."""

    tag: KindTag
    label: str


def classify(label: str, config: FormatConfig | None = None) -> NodeKind:
    """Classify a kind label.

    Exact structural kinds are checked before suffix rules, so a
    ``dotted_name`` is never mistaken for anything else.

    Args:
        label: Raw kind label of a node
        config: Config holding the kind names and suffixes (active config if None)

    Returns:
        NodeKind carrying the tag and the raw label
    """
    cfg = config or get_format_config()
    if label == cfg.dotted_name_kind:
        tag = KindTag.DOTTED_NAME
    elif label == cfg.binary_expression_kind:
        tag = KindTag.BINARY_EXPRESSION
    elif label.endswith(cfg.statement_suffix):
        tag = KindTag.STATEMENT
    elif label.endswith(cfg.clause_suffix):
        tag = KindTag.CLAUSE
    elif label.endswith(cfg.subexpression_suffixes):
        tag = KindTag.SUB_EXPRESSION
    else:
        tag = KindTag.GENERIC
    return NodeKind(tag=tag, label=label)
