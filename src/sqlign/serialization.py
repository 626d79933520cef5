"""Tree serialization: JSON round-trip for sqlign syntax trees.

Lets any external grammar hand sqlign a ready-made tree. A serialized node
is ``{"kind": ..., "children": [...], "span": [start, end]}``; ``children``
is omitted on terminals and ``span`` on inner nodes. A whole tree is
``{"source": <text>, "root": <node>}``.

All output is deterministic (sorted keys).

Example:
    from sqlign.serialization import tree_from_json, tree_to_json

    restored = tree_from_json(tree_to_json(tree))
    assert restored.root == tree.root

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from typing import Any

from sqlign.errors import TreeSourceError
from sqlign.nodes import Span, SyntaxNode, SyntaxTree
from sqlign.source import SourceBuffer


def to_dict(node: SyntaxNode) -> dict[str, Any]:
    """Convert a node (recursively) to a JSON-compatible dict."""
    result: dict[str, Any] = {"kind": node.kind}
    if node.children:
        result["children"] = [to_dict(child) for child in node.children]
    if node.span is not None:
        result["span"] = [node.span.start, node.span.end]
    return result


def from_dict(data: dict[str, Any]) -> SyntaxNode:
    """Reconstruct a node from a dict produced by ``to_dict``.

    Raises:
        TreeSourceError: If the dict does not describe a node
    """
    if not isinstance(data, dict):
        raise TreeSourceError(f"expected a node object, got {type(data).__name__}")
    kind = data.get("kind")
    if not isinstance(kind, str):
        raise TreeSourceError(f"node kind must be a string, got {kind!r}")

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise TreeSourceError(f"children of '{kind}' must be a list")

    raw_span = data.get("span")
    span = None
    if raw_span is not None:
        if (
            not isinstance(raw_span, list)
            or len(raw_span) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in raw_span)
        ):
            raise TreeSourceError(f"span of '{kind}' must be [start, end], got {raw_span!r}")
        span = Span(raw_span[0], raw_span[1])

    return SyntaxNode(kind, tuple(from_dict(child) for child in raw_children), span)


def to_json(node: SyntaxNode, *, indent: int | None = None) -> str:
    """Serialize a node to a JSON string."""
    return json.dumps(to_dict(node), indent=indent, sort_keys=True)


def from_json(json_str: str) -> SyntaxNode:
    """Deserialize a node from a JSON string."""
    return from_dict(_loads(json_str))


def tree_to_json(tree: SyntaxTree, *, indent: int | None = None) -> str:
    """Serialize a tree together with its source text."""
    payload = {"source": tree.buffer.decode(), "root": to_dict(tree.root)}
    return json.dumps(payload, indent=indent, sort_keys=True)


def tree_from_json(json_str: str, *, source_file: str | None = None) -> SyntaxTree:
    """Deserialize a tree written by ``tree_to_json``.

    Spans are checked lazily, when a renderer resolves them.

    Raises:
        TreeSourceError: If the document is not a serialized tree
    """
    data = _loads(json_str)
    if not isinstance(data, dict) or not isinstance(data.get("source"), str):
        raise TreeSourceError("serialized tree needs a 'source' string", source_file=source_file)
    if "root" not in data:
        raise TreeSourceError("serialized tree needs a 'root' node", source_file=source_file)
    return SyntaxTree(
        root=from_dict(data["root"]),
        buffer=SourceBuffer(data["source"], source_file=source_file),
    )


def _loads(json_str: str) -> Any:
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise TreeSourceError(f"invalid JSON: {e.msg}", lineno=e.lineno, col_offset=e.colno) from e
