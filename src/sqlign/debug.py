"""Debug listing of a syntax tree.

One line per node, indented two spaces per level, with the literal text of
terminals. Meant for inspecting what a tree source produced::

    program
      select_statement
        select_clause
          keyword 'SELECT'
          dotted_name
            identifier 'a'
            punctuation '.'
            identifier 'b'

"""

from sqlign.errors import MalformedLeafError
from sqlign.nodes import SyntaxTree
from sqlign.output import RenderOutput


def dump_tree(tree: SyntaxTree) -> str:
    """List every node of ``tree`` depth-first.

    Terminals whose span does not resolve are listed with the failure
    reason instead of their text.
    """
    out = RenderOutput()
    for depth, node in tree.root.walk():
        out.pad(2 * depth).append(node.kind)
        if node.is_terminal and node.span is not None:
            try:
                out.append(f" {tree.buffer.text(node.span, kind=node.kind)!r}")
            except MalformedLeafError as e:
                out.append(f" <{e.reason}>")
        out.newline()
    return out.build()
