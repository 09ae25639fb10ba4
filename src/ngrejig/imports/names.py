"""Text identity of import names."""
from __future__ import annotations

from ngrejig.ast.nodes import Identifier, StringLiteral


def import_name_text(name_node: Identifier | StringLiteral) -> str:
    """Render an import specifier's name node as comparable text.

    String-literal names (``import { 'a-b' as ab }``) are compared by their
    unescaped value; identifiers by their source text.
    """
    if isinstance(name_node, StringLiteral):
        return name_node.get_literal_value()
    return name_node.get_text()
