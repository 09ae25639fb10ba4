"""Shared tree-sitter parser for TypeScript sources."""
from __future__ import annotations

import tree_sitter as ts
import tree_sitter_typescript as tsts

TS_LANGUAGE = ts.Language(tsts.language_typescript())
TSX_LANGUAGE = ts.Language(tsts.language_tsx())

_parsers: dict[bool, ts.Parser] = {}


def get_parser(tsx: bool = False) -> ts.Parser:
    """Return the process-wide parser for ``.ts`` (or ``.tsx``) sources."""
    parser = _parsers.get(tsx)
    if parser is None:
        parser = ts.Parser(TSX_LANGUAGE if tsx else TS_LANGUAGE)
        _parsers[tsx] = parser
    return parser


def parse(source: bytes, tsx: bool = False) -> ts.Tree:
    return get_parser(tsx).parse(source)


def first_error(node: ts.Node) -> ts.Node | None:
    """Depth-first search for the first ERROR or MISSING node."""
    if not node.has_error:
        return None
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        stack.extend(c for c in reversed(current.children) if c.has_error or c.is_missing)
    return None
