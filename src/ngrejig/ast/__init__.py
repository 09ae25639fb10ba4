"""
TypeScript syntax trees.

A :class:`SourceFile` parses one file with tree-sitter and hands out live node
wrappers. Editing through a wrapper rewrites the file text; wrappers obtained
earlier keep tracking their syntax across edits.

Example
-------
>>> from ngrejig.ast import SourceFile
>>>
>>> sf = SourceFile(
...     "import { Component } from '@angular/core';\\n"
...     "@Component({ selector: 'app-root' })\\n"
...     "export class AppComponent {}\\n"
... )
>>> sf.get_class_or_throw("AppComponent").get_decorators()[0].get_name()
'Component'
"""
from __future__ import annotations

from .nodes import (
    ClassDeclaration,
    Decorator,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    Node,
    StringLiteral,
)
from .source_file import SourceFile

__all__ = [
    "SourceFile",
    "Node",
    "Identifier",
    "StringLiteral",
    "ImportDeclaration",
    "ImportSpecifier",
    "ClassDeclaration",
    "Decorator",
]
