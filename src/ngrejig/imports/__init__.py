"""
Import management for TypeScript files.

Example
-------
>>> from ngrejig.ast import SourceFile
>>> from ngrejig.imports import ImportDescriptor, ensure_imports, remove_imports
>>>
>>> sf = SourceFile("import { a } from 'm';\\n")
>>> decl = ensure_imports(sf, ImportDescriptor(["a", "b"], "m"))
>>> [s.get_name() for s in decl.get_named_imports()]
['a', 'b']
>>> remove_imports(sf, "m", ["a", "b"])
>>> sf.get_full_text()
''
"""
from __future__ import annotations

from .declarations import (
    ImportDescriptor,
    ensure_imports,
    find_import_declaration,
    get_import_declaration,
    remove_imports,
)
from .names import import_name_text

__all__ = [
    "ImportDescriptor",
    "find_import_declaration",
    "get_import_declaration",
    "ensure_imports",
    "remove_imports",
    "import_name_text",
]
