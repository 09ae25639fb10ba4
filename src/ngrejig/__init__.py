"""
ngrejig - programmatic edits of Angular TypeScript code.

Finds Angular classes by their decorators and keeps ES import declarations
consistent while a code generator or migration rewrites a file.

Example
-------
>>> from ngrejig import DecoratorKind, ImportDescriptor, Project, ensure_imports, remove_imports
>>>
>>> project = Project("src/app/")
>>> for cls in project.find_classes(DecoratorKind.COMPONENT):
...     sf = cls.source_file
...     ensure_imports(sf, ImportDescriptor(["ChangeDetectionStrategy"], "@angular/core"))
...     remove_imports(sf, "@angular/http", ["Http"])
>>>
>>> # Preview instead of writing
>>> project.dry_run = True
>>> print(project.save().diff)

Classes
-------
Project
    Set of TypeScript files loaded, edited and saved together.

SourceFile
    One parsed file. Hands out live nodes that survive edits.

ImportDescriptor
    Named imports wanted from one module.

DecoratorKind
    Component, Directive, Injectable, NgModule or Pipe.

Result, ErrorResult, BatchResult
    Outcome of saving files. Saving never raises.

NotFoundError
    Raised by ``get_*`` and ``*_or_throw`` lookups.
"""
from __future__ import annotations

from ngrejig.angular import (
    DecoratorKind,
    find_all_of_kind,
    get_decorator,
    get_decorator_or_throw,
    get_kind,
    is_angular_component,
    is_angular_directive,
    is_angular_injectable,
    is_angular_module,
    is_angular_pipe,
    is_kind,
)
from ngrejig.ast import (
    ClassDeclaration,
    Decorator,
    ImportDeclaration,
    ImportSpecifier,
    SourceFile,
)
from ngrejig.core import (
    BatchResult,
    ErrorResult,
    InvalidOperationError,
    ManipulationSettings,
    NgRejigError,
    NotFoundError,
    ParseError,
    QuoteKind,
    Result,
)
from ngrejig.core.project import Project
from ngrejig.imports import (
    ImportDescriptor,
    ensure_imports,
    find_import_declaration,
    get_import_declaration,
    import_name_text,
    remove_imports,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "Project",
    "SourceFile",
    # Nodes
    "ClassDeclaration",
    "Decorator",
    "ImportDeclaration",
    "ImportSpecifier",
    # Imports
    "ImportDescriptor",
    "find_import_declaration",
    "get_import_declaration",
    "ensure_imports",
    "remove_imports",
    "import_name_text",
    # Angular
    "DecoratorKind",
    "get_decorator",
    "get_decorator_or_throw",
    "is_kind",
    "get_kind",
    "find_all_of_kind",
    "is_angular_component",
    "is_angular_directive",
    "is_angular_injectable",
    "is_angular_module",
    "is_angular_pipe",
    # Results, settings and errors
    "Result",
    "ErrorResult",
    "BatchResult",
    "ManipulationSettings",
    "QuoteKind",
    "NgRejigError",
    "NotFoundError",
    "InvalidOperationError",
    "ParseError",
]
