"""Locate, merge and remove ES import declarations.

All functions take a :class:`~ngrejig.ast.SourceFile` owned by the caller and
edit it in place. Declarations are matched by module specifier; when a file
imports the same module twice, only the first declaration is ever used.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ngrejig.ast import ImportDeclaration, SourceFile
from ngrejig.core.errors import NotFoundError
from ngrejig.imports.names import import_name_text

logger = logging.getLogger(__name__)

__all__ = [
    "ImportDescriptor",
    "find_import_declaration",
    "get_import_declaration",
    "ensure_imports",
    "remove_imports",
]


def _as_names(names: str | Iterable[str]) -> tuple[str, ...]:
    # a bare string is one name, not a sequence of characters
    if isinstance(names, str):
        return (names,)
    return tuple(names)


@dataclass(frozen=True)
class ImportDescriptor:
    """Named imports wanted from one module.

    Examples
    --------
    >>> ImportDescriptor(["Component", "OnInit"], "@angular/core")
    ImportDescriptor(names=('Component', 'OnInit'), module='@angular/core')
    """

    names: tuple[str, ...]
    module: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", _as_names(self.names))


def find_import_declaration(document: SourceFile, module_name: str) -> ImportDeclaration | None:
    """First import declaration whose module specifier equals ``module_name``."""
    for declaration in document.get_import_declarations():
        if declaration.get_module_specifier_value() == module_name:
            return declaration
    return None


def get_import_declaration(document: SourceFile, module_name: str) -> ImportDeclaration:
    """Like :func:`find_import_declaration` but raises when absent.

    Raises
    ------
    NotFoundError
        If no declaration imports ``module_name``.
    """
    declaration = find_import_declaration(document, module_name)
    if declaration is None:
        raise NotFoundError(f"Module {module_name} not found", key=module_name)
    return declaration


def ensure_imports(document: SourceFile, descriptor: ImportDescriptor) -> ImportDeclaration | None:
    """Make sure every name in ``descriptor`` is imported from its module.

    A missing declaration is created with the names in the given order.
    An existing one keeps its specifiers; names it lacks are appended after
    them. Calling this again with the same descriptor changes nothing.

    With no names and no existing declaration nothing is created and None
    is returned.
    """
    names = list(dict.fromkeys(descriptor.names))
    declaration = find_import_declaration(document, descriptor.module)

    if declaration is None:
        if not names:
            return None
        logger.debug(f"Adding import of {', '.join(names)} from {descriptor.module!r}")
        return document.add_import_declaration(named_imports=names, module_specifier=descriptor.module)

    existing = {import_name_text(s.get_name_node()) for s in declaration.get_named_imports()}
    for name in names:
        if name in existing:
            continue
        logger.debug(f"Appending {name} to import from {descriptor.module!r}")
        declaration.add_named_import(name)
        existing.add(name)
    return declaration


def remove_imports(document: SourceFile, module_name: str, names: str | Iterable[str]) -> None:
    """Remove named imports from ``module_name``'s declaration.

    When this leaves the declaration without named imports, the whole
    statement is deleted, including a default import it may carry.
    Missing modules and names are ignored. A single name may be passed as
    a plain string.
    """
    declaration = find_import_declaration(document, module_name)
    if declaration is None:
        return

    unwanted = set(_as_names(names))
    removed = 0
    for specifier in declaration.get_named_imports():
        if import_name_text(specifier.get_name_node()) in unwanted:
            specifier.remove()
            removed += 1

    if removed and not declaration.get_named_imports():
        logger.debug(f"Removing empty import declaration for {module_name!r}")
        declaration.remove()
