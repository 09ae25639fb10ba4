"""Recognition of Angular classes by their decorators.

Matching is by decorator name only. ``@Component`` and ``@core.Component``
both count as a component; the decorator's arguments are never inspected.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from ngrejig.ast import ClassDeclaration, Decorator, SourceFile
from ngrejig.core.errors import NotFoundError

if TYPE_CHECKING:
    from ngrejig.core.project import Project

__all__ = [
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
]

ClassPredicate = Callable[[ClassDeclaration], bool]


class DecoratorKind(str, Enum):
    """Angular class decorators, valued by decorator name."""

    COMPONENT = "Component"
    DIRECTIVE = "Directive"
    INJECTABLE = "Injectable"
    NG_MODULE = "NgModule"
    PIPE = "Pipe"


def get_decorator(class_declaration: ClassDeclaration, kind: DecoratorKind | str) -> Decorator | None:
    """The first decorator of ``kind`` on the class, or None."""
    return class_declaration.get_decorator(DecoratorKind(kind).value)


def get_decorator_or_throw(class_declaration: ClassDeclaration, kind: DecoratorKind | str) -> Decorator:
    """Like :func:`get_decorator` but raises :class:`NotFoundError` when absent."""
    kind = DecoratorKind(kind)
    decorator = get_decorator(class_declaration, kind)
    if decorator is None:
        raise NotFoundError(
            f"Decorator {kind.value} not found on class {class_declaration.get_name()}",
            key=kind.value,
        )
    return decorator


def is_kind(class_declaration: ClassDeclaration, kind: DecoratorKind | str) -> bool:
    return get_decorator(class_declaration, kind) is not None


def get_kind(class_declaration: ClassDeclaration) -> DecoratorKind | None:
    """Kind of the first Angular decorator on the class."""
    names = {k.value: k for k in DecoratorKind}
    for decorator in class_declaration.get_decorators():
        kind = names.get(decorator.get_name())
        if kind is not None:
            return kind
    return None


def find_all_of_kind(
    source: SourceFile | Project | Iterable[SourceFile],
    kind: DecoratorKind | str,
    predicate: ClassPredicate | None = None,
) -> Iterator[ClassDeclaration]:
    """Lazily yield classes of ``kind``, file by file, in declaration order.

    ``predicate`` narrows the result further. Each call starts a fresh pass.

    Examples
    --------
    >>> for component in find_all_of_kind(project, DecoratorKind.COMPONENT):
    ...     print(component.get_name())
    """
    kind = DecoratorKind(kind)
    source_files = [source] if isinstance(source, SourceFile) else source
    for source_file in source_files:
        for class_declaration in source_file.get_classes():
            if not is_kind(class_declaration, kind):
                continue
            if predicate is None or predicate(class_declaration):
                yield class_declaration


def is_angular_component(class_declaration: ClassDeclaration) -> bool:
    return is_kind(class_declaration, DecoratorKind.COMPONENT)


def is_angular_directive(class_declaration: ClassDeclaration) -> bool:
    return is_kind(class_declaration, DecoratorKind.DIRECTIVE)


def is_angular_injectable(class_declaration: ClassDeclaration) -> bool:
    return is_kind(class_declaration, DecoratorKind.INJECTABLE)


def is_angular_module(class_declaration: ClassDeclaration) -> bool:
    return is_kind(class_declaration, DecoratorKind.NG_MODULE)


def is_angular_pipe(class_declaration: ClassDeclaration) -> bool:
    return is_kind(class_declaration, DecoratorKind.PIPE)
