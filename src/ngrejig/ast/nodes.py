"""Live node wrappers over a parsed TypeScript source file.

Wrappers do not hold tree-sitter nodes directly, because every edit replaces
the tree. Each wrapper remembers its node type and byte span; the owning
:class:`~ngrejig.ast.source_file.SourceFile` shifts those spans as text is
inserted or removed and marks wrappers whose node was deleted as forgotten.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, TypeVar

import tree_sitter as ts

from ngrejig.ast.literals import unquote
from ngrejig.core.errors import InvalidOperationError, NotFoundError

if TYPE_CHECKING:
    from ngrejig.ast.source_file import SourceFile

__all__ = [
    "Node",
    "Identifier",
    "StringLiteral",
    "ImportDeclaration",
    "ImportSpecifier",
    "ClassDeclaration",
    "Decorator",
    "CLASS_NODE_TYPES",
]

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration")

NodeT = TypeVar("NodeT", bound="Node")


def _child_of_type(node: ts.Node, *types: str) -> ts.Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _children_of_type(node: ts.Node, *types: str) -> list[ts.Node]:
    return [child for child in node.children if child.type in types]


class Node:
    """Base class for live handles on syntax nodes."""

    kind: ClassVar[str] = "node"

    def __init__(self, source_file: SourceFile, ts_node: ts.Node) -> None:
        self._source_file = source_file
        self._type = ts_node.type
        self._start = ts_node.start_byte
        self._end = ts_node.end_byte
        self._forgotten = False

    def __repr__(self) -> str:
        if self._forgotten:
            return f"{self.__class__.__name__}(<forgotten>)"
        return f"{self.__class__.__name__}({self.get_text()!r})"

    @property
    def source_file(self) -> SourceFile:
        """The source file this node belongs to."""
        return self._source_file

    @property
    def _key(self) -> tuple[str, int, int]:
        return (self._type, self._start, self._end)

    @property
    def ts_node(self) -> ts.Node:
        """The tree-sitter node for the current tree."""
        self._ensure_alive()
        return self._source_file._resolve(self._type, self._start, self._end)

    def was_forgotten(self) -> bool:
        """True once the node has been removed from its source file."""
        return self._forgotten

    def get_text(self) -> str:
        self._ensure_alive()
        return self._source_file._slice(self._start, self._end)

    def get_start(self) -> int:
        """Byte offset where the node starts."""
        self._ensure_alive()
        return self._start

    def get_end(self) -> int:
        self._ensure_alive()
        return self._end

    def get_start_line_number(self) -> int:
        """1-based line number of the first character of the node."""
        return self.ts_node.start_point[0] + 1

    def _ensure_alive(self) -> None:
        if self._forgotten:
            raise InvalidOperationError(
                f"Attempted to use a {self.kind} that was removed from its source file"
            )

    def _shift(self, start: int, end: int, delta: int) -> bool:
        """Move this node's span past an edit of ``[start, end)``.

        Returns False (and forgets the node) when the edit destroyed it.
        """
        s, e = self._start, self._end
        if e <= start:
            return True
        if s >= end:
            self._start += delta
            self._end += delta
            return True
        if start <= s and e <= end:
            self._forget()
            return False
        if s <= start and end <= e:
            self._end += delta
            return True
        self._forget()
        return False

    def _forget(self) -> None:
        self._forgotten = True

    def _wrap(self, cls: type[NodeT], ts_node: ts.Node) -> NodeT:
        return self._source_file._wrap(cls, ts_node)


class Identifier(Node):
    """An identifier used as a name."""

    kind = "identifier"


class StringLiteral(Node):
    """A quoted string literal."""

    kind = "string literal"

    def get_literal_value(self) -> str:
        """The literal's value with quotes removed and escapes decoded."""
        return unquote(self.get_text())


def _wrap_name(owner: Node, ts_node: ts.Node) -> Identifier | StringLiteral:
    if ts_node.type == "string":
        return owner._wrap(StringLiteral, ts_node)
    return owner._wrap(Identifier, ts_node)


class ImportSpecifier(Node):
    """One named binding inside ``import { ... } from '...'``."""

    kind = "import specifier"

    def get_name_node(self) -> Identifier | StringLiteral:
        """The imported name: ``a`` in ``a as b``."""
        ts_node = self.ts_node
        name = ts_node.child_by_field_name("name")
        if name is None:
            name = next(c for c in ts_node.named_children if c.type in ("identifier", "string"))
        return _wrap_name(self, name)

    def get_name(self) -> str:
        return self.get_name_node().get_text()

    def get_alias_node(self) -> Identifier | None:
        alias = self.ts_node.child_by_field_name("alias")
        return None if alias is None else self._wrap(Identifier, alias)

    def get_alias(self) -> str | None:
        alias = self.get_alias_node()
        return None if alias is None else alias.get_text()

    def get_local_name(self) -> str:
        """The name bound in the importing module."""
        return self.get_alias() or self.get_name()

    def is_type_only(self) -> bool:
        return _child_of_type(self.ts_node, "type") is not None

    def get_import_declaration(self) -> ImportDeclaration:
        node = self.ts_node.parent
        while node is not None and node.type != "import_statement":
            node = node.parent
        if node is None:
            raise InvalidOperationError("Import specifier is not inside an import declaration")
        return self._wrap(ImportDeclaration, node)

    def remove(self) -> None:
        """Remove this specifier along with its separating comma.

        Removing the only specifier drops the whole brace clause when the
        declaration also has a default import (``import d, { a }`` becomes
        ``import d``); otherwise the braces are left empty.
        """
        ts_node = self.ts_node
        named = ts_node.parent
        siblings = _children_of_type(named, "import_specifier")
        index = next(i for i, s in enumerate(siblings) if s.start_byte == ts_node.start_byte)

        if len(siblings) == 1:
            default = _child_of_type(named.parent, "identifier")
            if default is not None:
                self._source_file._replace_range(default.end_byte, named.end_byte, "")
            else:
                self._source_file._replace_range(named.start_byte, named.end_byte, "{}")
        elif index < len(siblings) - 1:
            self._source_file._replace_range(ts_node.start_byte, siblings[index + 1].start_byte, "")
        else:
            self._source_file._replace_range(siblings[index - 1].end_byte, ts_node.end_byte, "")


class ImportDeclaration(Node):
    """A top-level ``import ... from '...'`` statement."""

    kind = "import declaration"

    def _clause(self) -> ts.Node | None:
        return _child_of_type(self.ts_node, "import_clause")

    def get_module_specifier(self) -> StringLiteral:
        ts_node = self.ts_node
        source = ts_node.child_by_field_name("source") or _child_of_type(ts_node, "string")
        if source is None:
            raise InvalidOperationError(f"Import declaration has no module specifier: {self.get_text()!r}")
        return self._wrap(StringLiteral, source)

    def get_module_specifier_value(self) -> str:
        """The module specifier as written, without quotes."""
        return self.get_module_specifier().get_literal_value()

    def get_default_import(self) -> Identifier | None:
        clause = self._clause()
        if clause is None:
            return None
        default = _child_of_type(clause, "identifier")
        return None if default is None else self._wrap(Identifier, default)

    def get_namespace_import(self) -> Identifier | None:
        clause = self._clause()
        namespace = None if clause is None else _child_of_type(clause, "namespace_import")
        if namespace is None:
            return None
        name = _child_of_type(namespace, "identifier")
        return None if name is None else self._wrap(Identifier, name)

    def get_named_imports(self) -> list[ImportSpecifier]:
        """Named specifiers in source order."""
        clause = self._clause()
        named = None if clause is None else _child_of_type(clause, "named_imports")
        if named is None:
            return []
        return [self._wrap(ImportSpecifier, s) for s in _children_of_type(named, "import_specifier")]

    def is_type_only(self) -> bool:
        """True for ``import type { ... }``."""
        return _child_of_type(self.ts_node, "type") is not None

    def add_named_import(self, name: str) -> ImportSpecifier:
        """Append ``name`` to the named imports, creating the braces if needed.

        Raises
        ------
        InvalidOperationError
            If the declaration is a namespace import (``import * as x``),
            which cannot be combined with named imports.
        """
        ts_node = self.ts_node
        clause = _child_of_type(ts_node, "import_clause")
        source_file = self._source_file

        if clause is None:
            # side-effect import: import 'm';
            keyword = ts_node.children[0]
            source_file._replace_range(keyword.end_byte, keyword.end_byte, f" {{ {name} }} from")
        else:
            named = _child_of_type(clause, "named_imports")
            if named is not None:
                specifiers = _children_of_type(named, "import_specifier")
                if specifiers:
                    last = specifiers[-1]
                    source_file._replace_range(last.end_byte, last.end_byte, f", {name}")
                else:
                    source_file._replace_range(named.start_byte, named.end_byte, f"{{ {name} }}")
            elif _child_of_type(clause, "namespace_import") is not None:
                raise InvalidOperationError(
                    f"Cannot add named import {name!r} to namespace import of "
                    f"{self.get_module_specifier_value()!r}"
                )
            else:
                source_file._replace_range(clause.end_byte, clause.end_byte, f", {{ {name} }}")

        return self.get_named_imports()[-1]

    def add_named_imports(self, names: list[str]) -> list[ImportSpecifier]:
        return [self.add_named_import(name) for name in names]

    def remove(self) -> None:
        """Delete the statement, and its line when nothing else is on it."""
        ts_node = self.ts_node
        start, end = self._source_file._line_extent(ts_node.start_byte, ts_node.end_byte)
        self._source_file._replace_range(start, end, "")


class Decorator(Node):
    """A ``@Name`` or ``@Name(...)`` decorator attached to a class."""

    kind = "decorator"

    def _expression(self) -> ts.Node:
        expression = next(iter(self.ts_node.named_children), None)
        while expression is not None and expression.type == "parenthesized_expression":
            expression = next(iter(expression.named_children), None)
        if expression is None:
            raise InvalidOperationError(f"Decorator has no expression: {self.get_text()!r}")
        return expression

    def _callee(self) -> ts.Node:
        expression = self._expression()
        if expression.type == "call_expression":
            return expression.child_by_field_name("function") or expression.named_children[0]
        return expression

    def is_decorator_factory(self) -> bool:
        """True for ``@Name(...)``."""
        return self._expression().type == "call_expression"

    def get_full_name(self) -> str:
        """The decorator expression without arguments, e.g. ``core.Component``."""
        return self._callee().text.decode("utf-8")

    def get_name(self) -> str:
        """The last identifier of the decorator expression, e.g. ``Component``."""
        callee = self._callee()
        if callee.type == "member_expression":
            prop = callee.child_by_field_name("property")
            if prop is not None:
                return prop.text.decode("utf-8")
        return callee.text.decode("utf-8")

    def get_arguments(self) -> list[str]:
        """Source text of each call argument; empty for non-factories."""
        expression = self._expression()
        if expression.type != "call_expression":
            return []
        arguments = expression.child_by_field_name("arguments")
        if arguments is None:
            return []
        return [a.text.decode("utf-8") for a in arguments.named_children if a.type != "comment"]


class ClassDeclaration(Node):
    """A top-level ``class`` or ``abstract class`` declaration."""

    kind = "class declaration"

    def get_name(self) -> str | None:
        name = self.ts_node.child_by_field_name("name")
        return None if name is None else name.text.decode("utf-8")

    def is_exported(self) -> bool:
        parent = self.ts_node.parent
        return parent is not None and parent.type == "export_statement"

    def is_abstract(self) -> bool:
        return self._type == "abstract_class_declaration"

    def get_decorators(self) -> list[Decorator]:
        """Decorators in source order, including ones written before ``export``."""
        ts_node = self.ts_node
        nodes: list[ts.Node] = []
        parent = ts_node.parent
        if parent is not None and parent.type == "export_statement":
            nodes.extend(_children_of_type(parent, "decorator"))
        nodes.extend(_children_of_type(ts_node, "decorator"))
        return [self._wrap(Decorator, n) for n in nodes]

    def get_decorator(self, name: str) -> Decorator | None:
        """First decorator called ``name``, or None."""
        for decorator in self.get_decorators():
            if decorator.get_name() == name:
                return decorator
        return None

    def get_decorator_or_throw(self, name: str) -> Decorator:
        decorator = self.get_decorator(name)
        if decorator is None:
            raise NotFoundError(
                f"Decorator {name} not found on class {self.get_name()}",
                key=name,
            )
        return decorator
