"""Mutable TypeScript source file backed by tree-sitter."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import tree_sitter as ts

from ngrejig.ast.nodes import (
    CLASS_NODE_TYPES,
    ClassDeclaration,
    ImportDeclaration,
    Node,
    NodeT,
)
from ngrejig.ast.parser import first_error, parse
from ngrejig.core.config import ManipulationSettings
from ngrejig.core.diff import generate_diff
from ngrejig.core.errors import InvalidOperationError, NotFoundError, ParseError
from ngrejig.core.results import ErrorResult, Result

logger = logging.getLogger(__name__)

__all__ = ["SourceFile"]


class SourceFile:
    """One parsed TypeScript file whose syntax tree can be edited in place.

    Every edit rewrites the source text and reparses it; node wrappers handed
    out earlier stay valid and keep pointing at the same syntax.

    Parameters
    ----------
    text : str
        The file content.
    file_path : str | Path | None
        Where the file lives on disk. In-memory files have no path and
        cannot be saved.
    settings : ManipulationSettings | None
        Formatting of inserted text. Defaults to single quotes and semicolons.

    Examples
    --------
    >>> sf = SourceFile("import { a } from 'm';\\n")
    >>> decl = sf.get_import_declarations()[0]
    >>> decl.add_named_import("b").get_name()
    'b'
    >>> sf.get_full_text()
    "import { a, b } from 'm';\\n"
    """

    def __init__(
        self,
        text: str,
        file_path: str | Path | None = None,
        settings: ManipulationSettings | None = None,
    ) -> None:
        self.file_path = Path(file_path) if file_path is not None else None
        self.settings = settings or ManipulationSettings()
        self._tsx = self.file_path is not None and self.file_path.suffix == ".tsx"
        self._source = text.encode("utf-8")
        self._saved_text = text
        self._nodes: dict[tuple[str, int, int], Node] = {}
        self._tree: ts.Tree = parse(self._source, self._tsx)
        self._check_syntax("parse")

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        settings: ManipulationSettings | None = None,
    ) -> SourceFile:
        """Load and parse a file from disk."""
        path = Path(path)
        text = path.read_bytes().decode("utf-8")
        return cls(text, file_path=path, settings=settings)

    def __repr__(self) -> str:
        return f"SourceFile({str(self.file_path) if self.file_path else '<memory>'!r})"

    # ===== Text =====

    def get_full_text(self) -> str:
        return self._source.decode("utf-8")

    def is_modified(self) -> bool:
        """True if the text differs from what was last loaded or saved."""
        return self.get_full_text() != self._saved_text

    def get_diff(self) -> str:
        """Unified diff of unsaved changes."""
        return generate_diff(self._saved_text, self.get_full_text(), self.file_path or Path("<memory>"))

    def save(self, dry_run: bool = False) -> Result:
        """Write the current text to :attr:`file_path`.

        Never raises; failures come back as :class:`ErrorResult`.
        """
        if self.file_path is None:
            return ErrorResult(
                message="Cannot save an in-memory source file without a path",
                dry_run=dry_run,
            )

        text = self.get_full_text()
        diff = generate_diff(self._saved_text, text, self.file_path)
        if not diff:
            return Result(
                success=True,
                message=f"No changes needed for {self.file_path}",
                path=self.file_path,
                dry_run=dry_run,
            )

        if dry_run:
            return Result(
                success=True,
                message=f"[DRY RUN] Would save {self.file_path}",
                path=self.file_path,
                diff=diff,
                dry_run=True,
            )

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_bytes(self._source)
        except OSError as e:
            return ErrorResult(message=f"Write failed: {e}", path=self.file_path, exception=e)

        self._saved_text = text
        logger.debug(f"Saved {self.file_path}")
        return Result(success=True, message=f"Saved {self.file_path}", path=self.file_path, diff=diff)

    # ===== Imports =====

    def get_import_declarations(self) -> list[ImportDeclaration]:
        """Top-level ES import declarations in document order.

        ``import x = require('y')`` is not an ES import and is skipped.
        """
        return [
            self._wrap(ImportDeclaration, child)
            for child in self._tree.root_node.named_children
            if child.type == "import_statement"
            and not any(c.type == "import_require_clause" for c in child.children)
        ]

    def add_import_declaration(
        self,
        named_imports: Iterable[str] = (),
        module_specifier: str = "",
        default_import: str | None = None,
    ) -> ImportDeclaration:
        """Insert a new import declaration and return it.

        The declaration goes on the line after the last existing import, or
        before the first statement when the file has no imports.
        """
        if not module_specifier:
            raise InvalidOperationError("An import declaration needs a module specifier")

        text = self._format_import(list(named_imports), module_specifier, default_import)
        newline = self.settings.newline
        imports = self.get_import_declarations()

        if imports:
            position = imports[-1].get_end()
            self._replace_range(position, position, newline + text)
            start = position + len(newline.encode("utf-8"))
        else:
            start = self._top_insert_position()
            prefix = newline if start > 0 and not self._source[:start].endswith(b"\n") else ""
            self._replace_range(start, start, prefix + text + newline)
            start += len(prefix.encode("utf-8"))

        logger.debug(f"Inserted {text!r} in {self!r}")
        for declaration in self.get_import_declarations():
            if declaration.get_start() == start:
                return declaration
        raise InvalidOperationError(f"Inserted import could not be parsed: {text!r}")

    def _format_import(
        self,
        named_imports: list[str],
        module_specifier: str,
        default_import: str | None,
    ) -> str:
        bindings = []
        if default_import:
            bindings.append(default_import)
        if named_imports:
            bindings.append("{ " + ", ".join(named_imports) + " }")

        semicolon = ";" if self.settings.use_semicolons else ""
        module = self.settings.quote(module_specifier)
        if not bindings:
            return f"import {module}{semicolon}"
        return f"import {', '.join(bindings)} from {module}{semicolon}"

    def _top_insert_position(self) -> int:
        """Start of the line where a first import belongs.

        Leading comments stay above the import only when a blank line
        separates them from the first statement; a comment directly on top
        of a statement documents it and stays attached.
        """
        children = self._tree.root_node.named_children
        anchor = None
        for index, child in enumerate(children):
            if child.type not in ("comment", "hash_bang_line"):
                anchor = index
                break
        if anchor is None:
            return len(self._source)

        while anchor > 0:
            previous = children[anchor - 1]
            gap = self._source[previous.end_byte : children[anchor].start_byte]
            if previous.type != "comment" or gap.count(b"\n") > 1:
                break
            anchor -= 1
        return self._source.rfind(b"\n", 0, children[anchor].start_byte) + 1

    # ===== Classes =====

    def get_classes(self) -> list[ClassDeclaration]:
        """Top-level class declarations, exported or not, in document order."""
        classes = []
        for child in self._tree.root_node.named_children:
            if child.type in CLASS_NODE_TYPES:
                classes.append(self._wrap(ClassDeclaration, child))
            elif child.type == "export_statement":
                declaration = next((c for c in child.named_children if c.type in CLASS_NODE_TYPES), None)
                if declaration is not None:
                    classes.append(self._wrap(ClassDeclaration, declaration))
        return classes

    def get_class(self, name: str) -> ClassDeclaration | None:
        for class_declaration in self.get_classes():
            if class_declaration.get_name() == name:
                return class_declaration
        return None

    def get_class_or_throw(self, name: str) -> ClassDeclaration:
        class_declaration = self.get_class(name)
        if class_declaration is None:
            raise NotFoundError(f"Class {name} not found in {self!r}", key=name)
        return class_declaration

    # ===== Node bookkeeping (used by node wrappers) =====

    def _wrap(self, cls: type[NodeT], ts_node: ts.Node) -> NodeT:
        """Return the tracked wrapper for ``ts_node``, creating it once."""
        key = (ts_node.type, ts_node.start_byte, ts_node.end_byte)
        node = self._nodes.get(key)
        if not isinstance(node, cls):
            node = cls(self, ts_node)
            self._nodes[key] = node
        return node

    def _resolve(self, node_type: str, start: int, end: int) -> ts.Node:
        """Find the current tree-sitter node with this type and span."""
        node = self._tree.root_node.descendant_for_byte_range(start, end)
        while node is not None:
            if node.type == node_type and node.start_byte == start and node.end_byte == end:
                return node
            node = node.parent

        stack = [self._tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == node_type and node.start_byte == start and node.end_byte == end:
                return node
            stack.extend(c for c in node.children if c.start_byte <= start and c.end_byte >= end)
        raise InvalidOperationError(f"No {node_type} node at bytes {start}-{end} in {self!r}")

    def _slice(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8")

    def _line_extent(self, start: int, end: int) -> tuple[int, int]:
        """Widen ``[start, end)`` to whole lines when nothing else shares them."""
        source = self._source
        line_start = source.rfind(b"\n", 0, start) + 1
        after = end
        while after < len(source) and source[after : after + 1] in (b" ", b"\t"):
            after += 1

        if source[line_start:start].strip(b" \t"):
            return start, after
        if source[after : after + 2] == b"\r\n":
            return line_start, after + 2
        if source[after : after + 1] == b"\n" or after == len(source):
            return line_start, min(after + 1, len(source))
        return start, after

    def _replace_range(self, start: int, end: int, text: str) -> None:
        """Replace bytes ``[start, end)`` with ``text`` and reparse."""
        new = text.encode("utf-8")
        self._source = self._source[:start] + new + self._source[end:]
        delta = len(new) - (end - start)

        nodes: dict[tuple[str, int, int], Node] = {}
        for node in self._nodes.values():
            if node._shift(start, end, delta):
                nodes[node._key] = node
        self._nodes = nodes

        self._tree = parse(self._source, self._tsx)
        self._check_syntax("edit")

    def _check_syntax(self, stage: str) -> None:
        error = first_error(self._tree.root_node)
        if error is None:
            return
        line_number = error.start_point[0] + 1
        message = f"Syntax error after {stage} in {self!r} at line {line_number}"
        if self.settings.strict:
            raise ParseError(message, line_number=line_number)
        logger.warning(message)
