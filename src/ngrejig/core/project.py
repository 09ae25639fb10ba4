"""Project - a set of TypeScript files edited together."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterator

from ngrejig.ast import ClassDeclaration, SourceFile
from ngrejig.core.config import ManipulationSettings
from ngrejig.core.errors import InvalidOperationError, NotFoundError
from ngrejig.core.results import BatchResult

if TYPE_CHECKING:
    from ngrejig.angular import DecoratorKind

logger = logging.getLogger(__name__)

EXCLUDED_DIRS = frozenset({"node_modules", ".git", "dist", ".angular"})

_GLOB_CHARS = re.compile(r"[*?\[]")


def _split_glob(pattern: str) -> tuple[Path, str]:
    """Split ``src/**/*.ts`` into its literal base directory and the rest."""
    match = _GLOB_CHARS.search(pattern)
    head = pattern if match is None else pattern[: match.start()]
    slash = head.rfind("/")
    if slash < 0:
        return Path("."), pattern
    return Path(pattern[:slash] or "/"), pattern[slash + 1 :]


class Project:
    """
    Main entry point for editing a TypeScript code base.

    Files are discovered from ``path`` and parsed lazily on first use.
    Edits stay in memory until :meth:`save` writes them back.

    Parameters
    ----------
    path : str | Path | None
        A directory, a single file, or a glob pattern. None gives an empty
        in-memory project to which files are added with
        :meth:`create_source_file`.
    dry_run : bool, optional
        If True, :meth:`save` reports what it would write without writing.
    settings : ManipulationSettings | None
        Formatting of inserted text. When omitted, ``[tool.ngrejig]`` in a
        ``pyproject.toml`` at the project root is used if present.
    glob : str
        Pattern used to discover files under a directory.

    Examples
    --------
    >>> project = Project("src/app/")
    >>> for cls in project.find_classes(DecoratorKind.COMPONENT):
    ...     ensure_imports(cls.source_file, ImportDescriptor(["OnInit"], "@angular/core"))
    >>> project.save().files_changed
    """

    def __init__(
        self,
        path: str | Path | None = None,
        dry_run: bool = False,
        settings: ManipulationSettings | None = None,
        glob: str = "**/*.ts",
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.dry_run = dry_run
        self.glob = glob
        self._settings = settings
        self._root_path: Path | None = None
        self._files: list[Path] | None = None
        self._source_files: dict[Path, SourceFile] = {}

    def __repr__(self) -> str:
        return f"Project({str(self.path) if self.path else '<memory>'!r}, dry_run={self.dry_run})"

    @property
    def root(self) -> Path:
        """
        Root path for all operations.

        Relative paths given to other methods are resolved against it.
        """
        if self._root_path is None:
            if self.path is None:
                self._root_path = Path.cwd()
            elif self.path.is_file():
                self._root_path = self.path.parent.resolve()
            elif self.path.is_dir():
                self._root_path = self.path.resolve()
            else:
                # Glob pattern - use the base directory
                self._root_path = _split_glob(str(self.path))[0].resolve()
        return self._root_path

    @property
    def settings(self) -> ManipulationSettings:
        if self._settings is None:
            pyproject = self.root / "pyproject.toml"
            if self.path is not None and pyproject.is_file():
                self._settings = ManipulationSettings.from_pyproject(pyproject)
            else:
                self._settings = ManipulationSettings()
        return self._settings

    def _resolve_path(self, path: str | Path) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self.root / p

    @property
    def files(self) -> list[Path]:
        """
        TypeScript files in the working set.

        Lazily computed on first access.
        """
        if self._files is None:
            self._files = self._discover_files()
        return self._files

    def _discover_files(self) -> list[Path]:
        if self.path is None:
            return []
        if self.path.is_file():
            candidates = [self.path.resolve()]
        elif self.path.is_dir():
            candidates = sorted(self.path.resolve().glob(self.glob))
        else:
            path_str = str(self.path)
            if _GLOB_CHARS.search(path_str):
                base_path, pattern = _split_glob(path_str)
                candidates = sorted(base_path.resolve().glob(pattern))
            else:
                # Directory that doesn't exist yet
                candidates = []

        files = [
            p
            for p in candidates
            if p.is_file() and not p.name.endswith(".d.ts") and not self._is_excluded(p)
        ]
        logger.debug(f"Discovered {len(files)} TypeScript files under {self.path}")
        return files

    def _is_excluded(self, path: Path) -> bool:
        try:
            parts = path.relative_to(self.root).parts
        except ValueError:
            parts = path.parts
        return bool(EXCLUDED_DIRS.intersection(parts))

    # =========================================================================
    # Source files
    # =========================================================================

    def _load(self, path: Path) -> SourceFile | None:
        source_file = self._source_files.get(path)
        if source_file is None:
            try:
                source_file = SourceFile.from_path(path, settings=self.settings)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping {path}: {e}")
                return None
            self._source_files[path] = source_file
        return source_file

    def __iter__(self) -> Iterator[SourceFile]:
        """Yield source files one at a time, parsing each only when reached.

        Discovered files come first, in discovery order, then files added
        or created by hand. Files that cannot be read are logged and skipped.
        """
        discovered = set()
        for path in self.files:
            discovered.add(path)
            source_file = self._load(path)
            if source_file is not None:
                yield source_file
        for path, source_file in list(self._source_files.items()):
            if path not in discovered:
                yield source_file

    @property
    def source_files(self) -> list[SourceFile]:
        """All source files, parsing discovered files that are not loaded yet."""
        return list(self)

    def __len__(self) -> int:
        return len(self.source_files)

    def get_source_file(self, path: str | Path) -> SourceFile | None:
        """The source file at ``path``, loading it from disk if needed."""
        resolved = self._resolve_path(path)
        source_file = self._source_files.get(resolved)
        if source_file is None and resolved.is_file():
            source_file = self.add_source_file_at_path(resolved)
        return source_file

    def get_source_file_or_throw(self, path: str | Path) -> SourceFile:
        source_file = self.get_source_file(path)
        if source_file is None:
            raise NotFoundError(f"Source file {path} not found", key=str(path))
        return source_file

    def add_source_file_at_path(self, path: str | Path) -> SourceFile:
        """Load a file from disk into the project, or return it if loaded."""
        resolved = self._resolve_path(path)
        source_file = self._source_files.get(resolved)
        if source_file is None:
            source_file = SourceFile.from_path(resolved, settings=self.settings)
            self._source_files[resolved] = source_file
        return source_file

    def create_source_file(self, path: str | Path, text: str = "", overwrite: bool = False) -> SourceFile:
        """Create a source file in memory; it is written on :meth:`save`.

        Raises
        ------
        InvalidOperationError
            If the project already holds a file at ``path`` and ``overwrite``
            is False.
        """
        resolved = self._resolve_path(path)
        if not overwrite and (resolved in self._source_files or resolved.exists()):
            raise InvalidOperationError(f"A source file already exists at {resolved}")

        source_file = SourceFile(text, file_path=resolved, settings=self.settings)
        # diff against what is on disk, or against nothing for a new file
        source_file._saved_text = resolved.read_text(encoding="utf-8") if resolved.exists() else ""
        self._source_files[resolved] = source_file
        return source_file

    # =========================================================================
    # Classes
    # =========================================================================

    def find_classes(
        self,
        kind: DecoratorKind | str | None = None,
        predicate: Callable[[ClassDeclaration], bool] | None = None,
    ) -> Iterator[ClassDeclaration]:
        """Lazily yield top-level classes, optionally of one Angular kind."""
        if kind is not None:
            from ngrejig.angular import find_all_of_kind

            yield from find_all_of_kind(self, kind, predicate)
            return

        for source_file in self:
            for class_declaration in source_file.get_classes():
                if predicate is None or predicate(class_declaration):
                    yield class_declaration

    # =========================================================================
    # Saving
    # =========================================================================

    def get_unsaved_source_files(self) -> list[SourceFile]:
        return [sf for sf in self._source_files.values() if sf.is_modified()]

    def save(self) -> BatchResult:
        """Write every modified source file. Honors ``dry_run``."""
        results = [sf.save(dry_run=self.dry_run) for sf in self.get_unsaved_source_files()]
        logger.debug(f"Saved {len(results)} files (dry_run={self.dry_run})")
        return BatchResult(results)
