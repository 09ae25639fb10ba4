"""Outcomes of saving source files.

Edits to a :class:`~ngrejig.ast.SourceFile` happen in memory and raise on
misuse. Writing files back is different: a project save touches many files,
so each write reports a :class:`Result` and failures never interrupt the
rest of the batch.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ngrejig.core.diff import combine_diffs


@dataclass
class Result:
    """Outcome of saving one source file.

    Attributes:
        success: Whether the file was written, or would have been in a dry run
        message: Human-readable description of what happened
        path: The file's location, None for in-memory files
        diff: Unified diff of what was written; empty when nothing changed
        dry_run: True if nothing was actually written
    """

    success: bool
    message: str
    path: Path | None = None
    diff: str = ""
    dry_run: bool = False

    def __bool__(self) -> bool:
        return self.success

    @property
    def changed(self) -> bool:
        """True if the file's text on disk changed (or would change)."""
        return self.success and bool(self.diff)


@dataclass
class ErrorResult(Result):
    """A save that failed. The exception is kept, never raised."""

    success: bool = field(default=False, init=False)
    exception: Exception | None = None


@dataclass
class BatchResult:
    """Results of saving every modified file of a project."""

    results: list[Result] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def success(self) -> bool:
        return all(r.success for r in self.results)

    @property
    def failed(self) -> list[ErrorResult]:
        return [r for r in self.results if isinstance(r, ErrorResult)]

    @property
    def files_changed(self) -> list[Path]:
        return [r.path for r in self.results if r.changed and r.path is not None]

    @property
    def diff(self) -> str:
        """Diffs of all changed files, ordered by path."""
        return combine_diffs({r.path: r.diff for r in self.results if r.changed and r.path is not None})
