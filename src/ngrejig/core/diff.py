"""Unified diffs of edited source files."""
from __future__ import annotations

import difflib
from pathlib import Path
from typing import Mapping


def _lines(text: str) -> list[str]:
    lines = text.splitlines(keepends=True)
    # a missing final newline would glue the last line to the next hunk marker
    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += "\n"
    return lines


def generate_diff(before: str, after: str, path: Path) -> str:
    """Unified diff turning ``before`` into ``after``, headed ``a/<path>`` and ``b/<path>``.

    Returns an empty string when the texts are equal.

    Examples
    --------
    >>> print(generate_diff("import { a } from 'm';\\n", "import { a, b } from 'm';\\n", Path("app.ts")))
    --- a/app.ts
    +++ b/app.ts
    @@ -1 +1 @@
    -import { a } from 'm';
    +import { a, b } from 'm';
    """
    if before == after:
        return ""
    return "".join(
        difflib.unified_diff(_lines(before), _lines(after), fromfile=f"a/{path}", tofile=f"b/{path}")
    )


def combine_diffs(diffs: Mapping[Path, str]) -> str:
    """Join per-file diffs in path order, skipping empty ones."""
    return "\n".join(diffs[path] for path in sorted(diffs, key=str) if diffs[path])
