"""
Tests for ngrejig.core.diff.
"""
from __future__ import annotations

from pathlib import Path

from ngrejig.core.diff import combine_diffs, generate_diff


class TestGenerateDiff:
    """Tests for generate_diff()."""

    def test_no_changes(self):
        assert generate_diff("a\n", "a\n", Path("a.ts")) == ""

    def test_headers_and_lines(self):
        diff = generate_diff("import { a } from 'm';\n", "import { a, b } from 'm';\n", Path("app.ts"))

        assert diff.startswith("--- a/app.ts\n+++ b/app.ts\n")
        assert "-import { a } from 'm';\n" in diff
        assert "+import { a, b } from 'm';\n" in diff

    def test_missing_final_newline(self):
        diff = generate_diff("x", "y", Path("a.ts"))

        assert "-x\n+y\n" in diff

    def test_new_file(self):
        diff = generate_diff("", "export class A {}\n", Path("a.ts"))

        assert "+export class A {}" in diff


class TestCombineDiffs:
    """Tests for combine_diffs()."""

    def test_sorted_by_path(self):
        combined = combine_diffs({Path("b.ts"): "B\n", Path("a.ts"): "A\n"})

        assert combined == "A\n\nB\n"

    def test_empty_diffs_dropped(self):
        assert combine_diffs({Path("a.ts"): "", Path("b.ts"): ""}) == ""
