"""
Tests for ngrejig.ast.source_file - parsing, editing and saving one file.

Coverage targets:
- Import and class discovery
- Inserting import declarations (position, formatting)
- Node liveness across edits
- Syntax error handling (lenient vs strict)
- Saving, dry runs and diffs
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ngrejig import (
    ErrorResult,
    InvalidOperationError,
    ManipulationSettings,
    NotFoundError,
    ParseError,
    SourceFile,
)


# =============================================================================
# Discovery
# =============================================================================

class TestGetImportDeclarations:
    """Tests for SourceFile.get_import_declarations()."""

    def test_returns_all_in_order(self, imports_file: SourceFile):
        modules = [d.get_module_specifier_value() for d in imports_file.get_import_declarations()]

        assert modules == ["some-module", "demo-module", "lodash", "zone.js", "@angular/router"]

    def test_skips_import_require(self):
        sf = SourceFile("import fs = require('fs');\nimport { a } from 'm';\n")

        modules = [d.get_module_specifier_value() for d in sf.get_import_declarations()]

        assert modules == ["m"]

    def test_no_imports(self):
        assert SourceFile("export const x = 1;\n").get_import_declarations() == []

    def test_wrappers_are_stable(self, imports_file: SourceFile):
        first = imports_file.get_import_declarations()
        second = imports_file.get_import_declarations()

        assert all(a is b for a, b in zip(first, second))


class TestGetClasses:
    """Tests for SourceFile.get_classes() and the named lookups."""

    def test_exported_and_plain_classes(self):
        sf = SourceFile("class A {}\nexport class B {}\nexport abstract class C {}\nexport const d = 1;\n")

        assert [c.get_name() for c in sf.get_classes()] == ["A", "B", "C"]

    def test_get_class(self, component_file: SourceFile):
        cls = component_file.get_class("TestClass")

        assert cls is not None
        assert cls.get_name() == "TestClass"

    def test_get_class_missing(self, component_file: SourceFile):
        assert component_file.get_class("Nope") is None

    def test_get_class_or_throw(self, component_file: SourceFile):
        with pytest.raises(NotFoundError) as exc_info:
            component_file.get_class_or_throw("Nope")

        assert exc_info.value.key == "Nope"


# =============================================================================
# Inserting declarations
# =============================================================================

class TestAddImportDeclaration:
    """Tests for SourceFile.add_import_declaration()."""

    def test_requires_module_specifier(self):
        sf = SourceFile("")

        with pytest.raises(InvalidOperationError):
            sf.add_import_declaration(named_imports=["a"])

    def test_default_and_named(self):
        sf = SourceFile("")

        declaration = sf.add_import_declaration(["b"], "m", default_import="a")

        assert sf.get_full_text() == "import a, { b } from 'm';\n"
        assert declaration.get_default_import().get_text() == "a"

    def test_side_effect_only(self):
        sf = SourceFile("")

        sf.add_import_declaration(module_specifier="zone.js")

        assert sf.get_full_text() == "import 'zone.js';\n"

    def test_escapes_quotes_in_specifier(self):
        sf = SourceFile("")

        declaration = sf.add_import_declaration(["a"], "it's")

        assert sf.get_full_text() == "import { a } from 'it\\'s';\n"
        assert declaration.get_module_specifier_value() == "it's"

    def test_appends_without_trailing_newline(self):
        sf = SourceFile("const x = 1;")

        sf.add_import_declaration(["a"], "m")

        assert sf.get_full_text() == "import { a } from 'm';\nconst x = 1;"

    def test_crlf_newline_setting(self):
        sf = SourceFile("import { a } from 'm';\r\n", settings=ManipulationSettings(newline="\r\n"))

        sf.add_import_declaration(["b"], "n")

        assert sf.get_full_text() == "import { a } from 'm';\r\nimport { b } from 'n';\r\n"


# =============================================================================
# Liveness
# =============================================================================

class TestNodeLiveness:
    """Wrappers keep tracking their syntax while the text changes."""

    def test_later_node_shifts_after_insert(self, imports_file: SourceFile):
        lodash = imports_file.get_import_declarations()[2]
        before = lodash.get_start()

        imports_file.get_import_declarations()[0].add_named_import("extra")

        assert lodash.get_start() == before + len(", extra")
        assert lodash.get_text() == "import * as lodash from 'lodash';"

    def test_earlier_node_unchanged(self, imports_file: SourceFile):
        first = imports_file.get_import_declarations()[0]
        text = first.get_text()

        imports_file.get_import_declarations()[1].add_named_import("x")

        assert first.get_text() == text

    def test_containing_node_grows(self):
        sf = SourceFile("import { a } from 'm';\n")
        declaration = sf.get_import_declarations()[0]

        declaration.add_named_import("b")

        assert declaration.get_text() == "import { a, b } from 'm';"

    def test_removed_node_is_forgotten(self):
        sf = SourceFile("import { a, b } from 'm';\n")
        declaration = sf.get_import_declarations()[0]
        a, b = declaration.get_named_imports()

        a.remove()

        assert a.was_forgotten()
        assert not b.was_forgotten()
        assert b.get_name() == "b"
        with pytest.raises(InvalidOperationError, match="removed from its source file"):
            a.get_name()

    def test_forgotten_repr(self):
        sf = SourceFile("import { a } from 'm';\n")
        declaration = sf.get_import_declarations()[0]

        declaration.remove()

        assert repr(declaration) == "ImportDeclaration(<forgotten>)"


# =============================================================================
# Syntax errors
# =============================================================================

class TestSyntaxErrors:
    """Broken sources are tolerated unless strict mode is on."""

    def test_lenient_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ngrejig"):
            SourceFile("import { from;\n")

        assert "Syntax error after parse" in caplog.text

    def test_strict_raises(self):
        with pytest.raises(ParseError) as exc_info:
            SourceFile("export const ok = 1;\nimport { from;\n", settings=ManipulationSettings(strict=True))

        assert exc_info.value.line_number is not None

    def test_strict_accepts_valid_source(self, sample_component_code: str):
        sf = SourceFile(sample_component_code, settings=ManipulationSettings(strict=True))

        assert len(sf.get_classes()) == 2


# =============================================================================
# Saving
# =============================================================================

class TestSave:
    """Tests for SourceFile.save() and diffs."""

    def test_in_memory_file_cannot_be_saved(self):
        result = SourceFile("").save()

        assert not result.success
        assert "in-memory" in result.message

    def test_write_failure_is_reported(self, tmp_path: Path):
        """
        A path that cannot be written gives an ErrorResult holding the OSError.
        """
        sf = SourceFile("import { a } from 'm';\n", file_path=tmp_path)
        sf.get_import_declarations()[0].add_named_import("b")

        result = sf.save()

        assert isinstance(result, ErrorResult)
        assert not result
        assert isinstance(result.exception, OSError)
        assert result.path == tmp_path
        assert sf.is_modified()

    def test_save_writes_changes(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_text("import { a } from 'm';\n")
        sf = SourceFile.from_path(path)

        sf.get_import_declarations()[0].add_named_import("b")
        result = sf.save()

        assert result.success
        assert result.path == path
        assert result.changed
        assert path.read_text() == "import { a, b } from 'm';\n"
        assert not sf.is_modified()

    def test_unchanged_file_not_written(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_text("import { a } from 'm';\n")
        sf = SourceFile.from_path(path)

        result = sf.save()

        assert result.success
        assert result.path == path
        assert not result.changed

    def test_dry_run_leaves_disk_alone(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_text("import { a } from 'm';\n")
        sf = SourceFile.from_path(path)
        sf.get_import_declarations()[0].add_named_import("b")

        result = sf.save(dry_run=True)

        assert result.success
        assert "[DRY RUN]" in result.message
        assert result.dry_run and result.changed
        assert "+import { a, b } from 'm';" in result.diff
        assert path.read_text() == "import { a } from 'm';\n"
        assert sf.is_modified()

    def test_get_diff(self):
        sf = SourceFile("import { a } from 'm';\n")
        assert sf.get_diff() == ""

        sf.get_import_declarations()[0].add_named_import("b")

        assert "-import { a } from 'm';" in sf.get_diff()
