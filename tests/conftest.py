"""
Shared pytest fixtures for the ngrejig test suite.

This module provides:
- Sample TypeScript sources (Angular classes, assorted import forms)
- Parsed SourceFile fixtures
- Temporary Angular project directories

Fixture Naming Convention:
- sample_* : Fixtures that provide sample content strings
- tmp_* : Fixtures that create temporary directories/files
- *_file : Fixtures that provide parsed SourceFile instances
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from ngrejig import Project, SourceFile


# =============================================================================
# Sample TypeScript Fixtures
# =============================================================================

@pytest.fixture
def sample_component_code() -> str:
    """
    An Angular component alongside an undecorated class.

    Contains:
    - Two import declarations, one with an aliased specifier
    - A decorated, exported component
    - A plain exported class
    """
    return textwrap.dedent('''
        import { Component, OnInit as Init } from '@angular/core';
        import { Observable } from 'rxjs';

        @Component({
          selector: 'app-test',
          template: '<div>test</div>'
        })
        export class TestComponent implements Init {
          ngOnInit(): void {}
        }

        export class TestClass {}
    ''').lstrip("\n")


@pytest.fixture
def sample_all_kinds_code() -> str:
    """
    One class per Angular decorator kind, plus a plain class.
    """
    return textwrap.dedent('''
        import { Component, Directive, Injectable, NgModule, Pipe, PipeTransform } from '@angular/core';

        @Component({ selector: 'app-root', template: '' })
        export class AppComponent {}

        @Directive({ selector: '[appHighlight]' })
        export class HighlightDirective {}

        @Injectable({ providedIn: 'root' })
        export class DataService {}

        @Pipe({ name: 'truncate' })
        export class TruncatePipe implements PipeTransform {
          transform(value: string): string {
            return value;
          }
        }

        @NgModule({ declarations: [AppComponent], providers: [DataService] })
        export class AppModule {}

        export class Plain {}
    ''').lstrip("\n")


@pytest.fixture
def sample_imports_code() -> str:
    """
    Every import shape the import functions have to cope with.
    """
    return textwrap.dedent('''
        import { something, somethingOther } from 'some-module';
        import demoModule from 'demo-module';
        import * as lodash from 'lodash';
        import 'zone.js';
        import { type Route, Routes } from '@angular/router';

        export const value = something;
    ''').lstrip("\n")


# =============================================================================
# SourceFile Fixtures
# =============================================================================

@pytest.fixture
def component_file(sample_component_code: str) -> SourceFile:
    return SourceFile(sample_component_code)


@pytest.fixture
def all_kinds_file(sample_all_kinds_code: str) -> SourceFile:
    return SourceFile(sample_all_kinds_code)


@pytest.fixture
def imports_file(sample_imports_code: str) -> SourceFile:
    return SourceFile(sample_imports_code)


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def tmp_angular_project(
    tmp_path: Path,
    sample_component_code: str,
    sample_all_kinds_code: str,
) -> Path:
    """
    Create a temporary Angular project structure.

    Structure:
    tmp_path/
    ├── src/app/
    │   ├── app.module.ts        (sample_all_kinds_code)
    │   ├── test.component.ts    (sample_component_code)
    │   └── typings.d.ts         (ignored)
    └── node_modules/lib/index.ts (ignored)

    Returns the project root path (tmp_path).
    """
    app_dir = tmp_path / "src" / "app"
    app_dir.mkdir(parents=True)
    (app_dir / "app.module.ts").write_text(sample_all_kinds_code)
    (app_dir / "test.component.ts").write_text(sample_component_code)
    (app_dir / "typings.d.ts").write_text("declare const VERSION: string;\n")

    lib_dir = tmp_path / "node_modules" / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "index.ts").write_text("@Component({})\nexport class Vendor {}\n")

    return tmp_path


@pytest.fixture
def project(tmp_angular_project: Path) -> Project:
    """Project over the temporary Angular project."""
    return Project(tmp_angular_project)


@pytest.fixture
def project_dry_run(tmp_angular_project: Path) -> Project:
    """Project in dry-run mode - nothing is written on save."""
    return Project(tmp_angular_project, dry_run=True)
