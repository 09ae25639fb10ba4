"""
Core module: results, errors, settings and the Project entry point.

Example
-------
>>> from ngrejig.core.project import Project
>>>
>>> project = Project("src/app/", dry_run=True)
>>> result = project.save()
>>> print(result.diff)
"""
from __future__ import annotations

from .config import ManipulationSettings, QuoteKind
from .errors import InvalidOperationError, NgRejigError, NotFoundError, ParseError
from .results import BatchResult, ErrorResult, Result

__all__ = [
    "Result",
    "ErrorResult",
    "BatchResult",
    "ManipulationSettings",
    "QuoteKind",
    "NgRejigError",
    "NotFoundError",
    "InvalidOperationError",
    "ParseError",
]
