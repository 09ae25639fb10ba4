"""Settings that control the text ngrejig writes into source files.

Settings can be passed directly or read from the ``[tool.ngrejig]`` table of
a ``pyproject.toml``::

    [tool.ngrejig]
    quote-kind = "double"
    use-semicolons = false
    strict = true
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

_BOOLEAN_SETTINGS = ("use_semicolons", "strict")
_NEWLINES = ("\n", "\r\n")


class QuoteKind(str, Enum):
    """Quote character used for module specifiers in generated imports."""

    SINGLE = "'"
    DOUBLE = '"'

    @classmethod
    def parse(cls, value: str | QuoteKind) -> QuoteKind:
        if isinstance(value, QuoteKind):
            return value
        lookup = {"single": cls.SINGLE, "'": cls.SINGLE, "double": cls.DOUBLE, '"': cls.DOUBLE}
        try:
            return lookup[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown quote kind: {value!r}") from None


@dataclass(frozen=True)
class ManipulationSettings:
    """Formatting choices for inserted import declarations.

    Attributes
    ----------
    quote_kind : QuoteKind
        Quote used around new module specifiers.
    use_semicolons : bool
        Whether new import declarations end with ``;``.
    newline : str
        Line terminator placed around inserted declarations.
    strict : bool
        Raise :class:`~ngrejig.core.errors.ParseError` when a file has syntax
        errors instead of logging a warning.
    """

    quote_kind: QuoteKind = QuoteKind.SINGLE
    use_semicolons: bool = True
    newline: str = "\n"
    strict: bool = False

    def quote(self, text: str) -> str:
        """Wrap ``text`` in the configured quotes, escaping as needed."""
        q = self.quote_kind.value
        escaped = text.replace("\\", "\\\\").replace(q, f"\\{q}")
        return f"{q}{escaped}{q}"

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ManipulationSettings:
        """Build settings from a mapping, accepting ``kebab-case`` keys.

        Raises
        ------
        ValueError
            If a value has the wrong type, e.g. ``use-semicolons = "no"``.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                logger.warning(f"Ignoring unknown ngrejig setting: {key}")
                continue
            kwargs[name] = value

        if "quote_kind" in kwargs:
            kwargs["quote_kind"] = QuoteKind.parse(kwargs["quote_kind"])
        for name in _BOOLEAN_SETTINGS:
            if name in kwargs and not isinstance(kwargs[name], bool):
                raise ValueError(
                    f"ngrejig setting {name.replace('_', '-')} must be true or false, got {kwargs[name]!r}"
                )
        if "newline" in kwargs and kwargs["newline"] not in _NEWLINES:
            raise ValueError(f"ngrejig setting newline must be \"\\n\" or \"\\r\\n\", got {kwargs['newline']!r}")
        return cls(**kwargs)

    @classmethod
    def from_pyproject(cls, path: str | Path) -> ManipulationSettings:
        """Read settings from ``[tool.ngrejig]``; defaults when the table is absent."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)

        table = data.get("tool", {}).get("ngrejig")
        if table is None:
            logger.debug(f"No [tool.ngrejig] table in {path}, using defaults")
            return cls()
        return cls.from_mapping(table)
