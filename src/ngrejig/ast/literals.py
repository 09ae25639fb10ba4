"""Decoding of TypeScript string literal text."""
from __future__ import annotations

import re

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_ESCAPE_RE = re.compile(
    r"""\\(?:
        u\{(?P<code_point>[0-9a-fA-F]+)\}
      | u(?P<unicode>[0-9a-fA-F]{4})
      | x(?P<hex>[0-9a-fA-F]{2})
      | (?P<newline>\r\n|\r|\n|\u2028|\u2029)
      | (?P<char>.)
    )""",
    re.VERBOSE | re.DOTALL,
)


def _decode_escape(match: re.Match[str]) -> str:
    if match.group("code_point") is not None:
        return chr(int(match.group("code_point"), 16))
    if match.group("unicode") is not None:
        return chr(int(match.group("unicode"), 16))
    if match.group("hex") is not None:
        return chr(int(match.group("hex"), 16))
    if match.group("newline") is not None:
        # line continuation
        return ""
    char = match.group("char")
    return _SIMPLE_ESCAPES.get(char, char)


def unquote(raw: str) -> str:
    """Return the value of a quoted string literal.

    >>> unquote("'@angular/core'")
    '@angular/core'
    """
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"`":
        raw = raw[1:-1]
    return _ESCAPE_RE.sub(_decode_escape, raw)
