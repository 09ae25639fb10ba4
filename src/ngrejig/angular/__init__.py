"""
Angular class recognition.

Example
-------
>>> from ngrejig.angular import DecoratorKind, get_decorator_or_throw, is_angular_pipe
>>>
>>> cls = source_file.get_class_or_throw("TruncatePipe")
>>> is_angular_pipe(cls)
True
>>> get_decorator_or_throw(cls, DecoratorKind.PIPE).get_arguments()
["{ name: 'truncate' }"]
"""
from __future__ import annotations

from .decorators import (
    DecoratorKind,
    find_all_of_kind,
    get_decorator,
    get_decorator_or_throw,
    get_kind,
    is_angular_component,
    is_angular_directive,
    is_angular_injectable,
    is_angular_module,
    is_angular_pipe,
    is_kind,
)

__all__ = [
    "DecoratorKind",
    "get_decorator",
    "get_decorator_or_throw",
    "is_kind",
    "get_kind",
    "find_all_of_kind",
    "is_angular_component",
    "is_angular_directive",
    "is_angular_injectable",
    "is_angular_module",
    "is_angular_pipe",
]
