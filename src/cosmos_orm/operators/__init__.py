"""Operator compilers turning one filter operator into a predicate fragment."""

from __future__ import annotations

from .set import compile_set
from .standard import compile_standard
from .string import compile_string

__all__ = [
    "compile_standard",
    "compile_string",
    "compile_set",
]
