"""
Rendering of filter operands into query text.

Two strategies share one call shape, ``render(value, hint) -> str``:

- ``LiteralRenderer`` writes the value inline as a dialect literal.
- ``ParameterBinder`` writes a named placeholder and records the value so
  it can be sent to the store next to the query text.

Both produce fragments of exactly the same shape.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

_PARAM_NAME_RE = re.compile(r"\W")


@runtime_checkable
class ValueRenderer(Protocol):
    """Turns one operand into query text."""

    def __call__(self, value: Any, hint: str) -> str: ...


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_literal(value: Any) -> str:
    """Render *value* as an inline literal.

    Numbers and booleans are written bare; anything else is single-quoted.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | Decimal):
        return str(value)
    if isinstance(value, datetime | date):
        return _quote(value.isoformat())
    return _quote(str(value))


def to_parameter_value(value: Any) -> Any:
    """Convert *value* into something the store's JSON encoder accepts."""
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class LiteralRenderer:
    """Render operands inline."""

    def __call__(self, value: Any, hint: str) -> str:
        return render_literal(value)


class ParameterBinder:
    """Render operands as ``@name`` placeholders and collect their values.

    Names are derived from *hint* (``<field>_<operator>[_<index>]``) with
    non-word characters replaced by ``_``; clashes get a numeric suffix.
    One binder belongs to one query.
    """

    def __init__(self) -> None:
        self._parameters: list[dict[str, Any]] = []
        self._names: set[str] = set()

    def __call__(self, value: Any, hint: str) -> str:
        base = "@" + _PARAM_NAME_RE.sub("_", hint)
        name = base
        suffix = 1
        while name in self._names:
            name = f"{base}_{suffix}"
            suffix += 1
        self._names.add(name)
        self._parameters.append({"name": name, "value": to_parameter_value(value)})
        return name

    @property
    def parameters(self) -> list[dict[str, Any]]:
        return list(self._parameters)


DEFAULT_RENDERER = LiteralRenderer()
