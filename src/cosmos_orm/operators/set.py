"""Membership operators -> ``c.f IN (...)``, ``c.f NOT IN (...)``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..filters import FilterOperator, QueryMode

if TYPE_CHECKING:
    from ..rendering import ValueRenderer

_KEYWORDS: dict[FilterOperator, str] = {
    FilterOperator.IN: "IN",
    FilterOperator.NOT_IN: "NOT IN",
}


def compile_set(
    field: str,
    op: str,
    val: Any,
    *,
    mode: QueryMode,
    render: ValueRenderer,
) -> str | None:
    """Compile ``in``/``notIn``. Returns ``None`` if not a membership op.

    An empty list compiles to ``""`` so the predicate is dropped rather than
    rendered as an always-false ``IN ()``.
    """
    try:
        filter_op = FilterOperator(op)
    except ValueError:
        return None
    keyword = _KEYWORDS.get(filter_op)
    if keyword is None:
        return None
    values = list(val) if isinstance(val, list | tuple) else [val]
    if not values:
        return ""
    hint = f"{field}_{filter_op.value}"
    rendered = ",".join(render(v, f"{hint}_{i}") for i, v in enumerate(values))
    return f"c.{field} {keyword} ({rendered})"
