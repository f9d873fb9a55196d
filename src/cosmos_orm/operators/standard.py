"""Equality and comparison operators -> ``c.f = v``, ``c.f > v``, ..."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..filters import FilterOperator, QueryMode

if TYPE_CHECKING:
    from ..rendering import ValueRenderer

_COMPARATORS: dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "=",
    FilterOperator.NOT: "!=",
    FilterOperator.GT: ">",
    FilterOperator.GTE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LTE: "<=",
}


def compile_standard(
    field: str,
    op: str,
    val: Any,
    *,
    mode: QueryMode,
    render: ValueRenderer,
) -> str | None:
    """Compile a comparison operator. Returns ``None`` if *op* is not one.

    *mode* is ignored: ``equals``/``not`` on strings are always
    case-sensitive.
    """
    try:
        filter_op = FilterOperator(op)
    except ValueError:
        return None
    comparator = _COMPARATORS.get(filter_op)
    if comparator is None:
        return None
    return f"c.{field} {comparator} {render(val, f'{field}_{filter_op.value}')}"
