"""String pattern operators -> ``CONTAINS``, ``STARTSWITH``, ``ENDSWITH``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..filters import FilterOperator, QueryMode

if TYPE_CHECKING:
    from ..rendering import ValueRenderer

_FUNCTIONS: dict[FilterOperator, str] = {
    FilterOperator.CONTAINS: "CONTAINS",
    FilterOperator.STARTS_WITH: "STARTSWITH",
    FilterOperator.ENDS_WITH: "ENDSWITH",
}


def compile_string(
    field: str,
    op: str,
    val: Any,
    *,
    mode: QueryMode,
    render: ValueRenderer,
) -> str | None:
    """Compile a string pattern operator. Returns ``None`` if not a pattern op.

    In ``INSENSITIVE`` mode both operands are wrapped in ``LOWER``.
    """
    try:
        filter_op = FilterOperator(op)
    except ValueError:
        return None
    function = _FUNCTIONS.get(filter_op)
    if function is None:
        return None
    operand = render(val, f"{field}_{filter_op.value}")
    if mode == QueryMode.INSENSITIVE:
        return f"{function}(LOWER(c.{field}), LOWER({operand}))"
    return f"{function}(c.{field}, {operand})"
