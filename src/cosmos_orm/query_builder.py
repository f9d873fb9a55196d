"""Cosmos SQL query builder from find-many filter, projection and ordering specs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidOrderDirectionError
from .filters import MODE_KEY, QueryMode, SortDirection
from .operators import compile_set, compile_standard, compile_string
from .rendering import DEFAULT_RENDERER, ParameterBinder, ValueRenderer

logger = logging.getLogger("cosmos_orm.query")

_COMPILERS = [
    compile_standard,
    compile_string,
    compile_set,
]

_DIRECTIONS = {d.value for d in SortDirection}


def compile_filter(
    field: str,
    op: str,
    value: Any,
    mode: QueryMode = QueryMode.SENSITIVE,
    render: ValueRenderer | None = None,
) -> str:
    """Compile one operator/value pair of a field into a predicate fragment.

    Unrecognised operators and ``None`` values compile to ``""``.
    """
    if value is None:
        return ""
    render = render or DEFAULT_RENDERER
    for compiler in _COMPILERS:
        result = compiler(field, op, value, mode=mode, render=render)
        if result is not None:
            return result
    return ""


def _field_mode(spec: Mapping[str, Any]) -> QueryMode:
    mode = spec.get(MODE_KEY)
    if mode == QueryMode.INSENSITIVE:
        return QueryMode.INSENSITIVE
    return QueryMode.SENSITIVE


def build_where(
    where: Mapping[str, Mapping[str, Any]] | None,
    render: ValueRenderer | None = None,
) -> str:
    """Build the ``WHERE`` clause; every fragment is AND-ed together."""
    if not where:
        return ""
    fragments: list[str] = []
    for field_name, spec in where.items():
        if not spec:
            continue
        mode = _field_mode(spec)
        for op, value in spec.items():
            if op == MODE_KEY:
                continue
            fragment = compile_filter(field_name, op, value, mode, render)
            if fragment:
                fragments.append(fragment)
    if not fragments:
        return ""
    return "WHERE " + " AND ".join(fragments)


def build_select(select: Mapping[str, bool] | None) -> str:
    """Build the projection list; ``*`` when nothing is selected."""
    if not select:
        return "*"
    fields = [f"c.{name}" for name, wanted in select.items() if wanted]
    if not fields:
        return "*"
    return ", ".join(fields)


def build_order_by(order_by: Mapping[str, str] | None) -> str:
    """Build the ``ORDER BY`` clause, keeping the declared field order."""
    if not order_by:
        return ""
    clauses: list[str] = []
    for field_name, direction in order_by.items():
        token = direction.value if isinstance(direction, SortDirection) else direction
        if token not in _DIRECTIONS:
            raise InvalidOrderDirectionError(field_name, direction)
        clauses.append(f"c.{field_name} {token}")
    return "ORDER BY " + ", ".join(clauses)


def assemble_query(select: str, where: str = "", order_by: str = "") -> str:
    """Join the clauses into ``SELECT … FROM c [WHERE …] [ORDER BY …]``."""
    parts = [f"SELECT {select or '*'} FROM c"]
    if where:
        parts.append(where)
    if order_by:
        parts.append(order_by)
    return " ".join(parts)


@dataclass(frozen=True)
class SqlQuery:
    """Query text plus the parameters bound out of band (if any)."""

    query: str
    parameters: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{"query", "parameters"}`` shape the store accepts."""
        return {"query": self.query, "parameters": list(self.parameters)}


class CosmosQueryBuilder:
    """Compiles find-many specs into Cosmos SQL.

    With ``parameterize=True`` operands are bound as named parameters
    instead of being written inline; the query text keeps the same shape.
    """

    def __init__(self, *, parameterize: bool = False) -> None:
        self._parameterize = parameterize

    @property
    def parameterize(self) -> bool:
        return self._parameterize

    def build_where(
        self,
        where: Mapping[str, Mapping[str, Any]] | None,
        render: ValueRenderer | None = None,
    ) -> str:
        return build_where(where, render)

    def build_select(self, select: Mapping[str, bool] | None) -> str:
        return build_select(select)

    def build_order_by(self, order_by: Mapping[str, str] | None) -> str:
        return build_order_by(order_by)

    def assemble(self, select: str, where: str = "", order_by: str = "") -> str:
        return assemble_query(select, where, order_by)

    def build(
        self,
        *,
        where: Mapping[str, Mapping[str, Any]] | None = None,
        select: Mapping[str, bool] | None = None,
        order_by: Mapping[str, str] | None = None,
    ) -> SqlQuery:
        """Build the complete query for one request."""
        binder = ParameterBinder() if self._parameterize else None
        query = self.assemble(
            self.build_select(select),
            self.build_where(where, binder),
            self.build_order_by(order_by),
        )
        parameters = binder.parameters if binder is not None else []
        logger.debug("Compiled query: %s (parameters=%d)", query, len(parameters))
        return SqlQuery(query=query, parameters=parameters)
