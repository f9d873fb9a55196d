"""CosmosModel[T] — typed find-many facade over one Cosmos container."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .container import ContainerQueryExecutor
from .exceptions import FieldNotFoundError, InvalidFilterError
from .filters import MODE_KEY, FieldKind, FilterOperator, validate_filter
from .pagination import FindManyResponse, PaginationAdapter, validate_take
from .query_builder import CosmosQueryBuilder

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy

    from .ports import PagedQueryExecutor

logger = logging.getLogger("cosmos_orm.model")

T = TypeVar("T")

_KNOWN_KEYS = frozenset(op.value for op in FilterOperator) | {MODE_KEY}


@dataclass(frozen=True)
class FindManyRequest:
    """
    Immutable find-many request.

    Attributes:
        where: Field name → filter (operator → value); all filters are AND-ed.
        select: Field name → include flag. ``None``/all-false selects ``*``.
        order_by: Field name → ``"ASC"``/``"DESC"``, in priority order.
        take: Page-size ceiling; a positive integer.
        cursor: Continuation token returned by the previous page.
    """

    where: Mapping[str, Mapping[str, Any]] | None = None
    select: Mapping[str, bool] | None = None
    order_by: Mapping[str, str] | None = None
    take: int | None = None
    cursor: str | None = None


class CosmosModel(Generic[T]):
    """
    Query facade for one container.

    ``fields`` declares the model's shape (field name → ``FieldKind``).
    When given, every field referenced in a request must belong to it and
    each filter is checked against the filter shape of the field's kind.
    Models declared without fields accept any field name.
    """

    def __init__(
        self,
        executor: PagedQueryExecutor,
        *,
        name: str,
        fields: Mapping[str, FieldKind] | None = None,
        parameterize: bool = False,
    ) -> None:
        self._name = name
        self._fields = dict(fields) if fields else None
        self._query_builder = CosmosQueryBuilder(parameterize=parameterize)
        self._pagination: PaginationAdapter[T] = PaginationAdapter(executor)

    @classmethod
    def from_container(
        cls,
        container: ContainerProxy,
        *,
        name: str | None = None,
        fields: Mapping[str, FieldKind] | None = None,
        parameterize: bool = False,
        **request_options: Any,
    ) -> CosmosModel[T]:
        """Create a model over an ``azure.cosmos.aio`` container proxy."""
        return cls(
            ContainerQueryExecutor(container, **request_options),
            name=name or container.id,
            fields=fields,
            parameterize=parameterize,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> dict[str, FieldKind] | None:
        return dict(self._fields) if self._fields is not None else None

    @property
    def query_builder(self) -> CosmosQueryBuilder:
        return self._query_builder

    async def find_many(
        self, request: FindManyRequest | None = None, **kwargs: Any
    ) -> FindManyResponse[T]:
        """Fetch one page of documents matching *request*.

        Accepts a ``FindManyRequest`` or its fields as keyword arguments::

            page = await users.find_many(
                where={"age": {"gte": 18}},
                order_by={"lastName": "ASC"},
                take=20,
            )
            next_page = await users.find_many(take=20, cursor=page.next_cursor)
        """
        if request is None:
            request = FindManyRequest(**kwargs)
        elif kwargs:
            request = replace(request, **kwargs)

        validate_take(request.take)
        where = self._validate_where(request.where)
        self._check_fields(request.select, "select")
        self._check_fields(request.order_by, "order_by")

        sql = self._query_builder.build(
            where=where, select=request.select, order_by=request.order_by
        )
        return await self._pagination.execute(
            sql, take=request.take, cursor=request.cursor
        )

    def _check_fields(self, spec: Mapping[str, Any] | None, clause: str) -> None:
        if not spec or self._fields is None:
            return
        for field_name in spec:
            if field_name not in self._fields:
                raise FieldNotFoundError(
                    field_name, self._name, list(self._fields), clause=clause
                )

    def _validate_where(
        self, where: Mapping[str, Mapping[str, Any]] | None
    ) -> dict[str, dict[str, Any]] | None:
        if not where:
            return None
        self._check_fields(where, "where")
        validated: dict[str, dict[str, Any]] = {}
        for field_name, spec in where.items():
            if self._fields is not None:
                spec = validate_filter(field_name, self._fields[field_name], spec)
            elif not isinstance(spec, Mapping):
                raise InvalidFilterError(
                    field_name,
                    f"Filter for '{field_name}' must be a mapping of operator to value",
                )
            unknown = [key for key in spec if key not in _KNOWN_KEYS]
            if unknown:
                logger.debug(
                    "Ignoring unrecognised operator(s) %s on %s.%s",
                    unknown,
                    self._name,
                    field_name,
                )
            validated[field_name] = dict(spec)
        return validated
