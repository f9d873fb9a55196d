"""
PaginationAdapter — runs a compiled query through the store's cursor paging.

One ``execute`` call is one page fetch: ``take`` becomes the page-size
ceiling and ``cursor`` is handed to the store as its continuation token.
Both the cursor going in and the one coming back are opaque and passed
through verbatim.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from .exceptions import InvalidTakeError, MalformedResponseError, StoreExecutionError
from .query_builder import SqlQuery

if TYPE_CHECKING:
    from .ports import PagedQueryExecutor

logger = logging.getLogger("cosmos_orm.pagination")

T = TypeVar("T")


def validate_take(take: Any) -> None:
    """Raise ``InvalidTakeError`` unless *take* is ``None`` or an int >= 1."""
    if take is None:
        return
    if isinstance(take, bool) or not isinstance(take, int) or take < 1:
        raise InvalidTakeError(take)


@dataclass(frozen=True)
class FindManyResponse(Generic[T]):
    """One page of items plus the cursor of the next page, if any."""

    items: list[T] = field(default_factory=lambda: cast("list[T]", []))
    next_cursor: str | None = None

    @property
    def has_next_page(self) -> bool:
        return self.next_cursor is not None


class PaginationAdapter(Generic[T]):
    """Executes queries against a ``PagedQueryExecutor`` one page at a time."""

    def __init__(self, executor: PagedQueryExecutor) -> None:
        self._executor = executor

    @property
    def executor(self) -> PagedQueryExecutor:
        return self._executor

    async def execute(
        self,
        query: SqlQuery | str,
        *,
        take: int | None = None,
        cursor: str | None = None,
    ) -> FindManyResponse[T]:
        """Fetch the page of *query* starting at *cursor*."""
        validate_take(take)
        sql = query if isinstance(query, SqlQuery) else SqlQuery(query=query)

        try:
            payload = await self._executor.fetch_page(
                sql.query,
                parameters=sql.parameters or None,
                continuation_token=cursor,
                max_item_count=take,
            )
        except Exception as exc:
            logger.warning("Query failed: %s (%s)", sql.query, exc)
            raise StoreExecutionError(sql.query, exc) from exc

        return self._translate(sql.query, payload)

    @staticmethod
    def _translate(query: str, payload: Any) -> FindManyResponse[T]:
        if not isinstance(payload, Mapping):
            raise MalformedResponseError(query, payload)
        resources = payload.get("resources")
        if not isinstance(resources, list):
            raise MalformedResponseError(query, resources)
        next_cursor = payload.get("continuation_token")
        logger.debug(
            "Fetched %d item(s); more pages: %s",
            len(resources),
            next_cursor is not None,
        )
        return FindManyResponse(items=list(resources), next_cursor=next_cursor)
