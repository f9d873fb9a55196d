"""PagedQueryExecutor — protocol of the store's paged query execution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PagedQueryExecutor(Protocol):
    """
    Runs one query and returns a single page of results.

    Implementations return a mapping shaped like::

        {"resources": [...], "continuation_token": "..." | None}

    ``continuation_token`` is opaque; ``None`` (or a missing key) means there
    are no further pages. ``max_item_count`` is a page-size ceiling, not an
    exact count.
    """

    async def fetch_page(
        self,
        query: str,
        *,
        parameters: list[dict[str, Any]] | None = None,
        continuation_token: str | None = None,
        max_item_count: int | None = None,
    ) -> Mapping[str, Any]: ...
