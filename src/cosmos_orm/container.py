"""ContainerQueryExecutor — PagedQueryExecutor over an azure-cosmos async container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy


class ContainerQueryExecutor:
    """Fetch single query pages from an ``azure.cosmos.aio.ContainerProxy``.

    Extra keyword arguments (``partition_key``, ``session_token``, ...) are
    forwarded to ``query_items`` on every call.
    """

    def __init__(self, container: ContainerProxy, **request_options: Any) -> None:
        self._container = container
        self._request_options = request_options

    @property
    def container(self) -> ContainerProxy:
        return self._container

    async def fetch_page(
        self,
        query: str,
        *,
        parameters: list[dict[str, Any]] | None = None,
        continuation_token: str | None = None,
        max_item_count: int | None = None,
    ) -> dict[str, Any]:
        items = self._container.query_items(
            query=query,
            parameters=parameters,
            max_item_count=max_item_count,
            **self._request_options,
        )
        pager = items.by_page(continuation_token)
        try:
            page = await pager.__anext__()
        except StopAsyncIteration:
            return {"resources": [], "continuation_token": None}
        resources = [item async for item in page]
        return {
            "resources": resources,
            "continuation_token": pager.continuation_token,
        }
