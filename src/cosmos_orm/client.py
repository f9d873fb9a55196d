"""create_client — wire one Cosmos database and its container models."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError, MissingConnectionStringError
from .model import CosmosModel

if TYPE_CHECKING:
    from azure.cosmos.aio import CosmosClient

    from .filters import FieldKind

logger = logging.getLogger("cosmos_orm.client")

DEFAULT_CONNECTION_STRING_SETTING = "COSMOS_CONNECTION_STRING"


@dataclass(frozen=True)
class ModelDefinition:
    """A model to create: its container and (optionally) its declared fields."""

    container: str
    fields: Mapping[str, FieldKind] | None = None


@dataclass(frozen=True)
class ClientOptions:
    """Configuration for :func:`create_client`.

    Attributes:
        database: Name of the Cosmos database.
        models: Attribute name → model definition.
        connection_string: Explicit connection string; overrides the
            environment lookup.
        connection_string_setting: Environment variable holding the
            connection string.
        parameterize: Bind filter values as query parameters instead of
            writing them into the query text.
    """

    database: str
    models: Mapping[str, ModelDefinition] = field(default_factory=dict)
    connection_string: str | None = None
    connection_string_setting: str = DEFAULT_CONNECTION_STRING_SETTING
    parameterize: bool = False


def resolve_connection_string(
    options: ClientOptions, environ: Mapping[str, str] | None = None
) -> str:
    """Return the explicit connection string, else the one from the environment."""
    if options.connection_string is not None:
        if not options.connection_string:
            raise MissingConnectionStringError(
                "Missing connection string value (from `connection_string`)"
            )
        return options.connection_string
    env = os.environ if environ is None else environ
    value = env.get(options.connection_string_setting)
    if not value:
        raise MissingConnectionStringError(
            f"Missing connection string for {options.connection_string_setting}"
        )
    return value


class CosmosDatabase:
    """The models of one database, reachable by attribute or item access."""

    def __init__(self, client: Any, models: Mapping[str, CosmosModel[Any]]) -> None:
        self._client = client
        self._models = dict(models)

    @property
    def client(self) -> Any:
        return self._client

    @property
    def models(self) -> dict[str, CosmosModel[Any]]:
        return dict(self._models)

    def __getattr__(self, name: str) -> CosmosModel[Any]:
        models = self.__dict__.get("_models", {})
        try:
            return models[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> CosmosModel[Any]:
        return self._models[name]

    def __contains__(self, name: object) -> bool:
        return name in self._models

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()


def _connect(connection_string: str) -> CosmosClient:
    try:
        from azure.cosmos.aio import CosmosClient
    except ImportError as e:
        raise ConfigurationError(
            "azure-cosmos is required; install with cosmos-orm[azure]"
        ) from e
    return CosmosClient.from_connection_string(connection_string)


def create_client(
    options: ClientOptions, *, client: CosmosClient | None = None
) -> CosmosDatabase:
    """Create one ``CosmosModel`` per model definition over a shared client.

    Pass *client* to reuse an existing ``azure.cosmos.aio.CosmosClient``;
    otherwise one is built from the resolved connection string.
    """
    if not options.database:
        raise ConfigurationError("A database name is required")
    if client is None:
        client = _connect(resolve_connection_string(options))

    database = client.get_database_client(options.database)
    models: dict[str, CosmosModel[Any]] = {}
    for attr, definition in options.models.items():
        container = database.get_container_client(definition.container)
        models[attr] = CosmosModel.from_container(
            container,
            name=definition.container,
            fields=definition.fields,
            parameterize=options.parameterize,
        )
    logger.info(
        "Created client for database %s with models: %s",
        options.database,
        ", ".join(models) or "(none)",
    )
    return CosmosDatabase(client, models)
