from .client import (
    ClientOptions,
    CosmosDatabase,
    ModelDefinition,
    create_client,
    resolve_connection_string,
)
from .container import ContainerQueryExecutor
from .exceptions import (
    ConfigurationError,
    CosmosOrmError,
    FieldNotFoundError,
    InvalidFilterError,
    InvalidOrderDirectionError,
    InvalidTakeError,
    MalformedResponseError,
    MissingConnectionStringError,
    QueryValidationError,
    StoreError,
    StoreExecutionError,
)
from .filters import (
    BooleanFilter,
    DateFilter,
    FieldKind,
    FilterOperator,
    NumberFilter,
    QueryMode,
    SortDirection,
    StringFilter,
    validate_filter,
)
from .model import CosmosModel, FindManyRequest
from .pagination import FindManyResponse, PaginationAdapter, validate_take
from .ports import PagedQueryExecutor
from .query_builder import (
    CosmosQueryBuilder,
    SqlQuery,
    assemble_query,
    build_order_by,
    build_select,
    build_where,
    compile_filter,
)
from .rendering import LiteralRenderer, ParameterBinder, render_literal

__all__ = [
    # Model facade
    "CosmosModel",
    "FindManyRequest",
    "FindManyResponse",
    # Client
    "ClientOptions",
    "ModelDefinition",
    "CosmosDatabase",
    "create_client",
    "resolve_connection_string",
    # Filters
    "FilterOperator",
    "QueryMode",
    "SortDirection",
    "FieldKind",
    "StringFilter",
    "NumberFilter",
    "BooleanFilter",
    "DateFilter",
    "validate_filter",
    # Query building
    "CosmosQueryBuilder",
    "SqlQuery",
    "compile_filter",
    "build_where",
    "build_select",
    "build_order_by",
    "assemble_query",
    "LiteralRenderer",
    "ParameterBinder",
    "render_literal",
    # Paging
    "PaginationAdapter",
    "PagedQueryExecutor",
    "ContainerQueryExecutor",
    "validate_take",
    # Exceptions
    "CosmosOrmError",
    "QueryValidationError",
    "InvalidTakeError",
    "InvalidFilterError",
    "InvalidOrderDirectionError",
    "FieldNotFoundError",
    "ConfigurationError",
    "MissingConnectionStringError",
    "StoreError",
    "StoreExecutionError",
    "MalformedResponseError",
]
