"""
Exception hierarchy for cosmos-orm.

All exceptions inherit from ``CosmosOrmError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class CosmosOrmError(Exception):
    """Root exception for the entire cosmos-orm package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


# ── Validation ───────────────────────────────────────────────────────


class QueryValidationError(CosmosOrmError):
    """A find-many request failed validation before compilation."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class InvalidTakeError(QueryValidationError):
    """``take`` was supplied but is not a positive integer."""

    def __init__(self, take: Any) -> None:
        self.take = take
        super().__init__(
            f"take must be a positive integer, got {take!r}", path="take"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_TAKE",
            "message": self.message,
            "take": repr(self.take),
        }


class InvalidFilterError(QueryValidationError):
    """A filter operator does not apply to a field, or its value has the wrong type."""

    def __init__(self, field: str, message: str, operator: str | None = None) -> None:
        self.field = field
        self.operator = operator
        path = f"where.{field}" + (f".{operator}" if operator else "")
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_FILTER",
            "message": self.message,
            "field": self.field,
            "operator": self.operator,
        }


class InvalidOrderDirectionError(QueryValidationError):
    """An ordering direction other than ``ASC`` or ``DESC``."""

    def __init__(self, field: str, direction: Any) -> None:
        self.field = field
        self.direction = direction
        super().__init__(
            f"Invalid order direction {direction!r} for field '{field}'; "
            "expected 'ASC' or 'DESC'",
            path=f"order_by.{field}",
        )


class FieldNotFoundError(QueryValidationError):
    """
    Field is not part of the model's declared shape.

    Uses fuzzy matching to suggest similar valid field names::

        Invalid field 'fristName' in where on model 'user'.
        Did you mean one of these?
          • firstName

        Available fields: age, createdAt, firstName, lastName
    """

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        clause: str = "where",
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = available_fields
        self.clause = clause
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message(), path=f"{clause}.{invalid_field}")

    def _build_message(self) -> str:
        lines = [
            f"Invalid field '{self.invalid_field}' in {self.clause} "
            f"on model '{self.model_name}'."
        ]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "model": self.model_name,
            "clause": self.clause,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


# ── Configuration ────────────────────────────────────────────────────


class ConfigurationError(CosmosOrmError):
    """Client configuration is incomplete or inconsistent."""


class MissingConnectionStringError(ConfigurationError):
    """No connection string could be resolved for the client."""


# ── Store ────────────────────────────────────────────────────────────


class StoreError(CosmosOrmError):
    """Base class for failures reported by (or about) the document store."""


class StoreExecutionError(StoreError):
    """The paged-execution call failed.

    The original failure is kept as ``cause`` (and chained as
    ``__cause__``); ``query`` holds the query text that was attempted.
    """

    def __init__(self, query: str, cause: BaseException) -> None:
        self.query = query
        self.cause = cause
        self.status_code = getattr(cause, "status_code", None)
        super().__init__(f"Query execution failed: {cause} (query: {query})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "STORE_EXECUTION_ERROR",
            "message": str(self.cause),
            "query": self.query,
            "status_code": self.status_code,
        }


class MalformedResponseError(StoreError):
    """The store returned a page whose item list is not a list."""

    def __init__(self, query: str, payload: Any) -> None:
        self.query = query
        self.payload_type = type(payload).__name__
        super().__init__(
            f"Malformed page for query {query!r}: expected a list of "
            f"resources, got {self.payload_type}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_RESPONSE",
            "query": self.query,
            "payload_type": self.payload_type,
        }
