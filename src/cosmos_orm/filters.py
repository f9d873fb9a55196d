"""
Filter vocabulary and the typed filter shape of each field kind.

A model declares the *kind* of each field (``FieldKind``); the kind selects
one of the filter models below, which is used at the boundary to check that
a caller's filter only uses operators that make sense for that field and
that the operand types match.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidFilterError


class FilterOperator(str, Enum):
    """Operator keys recognised inside a per-field filter."""

    EQUALS = "equals"
    NOT = "not"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"


class QueryMode(str, Enum):
    """Case-sensitivity of the string pattern operators."""

    SENSITIVE = "SENSITIVE"
    INSENSITIVE = "INSENSITIVE"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class FieldKind(str, Enum):
    """Declared kind of a model field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


MODE_KEY = "mode"

_COMPARISON = frozenset(
    {
        FilterOperator.EQUALS,
        FilterOperator.NOT,
        FilterOperator.GT,
        FilterOperator.GTE,
        FilterOperator.LT,
        FilterOperator.LTE,
        FilterOperator.IN,
        FilterOperator.NOT_IN,
    }
)

OPERATORS_BY_KIND: dict[FieldKind, frozenset[FilterOperator]] = {
    FieldKind.STRING: frozenset(
        {
            FilterOperator.EQUALS,
            FilterOperator.NOT,
            FilterOperator.IN,
            FilterOperator.NOT_IN,
            FilterOperator.CONTAINS,
            FilterOperator.STARTS_WITH,
            FilterOperator.ENDS_WITH,
        }
    ),
    FieldKind.NUMBER: _COMPARISON,
    FieldKind.BOOLEAN: frozenset({FilterOperator.EQUALS, FilterOperator.NOT}),
    FieldKind.DATE: _COMPARISON,
}

_OPERATOR_KEYS = frozenset(op.value for op in FilterOperator)


# ── Typed filter shapes ──────────────────────────────────────────────

_FILTER_CONFIG = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

Number = StrictInt | Annotated[StrictFloat, AllowInfNan(False)]

_DATETIME_TEXT = TypeAdapter(datetime)


def _iso_date_text(value: str) -> str:
    # Bare digits would otherwise parse as a Unix timestamp.
    if value.strip().lstrip("+-").replace(".", "", 1).isdigit():
        raise ValueError("expected an ISO-8601 date, not a timestamp")
    try:
        _DATETIME_TEXT.validate_python(value)
    except PydanticValidationError as exc:
        raise ValueError(f"{value!r} is not an ISO-8601 date") from exc
    return value


DateValue = (
    Annotated[datetime, Strict()]
    | Annotated[date, Strict()]
    | Annotated[StrictStr, AfterValidator(_iso_date_text)]
)


class StringFilter(BaseModel):
    model_config = _FILTER_CONFIG

    equals: StrictStr | None = None
    not_: StrictStr | None = Field(default=None, alias="not")
    in_: list[StrictStr] | None = Field(default=None, alias="in")
    not_in: list[StrictStr] | None = Field(default=None, alias="notIn")
    contains: StrictStr | None = None
    starts_with: StrictStr | None = Field(default=None, alias="startsWith")
    ends_with: StrictStr | None = Field(default=None, alias="endsWith")
    mode: QueryMode = QueryMode.SENSITIVE


class NumberFilter(BaseModel):
    model_config = _FILTER_CONFIG

    equals: Number | None = None
    not_: Number | None = Field(default=None, alias="not")
    in_: list[Number] | None = Field(default=None, alias="in")
    not_in: list[Number] | None = Field(default=None, alias="notIn")
    gt: Number | None = None
    gte: Number | None = None
    lt: Number | None = None
    lte: Number | None = None


class BooleanFilter(BaseModel):
    model_config = _FILTER_CONFIG

    equals: StrictBool | None = None
    not_: StrictBool | None = Field(default=None, alias="not")


class DateFilter(BaseModel):
    model_config = _FILTER_CONFIG

    equals: DateValue | None = None
    not_: DateValue | None = Field(default=None, alias="not")
    in_: list[DateValue] | None = Field(default=None, alias="in")
    not_in: list[DateValue] | None = Field(default=None, alias="notIn")
    gt: DateValue | None = None
    gte: DateValue | None = None
    lt: DateValue | None = None
    lte: DateValue | None = None


FILTER_MODELS: dict[FieldKind, type[BaseModel]] = {
    FieldKind.STRING: StringFilter,
    FieldKind.NUMBER: NumberFilter,
    FieldKind.BOOLEAN: BooleanFilter,
    FieldKind.DATE: DateFilter,
}


def validate_filter(
    field: str, kind: FieldKind, spec: Mapping[str, Any]
) -> dict[str, Any]:
    """Validate one field's filter against the filter shape of *kind*.

    The shape only checks types: the caller's values are returned as given,
    in the caller's key order, so date text reaches the query verbatim. Keys
    that are not operators at all are passed through untouched; the compiler
    drops them.
    """
    if not isinstance(spec, Mapping):
        raise InvalidFilterError(
            field,
            f"Filter for '{field}' must be a mapping of operator to value, "
            f"got {type(spec).__name__}",
        )

    kind = FieldKind(kind)
    allowed = OPERATORS_BY_KIND[kind]
    for key in spec:
        if key in _OPERATOR_KEYS and FilterOperator(key) not in allowed:
            raise InvalidFilterError(
                field,
                f"Operator '{key}' is not supported on {kind.value} field '{field}'",
                operator=key,
            )
        if key == MODE_KEY and kind is not FieldKind.STRING:
            raise InvalidFilterError(
                field,
                f"'mode' only applies to string fields, not {kind.value} field '{field}'",
                operator=key,
            )

    try:
        FILTER_MODELS[kind].model_validate(dict(spec))
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc", ())
        operator = str(loc[0]) if loc else None
        raise InvalidFilterError(
            field,
            f"Invalid value for '{field}.{operator}': {error.get('msg', 'invalid value')}",
            operator=operator,
        ) from exc

    return dict(spec)
