"""Shared fixtures for cosmos-orm tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cosmos_orm import CosmosModel, FieldKind

USER_FIELDS = {
    "firstName": FieldKind.STRING,
    "lastName": FieldKind.STRING,
    "age": FieldKind.NUMBER,
    "createdAt": FieldKind.DATE,
    "isSuperAdmin": FieldKind.BOOLEAN,
}


@pytest.fixture
def executor():
    """Paged-execution collaborator returning one page and a continuation token."""
    mock = AsyncMock()
    mock.fetch_page.return_value = {
        "resources": [{"id": "1", "firstName": "Alice"}],
        "continuation_token": "tok",
    }
    return mock


@pytest.fixture
def user_fields():
    return dict(USER_FIELDS)


@pytest.fixture
def users(executor, user_fields):
    """Typed ``user`` model over the mocked collaborator."""
    return CosmosModel(executor, name="user", fields=user_fields)
