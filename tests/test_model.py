"""Tests for CosmosModel.find_many."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cosmos_orm import (
    ContainerQueryExecutor,
    CosmosModel,
    FieldNotFoundError,
    FindManyRequest,
    FindManyResponse,
    InvalidFilterError,
    InvalidOrderDirectionError,
    InvalidTakeError,
    MalformedResponseError,
    StoreExecutionError,
)


def _sent_query(executor) -> str:
    return executor.fetch_page.await_args.args[0]


class TestFindMany:
    @pytest.mark.asyncio
    async def test_no_arguments_selects_everything(self, users, executor):
        page = await users.find_many()
        assert isinstance(page, FindManyResponse)
        executor.fetch_page.assert_awaited_once_with(
            "SELECT * FROM c",
            parameters=None,
            continuation_token=None,
            max_item_count=None,
        )

    @pytest.mark.asyncio
    async def test_returns_page_unchanged(self, users):
        page = await users.find_many(take=1)
        assert page.items == [{"id": "1", "firstName": "Alice"}]
        assert page.next_cursor == "tok"

    @pytest.mark.asyncio
    async def test_full_request(self, users, executor):
        request = FindManyRequest(
            where={
                "isSuperAdmin": {"not": True},
                "firstName": {
                    "startsWith": "haha",
                    "endsWith": "hehe",
                    "mode": "INSENSITIVE",
                },
                "lastName": {"equals": "hehe"},
                "age": {"lte": 10, "notIn": [1, 2, 3]},
            },
            select={"firstName": True, "lastName": True},
            order_by={"lastName": "ASC", "firstName": "DESC"},
            take=20,
            cursor="prev",
        )
        await users.find_many(request)
        executor.fetch_page.assert_awaited_once_with(
            "SELECT c.firstName, c.lastName FROM c"
            " WHERE c.isSuperAdmin != true"
            " AND STARTSWITH(LOWER(c.firstName), LOWER('haha'))"
            " AND ENDSWITH(LOWER(c.firstName), LOWER('hehe'))"
            " AND c.lastName = 'hehe'"
            " AND c.age <= 10"
            " AND c.age NOT IN (1,2,3)"
            " ORDER BY c.lastName ASC, c.firstName DESC",
            parameters=None,
            continuation_token="prev",
            max_item_count=20,
        )

    @pytest.mark.asyncio
    async def test_keyword_arguments_override_request(self, users, executor):
        request = FindManyRequest(where={"age": {"gt": 1}}, take=5)
        await users.find_many(request, cursor="next")
        kwargs = executor.fetch_page.await_args.kwargs
        assert kwargs["continuation_token"] == "next"
        assert kwargs["max_item_count"] == 5

    @pytest.mark.asyncio
    async def test_date_strings_render_as_iso(self, users, executor):
        await users.find_many(where={"createdAt": {"gte": "2024-01-01T00:00:00"}})
        assert _sent_query(executor) == (
            "SELECT * FROM c WHERE c.createdAt >= '2024-01-01T00:00:00'"
        )

    @pytest.mark.asyncio
    async def test_date_strings_pass_through_verbatim(self, users, executor):
        await users.find_many(
            where={"createdAt": {"equals": "2024-01-01T00:00:00.000Z"}}
        )
        assert _sent_query(executor) == (
            "SELECT * FROM c WHERE c.createdAt = '2024-01-01T00:00:00.000Z'"
        )

    @pytest.mark.asyncio
    async def test_attribute_name_keys_are_dropped(self, users, executor):
        await users.find_many(where={"firstName": {"starts_with": "A"}})
        assert _sent_query(executor) == "SELECT * FROM c"

    @pytest.mark.asyncio
    async def test_unrecognised_operators_are_dropped(self, users, executor):
        await users.find_many(where={"age": {"between": [1, 9], "gt": 3}})
        assert _sent_query(executor) == "SELECT * FROM c WHERE c.age > 3"

    @pytest.mark.asyncio
    async def test_empty_in_list_is_dropped(self, users, executor):
        await users.find_many(where={"age": {"in": []}})
        assert _sent_query(executor) == "SELECT * FROM c"

    @pytest.mark.asyncio
    async def test_all_false_select_is_everything(self, users, executor):
        await users.find_many(select={"firstName": False})
        assert _sent_query(executor) == "SELECT * FROM c"


class TestFindManyValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("take", [0, -1, 1.5])
    async def test_invalid_take(self, users, executor, take):
        with pytest.raises(InvalidTakeError):
            await users.find_many(take=take)
        executor.fetch_page.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("take", [1, 100])
    async def test_valid_take(self, users, executor, take):
        await users.find_many(take=take)
        assert executor.fetch_page.await_args.kwargs["max_item_count"] == take

    @pytest.mark.asyncio
    async def test_unknown_where_field(self, users, executor):
        with pytest.raises(FieldNotFoundError) as exc_info:
            await users.find_many(where={"fristName": {"equals": "A"}})
        err = exc_info.value
        assert err.clause == "where"
        assert "firstName" in err.suggestions
        executor.fetch_page.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_select_field(self, users):
        with pytest.raises(FieldNotFoundError) as exc_info:
            await users.find_many(select={"email": True})
        assert exc_info.value.clause == "select"

    @pytest.mark.asyncio
    async def test_unknown_order_by_field(self, users):
        with pytest.raises(FieldNotFoundError) as exc_info:
            await users.find_many(order_by={"email": "ASC"})
        assert exc_info.value.clause == "order_by"

    @pytest.mark.asyncio
    async def test_operator_not_valid_for_kind(self, users, executor):
        with pytest.raises(InvalidFilterError) as exc_info:
            await users.find_many(where={"age": {"contains": "3"}})
        assert exc_info.value.operator == "contains"
        executor.fetch_page.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_operand_type(self, users):
        with pytest.raises(InvalidFilterError):
            await users.find_many(where={"age": {"equals": "thirty"}})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "where",
        [
            {"createdAt": {"gt": 1700000000}},
            {"age": {"lt": float("nan")}},
        ],
    )
    async def test_operand_without_a_literal_form(self, users, executor, where):
        with pytest.raises(InvalidFilterError):
            await users.find_many(where=where)
        executor.fetch_page.assert_not_awaited()


    @pytest.mark.asyncio
    async def test_bad_order_direction(self, users, executor):
        with pytest.raises(InvalidOrderDirectionError):
            await users.find_many(order_by={"age": "UP"})
        executor.fetch_page.assert_not_awaited()


class TestFindManyStoreErrors:
    @pytest.mark.asyncio
    async def test_store_failure(self, users, executor):
        executor.fetch_page.side_effect = RuntimeError("boom")
        with pytest.raises(StoreExecutionError) as exc_info:
            await users.find_many(where={"age": {"gt": 1}})
        assert exc_info.value.query == "SELECT * FROM c WHERE c.age > 1"

    @pytest.mark.asyncio
    async def test_resources_not_a_list(self, users, executor):
        executor.fetch_page.return_value = {"resources": "oops"}
        with pytest.raises(MalformedResponseError):
            await users.find_many()


class TestUntypedModel:
    @pytest.mark.asyncio
    async def test_accepts_any_field(self, executor):
        model = CosmosModel(executor, name="Role")
        await model.find_many(where={"whatever": {"equals": "x"}})
        assert _sent_query(executor) == "SELECT * FROM c WHERE c.whatever = 'x'"
        assert model.fields is None

    @pytest.mark.asyncio
    async def test_filter_must_be_mapping(self, executor):
        model = CosmosModel(executor, name="Role")
        with pytest.raises(InvalidFilterError):
            await model.find_many(where={"name": "admin"})


class TestParameterizedModel:
    @pytest.mark.asyncio
    async def test_values_are_bound(self, executor, user_fields):
        model = CosmosModel(
            executor, name="user", fields=user_fields, parameterize=True
        )
        await model.find_many(where={"lastName": {"equals": "O'Brien"}})
        executor.fetch_page.assert_awaited_once_with(
            "SELECT * FROM c WHERE c.lastName = @lastName_equals",
            parameters=[{"name": "@lastName_equals", "value": "O'Brien"}],
            continuation_token=None,
            max_item_count=None,
        )


def test_from_container_wraps_sdk_container(user_fields):
    container = MagicMock()
    container.id = "User"
    model = CosmosModel.from_container(container, fields=user_fields)
    assert model.name == "User"
    executor = model._pagination.executor
    assert isinstance(executor, ContainerQueryExecutor)
    assert executor.container is container


def test_model_properties(executor, user_fields):
    model = CosmosModel(executor, name="user", fields=user_fields)
    assert model.name == "user"
    assert model.fields == user_fields
    assert model.query_builder.parameterize is False
