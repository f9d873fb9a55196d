from pytest_archon import archrule


def test_compilation_is_store_independent() -> None:
    """
    Query compilation is pure: it must not depend on the SDK adapter,
    paging, the model facade or client bootstrapping.
    """
    for module in (
        "cosmos_orm.query_builder",
        "cosmos_orm.operators*",
        "cosmos_orm.rendering",
        "cosmos_orm.filters",
    ):
        (
            archrule("compilation_is_pure")
            .match(module)
            .should_not_import("cosmos_orm.container")
            .should_not_import("cosmos_orm.pagination")
            .should_not_import("cosmos_orm.model")
            .should_not_import("cosmos_orm.client")
            .should_not_import("azure*")
            .check("cosmos_orm")
        )


def test_operators_do_not_import_builder() -> None:
    """
    Operator compilers are leaves; the builder composes them, not the
    other way round.
    """
    (
        archrule("operators_are_leaves")
        .match("cosmos_orm.operators*")
        .should_not_import("cosmos_orm.query_builder")
        .check("cosmos_orm")
    )


def test_pagination_does_not_know_the_sdk() -> None:
    """
    Paging talks to the PagedQueryExecutor port only.
    """
    (
        archrule("pagination_uses_port")
        .match("cosmos_orm.pagination")
        .should_not_import("cosmos_orm.container")
        .should_not_import("azure*")
        .check("cosmos_orm")
    )


def test_facade_does_not_import_client() -> None:
    """
    The model facade is usable without client bootstrapping.
    """
    (
        archrule("model_without_client")
        .match("cosmos_orm.model")
        .should_not_import("cosmos_orm.client")
        .check("cosmos_orm")
    )
