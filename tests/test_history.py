"""Tests for the transaction history resolver."""
import logging
from types import SimpleNamespace

import pytest

from conftest import FakeTransactionStore, make_user
from core.errors import ForbiddenError, StoreUnavailableError, UnauthorizedError
from core.history import TransactionHistoryResolver, resolve_organization_scope


def test_explicit_organization_wins_over_user_organization():
    assert resolve_organization_scope(9, make_user(organization_id=7)) == 9


def test_missing_organization_falls_back_to_user_organization():
    assert resolve_organization_scope(None, make_user(organization_id=7)) == 7


def test_explicit_organization_without_user():
    assert resolve_organization_scope(9, None) == 9


def test_no_user_and_no_organization_is_unauthorized():
    with pytest.raises(UnauthorizedError):
        resolve_organization_scope(None, None)


def test_user_without_organization_and_no_param_is_unauthorized():
    with pytest.raises(UnauthorizedError):
        resolve_organization_scope(None, make_user(organization_id=None))


@pytest.mark.asyncio
async def test_defaults_to_user_org_without_product_filter(store):
    resolver = TransactionHistoryResolver(store)

    rows = await resolver.get_transaction_history(None, None, make_user(organization_id=7))

    assert store.calls == [(7, None)]
    # every product in the organization is included
    assert {r.product_id for r in rows} == {1, 2}


@pytest.mark.asyncio
async def test_explicit_other_organization_is_queried(store):
    resolver = TransactionHistoryResolver(store)

    rows = await resolver.get_transaction_history(None, 9, make_user(organization_id=7))

    assert store.calls == [(9, None)]
    assert [r.id for r in rows] == [9]


@pytest.mark.asyncio
async def test_cross_organization_read_is_logged_when_not_enforced(store, caplog):
    resolver = TransactionHistoryResolver(store)

    with caplog.at_level(logging.WARNING, logger="inventory_history.history"):
        await resolver.get_transaction_history(None, 9, make_user(organization_id=7))

    assert "cross-organization" in caplog.text


@pytest.mark.asyncio
async def test_product_filter_is_passed_to_store(store):
    resolver = TransactionHistoryResolver(store)

    rows = await resolver.get_transaction_history(1, None, make_user(organization_id=7))

    assert store.calls == [(7, 1)]
    assert all(r.product_id == 1 for r in rows)


@pytest.mark.asyncio
async def test_results_ordered_by_occurred_at_then_id(store):
    resolver = TransactionHistoryResolver(store)

    rows = await resolver.get_transaction_history(None, 7, make_user(organization_id=7))

    assert [r.id for r in rows] == [1, 2, 3, 4, 5]
    keys = [(r.occurred_at, r.id) for r in rows]
    assert keys == sorted(keys)


@pytest.mark.asyncio
async def test_repeated_queries_return_identical_sequences(store):
    resolver = TransactionHistoryResolver(store)
    user = make_user(organization_id=7)

    first = await resolver.get_transaction_history(1, None, user)
    second = await resolver.get_transaction_history(1, None, user)

    assert [r.id for r in first] == [r.id for r in second]


@pytest.mark.asyncio
async def test_empty_store_returns_empty_list():
    resolver = TransactionHistoryResolver(FakeTransactionStore())

    assert await resolver.get_transaction_history(None, None, make_user(organization_id=7)) == []


@pytest.mark.asyncio
async def test_no_user_and_no_organization_never_reaches_store(store):
    resolver = TransactionHistoryResolver(store)

    with pytest.raises(UnauthorizedError):
        await resolver.get_transaction_history(None, None, None)
    assert store.calls == []


@pytest.mark.asyncio
async def test_store_failure_propagates_without_retry():
    store = FakeTransactionStore(error=StoreUnavailableError("down"))
    resolver = TransactionHistoryResolver(store)

    with pytest.raises(StoreUnavailableError):
        await resolver.get_transaction_history(None, None, make_user(organization_id=7))
    assert len(store.calls) == 1


@pytest.mark.asyncio
async def test_enforced_scope_forbids_other_organization(store):
    resolver = TransactionHistoryResolver(store, enforce_organization_scope=True)

    with pytest.raises(ForbiddenError):
        await resolver.get_transaction_history(None, 9, make_user(organization_id=7))
    assert store.calls == []


@pytest.mark.asyncio
async def test_enforced_scope_allows_own_organization(store):
    resolver = TransactionHistoryResolver(store, enforce_organization_scope=True)

    rows = await resolver.get_transaction_history(None, 7, make_user(organization_id=7))

    assert len(rows) == 5


@pytest.mark.asyncio
async def test_enforced_scope_allows_superuser_any_organization(store):
    resolver = TransactionHistoryResolver(store, enforce_organization_scope=True)

    rows = await resolver.get_transaction_history(None, 9, make_user(organization_id=7, is_superuser=True))

    assert [r.id for r in rows] == [9]


@pytest.mark.asyncio
async def test_enforced_scope_requires_user_for_explicit_organization(store):
    resolver = TransactionHistoryResolver(store, enforce_organization_scope=True)

    with pytest.raises(UnauthorizedError):
        await resolver.get_transaction_history(None, 9, None)


@pytest.mark.asyncio
async def test_any_object_with_organization_id_is_accepted(store):
    resolver = TransactionHistoryResolver(store)

    rows = await resolver.get_transaction_history(2, None, SimpleNamespace(organization_id=7))

    assert [r.id for r in rows] == [2]
