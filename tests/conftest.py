import os
import tempfile
import uuid
from datetime import datetime
from types import SimpleNamespace

import pytest

# Keep test log files out of the working tree; must be set before core.config is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="inventory-history-logs-"))

from db.inventory.transaction import InventoryTransaction  # noqa: E402


class FakeTransactionStore:
    """In-memory store that returns matches in insertion order and records every query."""

    def __init__(self, rows=None, error=None):
        self.rows = list(rows or [])
        self.error = error
        self.calls = []

    async def query(self, organization_id, product_id=None):
        self.calls.append((organization_id, product_id))
        if self.error is not None:
            raise self.error
        return [
            r
            for r in self.rows
            if r.organization_id == organization_id and (product_id is None or r.product_id == product_id)
        ]


def make_tx(id, organization_id=7, product_id=1, occurred_at=None, quantity_delta=1, type="RECEIPT"):
    return InventoryTransaction(
        id=id,
        organization_id=organization_id,
        product_id=product_id,
        quantity_delta=quantity_delta,
        type=type,
        occurred_at=occurred_at or datetime(2024, 1, 1, 12, 0, 0),
    )


def make_user(organization_id=7, is_superuser=False):
    return SimpleNamespace(id=uuid.uuid4(), organization_id=organization_id, is_superuser=is_superuser)


@pytest.fixture
def history_rows():
    return [
        make_tx(5, product_id=1, occurred_at=datetime(2024, 1, 3), quantity_delta=-2, type="SALE"),
        make_tx(2, product_id=2, occurred_at=datetime(2024, 1, 1), quantity_delta=10),
        make_tx(4, product_id=1, occurred_at=datetime(2024, 1, 2), quantity_delta=-1, type="ADJUSTMENT"),
        make_tx(3, product_id=1, occurred_at=datetime(2024, 1, 2), quantity_delta=6),
        make_tx(1, product_id=1, occurred_at=datetime(2024, 1, 1), quantity_delta=20),
        make_tx(9, organization_id=9, product_id=3, occurred_at=datetime(2024, 2, 1), quantity_delta=4, type="TRANSFER"),
    ]


@pytest.fixture
def store(history_rows):
    return FakeTransactionStore(history_rows)
