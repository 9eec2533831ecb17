from typing import Optional, Sequence

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import StoreUnavailableError
from core.logging_config import get_logger
from db.database import get_async_session
from db.inventory.transaction import InventoryTransaction as InventoryTransactionModel

logger = get_logger("inventory_history.store")


class SqlTransactionStore:
    """Reads inventory transactions for one organization through an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def query(
        self,
        organization_id: int,
        product_id: Optional[int] = None,
    ) -> Sequence[InventoryTransactionModel]:
        stmt = select(InventoryTransactionModel).where(
            InventoryTransactionModel.organization_id == organization_id
        )
        if product_id is not None:
            stmt = stmt.where(InventoryTransactionModel.product_id == product_id)
        stmt = stmt.order_by(
            InventoryTransactionModel.occurred_at.asc(),
            InventoryTransactionModel.id.asc(),
        )

        try:
            res = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            logger.exception(
                "Transaction query failed organization_id=%s product_id=%s",
                organization_id,
                product_id,
            )
            raise StoreUnavailableError("Inventory transaction store is unavailable") from e
        return res.scalars().all()


async def get_transaction_store(
    db: AsyncSession = Depends(get_async_session),
) -> SqlTransactionStore:
    return SqlTransactionStore(db)
