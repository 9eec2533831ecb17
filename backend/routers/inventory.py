from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.auth import current_optional_user
from core.config import settings
from core.history import TransactionHistoryResolver
from core.logging_config import get_logger
from db.inventory.store import SqlTransactionStore, get_transaction_store
from db.users import User
from schemas.inventory import InventoryTransactionOut

logger = get_logger("inventory_history.api.inventory")

router = APIRouter()


def get_history_resolver(
    store: SqlTransactionStore = Depends(get_transaction_store),
) -> TransactionHistoryResolver:
    return TransactionHistoryResolver(
        store,
        enforce_organization_scope=settings.enforce_organization_scope,
    )


@router.get("", response_model=List[InventoryTransactionOut])
async def list_transaction_history(
    product_id: Optional[int] = Query(None, alias="productId"),
    organization_id: Optional[int] = Query(None, alias="organizationId"),
    user: Optional[User] = Depends(current_optional_user),
    resolver: TransactionHistoryResolver = Depends(get_history_resolver),
):
    """
    Transaction history for one organization, oldest first.

    organizationId defaults to the signed-in user's organization; productId
    narrows the result to a single product.
    """
    rows = await resolver.get_transaction_history(product_id, organization_id, user)
    logger.info(
        "Returning %d transactions productId=%s organizationId=%s",
        len(rows),
        product_id,
        organization_id,
    )
    return [InventoryTransactionOut.model_validate(r) for r in rows]
