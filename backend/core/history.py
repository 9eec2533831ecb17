"""
Inventory transaction history resolution.

The resolver turns optional product/organization filters plus the caller into
an effective organization scope, then reads that scope's transactions from a
store in a stable order: occurred_at ascending, then id ascending.

The caller is passed in explicitly. Any object with an ``organization_id``
attribute (and optionally ``is_superuser``) will do, so the fastapi-users
``User`` row can be handed over as-is.
"""

from datetime import datetime
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from core.errors import ForbiddenError, UnauthorizedError
from core.logging_config import get_logger

logger = get_logger("inventory_history.history")


class AuthenticatedUser(Protocol):
    organization_id: Optional[int]


class TransactionRecord(Protocol):
    id: int
    occurred_at: datetime


class TransactionStore(Protocol):
    async def query(self, organization_id: int, product_id: Optional[int] = None) -> Sequence[Any]:
        ...


def resolve_organization_scope(
    organization_id: Optional[int],
    current_user: Optional[AuthenticatedUser],
) -> int:
    """Explicit organization_id wins; otherwise fall back to the caller's own organization."""
    if organization_id is not None:
        return organization_id
    user_org = getattr(current_user, "organization_id", None) if current_user is not None else None
    if user_org is None:
        raise UnauthorizedError(
            "No organization scope: pass organizationId or sign in as a user that belongs to an organization"
        )
    return user_org


def history_sort_key(tx: TransactionRecord) -> Tuple[datetime, int]:
    return (tx.occurred_at, tx.id)


class TransactionHistoryResolver:
    def __init__(self, store: TransactionStore, enforce_organization_scope: bool = False):
        self.store = store
        self.enforce_organization_scope = enforce_organization_scope

    async def get_transaction_history(
        self,
        product_id: Optional[int],
        organization_id: Optional[int],
        current_user: Optional[AuthenticatedUser],
    ) -> List[Any]:
        scope = resolve_organization_scope(organization_id, current_user)
        self._check_scope_access(scope, current_user)

        logger.info(
            "Fetching transaction history organization_id=%s product_id=%s",
            scope,
            product_id,
        )
        rows = await self.store.query(scope, product_id=product_id)
        return sorted(rows, key=history_sort_key)

    def _check_scope_access(self, scope: int, current_user: Optional[AuthenticatedUser]) -> None:
        own_org = getattr(current_user, "organization_id", None) if current_user is not None else None
        if own_org == scope or getattr(current_user, "is_superuser", False):
            return

        if not self.enforce_organization_scope:
            # Cross-organization reads are allowed unless ENFORCE_ORGANIZATION_SCOPE is set.
            logger.warning(
                "Unchecked cross-organization history read user_id=%s own_organization_id=%s requested_organization_id=%s",
                getattr(current_user, "id", None),
                own_org,
                scope,
            )
            return

        if current_user is None:
            raise UnauthorizedError("Authentication required to read organization history")
        raise ForbiddenError("Not allowed to read this organization's history")
