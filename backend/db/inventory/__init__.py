"""
Inventory transaction history (read side).

Models:
- InventoryTransaction (append-only signed quantity changes per product per organization)

Stores:
- SqlTransactionStore (async SQLAlchemy reads scoped to one organization)
"""
