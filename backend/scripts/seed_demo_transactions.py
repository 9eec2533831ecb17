import asyncio
import sys
from datetime import datetime, timedelta
from pathlib import Path

"""
Seed a demo organization, an admin user and a small transaction history into the Postgres DB.

This script can be run from either:
- backend/: `uv run python scripts/seed_demo_transactions.py`
- repo root: `uv run python backend/scripts/seed_demo_transactions.py`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import func, select

from db.database import async_session_maker, create_db_and_tables
from db.users import User
from db.organization import Organization
from db.product import Product
from db.inventory.transaction import InventoryTransaction

from fastapi_users.password import PasswordHelper


password_helper = PasswordHelper()


async def get_or_create_organization(session, name: str) -> Organization:
    result = await session.execute(
        select(Organization).where(func.lower(Organization.name) == name.strip().lower())
    )
    org = result.scalar_one_or_none()
    if org:
        return org

    org = Organization(name=name.strip())
    session.add(org)
    await session.flush()
    return org


async def get_or_create_user(session, email: str, password: str, organization_id: int) -> User:
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        email=email,
        hashed_password=password_helper.hash(password),
        is_active=True,
        is_superuser=True,
        is_verified=True,
        organization_id=organization_id,
    )
    session.add(user)
    await session.flush()
    return user


async def get_or_create_product(session, organization_id: int, name: str) -> Product:
    result = await session.execute(
        select(Product).where(
            Product.organization_id == organization_id,
            func.lower(Product.name) == name.strip().lower(),
        )
    )
    product = result.scalar_one_or_none()
    if product:
        return product

    product = Product(organization_id=organization_id, name=name.strip())
    session.add(product)
    await session.flush()
    return product


async def seed_history(session, user: User, product: Product, deltas) -> int:
    # History is append-only; only seed a product that has none yet
    existing = await session.execute(
        select(func.count()).select_from(InventoryTransaction).where(
            InventoryTransaction.product_id == product.id
        )
    )
    if int(existing.scalar_one() or 0) > 0:
        return 0

    start = datetime.now() - timedelta(days=len(deltas))
    for i, (tx_type, delta) in enumerate(deltas):
        session.add(
            InventoryTransaction(
                organization_id=product.organization_id,
                product_id=product.id,
                quantity_delta=delta,
                type=tx_type,
                occurred_at=start + timedelta(days=i),
                created_by_user_id=user.id,
            )
        )
    await session.flush()
    return len(deltas)


async def seed():
    await create_db_and_tables()

    async with async_session_maker() as session:
        async with session.begin():
            org = await get_or_create_organization(session, "Demo Bar")
            user = await get_or_create_user(session, "admin@admin.com", "admin", org.id)

            gin = await get_or_create_product(session, org.id, "Gin 0.7L")
            tonic = await get_or_create_product(session, org.id, "Tonic 0.2L")

            created = 0
            created += await seed_history(
                session,
                user,
                gin,
                [("RECEIPT", 24), ("SALE", -3), ("SALE", -5), ("ADJUSTMENT", -1)],
            )
            created += await seed_history(
                session,
                user,
                tonic,
                [("RECEIPT", 48), ("SALE", -12), ("TRANSFER", -6)],
            )

    print(f"Seeded organization {org.id} ({org.name}); {created} new transactions")


if __name__ == "__main__":
    asyncio.run(seed())
