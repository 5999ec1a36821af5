"""
Database Migration Script for the storefront checkout tables

Creates:
- shipping_options: Flat-rate shipping catalog read at checkout
- orders: Guest checkout orders (UUID id + sequential display_id)
- order_items: Cart line snapshots

Seeds the default shipping catalog when the table is empty.
"""
import asyncio
import logging
from sqlalchemy import text

logger = logging.getLogger(__name__)

# (name, amount in cents, estimated_days)
DEFAULT_SHIPPING_OPTIONS = [
    ("Free Shipping", 0, "5-7"),
    ("Standard Shipping", 1500, "3-5"),
    ("Express Shipping", 3000, "1-2"),
]


async def migrate_storefront_tables(engine):
    """
    Create storefront tables if they don't exist.

    This is an idempotent migration - safe to run multiple times.
    Uses separate transactions for DDL and DML to prevent cascading failures.
    """
    logger.info("Starting storefront tables migration...")

    # Transaction 1: Create all tables (DDL)
    async with engine.begin() as conn:
        # ==================== shipping_options table ====================
        await conn.execute(text("""
            CREATE TABLE IF NOT EXISTS shipping_options (
                id SERIAL PRIMARY KEY,
                name VARCHAR(100) NOT NULL,
                amount INTEGER NOT NULL DEFAULT 0 CHECK (amount >= 0),
                estimated_days VARCHAR(50),
                created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
            )
        """))
        await conn.execute(text(
            "CREATE INDEX IF NOT EXISTS ix_shipping_options_amount ON shipping_options(amount)"
        ))
        logger.info("Created/verified shipping_options table")

        # ==================== orders table ====================
        await conn.execute(text("""
            CREATE TABLE IF NOT EXISTS orders (
                id VARCHAR(36) PRIMARY KEY,
                display_id INTEGER GENERATED BY DEFAULT AS IDENTITY UNIQUE,
                email VARCHAR(255) NOT NULL,
                status VARCHAR(20) NOT NULL DEFAULT 'pending',
                fulfillment_status VARCHAR(20) NOT NULL DEFAULT 'not_fulfilled',
                payment_status VARCHAR(20) NOT NULL DEFAULT 'awaiting',
                currency_code VARCHAR(3) NOT NULL DEFAULT 'eur',
                subtotal INTEGER NOT NULL,
                shipping_total INTEGER NOT NULL DEFAULT 0,
                total INTEGER NOT NULL,
                shipping_address JSON,
                billing_address JSON,
                shipping_method VARCHAR(100),
                metadata JSON,
                created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
            )
        """))
        for idx_sql in [
            "CREATE INDEX IF NOT EXISTS ix_orders_email ON orders(email)",
            "CREATE INDEX IF NOT EXISTS ix_orders_display_id ON orders(display_id)",
        ]:
            await conn.execute(text(idx_sql))
        logger.info("Created/verified orders table")

        # ==================== order_items table ====================
        await conn.execute(text("""
            CREATE TABLE IF NOT EXISTS order_items (
                id SERIAL PRIMARY KEY,
                order_id VARCHAR(36) NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
                title VARCHAR(255) NOT NULL,
                subtitle VARCHAR(255),
                thumbnail VARCHAR(500),
                quantity INTEGER NOT NULL,
                unit_price INTEGER NOT NULL,
                total INTEGER NOT NULL,
                metadata JSON
            )
        """))
        await conn.execute(text(
            "CREATE INDEX IF NOT EXISTS ix_order_items_order_id ON order_items(order_id)"
        ))
        logger.info("Created/verified order_items table")

    logger.info("Storefront tables DDL migration complete!")

    # Transaction 2: Seed data (DML) - separate transaction to prevent DDL rollback on failure
    try:
        async with engine.begin() as conn:
            result = await conn.execute(text("SELECT COUNT(*) FROM shipping_options"))
            if result.scalar() == 0:
                for name, amount, days in DEFAULT_SHIPPING_OPTIONS:
                    await conn.execute(
                        text(
                            "INSERT INTO shipping_options (name, amount, estimated_days) "
                            "VALUES (:name, :amount, :days)"
                        ),
                        {"name": name, "amount": amount, "days": days},
                    )
                logger.info(f"Seeded {len(DEFAULT_SHIPPING_OPTIONS)} default shipping options")
    except Exception as e:
        # Seeding is a convenience; an admin can always create options by hand
        logger.warning(f"Could not seed shipping options: {e}")

    logger.info("Storefront tables migration complete!")


async def run_migration():
    """Run the migration using the app's database engine."""
    from app.core.database import engine
    await migrate_storefront_tables(engine)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run_migration())
