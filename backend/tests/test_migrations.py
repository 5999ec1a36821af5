"""
Tests for the storefront tables migration.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.migrations.storefront_tables import DEFAULT_SHIPPING_OPTIONS, migrate_storefront_tables


def make_engine(existing_options=0, fail_on=None):
    """Engine whose begin() yields one shared mock connection."""
    conn = AsyncMock()
    result = MagicMock()
    result.scalar.return_value = existing_options

    async def execute(statement, params=None):
        if fail_on and fail_on in str(statement):
            raise RuntimeError("permission denied")
        return result

    conn.execute.side_effect = execute
    engine = MagicMock()
    engine.begin.return_value.__aenter__.return_value = conn
    return engine, conn


def executed_sql(conn):
    return [str(c.args[0]) for c in conn.execute.call_args_list]


class TestStorefrontMigration:

    @pytest.mark.asyncio
    async def test_creates_tables_and_seeds_empty_catalog(self):
        engine, conn = make_engine(existing_options=0)

        await migrate_storefront_tables(engine)

        sql = executed_sql(conn)
        for table in ("shipping_options", "orders", "order_items"):
            assert any(f"CREATE TABLE IF NOT EXISTS {table}" in s for s in sql)

        seeded = [c.args[1] for c in conn.execute.call_args_list if len(c.args) > 1]
        assert [(p["name"], p["amount"], p["days"]) for p in seeded] == DEFAULT_SHIPPING_OPTIONS

    @pytest.mark.asyncio
    async def test_existing_catalog_is_left_alone(self):
        engine, conn = make_engine(existing_options=3)

        await migrate_storefront_tables(engine)

        assert not any("INSERT INTO shipping_options" in s for s in executed_sql(conn))

    @pytest.mark.asyncio
    async def test_seed_failure_is_not_fatal(self):
        engine, conn = make_engine(fail_on="SELECT COUNT(*)")

        await migrate_storefront_tables(engine)

        assert engine.begin.call_count == 2

    def test_default_catalog(self):
        assert ("Free Shipping", 0, "5-7") in DEFAULT_SHIPPING_OPTIONS
        assert ("Standard Shipping", 1500, "3-5") in DEFAULT_SHIPPING_OPTIONS
        assert ("Express Shipping", 3000, "1-2") in DEFAULT_SHIPPING_OPTIONS
