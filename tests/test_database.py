import logging

import pytest
from sqlalchemy import text

from clinic_api.database import install_slow_query_logging, transaction
from clinic_api.models import Service
from tests.conftest import count_rows


async def test_transaction_rolls_back_on_error(session_factory):
    async with session_factory() as db:
        with pytest.raises(RuntimeError):
            async with transaction(db):
                db.add(Service(name="Orphan", price=10.0))
                await db.flush()
                raise RuntimeError("boom")

    assert await count_rows(session_factory, Service) == 0


async def test_transaction_commits(session_factory):
    async with session_factory() as db:
        async with transaction(db):
            db.add(Service(name="Kept", price=10.0))

    assert await count_rows(session_factory, Service) == 1


async def test_slow_query_logging(engine, caplog):
    install_slow_query_logging(engine, threshold=-1)

    with caplog.at_level(logging.WARNING, logger="clinic_api.database"):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    assert any("Slow query" in record.message for record in caplog.records)
