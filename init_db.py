"""
Create the clinic database tables
Usage: python init_db.py [--drop]
"""
import asyncio
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from clinic_api import models  # noqa: F401
from clinic_api.database import Base, engine

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def init_models(drop: bool = False):
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("🗑️ All tables dropped")

        await conn.run_sync(Base.metadata.create_all)
        logger.info(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")
    await engine.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(init_models(drop="--drop" in sys.argv[1:]))
    except SQLAlchemyError as e:
        logger.error(f"❌ Database initialization failed: {e}")
        sys.exit(1)
