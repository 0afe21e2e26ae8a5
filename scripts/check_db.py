# scripts/check_db.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from sqlalchemy import text
from app.config.settings import get_settings
from app.infrastructure.database.session import engine
from app.partitions.catalog import PartitionCatalog


async def check_connection():
    async with engine.begin() as conn:
        result = await conn.execute(text("SELECT 1"))
        print("DB Connected:", result.scalar())

    settings = get_settings()
    catalog = PartitionCatalog(engine, settings.voter_database, settings.reserved_prefix)
    for info in await catalog.list_selectable():
        print(f"  {info.id:<40} {info.display_name}")

asyncio.run(check_connection())
