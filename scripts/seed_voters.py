# scripts/seed_voters.py
"""
Load a JSON array of source voter rows into a master partition.

    python scripts/seed_voters.py [path/to/voters.json] [partition]

Path defaults to $SEED_JSON_PATH or ./data/voters.sample.json; partition to
DEFAULT_PARTITION. The partition's existing rows are replaced. An admin
identity ($DEFAULT_ADMIN_ID, default "admin") is created if missing.
"""

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import json
import os
import uuid

from sqlalchemy import delete, insert

from app.config.settings import get_settings
from app.domain.models.identity import Identity, Role
from app.domain.validators.record_normalizer import normalize_source_row
from app.infrastructure.database.identity_repository_db import DbIdentityRepository
from app.infrastructure.database.session import AsyncSessionLocal, Base, engine
from app.infrastructure.database.types import utcnow
from app.partitions.handles import PartitionHandleCache
from app.partitions.provisioner import PartitionProvisioner

BATCH_SIZE = 1000


def resolve_seed_path(argv) -> Path | None:
    candidates = [argv[1] if len(argv) > 1 else None, os.environ.get("SEED_JSON_PATH"), "./data/voters.sample.json"]
    for candidate in filter(None, candidates):
        path = Path(candidate).resolve()
        if path.exists():
            return path
    return None


async def seed(argv) -> int:
    settings = get_settings()
    seed_path = resolve_seed_path(argv)
    if seed_path is None:
        print("Missing voters JSON. Pass a path, set SEED_JSON_PATH or add ./data/voters.sample.json.")
        return 1
    partition = argv[2] if len(argv) > 2 else settings.default_partition

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    cache = PartitionHandleCache()
    provisioner = PartitionProvisioner(engine, cache, settings.voter_database, settings.reserved_prefix)
    await provisioner.ensure_partition(partition)
    table = cache.handle_for(settings.voter_database, partition).table

    rows = json.loads(seed_path.read_text(encoding="utf-8"))
    now = utcnow()
    docs = [
        {"id": uuid.uuid4().hex, "created_at": now, "updated_at": now, **normalize_source_row(row)}
        for row in rows
    ]

    async with AsyncSessionLocal() as session:
        await session.execute(delete(table))
        for start in range(0, len(docs), BATCH_SIZE):
            await session.execute(insert(table), docs[start:start + BATCH_SIZE])
        await session.commit()

        admin_id = os.environ.get("DEFAULT_ADMIN_ID", "admin")
        identities = DbIdentityRepository(session)
        if await identities.get(admin_id) is None:
            await identities.create(Identity(identity_id=admin_id, role=Role.ADMIN, username=admin_id))
            print(f"Seeded admin identity -> {admin_id}")

    print(f"Seeded voters -> {len(docs)} into {partition}")
    await engine.dispose()
    return 0

sys.exit(asyncio.run(seed(sys.argv)))
