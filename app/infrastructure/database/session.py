# app/infrastructure/database/session.py

from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from app.config.settings import get_settings

DATABASE_URL = get_settings().database_url


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create the async engine; pool sizing only applies to server databases."""
    options = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    options.update(kwargs)
    return create_async_engine(url, **options)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


engine = build_engine(DATABASE_URL)

AsyncSessionLocal = build_sessionmaker(engine)

Base = declarative_base()


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def begin_transactional_ddl(conn: AsyncConnection) -> None:
    """
    Make DDL on conn part of its open transaction. The SQLite driver only opens a
    transaction before DML, so CREATE TABLE would otherwise commit on its own.
    Scoped to one connection; request sessions keep the driver's default so they
    do not hold read locks that block provisioning commits.
    """
    if conn.dialect.name == "sqlite":
        await conn.exec_driver_sql("BEGIN")
