import argparse
import asyncio
import ssl
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from postboard import models  # noqa: F401
from postboard.config import Settings, settings
from postboard.models.base import Base
from postboard.utils.logger import setup_logger

logger = setup_logger("db")

ASYNCPG_PREFIX = "postgresql+asyncpg://"
AIOSQLITE_PREFIX = "sqlite+aiosqlite://"


def normalize_database_url(url: str | None) -> str:
    """Map a plain connection string onto the async driver SQLAlchemy should use."""
    if not url:
        raise ValueError("DATABASE_URL environment variable not set")

    if url.startswith(ASYNCPG_PREFIX) or url.startswith(AIOSQLITE_PREFIX):
        return url
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return url.replace(prefix, ASYNCPG_PREFIX, 1)
    raise ValueError(f"Unsupported DATABASE_URL prefix: {url.split('://', 1)[0]}")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _insecure_ssl_context() -> ssl.SSLContext:
    # Hosted Postgres with self-signed certificates
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def create_app_engine(app_settings: Settings) -> AsyncEngine:
    """Build the single engine (and its connection pool) used for the process lifetime."""
    url = normalize_database_url(app_settings.database_url)

    if url.startswith(AIOSQLITE_PREFIX):
        engine = create_async_engine(url, echo=False)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        logger.debug("Created SQLite engine")
        return engine

    connect_args = {"timeout": 30}
    if app_settings.database_ssl_require:
        connect_args["ssl"] = _insecure_ssl_context()

    engine = create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=app_settings.db_pool_size,
        max_overflow=app_settings.db_max_overflow,
        pool_timeout=60,
        pool_recycle=300,
        echo=False,
        connect_args=connect_args,
    )
    logger.debug("Created PostgreSQL engine")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# --- Dependency for FastAPI ---
async def get_app_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


async def init_db(engine: AsyncEngine):
    """Create any missing tables."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def reset_db(engine: AsyncEngine):
    logger.warning(
        "Attempting to reset the database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All tables dropped.")
    await init_db(engine)


async def list_tables(engine: AsyncEngine) -> list[str]:
    async with engine.connect() as conn:
        table_names = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )
    logger.info(f"Tables in database: {table_names}")
    return table_names


async def close_db(engine: AsyncEngine):
    """Closes database connections."""
    logger.info("Closing database connections.")
    await engine.dispose()
    logger.info("Database connections closed.")


async def check_db_connection(engine: AsyncEngine) -> bool:
    """Performs a simple query to check actual DB connectivity."""
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar_one() != 1:
                raise RuntimeError("Test query returned an unexpected result.")
    except Exception as e:
        logger.error(f"Failed to execute test query: {e}", exc_info=True)
        raise RuntimeError("Database connectivity check failed.") from e

    logger.info("Successfully connected to the database and executed a test query.")
    return True


async def _run_action(action: str):
    engine = create_app_engine(settings)
    try:
        if action == "init":
            await init_db(engine)
        elif action == "reset":
            await reset_db(engine)
        elif action == "list-tables":
            await list_tables(engine)
    finally:
        await close_db(engine)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="postboard database utility")
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate every table, "
        "'list-tables' to show the tables present in the database.",
    )
    args = parser.parse_args()

    if args.action == "reset":
        confirm = input(
            "WARNING: This will delete all users and posts. Are you sure? (yes/no): "
        )
        if confirm.lower() != "yes":
            logger.info("Database reset cancelled by user.")
            raise SystemExit(0)

    asyncio.run(_run_action(args.action))
    logger.info("Database utility script finished.")
