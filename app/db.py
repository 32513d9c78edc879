import argparse
import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")


def _normalize_database_url(url: str) -> str:
    """Map plain driver URLs onto the async drivers this service uses."""
    if url.startswith("postgresql+asyncpg://") or url.startswith("sqlite+aiosqlite://"):
        return url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    raise ValueError(f"Unsupported REPORTS_DATABASE_URL prefix: {url}")


settings.app_database_url = _normalize_database_url(settings.app_database_url)
logger.debug(f"Application DB dialect: {settings.database_dialect}")

if settings.is_sqlite:
    # Connections are not shared across event loops (tests, CLI, server).
    app_engine = create_async_engine(
        settings.app_database_url,
        poolclass=NullPool,
        echo=False,
    )

    @event.listens_for(app_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    app_engine = create_async_engine(
        settings.app_database_url,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=60,
        pool_recycle=300,
        echo=False,
        connect_args={"timeout": 30},
    )

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- Dependency for FastAPI (Application DB) ---
async def get_app_db() -> AsyncGenerator[AsyncSession, None]:
    async with AppAsyncSessionLocal() as session:
        if settings.schema_name:
            await session.execute(
                text(f"SET search_path TO {settings.schema_name}, public")
            )
        yield session


# --- Function to create tables (for Application DB) ---
async def init_db():
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        if settings.schema_name:
            await conn.execute(
                text(f"CREATE SCHEMA IF NOT EXISTS {settings.schema_name}")
            )
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def list_tables_in_schema(schema_name: str | None = None) -> list[str]:
    """Lists all tables in the given schema (default schema when None)."""
    async with app_engine.connect() as conn:
        table_names = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names(schema=schema_name)
        )

    if table_names:
        logger.info(f"Tables in schema '{schema_name or 'default'}': {table_names}")
    else:
        logger.info(f"No tables found in schema '{schema_name or 'default'}'.")
    return table_names


# --- Function to reset database (for Application DB) ---
async def reset_db():
    logger.warning(
        "Attempting to reset the Application database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        if settings.schema_name:
            await conn.execute(
                text(f"DROP SCHEMA IF EXISTS {settings.schema_name} CASCADE")
            )
        else:
            await conn.run_sync(Base.metadata.drop_all)
    logger.info("Application database tables dropped.")

    await init_db()
    logger.info("Application database has been reset and re-initialized.")


async def check_db_connection(engine_to_check=None, db_name="Application DB"):
    """Performs a simple query to check actual DB connectivity."""
    if engine_to_check is None:
        engine_to_check = app_engine

    session_maker = async_sessionmaker(
        bind=engine_to_check,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info(
                    f"Successfully connected to {db_name} and executed a test query."
                )
                return True
            raise RuntimeError(
                f"Test query to {db_name} returned an unexpected result."
            )
        except Exception as e:
            logger.error(
                f"Failed to execute test query on {db_name}: {e}", exc_info=True
            )
            raise RuntimeError(
                f"Database connectivity check failed for {db_name}."
            ) from e


async def _run_reconcile():
    from app.services.user_service import reconcile_orphans

    await init_db()
    removed = await reconcile_orphans()
    print(f"Reconciliation removed: {removed}")


async def _run_create_admin():
    from app.services.authenticator import ensure_initial_admin

    await init_db()
    created = await ensure_initial_admin()
    if created:
        print(f"Admin user '{created.username}' created.")
    else:
        print("An admin user already exists; nothing to do.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Application Database Initialization Utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables", "reconcile", "create-admin"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'list-tables' to show the tables that exist, "
        "'reconcile' to delete permissions and reports that reference missing users, "
        "'create-admin' to provision the configured admin if no admin exists.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all data in the Application DB. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Application Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables_in_schema(settings.schema_name))
    elif args.action == "reconcile":
        asyncio.run(_run_reconcile())
    elif args.action == "create-admin":
        asyncio.run(_run_create_admin())
    logger.info("Application Database utility script finished.")
