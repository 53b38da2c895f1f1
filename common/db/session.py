"""Async engine and session factories.

Repositories do not use the factories directly; they go through
`common.db.scoped`, which tests patch to point at SQLite.
"""

from uuid import uuid4

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from common.core.config import Settings, settings
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


def async_database_url(config: Settings) -> str:
    """The configured database URL with the asyncpg driver."""
    return config.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)


def create_engine_from_settings(config: Settings) -> AsyncEngine:
    options = {
        "echo": config.debug,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        # Unique statement names keep asyncpg usable behind PgBouncer
        "connect_args": {
            "prepared_statement_name_func": lambda: f"__asyncpg_{uuid4()}__",
        },
    }

    if config.db_use_nullpool:
        logger.info("Survey database without connection pooling")
        options["poolclass"] = pool.NullPool
    else:
        logger.info(
            f"Survey database pool: size={config.db_pool_size}, overflow={config.db_pool_overflow}"
        )
        options["pool_size"] = config.db_pool_size
        options["max_overflow"] = config.db_pool_overflow

    return create_async_engine(async_database_url(config), **options)


engine = create_engine_from_settings(settings)
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Reads share the engine until a replica is configured
AsyncSessionLocalReadonly = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)
