"""
Operation-scoped database sessions.

`get_session()` is what repositories use when they were built without an
explicit session: it joins the enclosing `transaction()` if there is one,
otherwise it opens a session for this single operation, commits and releases
it straight away.

`transaction()` opens a session that every repository call inside the block
shares; it commits once at the end or rolls everything back on error.

See also:
    - common/db/context.py: ContextVars and the @readonly / @transactional decorators
    - common/db/transaction_utils.py: savepoints on an explicit session
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import get_logger
from common.db.session import AsyncSessionLocal, AsyncSessionLocalReadonly
from common.db.context import (
    get_current_session,
    set_current_session,
    reset_current_session,
    is_readonly_forced,
)

logger = get_logger(__name__)


def _session_factory(readonly: bool):
    # Looked up on every call so tests can monkeypatch the module attributes
    return AsyncSessionLocalReadonly if readonly else AsyncSessionLocal


@asynccontextmanager
async def _owned_session(
    readonly: bool, scope: str, bind_context: bool
) -> AsyncGenerator[AsyncSession, None]:
    start = time.perf_counter()
    async with _session_factory(readonly)() as session:
        logger.debug(
            f"{scope} session acquire: {(time.perf_counter() - start) * 1000:.2f}ms, readonly={readonly}"
        )
        token = set_current_session(session, readonly=readonly) if bind_context else None
        try:
            yield session
            if not readonly:
                commit_start = time.perf_counter()
                await session.commit()
                logger.debug(
                    f"{scope} commit: {(time.perf_counter() - commit_start) * 1000:.2f}ms"
                )
        except Exception as e:
            logger.error(f"{scope} rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            if token is not None:
                reset_current_session(token, readonly=readonly)


@asynccontextmanager
async def transaction(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    Args:
        readonly: Use the read session and skip the commit. Also forced by
                  an enclosing @readonly.

    Yields:
        The session shared by every repository call inside the block

    Raises:
        Exception: Re-raises any exception after rollback
    """
    effective_readonly = readonly or is_readonly_forced()
    async with _owned_session(
        effective_readonly, "Transaction", bind_context=True
    ) as session:
        yield session


@asynccontextmanager
async def get_session(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Reuses the session of an enclosing transaction() without committing it;
    otherwise acquires a new session, commits and releases it on exit.
    """
    effective_readonly = readonly or is_readonly_forced()
    existing = get_current_session(readonly=effective_readonly)

    if existing:
        logger.debug("Reusing existing transaction session")
        yield existing
    else:
        async with _owned_session(
            effective_readonly, "Operation", bind_context=False
        ) as session:
            yield session
