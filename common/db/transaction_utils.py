"""Savepoint-aware transactions on an explicit session."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.exc import ResourceClosedError


async def _finish(unit: AsyncSessionTransaction, commit: bool) -> None:
    try:
        if commit:
            await unit.commit()
        else:
            await unit.rollback()
    except ResourceClosedError:
        # A flush error inside the block already closed the savepoint
        if not unit.nested:
            raise


@asynccontextmanager
async def transaction(db_session: AsyncSession) -> AsyncGenerator[None, None]:
    """
    Commit the block as one unit on `db_session`.

    Inside an open transaction this is a savepoint, so a failing block only
    discards its own writes and the caller's transaction stays usable.
    Otherwise it begins, and commits, the session's transaction.
    """
    if db_session.in_transaction():
        unit = await db_session.begin_nested()
    else:
        unit = await db_session.begin()

    try:
        yield
        await _finish(unit, commit=True)
    except Exception:
        await _finish(unit, commit=False)
        raise
