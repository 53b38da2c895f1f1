"""
Database session context.

Tracks the session of the enclosing transaction in ContextVars so that
repositories created without an explicit session join it instead of opening
their own. Write and read sessions live in separate slots.

Usage:
    # Every repository call inside shares one session and commits together
    async with transaction():
        survey = await survey_repo.create(survey_create)
        await group_repo.create(group_create)

    # Same thing as a decorator
    @transactional
    async def import_survey(self, document): ...

    # Route every session in the call chain to the read slot
    @readonly
    async def get_questions_for_survey(self, survey_id): ...
"""

from contextvars import ContextVar, Token
from functools import wraps
from typing import Dict, Optional, Callable, TypeVar, ParamSpec

from sqlalchemy.ext.asyncio import AsyncSession

# Keyed by "is this the read slot"
_sessions: Dict[bool, ContextVar[Optional[AsyncSession]]] = {
    False: ContextVar("db_write_session", default=None),
    True: ContextVar("db_read_session", default=None),
}
_force_readonly: ContextVar[bool] = ContextVar("db_force_readonly", default=False)


def is_readonly_forced() -> bool:
    return _force_readonly.get()


def get_current_session(readonly: bool = False) -> Optional[AsyncSession]:
    """Session of the enclosing transaction, if any.

    A forced-readonly context always answers from the read slot.
    """
    return _sessions[readonly or is_readonly_forced()].get()


def set_current_session(session: AsyncSession, readonly: bool = False) -> Token:
    """Bind `session` to the current context; keep the token for the reset."""
    return _sessions[readonly].set(session)


def reset_current_session(token: Token, readonly: bool = False) -> None:
    _sessions[readonly].reset(token)


def in_transaction(readonly: bool = False) -> bool:
    return get_current_session(readonly=readonly) is not None


P = ParamSpec("P")
T = TypeVar("T")


def readonly(func: Callable[P, T]) -> Callable[P, T]:
    """Send every lazy session opened by this call chain to the read slot."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        token = _force_readonly.set(True)
        try:
            return await func(*args, **kwargs)
        finally:
            _force_readonly.reset(token)

    return wrapper


def transactional(func: Callable[P, T]) -> Callable[P, T]:
    """
    Run the decorated coroutine inside transaction().

    Joins the enclosing transaction when there is one, so a service called
    from another service commits or rolls back with its caller.
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        if in_transaction():
            return await func(*args, **kwargs)

        from common.db.scoped import transaction  # noqa: PLC0415

        async with transaction():
            return await func(*args, **kwargs)

    return wrapper
