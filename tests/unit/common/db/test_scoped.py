import pytest
from sqlalchemy import select

from common.db.context import get_current_session, in_transaction, readonly
from common.db.scoped import get_session, transaction
from packages.surveys.models.database import SurveyEntity


async def _survey_titles(session_factory):
    async with session_factory() as verify_session:
        result = await verify_session.execute(select(SurveyEntity.title))
        return [row[0] for row in result.fetchall()]


class TestTransaction:
    """Test the transaction() context manager with the test database."""

    async def test_transaction_commits_on_success(self, test_session_factory):
        async with transaction() as session:
            session.add(SurveyEntity(title="Committed", language="en"))

        assert await _survey_titles(test_session_factory) == ["Committed"]

    async def test_transaction_rollback_on_exception(self, test_session_factory):
        with pytest.raises(ValueError):
            async with transaction() as session:
                session.add(SurveyEntity(title="Rolled back", language="en"))
                await session.flush()
                raise ValueError("Simulated error")

        assert await _survey_titles(test_session_factory) == []

    async def test_transaction_sets_session_in_context(self):
        async with transaction() as session:
            assert get_current_session(readonly=False) is session
            assert in_transaction(readonly=False) is True

        assert get_current_session(readonly=False) is None
        assert in_transaction(readonly=False) is False

    async def test_readonly_transaction_uses_read_slot(self):
        async with transaction(readonly=True) as session:
            assert get_current_session(readonly=True) is session
            assert get_current_session(readonly=False) is None


class TestGetSession:
    """Test get_session() for single operations."""

    async def test_reuses_transaction_session(self):
        async with transaction() as outer_session:
            async with get_session() as session:
                assert session is outer_session

    async def test_standalone_session_commits(self, test_session_factory):
        async with get_session() as session:
            session.add(SurveyEntity(title="Standalone", language="en"))
            # Standalone sessions are not bound to the context
            assert get_current_session() is None

        assert await _survey_titles(test_session_factory) == ["Standalone"]

    async def test_readonly_decorator_routes_to_read_session(self):
        sessions = {}

        @readonly
        async def read_inside_transaction():
            async with get_session() as session:
                sessions["read"] = session

        async with transaction() as write_session:
            await read_inside_transaction()

        # No read transaction is open, so a separate session was used
        assert sessions["read"] is not write_session
