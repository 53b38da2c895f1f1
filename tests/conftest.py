# Shared pytest configuration and fixtures for all test types
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from common.db.base import Base
from packages.plugins.models.database import PluginEntity  # noqa: F401
from packages.questions.models.database import (
    AnswerEntity,
    AnswerL10nEntity,
    DefaultValueEntity,
    DefaultValueL10nEntity,
    QuestionAttributeEntity,
    QuestionEntity,
    QuestionL10nEntity,
)
from packages.questions.models.domain.question import QuestionModel
from packages.surveys.models.database import QuestionGroupEntity, SurveyEntity
from packages.surveys.models.domain.question_group import QuestionGroupModel
from packages.surveys.models.domain.survey import SurveyModel
from tests.fixtures import SurveyTestHarness

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_sqlite_savepoints(engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT works on sqlite."""

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    _enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so nested transaction()
    calls create savepoints instead of real nested transactions.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest_asyncio.fixture(scope="function")
async def sample_survey(test_db: AsyncSession) -> SurveyModel:
    """Create a sample survey in English and German."""
    survey = SurveyEntity(title="Test Survey", language="en", additional_languages="de")
    test_db.add(survey)
    await test_db.commit()
    await test_db.refresh(survey)
    return SurveyModel.model_validate(survey)


@pytest_asyncio.fixture(scope="function")
async def sample_group(test_db: AsyncSession, sample_survey) -> QuestionGroupModel:
    group = QuestionGroupEntity(sid=sample_survey.sid, group_order=1)
    test_db.add(group)
    await test_db.commit()
    await test_db.refresh(group)
    return QuestionGroupModel.model_validate(group)


@pytest_asyncio.fixture(scope="function")
async def second_group(test_db: AsyncSession, sample_survey) -> QuestionGroupModel:
    group = QuestionGroupEntity(sid=sample_survey.sid, group_order=2)
    test_db.add(group)
    await test_db.commit()
    await test_db.refresh(group)
    return QuestionGroupModel.model_validate(group)


@pytest_asyncio.fixture(scope="function")
async def sample_question(test_db: AsyncSession, sample_survey, sample_group) -> QuestionModel:
    """Create a list question Q1 with one language, three answer options
    in two languages each, no default answers and two settings."""
    question = QuestionEntity(
        sid=sample_survey.sid,
        gid=sample_group.gid,
        type="L",
        title="Q1",
        mandatory=True,
        question_order=1,
        relevance="1",
    )
    test_db.add(question)
    await test_db.flush()

    test_db.add(
        QuestionL10nEntity(
            qid=question.qid, question="Which colour?", help="Pick one", language="en"
        )
    )
    for order, (code, english, german) in enumerate(
        [("A1", "Red", "Rot"), ("A2", "Green", "Grün"), ("A3", "Blue", "Blau")]
    ):
        answer = AnswerEntity(qid=question.qid, code=code, sortorder=order)
        test_db.add(answer)
        await test_db.flush()
        test_db.add(AnswerL10nEntity(aid=answer.aid, answer=english, language="en"))
        test_db.add(AnswerL10nEntity(aid=answer.aid, answer=german, language="de"))

    test_db.add(
        QuestionAttributeEntity(qid=question.qid, attribute="hide_tip", value="1")
    )
    test_db.add(
        QuestionAttributeEntity(
            qid=question.qid, attribute="em_validation_q_tip", value="Tip", language="en"
        )
    )
    await test_db.commit()
    await test_db.refresh(question)
    return QuestionModel.model_validate(question)


@pytest_asyncio.fixture(scope="function")
async def array_question(test_db: AsyncSession, sample_survey, sample_group) -> QuestionModel:
    """Create an array question with two subquestions and a default answer
    pointing at the second subquestion."""
    question = QuestionEntity(
        sid=sample_survey.sid, gid=sample_group.gid, type="F", title="Q2", question_order=2
    )
    test_db.add(question)
    await test_db.flush()
    test_db.add(QuestionL10nEntity(qid=question.qid, question="Rate these", language="en"))
    test_db.add(QuestionL10nEntity(qid=question.qid, question="Bewerten", language="de"))

    subquestion_ids = []
    for order, code in enumerate(["SQ001", "SQ002"]):
        subquestion = QuestionEntity(
            sid=sample_survey.sid,
            gid=sample_group.gid,
            parent_qid=question.qid,
            type="F",
            title=code,
            question_order=order,
        )
        test_db.add(subquestion)
        await test_db.flush()
        subquestion_ids.append(subquestion.qid)
        test_db.add(
            QuestionL10nEntity(qid=subquestion.qid, question=f"Item {code}", language="en")
        )

    for code in ["1", "2"]:
        answer = AnswerEntity(qid=question.qid, code=code, sortorder=int(code))
        test_db.add(answer)
        await test_db.flush()
        test_db.add(AnswerL10nEntity(aid=answer.aid, answer=f"Level {code}", language="en"))

    default_value = DefaultValueEntity(qid=question.qid, sqid=subquestion_ids[1])
    test_db.add(default_value)
    await test_db.flush()
    test_db.add(
        DefaultValueL10nEntity(dvid=default_value.dvid, language="en", defaultvalue="2")
    )
    await test_db.commit()
    await test_db.refresh(question)
    return QuestionModel.model_validate(question)


@pytest.fixture
def harness() -> SurveyTestHarness:
    return SurveyTestHarness()


@pytest_asyncio.fixture(scope="function")
async def survey_harness(harness: SurveyTestHarness):
    """Harness whose imported survey is removed after the test."""
    yield harness
    if harness.survey_id is not None:
        try:
            await harness.tear_down()
        except Exception as e:
            pytest.fail(f"Could not delete survey with sid {harness.survey_id}: {e}")
