from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.core.exceptions import NotFoundError
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.db.context import readonly
from common.db.scoped import get_session
from packages.questions.models.domain.copy_question import (
    CopyQuestionOptions,
    CopyQuestionResult,
    CopyQuestionValues,
)
from packages.questions.models.domain.question import QuestionModel
from packages.questions.repositories.question_repository import QuestionRepository
from packages.questions.services.copy_question_service import CopyQuestionService
from packages.surveys.repositories.survey_repository import SurveyRepository

logger = get_logger(__name__)


class QuestionService:
    """Service for handling question operations."""

    def __init__(self, db_session: Optional[AsyncSession] = None):
        self.db_session = db_session
        self.question_repo = QuestionRepository(db_session)
        self.survey_repo = SurveyRepository(db_session)

    @trace_span
    async def get_question(self, question_id: int) -> Optional[QuestionModel]:
        return await self.question_repo.get(question_id)

    @trace_span
    async def get_subquestions(self, question_id: int) -> List[QuestionModel]:
        return await self.question_repo.get_by_parent_qid(question_id)

    @trace_span
    @readonly
    async def get_questions_for_survey(self, survey_id: int) -> Dict[str, QuestionModel]:
        """Top-level questions of a survey keyed by question code."""
        survey = await self.survey_repo.get(survey_id)
        if not survey:
            raise NotFoundError(f"Survey {survey_id} not found")

        questions = await self.question_repo.get_top_level_by_survey_id(survey_id)
        return {question.title: question for question in questions}

    @trace_span
    async def copy_question(
        self,
        question_id: int,
        question_code: str,
        question_group_id: int,
        copy_options: Optional[CopyQuestionOptions] = None,
    ) -> CopyQuestionResult:
        """Copy a question under a new code into a group.

        Raises:
            NotFoundError: If the question to copy does not exist
        """
        source = await self.get_question(question_id)
        if not source:
            raise NotFoundError(f"Question {question_id} not found")

        copy_values = CopyQuestionValues(
            question_code=question_code,
            question_group_id=question_group_id,
            question_to_copy=source,
        )
        copy_options = copy_options or CopyQuestionOptions()

        if self.db_session is not None:
            return await self._run_copy(self.db_session, copy_values, copy_options)

        # Savepoints need one session for the whole copy
        async with get_session() as session:
            return await self._run_copy(session, copy_values, copy_options)

    async def _run_copy(
        self,
        db_session: AsyncSession,
        copy_values: CopyQuestionValues,
        copy_options: CopyQuestionOptions,
    ) -> CopyQuestionResult:
        copy_service = CopyQuestionService(db_session, copy_values)
        copied = await copy_service.copy_question(copy_options)
        return CopyQuestionResult(
            copied=copied,
            question=copy_service.get_new_copied_question(),
            report=copy_service.report,
        )


def get_question_service(db_session: Optional[AsyncSession] = None) -> QuestionService:
    return QuestionService(db_session)
