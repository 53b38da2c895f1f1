from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import trace_span, get_logger
from common.db.context import transactional
from packages.questions.repositories.answer_repository import (
    AnswerRepository,
    AnswerL10nRepository,
)
from packages.questions.repositories.default_value_repository import (
    DefaultValueRepository,
    DefaultValueL10nRepository,
)
from packages.questions.repositories.question_attribute_repository import (
    QuestionAttributeRepository,
)
from packages.questions.repositories.question_repository import (
    QuestionRepository,
    QuestionL10nRepository,
)
from packages.surveys.models.domain.survey import SurveyModel
from packages.surveys.repositories.question_group_repository import (
    QuestionGroupRepository,
)
from packages.surveys.repositories.survey_repository import SurveyRepository

logger = get_logger(__name__)


class SurveyService:
    """Service for handling survey operations."""

    def __init__(self, db_session: Optional[AsyncSession] = None):
        self.survey_repo = SurveyRepository(db_session)
        self.group_repo = QuestionGroupRepository(db_session)
        self.question_repo = QuestionRepository(db_session)
        self.question_l10n_repo = QuestionL10nRepository(db_session)
        self.answer_repo = AnswerRepository(db_session)
        self.answer_l10n_repo = AnswerL10nRepository(db_session)
        self.default_value_repo = DefaultValueRepository(db_session)
        self.default_value_l10n_repo = DefaultValueL10nRepository(db_session)
        self.attribute_repo = QuestionAttributeRepository(db_session)

    @trace_span
    async def get_survey(self, survey_id: int) -> Optional[SurveyModel]:
        return await self.survey_repo.get(survey_id)

    @trace_span
    @transactional
    async def delete_survey(self, survey_id: int) -> bool:
        """Delete a survey and every record that belongs to it.

        Children go before their parents.

        Returns:
            False if the survey does not exist
        """
        survey = await self.survey_repo.get(survey_id)
        if not survey:
            logger.warning(f"Survey {survey_id} not found, nothing to delete")
            return False

        question_ids = await self.question_repo.get_ids_by_survey_id(survey_id)
        answer_ids = await self.answer_repo.get_ids_by_qids(question_ids)
        default_value_ids = await self.default_value_repo.get_ids_by_qids(question_ids)

        await self.attribute_repo.delete_by_qids(question_ids)
        await self.default_value_l10n_repo.delete_by_dvids(default_value_ids)
        await self.default_value_repo.delete_by_qids(question_ids)
        await self.answer_l10n_repo.delete_by_aids(answer_ids)
        await self.answer_repo.delete_by_qids(question_ids)
        await self.question_l10n_repo.delete_by_qids(question_ids)
        await self.question_repo.delete_where_in("qid", question_ids)
        group_count = await self.group_repo.delete_by_survey_id(survey_id)
        deleted = await self.survey_repo.delete(survey_id)

        logger.info(
            f"Deleted survey {survey_id} with {group_count} groups and {len(question_ids)} questions"
        )
        return deleted


def get_survey_service(db_session: Optional[AsyncSession] = None) -> SurveyService:
    return SurveyService(db_session)
