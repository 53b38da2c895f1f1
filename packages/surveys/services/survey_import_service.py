from pathlib import Path
from typing import Dict, Optional, Union
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.core.config import settings
from common.core.exceptions import SurveyImportError, ValidationError
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.db.context import transactional
from packages.questions.models.domain.answer import (
    AnswerCreateModel,
    AnswerL10nCreateModel,
)
from packages.questions.models.domain.default_value import (
    DefaultValueCreateModel,
    DefaultValueL10nCreateModel,
)
from packages.questions.models.domain.question import QuestionCreateModel
from packages.questions.models.domain.question_attribute import (
    QuestionAttributeCreateModel,
)
from packages.questions.models.domain.question_l10n import QuestionL10nCreateModel
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
from packages.surveys.models.domain.question_group import QuestionGroupCreateModel
from packages.surveys.models.domain.survey import (
    SurveyCreateModel,
    SurveyImportResult,
)
from packages.surveys.models.schemas.survey_document import (
    QuestionDocument,
    QuestionTextDocument,
    SurveyDocument,
)
from packages.surveys.repositories.question_group_repository import (
    QuestionGroupRepository,
)
from packages.surveys.repositories.survey_repository import SurveyRepository

logger = get_logger(__name__)


class SurveyImportService:
    """
    Imports survey fixture documents.

    A fixture is a JSON `SurveyDocument`. The survey, its groups and every
    question record are written in one transaction, so a broken fixture
    leaves nothing behind.
    """

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

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        survey_path = Path(path)
        if not survey_path.is_absolute() and settings.fixtures_dir is not None:
            survey_path = settings.fixtures_dir / survey_path
        return survey_path

    @trace_span
    async def import_survey_file(self, path: Union[str, Path]) -> SurveyImportResult:
        """Import the survey stored in a fixture file.

        Relative paths are resolved against `settings.fixtures_dir` when set.

        Raises:
            SurveyImportError: If the file is missing or cannot be imported
        """
        survey_path = self._resolve_path(path)
        if not survey_path.is_file():
            raise SurveyImportError(f"Survey file {survey_path} not found")

        try:
            document = SurveyDocument.model_validate_json(
                survey_path.read_text(encoding="utf-8")
            )
            result = await self.import_survey(document)
        except (OSError, SchemaValidationError, ValidationError, SQLAlchemyError) as e:
            logger.error(f"Failed to import survey file {survey_path}: {e}")
            raise SurveyImportError(f"Failed to import survey file {survey_path}") from e

        logger.info(
            f"Imported survey {result.survey_id} from {survey_path.name}: "
            f"{result.group_count} groups, {result.question_count} questions"
        )
        return result

    @trace_span
    @transactional
    async def import_survey(self, document: SurveyDocument) -> SurveyImportResult:
        survey = await self.survey_repo.create(
            SurveyCreateModel(
                title=document.title,
                language=document.language or settings.default_language,
                additional_languages=" ".join(document.additional_languages),
            )
        )

        question_count = 0
        for group_document in document.groups:
            group = await self.group_repo.create(
                QuestionGroupCreateModel(
                    sid=survey.sid,
                    group_order=group_document.group_order,
                    randomization_group=group_document.randomization_group,
                    grelevance=group_document.grelevance,
                )
            )
            for question_document in group_document.questions:
                question_count += await self._import_question(
                    survey.sid, group.gid, question_document
                )

        return SurveyImportResult(
            survey_id=survey.sid,
            group_count=len(document.groups),
            question_count=question_count,
        )

    async def _import_question(
        self, sid: int, gid: int, question_document: QuestionDocument
    ) -> int:
        """Write one question with everything hanging off it.

        Returns:
            Number of question rows written, subquestions included
        """
        question = await self.question_repo.create(
            QuestionCreateModel(
                sid=sid,
                gid=gid,
                type=question_document.type,
                title=question_document.title,
                question_order=question_document.question_order,
                mandatory=question_document.mandatory,
                other=question_document.other,
                relevance=question_document.relevance,
                preg=question_document.preg,
                question_theme_name=question_document.question_theme_name,
            )
        )
        await self._import_texts(question.qid, question_document.texts)

        subquestion_ids: Dict[str, int] = {}
        for subquestion_document in question_document.subquestions:
            subquestion = await self.question_repo.create(
                QuestionCreateModel(
                    sid=sid,
                    gid=gid,
                    parent_qid=question.qid,
                    type=question_document.type,
                    title=subquestion_document.title,
                    question_order=subquestion_document.question_order,
                    scale_id=subquestion_document.scale_id,
                    relevance=subquestion_document.relevance,
                )
            )
            subquestion_ids[subquestion.title] = subquestion.qid
            await self._import_texts(subquestion.qid, subquestion_document.texts)

        for answer_document in question_document.answers:
            answer = await self.answer_repo.create(
                AnswerCreateModel(
                    qid=question.qid,
                    code=answer_document.code,
                    sortorder=answer_document.sortorder,
                    assessment_value=answer_document.assessment_value,
                    scale_id=answer_document.scale_id,
                )
            )
            for language, text in answer_document.texts.items():
                await self.answer_l10n_repo.create(
                    AnswerL10nCreateModel(aid=answer.aid, answer=text, language=language)
                )

        for default_document in question_document.default_values:
            sqid = 0
            if default_document.subquestion is not None:
                if default_document.subquestion not in subquestion_ids:
                    raise ValidationError(
                        f"Default value of question {question_document.title} refers to "
                        f"unknown subquestion {default_document.subquestion}"
                    )
                sqid = subquestion_ids[default_document.subquestion]

            default_value = await self.default_value_repo.create(
                DefaultValueCreateModel(
                    qid=question.qid,
                    scale_id=default_document.scale_id,
                    sqid=sqid,
                    specialtype=default_document.specialtype,
                )
            )
            for language, value in default_document.values.items():
                await self.default_value_l10n_repo.create(
                    DefaultValueL10nCreateModel(
                        dvid=default_value.dvid, language=language, defaultvalue=value
                    )
                )

        for attribute_document in question_document.attributes:
            await self.attribute_repo.create(
                QuestionAttributeCreateModel(
                    qid=question.qid,
                    attribute=attribute_document.attribute,
                    value=attribute_document.value,
                    language=attribute_document.language,
                )
            )

        return 1 + len(question_document.subquestions)

    async def _import_texts(
        self, qid: int, texts: Dict[str, QuestionTextDocument]
    ) -> None:
        for language, text in texts.items():
            await self.question_l10n_repo.create(
                QuestionL10nCreateModel(
                    qid=qid,
                    question=text.question,
                    help=text.help,
                    script=text.script,
                    language=language,
                )
            )
