from typing import Dict, Optional, Tuple, Type
from pydantic import BaseModel, ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.core.constants import ROOT_PARENT_QID
from common.core.exceptions import QuestionCopyError
from common.core.otel_axiom_exporter import trace_span, get_logger, log_span_event
from common.db.transaction_utils import transaction
from common.mappers.model_mapper import map_known_fields
from common.repositories.base import BaseRepository
from packages.questions.models.domain.answer import (
    AnswerCreateModel,
    AnswerL10nCreateModel,
)
from packages.questions.models.domain.copy_question import (
    CopyQuestionOptions,
    CopyQuestionReport,
    CopyQuestionValues,
)
from packages.questions.models.domain.default_value import (
    DefaultValueCreateModel,
    DefaultValueL10nCreateModel,
)
from packages.questions.models.domain.question import (
    QuestionCreateModel,
    QuestionModel,
)
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
from packages.surveys.repositories.question_group_repository import (
    QuestionGroupRepository,
)

logger = get_logger(__name__)


class CopyQuestionService:
    """
    Copies a question together with the records that depend on it.

    The new question is saved first. Its languages are always copied; its
    subquestions, answer options, default answers and settings only when the
    matching option is set. Every dependent record is created fresh and
    pointed at the identity of its new parent, so the source is never touched.

    Each save runs in its own savepoint and reports success instead of
    raising. With `CopyQuestionOptions.atomic` the whole copy shares an outer
    savepoint that is rolled back as soon as one save failed; without it the
    copy is best effort and only the creation of the new question decides the
    result.

    Usage:
        service = CopyQuestionService(db_session, copy_values)
        if await service.copy_question(CopyQuestionOptions(copy_settings=True)):
            new_question = service.get_new_copied_question()
    """

    def __init__(self, db_session: AsyncSession, copy_question_values: CopyQuestionValues):
        self.db_session = db_session
        self.copy_question_values = copy_question_values
        self.new_question: Optional[QuestionModel] = None
        self.report = CopyQuestionReport()
        self.question_repo = QuestionRepository(db_session)
        self.question_l10n_repo = QuestionL10nRepository(db_session)
        self.answer_repo = AnswerRepository(db_session)
        self.answer_l10n_repo = AnswerL10nRepository(db_session)
        self.default_value_repo = DefaultValueRepository(db_session)
        self.default_value_l10n_repo = DefaultValueL10nRepository(db_session)
        self.attribute_repo = QuestionAttributeRepository(db_session)
        self.group_repo = QuestionGroupRepository(db_session)

    @trace_span
    async def copy_question(self, copy_options: CopyQuestionOptions) -> bool:
        """Copy the question and the dependent records selected in `copy_options`.

        Returns:
            True if the new question exists afterwards, False otherwise
        """
        values = self.copy_question_values
        source = values.question_to_copy
        self.new_question = None
        self.report = CopyQuestionReport()
        logger.info(
            f"Copying question {source.qid} as '{values.question_code}' into group {values.question_group_id} "
            f"(options: {copy_options.model_dump()})"
        )

        try:
            async with transaction(self.db_session):
                created = await self.create_new_copied_question(
                    values.question_code, values.question_group_id, source
                )
                if not created:
                    logger.warning(
                        f"Copy of question {source.qid} aborted, new question could not be saved"
                    )
                    return False

                await self._copy_dependents(source.qid, copy_options)

                if copy_options.atomic and self.report.failed_saves:
                    raise QuestionCopyError(
                        f"{self.report.failed_saves} record(s) of question {source.qid} could not be copied",
                        failed_saves=self.report.failed_saves,
                    )
        except QuestionCopyError as e:
            logger.warning(f"Rolled back copy of question {source.qid}: {e}")
            self.new_question = None
            self.report.question_copied = False
            self.report.rolled_back = True
            return False
        except Exception:
            # The outer savepoint is gone, and the new question with it
            logger.error(f"Copy of question {source.qid} failed and was rolled back")
            self.new_question = None
            self.report.question_copied = False
            self.report.rolled_back = True
            raise

        log_span_event(
            f"Copied question {source.qid} as {self.new_question.qid}",
            attributes=self.report.model_dump(exclude_none=True),
        )
        return True

    @trace_span
    async def create_new_copied_question(
        self, question_code: str, group_id: int, question_to_copy: QuestionModel
    ) -> bool:
        """Save a new top-level question carrying the source's attributes.

        The copy gets the new code and group; its survey follows the group.
        """
        target_group = await self.group_repo.get(group_id)
        if target_group is None:
            logger.warning(f"Target group {group_id} does not exist")
            return False

        self.new_question = await self._save(
            self.question_repo,
            question_to_copy,
            QuestionCreateModel,
            title=question_code,
            gid=group_id,
            sid=target_group.sid,
            parent_qid=ROOT_PARENT_QID,
        )
        self.report.question_copied = self.new_question is not None
        return self.report.question_copied

    def get_new_copied_question(self) -> Optional[QuestionModel]:
        """The new question, or None if it was not copied."""
        return self.new_question

    async def _copy_dependents(
        self, source_qid: int, copy_options: CopyQuestionOptions
    ) -> None:
        language_count, languages_saved = await self._copy_question_languages(
            source_qid, self.new_question.qid
        )
        # No language at all means something is off with the source
        self.report.languages_copied = language_count > 0 and languages_saved

        subquestion_ids: Optional[Dict[int, int]] = None
        if copy_options.copy_subquestions:
            (
                self.report.subquestions_copied,
                subquestion_ids,
            ) = await self._copy_subquestions(source_qid)

        if copy_options.copy_answer_options:
            self.report.answer_options_copied = await self._copy_answer_options(
                source_qid
            )

        if copy_options.copy_default_answers:
            self.report.default_answers_copied = await self._copy_default_answers(
                source_qid, subquestion_ids
            )

        if copy_options.copy_settings:
            self.report.settings_copied = await self._copy_settings(source_qid)

    async def _save(
        self,
        repository: BaseRepository,
        source: BaseModel,
        create_class: Type[BaseModel],
        **overrides,
    ) -> Optional[BaseModel]:
        """Create a copy of `source` with `overrides` applied.

        Returns the saved record, or None if validation or the insert failed.
        """
        entity_name = repository.entity_class.__name__
        try:
            create_model = map_known_fields(source, create_class, **overrides)
            async with transaction(self.db_session):
                saved = await repository.create(create_model)
        except (SchemaValidationError, SQLAlchemyError) as e:
            self.report.failed_saves += 1
            logger.warning(f"Could not save copy of {entity_name}: {e}")
            return None

        self.report.saved += 1
        return saved

    async def _copy_question_languages(
        self, source_qid: int, target_qid: int
    ) -> Tuple[int, bool]:
        """Copy the localized texts of a question.

        Returns:
            Number of source languages and whether every copy was saved
        """
        languages = await self.question_l10n_repo.get_by_qid(source_qid)
        all_saved = True
        for language in languages:
            copied = await self._save(
                self.question_l10n_repo,
                language,
                QuestionL10nCreateModel,
                qid=target_qid,
            )
            all_saved = all_saved and copied is not None
        return len(languages), all_saved

    async def _copy_subquestions(self, parent_qid: int) -> Tuple[bool, Dict[int, int]]:
        """Copy subquestions and their languages under the new question.

        Returns:
            Whether everything was saved, and source qid -> new qid
        """
        subquestions = await self.question_repo.get_by_parent_qid(parent_qid)
        all_copied = True
        new_ids: Dict[int, int] = {}

        for subquestion in subquestions:
            copied = await self._save(
                self.question_repo,
                subquestion,
                QuestionCreateModel,
                parent_qid=self.new_question.qid,
                gid=self.new_question.gid,
                sid=self.new_question.sid,
            )
            if copied is None:
                all_copied = False
                continue

            new_ids[subquestion.qid] = copied.qid
            _, languages_saved = await self._copy_question_languages(
                subquestion.qid, copied.qid
            )
            all_copied = all_copied and languages_saved

        logger.info(
            f"Copied {len(new_ids)}/{len(subquestions)} subquestions of question {parent_qid}"
        )
        return all_copied, new_ids

    async def _copy_answer_options(self, source_qid: int) -> bool:
        answers = await self.answer_repo.get_by_qid(source_qid)
        all_copied = True

        for answer in answers:
            copied = await self._save(
                self.answer_repo, answer, AnswerCreateModel, qid=self.new_question.qid
            )
            if copied is None:
                all_copied = False
                continue

            for answer_language in await self.answer_l10n_repo.get_by_aid(answer.aid):
                copied_language = await self._save(
                    self.answer_l10n_repo,
                    answer_language,
                    AnswerL10nCreateModel,
                    aid=copied.aid,
                )
                all_copied = all_copied and copied_language is not None

        logger.info(f"Copied {len(answers)} answer options of question {source_qid}")
        return all_copied

    def _target_sqid(
        self, sqid: int, subquestion_ids: Optional[Dict[int, int]]
    ) -> int:
        """Subquestion a copied default answer points at.

        Without a subquestion copy the source reference is kept. With one, a
        subquestion that failed to copy leaves the default on the question
        itself, so the copy never points into the source's subquestions.
        """
        if subquestion_ids is None or not sqid:
            return sqid
        if sqid not in subquestion_ids:
            logger.warning(
                f"Subquestion {sqid} was not copied, default answer falls back to the question"
            )
            return 0
        return subquestion_ids[sqid]

    async def _copy_default_answers(
        self, source_qid: int, subquestion_ids: Optional[Dict[int, int]] = None
    ) -> bool:
        default_answers = await self.default_value_repo.get_by_qid(source_qid)
        all_copied = True

        for default_answer in default_answers:
            copied = await self._save(
                self.default_value_repo,
                default_answer,
                DefaultValueCreateModel,
                qid=self.new_question.qid,
                sqid=self._target_sqid(default_answer.sqid, subquestion_ids),
            )
            if copied is None:
                all_copied = False
                continue

            # Texts hang off the source's dvid, not the copy's
            for default_language in await self.default_value_l10n_repo.get_by_dvid(
                default_answer.dvid
            ):
                copied_language = await self._save(
                    self.default_value_l10n_repo,
                    default_language,
                    DefaultValueL10nCreateModel,
                    dvid=copied.dvid,
                )
                all_copied = all_copied and copied_language is not None

        logger.info(
            f"Copied {len(default_answers)} default answers of question {source_qid}"
        )
        return all_copied

    async def _copy_settings(self, source_qid: int) -> bool:
        """Copy general and advanced settings.

        An empty settings list is reported as not copied.
        """
        settings = await self.attribute_repo.get_by_qid(source_qid)
        all_copied = len(settings) > 0

        for setting in settings:
            copied = await self._save(
                self.attribute_repo,
                setting,
                QuestionAttributeCreateModel,
                qid=self.new_question.qid,
            )
            all_copied = all_copied and copied is not None

        return all_copied
