from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from common.repositories.base import BaseRepository
from packages.questions.models.database.question import QuestionEntity
from packages.questions.models.database.question_l10n import QuestionL10nEntity
from packages.questions.models.domain.question import QuestionModel
from packages.questions.models.domain.question_l10n import QuestionL10nModel
from packages.surveys.models.database.question_group import QuestionGroupEntity
from common.core.constants import ROOT_PARENT_QID
from common.core.otel_axiom_exporter import trace_span


class QuestionRepository(BaseRepository[QuestionEntity, QuestionModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(QuestionEntity, QuestionModel, db_session)

    @trace_span
    async def get_by_parent_qid(self, parent_qid: int) -> List[QuestionModel]:
        """Subquestions of a question, in question order."""
        query = (
            select(self.entity_class)
            .where(self.entity_class.parent_qid == parent_qid)
            .order_by(
                self.entity_class.scale_id.asc(),
                self.entity_class.question_order.asc(),
                self.entity_class.qid.asc(),
            )
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_top_level_by_survey_id(self, sid: int) -> List[QuestionModel]:
        """Top-level questions of a survey, by group order then question order."""
        query = (
            select(self.entity_class)
            .join(
                QuestionGroupEntity,
                QuestionGroupEntity.gid == self.entity_class.gid,
            )
            .where(
                self.entity_class.sid == sid,
                self.entity_class.parent_qid == ROOT_PARENT_QID,
            )
            .order_by(
                QuestionGroupEntity.group_order.asc(),
                QuestionGroupEntity.gid.asc(),
                self.entity_class.question_order.asc(),
                self.entity_class.qid.asc(),
            )
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_ids_by_survey_id(self, sid: int) -> List[int]:
        """Every question id of a survey, subquestions included."""
        return await self.get_ids_where_in("sid", [sid])

    @trace_span
    async def get_by_code(
        self, gid: int, title: str, parent_qid: int = ROOT_PARENT_QID
    ) -> Optional[QuestionModel]:
        return await self.get_first_by(gid=gid, title=title, parent_qid=parent_qid)


class QuestionL10nRepository(BaseRepository[QuestionL10nEntity, QuestionL10nModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(QuestionL10nEntity, QuestionL10nModel, db_session)

    @trace_span
    async def get_by_qid(self, qid: int) -> List[QuestionL10nModel]:
        return await self.get_all_by(qid=qid)

    @trace_span
    async def delete_by_qids(self, qids: List[int]) -> int:
        return await self.delete_where_in("qid", qids)
