from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from common.repositories.base import BaseRepository
from packages.surveys.models.database.question_group import QuestionGroupEntity
from packages.surveys.models.domain.question_group import QuestionGroupModel
from common.core.otel_axiom_exporter import trace_span


class QuestionGroupRepository(BaseRepository[QuestionGroupEntity, QuestionGroupModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(QuestionGroupEntity, QuestionGroupModel, db_session)

    @trace_span
    async def get_by_survey_id(self, sid: int) -> List[QuestionGroupModel]:
        query = (
            select(self.entity_class)
            .where(self.entity_class.sid == sid)
            .order_by(self.entity_class.group_order.asc(), self.entity_class.gid.asc())
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def delete_by_survey_id(self, sid: int) -> int:
        return await self.delete_where_in("sid", [sid])
