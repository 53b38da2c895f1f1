from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from common.repositories.base import BaseRepository
from packages.questions.models.database.answer import AnswerEntity, AnswerL10nEntity
from packages.questions.models.domain.answer import AnswerModel, AnswerL10nModel
from common.core.otel_axiom_exporter import trace_span


class AnswerRepository(BaseRepository[AnswerEntity, AnswerModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(AnswerEntity, AnswerModel, db_session)

    @trace_span
    async def get_by_qid(self, qid: int) -> List[AnswerModel]:
        """Answer options of a question, by scale then sort order."""
        query = (
            select(self.entity_class)
            .where(self.entity_class.qid == qid)
            .order_by(
                self.entity_class.scale_id.asc(),
                self.entity_class.sortorder.asc(),
                self.entity_class.aid.asc(),
            )
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_ids_by_qids(self, qids: List[int]) -> List[int]:
        return await self.get_ids_where_in("qid", qids)

    @trace_span
    async def delete_by_qids(self, qids: List[int]) -> int:
        return await self.delete_where_in("qid", qids)


class AnswerL10nRepository(BaseRepository[AnswerL10nEntity, AnswerL10nModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(AnswerL10nEntity, AnswerL10nModel, db_session)

    @trace_span
    async def get_by_aid(self, aid: int) -> List[AnswerL10nModel]:
        return await self.get_all_by(aid=aid)

    @trace_span
    async def delete_by_aids(self, aids: List[int]) -> int:
        return await self.delete_where_in("aid", aids)
