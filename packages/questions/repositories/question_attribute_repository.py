from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.questions.models.database.question_attribute import (
    QuestionAttributeEntity,
)
from packages.questions.models.domain.question_attribute import QuestionAttributeModel
from common.core.otel_axiom_exporter import trace_span


class QuestionAttributeRepository(
    BaseRepository[QuestionAttributeEntity, QuestionAttributeModel]
):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(QuestionAttributeEntity, QuestionAttributeModel, db_session)

    @trace_span
    async def get_by_qid(self, qid: int) -> List[QuestionAttributeModel]:
        return await self.get_all_by(qid=qid)

    @trace_span
    async def delete_by_qids(self, qids: List[int]) -> int:
        return await self.delete_where_in("qid", qids)
