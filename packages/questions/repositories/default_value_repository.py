from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.questions.models.database.default_value import (
    DefaultValueEntity,
    DefaultValueL10nEntity,
)
from packages.questions.models.domain.default_value import (
    DefaultValueModel,
    DefaultValueL10nModel,
)
from common.core.otel_axiom_exporter import trace_span


class DefaultValueRepository(BaseRepository[DefaultValueEntity, DefaultValueModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(DefaultValueEntity, DefaultValueModel, db_session)

    @trace_span
    async def get_by_qid(self, qid: int) -> List[DefaultValueModel]:
        return await self.get_all_by(qid=qid)

    @trace_span
    async def get_ids_by_qids(self, qids: List[int]) -> List[int]:
        return await self.get_ids_where_in("qid", qids)

    @trace_span
    async def delete_by_qids(self, qids: List[int]) -> int:
        return await self.delete_where_in("qid", qids)


class DefaultValueL10nRepository(
    BaseRepository[DefaultValueL10nEntity, DefaultValueL10nModel]
):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(DefaultValueL10nEntity, DefaultValueL10nModel, db_session)

    @trace_span
    async def get_by_dvid(self, dvid: int) -> List[DefaultValueL10nModel]:
        return await self.get_all_by(dvid=dvid)

    @trace_span
    async def delete_by_dvids(self, dvids: List[int]) -> int:
        return await self.delete_where_in("dvid", dvids)
