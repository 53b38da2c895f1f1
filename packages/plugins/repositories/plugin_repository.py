from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.plugins.models.database.plugin import PluginEntity
from packages.plugins.models.domain.plugin import PluginModel
from common.core.otel_axiom_exporter import trace_span


class PluginRepository(BaseRepository[PluginEntity, PluginModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(PluginEntity, PluginModel, db_session)

    @trace_span
    async def get_by_name(self, name: str) -> Optional[PluginModel]:
        return await self.get_first_by(name=name)
