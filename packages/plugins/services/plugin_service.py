from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import trace_span, get_logger
from common.db.context import transactional
from packages.plugins.models.domain.plugin import (
    PluginCreateModel,
    PluginModel,
    PluginUpdateModel,
)
from packages.plugins.repositories.plugin_repository import PluginRepository

logger = get_logger(__name__)


class PluginService:
    """Installs and toggles plugin records by name.

    Only the stored `active` flag is managed here; loading plugin code is not.
    """

    def __init__(self, db_session: Optional[AsyncSession] = None):
        self.plugin_repo = PluginRepository(db_session)

    @trace_span
    @transactional
    async def install_and_activate_plugin(self, name: str) -> PluginModel:
        plugin = await self.plugin_repo.get_by_name(name)
        if plugin is None:
            logger.info(f"Installing plugin {name}")
            return await self.plugin_repo.create(
                PluginCreateModel(name=name, active=True)
            )

        if plugin.active:
            return plugin
        logger.info(f"Activating plugin {name}")
        return await self.plugin_repo.update(plugin.id, PluginUpdateModel(active=True))

    @trace_span
    @transactional
    async def deactivate_plugin(self, name: str) -> Optional[PluginModel]:
        plugin = await self.plugin_repo.get_by_name(name)
        if plugin is None:
            logger.warning(f"Plugin {name} is not installed")
            return None

        logger.info(f"Deactivating plugin {name}")
        return await self.plugin_repo.update(plugin.id, PluginUpdateModel(active=False))
