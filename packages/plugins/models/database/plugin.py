from sqlalchemy import Column, String, Boolean

from common.db.base import Base, BigIntegerType


class PluginEntity(Base):
    __tablename__ = "plugins"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    plugin_type = Column(String(30), nullable=False, default="user", server_default="user")
    active = Column(Boolean, nullable=False, default=False, server_default="false")
    version = Column(String(32), nullable=True)
