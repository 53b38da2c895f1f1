from typing import Optional
from pydantic import BaseModel, Field


class PluginModel(BaseModel):
    id: int
    name: str
    plugin_type: str = "user"
    active: bool = False
    version: Optional[str] = None

    model_config = {"from_attributes": True}


class PluginCreateModel(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    plugin_type: str = "user"
    active: bool = False
    version: Optional[str] = None


class PluginUpdateModel(BaseModel):
    active: Optional[bool] = None
    version: Optional[str] = None
