from typing import Optional
from pydantic import BaseModel, Field


class DefaultValueModel(BaseModel):
    dvid: int
    qid: int
    scale_id: int = 0
    sqid: int = 0
    specialtype: str = ""

    model_config = {"from_attributes": True}


class DefaultValueCreateModel(BaseModel):
    qid: int
    scale_id: int = 0
    sqid: int = 0
    specialtype: str = ""


class DefaultValueL10nModel(BaseModel):
    id: int
    dvid: int
    language: str
    defaultvalue: Optional[str] = None

    model_config = {"from_attributes": True}


class DefaultValueL10nCreateModel(BaseModel):
    dvid: int
    language: str = Field(min_length=1, max_length=20)
    defaultvalue: Optional[str] = None
