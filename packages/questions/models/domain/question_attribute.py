from typing import Optional
from pydantic import BaseModel, Field


class QuestionAttributeModel(BaseModel):
    qaid: int
    qid: int
    attribute: str
    value: Optional[str] = None
    language: Optional[str] = None

    model_config = {"from_attributes": True}


class QuestionAttributeCreateModel(BaseModel):
    qid: int
    attribute: str = Field(min_length=1, max_length=50)
    value: Optional[str] = None
    language: Optional[str] = None
