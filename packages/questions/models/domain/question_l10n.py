from typing import Optional
from pydantic import BaseModel, Field


class QuestionL10nModel(BaseModel):
    id: int
    qid: int
    question: str
    help: Optional[str] = None
    script: Optional[str] = None
    language: str

    model_config = {"from_attributes": True}


class QuestionL10nCreateModel(BaseModel):
    qid: int
    question: str = ""
    help: Optional[str] = None
    script: Optional[str] = None
    language: str = Field(min_length=1, max_length=20)
