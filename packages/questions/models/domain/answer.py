from pydantic import BaseModel, Field


class AnswerModel(BaseModel):
    aid: int
    qid: int
    code: str
    sortorder: int = 0
    assessment_value: int = 0
    scale_id: int = 0

    model_config = {"from_attributes": True}


class AnswerCreateModel(BaseModel):
    qid: int
    code: str = Field(min_length=1, max_length=5)
    sortorder: int = 0
    assessment_value: int = 0
    scale_id: int = 0


class AnswerL10nModel(BaseModel):
    id: int
    aid: int
    answer: str
    language: str

    model_config = {"from_attributes": True}


class AnswerL10nCreateModel(BaseModel):
    aid: int
    answer: str
    language: str = Field(min_length=1, max_length=20)
