from typing import Optional
from pydantic import BaseModel


class QuestionGroupModel(BaseModel):
    gid: int
    sid: int
    group_order: int = 0
    randomization_group: str = ""
    grelevance: Optional[str] = None

    model_config = {"from_attributes": True}


class QuestionGroupCreateModel(BaseModel):
    sid: int
    group_order: int = 0
    randomization_group: str = ""
    grelevance: Optional[str] = None
