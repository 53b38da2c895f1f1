from typing import Optional
from pydantic import BaseModel, Field

from .question_enums import QuestionType

QUESTION_CODE_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"


class QuestionModel(BaseModel):
    qid: int
    parent_qid: int = 0
    sid: int
    gid: int
    type: QuestionType = QuestionType.LONG_FREE_TEXT
    title: str
    preg: Optional[str] = None
    other: bool = False
    mandatory: Optional[bool] = None
    encrypted: bool = False
    question_order: int = 0
    scale_id: int = 0
    same_default: bool = False
    relevance: Optional[str] = None
    question_theme_name: Optional[str] = None
    modulename: Optional[str] = None
    same_script: bool = False

    model_config = {"from_attributes": True}

    @property
    def is_subquestion(self) -> bool:
        return self.parent_qid != 0


class QuestionCreateModel(BaseModel):
    """Attribute bag of a question, without its identity."""

    parent_qid: int = 0
    sid: int
    gid: int
    type: QuestionType = QuestionType.LONG_FREE_TEXT
    title: str = Field(min_length=1, max_length=20, pattern=QUESTION_CODE_PATTERN)
    preg: Optional[str] = None
    other: bool = False
    mandatory: Optional[bool] = None
    encrypted: bool = False
    question_order: int = 0
    scale_id: int = 0
    same_default: bool = False
    relevance: Optional[str] = None
    question_theme_name: Optional[str] = None
    modulename: Optional[str] = None
    same_script: bool = False
