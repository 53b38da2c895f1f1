from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from packages.questions.models.domain.question_enums import QuestionType


class DocumentBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allows population by both original name and alias
        extra="forbid",
    )


class QuestionTextDocument(DocumentBase):
    question: str = ""
    help: Optional[str] = None
    script: Optional[str] = None


class AnswerDocument(DocumentBase):
    code: str
    sortorder: int = 0
    assessment_value: int = 0
    scale_id: int = 0
    texts: Dict[str, str] = {}  # language -> answer text


class DefaultValueDocument(DocumentBase):
    scale_id: int = 0
    subquestion: Optional[str] = None  # Code of the subquestion it applies to
    specialtype: str = ""
    values: Dict[str, str] = {}  # language -> default value


class QuestionAttributeDocument(DocumentBase):
    attribute: str
    value: Optional[str] = None
    language: Optional[str] = None


class SubquestionDocument(DocumentBase):
    title: str
    question_order: int = 0
    scale_id: int = 0
    relevance: Optional[str] = None
    texts: Dict[str, QuestionTextDocument] = {}


class QuestionDocument(DocumentBase):
    title: str
    type: QuestionType = QuestionType.LONG_FREE_TEXT
    question_order: int = 0
    mandatory: Optional[bool] = None
    other: bool = False
    relevance: Optional[str] = "1"
    preg: Optional[str] = None
    question_theme_name: Optional[str] = None
    texts: Dict[str, QuestionTextDocument] = {}
    subquestions: List[SubquestionDocument] = []
    answers: List[AnswerDocument] = []
    default_values: List[DefaultValueDocument] = []
    attributes: List[QuestionAttributeDocument] = []


class QuestionGroupDocument(DocumentBase):
    group_order: int = 0
    randomization_group: str = ""
    grelevance: Optional[str] = None
    questions: List[QuestionDocument] = []


class SurveyDocument(DocumentBase):
    """Survey fixture file layout."""

    title: str
    # default_language setting when unset
    language: Optional[str] = Field(default=None, min_length=1)
    additional_languages: List[str] = []
    groups: List[QuestionGroupDocument] = []
