from typing import Optional
from pydantic import BaseModel

from .question import QuestionModel


class CopyQuestionValues(BaseModel):
    """What to copy and where the copy goes."""

    question_code: str  # Uniqueness within the target group is up to the caller
    question_group_id: int
    question_to_copy: QuestionModel


class CopyQuestionOptions(BaseModel):
    """Which dependent collections are copied along with the question.

    The question itself and its localized texts are always copied.
    """

    copy_subquestions: bool = False
    copy_answer_options: bool = False
    copy_default_answers: bool = False
    copy_settings: bool = False  # General and advanced settings
    atomic: bool = True  # Roll the whole copy back if any save fails


class CopyQuestionReport(BaseModel):
    """Outcome of each copy step.

    A step that was not requested stays None.
    """

    question_copied: bool = False
    languages_copied: bool = False
    subquestions_copied: Optional[bool] = None
    answer_options_copied: Optional[bool] = None
    default_answers_copied: Optional[bool] = None
    settings_copied: Optional[bool] = None
    saved: int = 0
    failed_saves: int = 0
    rolled_back: bool = False


class CopyQuestionResult(BaseModel):
    copied: bool
    question: Optional[QuestionModel] = None
    report: CopyQuestionReport
