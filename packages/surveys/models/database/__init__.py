from .survey import SurveyEntity
from .question_group import QuestionGroupEntity


__all__ = [
    "SurveyEntity",
    "QuestionGroupEntity",
]
