from .question import QuestionEntity
from .question_l10n import QuestionL10nEntity
from .answer import AnswerEntity, AnswerL10nEntity
from .default_value import DefaultValueEntity, DefaultValueL10nEntity
from .question_attribute import QuestionAttributeEntity


__all__ = [
    "QuestionEntity",
    "QuestionL10nEntity",
    "AnswerEntity",
    "AnswerL10nEntity",
    "DefaultValueEntity",
    "DefaultValueL10nEntity",
    "QuestionAttributeEntity",
]
