from enum import Enum


class QuestionType(str, Enum):
    """Question type codes as stored in questions.type."""

    ARRAY_DUAL_SCALE = "1"
    ARRAY_5_POINT = "A"
    ARRAY_10_POINT = "B"
    ARRAY_YES_UNCERTAIN_NO = "C"
    DATE = "D"
    ARRAY_INCREASE_SAME_DECREASE = "E"
    ARRAY = "F"
    GENDER = "G"
    ARRAY_COLUMN = "H"
    LANGUAGE = "I"
    MULTIPLE_NUMERICAL = "K"
    LIST_RADIO = "L"
    MULTIPLE_CHOICE = "M"
    NUMERICAL = "N"
    LIST_WITH_COMMENT = "O"
    MULTIPLE_CHOICE_WITH_COMMENTS = "P"
    MULTIPLE_SHORT_TEXT = "Q"
    RANKING = "R"
    SHORT_FREE_TEXT = "S"
    LONG_FREE_TEXT = "T"
    HUGE_FREE_TEXT = "U"
    TEXT_DISPLAY = "X"
    YES_NO = "Y"
    LIST_DROPDOWN = "!"
    ARRAY_NUMBERS = ":"
    ARRAY_TEXT = ";"
    FILE_UPLOAD = "|"
    EQUATION = "*"
    FIVE_POINT_CHOICE = "5"
