from sqlalchemy import Column, String, Text, ForeignKey

from common.db.base import Base, BigIntegerType


class QuestionAttributeEntity(Base):
    """General and advanced settings of a question, one row per setting."""

    __tablename__ = "question_attributes"

    qaid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    qid = Column(
        BigIntegerType,
        ForeignKey("questions.qid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute = Column(String(50), nullable=False)
    value = Column(Text, nullable=True)
    language = Column(String(20), nullable=True)  # Only set for localized settings
