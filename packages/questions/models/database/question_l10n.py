from sqlalchemy import Column, String, Text, ForeignKey, UniqueConstraint

from common.db.base import Base, BigIntegerType


class QuestionL10nEntity(Base):
    __tablename__ = "question_l10ns"
    __table_args__ = (
        UniqueConstraint("qid", "language", name="uq_question_l10ns_qid_language"),
    )

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    qid = Column(
        BigIntegerType,
        ForeignKey("questions.qid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question = Column(Text, nullable=False, default="")
    help = Column(Text, nullable=True)
    script = Column(Text, nullable=True)
    language = Column(String(20), nullable=False)
