from sqlalchemy import Column, String, Text, ForeignKey, Integer, UniqueConstraint

from common.db.base import Base, BigIntegerType


class AnswerEntity(Base):
    __tablename__ = "answers"
    __table_args__ = (
        UniqueConstraint(
            "qid", "code", "scale_id", name="uq_answers_qid_code_scale_id"
        ),
    )

    aid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    qid = Column(
        BigIntegerType,
        ForeignKey("questions.qid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code = Column(String(5), nullable=False)
    sortorder = Column(Integer, nullable=False, default=0, server_default="0")
    assessment_value = Column(Integer, nullable=False, default=0, server_default="0")
    scale_id = Column(Integer, nullable=False, default=0, server_default="0")


class AnswerL10nEntity(Base):
    __tablename__ = "answer_l10ns"
    __table_args__ = (
        UniqueConstraint("aid", "language", name="uq_answer_l10ns_aid_language"),
    )

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    aid = Column(
        BigIntegerType,
        ForeignKey("answers.aid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    answer = Column(Text, nullable=False)
    language = Column(String(20), nullable=False)
