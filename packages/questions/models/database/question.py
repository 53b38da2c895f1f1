from sqlalchemy import (
    Column,
    String,
    Text,
    ForeignKey,
    Boolean,
    Integer,
    UniqueConstraint,
)

from common.db.base import Base, BigIntegerType


class QuestionEntity(Base):
    __tablename__ = "questions"
    __table_args__ = (
        # Codes are unique per group among siblings of the same parent
        UniqueConstraint(
            "gid", "parent_qid", "title", name="uq_questions_gid_parent_qid_title"
        ),
    )

    qid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    parent_qid = Column(
        BigIntegerType, nullable=False, default=0, server_default="0", index=True
    )  # 0 for top-level questions, no FK so the root marker stays valid
    sid = Column(BigIntegerType, ForeignKey("surveys.sid"), nullable=False, index=True)
    gid = Column(BigIntegerType, ForeignKey("groups.gid"), nullable=False, index=True)
    type = Column(String(30), nullable=False, default="T", server_default="T")
    title = Column(String(20), nullable=False)
    preg = Column(Text, nullable=True)
    other = Column(Boolean, nullable=False, default=False, server_default="false")
    mandatory = Column(Boolean, nullable=True)
    encrypted = Column(Boolean, nullable=False, default=False, server_default="false")
    question_order = Column(Integer, nullable=False, default=0, server_default="0")
    scale_id = Column(Integer, nullable=False, default=0, server_default="0")
    same_default = Column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    relevance = Column(Text, nullable=True)
    question_theme_name = Column(String(150), nullable=True)
    modulename = Column(String(255), nullable=True)
    same_script = Column(Boolean, nullable=False, default=False, server_default="false")
