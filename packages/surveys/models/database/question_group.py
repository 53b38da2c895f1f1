from sqlalchemy import Column, String, Text, ForeignKey, Integer

from common.db.base import Base, BigIntegerType


class QuestionGroupEntity(Base):
    __tablename__ = "groups"

    gid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    sid = Column(
        BigIntegerType,
        ForeignKey("surveys.sid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    group_order = Column(Integer, nullable=False, default=0, server_default="0")
    randomization_group = Column(
        String(20), nullable=False, default="", server_default=""
    )
    grelevance = Column(Text, nullable=True)
