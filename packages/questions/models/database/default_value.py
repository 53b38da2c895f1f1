from sqlalchemy import Column, String, Text, ForeignKey, Integer, UniqueConstraint

from common.db.base import Base, BigIntegerType


class DefaultValueEntity(Base):
    __tablename__ = "defaultvalues"

    dvid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    qid = Column(
        BigIntegerType,
        ForeignKey("questions.qid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    scale_id = Column(Integer, nullable=False, default=0, server_default="0")
    sqid = Column(
        BigIntegerType, nullable=False, default=0, server_default="0"
    )  # Subquestion the default applies to, 0 for the question itself
    specialtype = Column(String(20), nullable=False, default="", server_default="")


class DefaultValueL10nEntity(Base):
    __tablename__ = "defaultvalue_l10ns"
    __table_args__ = (
        UniqueConstraint(
            "dvid", "language", name="uq_defaultvalue_l10ns_dvid_language"
        ),
    )

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    dvid = Column(
        BigIntegerType,
        ForeignKey("defaultvalues.dvid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language = Column(String(20), nullable=False)
    defaultvalue = Column(Text, nullable=True)
