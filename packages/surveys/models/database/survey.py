from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class SurveyEntity(Base):
    __tablename__ = "surveys"

    sid = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    title = Column(Text, nullable=False)
    language = Column(String(50), nullable=False)  # Base language
    additional_languages = Column(
        Text, nullable=False, default="", server_default=""
    )  # Space separated, as in the survey export format
    active = Column(Boolean, nullable=False, default=False, server_default="false")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
