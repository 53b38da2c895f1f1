from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.surveys.models.database.survey import SurveyEntity
from packages.surveys.models.domain.survey import SurveyModel


class SurveyRepository(BaseRepository[SurveyEntity, SurveyModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(SurveyEntity, SurveyModel, db_session)
