from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class SurveyModel(BaseModel):
    sid: int
    title: str
    language: str
    additional_languages: str = ""
    active: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @property
    def all_languages(self) -> List[str]:
        """Base language first, then the additional ones."""
        return [self.language] + self.additional_languages.split()


class SurveyCreateModel(BaseModel):
    title: str
    language: str = Field(min_length=1, max_length=50)
    additional_languages: str = ""
    active: bool = False


class SurveyImportResult(BaseModel):
    survey_id: int
    group_count: int
    question_count: int  # Top-level questions and subquestions
