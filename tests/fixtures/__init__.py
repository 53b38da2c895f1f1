# Test data and fixtures
from pathlib import Path
from typing import Dict, Optional, Union

from packages.plugins.models.domain.plugin import PluginModel
from packages.plugins.services.plugin_service import PluginService
from packages.questions.models.domain.question import QuestionModel
from packages.questions.services.question_service import QuestionService
from packages.surveys.services.survey_import_service import SurveyImportService
from packages.surveys.services.survey_service import SurveyService

DATA_FOLDER = Path(__file__).resolve().parent.parent / "data"
SURVEYS_FOLDER = DATA_FOLDER / "surveys"

# Single list question Q1: one language, three answer options, two settings
COLOUR_SURVEY_FILE = SURVEYS_FOLDER / "survey_colour_question.json"
# Array question with subquestions and a default answer on SQ002
ARRAY_SURVEY_FILE = SURVEYS_FOLDER / "survey_array_question.json"
# Answer code longer than the five characters answers allow
BROKEN_SURVEY_FILE = SURVEYS_FOLDER / "survey_broken_answer_code.json"


class SurveyTestHarness:
    """
    Imports a fixture survey and removes it again.

    Runs on lazy sessions, so every call commits on its own like a real
    caller would.

    Usage:
        async def test_something(survey_harness):
            await survey_harness.import_survey(COLOUR_SURVEY_FILE)
            questions = await survey_harness.get_all_survey_questions()
    """

    def __init__(self):
        self.survey_id: Optional[int] = None
        self.import_service = SurveyImportService()
        self.survey_service = SurveyService()
        self.question_service = QuestionService()
        self.plugin_service = PluginService()

    async def import_survey(self, path: Union[str, Path]) -> int:
        result = await self.import_service.import_survey_file(path)
        self.survey_id = result.survey_id
        return self.survey_id

    async def get_all_survey_questions(self) -> Dict[str, QuestionModel]:
        """Top-level questions of the imported survey, keyed by question code."""
        if self.survey_id is None:
            raise RuntimeError("get_all_survey_questions called without a survey")
        return await self.question_service.get_questions_for_survey(self.survey_id)

    async def install_and_activate_plugin(self, name: str) -> PluginModel:
        return await self.plugin_service.install_and_activate_plugin(name)

    async def deactivate_plugin(self, name: str) -> Optional[PluginModel]:
        return await self.plugin_service.deactivate_plugin(name)

    async def tear_down(self) -> None:
        if self.survey_id is None:
            return
        if not await self.survey_service.delete_survey(self.survey_id):
            raise AssertionError(f"Could not clean up survey {self.survey_id}")
        self.survey_id = None
