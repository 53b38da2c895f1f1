import pytest
from sqlalchemy import func, select

from common.core.config import settings
from common.core.exceptions import SurveyImportError
from packages.questions.models.database import QuestionEntity
from packages.questions.repositories.answer_repository import (
    AnswerRepository,
    AnswerL10nRepository,
)
from packages.questions.repositories.default_value_repository import (
    DefaultValueRepository,
    DefaultValueL10nRepository,
)
from packages.questions.repositories.question_attribute_repository import (
    QuestionAttributeRepository,
)
from packages.questions.repositories.question_repository import (
    QuestionRepository,
    QuestionL10nRepository,
)
from packages.surveys.models.database import SurveyEntity
from packages.surveys.repositories.question_group_repository import (
    QuestionGroupRepository,
)
from packages.surveys.repositories.survey_repository import SurveyRepository
from packages.surveys.services.survey_import_service import SurveyImportService
from tests.fixtures import (
    ARRAY_SURVEY_FILE,
    BROKEN_SURVEY_FILE,
    COLOUR_SURVEY_FILE,
    SURVEYS_FOLDER,
)


class TestSurveyImportService:
    """Test importing survey fixture files."""

    @pytest.fixture
    def service(self):
        return SurveyImportService()

    async def test_import_colour_survey(self, service):
        result = await service.import_survey_file(COLOUR_SURVEY_FILE)

        assert result.group_count == 1
        assert result.question_count == 2

        survey = await SurveyRepository().get(result.survey_id)
        assert survey.title == "Colour preferences"
        assert survey.all_languages == ["en", "de"]

        questions = await QuestionRepository().get_top_level_by_survey_id(result.survey_id)
        assert [question.title for question in questions] == ["Q1", "Q2"]
        q1 = questions[0]
        assert q1.mandatory is True

        texts = await QuestionL10nRepository().get_by_qid(q1.qid)
        assert [(text.language, text.help) for text in texts] == [("en", "Pick one")]

        answers = await AnswerRepository().get_by_qid(q1.qid)
        assert [answer.code for answer in answers] == ["A1", "A2", "A3"]
        answer_texts = await AnswerL10nRepository().get_by_aid(answers[1].aid)
        assert {text.language: text.answer for text in answer_texts} == {
            "en": "Green",
            "de": "Grün",
        }

        attributes = await QuestionAttributeRepository().get_by_qid(q1.qid)
        assert len(attributes) == 2

    async def test_import_maps_default_to_subquestion(self, service):
        result = await service.import_survey_file(ARRAY_SURVEY_FILE)

        assert result.group_count == 2
        assert result.question_count == 4

        question_repo = QuestionRepository()
        groups = await QuestionGroupRepository().get_by_survey_id(result.survey_id)
        rating = await question_repo.get_by_code(groups[0].gid, "Rating")
        subquestions = await question_repo.get_by_parent_qid(rating.qid)
        assert [sub.title for sub in subquestions] == ["SQ001", "SQ002"]

        defaults = await DefaultValueRepository().get_by_qid(rating.qid)
        assert defaults[0].sqid == subquestions[1].qid
        values = await DefaultValueL10nRepository().get_by_dvid(defaults[0].dvid)
        assert values[0].defaultvalue == "2"

    async def test_import_relative_path_uses_fixtures_dir(self, service, monkeypatch):
        monkeypatch.setattr(settings, "fixtures_dir", SURVEYS_FOLDER)

        result = await service.import_survey_file(COLOUR_SURVEY_FILE.name)

        assert result.question_count == 2

    async def test_import_without_language_uses_default(self, service, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "default_language", "fr")
        document = tmp_path / "no_language.json"
        document.write_text(
            '{"title": "x", "groups": [{"questions": [{"title": "Q1"}]}]}',
            encoding="utf-8",
        )

        result = await service.import_survey_file(document)

        survey = await SurveyRepository().get(result.survey_id)
        assert survey.all_languages == ["fr"]

    async def test_import_missing_file(self, service, tmp_path):
        missing = tmp_path / "missing.json"

        with pytest.raises(SurveyImportError) as exc_info:
            await service.import_survey_file(missing)

        assert str(exc_info.value) == f"Survey file {missing} not found"

    async def test_import_invalid_json(self, service, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")

        with pytest.raises(SurveyImportError) as exc_info:
            await service.import_survey_file(broken)

        assert str(exc_info.value) == f"Failed to import survey file {broken}"

    async def test_import_unknown_default_subquestion(self, service, tmp_path):
        document = tmp_path / "unknown_subquestion.json"
        document.write_text(
            '{"title": "x", "language": "en", "groups": [{"questions": ['
            '{"title": "Q1", "type": "F", "defaultValues": [{"subquestion": "SQ9"}]}'
            "]}]}",
            encoding="utf-8",
        )

        with pytest.raises(SurveyImportError):
            await service.import_survey_file(document)

    async def test_failed_import_leaves_nothing_behind(self, service, test_db):
        """Test that a record failing validation rolls the whole import back."""
        with pytest.raises(SurveyImportError):
            await service.import_survey_file(BROKEN_SURVEY_FILE)

        surveys = await test_db.execute(select(func.count()).select_from(SurveyEntity))
        questions = await test_db.execute(select(func.count()).select_from(QuestionEntity))
        assert surveys.scalar_one() == 0
        assert questions.scalar_one() == 0
