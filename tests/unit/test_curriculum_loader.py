"""Unit tests for curriculum loading and validation."""

import json

import pytest
from pydantic import ValidationError

from tsea.curriculum.loader import DEFAULT_CURRICULUM_PATH, load_curriculum
from tsea.curriculum.models import Curriculum


class TestPackagedCurriculum:
    def test_packaged_document_loads(self):
        curriculum = load_curriculum(DEFAULT_CURRICULUM_PATH)
        track_ids = [t.id for t in curriculum.tracks]
        assert track_ids == ["beginner", "intermediate", "advanced"]
        assert curriculum.modules[0].id == "market-basics"
        assert all(m.quiz.questions for m in curriculum.modules)

    def test_correct_answers_are_in_range(self):
        curriculum = load_curriculum(DEFAULT_CURRICULUM_PATH)
        for module in curriculum.modules:
            for question in module.quiz.questions:
                assert 0 <= question.correct_answer_index < len(question.options)

    def test_load_from_file(self, tmp_path, two_track_data):
        path = tmp_path / "curriculum.json"
        path.write_text(json.dumps(two_track_data), encoding="utf-8")
        curriculum = load_curriculum(str(path))
        assert [m.id for m in curriculum.modules] == ["basics", "options"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_curriculum(tmp_path / "missing.json")


class TestCurriculumInvariants:
    """Malformed documents are rejected at load time."""

    def test_duplicate_lesson_ids(self, two_track_data):
        two_track_data["modules"][0]["lessons"].append({"id": "l1", "title": "Again"})
        with pytest.raises(ValidationError, match="Duplicate lesson id"):
            Curriculum.model_validate(two_track_data)

    def test_lesson_id_may_not_be_quiz(self, two_track_data):
        two_track_data["modules"][0]["lessons"].append({"id": "quiz", "title": "Sneaky"})
        with pytest.raises(ValidationError, match="reserved"):
            Curriculum.model_validate(two_track_data)

    def test_duplicate_question_ids(self, two_track_data):
        questions = two_track_data["modules"][0]["quiz"]["questions"]
        questions.append(dict(questions[0]))
        with pytest.raises(ValidationError, match="Duplicate question id"):
            Curriculum.model_validate(two_track_data)

    def test_duplicate_module_ids(self, two_track_data):
        two_track_data["modules"].append(dict(two_track_data["modules"][1]))
        with pytest.raises(ValidationError, match="Duplicate module id"):
            Curriculum.model_validate(two_track_data)

    def test_unknown_track_reference(self, two_track_data):
        two_track_data["modules"][1]["track_id"] = "expert"
        with pytest.raises(ValidationError, match="unknown track"):
            Curriculum.model_validate(two_track_data)

    def test_models_are_frozen(self, two_track_curriculum):
        with pytest.raises(ValidationError):
            two_track_curriculum.modules[0].title = "Changed"
