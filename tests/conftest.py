"""
Pytest fixtures for TSEA tests.
"""

import pytest

from tsea.curriculum.loader import DEFAULT_CURRICULUM_PATH, load_curriculum
from tsea.curriculum.models import Curriculum
from tsea.curriculum.progress import ProgressEngine
from tsea.kernel.identity.jwt import JWTManager


def build_curriculum(data: dict) -> Curriculum:
    return Curriculum.model_validate(data)


@pytest.fixture
def two_track_data() -> dict:
    """One beginner module (2 lessons + 3-question quiz) and one advanced module."""
    return {
        "tracks": [
            {"id": "beginner", "name": "Beginner"},
            {"id": "advanced", "name": "Advanced"},
        ],
        "modules": [
            {
                "id": "basics",
                "track_id": "beginner",
                "title": "Basics",
                "lessons": [
                    {"id": "l1", "title": "Lesson 1", "content": "One"},
                    {"id": "l2", "title": "Lesson 2", "content": "Two"},
                ],
                "quiz": {
                    "questions": [
                        {"id": "q1", "prompt": "A?", "options": ["a", "b"], "correct_answer_index": 0, "explanation": "a"},
                        {"id": "q2", "prompt": "B?", "options": ["a", "b"], "correct_answer_index": 1, "explanation": "b"},
                        {"id": "q3", "prompt": "C?", "options": ["a", "b", "c"], "correct_answer_index": 2, "explanation": "c"},
                    ]
                },
            },
            {
                "id": "options",
                "track_id": "advanced",
                "title": "Options",
                "lessons": [{"id": "greeks", "title": "Greeks", "content": "Delta"}],
                "quiz": {
                    "questions": [
                        {"id": "q1", "prompt": "D?", "options": ["a", "b"], "correct_answer_index": 1, "explanation": "b"},
                    ]
                },
            },
        ],
    }


@pytest.fixture
def two_track_curriculum(two_track_data) -> Curriculum:
    return build_curriculum(two_track_data)


@pytest.fixture
def engine(two_track_curriculum) -> ProgressEngine:
    return ProgressEngine(two_track_curriculum)


@pytest.fixture
def packaged_engine() -> ProgressEngine:
    """Engine over the curriculum shipped with the package."""
    return ProgressEngine(load_curriculum(DEFAULT_CURRICULUM_PATH))


@pytest.fixture
def jwt_manager() -> JWTManager:
    """Create a JWT manager for tests."""
    return JWTManager(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )
