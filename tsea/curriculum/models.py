"""
Curriculum data model: tracks, modules, lessons and quizzes.

The curriculum is immutable once loaded; every model is frozen.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Progress item id standing for a module's quiz
QUIZ_ITEM = "quiz"


class Tier(str, Enum):
    """Subscription tiers."""
    BASIC = "basic"
    PRO = "pro"
    ELITE = "elite"


class TrackCategory(str, Enum):
    """Track ids the tier gating rules refer to."""
    BEGINNER = "beginner"
    ADVANCED = "advanced"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Track(_Frozen):
    """A gating category of modules."""

    id: str = Field(..., min_length=1)
    name: str


class Lesson(_Frozen):
    """A single lesson; position within its module is significant."""

    id: str = Field(..., min_length=1)
    title: str = ""
    content: str = ""


class Question(_Frozen):
    """A multiple-choice quiz question."""

    id: str = Field(..., min_length=1)
    prompt: str = ""
    options: List[str] = []
    correct_answer_index: int
    explanation: str = ""


class Quiz(_Frozen):
    questions: List[Question] = []


class Module(_Frozen):
    """Ordered lessons plus one quiz, belonging to exactly one track."""

    id: str = Field(..., min_length=1)
    track_id: str
    title: str = ""
    lessons: List[Lesson] = []
    quiz: Quiz = Quiz()

    @model_validator(mode="after")
    def _unique_item_ids(self) -> "Module":
        lesson_ids = [lesson.id for lesson in self.lessons]
        if len(set(lesson_ids)) != len(lesson_ids):
            raise ValueError(f"Duplicate lesson id in module '{self.id}'")
        if QUIZ_ITEM in lesson_ids:
            raise ValueError(f"Lesson id '{QUIZ_ITEM}' is reserved (module '{self.id}')")
        question_ids = [q.id for q in self.quiz.questions]
        if len(set(question_ids)) != len(question_ids):
            raise ValueError(f"Duplicate question id in module '{self.id}'")
        return self


class Curriculum(_Frozen):
    """The full curriculum graph in declaration order."""

    tracks: List[Track]
    modules: List[Module]

    @model_validator(mode="after")
    def _check_references(self) -> "Curriculum":
        track_ids = [t.id for t in self.tracks]
        if len(set(track_ids)) != len(track_ids):
            raise ValueError("Duplicate track id in curriculum")
        module_ids = [m.id for m in self.modules]
        if len(set(module_ids)) != len(module_ids):
            raise ValueError("Duplicate module id in curriculum")
        known = set(track_ids)
        for module in self.modules:
            if module.track_id not in known:
                raise ValueError(
                    f"Module '{module.id}' references unknown track '{module.track_id}'"
                )
        return self


class Activity(_Frozen):
    """Reference to the next lesson or quiz a learner should take."""

    module_id: str
    kind: Literal["lesson", "quiz"]
    lesson_id: Optional[str] = None


class QuestionFeedback(_Frozen):
    question_id: str
    selected_index: int
    correct: bool
    explanation: str


class QuizResult(_Frozen):
    """Outcome of grading one quiz submission."""

    module_id: str
    correct_count: int
    total: int
    feedback: List[QuestionFeedback]

    @property
    def score_pct(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct_count * 100.0 / self.total
