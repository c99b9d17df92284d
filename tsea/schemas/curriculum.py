"""
Curriculum and progress schemas.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt

from tsea.curriculum.models import Activity, QuestionFeedback
from tsea.curriculum.progress import ModuleSummary, TrackSummary


class TrackListOut(BaseModel):
    tier: str
    tracks: List[TrackSummary]


class NextActivityOut(BaseModel):
    next: Optional[Activity] = None


class LessonRef(BaseModel):
    id: str
    title: str
    completed: bool


class ModuleDetailOut(BaseModel):
    module: ModuleSummary
    lessons: List[LessonRef]
    question_count: int


class LessonOut(BaseModel):
    module_id: str
    id: str
    title: str
    content: str
    completed: bool
    previous_lesson_id: Optional[str] = None
    next_lesson_id: Optional[str] = None


class QuizQuestionOut(BaseModel):
    """A question as shown to the learner (no answer key)."""

    id: str
    prompt: str
    options: List[str]


class QuizOut(BaseModel):
    module_id: str
    completed: bool
    questions: List[QuizQuestionOut]


class QuizSubmission(BaseModel):
    answers: Dict[str, StrictInt] = Field(default_factory=dict)


class QuizResultOut(BaseModel):
    module_id: str
    correct_count: int
    total: int
    score_pct: float
    feedback: List[QuestionFeedback]
    module_completion_pct: float
    next: Optional[Activity] = None


class CompletionOut(BaseModel):
    module_id: str
    lesson_id: str
    module_completion_pct: float
    next: Optional[Activity] = None
