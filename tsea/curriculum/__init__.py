"""
Curriculum - static track/module/lesson graph and the progress engine over it.
"""

from tsea.curriculum.loader import get_curriculum, load_curriculum
from tsea.curriculum.models import (
    QUIZ_ITEM,
    Activity,
    Curriculum,
    Lesson,
    Module,
    Question,
    QuestionFeedback,
    Quiz,
    QuizResult,
    Tier,
    Track,
    TrackCategory,
)
from tsea.curriculum.progress import (
    ProgressEngine,
    is_track_visible,
    lesson_neighbors,
    module_completion_pct,
    progress_key,
)

__all__ = [
    "get_curriculum",
    "load_curriculum",
    "QUIZ_ITEM",
    "Activity",
    "Curriculum",
    "Lesson",
    "Module",
    "Question",
    "QuestionFeedback",
    "Quiz",
    "QuizResult",
    "Tier",
    "Track",
    "TrackCategory",
    "ProgressEngine",
    "is_track_visible",
    "lesson_neighbors",
    "module_completion_pct",
    "progress_key",
]
