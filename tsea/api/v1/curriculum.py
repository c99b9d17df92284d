"""
Curriculum endpoints: tier-gated tracks, lessons, quizzes and progress.
"""

from fastapi import APIRouter, HTTPException, status

from tsea.api.deps import CurrentUser, Engine, UserProgress
from tsea.curriculum.models import Module
from tsea.curriculum.progress import (
    ProgressEngine,
    is_lesson_complete,
    is_quiz_complete,
    lesson_neighbors,
    module_completion_pct,
)
from tsea.kernel.models.user import User
from tsea.logging_config import get_logger
from tsea.schemas.curriculum import (
    CompletionOut,
    LessonOut,
    LessonRef,
    ModuleDetailOut,
    NextActivityOut,
    QuizOut,
    QuizQuestionOut,
    QuizResultOut,
    QuizSubmission,
    TrackListOut,
)

logger = get_logger(__name__)
router = APIRouter()


def _visible_module(engine: ProgressEngine, user: User, module_id: str) -> Module:
    """Look up a module, refusing tracks the user's tier cannot see."""
    module = engine.get_module(module_id)
    if not engine.is_module_visible(user.tier_value, module):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Upgrade required: track '{module.track_id}' is not included in the {user.tier_value} plan",
        )
    return module


@router.get("/tracks", response_model=TrackListOut)
async def list_tracks(user: CurrentUser, engine: Engine, progress: UserProgress):
    """All tracks with visibility and completion for the current tier."""
    return TrackListOut(
        tier=user.tier_value,
        tracks=engine.overview(progress.data, user.tier_value),
    )


@router.get("/next", response_model=NextActivityOut)
async def next_activity(user: CurrentUser, engine: Engine, progress: UserProgress):
    """The next lesson or quiz to take, or null when everything visible is done."""
    return NextActivityOut(next=engine.next_activity(progress.data, user.tier_value))


@router.get("/modules/{module_id}", response_model=ModuleDetailOut)
async def get_module(module_id: str, user: CurrentUser, engine: Engine, progress: UserProgress):
    module = _visible_module(engine, user, module_id)
    return ModuleDetailOut(
        module=engine.module_summary(progress.data, module),
        lessons=[
            LessonRef(
                id=lesson.id,
                title=lesson.title,
                completed=is_lesson_complete(progress.data, module.id, lesson.id),
            )
            for lesson in module.lessons
        ],
        question_count=len(module.quiz.questions),
    )


@router.get("/modules/{module_id}/lessons/{lesson_id}", response_model=LessonOut)
async def get_lesson(
    module_id: str,
    lesson_id: str,
    user: CurrentUser,
    engine: Engine,
    progress: UserProgress,
):
    module = _visible_module(engine, user, module_id)
    lesson = engine.get_lesson(module.id, lesson_id)
    prev_id, next_id = lesson_neighbors(module, lesson.id)
    return LessonOut(
        module_id=module.id,
        id=lesson.id,
        title=lesson.title,
        content=lesson.content,
        completed=is_lesson_complete(progress.data, module.id, lesson.id),
        previous_lesson_id=prev_id,
        next_lesson_id=next_id,
    )


@router.post("/modules/{module_id}/lessons/{lesson_id}/complete", response_model=CompletionOut)
async def complete_lesson(
    module_id: str,
    lesson_id: str,
    user: CurrentUser,
    engine: Engine,
    progress: UserProgress,
):
    """Mark a lesson complete. Repeating the call changes nothing."""
    module = _visible_module(engine, user, module_id)
    engine.record_lesson_complete(progress.data, module.id, lesson_id)
    progress.save()
    logger.info(
        "Lesson completed",
        extra={"user_id": str(user.id), "module_id": module.id, "lesson_id": lesson_id},
    )
    return CompletionOut(
        module_id=module.id,
        lesson_id=lesson_id,
        module_completion_pct=module_completion_pct(progress.data, module),
        next=engine.next_activity(progress.data, user.tier_value),
    )


@router.get("/modules/{module_id}/quiz", response_model=QuizOut)
async def get_quiz(module_id: str, user: CurrentUser, engine: Engine, progress: UserProgress):
    module = _visible_module(engine, user, module_id)
    return QuizOut(
        module_id=module.id,
        completed=is_quiz_complete(progress.data, module.id),
        questions=[
            QuizQuestionOut(id=q.id, prompt=q.prompt, options=q.options)
            for q in module.quiz.questions
        ],
    )


@router.post("/modules/{module_id}/quiz", response_model=QuizResultOut)
async def submit_quiz(
    module_id: str,
    body: QuizSubmission,
    user: CurrentUser,
    engine: Engine,
    progress: UserProgress,
):
    """Grade a quiz; the quiz counts as complete whatever the score."""
    module = _visible_module(engine, user, module_id)
    result = engine.grade_quiz(progress.data, module, body.answers)
    progress.save()
    logger.info(
        "Quiz graded",
        extra={
            "user_id": str(user.id),
            "module_id": module.id,
            "correct": result.correct_count,
            "total": result.total,
        },
    )
    return QuizResultOut(
        module_id=result.module_id,
        correct_count=result.correct_count,
        total=result.total,
        score_pct=result.score_pct,
        feedback=result.feedback,
        module_completion_pct=module_completion_pct(progress.data, module),
        next=engine.next_activity(progress.data, user.tier_value),
    )
