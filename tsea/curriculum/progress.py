"""
Progress engine - tier gating, completion percentages, next activity.

Progress is a flat ``{"<module_id>:<item_id>": True}`` mapping owned by the
caller (the session layer). Entries are only ever set to True; nothing here
removes one. Every function is a pure computation over the curriculum and the
mapping passed in, apart from the record_* calls which mutate that mapping.
"""

from typing import Dict, List, Mapping, MutableMapping, Optional, Tuple, Union

from pydantic import BaseModel

from tsea.curriculum.models import (
    QUIZ_ITEM,
    Activity,
    Curriculum,
    Lesson,
    Module,
    QuestionFeedback,
    QuizResult,
    Tier,
    Track,
    TrackCategory,
)
from tsea.errors import NotFoundError

Progress = Mapping[str, bool]
MutableProgress = MutableMapping[str, bool]

UNANSWERED = -1


def progress_key(module_id: str, item_id: str) -> str:
    """Composite progress key for a lesson id or the quiz sentinel."""
    return f"{module_id}:{item_id}"


def _coerce_tier(tier: Union[Tier, str, None]) -> Optional[Tier]:
    if isinstance(tier, Tier):
        return tier
    try:
        return Tier(tier)
    except ValueError:
        return None


def is_track_visible(tier: Union[Tier, str, None], track: Track) -> bool:
    """
    Elite sees every track, Pro everything but "advanced", Basic only
    "beginner". Unknown tiers see nothing.
    """
    resolved = _coerce_tier(tier)
    if resolved is Tier.ELITE:
        return True
    if resolved is Tier.PRO:
        return track.id != TrackCategory.ADVANCED.value
    if resolved is Tier.BASIC:
        return track.id == TrackCategory.BEGINNER.value
    return False


def is_lesson_complete(progress: Progress, module_id: str, lesson_id: str) -> bool:
    return bool(progress.get(progress_key(module_id, lesson_id), False))


def is_quiz_complete(progress: Progress, module_id: str) -> bool:
    return bool(progress.get(progress_key(module_id, QUIZ_ITEM), False))


def module_completion_pct(progress: Progress, module: Module) -> float:
    """Completed lessons plus the quiz as one unit, over lessons + 1."""
    done = sum(1 for lesson in module.lessons if is_lesson_complete(progress, module.id, lesson.id))
    if is_quiz_complete(progress, module.id):
        done += 1
    total = max(len(module.lessons) + 1, 1)
    return done * 100.0 / total


def is_module_complete(progress: Progress, module: Module) -> bool:
    return module_completion_pct(progress, module) >= 100.0


def lesson_neighbors(module: Module, lesson_id: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (previous, next) lesson ids around lesson_id within its module."""
    ids = [lesson.id for lesson in module.lessons]
    if lesson_id not in ids:
        raise NotFoundError("lesson", f"{module.id}/{lesson_id}")
    idx = ids.index(lesson_id)
    prev_id = ids[idx - 1] if idx > 0 else None
    next_id = ids[idx + 1] if idx + 1 < len(ids) else None
    return prev_id, next_id


class ModuleSummary(BaseModel):
    id: str
    title: str
    track_id: str
    lesson_count: int
    quiz_complete: bool
    completion_pct: float
    complete: bool


class TrackSummary(BaseModel):
    id: str
    name: str
    visible: bool
    completion_pct: float
    modules: List[ModuleSummary]


class ProgressEngine:
    """Curriculum-bound progress operations."""

    def __init__(self, curriculum: Curriculum):
        self.curriculum = curriculum
        self._tracks: Dict[str, Track] = {t.id: t for t in curriculum.tracks}
        self._modules: Dict[str, Module] = {m.id: m for m in curriculum.modules}

    # ── Lookups ──────────────────────────────────────────────────────────

    def get_track(self, track_id: str) -> Track:
        try:
            return self._tracks[track_id]
        except KeyError:
            raise NotFoundError("track", track_id) from None

    def get_module(self, module_id: str) -> Module:
        try:
            return self._modules[module_id]
        except KeyError:
            raise NotFoundError("module", module_id) from None

    def get_lesson(self, module_id: str, lesson_id: str) -> Lesson:
        module = self.get_module(module_id)
        for lesson in module.lessons:
            if lesson.id == lesson_id:
                return lesson
        raise NotFoundError("lesson", f"{module_id}/{lesson_id}")

    def modules_for_track(self, track: Track) -> List[Module]:
        """Modules of a track in declaration order."""
        return [m for m in self.curriculum.modules if m.track_id == track.id]

    def track_of(self, module: Module) -> Track:
        return self._tracks[module.track_id]

    # ── Gating and percentages ───────────────────────────────────────────

    def is_module_visible(self, tier: Union[Tier, str, None], module: Module) -> bool:
        return is_track_visible(tier, self.track_of(module))

    def track_completion_pct(self, progress: Progress, track: Track) -> float:
        """Mean module completion across the track; 0 for an empty track."""
        modules = self.modules_for_track(track)
        if not modules:
            return 0.0
        return sum(module_completion_pct(progress, m) for m in modules) / len(modules)

    def next_activity(self, progress: Progress, tier: Union[Tier, str, None]) -> Optional[Activity]:
        """
        First incomplete lesson (or quiz) in curriculum declaration order,
        skipping modules the tier cannot see.
        """
        for module in self.curriculum.modules:
            if not self.is_module_visible(tier, module):
                continue
            for lesson in module.lessons:
                if not is_lesson_complete(progress, module.id, lesson.id):
                    return Activity(module_id=module.id, kind="lesson", lesson_id=lesson.id)
            if not is_quiz_complete(progress, module.id):
                return Activity(module_id=module.id, kind="quiz")
        return None

    def overview(self, progress: Progress, tier: Union[Tier, str, None]) -> List[TrackSummary]:
        """Per-track dashboard summary for a tier."""
        summaries = []
        for track in self.curriculum.tracks:
            modules = self.modules_for_track(track)
            summaries.append(
                TrackSummary(
                    id=track.id,
                    name=track.name,
                    visible=is_track_visible(tier, track),
                    completion_pct=self.track_completion_pct(progress, track),
                    modules=[self.module_summary(progress, m) for m in modules],
                )
            )
        return summaries

    def module_summary(self, progress: Progress, module: Module) -> ModuleSummary:
        return ModuleSummary(
            id=module.id,
            title=module.title,
            track_id=module.track_id,
            lesson_count=len(module.lessons),
            quiz_complete=is_quiz_complete(progress, module.id),
            completion_pct=module_completion_pct(progress, module),
            complete=is_module_complete(progress, module),
        )

    # ── Recording ────────────────────────────────────────────────────────

    def record_lesson_complete(self, progress: MutableProgress, module_id: str, lesson_id: str) -> None:
        """Mark a lesson complete. Idempotent."""
        self.get_lesson(module_id, lesson_id)
        progress[progress_key(module_id, lesson_id)] = True

    def record_quiz_complete(self, progress: MutableProgress, module_id: str) -> None:
        """Mark a module's quiz complete. Idempotent."""
        self.get_module(module_id)
        progress[progress_key(module_id, QUIZ_ITEM)] = True

    def grade_quiz(
        self,
        progress: MutableProgress,
        module: Module,
        answers: Mapping[str, int],
    ) -> QuizResult:
        """
        Grade a quiz submission and mark the quiz complete.

        Missing answers count as UNANSWERED (always wrong). The quiz is
        marked complete whatever the score: attempting it is enough to
        progress.
        """
        feedback = []
        for question in module.quiz.questions:
            selected = answers.get(question.id, UNANSWERED)
            feedback.append(
                QuestionFeedback(
                    question_id=question.id,
                    selected_index=selected,
                    correct=selected == question.correct_answer_index,
                    explanation=question.explanation,
                )
            )
        self.record_quiz_complete(progress, module.id)
        return QuizResult(
            module_id=module.id,
            correct_count=sum(1 for f in feedback if f.correct),
            total=len(feedback),
            feedback=feedback,
        )
