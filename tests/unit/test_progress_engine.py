"""Unit tests for the progress engine: tier gating, percentages, next activity."""

import pytest

from tsea.curriculum.models import Activity, Curriculum, Track
from tsea.curriculum.progress import (
    ProgressEngine,
    is_track_visible,
    lesson_neighbors,
    module_completion_pct,
    progress_key,
)
from tsea.errors import NotFoundError


class TestTrackVisibility:
    """Visibility depends only on (tier, track id)."""

    @pytest.mark.parametrize(
        "tier,track_id,expected",
        [
            ("basic", "beginner", True),
            ("basic", "intermediate", False),
            ("basic", "advanced", False),
            ("pro", "beginner", True),
            ("pro", "intermediate", True),
            ("pro", "advanced", False),
            ("elite", "beginner", True),
            ("elite", "intermediate", True),
            ("elite", "advanced", True),
        ],
    )
    def test_visibility_table(self, tier, track_id, expected):
        assert is_track_visible(tier, Track(id=track_id, name=track_id)) is expected

    def test_unknown_tier_sees_nothing(self):
        assert is_track_visible("platinum", Track(id="beginner", name="B")) is False
        assert is_track_visible(None, Track(id="beginner", name="B")) is False

    def test_visibility_ignores_progress(self, engine):
        advanced = engine.get_track("advanced")
        before = is_track_visible("basic", advanced)
        progress = {progress_key("options", "greeks"): True, "options:quiz": True}
        engine.track_completion_pct(progress, advanced)
        assert is_track_visible("basic", advanced) is before is False


class TestCompletion:
    """Module and track completion percentages."""

    def test_module_pct_counts_quiz_as_one_unit(self, engine):
        module = engine.get_module("basics")
        progress = {}
        assert module_completion_pct(progress, module) == 0.0
        progress["basics:l1"] = True
        assert module_completion_pct(progress, module) == pytest.approx(100 / 3)
        progress["basics:quiz"] = True
        assert module_completion_pct(progress, module) == pytest.approx(200 / 3)
        progress["basics:l2"] = True
        assert module_completion_pct(progress, module) == 100.0

    def test_module_pct_monotonic_and_bounded(self, engine):
        module = engine.get_module("basics")
        progress = {}
        last = module_completion_pct(progress, module)
        for key in ("basics:l2", "basics:quiz", "basics:l1"):
            progress[key] = True
            current = module_completion_pct(progress, module)
            assert current >= last
            assert 0.0 <= current <= 100.0
            last = current

    def test_flags_for_other_modules_do_not_count(self, engine):
        module = engine.get_module("basics")
        assert module_completion_pct({"options:greeks": True}, module) == 0.0

    def test_track_at_100_only_when_every_module_complete(self, packaged_engine):
        track = packaged_engine.get_track("beginner")
        modules = packaged_engine.modules_for_track(track)
        assert len(modules) > 1

        progress = {}
        first = modules[0]
        for lesson in first.lessons:
            progress[progress_key(first.id, lesson.id)] = True
        progress[progress_key(first.id, "quiz")] = True
        assert packaged_engine.track_completion_pct(progress, track) < 100.0

        for module in modules[1:]:
            for lesson in module.lessons:
                progress[progress_key(module.id, lesson.id)] = True
            progress[progress_key(module.id, "quiz")] = True
        assert packaged_engine.track_completion_pct(progress, track) == 100.0

    def test_empty_track_is_zero(self, two_track_data):
        two_track_data["tracks"].append({"id": "intermediate", "name": "Intermediate"})
        engine = ProgressEngine(Curriculum.model_validate(two_track_data))
        assert engine.track_completion_pct({}, engine.get_track("intermediate")) == 0.0


class TestNextActivity:
    """Next activity walks visible modules in declaration order."""

    def test_first_lesson_for_empty_progress(self, engine):
        assert engine.next_activity({}, "basic") == Activity(
            module_id="basics", kind="lesson", lesson_id="l1"
        )

    def test_quiz_after_lessons(self, engine):
        progress = {"basics:l1": True, "basics:l2": True}
        assert engine.next_activity(progress, "basic") == Activity(module_id="basics", kind="quiz")

    def test_skips_completed_lessons_out_of_order(self, engine):
        progress = {"basics:l1": True}
        assert engine.next_activity(progress, "basic").lesson_id == "l2"

    def test_elite_continues_into_advanced(self, engine):
        progress = {"basics:l1": True, "basics:l2": True, "basics:quiz": True}
        assert engine.next_activity(progress, "elite") == Activity(
            module_id="options", kind="lesson", lesson_id="greeks"
        )

    def test_none_when_all_visible_done(self, engine):
        progress = {"basics:l1": True, "basics:l2": True, "basics:quiz": True}
        assert engine.next_activity(progress, "basic") is None

    def test_unknown_tier_has_nothing_next(self, engine):
        assert engine.next_activity({}, "platinum") is None


class TestRecording:
    """Recording flags is idempotent and validated."""

    def test_record_lesson_twice_is_same_as_once(self, engine):
        once = {}
        engine.record_lesson_complete(once, "basics", "l1")
        twice = {}
        engine.record_lesson_complete(twice, "basics", "l1")
        engine.record_lesson_complete(twice, "basics", "l1")
        assert once == twice == {"basics:l1": True}

    def test_record_unknown_lesson_raises(self, engine):
        progress = {}
        with pytest.raises(NotFoundError) as exc_info:
            engine.record_lesson_complete(progress, "basics", "l9")
        assert exc_info.value.kind == "lesson"
        assert progress == {}

    def test_record_unknown_module_raises(self, engine):
        with pytest.raises(NotFoundError):
            engine.record_quiz_complete({}, "nope")


class TestLookups:
    def test_lesson_neighbors(self, engine):
        module = engine.get_module("basics")
        assert lesson_neighbors(module, "l1") == (None, "l2")
        assert lesson_neighbors(module, "l2") == ("l1", None)

    def test_lesson_neighbors_unknown(self, engine):
        with pytest.raises(NotFoundError):
            lesson_neighbors(engine.get_module("basics"), "missing")

    def test_overview_marks_visibility(self, engine):
        overview = engine.overview({"basics:l1": True}, "basic")
        by_id = {t.id: t for t in overview}
        assert by_id["beginner"].visible is True
        assert by_id["advanced"].visible is False
        assert by_id["beginner"].modules[0].completion_pct == pytest.approx(100 / 3)


class TestBasicTierScenario:
    """A basic learner finishes the beginner module and has nothing left."""

    def test_end_to_end(self, engine):
        progress = {}
        assert engine.next_activity(progress, "basic") == Activity(
            module_id="basics", kind="lesson", lesson_id="l1"
        )

        engine.record_lesson_complete(progress, "basics", "l1")
        engine.record_lesson_complete(progress, "basics", "l2")
        engine.grade_quiz(progress, engine.get_module("basics"), {})

        assert engine.next_activity(progress, "basic") is None
        assert not engine.is_module_visible("basic", engine.get_module("options"))
