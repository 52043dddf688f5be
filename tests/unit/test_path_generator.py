"""
Unit tests for PathGenerator.

Covers starting point, pace, module filtering, unlock gating, time
adjustment and full path assembly. No store required.

Run: pytest tests/unit/test_path_generator.py -v
"""

import pytest

from src.adaptive.errors import ValidationError
from src.adaptive.guidance import ADVANCED_TIPS, FAST_CADENCE, NORMAL_CADENCE
from src.adaptive.models import (
    Course,
    DifficultyLevel,
    LearnerBackground,
    LearnerProfile,
    LearningPace,
    Module,
    PerformanceLevel,
    ProgressStatus,
)
from src.adaptive.path_generator import PathGenerator

BACKGROUNDS = [
    LearnerBackground.BEGINNER,
    LearnerBackground.INTERMEDIATE,
    LearnerBackground.ADVANCED,
]


class TestStartingPoint:
    def test_advanced_learner_skips_half_of_beginner_course(self):
        assert PathGenerator.determine_starting_point("advanced", "beginner", 20) == 10

    def test_intermediate_learner_skips_quarter_of_beginner_course(self):
        assert PathGenerator.determine_starting_point("intermediate", "beginner", 8) == 2

    def test_advanced_learner_skips_quarter_of_intermediate_course(self):
        assert PathGenerator.determine_starting_point("advanced", "intermediate", 8) == 2

    def test_fractions_round_down(self):
        assert PathGenerator.determine_starting_point("intermediate", "beginner", 7) == 1
        assert PathGenerator.determine_starting_point("advanced", "beginner", 5) == 2

    @pytest.mark.parametrize(
        "background,difficulty",
        [
            ("intermediate", "intermediate"),
            ("intermediate", "advanced"),
            ("advanced", "advanced"),
        ],
    )
    def test_no_skip_in_matching_or_harder_courses(self, background, difficulty):
        assert PathGenerator.determine_starting_point(background, difficulty, 12) == 0

    @pytest.mark.parametrize("difficulty", list(DifficultyLevel))
    @pytest.mark.parametrize("count", [0, 1, 4, 9, 20])
    def test_beginner_always_starts_at_zero(self, difficulty, count):
        assert PathGenerator.determine_starting_point(LearnerBackground.BEGINNER, difficulty, count) == 0

    def test_unrecognised_background_starts_at_zero(self):
        assert PathGenerator.determine_starting_point("expert", "beginner", 20) == 0

    def test_empty_course_starts_at_zero(self):
        assert PathGenerator.determine_starting_point("advanced", "beginner", 0) == 0

    @pytest.mark.parametrize("difficulty", list(DifficultyLevel))
    @pytest.mark.parametrize("count", [1, 3, 8, 13, 20])
    def test_start_is_monotonic_in_background(self, difficulty, count):
        starts = [
            PathGenerator.determine_starting_point(background, difficulty, count)
            for background in BACKGROUNDS
        ]
        assert starts == sorted(starts)


class TestRecommendedPace:
    @pytest.mark.parametrize("background", BACKGROUNDS)
    def test_struggling_forces_slow(self, background):
        assert PathGenerator.determine_recommended_pace(background, "struggling") is LearningPace.SLOW

    @pytest.mark.parametrize("background", BACKGROUNDS)
    def test_excellent_forces_fast(self, background):
        assert PathGenerator.determine_recommended_pace(background, "excellent") is LearningPace.FAST

    @pytest.mark.parametrize(
        "background,expected",
        [
            ("beginner", LearningPace.SLOW),
            ("intermediate", LearningPace.NORMAL),
            ("advanced", LearningPace.FAST),
        ],
    )
    def test_average_falls_back_to_background(self, background, expected):
        assert PathGenerator.determine_recommended_pace(background, PerformanceLevel.AVERAGE) is expected


class TestFilterModules:
    def test_beginner_gets_everything_from_start(self, make_modules):
        modules = make_modules(5)
        result = PathGenerator.filter_modules_for_learner(modules, 2, "beginner", None)
        assert [m.id for m in result] == ["m3", "m4", "m5"]

    def test_intermediate_drops_modules_before_start(self, make_modules):
        modules = make_modules(6)
        result = PathGenerator.filter_modules_for_learner(modules, 2, "intermediate", None)
        assert [m.id for m in result] == ["m3", "m4", "m5", "m6"]

    def test_started_module_before_start_is_kept(self, make_modules, make_progress):
        modules = make_modules(6)
        progress = make_progress({"m1": "in-progress", "m2": "not-started"})
        result = PathGenerator.filter_modules_for_learner(modules, 3, "intermediate", progress)
        assert [m.id for m in result] == ["m1", "m4", "m5", "m6"]

    def test_advanced_drops_beginner_modules_after_start(self, make_modules):
        modules = make_modules(2, difficulty="beginner") + [
            m.model_copy(update={"id": f"x{m.order}", "order": m.order + 2})
            for m in make_modules(2, difficulty="intermediate")
        ]
        result = PathGenerator.filter_modules_for_learner(modules, 0, "advanced", None)
        assert [m.id for m in result] == ["x1", "x2"]

    def test_advanced_keeps_started_beginner_module(self, make_modules, make_progress):
        modules = make_modules(4, difficulty="beginner")
        progress = make_progress({"m3": "needs-revision"})
        result = PathGenerator.filter_modules_for_learner(modules, 2, "advanced", progress)
        assert [m.id for m in result] == ["m3"]

    def test_intermediate_keeps_beginner_modules(self, make_modules):
        modules = make_modules(4, difficulty="beginner")
        result = PathGenerator.filter_modules_for_learner(modules, 1, "intermediate", None)
        assert len(result) == 3

    def test_empty_modules(self):
        assert PathGenerator.filter_modules_for_learner([], 0, "advanced", None) == []


class TestModuleUnlock:
    @pytest.fixture
    def module(self, make_modules):
        return make_modules(3)[2]

    def test_first_module_always_unlocked(self, module, make_progress):
        assert PathGenerator.is_module_unlocked(module, None, 0) is True
        locked = make_progress({module.id: "not-started"})
        assert PathGenerator.is_module_unlocked(module, locked, 0) is True

    def test_locked_without_progress(self, module):
        assert PathGenerator.is_module_unlocked(module, None, 1) is False

    def test_prerequisites_all_completed(self, module, make_progress):
        gated = module.model_copy(update={"prerequisites": ["m1", "m2"]})
        progress = make_progress({"m1": "completed", "m2": "completed"})
        assert PathGenerator.is_module_unlocked(gated, progress, 2) is True

    def test_prerequisite_in_progress_keeps_lock(self, module, make_progress):
        gated = module.model_copy(update={"prerequisites": ["m1", "m2"]})
        progress = make_progress({"m1": "completed", "m2": "in-progress"})
        assert PathGenerator.is_module_unlocked(gated, progress, 2) is False

    def test_prerequisite_without_entry_keeps_lock(self, module, make_progress):
        gated = module.model_copy(update={"prerequisites": ["m1"]})
        progress = make_progress({module.id: "in-progress"})
        assert PathGenerator.is_module_unlocked(gated, progress, 2) is False

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("in-progress", True),
            ("completed", True),
            ("needs-revision", True),
            ("not-started", False),
        ],
    )
    def test_own_status_decides_without_prerequisites(self, module, make_progress, status, expected):
        progress = make_progress({module.id: status})
        assert PathGenerator.is_module_unlocked(module, progress, 2) is expected

    def test_known_odd_module_without_entry_counts_as_unlocked(self, module, make_progress):
        # Gating checks the module's own status rather than the previous module's
        # completion; a module with no entry has no status and opens. Kept as
        # observed until the product rule is clarified.
        progress = make_progress({"m1": "not-started"})
        assert PathGenerator.is_module_unlocked(module, progress, 2) is True


class TestEstimatedTime:
    @pytest.mark.parametrize(
        "pace,expected",
        [("slow", 45), ("normal", 30), ("fast", 21)],
    )
    def test_multipliers(self, pace, expected):
        assert PathGenerator.adjust_estimated_time(30, pace) == expected

    def test_unknown_pace_keeps_time(self):
        assert PathGenerator.adjust_estimated_time(30, "sprint") == 30

    def test_halves_round_up(self):
        assert PathGenerator.adjust_estimated_time(15, LearningPace.SLOW) == 23
        assert PathGenerator.adjust_estimated_time(5, LearningPace.SLOW) == 8

    @pytest.mark.parametrize("minutes", [0, 1, 7, 30, 45, 240])
    def test_normal_pace_is_identity(self, minutes):
        assert PathGenerator.adjust_estimated_time(minutes, LearningPace.NORMAL) == minutes


class TestGenerateAdaptivePath:
    @pytest.fixture
    def generator(self):
        return PathGenerator()

    @pytest.fixture
    def mixed_modules(self, make_modules):
        basics = make_modules(4, difficulty="beginner")
        basics[1] = basics[1].model_copy(update={"title": "Algorithm design"})
        advanced = [
            Module(
                id=f"a{i}",
                title=f"Deep dive {i}",
                difficulty_level="intermediate",
                estimated_time=30,
                order=4 + i,
            )
            for i in range(1, 5)
        ]
        return basics + advanced

    def test_advanced_learner_in_beginner_course(self, generator, advanced_profile, beginner_course, mixed_modules):
        view = generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules)
        path = view.adaptive_path

        assert path.starting_module == 4
        assert path.recommended_pace is LearningPace.FAST
        assert path.total_modules == 4
        assert [m.id for m in path.modules] == ["a1", "a2", "a3", "a4"]
        assert [m.is_unlocked for m in path.modules] == [True, False, False, False]
        assert [m.is_recommended for m in path.modules] == [True, True, True, False]
        assert all(m.estimated_time == 21 for m in path.modules)
        assert view.recommendations == [*ADVANCED_TIPS, FAST_CADENCE]

    def test_echoes_learner_and_course_context(self, generator, advanced_profile, beginner_course, mixed_modules):
        view = generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules)
        assert view.user.background is LearnerBackground.ADVANCED
        assert view.user.career_goal.value == "software-developer"
        assert view.user.performance_level is PerformanceLevel.AVERAGE
        assert (view.course.id, view.course.title) == ("c-101", "Python Foundations")
        assert view.course.difficulty is DifficultyLevel.BEGINNER

    def test_career_content_scans_all_modules(self, generator, advanced_profile, beginner_course, mixed_modules):
        view = generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules)
        # m2 is filtered out of the path but still career-relevant
        assert [r.id for r in view.adaptive_path.career_recommendations] == ["m2"]

    def test_progress_drives_filtering_and_gating(self, generator, beginner_course, make_modules, make_progress):
        profile = LearnerProfile(background="intermediate", career_goal="other")
        modules = make_modules(8)
        modules[5] = modules[5].model_copy(update={"prerequisites": ["m3", "m4"]})
        progress = make_progress({
            "m1": "in-progress",
            "m3": "completed",
            "m4": "not-started",
            "m5": "completed",
        })

        view = generator.generate_adaptive_path(profile, beginner_course, modules, progress)
        path = view.adaptive_path

        assert path.starting_module == 2
        assert [m.id for m in path.modules] == ["m1", "m3", "m4", "m5", "m6", "m7", "m8"]
        assert [m.is_unlocked for m in path.modules] == [True, True, False, True, False, True, True]
        assert path.recommended_pace is LearningPace.NORMAL
        assert path.career_recommendations == []
        assert view.recommendations == [NORMAL_CADENCE]

    def test_struggling_progress_slows_pace(self, generator, advanced_profile, beginner_course, mixed_modules, make_progress):
        progress = make_progress(performance_level="struggling")
        view = generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules, progress)
        assert view.user.performance_level is PerformanceLevel.STRUGGLING
        assert view.adaptive_path.recommended_pace is LearningPace.SLOW
        assert all(m.estimated_time == 45 for m in view.adaptive_path.modules)

    def test_modules_are_ordered_by_course_order(self, generator, beginner_course, make_modules):
        profile = LearnerProfile(background="beginner", career_goal="teacher")
        modules = list(reversed(make_modules(3)))
        view = generator.generate_adaptive_path(profile, beginner_course, modules)
        assert [m.order for m in view.adaptive_path.modules] == [1, 2, 3]

    def test_empty_course(self, generator, advanced_profile, beginner_course):
        view = generator.generate_adaptive_path(advanced_profile, beginner_course, [])
        assert view.adaptive_path.starting_module == 0
        assert view.adaptive_path.total_modules == 0
        assert view.adaptive_path.modules == []

    def test_recommended_count_is_configurable(self, advanced_profile, make_modules):
        course = Course(id="c", title="Advanced Topics", difficulty_level="advanced")
        generator = PathGenerator(recommended_count=1)
        view = generator.generate_adaptive_path(
            advanced_profile, course, make_modules(3, difficulty="advanced")
        )
        assert [m.is_recommended for m in view.adaptive_path.modules] == [True, False, False]

    def test_json_view_uses_camel_case(self, generator, advanced_profile, beginner_course, mixed_modules):
        data = generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules).to_json_dict()
        assert data["user"]["careerGoal"] == "software-developer"
        assert data["adaptivePath"]["startingModule"] == 4
        assert data["adaptivePath"]["recommendedPace"] == "fast"
        assert data["adaptivePath"]["modules"][0] == {
            "id": "a1",
            "title": "Deep dive 1",
            "order": 5,
            "difficulty": "intermediate",
            "isUnlocked": True,
            "isRecommended": True,
            "estimatedTime": 21,
        }
        assert data["adaptivePath"]["careerRecommendations"] == [
            {"id": "m2", "title": "Algorithm design", "relevance": "High"}
        ]

    def test_inputs_are_not_mutated(self, generator, advanced_profile, beginner_course, mixed_modules, make_progress):
        progress = make_progress({"m1": "in-progress"})
        before = [m.model_dump() for m in mixed_modules], progress.model_dump()
        generator.generate_adaptive_path(advanced_profile, beginner_course, mixed_modules, progress)
        assert ([m.model_dump() for m in mixed_modules], progress.model_dump()) == before


class TestInputValidation:
    def test_missing_profile(self, beginner_course):
        with pytest.raises(ValidationError, match="profile is required"):
            PathGenerator().generate_adaptive_path(None, beginner_course, [])

    def test_missing_course(self, advanced_profile):
        with pytest.raises(ValidationError, match="Course is required"):
            PathGenerator().generate_adaptive_path(advanced_profile, None, [])

    def test_missing_background(self, beginner_course):
        profile = LearnerProfile(career_goal="teacher")
        with pytest.raises(ValidationError, match="background"):
            PathGenerator().generate_adaptive_path(profile, beginner_course, [])

    def test_missing_career_goal(self, beginner_course):
        profile = LearnerProfile(background="beginner")
        with pytest.raises(ValidationError, match="careerGoal"):
            PathGenerator().generate_adaptive_path(profile, beginner_course, [])

    def test_missing_both_lists_both(self, beginner_course):
        with pytest.raises(ValidationError, match="background, careerGoal"):
            PathGenerator().generate_adaptive_path(LearnerProfile(), beginner_course, [])


def test_progress_status_lookup(make_progress):
    progress = make_progress({"m1": "completed"})
    assert progress.status_for("m1") is ProgressStatus.COMPLETED
    assert progress.status_for("m9") is None
    assert progress.has_started("m1") is True
    assert progress.has_started("m9") is False
