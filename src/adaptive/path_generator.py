"""
Adaptive Path Generator.

Builds a learner's path through a course from:
- Declared background (starting point, module filtering)
- Recent performance level (pace)
- Module progress and prerequisites (unlock gating)
- Career goal (career-relevant modules, guidance)

Everything here is a pure function of its inputs; nothing is persisted.
"""
from __future__ import annotations

import math
from collections.abc import Sequence

from loguru import logger

from src.adaptive.career_content import (
    DEFAULT_CAREER_CONTENT_LIMIT,
    get_career_specific_content,
)
from src.adaptive.errors import ValidationError
from src.adaptive.guidance import generate_recommendations
from src.adaptive.models import (
    AdaptiveModule,
    AdaptivePath,
    AdaptivePathView,
    CareerGoal,
    Course,
    CourseContext,
    DifficultyLevel,
    LearnerBackground,
    LearnerContext,
    LearnerProfile,
    LearningPace,
    Module,
    PerformanceLevel,
    ProgressRecord,
    ProgressStatus,
)

DEFAULT_RECOMMENDED_COUNT = 3

# Fraction of a course's modules skipped for (background, course difficulty)
_SKIP_FRACTIONS: dict[tuple[LearnerBackground, DifficultyLevel], float] = {
    (LearnerBackground.INTERMEDIATE, DifficultyLevel.BEGINNER): 0.25,
    (LearnerBackground.ADVANCED, DifficultyLevel.BEGINNER): 0.5,
    (LearnerBackground.ADVANCED, DifficultyLevel.INTERMEDIATE): 0.25,
}


class PathGenerator:
    """
    Generate adaptive learning paths.

    Holds only the display limits; the decision helpers are static so they can
    be exercised on their own.
    """

    def __init__(
        self,
        recommended_count: int = DEFAULT_RECOMMENDED_COUNT,
        career_content_limit: int = DEFAULT_CAREER_CONTENT_LIMIT,
    ):
        self._recommended_count = recommended_count
        self._career_content_limit = career_content_limit

    def generate_adaptive_path(
        self,
        profile: LearnerProfile | None,
        course: Course | None,
        modules: Sequence[Module],
        progress: ProgressRecord | None = None,
    ) -> AdaptivePathView:
        """
        Generate the personalised path for a learner in a course.

        Args:
            profile: Learner profile; background and career goal are required
            course: Course being studied
            modules: All modules of the course
            progress: Learner's progress record, None on first access

        Returns:
            AdaptivePathView with learner/course context, path and guidance

        Raises:
            ValidationError: profile or course missing, or profile lacks
                background or career goal
        """
        background, career_goal = self.require_personalization(profile)
        if course is None:
            raise ValidationError("Course is required to generate an adaptive path")

        ordered = self.order_modules(modules)
        performance_level = (
            progress.performance_level if progress is not None else PerformanceLevel.AVERAGE
        )

        start_index = self.determine_starting_point(
            background, course.difficulty_level, len(ordered)
        )
        pace = self.determine_recommended_pace(background, performance_level)
        path_modules = self.filter_modules_for_learner(ordered, start_index, background, progress)

        annotated = [
            AdaptiveModule(
                id=module.id,
                title=module.title,
                order=module.order,
                difficulty=module.difficulty_level,
                is_unlocked=self.is_module_unlocked(module, progress, index),
                is_recommended=index < self._recommended_count,
                estimated_time=self.adjust_estimated_time(module.estimated_time, pace),
            )
            for index, module in enumerate(path_modules)
        ]
        career_recommendations = get_career_specific_content(
            career_goal, ordered, limit=self._career_content_limit
        )

        logger.info(
            f"Generated path for course {course.id}: start={start_index}, pace={pace.value}, "
            f"{len(annotated)}/{len(ordered)} modules, "
            f"{sum(m.is_unlocked for m in annotated)} unlocked"
        )

        return AdaptivePathView(
            user=LearnerContext(
                background=background,
                career_goal=career_goal,
                performance_level=performance_level,
            ),
            course=CourseContext(
                id=course.id,
                title=course.title,
                difficulty=course.difficulty_level,
            ),
            adaptive_path=AdaptivePath(
                starting_module=start_index,
                recommended_pace=pace,
                total_modules=len(annotated),
                modules=annotated,
                career_recommendations=career_recommendations,
            ),
            recommendations=generate_recommendations(profile, progress, pace),
        )

    # ========================================
    # Input boundary
    # ========================================

    @staticmethod
    def require_personalization(
        profile: LearnerProfile | None,
    ) -> tuple[LearnerBackground, CareerGoal]:
        """
        Return the background and career goal, failing fast when absent.

        Raises:
            ValidationError: profile missing or incomplete
        """
        if profile is None:
            raise ValidationError("Learner profile is required to generate an adaptive path")
        missing = [
            name
            for name, value in (("background", profile.background), ("careerGoal", profile.career_goal))
            if value is None
        ]
        if missing:
            raise ValidationError(f"Learner profile is missing {', '.join(missing)}")
        return profile.background, profile.career_goal

    @staticmethod
    def order_modules(modules: Sequence[Module]) -> list[Module]:
        """Sort modules by their course order."""
        ordered = sorted(modules, key=lambda m: m.order)
        orders = [m.order for m in ordered]
        if len(set(orders)) != len(orders):
            logger.warning(f"Duplicate module orders in course: {orders}")
        return ordered

    # ========================================
    # Decision helpers
    # ========================================

    @staticmethod
    def determine_starting_point(
        background: LearnerBackground | str,
        course_difficulty: DifficultyLevel | str,
        module_count: int,
    ) -> int:
        """
        Index of the first module a learner should take.

        Beginners always start at 0. Experienced learners skip a fraction of
        easier courses: intermediate skips 25% of a beginner course, advanced
        skips 50% of a beginner course and 25% of an intermediate one.
        Unrecognised backgrounds start at 0.
        """
        fraction = 0.0
        for (known_background, known_difficulty), skip in _SKIP_FRACTIONS.items():
            if background == known_background and course_difficulty == known_difficulty:
                fraction = skip
                break
        start = math.floor(module_count * fraction)
        logger.debug(
            f"Starting point for {background}/{course_difficulty} over {module_count} modules: {start}"
        )
        return start

    @staticmethod
    def determine_recommended_pace(
        background: LearnerBackground | str,
        performance_level: PerformanceLevel | str,
    ) -> LearningPace:
        """Pick a pace; performance outranks background."""
        if performance_level == PerformanceLevel.STRUGGLING:
            return LearningPace.SLOW
        if performance_level == PerformanceLevel.EXCELLENT:
            return LearningPace.FAST
        if background == LearnerBackground.BEGINNER:
            return LearningPace.SLOW
        if background == LearnerBackground.ADVANCED:
            return LearningPace.FAST
        return LearningPace.NORMAL

    @staticmethod
    def filter_modules_for_learner(
        modules: Sequence[Module],
        start_index: int,
        background: LearnerBackground | str,
        progress: ProgressRecord | None,
    ) -> list[Module]:
        """
        Select the modules that make up the learner's path.

        Beginners get every module from ``start_index`` on. For other learners
        a module already started is always kept, wherever it sits; otherwise
        modules before ``start_index`` are dropped, and advanced learners also
        lose beginner-level modules.
        """
        if background == LearnerBackground.BEGINNER:
            return list(modules[start_index:])

        selected = []
        for index, module in enumerate(modules):
            if progress is not None and progress.has_started(module.id):
                selected.append(module)
                continue
            if index < start_index:
                continue
            if (
                background == LearnerBackground.ADVANCED
                and module.difficulty_level == DifficultyLevel.BEGINNER
            ):
                continue
            selected.append(module)

        logger.debug(f"Filtered {len(modules)} modules to {len(selected)} for {background}")
        return selected

    @staticmethod
    def is_module_unlocked(
        module: Module,
        progress: ProgressRecord | None,
        index: int,
    ) -> bool:
        """
        Check whether a module at ``index`` of the path is open to the learner.

        Gating:
        - The first module of the path is always unlocked
        - Without a progress record everything else is locked
        - Declared prerequisites must all be completed
        - Otherwise the module's own status must not be not-started; a module
          with no progress entry has no status and counts as unlocked
        """
        if index == 0:
            return True
        if progress is None:
            return False

        if module.prerequisites:
            return all(
                progress.status_for(prereq_id) is ProgressStatus.COMPLETED
                for prereq_id in module.prerequisites
            )

        # NOTE: looks at this module's own status, not the previous module's
        return progress.status_for(module.id) is not ProgressStatus.NOT_STARTED

    @staticmethod
    def adjust_estimated_time(base_minutes: float, pace: LearningPace | str) -> int:
        """Scale a module's estimated minutes by pace, rounding half up."""
        if pace == LearningPace.SLOW:
            multiplier = 1.5
        elif pace == LearningPace.FAST:
            multiplier = 0.7
        else:
            multiplier = 1.0
        return math.floor(base_minutes * multiplier + 0.5)
