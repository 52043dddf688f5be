"""
Adaptive Learning Engine.

Orchestration layer over the path generator, performance analyzer and course
recommender. An engine holds only immutable configuration, so callers create
one per request (``LearningEngine.from_settings()``) instead of sharing a
global instance.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from config import Settings, get_settings
from src.adaptive.course_recommender import recommend_courses
from src.adaptive.models import (
    AdaptivePathView,
    AnswerRecord,
    Course,
    CourseRecommendations,
    LearnerProfile,
    Module,
    PerformanceUpdate,
    ProgressRecord,
    RecommendationBasis,
)
from src.adaptive.path_generator import PathGenerator
from src.adaptive.performance_analyzer import (
    PerformanceAnalyzer,
    PerformanceThresholds,
    apply_performance_update,
    apply_profile_update,
)


class LearningEngine:
    """Entry point for adaptive path, performance and course recommendations."""

    def __init__(
        self,
        path_generator: PathGenerator | None = None,
        performance_analyzer: PerformanceAnalyzer | None = None,
        course_limit: int = 10,
    ):
        self._paths = path_generator or PathGenerator()
        self._analyzer = performance_analyzer or PerformanceAnalyzer()
        self._course_limit = course_limit

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LearningEngine:
        """Build an engine from application settings."""
        settings = settings or get_settings()
        thresholds = PerformanceThresholds(
            excellent_success_rate=settings.excellent_success_rate,
            excellent_max_avg_seconds=settings.excellent_max_avg_seconds,
            struggling_success_rate=settings.struggling_success_rate,
            struggling_max_avg_seconds=settings.struggling_max_avg_seconds,
            window_size=settings.answer_window_size,
            weak_area_min_misses=settings.weak_area_min_misses,
            weak_area_limit=settings.weak_area_limit,
        )
        return cls(
            path_generator=PathGenerator(
                recommended_count=settings.recommended_module_count,
                career_content_limit=settings.career_content_limit,
            ),
            performance_analyzer=PerformanceAnalyzer(thresholds),
            course_limit=settings.course_recommendation_limit,
        )

    def generate_adaptive_path(
        self,
        profile: LearnerProfile | None,
        course: Course | None,
        modules: Sequence[Module],
        progress: ProgressRecord | None = None,
    ) -> AdaptivePathView:
        return self._paths.generate_adaptive_path(profile, course, modules, progress)

    def analyze_performance(self, recent_answers: Sequence[AnswerRecord]) -> PerformanceUpdate:
        return self._analyzer.analyze_performance(recent_answers)

    def update_progress(
        self,
        progress: ProgressRecord,
        recent_answers: Sequence[AnswerRecord],
    ) -> tuple[ProgressRecord, PerformanceUpdate]:
        """
        Analyse answers and apply the result to a progress record.

        Returns:
            Tuple of (updated progress record, performance update)
        """
        update = self.analyze_performance(recent_answers)
        return apply_performance_update(progress, update), update

    def update_learner(
        self,
        profile: LearnerProfile,
        progress: ProgressRecord,
        recent_answers: Sequence[AnswerRecord],
    ) -> tuple[LearnerProfile, ProgressRecord, PerformanceUpdate]:
        """
        Analyse answers and apply the result to both the profile and the course progress.

        Returns:
            Tuple of (updated profile, updated progress record, performance update)
        """
        updated_progress, update = self.update_progress(progress, recent_answers)
        return apply_profile_update(profile, update), updated_progress, update

    def recommend_courses(
        self,
        profile: LearnerProfile,
        all_published_courses: Iterable[Course],
        excluded_course_ids: Collection[str] = (),
    ) -> CourseRecommendations:
        """Recommend courses along with the profile fields they were based on."""
        courses = recommend_courses(
            profile,
            all_published_courses,
            excluded_course_ids,
            limit=self._course_limit,
        )
        return CourseRecommendations(
            recommendation_basis=RecommendationBasis(
                background=profile.background,
                career_goal=profile.career_goal,
            ),
            courses=courses,
        )
