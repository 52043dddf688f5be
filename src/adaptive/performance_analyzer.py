"""
Performance Analyzer.

Classifies a learner from their most recent checkpoint answers:
- Success rate and average time per answer
- Performance level (struggling / average / excellent)
- Derived pace, kept consistent with path generation
- Weak areas: questions missed repeatedly

Results are returned to the caller, which owns persistence.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from src.adaptive.models import (
    AnswerRecord,
    LearnerProfile,
    LearningPace,
    PerformanceLevel,
    PerformanceUpdate,
    ProgressRecord,
)


@dataclass(frozen=True)
class PerformanceThresholds:
    """Classification thresholds. Rates are percentages, times are seconds."""

    excellent_success_rate: float = 85.0
    excellent_max_avg_seconds: float = 45.0
    struggling_success_rate: float = 60.0
    struggling_max_avg_seconds: float = 90.0
    window_size: int = 20
    weak_area_min_misses: int = 2
    weak_area_limit: int = 5


def classify_performance(
    success_rate: float,
    average_time_seconds: float,
    thresholds: PerformanceThresholds = PerformanceThresholds(),
) -> PerformanceLevel:
    """
    Classify performance; first match wins.

    excellent: rate >= 85 and average time < 45s
    struggling: rate < 60 or average time > 90s
    average: everything else
    """
    if (
        success_rate >= thresholds.excellent_success_rate
        and average_time_seconds < thresholds.excellent_max_avg_seconds
    ):
        return PerformanceLevel.EXCELLENT
    if (
        success_rate < thresholds.struggling_success_rate
        or average_time_seconds > thresholds.struggling_max_avg_seconds
    ):
        return PerformanceLevel.STRUGGLING
    return PerformanceLevel.AVERAGE


def pace_for_performance(performance_level: PerformanceLevel) -> LearningPace:
    if performance_level is PerformanceLevel.EXCELLENT:
        return LearningPace.FAST
    if performance_level is PerformanceLevel.STRUGGLING:
        return LearningPace.SLOW
    return LearningPace.NORMAL


def identify_weak_areas(
    answers: Sequence[AnswerRecord],
    min_misses: int = 2,
    limit: int = 5,
) -> list[str]:
    """
    Questions answered incorrectly at least ``min_misses`` times.

    Returns at most ``limit`` question ids, in the order each was first seen.
    """
    misses = Counter(answer.question_id for answer in answers if not answer.is_correct)
    return [question_id for question_id, count in misses.items() if count >= min_misses][:limit]


class PerformanceAnalyzer:
    """Analyse a rolling window of checkpoint answers."""

    def __init__(self, thresholds: PerformanceThresholds | None = None):
        self._thresholds = thresholds or PerformanceThresholds()

    @property
    def thresholds(self) -> PerformanceThresholds:
        return self._thresholds

    def analyze_performance(self, recent_answers: Sequence[AnswerRecord]) -> PerformanceUpdate:
        """
        Analyse the most recent answers, newest first.

        Args:
            recent_answers: Answer history, newest first; only the first
                ``window_size`` entries are used

        Returns:
            PerformanceUpdate, or an unchanged result when there are no answers
        """
        window = list(recent_answers[: self._thresholds.window_size])
        if not window:
            logger.debug("No recent answers; performance unchanged")
            return PerformanceUpdate.unchanged()

        correct = sum(1 for answer in window if answer.is_correct)
        success_rate = correct * 100 / len(window)
        average_time = sum(answer.time_spent_seconds for answer in window) / len(window)

        level = classify_performance(success_rate, average_time, self._thresholds)
        weak_areas = identify_weak_areas(
            window,
            min_misses=self._thresholds.weak_area_min_misses,
            limit=self._thresholds.weak_area_limit,
        )

        logger.info(
            f"Analyzed {len(window)} answers: {success_rate:.1f}% correct, "
            f"{average_time:.1f}s avg -> {level.value} ({len(weak_areas)} weak areas)"
        )

        return PerformanceUpdate(
            updated=True,
            performance_level=level,
            recommended_pace=pace_for_performance(level),
            weak_areas=weak_areas,
            success_rate=success_rate,
            average_time_seconds=average_time,
            answers_analyzed=len(window),
        )


def apply_performance_update(
    progress: ProgressRecord,
    update: PerformanceUpdate,
) -> ProgressRecord:
    """
    Return a copy of ``progress`` carrying the analysed values.

    Weak areas are replaced, not merged. An unchanged update returns the
    record as is.
    """
    if not update.updated:
        return progress
    return progress.model_copy(
        update={
            "performance_level": update.performance_level,
            "recommended_pace": update.recommended_pace,
            "weak_areas": list(update.weak_areas),
        }
    )


def apply_profile_update(
    profile: LearnerProfile,
    update: PerformanceUpdate,
) -> LearnerProfile:
    """
    Return a copy of ``profile`` with the success rate as its average quiz score.

    The score is learner-wide; progress records keep their own value. An
    unchanged update returns the profile as is.
    """
    if not update.updated:
        return profile
    return profile.model_copy(update={"average_quiz_score": update.success_rate})
