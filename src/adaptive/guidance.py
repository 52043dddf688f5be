"""
Learner guidance text.

Lines are appended in a fixed order: background tips, performance tips, then
exactly one weekly cadence suggestion for the pace.
"""

from __future__ import annotations

from src.adaptive.models import (
    LearnerBackground,
    LearnerProfile,
    LearningPace,
    PerformanceLevel,
    ProgressRecord,
)

BEGINNER_TIPS = (
    "Take your time with fundamentals - they are crucial for long-term success",
    "Practice with examples before moving to next topics",
)
ADVANCED_TIPS = (
    "Focus on advanced concepts and real-world applications",
    "Challenge yourself with complex projects",
)
STRUGGLING_TIPS = (
    "Review previous modules before continuing",
    "Consider slowing down and spending more time on practice",
    "Use hints and explanations in checkpoint questions",
)
EXCELLENT_TIPS = (
    "You are doing great! Consider exploring advanced topics",
    "Try completing bonus challenges",
)

SLOW_CADENCE = "Recommended: 2-3 modules per week"
NORMAL_CADENCE = "Recommended: 3-5 modules per week"
FAST_CADENCE = "Recommended: 5-7 modules per week"


def background_tips(background: LearnerBackground | str | None) -> tuple[str, ...]:
    if background == LearnerBackground.BEGINNER:
        return BEGINNER_TIPS
    if background == LearnerBackground.ADVANCED:
        return ADVANCED_TIPS
    return ()


def performance_tips(performance_level: PerformanceLevel | str | None) -> tuple[str, ...]:
    if performance_level == PerformanceLevel.STRUGGLING:
        return STRUGGLING_TIPS
    if performance_level == PerformanceLevel.EXCELLENT:
        return EXCELLENT_TIPS
    return ()


def cadence_for_pace(pace: LearningPace | str) -> str:
    """Weekly module target for a pace; anything but slow/fast gets the normal range."""
    if pace == LearningPace.SLOW:
        return SLOW_CADENCE
    if pace == LearningPace.FAST:
        return FAST_CADENCE
    return NORMAL_CADENCE


def generate_recommendations(
    profile: LearnerProfile,
    progress: ProgressRecord | None,
    pace: LearningPace | str,
) -> list[str]:
    """
    Build personalised recommendation lines.

    Args:
        profile: Learner profile (background decides the first block)
        progress: Progress record, None on first access
        pace: Recommended pace for the path

    Returns:
        Recommendation strings in display order
    """
    recommendations: list[str] = []
    recommendations.extend(background_tips(profile.background))
    if progress is not None:
        recommendations.extend(performance_tips(progress.performance_level))
    recommendations.append(cadence_for_pace(pace))
    return recommendations
