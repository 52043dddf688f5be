"""
Course Recommender.

Suggests published courses a learner is not enrolled in, matched to their
background and career goal and ranked by rating, then enrollment.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable

from loguru import logger

from src.adaptive.models import (
    CareerGoal,
    Course,
    DifficultyLevel,
    LearnerBackground,
    LearnerProfile,
)

DEFAULT_RECOMMENDATION_LIMIT = 10


def allowed_difficulties(background: LearnerBackground | str | None) -> frozenset[DifficultyLevel] | None:
    """
    Course difficulties suitable for a background.

    Returns None when any difficulty is acceptable.
    """
    if background == LearnerBackground.BEGINNER:
        return frozenset({DifficultyLevel.BEGINNER})
    if background == LearnerBackground.ADVANCED:
        return frozenset({DifficultyLevel.INTERMEDIATE, DifficultyLevel.ADVANCED})
    return None


def recommend_courses(
    profile: LearnerProfile,
    all_published_courses: Iterable[Course],
    excluded_course_ids: Collection[str] = (),
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> list[Course]:
    """
    Recommend courses for a learner.

    Args:
        profile: Learner profile
        all_published_courses: Candidate catalog
        excluded_course_ids: Courses the learner is already enrolled in
        limit: Maximum courses returned

    Returns:
        Matching courses sorted by (average rating, enrolled students), descending
    """
    difficulties = allowed_difficulties(profile.background)
    career_goal = profile.career_goal
    excluded = set(excluded_course_ids)

    candidates = []
    for course in all_published_courses:
        if not course.is_published or course.id in excluded:
            continue
        if difficulties is not None and course.difficulty_level not in difficulties:
            continue
        if career_goal is not None and career_goal is not CareerGoal.OTHER:
            if career_goal not in course.career_goals:
                continue
        candidates.append(course)

    candidates.sort(key=lambda c: (c.average_rating, c.enrolled_students), reverse=True)
    logger.debug(
        f"Course recommendation for {profile.background}/{career_goal}: "
        f"{len(candidates)} candidates, returning {min(len(candidates), limit)}"
    )
    return candidates[:limit]
