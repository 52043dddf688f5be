"""
Career-Relevant Content.

Matches course modules against a fixed keyword list per career goal. A module
qualifies when any keyword is a case-insensitive substring of its title or
description.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from src.adaptive.models import CareerGoal, CareerRecommendation, Module

DEFAULT_CAREER_CONTENT_LIMIT = 5


def career_keywords(career_goal: CareerGoal | str | None) -> tuple[str, ...]:
    """
    Keywords that mark a module as relevant for a career goal.

    Goals without a mapping (including OTHER) have no keywords.
    """
    if career_goal == CareerGoal.SOFTWARE_DEVELOPER:
        return ("algorithm", "data structure", "design pattern", "architecture")
    if career_goal == CareerGoal.DATA_ANALYST:
        return ("data", "analysis", "visualization", "statistics")
    if career_goal == CareerGoal.TEACHER:
        return ("pedagogy", "instruction", "assessment", "curriculum")
    if career_goal == CareerGoal.WEB_DEVELOPER:
        return ("html", "css", "javascript", "responsive", "frontend")
    if career_goal == CareerGoal.ML_ENGINEER:
        return ("machine learning", "neural network", "ai", "model")
    return ()


def matches_keywords(module: Module, keywords: Sequence[str]) -> bool:
    """Check a module's title and description for any keyword."""
    title = module.title.lower()
    description = module.description.lower()
    return any(keyword in title or keyword in description for keyword in keywords)


def get_career_specific_content(
    career_goal: CareerGoal | str | None,
    modules: Sequence[Module],
    limit: int = DEFAULT_CAREER_CONTENT_LIMIT,
) -> list[CareerRecommendation]:
    """
    Select modules relevant to a career goal.

    Args:
        career_goal: Learner's career goal
        modules: Course modules in course order
        limit: Maximum number of matches returned

    Returns:
        First ``limit`` matching modules, in module order, marked High relevance
    """
    keywords = career_keywords(career_goal)
    if not keywords:
        return []

    matched = [module for module in modules if matches_keywords(module, keywords)]
    logger.debug(
        f"Career content for {career_goal}: {len(matched)} of {len(modules)} modules match"
    )
    return [
        CareerRecommendation(id=module.id, title=module.title, relevance="High")
        for module in matched[:limit]
    ]
