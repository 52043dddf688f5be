"""
Adaptive Engine Data Models.

Inputs (profiles, courses, modules, progress, answers) are handed over by the
external store and are frozen: the engine reads them and returns new values.
Outputs are the structures served to the front end.

All models serialise with camelCase aliases (``startingModule``,
``isUnlocked``) and accept either camelCase or snake_case on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ============================================================================
# Enumerations
# ============================================================================


class LearnerBackground(str, Enum):
    """Self-declared prior experience of a learner."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CareerGoal(str, Enum):
    """Career a learner is working towards."""

    SOFTWARE_DEVELOPER = "software-developer"
    DATA_ANALYST = "data-analyst"
    TEACHER = "teacher"
    WEB_DEVELOPER = "web-developer"
    ML_ENGINEER = "ml-engineer"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> CareerGoal | None:
        # Stored documents use display names ("Software Developer", "ML Engineer")
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        if self is CareerGoal.ML_ENGINEER:
            return "ML Engineer"
        return self.value.replace("-", " ").title()


class DifficultyLevel(str, Enum):
    """Difficulty of a course or module."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PerformanceLevel(str, Enum):
    """Classification of recent checkpoint performance."""

    STRUGGLING = "struggling"
    AVERAGE = "average"
    EXCELLENT = "excellent"

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            PerformanceLevel.STRUGGLING: "red",
            PerformanceLevel.AVERAGE: "yellow",
            PerformanceLevel.EXCELLENT: "green",
        }[self]


class LearningPace(str, Enum):
    """Recommended rate of progress through a course."""

    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class ProgressStatus(str, Enum):
    """Progress state of a module for one learner."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    NEEDS_REVISION = "needs-revision"


# ============================================================================
# Base Models
# ============================================================================


class CamelModel(BaseModel):
    """Base for output models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")


class FrozenCamelModel(CamelModel):
    """Base for input models, which the engine never mutates."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# Inputs
# ============================================================================


class LearnerProfile(FrozenCamelModel):
    """
    Learner personalization data.

    ``background`` and ``career_goal`` are optional here because the store
    allows accounts without them; path generation validates their presence.
    """

    id: str | None = None
    name: str | None = None
    background: LearnerBackground | None = None
    career_goal: CareerGoal | None = None
    average_quiz_score: float | None = None

    @field_validator("career_goal", mode="before")
    @classmethod
    def _normalize_career_goal(cls, value: Any) -> Any:
        if value is None or isinstance(value, CareerGoal):
            return value
        return CareerGoal(value)


class Course(FrozenCamelModel):
    """Course summary as stored in the catalog."""

    id: str
    title: str
    difficulty_level: DifficultyLevel
    career_goals: list[CareerGoal] = Field(default_factory=list)
    average_rating: float = 0.0
    enrolled_students: int = 0
    is_published: bool = True

    @field_validator("career_goals", mode="before")
    @classmethod
    def _normalize_career_goals(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set)):
            return [g if isinstance(g, CareerGoal) else CareerGoal(g) for g in value]
        return value


class Module(FrozenCamelModel):
    """One module of a course."""

    id: str
    title: str
    description: str = ""
    difficulty_level: DifficultyLevel
    estimated_time: float = Field(default=0, ge=0)  # minutes
    order: int = Field(ge=1)
    prerequisites: list[str] = Field(default_factory=list)


class ModuleProgress(FrozenCamelModel):
    """Progress entry for one module."""

    module_id: str
    status: ProgressStatus = ProgressStatus.NOT_STARTED


class ProgressRecord(FrozenCamelModel):
    """A learner's progress in one course."""

    course_id: str | None = None
    performance_level: PerformanceLevel = PerformanceLevel.AVERAGE
    recommended_pace: LearningPace = LearningPace.NORMAL
    modules_progress: list[ModuleProgress] = Field(default_factory=list)
    weak_areas: list[str] = Field(default_factory=list)
    average_quiz_score: float = 0.0

    def status_for(self, module_id: str) -> ProgressStatus | None:
        """Return the status recorded for a module, or None without an entry."""
        for entry in self.modules_progress:
            if entry.module_id == module_id:
                return entry.status
        return None

    def has_started(self, module_id: str) -> bool:
        """Check whether the module has an entry beyond not-started."""
        status = self.status_for(module_id)
        return status is not None and status is not ProgressStatus.NOT_STARTED


class AnswerRecord(FrozenCamelModel):
    """One checkpoint answer."""

    question_id: str
    is_correct: bool
    time_spent_seconds: float = Field(default=0, ge=0)


# ============================================================================
# Outputs
# ============================================================================


class AdaptiveModule(CamelModel):
    """A module annotated for one learner's path."""

    id: str
    title: str
    order: int
    difficulty: DifficultyLevel
    is_unlocked: bool
    is_recommended: bool
    estimated_time: int


class CareerRecommendation(CamelModel):
    """A module relevant to the learner's career goal."""

    id: str
    title: str
    relevance: str = "High"


class AdaptivePath(CamelModel):
    """Body of a generated path."""

    starting_module: int
    recommended_pace: LearningPace
    total_modules: int
    modules: list[AdaptiveModule] = Field(default_factory=list)
    career_recommendations: list[CareerRecommendation] = Field(default_factory=list)


class LearnerContext(CamelModel):
    background: LearnerBackground
    career_goal: CareerGoal
    performance_level: PerformanceLevel


class CourseContext(CamelModel):
    id: str
    title: str
    difficulty: DifficultyLevel


class AdaptivePathView(CamelModel):
    """Full response for one learner in one course."""

    user: LearnerContext
    course: CourseContext
    adaptive_path: AdaptivePath
    recommendations: list[str] = Field(default_factory=list)


class PerformanceUpdate(CamelModel):
    """
    Result of analysing recent answers.

    ``updated`` is False when there was nothing to analyse; the other fields
    are then empty and the caller keeps its stored values.
    """

    updated: bool
    performance_level: PerformanceLevel | None = None
    recommended_pace: LearningPace | None = None
    weak_areas: list[str] = Field(default_factory=list)
    success_rate: float | None = None
    average_time_seconds: float | None = None
    answers_analyzed: int = 0

    @classmethod
    def unchanged(cls) -> PerformanceUpdate:
        return cls(updated=False)


class RecommendationBasis(CamelModel):
    background: LearnerBackground | None = None
    career_goal: CareerGoal | None = None


class CourseRecommendations(CamelModel):
    """Courses recommended to a learner and the profile they are based on."""

    recommendation_basis: RecommendationBasis
    courses: list[Course] = Field(default_factory=list)
