"""
Adaptive Learning Engine.

Personalised course paths from learner background, career goal and recent
checkpoint performance.

Components:
- PathGenerator: Starting point, pace, module filtering and unlock gating
- PerformanceAnalyzer: Classifies recent answers and finds weak areas
- recommend_courses: Background/career matched course suggestions
- LearningEngine: Main orchestration layer
"""
from src.adaptive.career_content import career_keywords, get_career_specific_content
from src.adaptive.course_recommender import recommend_courses
from src.adaptive.errors import (
    AdaptiveEngineError,
    NotFoundError,
    SnapshotError,
    ValidationError,
)
from src.adaptive.guidance import generate_recommendations
from src.adaptive.learning_engine import LearningEngine
from src.adaptive.models import (
    AdaptiveModule,
    AdaptivePath,
    AdaptivePathView,
    AnswerRecord,
    CareerGoal,
    CareerRecommendation,
    Course,
    CourseRecommendations,
    DifficultyLevel,
    LearnerBackground,
    LearnerProfile,
    LearningPace,
    Module,
    ModuleProgress,
    PerformanceLevel,
    PerformanceUpdate,
    ProgressRecord,
    ProgressStatus,
)
from src.adaptive.path_generator import PathGenerator
from src.adaptive.performance_analyzer import (
    PerformanceAnalyzer,
    PerformanceThresholds,
    apply_performance_update,
    apply_profile_update,
    classify_performance,
)
from src.adaptive.snapshot import LearnerSnapshot, load_snapshot

__all__ = [
    # Main engine
    "LearningEngine",
    # Component classes
    "PathGenerator",
    "PerformanceAnalyzer",
    "PerformanceThresholds",
    # Functions
    "apply_performance_update",
    "apply_profile_update",
    "career_keywords",
    "classify_performance",
    "generate_recommendations",
    "get_career_specific_content",
    "recommend_courses",
    "load_snapshot",
    # Data models
    "AdaptiveModule",
    "AdaptivePath",
    "AdaptivePathView",
    "AnswerRecord",
    "CareerRecommendation",
    "Course",
    "CourseRecommendations",
    "LearnerProfile",
    "LearnerSnapshot",
    "Module",
    "ModuleProgress",
    "PerformanceUpdate",
    "ProgressRecord",
    # Enums
    "CareerGoal",
    "DifficultyLevel",
    "LearnerBackground",
    "LearningPace",
    "PerformanceLevel",
    "ProgressStatus",
    # Errors
    "AdaptiveEngineError",
    "NotFoundError",
    "SnapshotError",
    "ValidationError",
]
