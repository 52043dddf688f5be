"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.adaptive.models import (  # noqa: E402
    AnswerRecord,
    Course,
    LearnerProfile,
    Module,
    ModuleProgress,
    ProgressRecord,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


def build_modules(count, difficulty="beginner", minutes=30):
    """Modules m1..mN in order, all at one difficulty."""
    return [
        Module(
            id=f"m{i}",
            title=f"Module {i}",
            description=f"Lesson block {i}",
            difficulty_level=difficulty,
            estimated_time=minutes,
            order=i,
        )
        for i in range(1, count + 1)
    ]


def build_answers(correct, total, seconds=30.0):
    """``total`` answers, the first ``correct`` of them right, each on its own question."""
    return [
        AnswerRecord(question_id=f"q{i}", is_correct=i < correct, time_spent_seconds=seconds)
        for i in range(total)
    ]


def build_progress(statuses=None, **kwargs):
    """Progress record from a {module_id: status} mapping."""
    entries = [
        ModuleProgress(module_id=module_id, status=status)
        for module_id, status in (statuses or {}).items()
    ]
    return ProgressRecord(modules_progress=entries, **kwargs)


@pytest.fixture
def beginner_course():
    return Course(id="c-101", title="Python Foundations", difficulty_level="beginner")


@pytest.fixture
def advanced_profile():
    return LearnerProfile(id="u1", background="advanced", career_goal="software-developer")


@pytest.fixture
def sample_snapshot():
    """Snapshot document as exported from the store (camelCase keys)."""
    return {
        "learner": {
            "id": "u1",
            "name": "Sam Learner",
            "background": "intermediate",
            "careerGoal": "Web Developer",
        },
        "courses": [
            {
                "id": "c-web",
                "title": "Web Foundations",
                "difficultyLevel": "beginner",
                "careerGoals": ["Web Developer"],
                "averageRating": 4.6,
                "enrolledStudents": 1200,
            },
            {
                "id": "c-react",
                "title": "React in Practice",
                "difficultyLevel": "intermediate",
                "careerGoals": ["Web Developer"],
                "averageRating": 4.8,
                "enrolledStudents": 800,
            },
            {
                "id": "c-ml",
                "title": "Intro to ML",
                "difficultyLevel": "intermediate",
                "careerGoals": ["ML Engineer"],
                "averageRating": 4.9,
                "enrolledStudents": 3000,
            },
        ],
        "modules": {
            "c-web": [
                {"id": "w1", "title": "HTML basics", "description": "Tags and documents",
                 "difficultyLevel": "beginner", "estimatedTime": 20, "order": 1},
                {"id": "w2", "title": "Styling pages", "description": "Responsive CSS layouts",
                 "difficultyLevel": "beginner", "estimatedTime": 30, "order": 2},
                {"id": "w3", "title": "Forms", "description": "Collecting input",
                 "difficultyLevel": "intermediate", "estimatedTime": 40, "order": 3},
                {"id": "w4", "title": "Deploying", "description": "Shipping a site",
                 "difficultyLevel": "intermediate", "estimatedTime": 50, "order": 4},
            ],
        },
        "progress": [
            {
                "courseId": "c-web",
                "performanceLevel": "average",
                "recommendedPace": "normal",
                "modulesProgress": [{"moduleId": "w1", "status": "completed"}],
            },
        ],
        "answers": [
            {"questionId": "q1", "isCorrect": True, "timeSpentSeconds": 20},
            {"questionId": "q2", "isCorrect": True, "timeSpentSeconds": 25},
            {"questionId": "q3", "isCorrect": False, "timeSpentSeconds": 60},
            {"questionId": "q3", "isCorrect": False, "timeSpentSeconds": 70},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path, sample_snapshot):
    path = tmp_path / "learner.json"
    path.write_text(json.dumps(sample_snapshot), encoding="utf-8")
    return path


@pytest.fixture
def make_modules():
    return build_modules


@pytest.fixture
def make_answers():
    return build_answers


@pytest.fixture
def make_progress():
    return build_progress
