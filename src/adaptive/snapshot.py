"""
Learner snapshots.

A snapshot is one learner's view of the store exported as JSON: profile,
course catalog, modules per course, progress records and recent checkpoint
answers (newest first). The CLI runs the engine over snapshots.

    {
        "learner": {"id": "u1", "background": "advanced", "careerGoal": "Web Developer"},
        "courses": [{"id": "c1", "title": "...", "difficultyLevel": "beginner"}],
        "modules": {"c1": [{"id": "m1", "title": "...", "difficultyLevel": "beginner", "order": 1}]},
        "progress": [{"courseId": "c1", "modulesProgress": [...]}],
        "answers": [{"questionId": "q1", "isCorrect": true, "timeSpentSeconds": 30}]
    }
"""

from __future__ import annotations

import json
from pathlib import Path

import pydantic
from loguru import logger
from pydantic import Field

from src.adaptive.errors import NotFoundError, SnapshotError
from src.adaptive.models import (
    AnswerRecord,
    Course,
    FrozenCamelModel,
    LearnerProfile,
    Module,
    ProgressRecord,
)


class LearnerSnapshot(FrozenCamelModel):
    """Store data for one learner."""

    learner: LearnerProfile
    courses: list[Course] = Field(default_factory=list)
    modules: dict[str, list[Module]] = Field(default_factory=dict)
    progress: list[ProgressRecord] = Field(default_factory=list)
    answers: list[AnswerRecord] = Field(default_factory=list)

    def get_course(self, course_id: str) -> Course:
        """
        Look up a course by id.

        Raises:
            NotFoundError: no course with that id
        """
        for course in self.courses:
            if course.id == course_id:
                return course
        raise NotFoundError(f"Course not found: {course_id}")

    def modules_for(self, course_id: str) -> list[Module]:
        return list(self.modules.get(course_id, []))

    def progress_for(self, course_id: str) -> ProgressRecord | None:
        """Progress record for a course; None when the learner is not enrolled."""
        for record in self.progress:
            if record.course_id == course_id:
                return record
        return None

    def enrolled_course_ids(self) -> set[str]:
        return {record.course_id for record in self.progress if record.course_id is not None}


def load_snapshot(path: Path | str) -> LearnerSnapshot:
    """
    Read and validate a snapshot file.

    Raises:
        NotFoundError: the file does not exist
        SnapshotError: the file cannot be read or does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Snapshot file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        snapshot = LearnerSnapshot.model_validate(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Could not read snapshot {path}: {e}") from e
    except pydantic.ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e.error_count()} validation error(s)\n{e}") from e

    logger.debug(
        f"Loaded snapshot {path}: {len(snapshot.courses)} courses, "
        f"{len(snapshot.progress)} progress records, {len(snapshot.answers)} answers"
    )
    return snapshot
