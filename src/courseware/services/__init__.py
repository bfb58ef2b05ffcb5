"""Course, lesson and progress services."""

from .courses import CourseRegistry
from .lessons import LessonRegistry, lesson_key
from .progress import ProgressTracker, ResubmissionPolicy

__all__ = [
    "CourseRegistry",
    "LessonRegistry",
    "ProgressTracker",
    "ResubmissionPolicy",
    "lesson_key",
]
