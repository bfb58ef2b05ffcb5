from .course import Course, Lesson
from .step import Step, StepInput

__all__ = ["Course", "Lesson", "Step", "StepInput"]
