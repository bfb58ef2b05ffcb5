"""
Request-level errors raised by the mutation layer.

Every error carries a stable ``code`` that the GraphQL layer copies into the
error's ``extensions`` so clients can branch without parsing messages.
"""


class CoursewareError(Exception):
    """Base class for client-facing errors."""

    code = "COURSEWARE_ERROR"


class Unauthorized(CoursewareError):
    """Raised when a gated operation is called without the required role."""

    code = "UNAUTHORIZED"


class InvalidArgument(CoursewareError):
    """Raised when an argument is present but unusable."""

    code = "INVALID_ARGUMENT"


class LessonNotFound(CoursewareError):
    code = "LESSON_NOT_FOUND"

    def __init__(self, course_id: str, lesson_id: str):
        self.course_id = course_id
        self.lesson_id = lesson_id
        super().__init__(f"Lesson '{lesson_id}' not found in course '{course_id}'")


class StepNotFound(CoursewareError):
    code = "STEP_NOT_FOUND"

    def __init__(self, lesson_id: str, step_id: str):
        self.lesson_id = lesson_id
        self.step_id = step_id
        super().__init__(f"Step '{step_id}' not found in lesson '{lesson_id}'")


class NotMultipleChoice(CoursewareError):
    code = "NOT_MULTIPLE_CHOICE"

    def __init__(self, step_id: str, step_type: str | None):
        self.step_id = step_id
        self.step_type = step_type
        super().__init__(f"Step type is not MCQ but {step_type}")


class AlreadyAnswered(CoursewareError):
    code = "ALREADY_ANSWERED"

    def __init__(self, step_id: str):
        self.step_id = step_id
        super().__init__(f"Step '{step_id}' has already been answered")
