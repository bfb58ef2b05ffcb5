"""
Courseware backend
Courses, lessons and learner progress over GraphQL
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
