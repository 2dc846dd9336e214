"""MongoDB-backed stores. Each takes an explicit database handle."""

from .teachers import TeacherDirectory
from .students import StudentDirectory
from .marks import MarkStore, KEY_FIELDS
from .homework import HomeworkStore
from .feedback import FeedbackStore

__all__ = [
    "TeacherDirectory",
    "StudentDirectory",
    "MarkStore",
    "KEY_FIELDS",
    "HomeworkStore",
    "FeedbackStore"
]
