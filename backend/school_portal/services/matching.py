"""
Assignment matching - decides whether a (class, section, subject) triple
entered in the UI refers to one of a teacher's teaching assignments.

Two normalizers are applied independently:

- loose: NFC, whitespace collapsed, trimmed, lowercased
- alnum: loose, then everything except a-z and 0-9 removed

An assignment matches when all three fields agree under the same normalizer.
Each assignment is checked wholly under loose rules first, then wholly under
alnum rules; fields are never compared under mixed rules.
"""

import logging
import re
import unicodedata
from typing import Any, Callable, Iterable, Optional

from ..errors import Forbidden, NotFound
from ..models import TeacherProfile, TeachingAssignment

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

Normalizer = Callable[[Any], str]


def normalize_loose(value: Any) -> str:
    if value is None:
        return ""
    text = unicodedata.normalize("NFC", str(value))
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def normalize_alnum(value: Any) -> str:
    return _NON_ALNUM_RE.sub("", normalize_loose(value))


NORMALIZERS = (normalize_loose, normalize_alnum)


def matches_assignment(
    assignment: TeachingAssignment,
    class_name: Any,
    section: Any,
    subject: Any,
    normalize: Normalizer
) -> bool:
    """All three fields equal under one normalizer."""
    return (
        normalize(assignment.class_name) == normalize(class_name)
        and normalize(assignment.section) == normalize(section)
        and normalize(assignment.subject) == normalize(subject)
    )


def find_matching_assignment(
    assignments: Iterable[TeachingAssignment],
    class_name: Any,
    section: Any,
    subject: Any
) -> Optional[TeachingAssignment]:
    """Return the first assignment matching under either pass, else None."""
    for assignment in assignments:
        for normalize in NORMALIZERS:
            if matches_assignment(assignment, class_name, section, subject, normalize):
                return assignment
    return None


class AssignmentAuthorizer:
    """Checks a teacher against their teaching assignments."""

    def __init__(self, teachers):
        self.teachers = teachers

    async def authorize(
        self,
        teacher_id: str,
        class_name: str,
        section: str,
        subject: str
    ) -> TeacherProfile:
        """
        Return the teacher's profile if they teach the triple.

        Raises:
            NotFound: teacher does not exist
            Forbidden: no assignment matches under either normalization pass
        """
        teacher = await self.teachers.get_teacher(teacher_id)
        if teacher is None:
            raise NotFound("Teacher not found")

        if find_matching_assignment(teacher.assignments, class_name, section, subject) is None:
            logger.warning(
                f"Teacher {teacher_id} is not assigned to "
                f"class={class_name!r} section={section!r} subject={subject!r}"
            )
            raise Forbidden("You are not assigned to this class, section and subject")

        return teacher
