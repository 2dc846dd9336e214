"""
Teacher feedback on students.

A teacher writes one feedback per student and class, optionally narrowed to a
section and subject; writing again for the same key overwrites it. Students
and parents only see feedback flagged visible to them.
"""

import logging
from typing import List, Optional, Tuple

from bson import ObjectId

from ..errors import Forbidden, InvalidRequest, NotFound
from ..models import Feedback, FeedbackCreate
from ..utils import as_object_id, to_trimmed_str

logger = logging.getLogger(__name__)


def _required_id(value: Optional[str], label: str) -> ObjectId:
    if not to_trimmed_str(value):
        raise InvalidRequest(f"{label} required")
    oid = as_object_id(value)
    if oid is None:
        raise InvalidRequest(f"Invalid {label}")
    return oid


class FeedbackService:

    def __init__(self, teachers, students, feedback):
        self.teachers = teachers
        self.students = students
        self.feedback = feedback

    async def save_feedback(self, request: FeedbackCreate) -> Tuple[Feedback, bool]:
        """
        Create or overwrite feedback for a student.

        The parent is taken from ``parentId`` when it is a valid id, otherwise
        looked up by the student's ``parentEmail``.

        Raises:
            InvalidRequest: a required field is missing or an id is malformed
            Forbidden: the teacher does not exist
            NotFound: the student does not exist
        """
        teacher_id = to_trimmed_str(request.teacher_id)
        student_id = to_trimmed_str(request.student_id)
        class_name = to_trimmed_str(request.class_name)
        section = to_trimmed_str(request.section)
        subject = to_trimmed_str(request.subject)
        text = to_trimmed_str(request.feedback)

        if not (teacher_id and student_id and class_name and text):
            raise InvalidRequest("teacherId, studentId, class, and feedback are required")

        teacher_oid = as_object_id(teacher_id)
        student_oid = as_object_id(student_id)
        if teacher_oid is None or student_oid is None:
            raise InvalidRequest("Invalid teacherId or studentId")

        teacher = await self.teachers.get_teacher(teacher_id)
        if teacher is None:
            raise Forbidden("Invalid teacher")

        student = await self.students.get_student(student_oid)
        if student is None:
            raise NotFound("Student not found")

        parent_oid = as_object_id(request.parent_id)
        if parent_oid is None and student.parent_email:
            parent_oid = await self.students.find_parent_id(student.parent_email)

        key = {"teacherId": teacher_oid, "studentId": student_oid, "class": class_name}
        if section:
            key["section"] = section
        if subject:
            key["subject"] = subject

        fields = {
            "feedback": text,
            "visibleToParent": request.visible_to_parent is not False,
            "visibleToStudent": request.visible_to_student is not False
        }
        if parent_oid is not None:
            fields["parentId"] = parent_oid

        saved, created = await self.feedback.upsert_feedback(key, fields)
        logger.info(
            f"Teacher {teacher.id} {'added' if created else 'updated'} feedback "
            f"for student {student.id} in {class_name}"
        )
        return saved, created

    async def delete_feedback(self, feedback_id: str) -> None:
        oid = as_object_id(feedback_id)
        if oid is None:
            raise InvalidRequest("Invalid feedback id")
        if not await self.feedback.delete_feedback(oid):
            raise NotFound("Feedback not found")

    async def list_for_teacher(self, teacher_id: Optional[str]) -> List[Feedback]:
        """A teacher's feedback with the student's name and roll number attached."""
        teacher_oid = _required_id(teacher_id, "teacherId")
        items = await self.feedback.find_feedback({"teacherId": teacher_oid})

        student_ids = {as_object_id(item.student_id) for item in items if item.student_id}
        students = await self.students.find_students(student_ids)

        enriched = []
        for item in items:
            student = students.get(item.student_id)
            if student is None:
                enriched.append(item)
                continue
            enriched.append(item.model_copy(update={
                "student_name": student.name,
                "roll_no": student.roll_no,
                "class_name": item.class_name or student.class_name,
                "section": item.section or student.section or None
            }))
        return enriched

    async def list_for_student(self, student_id: Optional[str]) -> List[Feedback]:
        student_oid = _required_id(student_id, "studentId")
        return await self.feedback.find_feedback({"studentId": student_oid, "visibleToStudent": True})

    async def list_for_parent(self, parent_id: Optional[str]) -> List[Feedback]:
        parent_oid = _required_id(parent_id, "parentId")
        return await self.feedback.find_feedback({"parentId": parent_oid, "visibleToParent": True})

    async def list_for_class(
        self,
        class_name: Optional[str] = None,
        section: Optional[str] = None,
        subject: Optional[str] = None
    ) -> List[Feedback]:
        query = {}
        for field, value in (("class", class_name), ("section", section), ("subject", subject)):
            value = to_trimmed_str(value)
            if value:
                query[field] = value
        return await self.feedback.find_feedback(query)
