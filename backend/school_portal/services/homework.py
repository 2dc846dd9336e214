"""Homework assignment, restricted to classes the teacher is assigned to."""

import logging
from typing import List, Optional

from ..errors import InvalidRequest
from ..models import Homework, HomeworkCreate
from ..utils import as_object_id, to_trimmed_str
from .matching import AssignmentAuthorizer

logger = logging.getLogger(__name__)


class HomeworkService:

    def __init__(self, teachers, homework):
        self.authorizer = AssignmentAuthorizer(teachers)
        self.homework = homework

    async def assign_homework(self, request: HomeworkCreate) -> Homework:
        title = to_trimmed_str(request.title)
        description = to_trimmed_str(request.description)
        if not title or not description:
            raise InvalidRequest("Title and description are required")

        teacher = await self.authorizer.authorize(
            request.teacher_id, request.class_name, request.section, request.subject
        )

        homework = await self.homework.insert_homework({
            "teacherId": as_object_id(teacher.id),
            "teacherEmail": teacher.email,
            "className": to_trimmed_str(request.class_name),
            "section": to_trimmed_str(request.section),
            "subject": to_trimmed_str(request.subject),
            "title": title,
            "description": description,
            "dueDate": request.due_date
        })
        logger.info(f"Teacher {teacher.id} assigned homework '{title}' to {homework.class_name}/{homework.section}")
        return homework

    async def list_homework(self, teacher_id: Optional[str] = None) -> List[Homework]:
        if not to_trimmed_str(teacher_id):
            return await self.homework.find_homework()

        teacher_oid = as_object_id(teacher_id)
        if teacher_oid is None:
            raise InvalidRequest("Invalid teacher ID")
        return await self.homework.find_homework(teacher_oid)
