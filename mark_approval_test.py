from datetime import datetime

import pytest

from cleanup_teacher_subject import cleanup_teacher_subject
from conftest import run
from school_portal.errors import Forbidden, InvalidRequest, NotFound
from school_portal.models import HomeworkCreate, MarkStatus
from school_portal.services import (
    DashboardService,
    HomeworkService,
    MarkApprovalService,
    MarkSubmissionService,
)
from school_portal.store import HomeworkStore, MarkStore, TeacherDirectory


@pytest.fixture
def marks(db):
    return MarkStore(db)


@pytest.fixture
def approvals(marks):
    return MarkApprovalService(marks)


@pytest.fixture
def submitted(db, marks, add_teacher):
    """One teacher with two submitted marks; returns (teacher_id, records)."""
    teacher_id = add_teacher(teaching=[("5", "A", "Maths")])
    service = MarkSubmissionService(TeacherDirectory(db), marks)
    result = run(service.submit_bulk_marks(teacher_id, "5", "A", "Maths", [
        {"rollNo": "1", "studentName": "Alice", "marks": 85},
        {"rollNo": "2", "studentName": "Bob", "marks": 40},
    ]))
    return teacher_id, result.saved


# ============ APPROVAL ============

def test_approve_and_reject(approvals, submitted):
    _, records = submitted

    approved = run(approvals.update_status(records[0].id, "Approved"))
    rejected = run(approvals.update_status(records[1].id, "Rejected"))

    assert approved.status == MarkStatus.APPROVED
    assert rejected.status == MarkStatus.REJECTED


@pytest.mark.parametrize("status", ["Pending", "approved", "", None])
def test_update_status_rejects_other_values(approvals, submitted, status):
    _, records = submitted
    with pytest.raises(InvalidRequest):
        run(approvals.update_status(records[0].id, status))


def test_update_status_invalid_or_missing_id(approvals):
    with pytest.raises(InvalidRequest):
        run(approvals.update_status("nope", "Approved"))
    with pytest.raises(NotFound):
        run(approvals.update_status("64b7f0c2a1b2c3d4e5f60718", "Approved"))


def test_filter_by_status(approvals, submitted):
    _, records = submitted
    run(approvals.update_status(records[0].id, "Approved"))

    assert [r.roll_no for r in run(approvals.filter_by_status("Approved"))] == ["1"]
    assert [r.roll_no for r in run(approvals.filter_by_status("Pending"))] == ["2"]
    assert len(run(approvals.filter_by_status(None))) == 2

    with pytest.raises(InvalidRequest):
        run(approvals.filter_by_status("Done"))


def test_list_marks_by_teacher(approvals, submitted, add_teacher):
    teacher_id, _ = submitted
    other_id = add_teacher(email="other@school.test")

    assert len(run(approvals.list_marks(teacher_id))) == 2
    assert run(approvals.list_marks(other_id)) == []
    assert len(run(approvals.list_marks())) == 2
    assert len(run(approvals.list_all())) == 2

    with pytest.raises(InvalidRequest):
        run(approvals.list_marks("bad-id"))


# ============ HOMEWORK ============

def _homework_request(teacher_id, **overrides):
    data = {
        "teacherId": teacher_id,
        "className": "5",
        "section": "A",
        "subject": "Maths",
        "title": "Fractions",
        "description": "Exercise 3.1, questions 1-10",
        "dueDate": "2024-06-01",
    }
    data.update(overrides)
    return HomeworkCreate.model_validate(data)


def test_assign_homework_for_assigned_class(db, add_teacher):
    teacher_id = add_teacher(teaching=[("Class 5", "A", "Maths")], email="hw@school.test")
    service = HomeworkService(TeacherDirectory(db), HomeworkStore(db))

    homework = run(service.assign_homework(_homework_request(teacher_id, className="class-5")))

    assert homework.id is not None
    assert homework.teacher_id == teacher_id
    assert homework.teacher_email == "hw@school.test"
    assert homework.due_date == datetime(2024, 6, 1)
    assert [h.title for h in run(service.list_homework(teacher_id))] == ["Fractions"]


def test_assign_homework_for_unassigned_class_is_forbidden(db, add_teacher):
    teacher_id = add_teacher(teaching=[("5", "A", "Maths")])
    service = HomeworkService(TeacherDirectory(db), HomeworkStore(db))

    with pytest.raises(Forbidden):
        run(service.assign_homework(_homework_request(teacher_id, section="B")))
    assert db.homeworks.docs == []


def test_assign_homework_requires_title_and_description(db, add_teacher):
    teacher_id = add_teacher(teaching=[("5", "A", "Maths")])
    service = HomeworkService(TeacherDirectory(db), HomeworkStore(db))

    with pytest.raises(InvalidRequest):
        run(service.assign_homework(_homework_request(teacher_id, title="   ")))


# ============ DASHBOARD ============

def test_dashboard_counts_each_collection(db, add_teacher):
    add_teacher(email="a@school.test")
    add_teacher(email="b@school.test")
    db.students.docs.extend([{"name": "S1"}, {"name": "S2"}, {"name": "S3"}])
    db.announcements.docs.append({"title": "Sports day"})

    stats = run(DashboardService(db).get_stats())

    assert stats.model_dump() == {"teachers": 2, "students": 3, "parents": 0, "announcements": 1}


# ============ MAINTENANCE ============

def test_cleanup_teacher_subject_removes_legacy_field(db, add_teacher):
    add_teacher(email="a@school.test", subject="Maths")
    add_teacher(email="b@school.test")

    summary = run(cleanup_teacher_subject(db))

    assert summary["modified"] == 1
    assert summary["remaining"] == 0
    assert "password" not in summary["sample"]
    assert all("subject" not in doc for doc in db.teachers.docs)
