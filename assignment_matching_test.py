import pytest

from conftest import run
from school_portal.errors import Forbidden, NotFound
from school_portal.models import TeachingAssignment
from school_portal.services.matching import (
    AssignmentAuthorizer,
    find_matching_assignment,
    matches_assignment,
    normalize_alnum,
    normalize_loose,
)
from school_portal.store import TeacherDirectory


def _assignment(class_name, section, subject):
    return TeachingAssignment(class_name=class_name, section=section, subject=subject)


def test_normalize_loose_collapses_whitespace_and_lowercases():
    assert normalize_loose("  Class \t 5\n ") == "class 5"
    assert normalize_loose("MATHS") == "maths"
    assert normalize_loose(None) == ""
    assert normalize_loose(5) == "5"


def test_normalize_loose_composes_unicode():
    decomposed = "Franc\u0327ais"
    assert normalize_loose(decomposed) == "fran\u00e7ais"


def test_normalize_alnum_strips_punctuation_spaces_and_non_ascii():
    assert normalize_alnum("Class-5") == "class5"
    assert normalize_alnum("class 5") == "class5"
    assert normalize_alnum("Maths (Core)") == "mathscore"
    assert normalize_alnum("Français") == "franais"
    assert normalize_alnum("５") == ""  # full-width digit is not ASCII


def test_loose_pass_matches_case_and_spacing_differences():
    assignment = _assignment("5", "A", "Maths")
    assert matches_assignment(assignment, " 5 ", "a", "MATHS", normalize_loose)


def test_alnum_pass_needed_for_punctuation_differences():
    assignment = _assignment("Class-5", "A", "Maths")
    assert not matches_assignment(assignment, "class 5", "A", "Maths", normalize_loose)
    assert matches_assignment(assignment, "class 5", "A", "Maths", normalize_alnum)
    assert find_matching_assignment([assignment], "class 5", "A", "Maths") is assignment


def test_all_three_fields_must_agree():
    assignments = [_assignment("5", "A", "Maths")]
    assert find_matching_assignment(assignments, "5", "B", "Maths") is None
    assert find_matching_assignment(assignments, "6", "A", "Maths") is None
    assert find_matching_assignment(assignments, "5", "A", "Science") is None


def test_returns_first_matching_assignment():
    science = _assignment("5", "A", "Science")
    maths = _assignment("5", "A", "Maths")
    assert find_matching_assignment([science, maths], "5", "a", "maths") is maths


def test_no_assignments_never_match():
    assert find_matching_assignment([], "5", "A", "Maths") is None


def test_authorizer_returns_teacher_profile(db, add_teacher):
    teacher_id = add_teacher(teaching=[("5", "A", "Maths")], email="t@school.test")
    authorizer = AssignmentAuthorizer(TeacherDirectory(db))

    teacher = run(authorizer.authorize(teacher_id, "5", "A", "maths"))

    assert teacher.id == teacher_id
    assert teacher.email == "t@school.test"


def test_authorizer_unknown_teacher_is_not_found(db):
    authorizer = AssignmentAuthorizer(TeacherDirectory(db))

    with pytest.raises(NotFound):
        run(authorizer.authorize("64b7f0c2a1b2c3d4e5f60718", "5", "A", "Maths"))

    with pytest.raises(NotFound):
        run(authorizer.authorize("not-an-id", "5", "A", "Maths"))


def test_authorizer_unassigned_triple_is_forbidden(db, add_teacher):
    teacher_id = add_teacher(teaching=[("5", "A", "Maths")])
    authorizer = AssignmentAuthorizer(TeacherDirectory(db))

    with pytest.raises(Forbidden):
        run(authorizer.authorize(teacher_id, "5", "A", "English"))


def test_teacher_directory_reads_assignments_and_hides_password(db, add_teacher):
    teacher_id = add_teacher(teaching=[("5", "A", "Maths"), ("6", "B", "Science")],
                             email="maths@school.test")
    directory = TeacherDirectory(db)

    assignments = run(directory.get_teacher_assignments(teacher_id))
    assert [(a.class_name, a.section, a.subject) for a in assignments] == [
        ("5", "A", "Maths"),
        ("6", "B", "Science"),
    ]
    assert assignments[0].model_dump(by_alias=True) == {
        "className": "5", "section": "A", "subject": "Maths"
    }

    by_email = run(directory.get_teacher_by_email("  MATHS@school.test "))
    assert by_email is not None and by_email.id == teacher_id

    with pytest.raises(NotFound):
        run(directory.get_teacher_assignments("64b7f0c2a1b2c3d4e5f60718"))
