"""
Bulk mark submission - authorizes a teacher for a (class, section, subject)
triple and upserts one mark record per student.

FLOW:
1. Authorize the teacher against their teaching assignments (fatal on failure)
2. Filter entries: blank scores are skipped, blank roll numbers are per-entry errors
3. Validate scores (0-100 inclusive), per-entry errors otherwise
4. Upsert by (rollNo, className, section, subject), always resetting status to Pending
5. Classify each write as created or updated
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pymongo.errors import ConnectionFailure, PyMongoError

from ..config.settings import settings
from ..errors import (
    ENTRY_MISSING_ROLL_NUMBER,
    ENTRY_SCORE_OUT_OF_RANGE,
    ENTRY_STORE_ERROR,
    NoValidEntries,
)
from ..models import (
    BulkMarksResult,
    EntryError,
    MarkEntry,
    MarkRecord,
    MarkStatus,
    TeacherProfile,
)
from ..store.marks import KEY_FIELDS
from ..utils import Number, as_object_id, is_blank, parse_score, seconds_between, to_trimmed_str
from .matching import AssignmentAuthorizer

logger = logging.getLogger(__name__)

SCORE_RANGE_MESSAGE = "Marks must be between 0 and 100"
MISSING_ROLL_MESSAGE = "Roll number is required"


@dataclass
class _ValidMark:
    index: int
    roll_no: str
    student_name: str
    score: Number


def classify_created(
    record: MarkRecord,
    created: Optional[bool],
    tolerance_seconds: float
) -> bool:
    """
    Decide whether an upsert inserted the record.

    Uses the store's flag when it reports one; otherwise a record counts as
    created when its update time is within ``tolerance_seconds`` of its
    creation time.
    """
    if created is not None:
        return created
    if record.created_at is None or record.updated_at is None:
        return False
    return seconds_between(record.created_at, record.updated_at) <= tolerance_seconds


class MarkSubmissionService:
    """Applies a teacher's batch of marks as idempotent upserts."""

    def __init__(
        self,
        teachers,
        marks,
        tolerance_seconds: Optional[float] = None,
        concurrency: Optional[int] = None
    ):
        self.authorizer = AssignmentAuthorizer(teachers)
        self.marks = marks
        self.tolerance_seconds = (
            settings.CREATED_TOLERANCE_SECONDS if tolerance_seconds is None else tolerance_seconds
        )
        self.concurrency = concurrency or settings.UPSERT_CONCURRENCY

    async def submit_bulk_marks(
        self,
        teacher_id: str,
        class_name: str,
        section: str,
        subject: str,
        entries: Iterable[Union[MarkEntry, Dict[str, Any]]]
    ) -> BulkMarksResult:
        """
        Submit marks for one class/section/subject.

        Raises:
            NotFound: teacher does not exist
            Forbidden: teacher is not assigned to the triple
            NoValidEntries: nothing left after skipping blank scores and roll numbers
        """
        teacher = await self.authorizer.authorize(teacher_id, class_name, section, subject)

        class_name = to_trimmed_str(class_name)
        section = to_trimmed_str(section)
        subject = to_trimmed_str(subject)

        entries = [e if isinstance(e, MarkEntry) else MarkEntry.model_validate(e) for e in entries or []]
        if not entries:
            raise NoValidEntries("No marks to submit")

        valid, errors, survivors = self._validate_entries(entries)
        if survivors == 0:
            raise NoValidEntries(
                "No valid marks to submit",
                errors=[errors[i].model_dump(by_alias=True) for i in sorted(errors)]
            )

        outcomes = await self._apply(teacher, class_name, section, subject, valid, errors)

        saved: List[MarkRecord] = []
        created_count = 0
        for index in sorted(outcomes):
            record, created = outcomes[index]
            saved.append(record)
            if classify_created(record, created, self.tolerance_seconds):
                created_count += 1

        result = BulkMarksResult(
            saved_count=len(saved),
            created_count=created_count,
            updated_count=len(saved) - created_count,
            saved=saved,
            errors=[errors[i] for i in sorted(errors)]
        )
        result.message = self._summary(result)

        logger.info(
            f"Teacher {teacher.id} submitted marks for {class_name}/{section}/{subject}: "
            f"{result.created_count} created, {result.updated_count} updated, "
            f"{len(result.errors)} errors"
        )
        return result

    def _validate_entries(
        self,
        entries: List[MarkEntry]
    ) -> Tuple[List[_ValidMark], Dict[int, EntryError], int]:
        valid: List[_ValidMark] = []
        errors: Dict[int, EntryError] = {}
        survivors = 0

        for index, entry in enumerate(entries):
            if is_blank(entry.marks):
                continue

            roll_no = to_trimmed_str(entry.roll_no)
            student_name = to_trimmed_str(entry.student_name)
            if not roll_no:
                errors[index] = EntryError(
                    roll_no=roll_no,
                    student_name=student_name,
                    code=ENTRY_MISSING_ROLL_NUMBER,
                    error=MISSING_ROLL_MESSAGE
                )
                continue

            survivors += 1

            score, reason = parse_score(entry.marks)
            if score is None or not (settings.MARKS_MIN <= score <= settings.MARKS_MAX):
                errors[index] = EntryError(
                    roll_no=roll_no,
                    student_name=student_name,
                    code=ENTRY_SCORE_OUT_OF_RANGE,
                    error=reason or SCORE_RANGE_MESSAGE
                )
                continue

            valid.append(_ValidMark(index, roll_no, student_name, score))

        for index, error in errors.items():
            logger.debug(f"Entry {index} rejected: {error.code} ({error.error})")

        return valid, errors, survivors

    async def _apply(
        self,
        teacher: TeacherProfile,
        class_name: str,
        section: str,
        subject: str,
        valid: List[_ValidMark],
        errors: Dict[int, EntryError]
    ) -> Dict[int, Tuple[MarkRecord, Optional[bool]]]:
        """Upsert distinct roll numbers concurrently, repeats of one roll number in order."""
        groups: Dict[str, List[_ValidMark]] = {}
        for item in valid:
            groups.setdefault(item.roll_no, []).append(item)

        semaphore = asyncio.Semaphore(self.concurrency)
        outcomes: Dict[int, Tuple[MarkRecord, Optional[bool]]] = {}
        teacher_oid = as_object_id(teacher.id)

        async def apply_group(items: List[_ValidMark]):
            async with semaphore:
                for item in items:
                    key = dict(zip(KEY_FIELDS, (item.roll_no, class_name, section, subject)))
                    fields = {
                        "studentName": item.student_name,
                        "marks": item.score,
                        "teacherId": teacher_oid,
                        "teacherEmail": teacher.email,
                        "status": MarkStatus.PENDING.value
                    }
                    try:
                        outcomes[item.index] = await self.marks.upsert_mark_record(key, fields)
                    except ConnectionFailure:
                        raise
                    except PyMongoError as e:
                        logger.error(f"Failed to save mark for roll {item.roll_no}: {e}")
                        errors[item.index] = EntryError(
                            roll_no=item.roll_no,
                            student_name=item.student_name,
                            code=ENTRY_STORE_ERROR,
                            error=f"Failed to save marks: {e}"
                        )

        tasks = [asyncio.ensure_future(apply_group(items)) for items in groups.values()]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # No writes may outlive a failed request
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return outcomes

    @staticmethod
    def _summary(result: BulkMarksResult) -> str:
        if result.updated_count > 0:
            message = (
                f"{result.saved_count} marks saved ({result.created_count} created, "
                f"{result.updated_count} updated). Updated marks are pending admin review again."
            )
        elif result.saved_count > 0:
            message = f"{result.created_count} marks submitted successfully"
        else:
            message = "No marks were saved"

        if result.errors:
            message += f" {len(result.errors)} entries need correction."
        return message
