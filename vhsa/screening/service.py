"""Submission protocol: resolve the student, merge, persist.

The read of the existing record and the write of the merged row happen in one
transaction with the record locked, so two screeners submitting for the same
student at once cannot lose each other's fields.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional

from vhsa.core.exceptions import NotFoundError, RecordConflictError
from vhsa.schemas.screening import CompletionSet, RequirementSet, ScreeningSubmission
from vhsa.screening.merge import (
    build_screening_row,
    calculate_completion_status,
    has_identity,
    merge_into_existing,
)
from vhsa.screening.rules import StudentProfile, calculate_requirements
from vhsa.screening.storage import ScreeningStorage

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"


@dataclass
class SubmissionOutcome:
    status: str
    row: Dict[str, Any]

    @property
    def created(self) -> bool:
        return self.status == CREATED


def submit_screening(
    submission: ScreeningSubmission,
    student: Any,
    existing_record: Optional[Mapping[str, Any]],
    *,
    today: Optional[date] = None,
) -> SubmissionOutcome:
    """Work out the row to persist, without touching storage."""
    new_row = build_screening_row(submission, existing_record, student, today=today)
    if has_identity(existing_record):
        return SubmissionOutcome(UPDATED, merge_into_existing(existing_record, new_row))
    return SubmissionOutcome(CREATED, new_row)


class ScreeningService:
    def __init__(self, storage: ScreeningStorage):
        self.storage = storage

    def record_submission(self, submission: ScreeningSubmission) -> SubmissionOutcome:
        student = self.storage.find_student_by_external_id(submission.unique_id)
        if student is None:
            raise NotFoundError("Student not found", key=submission.unique_id)

        try:
            return self._apply(submission, student)
        except RecordConflictError:
            # Another submission created the record first; merge into it instead
            logger.info(f"[ScreeningService] Retrying {submission.unique_id} as an update")
            return self._apply(submission, student)

    def _apply(self, submission: ScreeningSubmission, student: Any) -> SubmissionOutcome:
        existing = self.storage.find_screening_record(student.id, for_update=True)
        outcome = submit_screening(submission, student, existing)
        saved = self.storage.save_screening_record(outcome.row, is_update=not outcome.created)
        logger.info(
            f"[ScreeningService] Screening record {outcome.status} for student "
            f"{submission.unique_id} (record id={saved.get('id')})"
        )
        return SubmissionOutcome(outcome.status, saved)

    def requirements_for(self, student: Any) -> RequirementSet:
        return calculate_requirements(StudentProfile.from_record(student))

    def completion_for(self, student: Any) -> CompletionSet:
        return calculate_completion_status(self.storage.find_screening_record(student.id))
