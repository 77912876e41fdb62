"""Selective-merge update policy for multi-visit screening submissions.

A student's screening record is built up over several visits (initial screen,
rescreen, make-up days). Each submission only carries what was done at that
visit, so building and merging rows never lets a missing value erase one that
was recorded earlier.
"""

import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

from vhsa.schemas.screening import CompletionSet, ScreeningSubmission, ScreeningType
from vhsa.screening.fields import (
    COMPLETION_COLUMNS,
    OVERALL_TESTS,
    PHASES,
    TEST_FIELDS,
    TEST_TYPES,
    NestedResults,
    column_name,
    flatten,
    overall_column,
    required_column,
)
from vhsa.screening.rules import StudentProfile, calculate_requirements
from vhsa.utils.timezone import today_local

logger = logging.getLogger(__name__)

OVERALL_PASS = "PASS"
OVERALL_FAIL = "FAIL"

DEMOGRAPHIC_FIELDS = (
    "student_first_name",
    "student_last_name",
    "student_grade",
    "student_gender",
    "student_school",
    "student_teacher",
    "student_dob",
    "student_status",
)


def normalize_result(value: Any) -> Optional[str]:
    if value is None:
        return None
    normalized = str(value).strip().lower()
    return normalized or None


def has_identity(record: Optional[Mapping[str, Any]]) -> bool:
    return bool(record) and record.get("id") is not None


def extract_overall_result(test_submission: Any) -> Optional[str]:
    """PASS/FAIL from the initial phase result, falling back to the rescreen result."""
    if test_submission is None:
        return None

    raw = None
    for phase in PHASES:
        phase_data = getattr(test_submission, phase, None)
        if phase_data is not None and phase_data.result:
            raw = phase_data.result
            break

    result = normalize_result(raw)
    if result is None:
        return None
    if result == "pass":
        return OVERALL_PASS
    if result == "fail":
        return OVERALL_FAIL
    logger.warning(f"[ScreeningMerge] Ignoring unrecognized screening result {raw!r}")
    return None


def extract_test_results(submission: ScreeningSubmission) -> NestedResults:
    """Collect the fields present in the submission as test -> phase -> field -> value."""
    results: NestedResults = {}
    for test in TEST_TYPES:
        test_submission = getattr(submission, test, None)
        if test_submission is None:
            continue
        for phase in PHASES:
            phase_data = getattr(test_submission, phase, None)
            if phase_data is None:
                continue
            values = {}
            for field in TEST_FIELDS[test]:
                value = getattr(phase_data, field, None)
                if value is not None:
                    values[field] = value
            if values:
                results.setdefault(test, {})[phase] = values
    return results


def _profile_for_requirements(submission: ScreeningSubmission, student: Any) -> StudentProfile:
    # Screener-entered snapshot wins, then the registry record, then conservative defaults
    return StudentProfile(
        grade=submission.student_grade or getattr(student, "grade", None) or "Unknown",
        gender=submission.student_gender or getattr(student, "gender", None) or "Unknown",
        status=submission.student_status or getattr(student, "status", None) or "New",
        date_of_birth=submission.student_dob or getattr(student, "dob", None),
    )


def build_screening_row(
    submission: ScreeningSubmission,
    existing_record: Optional[Mapping[str, Any]],
    student: Any,
    *,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    today = today or today_local()

    row: Dict[str, Any] = {
        "student_id": student.id,
        # Stored key follows the registry, whatever casing was typed
        "unique_id": getattr(student, "unique_id", None) or submission.unique_id,
    }
    for field in DEMOGRAPHIC_FIELDS:
        row[field] = getattr(submission, field)
    if row["student_school"] is None:
        row["student_school"] = getattr(student, "school", None)

    row["screening_year"] = today.year
    row["initial_screening_date"] = submission.screening_date or today
    row["was_absent"] = bool(submission.was_absent)

    if submission.notes:
        if submission.screening_type == ScreeningType.INITIAL:
            row["initial_notes"] = submission.notes
        elif submission.screening_type == ScreeningType.RESCREEN:
            row["rescreen_notes"] = submission.notes

    # Required flags are a snapshot taken when the record is first created
    if not has_identity(existing_record):
        requirements = calculate_requirements(_profile_for_requirements(submission, student))
        for test in TEST_TYPES:
            row[required_column(test)] = getattr(requirements, test)

    row.update(flatten(extract_test_results(submission)))

    for test in OVERALL_TESTS:
        row[overall_column(test)] = extract_overall_result(getattr(submission, test, None))

    return row


def merge_into_existing(existing_record: Mapping[str, Any], new_row: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay the non-null values of new_row onto the stored record."""
    merged = {key: value for key, value in existing_record.items() if key not in COMPLETION_COLUMNS}
    merged.update({key: value for key, value in new_row.items() if value is not None})
    return merged


def calculate_completion_status(record: Optional[Mapping[str, Any]]) -> CompletionSet:
    completion = CompletionSet()
    if not record:
        return completion

    for test in TEST_TYPES:
        initial = normalize_result(record.get(column_name(test, "initial", "result")))
        rescreen = record.get(column_name(test, "rescreen", "result"))
        # Any rescreen outcome closes the test for this cycle (passed, or referred on)
        if initial == "pass" or rescreen not in (None, ""):
            setattr(completion, test, True)
    return completion
