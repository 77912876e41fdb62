"""Eligibility rules: which screenings a student must receive this cycle.

Grades are string labels as entered by school staff ("Pre-K (4)", "K", "5th").
The rules are evaluated in order; the Pre-K branches return early, everything
else falls through to the acanthosis and scoliosis checks.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from vhsa.schemas.screening import RequirementSet

ORDINAL_GRADES = ("1st", "2nd", "3rd", "4th", "5th", "6th", "7th", "8th",
                  "9th", "10th", "11th", "12th")

# Acanthosis nigricans: every student in these grades...
ACANTHOSIS_ALL_GRADES = frozenset({"1st", "3rd", "5th", "7th"})
# ...and only newly enrolled students in these
ACANTHOSIS_NEW_ONLY_GRADES = frozenset({"2nd", "4th", "6th", "8th", "9th", "10th", "11th", "12th"})

SCOLIOSIS_FEMALE_GRADES = frozenset({"5th", "7th"})
SCOLIOSIS_EIGHTH_GRADE = "8th"

# Pre-K (4) students born on or before this month/day of their birth year are screened
PRE_K4_CUTOFF_MONTH = 9
PRE_K4_CUTOFF_DAY = 1


@dataclass(frozen=True)
class StudentProfile:
    grade: Optional[str] = None
    gender: Optional[str] = None
    status: Optional[str] = None
    date_of_birth: Optional[date] = None

    @classmethod
    def from_record(cls, record: Any) -> "StudentProfile":
        """Build from anything with grade/gender/status/dob attributes (e.g. a Student row)."""
        return cls(
            grade=getattr(record, "grade", None),
            gender=getattr(record, "gender", None),
            status=getattr(record, "status", None),
            date_of_birth=getattr(record, "dob", None),
        )


def normalize_grade(grade: Optional[str]) -> str:
    return (grade or "").strip().lower()


def _is_pre_k3(grade: str) -> bool:
    return "pre-k (3)" in grade or grade == "pk3"


def _is_pre_k4(grade: str) -> bool:
    return "pre-k (4)" in grade or grade == "pk4"


def _is_k_through_12(grade: str) -> bool:
    return "kindergarten" in grade or grade == "k" or grade in ORDINAL_GRADES


def is_recognized_grade(grade: Optional[str]) -> bool:
    g = normalize_grade(grade)
    return _is_pre_k3(g) or _is_pre_k4(g) or _is_k_through_12(g)


def born_before_pre_k4_cutoff(dob: date) -> bool:
    return dob <= date(dob.year, PRE_K4_CUTOFF_MONTH, PRE_K4_CUTOFF_DAY)


def calculate_requirements(profile: StudentProfile) -> RequirementSet:
    grade = normalize_grade(profile.grade)
    gender = (profile.gender or "").strip().lower()
    is_new = (profile.status or "").strip().lower() == "new"

    requirements = RequirementSet()

    if _is_pre_k3(grade):
        return requirements

    if _is_pre_k4(grade):
        if profile.date_of_birth is not None and born_before_pre_k4_cutoff(profile.date_of_birth):
            requirements.vision = True
            requirements.hearing = True
        return requirements

    if _is_k_through_12(grade):
        requirements.vision = True
        requirements.hearing = True

    if grade in ACANTHOSIS_ALL_GRADES:
        requirements.acanthosis = True
    if is_new and grade in ACANTHOSIS_NEW_ONLY_GRADES:
        requirements.acanthosis = True

    if gender == "female" and grade in SCOLIOSIS_FEMALE_GRADES:
        requirements.scoliosis = True
    if grade == SCOLIOSIS_EIGHTH_GRADE and (is_new or gender == "male"):
        # New eighth graders of any gender; returning eighth graders only if male
        requirements.scoliosis = True

    return requirements
