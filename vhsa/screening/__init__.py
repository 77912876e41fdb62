"""Screening rule and merge engine.

This package contains:
- The eligibility rules deciding which screenings a student needs
- The selective-merge policy for partial, multi-visit submissions
- The submission service and its storage collaborator interface
"""

from .rules import StudentProfile, calculate_requirements
from .merge import (
    build_screening_row,
    calculate_completion_status,
    extract_overall_result,
    merge_into_existing,
)
from .service import ScreeningService, SubmissionOutcome, submit_screening
