from .school import School, Screener
from .student import (
    Student,
    StudentQuickAdd,
    StudentUpdate,
    StudentWithRequirements,
    StudentLookupResponse,
    Gender,
    EnrollmentStatus,
)
from .screening import (
    ScreeningSubmission,
    ScreeningSubmissionResponse,
    ScreeningType,
    RequirementSet,
    CompletionSet,
)
