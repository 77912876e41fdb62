from .student import student
from .school import school, screener
from .screening_result import screening_result

__all__ = ["student", "school", "screener", "screening_result"]
