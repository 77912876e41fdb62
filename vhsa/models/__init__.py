from .school import School, Screener
from .student import Student
from .screening_result import ScreeningResult
