import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vhsa.schemas.screening import CompletionSet, RequirementSet


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class EnrollmentStatus(str, Enum):
    NEW = "New"
    RETURNING = "Returning"


class StudentBase(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    grade: Optional[str] = None
    gender: Optional[str] = None
    school: Optional[str] = None
    teacher: Optional[str] = None
    dob: Optional[dt.date] = None
    status: Optional[str] = None


class Student(StudentBase):
    id: int
    unique_id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class StudentQuickAdd(BaseModel):
    """Body for creating a student at the screening table"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    grade: str
    gender: Gender
    school: str
    teacher: Optional[str] = None
    dob: dt.date
    status: EnrollmentStatus

    @field_validator("first_name", "last_name", "grade", "school")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class StudentUpdate(BaseModel):
    """Partial update; only fields present in the body are touched, explicit null clears"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    grade: Optional[str] = None
    gender: Optional[Gender] = None
    school: Optional[str] = None
    teacher: Optional[str] = None
    dob: Optional[dt.date] = None
    status: Optional[EnrollmentStatus] = None

    @field_validator("first_name", "last_name", "grade", "gender", "school",
                     "teacher", "dob", "status", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class StudentWithRequirements(BaseModel):
    success: bool = True
    student: Student
    required_screenings: RequirementSet = Field(..., serialization_alias="requiredScreenings")


class StudentLookupResponse(BaseModel):
    found: bool
    multiple: bool = False
    student: Optional[Student] = None
    students: Optional[List[Student]] = None
    required_screenings: Optional[RequirementSet] = Field(default=None, serialization_alias="requiredScreenings")
    completed_screenings: Optional[CompletionSet] = Field(default=None, serialization_alias="completedScreenings")
