import datetime as dt
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ScreeningType(str, Enum):
    """Which visit a submission's notes belong to"""
    INITIAL = "initial"
    RESCREEN = "rescreen"


class PhaseBase(BaseModel):
    """Fields shared by every test's initial/rescreen sub-object"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    screener: Optional[str] = None
    date: Optional[dt.date] = None
    # Free text on the wire; only "pass"/"fail" (any case) carry a determination
    result: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        # Empty form inputs mean "no information"
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class VisionPhase(PhaseBase):
    glasses: Optional[str] = None
    right_eye: Optional[str] = Field(default=None, alias="rightEye")
    left_eye: Optional[str] = Field(default=None, alias="leftEye")


class HearingPhase(PhaseBase):
    right_1000: Optional[str] = Field(default=None, alias="right1000")
    right_2000: Optional[str] = Field(default=None, alias="right2000")
    right_4000: Optional[str] = Field(default=None, alias="right4000")
    left_1000: Optional[str] = Field(default=None, alias="left1000")
    left_2000: Optional[str] = Field(default=None, alias="left2000")
    left_4000: Optional[str] = Field(default=None, alias="left4000")

    @field_validator("right_1000", "right_2000", "right_4000",
                     "left_1000", "left_2000", "left_4000", mode="before")
    @classmethod
    def threshold_to_str(cls, v: Any) -> Any:
        # Audiometer thresholds arrive as numbers or strings depending on the form
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class AcanthosisPhase(PhaseBase):
    pass


class ScoliosisPhase(PhaseBase):
    observations: Optional[str] = None


class VisionSubmission(BaseModel):
    initial: Optional[VisionPhase] = None
    rescreen: Optional[VisionPhase] = None


class HearingSubmission(BaseModel):
    initial: Optional[HearingPhase] = None
    rescreen: Optional[HearingPhase] = None


class AcanthosisSubmission(BaseModel):
    initial: Optional[AcanthosisPhase] = None
    rescreen: Optional[AcanthosisPhase] = None


class ScoliosisSubmission(BaseModel):
    initial: Optional[ScoliosisPhase] = None
    rescreen: Optional[ScoliosisPhase] = None


class ScreeningSubmission(BaseModel):
    """A partial update for one screening visit.

    Anything left out (or blank) is treated as "no information" and never
    clears a value recorded by an earlier visit.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    unique_id: str = Field(..., alias="uniqueId", min_length=1)
    screening_date: dt.date = Field(..., alias="screeningDate")
    screening_type: Optional[ScreeningType] = Field(default=None, alias="screeningType")
    notes: Optional[str] = None
    was_absent: Optional[bool] = None

    student_first_name: Optional[str] = None
    student_last_name: Optional[str] = None
    student_grade: Optional[str] = None
    student_gender: Optional[str] = None
    student_school: Optional[str] = None
    student_teacher: Optional[str] = None
    student_dob: Optional[dt.date] = None
    student_status: Optional[str] = None

    vision: Optional[VisionSubmission] = None
    hearing: Optional[HearingSubmission] = None
    acanthosis: Optional[AcanthosisSubmission] = None
    scoliosis: Optional[ScoliosisSubmission] = None

    @field_validator("notes", "student_first_name", "student_last_name", "student_grade",
                     "student_gender", "student_school", "student_teacher", "student_dob",
                     "student_status", "screening_type", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("unique_id")
    @classmethod
    def strip_unique_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("uniqueId must not be blank")
        return v

    @model_validator(mode="after")
    def notes_need_screening_type(self) -> "ScreeningSubmission":
        # Notes are stored per visit; without a type there is nowhere to put them
        if self.notes and self.screening_type is None:
            raise ValueError("notes require screeningType of 'initial' or 'rescreen'")
        return self


class RequirementSet(BaseModel):
    vision: bool = False
    hearing: bool = False
    acanthosis: bool = False
    scoliosis: bool = False


class CompletionSet(BaseModel):
    vision: bool = False
    hearing: bool = False
    acanthosis: bool = False
    scoliosis: bool = False


class ScreeningSubmissionResponse(BaseModel):
    success: bool = True
    message: str
    status: str  # created | updated
    data: Dict[str, Any]
