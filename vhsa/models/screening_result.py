from datetime import datetime
from typing import Any, Dict

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Date,
    DateTime,
    Boolean,
    Computed,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from vhsa.db.base import Base


def _completion_expression(test: str) -> Computed:
    # Complete once the initial screen passed or any rescreen outcome was recorded
    return Computed(
        f"coalesce(lower(trim({test}_initial_result)) = 'pass', false) "
        f"OR {test}_rescreen_result IS NOT NULL",
        persisted=True,
    )


class ScreeningResult(Base):
    """One screening record per student, merged across visits."""

    __tablename__ = "screening_results"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    unique_id = Column(String(16), nullable=True, index=True)

    # Demographic snapshot as submitted by the screener
    student_first_name = Column(String, nullable=True)
    student_last_name = Column(String, nullable=True)
    student_grade = Column(String(32), nullable=True)
    student_gender = Column(String(16), nullable=True)
    student_school = Column(String, nullable=True)
    student_teacher = Column(String, nullable=True)
    student_dob = Column(Date, nullable=True)
    student_status = Column(String(16), nullable=True)

    screening_year = Column(Integer, nullable=True, index=True)
    initial_screening_date = Column(Date, nullable=True)
    was_absent = Column(Boolean, nullable=False, default=False)
    initial_notes = Column(Text, nullable=True)
    rescreen_notes = Column(Text, nullable=True)

    # Frozen when the record is first created
    vision_required = Column(Boolean, nullable=True)
    hearing_required = Column(Boolean, nullable=True)
    acanthosis_required = Column(Boolean, nullable=True)
    scoliosis_required = Column(Boolean, nullable=True)

    # Vision
    vision_initial_screener = Column(String, nullable=True)
    vision_initial_date = Column(Date, nullable=True)
    vision_initial_glasses = Column(String(16), nullable=True)
    vision_initial_right_eye = Column(String(16), nullable=True)
    vision_initial_left_eye = Column(String(16), nullable=True)
    vision_initial_result = Column(String(16), nullable=True)
    vision_rescreen_screener = Column(String, nullable=True)
    vision_rescreen_date = Column(Date, nullable=True)
    vision_rescreen_glasses = Column(String(16), nullable=True)
    vision_rescreen_right_eye = Column(String(16), nullable=True)
    vision_rescreen_left_eye = Column(String(16), nullable=True)
    vision_rescreen_result = Column(String(16), nullable=True)
    vision_overall = Column(String(8), nullable=True)  # PASS | FAIL

    # Hearing, thresholds per ear at 1000/2000/4000 Hz
    hearing_initial_screener = Column(String, nullable=True)
    hearing_initial_date = Column(Date, nullable=True)
    hearing_initial_result = Column(String(16), nullable=True)
    hearing_initial_right_1000 = Column(String(8), nullable=True)
    hearing_initial_right_2000 = Column(String(8), nullable=True)
    hearing_initial_right_4000 = Column(String(8), nullable=True)
    hearing_initial_left_1000 = Column(String(8), nullable=True)
    hearing_initial_left_2000 = Column(String(8), nullable=True)
    hearing_initial_left_4000 = Column(String(8), nullable=True)
    hearing_rescreen_screener = Column(String, nullable=True)
    hearing_rescreen_date = Column(Date, nullable=True)
    hearing_rescreen_result = Column(String(16), nullable=True)
    hearing_rescreen_right_1000 = Column(String(8), nullable=True)
    hearing_rescreen_right_2000 = Column(String(8), nullable=True)
    hearing_rescreen_right_4000 = Column(String(8), nullable=True)
    hearing_rescreen_left_1000 = Column(String(8), nullable=True)
    hearing_rescreen_left_2000 = Column(String(8), nullable=True)
    hearing_rescreen_left_4000 = Column(String(8), nullable=True)
    hearing_overall = Column(String(8), nullable=True)  # PASS | FAIL

    # Acanthosis nigricans
    acanthosis_initial_screener = Column(String, nullable=True)
    acanthosis_initial_date = Column(Date, nullable=True)
    acanthosis_initial_result = Column(String(16), nullable=True)
    acanthosis_rescreen_screener = Column(String, nullable=True)
    acanthosis_rescreen_date = Column(Date, nullable=True)
    acanthosis_rescreen_result = Column(String(16), nullable=True)

    # Scoliosis
    scoliosis_initial_screener = Column(String, nullable=True)
    scoliosis_initial_date = Column(Date, nullable=True)
    scoliosis_initial_observations = Column(Text, nullable=True)
    scoliosis_initial_result = Column(String(16), nullable=True)
    scoliosis_rescreen_screener = Column(String, nullable=True)
    scoliosis_rescreen_date = Column(Date, nullable=True)
    scoliosis_rescreen_observations = Column(Text, nullable=True)
    scoliosis_rescreen_result = Column(String(16), nullable=True)

    # Generated by the database; never written by the application
    vision_complete = Column(Boolean, _completion_expression("vision"))
    hearing_complete = Column(Boolean, _completion_expression("hearing"))
    acanthosis_complete = Column(Boolean, _completion_expression("acanthosis"))
    scoliosis_complete = Column(Boolean, _completion_expression("scoliosis"))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    student = relationship("Student", back_populates="screening_result")

    __table_args__ = (
        UniqueConstraint("student_id", name="uq_screening_results_student_id"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {attr.key: getattr(self, attr.key) for attr in self.__mapper__.column_attrs}


GENERATED_COLUMNS = frozenset(
    column.name for column in ScreeningResult.__table__.columns if column.computed is not None
)
