from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date
from sqlalchemy.orm import relationship
from vhsa.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    unique_id = Column(String(16), unique=True, index=True, nullable=False)  # e.g. "ro0042"
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True, index=True)
    grade = Column(String(32), nullable=True)  # label, e.g. "Pre-K (4)", "K", "5th"
    gender = Column(String(16), nullable=True)  # Male, Female, Other
    school = Column(String, nullable=True, index=True)  # school name, not a FK
    teacher = Column(String, nullable=True)
    dob = Column(Date, nullable=True)
    status = Column(String(16), nullable=True)  # New, Returning

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    screening_result = relationship("ScreeningResult", back_populates="student", uselist=False)
