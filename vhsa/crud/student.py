import logging
import re
from enum import Enum
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vhsa.models.student import Student
from vhsa.schemas.student import StudentQuickAdd, StudentUpdate
from vhsa.utils.text import to_title_case

logger = logging.getLogger(__name__)

MAX_UNIQUE_ID_ATTEMPTS = 100
UNIQUE_ID_DIGITS = 4

_TITLE_CASED_FIELDS = ("first_name", "last_name", "teacher")


def school_code(school: str) -> str:
    """Two-letter id prefix from the school's first word: "Roosevelt Elem." -> "ro"."""
    words = re.sub(r"[^\w\s]", "", school or "").split()
    return words[0][:2].lower() if words else ""


class CRUDStudent:
    def get(self, db: Session, id: int) -> Optional[Student]:
        return db.query(Student).filter(Student.id == id).first()

    def get_by_unique_id(self, db: Session, unique_id: str) -> Optional[Student]:
        return (
            db.query(Student)
            .filter(func.lower(Student.unique_id) == unique_id.strip().lower())
            .first()
        )

    def get_all(self, db: Session) -> List[Student]:
        return db.query(Student).order_by(Student.last_name, Student.first_name).all()

    def search(self, db: Session, *, last_name: str, school: str) -> List[Student]:
        return (
            db.query(Student)
            .filter(Student.last_name.ilike(f"%{last_name.strip()}%"))
            .filter(Student.school.ilike(f"%{school.strip()}%"))
            .order_by(Student.last_name, Student.first_name)
            .all()
        )

    def find_duplicate(self, db: Session, *, first_name: str, last_name: str, school: str) -> Optional[Student]:
        return (
            db.query(Student)
            .filter(func.lower(Student.first_name) == first_name.lower())
            .filter(func.lower(Student.last_name) == last_name.lower())
            .filter(Student.school == school)
            .first()
        )

    def generate_unique_id(self, db: Session, *, school: str) -> Optional[str]:
        prefix = school_code(school)
        last = (
            db.query(Student.unique_id)
            .filter(Student.unique_id.ilike(f"{prefix}%"))
            .order_by(Student.unique_id.desc())
            .first()
        )
        max_number = 0
        if last:
            try:
                max_number = int(last[0][len(prefix):])
            except ValueError:
                max_number = 0

        for attempt in range(MAX_UNIQUE_ID_ATTEMPTS):
            candidate = f"{prefix}{max_number + 1 + attempt:0{UNIQUE_ID_DIGITS}d}"
            if self.get_by_unique_id(db, candidate) is None:
                return candidate
            logger.info(f"[CRUDStudent] Unique id {candidate} already taken, probing next")
        return None

    def create(self, db: Session, *, obj_in: StudentQuickAdd, unique_id: str) -> Student:
        db_obj = Student(
            unique_id=unique_id,
            first_name=to_title_case(obj_in.first_name),
            last_name=to_title_case(obj_in.last_name),
            grade=obj_in.grade,
            gender=obj_in.gender.value,
            school=obj_in.school,
            teacher=to_title_case(obj_in.teacher),
            dob=obj_in.dob,
            status=obj_in.status.value,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Student, obj_in: StudentUpdate) -> Student:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if isinstance(value, Enum):
                value = value.value
            if field in _TITLE_CASED_FIELDS and value:
                value = to_title_case(value)
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


student = CRUDStudent()
