from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from vhsa.models.screening_result import GENERATED_COLUMNS, ScreeningResult

# Managed by the database or by SQLAlchemy defaults, never copied from a row dict
_MANAGED_COLUMNS = GENERATED_COLUMNS | {"id", "created_at", "updated_at"}

WRITABLE_COLUMNS = frozenset(
    attr.key for attr in ScreeningResult.__mapper__.column_attrs
    if attr.key not in _MANAGED_COLUMNS
)


class CRUDScreeningResult:
    def get(self, db: Session, id: int) -> Optional[ScreeningResult]:
        return db.query(ScreeningResult).filter(ScreeningResult.id == id).first()

    def get_by_student_id(
        self, db: Session, student_id: int, *, for_update: bool = False
    ) -> Optional[ScreeningResult]:
        q = db.query(ScreeningResult).filter(ScreeningResult.student_id == student_id)
        if for_update:
            # Row lock held until the surrounding transaction commits
            q = q.with_for_update()
        return q.first()

    def create(self, db: Session, *, row: Dict[str, Any]) -> ScreeningResult:
        db_obj = ScreeningResult(**self._writable(row))
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: ScreeningResult, row: Dict[str, Any]) -> ScreeningResult:
        for field, value in self._writable(row).items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    @staticmethod
    def _writable(row: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in row.items() if key in WRITABLE_COLUMNS}


screening_result = CRUDScreeningResult()
